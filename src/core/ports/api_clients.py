"""
Interfaces ports pour le catalogue d'episodes distant.

Interfaces abstraites (ports) definissant le contrat du catalogue de
metadonnees (TVDB). Le moteur de reconciliation ne depend que de ce port.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional


# Ordre de diffusion natif de TVDB (utilise quand la serie n'en precise pas)
DEFAULT_SEASON_TYPE = "official"


@dataclass(frozen=True)
class EpisodeRecord:
    """
    Episode tel que decrit par le catalogue distant.

    Instantane immuable recupere a chaque passe de reconciliation.

    Attributs :
        id : ID TVDB de l'episode
        series_id : ID TVDB de la serie
        season_number : Numero de saison (None si inconnu)
        number : Numero d'episode dans la saison (None si inconnu)
        name : Titre de l'episode
        overview : Resume
        aired : Date de diffusion brute (format libre, souvent YYYY-MM-DD)
        airs_before_episode : Indication d'ordre pour les speciaux
        airs_after_season : Indication d'ordre pour les speciaux
        airs_before_season : Indication d'ordre pour les speciaux
    """

    id: Optional[int] = None
    series_id: Optional[int] = None
    season_number: Optional[int] = None
    number: Optional[int] = None
    name: Optional[str] = None
    overview: Optional[str] = None
    aired: Optional[str] = None
    airs_before_episode: Optional[int] = None
    airs_after_season: Optional[int] = None
    airs_before_season: Optional[int] = None


class IEpisodeCatalog(ABC):
    """
    Interface du catalogue d'episodes distant.

    Les implementations renvoient une liste vide en cas d'echec :
    l'absence d'episodes n'est jamais une erreur pour l'appelant.
    """

    @abstractmethod
    async def get_series_episodes(
        self,
        series_id: int,
        language: str,
        season_type: str = DEFAULT_SEASON_TYPE,
    ) -> list[EpisodeRecord]:
        """
        Recupere tous les episodes d'une serie.

        Args :
            series_id : ID TVDB de la serie
            language : Code langue des metadonnees (ex: "eng", "fra")
            season_type : Schema d'ordre des episodes ("official", "dvd", ...)

        Retourne :
            Liste ordonnee des episodes, vide si indisponible
        """
        ...

    @abstractmethod
    async def get_average_runtime(
        self,
        series_id: int,
        language: Optional[str] = None,
        season_type: str = DEFAULT_SEASON_TYPE,
    ) -> Optional[int]:
        """
        Retourne la duree moyenne d'episode (minutes) ou None si inconnue.

        Avec la langue et le schema d'ordre deja utilises pour
        get_series_episodes, l'implementation peut relire la meme reponse.
        """
        ...

    @property
    @abstractmethod
    def source(self) -> str:
        """Retourne l'identifiant de la source (ex: 'tvdb')."""
        ...
