"""
Objet valeur pour les informations extraites d'un nom de fichier d'episode.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class ParsedFilename:
    """
    Informations extraites du parsing d'un nom de fichier d'episode (guessit).

    Attributs:
        title: Titre de la serie extrait (ou nom du fichier sans extension)
        season: Numero de saison
        episode: Numero d'episode
        episode_end: Numero d'episode de fin pour les multi-episodes (ex: S01E01-E02)
        episode_title: Titre de l'episode
    """

    title: str
    season: Optional[int] = None
    episode: Optional[int] = None
    episode_end: Optional[int] = None
    episode_title: Optional[str] = None

    @property
    def is_episode(self) -> bool:
        """True si un numero d'episode a ete trouve."""
        return self.episode is not None
