"""
Interfaces ports pour l'arbre de bibliotheque hote.

Le moteur ne possede pas les saisons et episodes : il demande leur creation
ou leur suppression a l'arbre hote, et ne les garde pas au-dela d'une passe.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from src.core.entities.media import (
    Episode,
    ItemType,
    LibraryItem,
    RefreshPriority,
    Season,
    Series,
)


@dataclass(frozen=True)
class LibraryOptions:
    """
    Options de bibliotheque applicables a une serie.

    Attributs :
        season_zero_display_name : Nom affiche de la saison 0 (speciaux)
        missing_episode_fetcher_enabled : Reconciliation activee pour cette bibliotheque
    """

    season_zero_display_name: str = "Specials"
    missing_episode_fetcher_enabled: bool = True


class ILibraryTree(ABC):
    """
    Interface de l'arbre de bibliotheque (series > saisons > episodes).
    """

    @abstractmethod
    def get_seasons(self, series: Series) -> list[Season]:
        """Liste les saisons (reelles et virtuelles) d'une serie."""
        ...

    @abstractmethod
    def get_episodes(self, season: Season) -> list[Episode]:
        """Liste les episodes (reels et virtuels) d'une saison."""
        ...

    @abstractmethod
    def add_season(self, series: Series, season: Season) -> None:
        """Insere une saison sous une serie."""
        ...

    @abstractmethod
    def add_episode(self, season: Season, episode: Episode) -> None:
        """Insere un episode sous une saison."""
        ...

    @abstractmethod
    def delete_item(self, item: LibraryItem, delete_files: bool = False) -> None:
        """
        Supprime un element de l'arbre.

        Args :
            item : Saison ou episode a supprimer
            delete_files : Supprimer aussi le fichier associe (jamais utilise par le moteur)
        """
        ...

    @abstractmethod
    def find_items(
        self,
        item_type: ItemType,
        parent: Optional[LibraryItem] = None,
        is_virtual: Optional[bool] = None,
        index_number: Optional[int] = None,
        parent_index_number: Optional[int] = None,
    ) -> list[LibraryItem]:
        """
        Recherche recursive d'elements par filtre.

        Un critere a None n'est pas filtre.
        """
        ...

    @abstractmethod
    def get_library_options(self, series: Series) -> LibraryOptions:
        """Retourne les options de la bibliotheque contenant la serie."""
        ...

    @abstractmethod
    def new_item_id(self, seed: str, item_type: ItemType) -> str:
        """Genere un ID deterministe pour une graine et un type."""
        ...

    @abstractmethod
    def queue_refresh(
        self, item: LibraryItem, priority: RefreshPriority = RefreshPriority.NORMAL
    ) -> None:
        """Met un element en file pour un rafraichissement des metadonnees."""
        ...


class ILocalization(ABC):
    """Interface de recherche de chaines localisees."""

    @abstractmethod
    def get_localized_string(self, key: str) -> str:
        """Retourne la chaine localisee pour une cle (ex: 'NameSeasonNumber')."""
        ...
