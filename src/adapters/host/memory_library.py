"""
Arbre de bibliotheque en memoire.

Implementation de ILibraryTree utilisee par la CLI (serie scannee depuis le
disque) et par les tests. Les IDs sont deterministes : meme graine et meme
type donnent toujours le meme ID.
"""

import hashlib
import uuid
from typing import Optional

from loguru import logger

from src.core.entities.media import (
    Episode,
    ItemType,
    LibraryItem,
    RefreshPriority,
    Season,
    Series,
)
from src.core.ports.library import ILibraryTree, LibraryOptions


class InMemoryLibrary(ILibraryTree):
    """
    Bibliotheque series > saisons > episodes tenue en memoire.

    Attributes:
        refresh_queue: Rafraichissements demandes, dans l'ordre (element, priorite)
    """

    def __init__(self, options: Optional[LibraryOptions] = None) -> None:
        self._default_options = options or LibraryOptions()
        self._options_by_series: dict[str, LibraryOptions] = {}
        self._series: dict[str, Series] = {}
        self._seasons: dict[str, list[Season]] = {}
        self._episodes: dict[str, list[Episode]] = {}
        self.refresh_queue: list[tuple[LibraryItem, RefreshPriority]] = []

    # ------------------------------------------------------------------
    # Alimentation
    # ------------------------------------------------------------------

    def add_series(self, series: Series, options: Optional[LibraryOptions] = None) -> Series:
        """Enregistre une serie (et optionnellement ses options de bibliotheque)."""
        self._series[series.id] = series
        self._seasons.setdefault(series.id, [])
        if options is not None:
            self._options_by_series[series.id] = options
        return series

    def set_library_options(self, series: Series, options: LibraryOptions) -> None:
        self._options_by_series[series.id] = options

    def all_series(self) -> list[Series]:
        return list(self._series.values())

    # ------------------------------------------------------------------
    # ILibraryTree
    # ------------------------------------------------------------------

    def get_seasons(self, series: Series) -> list[Season]:
        return list(self._seasons.get(series.id, []))

    def get_episodes(self, season: Season) -> list[Episode]:
        return list(self._episodes.get(season.id, []))

    def add_season(self, series: Series, season: Season) -> None:
        if series.id not in self._series:
            self.add_series(series)
        seasons = self._seasons[series.id]
        # Meme ID deterministe : la nouvelle saison remplace l'ancienne
        seasons[:] = [s for s in seasons if s.id != season.id]
        season.series = series
        seasons.append(season)
        self._episodes.setdefault(season.id, [])

    def add_episode(self, season: Season, episode: Episode) -> None:
        if season.id not in self._episodes:
            self.add_season(season.series, season)
        episodes = self._episodes[season.id]
        episodes[:] = [e for e in episodes if e.id != episode.id]
        episode.season = season
        episode.series = season.series
        if episode.parent_index_number is None:
            episode.parent_index_number = season.index_number
        episodes.append(episode)

    def delete_item(self, item: LibraryItem, delete_files: bool = False) -> None:
        if delete_files:
            # Les fichiers appartiennent a l'utilisateur : jamais supprimes ici
            logger.debug(f"delete_files ignore pour {item.name}")

        if isinstance(item, Episode):
            for episodes in self._episodes.values():
                episodes[:] = [e for e in episodes if e is not item]
        elif isinstance(item, Season):
            for seasons in self._seasons.values():
                seasons[:] = [s for s in seasons if s is not item]
            self._episodes.pop(item.id, None)
        elif isinstance(item, Series):
            for season in self._seasons.pop(item.id, []):
                self._episodes.pop(season.id, None)
            self._series.pop(item.id, None)

    def find_items(
        self,
        item_type: ItemType,
        parent: Optional[LibraryItem] = None,
        is_virtual: Optional[bool] = None,
        index_number: Optional[int] = None,
        parent_index_number: Optional[int] = None,
    ) -> list[LibraryItem]:
        candidates: list[LibraryItem] = []
        if item_type == ItemType.SERIES:
            candidates.extend(self._series.values())
        elif item_type == ItemType.SEASON:
            for series_id, seasons in self._seasons.items():
                if parent is None or (isinstance(parent, Series) and parent.id == series_id):
                    candidates.extend(seasons)
        elif item_type == ItemType.EPISODE:
            for season in self._iter_seasons(parent):
                candidates.extend(self._episodes.get(season.id, []))

        results = []
        for item in candidates:
            if is_virtual is not None and item.is_virtual != is_virtual:
                continue
            if index_number is not None and getattr(item, "index_number", None) != index_number:
                continue
            if (
                parent_index_number is not None
                and getattr(item, "parent_index_number", None) != parent_index_number
            ):
                continue
            results.append(item)
        return results

    def _iter_seasons(self, parent: Optional[LibraryItem]) -> list[Season]:
        if isinstance(parent, Season):
            return [parent]
        if isinstance(parent, Series):
            return self.get_seasons(parent)
        if isinstance(parent, Episode):
            return []
        return [s for seasons in self._seasons.values() for s in seasons]

    def get_library_options(self, series: Series) -> LibraryOptions:
        return self._options_by_series.get(series.id, self._default_options)

    def new_item_id(self, seed: str, item_type: ItemType) -> str:
        digest = hashlib.md5(f"{item_type.value}{seed}".encode("utf-8")).hexdigest()
        return str(uuid.UUID(digest))

    def queue_refresh(
        self, item: LibraryItem, priority: RefreshPriority = RefreshPriority.NORMAL
    ) -> None:
        self.refresh_queue.append((item, priority))
