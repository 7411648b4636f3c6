"""
Library tree entities.

Series, seasons and episodes as known to the host media library, plus the
`virtual` flag that marks entries synthesized from the remote catalog
without any user-supplied media file behind them.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Optional, Union


class ItemType(str, Enum):
    """Kind of library item."""

    SERIES = "Series"
    SEASON = "Season"
    EPISODE = "Episode"


class RefreshPriority(str, Enum):
    """Priority of a queued metadata refresh."""

    NORMAL = "normal"
    HIGH = "high"


@dataclass(eq=False)
class Series:
    """
    TV series as known to the library.

    Attributes:
        id: Library item ID
        name: Display name
        path: Root directory of the series on disk (None if unknown)
        tvdb_id: TheTVDB series ID (None when the series is not matched)
        display_order: Episode ordering scheme ("" means aired order)
        preferred_language: Metadata language used for remote lookups
    """

    id: str
    name: str = ""
    path: Optional[Path] = None
    tvdb_id: Optional[int] = None
    display_order: str = ""
    preferred_language: str = "eng"

    @property
    def item_type(self) -> ItemType:
        return ItemType.SERIES

    @property
    def is_virtual(self) -> bool:
        return False

    def has_tvdb_id(self) -> bool:
        """True if the series can be reconciled against TheTVDB."""
        return self.tvdb_id is not None and self.tvdb_id > 0


@dataclass(eq=False)
class Season:
    """
    Season of a series.

    Attributes:
        id: Library item ID
        series: Parent series
        index_number: Season number (0 for specials, None if unknown)
        name: Display name
        is_virtual: True when no real folder/media backs the season
        path: Folder on disk, if any
    """

    id: str
    series: Series
    index_number: Optional[int] = None
    name: str = ""
    is_virtual: bool = False
    path: Optional[Path] = None

    @property
    def item_type(self) -> ItemType:
        return ItemType.SEASON


@dataclass(eq=False)
class Episode:
    """
    Episode of a series.

    `index_number_end` is set for multi-episode files (S01E01-E02): the
    episode then covers every number from index_number to index_number_end.
    A non-virtual episode always carries a path.
    """

    id: str
    series: Series
    season: Optional[Season] = None
    name: str = ""
    index_number: Optional[int] = None
    index_number_end: Optional[int] = None
    parent_index_number: Optional[int] = None
    is_virtual: bool = False
    path: Optional[Path] = None
    overview: Optional[str] = None
    premiere_date: Optional[datetime] = None
    airs_before_episode_number: Optional[int] = None
    airs_after_season_number: Optional[int] = None
    airs_before_season_number: Optional[int] = None
    tvdb_id: Optional[int] = None
    date_last_saved: Optional[datetime] = field(default=None, compare=False)

    @property
    def item_type(self) -> ItemType:
        return ItemType.EPISODE

    def contains_episode_number(self, number: int) -> bool:
        """Checks whether this episode (or episode range) covers `number`."""
        if self.index_number is None:
            return False
        if self.index_number_end is not None:
            return self.index_number <= number <= self.index_number_end
        return self.index_number == number


LibraryItem = Union[Series, Season, Episode]


def series_of(item: LibraryItem) -> Series:
    """Returns the series an item belongs to."""
    if isinstance(item, Series):
        return item
    return item.series
