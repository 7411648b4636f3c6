"""
Business entities representing core domain concepts.

Exports:
- Series, Season, Episode: Library tree items (real or virtual)
- ItemType, RefreshPriority: Library item kind and refresh priority
- SeriesRuntimeEntry: Known average episode runtime for a series
- PlaceholderStubEntry: Approximate stub file pending an upgrade
"""

from src.core.entities.media import (
    Episode,
    ItemType,
    LibraryItem,
    RefreshPriority,
    Season,
    Series,
    series_of,
)
from src.core.entities.tracking import PlaceholderStubEntry, SeriesRuntimeEntry

__all__ = [
    "Series",
    "Season",
    "Episode",
    "ItemType",
    "LibraryItem",
    "RefreshPriority",
    "series_of",
    "SeriesRuntimeEntry",
    "PlaceholderStubEntry",
]
