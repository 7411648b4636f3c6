"""
Adaptateurs cote hote (bibliotheque multimedia).

- InMemoryLibrary : arbre series > saisons > episodes en memoire
- scan_series_directory : alimente l'arbre depuis le repertoire d'une serie
- StaticLocalization : chaines localisees issues de la configuration
- EventBus : source d'evenements synchrone
- LibraryEventAdapter : relie les evenements au service de reconciliation
"""

from src.adapters.host.event_adapter import LibraryEventAdapter
from src.adapters.host.event_bus import EventBus
from src.adapters.host.localization import StaticLocalization
from src.adapters.host.memory_library import InMemoryLibrary
from src.adapters.host.series_scanner import parse_season_folder, scan_series_directory

__all__ = [
    "EventBus",
    "InMemoryLibrary",
    "LibraryEventAdapter",
    "StaticLocalization",
    "parse_season_folder",
    "scan_series_directory",
]
