"""
Ports (interfaces abstraites) définissant les contrats pour les adaptateurs.

Les ports sont les frontières de l'architecture hexagonale. Ils définissent
ce dont le domaine a besoin du monde extérieur sans spécifier
comment ces besoins sont satisfaits.

Ports repository : Contrats de persistance des registres
- IRuntimeRepository : Durées moyennes par série
- IPlaceholderRepository : Placeholders en attente de mise à niveau

Ports catalogue : Contrat du catalogue d'épisodes distant
- IEpisodeCatalog, EpisodeRecord

Ports hôte : Arbre de bibliothèque, localisation et événements
- ILibraryTree, LibraryOptions, ILocalization
- IEventSource, LibraryEvent, ItemChangeEvent

Ports parsing
- IFilenameParser : Saison et épisode depuis un nom de fichier

Ports système de fichiers
- IFileSystem
"""

from src.core.ports.api_clients import (
    DEFAULT_SEASON_TYPE,
    EpisodeRecord,
    IEpisodeCatalog,
)
from src.core.ports.events import (
    EventHandler,
    IEventSource,
    ItemChangeEvent,
    LibraryEvent,
)
from src.core.ports.file_system import IFileSystem
from src.core.ports.library import ILibraryTree, ILocalization, LibraryOptions
from src.core.ports.parser import IFilenameParser
from src.core.ports.repositories import IPlaceholderRepository, IRuntimeRepository

__all__ = [
    # Registres
    "IRuntimeRepository",
    "IPlaceholderRepository",
    # Catalogue distant
    "IEpisodeCatalog",
    "EpisodeRecord",
    "DEFAULT_SEASON_TYPE",
    # Hôte
    "ILibraryTree",
    "ILocalization",
    "LibraryOptions",
    "IEventSource",
    "LibraryEvent",
    "ItemChangeEvent",
    "EventHandler",
    # Parsing
    "IFilenameParser",
    # Système de fichiers
    "IFileSystem",
]
