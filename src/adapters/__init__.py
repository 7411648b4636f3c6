"""
Couche adaptateurs (infrastructure).

Les adaptateurs implémentent les ports définis dans core/ports/ et fournissent
des implémentations concrètes pour les systèmes externes.

Sous-packages :
- api/ : Client du catalogue TVDB (httpx, cache diskcache, relances tenacity)
- cli/ : Interface ligne de commande (Typer + Rich)
- host/ : Bibliothèque en mémoire, événements, localisation
- parsing/ : Parsing de noms de fichiers d'épisodes (guessit)
- file_system.py : Opérations sur le système de fichiers

Chaque adaptateur dépend de core/ mais core/ ne dépend jamais des adaptateurs.
"""

from src.adapters.file_system import FileSystemAdapter
from src.adapters.parsing.guessit_parser import GuessitFilenameParser

__all__ = [
    "FileSystemAdapter",
    "GuessitFilenameParser",
]
