"""
Module de persistance des registres stubsync.

- line_store.py : Fichier texte a une entree par ligne, verrouille, reecrit en entier
- repositories/ : Registres des durees par serie et des placeholders

Usage:
    from src.infrastructure.persistence import FileRuntimeRepository

    runtimes = FileRuntimeRepository(settings.runtime_store_path)
    runtimes.set_series_runtime(81189, 47)
"""

from src.infrastructure.persistence.line_store import LineStore
from src.infrastructure.persistence.repositories import (
    FilePlaceholderRepository,
    FileRuntimeRepository,
)

__all__ = [
    "LineStore",
    "FileRuntimeRepository",
    "FilePlaceholderRepository",
]
