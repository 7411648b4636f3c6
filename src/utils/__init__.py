"""
Utilitaires et constantes pour stubsync.

Ce module contient les constantes et fonctions utilitaires partagees.
"""

from src.utils.constants import (
    ACCURATE_STUB_EXTENSION,
    APPROXIMATE_STUB_EXTENSION,
    DEFAULT_PLACEHOLDER_MINUTES,
    MAX_STUB_RUNTIME_MINUTES,
    MIN_STUB_RUNTIME_MINUTES,
    VIDEO_EXTENSIONS,
)

__all__ = [
    "APPROXIMATE_STUB_EXTENSION",
    "ACCURATE_STUB_EXTENSION",
    "DEFAULT_PLACEHOLDER_MINUTES",
    "MIN_STUB_RUNTIME_MINUTES",
    "MAX_STUB_RUNTIME_MINUTES",
    "VIDEO_EXTENSIONS",
]
