"""
Adaptateurs de parsing pour stubsync.

- GuessitFilenameParser: Parse les noms de fichiers d'episodes avec guessit
"""

from src.adapters.parsing.guessit_parser import GuessitFilenameParser

__all__ = ["GuessitFilenameParser"]
