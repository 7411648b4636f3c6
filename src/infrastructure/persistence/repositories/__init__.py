"""
Implementations fichier des registres.

Ce module contient les implementations concretes des interfaces repository
definies dans src/core/ports/repositories.py, persistees dans des fichiers
texte plats (une entree par ligne, champs separes par '|').

Chaque repository :
- Herite de l'interface ABC correspondante du domaine
- Recoit le chemin de son fichier via injection de dependances
- Serialise ses acces avec son propre verrou
"""

from src.infrastructure.persistence.repositories.placeholder_repository import (
    FilePlaceholderRepository,
)
from src.infrastructure.persistence.repositories.runtime_repository import (
    FileRuntimeRepository,
)

__all__ = [
    "FileRuntimeRepository",
    "FilePlaceholderRepository",
]
