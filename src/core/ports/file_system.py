"""
Interfaces ports pour le systeme de fichiers.

Interfaces abstraites (ports) definissant les operations fichiers dont
le cycle de vie des stubs a besoin. Chaque operation absorbe ses propres
erreurs d'E/S : un echec est rapporte par la valeur de retour.
"""

from abc import ABC, abstractmethod
from pathlib import Path


class IFileSystem(ABC):
    """
    Interface pour les operations de base sur les fichiers.

    Definit les operations : verification d'existence, taille,
    copie, suppression, creation de repertoire et listing.
    """

    @abstractmethod
    def exists(self, path: Path) -> bool:
        """Verifie si un fichier existe."""
        ...

    @abstractmethod
    def get_size(self, path: Path) -> int:
        """
        Recupere la taille du fichier en octets.

        Retourne 0 si le fichier n'existe pas ou est illisible.
        """
        ...

    @abstractmethod
    def copy(self, source: Path, destination: Path) -> bool:
        """
        Copie un fichier en ecrasant la destination.

        Retourne :
            True si reussi, False sinon
        """
        ...

    @abstractmethod
    def delete(self, path: Path) -> bool:
        """
        Supprime un fichier.

        Retourne :
            True si supprime, False sinon
        """
        ...

    @abstractmethod
    def make_dirs(self, path: Path) -> bool:
        """Cree un repertoire (et ses parents). Retourne False en cas d'echec."""
        ...

    @abstractmethod
    def list_files(self, directory: Path, patterns: tuple[str, ...]) -> list[Path]:
        """
        Liste les fichiers d'un repertoire correspondant a des motifs glob.

        Retourne une liste vide si le repertoire n'existe pas.
        """
        ...
