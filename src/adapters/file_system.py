"""
Adaptateur pour les operations sur le systeme de fichiers.

Implementation concrete de IFileSystem pour les operations fichiers reelles.
Toute erreur d'E/S est journalisee et traduite en valeur de retour :
l'operation est consideree comme n'ayant pas eu lieu.
"""

import shutil
from pathlib import Path

from loguru import logger

from src.core.ports.file_system import IFileSystem


class FileSystemAdapter(IFileSystem):
    """
    Implementation de IFileSystem pour le systeme de fichiers reel.

    Fournit les operations utilisees par le cycle de vie des stubs
    (exists, get_size, copy, delete, make_dirs, list_files).
    """

    def exists(self, path: Path) -> bool:
        """Verifie si un fichier existe."""
        try:
            return path.is_file()
        except OSError:
            return False

    def get_size(self, path: Path) -> int:
        """
        Recupere la taille du fichier en octets.

        Retourne 0 si le fichier n'existe pas.
        """
        try:
            return path.stat().st_size
        except OSError:
            return 0

    def copy(self, source: Path, destination: Path) -> bool:
        """
        Copie un fichier de la source vers la destination (ecrasement).

        Cree les repertoires parents si necessaire.
        """
        try:
            destination.parent.mkdir(parents=True, exist_ok=True)
            shutil.copyfile(str(source), str(destination))
            return True
        except (OSError, shutil.Error) as e:
            logger.warning(f"Copie echouee {source} -> {destination}: {e}")
            return False

    def delete(self, path: Path) -> bool:
        """Supprime un fichier."""
        try:
            path.unlink()
            return True
        except FileNotFoundError:
            return False
        except OSError as e:
            logger.warning(f"Suppression echouee {path}: {e}")
            return False

    def make_dirs(self, path: Path) -> bool:
        """Cree le repertoire et ses parents."""
        try:
            path.mkdir(parents=True, exist_ok=True)
            return True
        except OSError as e:
            logger.warning(f"Creation du repertoire echouee {path}: {e}")
            return False

    def list_files(self, directory: Path, patterns: tuple[str, ...]) -> list[Path]:
        """
        Liste les fichiers d'un repertoire (non recursif) par motifs glob.

        Les resultats sont tries pour un ordre de parcours reproductible.
        """
        if not directory.is_dir():
            return []

        found: set[Path] = set()
        try:
            for pattern in patterns:
                for path in directory.glob(pattern):
                    if path.is_file():
                        found.add(path)
        except OSError as e:
            logger.warning(f"Lecture du repertoire echouee {directory}: {e}")
            return []
        return sorted(found)
