"""
Selection du fichier stub le plus proche d'une duree cible.

Le catalogue est un repertoire de fichiers pre-generes dont le nom encode
la duree : la partie avant le marqueur "min" est un nombre de minutes
(ex: "25min.mkv", "68min - h264.mp4").
"""

from pathlib import Path
from typing import Iterable, Optional

from loguru import logger

from src.core.ports.file_system import IFileSystem
from src.utils.constants import (
    MAX_STUB_RUNTIME_MINUTES,
    MIN_STUB_RUNTIME_MINUTES,
    STUB_CATALOG_PATTERNS,
    STUB_MINUTES_MARKER,
)


def parse_stub_minutes(path: Path) -> Optional[int]:
    """
    Extrait la duree encodee dans le nom d'un stub.

    Args:
        path: Chemin du fichier stub

    Returns:
        Nombre de minutes, ou None si le nom ne suit pas le motif.
    """
    stem = path.stem
    marker_index = stem.lower().find(STUB_MINUTES_MARKER)
    if marker_index <= 0:
        return None
    prefix = stem[:marker_index]
    if not (prefix.isascii() and prefix.isdigit()):
        return None
    return int(prefix)


def clamp_runtime(minutes: int) -> int:
    """Ramene une duree dans la bande couverte par les stubs (10-240 min)."""
    return max(MIN_STUB_RUNTIME_MINUTES, min(MAX_STUB_RUNTIME_MINUTES, minutes))


def find_closest_stub(target_minutes: int, stub_files: Iterable[Path]) -> Optional[Path]:
    """
    Choisit le stub dont la duree est la plus proche de la cible.

    Fonction pure : la cible est bornee a [10, 240], les noms illisibles
    sont ignores, et en cas d'egalite la duree la plus courte l'emporte.

    Args:
        target_minutes: Duree souhaitee en minutes
        stub_files: Fichiers candidats du catalogue

    Returns:
        Chemin du stub retenu, ou None si aucun candidat exploitable.
    """
    target = clamp_runtime(target_minutes)

    candidates: list[tuple[int, Path]] = []
    for path in stub_files:
        minutes = parse_stub_minutes(path)
        if minutes is not None:
            candidates.append((minutes, path))

    if not candidates:
        return None

    # Tri secondaire sur le chemin pour rester deterministe entre doublons
    _, best = min(
        candidates,
        key=lambda c: (abs(c[0] - target), c[0], str(c[1])),
    )
    return best


class StubResolver:
    """
    Resolution des stubs contre le repertoire catalogue (STUBS).

    Enveloppe find_closest_stub avec le listing du repertoire
    et la journalisation des cas d'absence.
    """

    def __init__(self, stubs_dir: Path, file_system: IFileSystem) -> None:
        """
        Args:
            stubs_dir: Repertoire du catalogue de stubs
            file_system: Adaptateur systeme de fichiers
        """
        self._stubs_dir = stubs_dir
        self._file_system = file_system

    @property
    def stubs_dir(self) -> Path:
        return self._stubs_dir

    def find_closest_stub(self, runtime_minutes: int) -> Optional[Path]:
        """Retourne le stub du catalogue le plus proche de la duree donnee."""
        # Repertoire absent ou illisible : liste vide
        stub_files = self._file_system.list_files(self._stubs_dir, STUB_CATALOG_PATTERNS)
        if not stub_files:
            logger.error(f"Aucun fichier stub dans {self._stubs_dir} (absent ou vide)")
            return None

        closest = find_closest_stub(runtime_minutes, stub_files)
        if closest is None:
            logger.error(
                f"Aucun stub nomme selon le motif '<N>{STUB_MINUTES_MARKER}' dans {self._stubs_dir}"
            )
            return None

        target = clamp_runtime(runtime_minutes)
        if target != runtime_minutes:
            logger.debug(f"Duree {runtime_minutes} min hors bande, ramenee a {target} min")
        logger.debug(
            f"Stub {closest.name} retenu pour {target} min (duree d'origine: {runtime_minutes} min)"
        )
        return closest
