"""
Stockage plat ligne par ligne, champs separes par '|'.

Chaque registre est reecrit entierement a chaque mutation (pas de journal
d'ajout). Les lignes mal formees sont ignorees au chargement : une entree
corrompue equivaut a une entree inconnue.
"""

import threading
from pathlib import Path
from typing import Callable, Generic, Optional, TypeVar

from loguru import logger

T = TypeVar("T")

FIELD_SEPARATOR = "|"


class LineStore(Generic[T]):
    """
    Fichier texte a une entree par ligne, protege par un verrou.

    Le verrou est propre a chaque instance : deux registres differents
    peuvent etre accedes en parallele, mais les lectures et ecritures
    d'un meme registre ne s'entrelacent jamais.

    Args :
        path : Chemin du fichier de stockage
        parse : Convertit une ligne decoupee en entree (None si invalide)
        format : Convertit une entree en liste de champs
    """

    def __init__(
        self,
        path: Path,
        parse: Callable[[list[str]], Optional[T]],
        format: Callable[[T], list[str]],
    ) -> None:
        self._path = path
        self._parse = parse
        self._format = format
        self.lock = threading.Lock()

    @property
    def path(self) -> Path:
        return self._path

    def read_all(self) -> list[T]:
        """
        Lit toutes les entrees valides.

        A appeler sous self.lock. Les erreurs d'E/S remontent a l'appelant,
        qui decide de la degradation.
        """
        if not self._path.exists():
            return []

        entries: list[T] = []
        for line in self._path.read_text(encoding="utf-8").splitlines():
            if not line.strip():
                continue
            entry = self._parse(line.split(FIELD_SEPARATOR))
            if entry is None:
                logger.debug(f"Ligne ignoree dans {self._path.name}: {line!r}")
                continue
            entries.append(entry)
        return entries

    def write_all(self, entries: list[T]) -> None:
        """Reecrit le fichier complet. A appeler sous self.lock."""
        self._path.parent.mkdir(parents=True, exist_ok=True)
        lines = [FIELD_SEPARATOR.join(self._format(entry)) for entry in entries]
        content = "\n".join(lines) + "\n" if lines else ""
        self._path.write_text(content, encoding="utf-8")


def parse_int(value: str) -> Optional[int]:
    """Convertit un champ en entier, None si invalide."""
    try:
        return int(value.strip())
    except ValueError:
        return None
