"""
Registre des durees moyennes d'episode par serie.

Format de ligne : <seriesId>|<averageRuntimeMinutes>
Les entrees ne sont jamais supprimees automatiquement.
"""

from pathlib import Path
from typing import Optional

from loguru import logger

from src.core.entities.tracking import SeriesRuntimeEntry
from src.core.ports.repositories import IRuntimeRepository
from src.infrastructure.persistence.line_store import LineStore, parse_int


def _parse_runtime(fields: list[str]) -> Optional[SeriesRuntimeEntry]:
    if len(fields) != 2:
        return None
    series_id = parse_int(fields[0])
    minutes = parse_int(fields[1])
    if series_id is None or minutes is None:
        return None
    return SeriesRuntimeEntry(series_id=series_id, average_runtime_minutes=minutes)


def _format_runtime(entry: SeriesRuntimeEntry) -> list[str]:
    return [str(entry.series_id), str(entry.average_runtime_minutes)]


class FileRuntimeRepository(IRuntimeRepository):
    """
    Implementation fichier de IRuntimeRepository.

    Les erreurs d'E/S sont journalisees et absorbees : une ecriture ratee
    est perdue, une lecture ratee renvoie None (indiscernable de "jamais defini").
    """

    def __init__(self, store_path: Path) -> None:
        """
        Args :
            store_path : Chemin du fichier Series_Runtime_Index.txt
        """
        self._store = LineStore(store_path, _parse_runtime, _format_runtime)

    def set_series_runtime(self, series_id: int, minutes: int) -> None:
        with self._store.lock:
            try:
                entries = [
                    e for e in self._store.read_all() if e.series_id != series_id
                ]
                entries.append(
                    SeriesRuntimeEntry(series_id=series_id, average_runtime_minutes=minutes)
                )
                self._store.write_all(entries)
                logger.debug(
                    f"Duree moyenne {minutes} min enregistree pour la serie TVDB {series_id}"
                )
            except (OSError, UnicodeError) as e:
                logger.error(
                    f"Echec d'enregistrement de la duree pour la serie TVDB {series_id}: {e}"
                )

    def get_series_runtime(self, series_id: int) -> Optional[int]:
        with self._store.lock:
            try:
                for entry in self._store.read_all():
                    if entry.series_id == series_id:
                        return entry.average_runtime_minutes
                return None
            except (OSError, UnicodeError) as e:
                logger.error(
                    f"Echec de lecture de la duree pour la serie TVDB {series_id}: {e}"
                )
                return None
