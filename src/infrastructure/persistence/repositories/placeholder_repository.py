"""
Registre des placeholders en attente de mise a niveau.

Format de ligne : <seriesId>|<seasonNumber>|<episodeNumber>|<filePath>
Le chemin peut contenir des '|' : seuls les trois premiers separateurs comptent.
"""

from pathlib import Path
from typing import Optional

from loguru import logger

from src.core.entities.tracking import PlaceholderStubEntry
from src.core.ports.repositories import IPlaceholderRepository
from src.infrastructure.persistence.line_store import (
    FIELD_SEPARATOR,
    LineStore,
    parse_int,
)


def _parse_placeholder(fields: list[str]) -> Optional[PlaceholderStubEntry]:
    if len(fields) < 4:
        return None
    series_id = parse_int(fields[0])
    season = parse_int(fields[1])
    episode = parse_int(fields[2])
    file_path = FIELD_SEPARATOR.join(fields[3:])
    if series_id is None or season is None or episode is None or not file_path:
        return None
    return PlaceholderStubEntry(
        series_id=series_id,
        season_number=season,
        episode_number=episode,
        file_path=file_path,
    )


def _format_placeholder(entry: PlaceholderStubEntry) -> list[str]:
    return [
        str(entry.series_id),
        str(entry.season_number),
        str(entry.episode_number),
        entry.file_path,
    ]


class FilePlaceholderRepository(IPlaceholderRepository):
    """
    Implementation fichier de IPlaceholderRepository.

    Meme politique que FileRuntimeRepository : verrou par instance,
    reecriture complete, lignes invalides ignorees, erreurs journalisees.
    """

    def __init__(self, store_path: Path) -> None:
        """
        Args :
            store_path : Chemin du fichier Placeholder_Stubs_List.txt
        """
        self._store = LineStore(store_path, _parse_placeholder, _format_placeholder)

    def add(
        self, series_id: int, season_number: int, episode_number: int, file_path: str
    ) -> None:
        key = (series_id, season_number, episode_number)
        with self._store.lock:
            try:
                entries = self._store.read_all()
                if any(e.key == key for e in entries):
                    return
                entries.append(
                    PlaceholderStubEntry(
                        series_id=series_id,
                        season_number=season_number,
                        episode_number=episode_number,
                        file_path=file_path,
                    )
                )
                self._store.write_all(entries)
                logger.debug(
                    f"Placeholder suivi pour la serie {series_id} "
                    f"S{season_number:02d}E{episode_number:02d}"
                )
            except (OSError, UnicodeError) as e:
                logger.error(f"Echec d'ajout du placeholder au registre: {e}")

    def remove(self, series_id: int, season_number: int, episode_number: int) -> None:
        key = (series_id, season_number, episode_number)
        with self._store.lock:
            try:
                entries = self._store.read_all()
                remaining = [e for e in entries if e.key != key]
                if len(remaining) == len(entries):
                    return
                self._store.write_all(remaining)
                logger.debug(
                    f"Placeholder retire pour la serie {series_id} "
                    f"S{season_number:02d}E{episode_number:02d}"
                )
            except (OSError, UnicodeError) as e:
                logger.error(f"Echec de retrait du placeholder du registre: {e}")

    def list_for_series(self, series_id: int) -> list[PlaceholderStubEntry]:
        with self._store.lock:
            try:
                return [e for e in self._store.read_all() if e.series_id == series_id]
            except (OSError, UnicodeError) as e:
                logger.error(
                    f"Echec de lecture des placeholders de la serie {series_id}: {e}"
                )
                return []

    def list_all(self) -> list[PlaceholderStubEntry]:
        with self._store.lock:
            try:
                return self._store.read_all()
            except (OSError, UnicodeError) as e:
                logger.error(f"Echec de lecture du registre des placeholders: {e}")
                return []
