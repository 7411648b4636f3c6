"""
Doubles de test pour le catalogue distant et le systeme de fichiers.

- FakeCatalog : IEpisodeCatalog en memoire qui enregistre les appels
- make_record : EpisodeRecord de la serie 100
- write_file : cree un fichier d'une taille donnee
"""

from pathlib import Path
from typing import Optional

from src.core.ports.api_clients import DEFAULT_SEASON_TYPE, EpisodeRecord, IEpisodeCatalog

# Taille des stubs du catalogue de test : au-dessus du seuil de validite (20 KiB)
STUB_SIZE = 25 * 1024


class FakeCatalog(IEpisodeCatalog):
    """Catalogue d'episodes en memoire, enregistre les appels."""

    def __init__(
        self,
        episodes: Optional[list[EpisodeRecord]] = None,
        runtime: Optional[int] = None,
    ) -> None:
        self.episodes = list(episodes or [])
        self.runtime = runtime
        self.calls: list[tuple[int, str, str]] = []
        self.runtime_calls: list[tuple[int, Optional[str], str]] = []
        self.error: Optional[Exception] = None

    async def get_series_episodes(
        self, series_id: int, language: str, season_type: str = DEFAULT_SEASON_TYPE
    ) -> list[EpisodeRecord]:
        self.calls.append((series_id, language, season_type))
        if self.error is not None:
            raise self.error
        return list(self.episodes)

    async def get_average_runtime(
        self,
        series_id: int,
        language: Optional[str] = None,
        season_type: str = DEFAULT_SEASON_TYPE,
    ) -> Optional[int]:
        self.runtime_calls.append((series_id, language, season_type))
        if self.error is not None:
            raise self.error
        return self.runtime

    @property
    def source(self) -> str:
        return "fake"


def make_record(season: int, number: int, name: Optional[str] = None, **kwargs) -> EpisodeRecord:
    """EpisodeRecord de test pour la serie 100."""
    return EpisodeRecord(
        id=season * 1000 + number,
        series_id=100,
        season_number=season,
        number=number,
        name=name if name is not None else f"Episode {number}",
        **kwargs,
    )


def write_file(path: Path, size: int) -> Path:
    """Cree (ou remplace) un fichier de `size` octets."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(b"\0" * size)
    return path


def stub_size(minutes: int) -> int:
    """Taille du stub de `minutes` dans le catalogue de test."""
    return STUB_SIZE + minutes
