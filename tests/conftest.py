"""
Fixtures pytest partagees pour les tests stubsync.

Ce module contient les fixtures communes utilisees dans les tests:
- Settings de test avec chemins temporaires
- Catalogue STUBS reel (fichiers de 25 KiB nommes par duree)
- Registres fichiers, bibliotheque en memoire, catalogue TVDB factice
"""

from pathlib import Path
from unittest.mock import MagicMock

import pytest

from src.adapters.file_system import FileSystemAdapter
from src.adapters.host.localization import StaticLocalization
from src.adapters.host.memory_library import InMemoryLibrary
from src.config import Settings
from src.core.entities.media import Series
from src.core.ports.file_system import IFileSystem
from src.infrastructure.persistence.repositories import (
    FilePlaceholderRepository,
    FileRuntimeRepository,
)
from src.services.stub_lifecycle import StubLifecycleManager
from src.services.stub_resolver import StubResolver
from tests.fixtures.catalog import stub_size, write_file


@pytest.fixture
def mock_file_system() -> MagicMock:
    """
    Mock de IFileSystem pour les tests.

    Les valeurs de retour doivent etre configurees dans chaque test.
    """
    mock = MagicMock(spec=IFileSystem)
    mock.exists.return_value = False
    mock.copy.return_value = True
    mock.delete.return_value = True
    mock.make_dirs.return_value = True
    mock.get_size.return_value = 0
    mock.list_files.return_value = []
    return mock


@pytest.fixture
def stubs_dir(tmp_path: Path) -> Path:
    """
    Catalogue STUBS avec des stubs de 10, 30 et 60 minutes.

    Chaque stub pese STUB_SIZE + sa duree : la taille d'une copie
    identifie le stub retenu.
    """
    directory = tmp_path / "STUBS"
    for minutes, extension in ((10, ".mkv"), (30, ".mp4"), (60, ".mkv")):
        write_file(directory / f"{minutes}min{extension}", stub_size(minutes))
    return directory


@pytest.fixture
def test_settings(tmp_path: Path, stubs_dir: Path) -> Settings:
    """
    Settings de test avec chemins temporaires.

    Utilise tmp_path de pytest pour isoler registres, cache et logs.
    """
    return Settings(
        _env_file=None,
        data_dir=tmp_path / "data",
        stubs_dir=stubs_dir,
        cache_dir=tmp_path / "cache",
        log_file=tmp_path / "test.log",
    )


@pytest.fixture
def file_system() -> FileSystemAdapter:
    return FileSystemAdapter()


@pytest.fixture
def runtime_repository(test_settings: Settings) -> FileRuntimeRepository:
    return FileRuntimeRepository(test_settings.runtime_store_path)


@pytest.fixture
def placeholder_repository(test_settings: Settings) -> FilePlaceholderRepository:
    return FilePlaceholderRepository(test_settings.placeholder_store_path)


@pytest.fixture
def localization() -> StaticLocalization:
    return StaticLocalization()


@pytest.fixture
def library() -> InMemoryLibrary:
    return InMemoryLibrary()


@pytest.fixture
def series_root(tmp_path: Path) -> Path:
    root = tmp_path / "library" / "Show"
    root.mkdir(parents=True)
    return root


@pytest.fixture
def series(library: InMemoryLibrary, series_root: Path) -> Series:
    """Serie TVDB 100 enregistree dans la bibliotheque."""
    return library.add_series(
        Series(id="series-100", name="Show", path=series_root, tvdb_id=100)
    )


@pytest.fixture
def stub_manager(
    file_system: FileSystemAdapter,
    stubs_dir: Path,
    runtime_repository: FileRuntimeRepository,
    placeholder_repository: FilePlaceholderRepository,
    library: InMemoryLibrary,
    localization: StaticLocalization,
) -> StubLifecycleManager:
    """Gestionnaire de stubs sur le vrai systeme de fichiers (tmp_path)."""
    return StubLifecycleManager(
        file_system=file_system,
        resolver=StubResolver(stubs_dir, file_system),
        runtimes=runtime_repository,
        placeholders=placeholder_repository,
        library=library,
        localization=localization,
    )
