"""
Tests unitaires pour FileSystemAdapter.

Chaque operation absorbe ses erreurs d'E/S et les traduit en valeur de retour.
"""

from pathlib import Path

import pytest

from src.adapters.file_system import FileSystemAdapter
from src.core.ports.file_system import IFileSystem


@pytest.fixture
def fs() -> FileSystemAdapter:
    return FileSystemAdapter()


class TestFileSystemAdapter:
    def test_implements_port(self, fs: FileSystemAdapter) -> None:
        assert isinstance(fs, IFileSystem)

    def test_exists_only_for_files(self, fs: FileSystemAdapter, tmp_path: Path) -> None:
        file_path = tmp_path / "a.mkv"
        file_path.write_bytes(b"x")

        assert fs.exists(file_path)
        assert not fs.exists(tmp_path)
        assert not fs.exists(tmp_path / "missing.mkv")

    def test_get_size(self, fs: FileSystemAdapter, tmp_path: Path) -> None:
        file_path = tmp_path / "a.mkv"
        file_path.write_bytes(b"x" * 2048)

        assert fs.get_size(file_path) == 2048
        assert fs.get_size(tmp_path / "missing.mkv") == 0

    def test_copy_creates_parents_and_overwrites(
        self, fs: FileSystemAdapter, tmp_path: Path
    ) -> None:
        source = tmp_path / "30min.mp4"
        source.write_bytes(b"stub")
        destination = tmp_path / "Show" / "Season 1" / "S01E01 - Pilot.mp4"

        assert fs.copy(source, destination)
        destination.write_bytes(b"old content that is longer")
        assert fs.copy(source, destination)

        assert destination.read_bytes() == b"stub"
        assert source.exists()

    def test_copy_missing_source_returns_false(
        self, fs: FileSystemAdapter, tmp_path: Path
    ) -> None:
        assert not fs.copy(tmp_path / "missing.mkv", tmp_path / "dest.mkv")
        assert not (tmp_path / "dest.mkv").exists()

    def test_delete(self, fs: FileSystemAdapter, tmp_path: Path) -> None:
        file_path = tmp_path / "a.mkv"
        file_path.write_bytes(b"x")

        assert fs.delete(file_path)
        assert not file_path.exists()
        assert not fs.delete(file_path)

    def test_make_dirs(self, fs: FileSystemAdapter, tmp_path: Path) -> None:
        directory = tmp_path / "Show" / "Season 2"

        assert fs.make_dirs(directory)
        assert fs.make_dirs(directory)
        assert directory.is_dir()

    def test_make_dirs_over_file_fails(self, fs: FileSystemAdapter, tmp_path: Path) -> None:
        blocker = tmp_path / "Season 1"
        blocker.write_bytes(b"x")

        assert not fs.make_dirs(blocker)

    def test_list_files_by_patterns(self, fs: FileSystemAdapter, tmp_path: Path) -> None:
        for name in ("25min.mkv", "10min.mp4", "readme.txt"):
            (tmp_path / name).write_bytes(b"x")
        (tmp_path / "sub.mkv").mkdir()

        found = fs.list_files(tmp_path, ("*.mp4", "*.mkv"))

        assert [p.name for p in found] == ["10min.mp4", "25min.mkv"]

    def test_list_files_missing_directory(self, fs: FileSystemAdapter, tmp_path: Path) -> None:
        assert fs.list_files(tmp_path / "missing", ("*.mkv",)) == []
