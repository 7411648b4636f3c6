"""
Tests unitaires pour les registres fichiers (durees et placeholders).

Ces tests verifient:
- Upsert des durees et lecture de la derniere valeur
- Unicite des placeholders par (serie, saison, episode)
- Tolerance aux lignes corrompues
- Chemins contenant le separateur '|'
- Persistance entre deux instances (redemarrage)
"""

import threading
from pathlib import Path

import pytest

from src.infrastructure.persistence.line_store import LineStore, parse_int
from src.infrastructure.persistence.repositories import (
    FilePlaceholderRepository,
    FileRuntimeRepository,
)


class TestParseInt:
    @pytest.mark.parametrize("value,expected", [("42", 42), (" 7 ", 7), ("-1", -1), ("x", None), ("", None)])
    def test_parse_int(self, value: str, expected) -> None:
        assert parse_int(value) == expected


class TestLineStore:
    def test_missing_file_reads_empty(self, tmp_path: Path) -> None:
        store = LineStore(tmp_path / "none.txt", lambda f: f, lambda e: e)
        assert store.read_all() == []

    def test_write_creates_parent_directory(self, tmp_path: Path) -> None:
        path = tmp_path / "deep" / "store.txt"
        store = LineStore(path, lambda f: f, lambda e: e)

        store.write_all([["a", "b"], ["c", "d"]])

        assert path.read_text(encoding="utf-8") == "a|b\nc|d\n"
        assert store.read_all() == [["a", "b"], ["c", "d"]]


class TestFileRuntimeRepository:
    """Tests pour le registre des durees."""

    @pytest.fixture
    def store_path(self, tmp_path: Path) -> Path:
        return tmp_path / "data" / "Series_Runtime_Index.txt"

    def test_unknown_series_returns_none(self, store_path: Path) -> None:
        assert FileRuntimeRepository(store_path).get_series_runtime(81189) is None

    def test_set_then_get(self, store_path: Path) -> None:
        repository = FileRuntimeRepository(store_path)

        repository.set_series_runtime(81189, 47)

        assert repository.get_series_runtime(81189) == 47
        assert store_path.read_text(encoding="utf-8") == "81189|47\n"

    def test_set_replaces_previous_value(self, store_path: Path) -> None:
        repository = FileRuntimeRepository(store_path)
        repository.set_series_runtime(81189, 47)
        repository.set_series_runtime(100, 24)

        repository.set_series_runtime(81189, 50)

        assert repository.get_series_runtime(81189) == 50
        assert repository.get_series_runtime(100) == 24
        assert store_path.read_text(encoding="utf-8").count("81189|") == 1

    def test_persists_across_instances(self, store_path: Path) -> None:
        FileRuntimeRepository(store_path).set_series_runtime(1, 22)
        assert FileRuntimeRepository(store_path).get_series_runtime(1) == 22

    def test_corrupted_lines_are_ignored(self, store_path: Path) -> None:
        store_path.parent.mkdir(parents=True)
        store_path.write_text("garbage\n81189|abc\n\n100|24\n1|2|3\n", encoding="utf-8")

        repository = FileRuntimeRepository(store_path)

        assert repository.get_series_runtime(81189) is None
        assert repository.get_series_runtime(100) == 24

    def test_io_error_on_read_returns_none(self, tmp_path: Path) -> None:
        """Un registre illisible (ici un repertoire) equivaut a une duree inconnue."""
        directory = tmp_path / "store-is-a-dir"
        directory.mkdir()

        assert FileRuntimeRepository(directory).get_series_runtime(1) is None

    def test_io_error_on_write_is_absorbed(self, tmp_path: Path) -> None:
        directory = tmp_path / "store-is-a-dir"
        directory.mkdir()

        FileRuntimeRepository(directory).set_series_runtime(1, 22)

    def test_concurrent_writes_keep_every_series(self, store_path: Path) -> None:
        repository = FileRuntimeRepository(store_path)
        threads = [
            threading.Thread(target=repository.set_series_runtime, args=(i, 20 + i))
            for i in range(10)
        ]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert [repository.get_series_runtime(i) for i in range(10)] == [20 + i for i in range(10)]


class TestFilePlaceholderRepository:
    """Tests pour le registre des placeholders."""

    @pytest.fixture
    def repository(self, tmp_path: Path) -> FilePlaceholderRepository:
        return FilePlaceholderRepository(tmp_path / "data" / "Placeholder_Stubs_List.txt")

    def test_add_and_list(self, repository: FilePlaceholderRepository) -> None:
        repository.add(100, 1, 2, "/lib/Show/Season 1/S01E02 - Pilot.mp4")

        entries = repository.list_for_series(100)
        assert len(entries) == 1
        assert entries[0].key == (100, 1, 2)
        assert entries[0].file_path == "/lib/Show/Season 1/S01E02 - Pilot.mp4"

    def test_add_is_idempotent(self, repository: FilePlaceholderRepository) -> None:
        """Un second ajout de la meme cle est ignore (le premier chemin est garde)."""
        repository.add(100, 1, 2, "/first.mp4")
        repository.add(100, 1, 2, "/second.mp4")

        entries = repository.list_all()
        assert len(entries) == 1
        assert entries[0].file_path == "/first.mp4"

    def test_list_for_series_filters(self, repository: FilePlaceholderRepository) -> None:
        repository.add(100, 1, 1, "/a.mp4")
        repository.add(200, 1, 1, "/b.mp4")
        repository.add(100, 2, 3, "/c.mp4")

        assert [e.key for e in repository.list_for_series(100)] == [(100, 1, 1), (100, 2, 3)]
        assert len(repository.list_all()) == 3

    def test_remove(self, repository: FilePlaceholderRepository) -> None:
        repository.add(100, 1, 1, "/a.mp4")
        repository.add(100, 1, 2, "/b.mp4")

        repository.remove(100, 1, 1)
        repository.remove(100, 9, 9)

        assert [e.key for e in repository.list_all()] == [(100, 1, 2)]

    def test_path_with_separator(self, repository: FilePlaceholderRepository) -> None:
        """Seuls les trois premiers '|' separent des champs."""
        path = "/lib/Show | Remastered/Season 1/S01E01 - A|B.mp4"
        repository.add(100, 1, 1, path)

        assert repository.list_for_series(100)[0].file_path == path

    def test_corrupted_lines_are_ignored(self, tmp_path: Path) -> None:
        store = tmp_path / "Placeholder_Stubs_List.txt"
        store.write_text(
            "100|1|2|/ok.mp4\nnot-a-line\n100|x|2|/bad.mp4\n100|1|3|\n200|0|1|/special.mp4\n",
            encoding="utf-8",
        )

        repository = FilePlaceholderRepository(store)

        assert [e.key for e in repository.list_all()] == [(100, 1, 2), (200, 0, 1)]

    def test_persists_across_instances(self, tmp_path: Path) -> None:
        store = tmp_path / "Placeholder_Stubs_List.txt"
        FilePlaceholderRepository(store).add(100, 1, 2, "/a.mp4")

        assert FilePlaceholderRepository(store).list_for_series(100)[0].key == (100, 1, 2)

    def test_io_error_is_absorbed(self, tmp_path: Path) -> None:
        directory = tmp_path / "store-is-a-dir"
        directory.mkdir()
        repository = FilePlaceholderRepository(directory)

        repository.add(100, 1, 2, "/a.mp4")
        repository.remove(100, 1, 2)

        assert repository.list_all() == []
        assert repository.list_for_series(100) == []
