"""
Tests unitaires pour les commandes CLI stubsync.

Tests couvrant:
- runtime get/set: registre des durees
- placeholders list: registre des placeholders
- stub find: choix du stub pour une duree
- reconcile: reconciliation d'un repertoire de serie (TVDB mocke via respx)
- info / version

Chaque commande cree son propre container : la configuration est passee
par variables d'environnement STUBSYNC_* pointant vers tmp_path.
"""

from pathlib import Path
from unittest.mock import MagicMock

import httpx
import pytest
import respx
from typer.testing import CliRunner

from src.infrastructure.persistence.repositories import FilePlaceholderRepository
from src.main import _log_level, app
from tests.fixtures.catalog import write_file
from tests.fixtures.tvdb_responses import (
    TVDB_EPISODES_PAGE_0,
    TVDB_EPISODES_PAGE_1,
    TVDB_LOGIN_RESPONSE,
)

BASE = "https://api4.thetvdb.com/v4"

runner = CliRunner()


# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture(autouse=True)
def no_logging_setup(monkeypatch):
    """Evite que le callback reconfigure loguru (fichiers de log reels)."""
    monkeypatch.setattr("src.main.configure_logging", MagicMock())


@pytest.fixture
def data_dir(tmp_path: Path) -> Path:
    return tmp_path / "data"


@pytest.fixture
def cli_env(tmp_path: Path, data_dir: Path, stubs_dir: Path) -> dict[str, str]:
    """Variables d'environnement isolant la CLI dans tmp_path."""
    return {
        "STUBSYNC_DATA_DIR": str(data_dir),
        "STUBSYNC_STUBS_DIR": str(stubs_dir),
        "STUBSYNC_CACHE_DIR": str(tmp_path / "cache"),
        "STUBSYNC_LOG_FILE": str(tmp_path / "stubsync.log"),
        "STUBSYNC_TVDB_API_KEY": "test-api-key",
    }


def invoke(args: list[str], env: dict[str, str]):
    return runner.invoke(app, args, env=env)


# ============================================================================
# Options globales
# ============================================================================


class TestLogLevel:
    @pytest.mark.parametrize(
        "verbose,quiet,expected",
        [(0, False, "INFO"), (1, False, "DEBUG"), (2, False, "TRACE"), (3, True, "ERROR")],
    )
    def test_log_level(self, verbose: int, quiet: bool, expected: str) -> None:
        assert _log_level(verbose, quiet, "INFO") == expected


class TestVersionAndInfo:
    def test_version(self, cli_env) -> None:
        result = invoke(["version"], cli_env)

        assert result.exit_code == 0
        assert "stubsync v0.1.0" in result.stdout

    def test_info_shows_configuration(self, cli_env) -> None:
        result = invoke(["info"], cli_env)

        assert result.exit_code == 0
        assert "Registre des placeholders" in result.stdout
        assert "activée" in result.stdout

    def test_info_without_api_key(self, cli_env) -> None:
        cli_env["STUBSYNC_TVDB_API_KEY"] = ""

        result = invoke(["info"], cli_env)

        assert "désactivée" in result.stdout


# ============================================================================
# Registres
# ============================================================================


class TestRuntimeCommands:
    """Tests pour runtime get/set."""

    def test_get_unknown_series(self, cli_env) -> None:
        result = invoke(["runtime", "get", "81189"], cli_env)

        assert result.exit_code == 1
        assert "inconnue" in result.stdout

    def test_set_then_get(self, cli_env, data_dir: Path) -> None:
        set_result = invoke(["runtime", "set", "81189", "47"], cli_env)
        get_result = invoke(["runtime", "get", "81189"], cli_env)

        assert set_result.exit_code == 0
        assert get_result.exit_code == 0
        assert "47 min" in get_result.stdout
        assert (data_dir / "Series_Runtime_Index.txt").read_text(encoding="utf-8") == "81189|47\n"

    def test_set_rejects_zero(self, cli_env) -> None:
        result = invoke(["runtime", "set", "81189", "0"], cli_env)

        assert result.exit_code != 0


class TestPlaceholdersList:
    """Tests pour placeholders list."""

    def test_empty_registry(self, cli_env) -> None:
        result = invoke(["placeholders", "list"], cli_env)

        assert result.exit_code == 0
        assert "Aucun placeholder suivi." in result.stdout

    def test_lists_entries(self, cli_env, data_dir: Path) -> None:
        repository = FilePlaceholderRepository(data_dir / "Placeholder_Stubs_List.txt")
        repository.add(100, 1, 2, "/a.mp4")
        repository.add(200, 3, 4, "/b.mp4")

        result = invoke(["placeholders", "list"], cli_env)

        assert result.exit_code == 0
        assert "S01E02" in result.stdout
        assert "S03E04" in result.stdout
        assert "2 placeholder(s)" in result.stdout

    def test_filter_by_series(self, cli_env, data_dir: Path) -> None:
        repository = FilePlaceholderRepository(data_dir / "Placeholder_Stubs_List.txt")
        repository.add(100, 1, 2, "/a.mp4")

        filtered = invoke(["placeholders", "list", "--series", "100"], cli_env)
        other = invoke(["placeholders", "list", "-s", "999"], cli_env)

        assert "1 placeholder(s)" in filtered.stdout
        assert "Aucun placeholder suivi." in other.stdout


# ============================================================================
# Stubs
# ============================================================================


class TestStubFind:
    """Tests pour stub find."""

    def test_closest_stub(self, cli_env) -> None:
        result = invoke(["stub", "find", "47"], cli_env)

        assert result.exit_code == 0
        assert "47 min -> 60min.mkv (60 min)" in result.stdout

    def test_target_is_clamped(self, cli_env) -> None:
        result = invoke(["stub", "find", "5"], cli_env)

        assert result.exit_code == 0
        assert "ramenee a 10 min" in result.stdout
        assert "10min.mkv" in result.stdout

    def test_empty_catalog(self, cli_env, tmp_path: Path) -> None:
        empty = tmp_path / "EMPTY"
        empty.mkdir()
        cli_env["STUBSYNC_STUBS_DIR"] = str(empty)

        result = invoke(["stub", "find", "30"], cli_env)

        assert result.exit_code == 1
        assert "Aucun stub" in result.stdout


# ============================================================================
# Reconcile
# ============================================================================


class TestReconcileCommand:
    """Tests pour la commande reconcile."""

    @pytest.fixture
    def show_dir(self, tmp_path: Path) -> Path:
        """Serie avec un seul episode reel (S01E01)."""
        root = tmp_path / "library" / "Breaking Bad"
        write_file(root / "Season 1" / "Breaking Bad S01E01.mkv", 2048)
        return root

    def test_requires_api_key(self, cli_env, show_dir: Path) -> None:
        cli_env["STUBSYNC_TVDB_API_KEY"] = ""

        result = invoke(["reconcile", str(show_dir), "--tvdb-id", "81189"], cli_env)

        assert result.exit_code == 1
        assert "Cle API TVDB" in result.stdout

    @respx.mock
    def test_creates_stubs_and_records_runtime(
        self, cli_env, show_dir: Path, data_dir: Path
    ) -> None:
        respx.post(f"{BASE}/login").mock(
            return_value=httpx.Response(200, json=TVDB_LOGIN_RESPONSE)
        )
        route = respx.get(f"{BASE}/series/81189/episodes/official/eng").mock(
            side_effect=[
                httpx.Response(200, json=TVDB_EPISODES_PAGE_0),
                httpx.Response(200, json=TVDB_EPISODES_PAGE_1),
            ]
        )

        result = invoke(["reconcile", str(show_dir), "--tvdb-id", "81189"], cli_env)

        assert result.exit_code == 0, result.stdout
        # La duree moyenne est relue depuis le cache : deux pages seulement
        assert route.call_count == 2
        season_dir = show_dir / "Season 1"
        assert (season_dir / "S01E02 - Cat's in the Bag.mkv").exists()
        assert not (show_dir / "Specials").exists()
        assert (data_dir / "Series_Runtime_Index.txt").read_text(encoding="utf-8") == "81189|47\n"
        assert "Stubs: 2 precis" in result.stdout

    @respx.mock
    def test_remove_all_does_not_need_api(self, cli_env, show_dir: Path) -> None:
        cli_env["STUBSYNC_TVDB_API_KEY"] = ""
        cli_env["STUBSYNC_REMOVE_ALL_MISSING_EPISODES_ON_REFRESH"] = "true"

        result = invoke(["reconcile", str(show_dir), "--tvdb-id", "81189"], cli_env)

        assert result.exit_code == 0, result.stdout
        assert "deja a jour" in result.stdout
        assert not respx.calls

    @respx.mock
    def test_remove_all_skips_catalog_even_with_api_key(
        self, cli_env, show_dir: Path, data_dir: Path
    ) -> None:
        cli_env["STUBSYNC_REMOVE_ALL_MISSING_EPISODES_ON_REFRESH"] = "true"
        login = respx.post(f"{BASE}/login").mock(
            return_value=httpx.Response(200, json=TVDB_LOGIN_RESPONSE)
        )
        episodes = respx.get(url__startswith=f"{BASE}/series/81189/episodes").mock(
            return_value=httpx.Response(200, json=TVDB_EPISODES_PAGE_1)
        )

        result = invoke(["reconcile", str(show_dir), "--tvdb-id", "81189"], cli_env)

        assert result.exit_code == 0, result.stdout
        assert not login.called
        assert not episodes.called
        assert not (data_dir / "Series_Runtime_Index.txt").exists()
