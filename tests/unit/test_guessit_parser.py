"""
Tests unitaires pour GuessitFilenameParser.

Valident l'extraction saison / episode(s) / titres des fichiers
d'une serie, y compris les multi-episodes et les stubs generes.
"""

from unittest.mock import patch

import pytest

from src.adapters.parsing.guessit_parser import GuessitFilenameParser
from src.core.ports.parser import IFilenameParser
from src.core.value_objects.parsed_info import ParsedFilename


class TestGuessitFilenameParserEpisodes:
    """Tests pour le parsing de noms de fichiers d'episodes."""

    @pytest.fixture
    def parser(self) -> GuessitFilenameParser:
        """Instance du parser pour les tests."""
        return GuessitFilenameParser()

    def test_implements_port(self, parser: GuessitFilenameParser) -> None:
        assert isinstance(parser, IFilenameParser)

    def test_basic_series_parsing(self, parser: GuessitFilenameParser) -> None:
        """Test parsing d'un episode de serie basique."""
        result = parser.parse("Breaking.Bad.S01E01.720p.HDTV.x264-CTU.mkv")

        assert isinstance(result, ParsedFilename)
        assert result.title == "Breaking Bad"
        assert result.season == 1
        assert result.episode == 1
        assert result.episode_end is None
        assert result.is_episode

    def test_double_episode_parsing(self, parser: GuessitFilenameParser) -> None:
        """Test parsing d'un double episode (S03E09E10)."""
        result = parser.parse("Game.of.Thrones.S03E09E10.1080p.mkv")

        assert result.title == "Game of Thrones"
        assert result.season == 3
        assert result.episode == 9
        assert result.episode_end == 10

    def test_series_with_episode_title(self, parser: GuessitFilenameParser) -> None:
        """Test parsing d'un episode avec titre d'episode."""
        result = parser.parse("The.Office.US.S02E03.The.Dundies.mkv")

        assert "Office" in result.title
        assert result.season == 2
        assert result.episode == 3
        assert result.episode_title == "The Dundies"

    def test_generated_stub_name(self, parser: GuessitFilenameParser) -> None:
        """Les stubs generes (S01E02 - Titre.mkv) sont reconnus."""
        result = parser.parse("S01E02 - Cat's in the Bag.mkv")

        assert result.season == 1
        assert result.episode == 2

    def test_multi_season_returns_first(self, parser: GuessitFilenameParser) -> None:
        """Quand guessit retourne plusieurs saisons, on prend la premiere."""
        fake_result = {
            "title": "Bref",
            "season": [1, 90],
            "episode": 56,
            "type": "episode",
        }
        with patch(
            "src.adapters.parsing.guessit_parser.guessit", return_value=fake_result
        ):
            result = parser.parse("Bref - S01E56.mkv")

        assert result.season == 1
        assert result.episode == 56
        assert result.episode_end is None

    def test_episode_range_uses_highest_number(self, parser: GuessitFilenameParser) -> None:
        fake_result = {"title": "Show", "season": 1, "episode": [3, 1, 2]}
        with patch(
            "src.adapters.parsing.guessit_parser.guessit", return_value=fake_result
        ):
            result = parser.parse("Show.S01E01-E03.mkv")

        assert result.episode == 3
        assert result.episode_end == 3

    def test_episode_title_list_is_joined(self, parser: GuessitFilenameParser) -> None:
        fake_result = {"title": "Show", "season": 1, "episode": 1, "episode_title": ["Part", "One"]}
        with patch(
            "src.adapters.parsing.guessit_parser.guessit", return_value=fake_result
        ):
            result = parser.parse("whatever.mkv")

        assert result.episode_title == "Part One"


class TestGuessitFilenameParserEdgeCases:
    """Tests pour les cas limites."""

    @pytest.fixture
    def parser(self) -> GuessitFilenameParser:
        return GuessitFilenameParser()

    def test_title_falls_back_to_stem(self, parser: GuessitFilenameParser) -> None:
        """Sans titre guessit, le nom sans extension sert de titre."""
        with patch("src.adapters.parsing.guessit_parser.guessit", return_value={}):
            result = parser.parse("random_file.mkv")

        assert result.title == "random_file"
        assert result.season is None
        assert not result.is_episode

    def test_simple_filename_without_info(self, parser: GuessitFilenameParser) -> None:
        """Test avec un nom de fichier minimal."""
        result = parser.parse("video.mkv")

        assert result.title is not None
        assert len(result.title) > 0
