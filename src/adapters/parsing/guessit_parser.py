"""
Implementation du parser de noms de fichiers avec guessit.

Ce module fournit GuessitFilenameParser qui implemente IFilenameParser
pour extraire saison et episode(s) des fichiers d'une serie.
"""

from pathlib import Path
from typing import Any, Optional

from guessit import guessit

from src.core.ports.parser import IFilenameParser
from src.core.value_objects.parsed_info import ParsedFilename


class GuessitFilenameParser(IFilenameParser):
    """
    Parser de noms de fichiers d'episodes utilisant la bibliotheque guessit.

    guessit est force en mode "episode" : les fichiers scannes sont
    toujours ranges sous le repertoire d'une serie.
    """

    def parse(self, filename: str) -> ParsedFilename:
        """
        Parse un nom de fichier d'episode.

        Args:
            filename: Nom du fichier (sans le chemin)

        Returns:
            ParsedFilename avec saison, episode(s) et titres.
        """
        result = guessit(filename, {"type": "episode"})

        return ParsedFilename(
            title=self._extract_title(result, filename),
            season=self._first_number(result.get("season")),
            episode=self._get_episode_start(result),
            episode_end=self._get_episode_end(result),
            episode_title=self._as_text(result.get("episode_title")),
        )

    def _extract_title(self, result: dict[str, Any], filename: str) -> str:
        """Titre guessit, ou nom du fichier sans extension en repli."""
        title = result.get("title")
        if title:
            return str(title)
        return Path(filename).stem

    def _first_number(self, value: Any) -> Optional[int]:
        """guessit renvoie un entier ou une liste pour les plages."""
        if value is None:
            return None
        if isinstance(value, list):
            return int(value[0]) if value else None
        return int(value)

    def _get_episode_start(self, result: dict[str, Any]) -> Optional[int]:
        """Premier numero d'episode."""
        return self._first_number(result.get("episode"))

    def _get_episode_end(self, result: dict[str, Any]) -> Optional[int]:
        """
        Dernier numero d'episode pour les multi-episodes.

        Returns:
            Numero de fin si multi-episode, sinon None
        """
        episode = result.get("episode")
        if isinstance(episode, list) and len(episode) > 1:
            return int(max(episode))
        return None

    def _as_text(self, value: Any) -> Optional[str]:
        if value is None:
            return None
        if isinstance(value, list):
            return " ".join(str(v) for v in value)
        return str(value)
