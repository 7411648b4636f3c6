"""
Chaines localisees fournies par la configuration.
"""

from typing import Optional

from src.core.ports.library import ILocalization
from src.utils.constants import SEASON_NAME_KEY


class StaticLocalization(ILocalization):
    """
    Table de chaines localisees fixe.

    Une cle inconnue renvoie la cle elle-meme.
    """

    def __init__(self, strings: Optional[dict[str, str]] = None) -> None:
        self._strings = {SEASON_NAME_KEY: "Season {0}"}
        if strings:
            self._strings.update(strings)

    @classmethod
    def from_template(cls, season_name_template: str) -> "StaticLocalization":
        return cls({SEASON_NAME_KEY: season_name_template})

    def get_localized_string(self, key: str) -> str:
        return self._strings.get(key, key)
