"""
Interfaces ports pour les registres persistants.

Interfaces abstraites (ports) definissant les contrats de persistance
des durees de series et des placeholders en attente de mise a niveau.
"""

from abc import ABC, abstractmethod
from typing import Optional

from src.core.entities.tracking import PlaceholderStubEntry


class IRuntimeRepository(ABC):
    """
    Interface de stockage des durees moyennes par serie.

    Semantique d'upsert, aucune expiration automatique.
    """

    @abstractmethod
    def set_series_runtime(self, series_id: int, minutes: int) -> None:
        """Enregistre (ou remplace) la duree moyenne d'une serie."""
        ...

    @abstractmethod
    def get_series_runtime(self, series_id: int) -> Optional[int]:
        """Retourne la derniere duree enregistree, ou None si inconnue."""
        ...


class IPlaceholderRepository(ABC):
    """
    Interface de stockage des placeholders en attente.

    Unique par (serie, saison, episode) : un ajout en double est ignore.
    """

    @abstractmethod
    def add(
        self, series_id: int, season_number: int, episode_number: int, file_path: str
    ) -> None:
        """Ajoute un placeholder s'il n'est pas deja suivi."""
        ...

    @abstractmethod
    def remove(self, series_id: int, season_number: int, episode_number: int) -> None:
        """Retire un placeholder (sans effet s'il est absent)."""
        ...

    @abstractmethod
    def list_for_series(self, series_id: int) -> list[PlaceholderStubEntry]:
        """Liste les placeholders d'une serie."""
        ...

    @abstractmethod
    def list_all(self) -> list[PlaceholderStubEntry]:
        """Liste tous les placeholders suivis."""
        ...
