"""
Interfaces ports pour les evenements de l'hote.

L'hote publie trois evenements (rafraichissement termine, element mis a jour,
element supprime). L'adaptateur d'evenements s'y abonne via ce port.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from src.core.entities.media import LibraryItem


class LibraryEvent(str, Enum):
    """Evenements publies par l'hote."""

    REFRESH_COMPLETED = "refresh_completed"
    ITEM_UPDATED = "item_updated"
    ITEM_REMOVED = "item_removed"


@dataclass(frozen=True)
class ItemChangeEvent:
    """
    Charge utile d'un evenement de bibliotheque.

    Attributs :
        item : Element concerne
        parent : Parent de l'element (pour les mises a jour/suppressions)
        reason : Raison textuelle fournie par l'hote
    """

    item: LibraryItem
    parent: Optional[LibraryItem] = None
    reason: str = ""


EventHandler = Callable[[ItemChangeEvent], None]


class IEventSource(ABC):
    """Source d'evenements de bibliotheque."""

    @abstractmethod
    def subscribe(self, event: LibraryEvent, handler: EventHandler) -> None:
        """Enregistre un handler pour un evenement."""
        ...

    @abstractmethod
    def unsubscribe(self, event: LibraryEvent, handler: EventHandler) -> None:
        """Retire un handler precedemment enregistre."""
        ...
