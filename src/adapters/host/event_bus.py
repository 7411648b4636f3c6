"""
Source d'evenements de bibliotheque minimale et synchrone.
"""

from collections import defaultdict

from loguru import logger

from src.core.ports.events import (
    EventHandler,
    IEventSource,
    ItemChangeEvent,
    LibraryEvent,
)


class EventBus(IEventSource):
    """
    Diffuse les evenements de bibliotheque aux handlers abonnes.

    Un handler en erreur est journalise ; les handlers suivants sont
    quand meme appeles.
    """

    def __init__(self) -> None:
        self._handlers: dict[LibraryEvent, list[EventHandler]] = defaultdict(list)

    def subscribe(self, event: LibraryEvent, handler: EventHandler) -> None:
        if handler not in self._handlers[event]:
            self._handlers[event].append(handler)

    def unsubscribe(self, event: LibraryEvent, handler: EventHandler) -> None:
        if handler in self._handlers[event]:
            self._handlers[event].remove(handler)

    def handler_count(self, event: LibraryEvent) -> int:
        return len(self._handlers[event])

    def publish(self, event: LibraryEvent, payload: ItemChangeEvent) -> None:
        """Appelle chaque handler abonne, dans l'ordre d'abonnement."""
        for handler in list(self._handlers[event]):
            try:
                handler(payload)
            except Exception:
                logger.exception(f"Handler en erreur pour l'evenement {event.value}")
