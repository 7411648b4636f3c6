"""Tests unitaires pour EventBus."""

from unittest.mock import MagicMock

from src.adapters.host.event_bus import EventBus
from src.core.entities.media import Series
from src.core.ports.events import ItemChangeEvent, LibraryEvent


def _event() -> ItemChangeEvent:
    return ItemChangeEvent(item=Series(id="s", name="Show"), reason="test")


class TestEventBus:
    """Tests de l'abonnement et de la diffusion."""

    def test_publish_calls_subscribed_handlers_in_order(self) -> None:
        bus = EventBus()
        calls = []
        bus.subscribe(LibraryEvent.ITEM_UPDATED, lambda e: calls.append("first"))
        bus.subscribe(LibraryEvent.ITEM_UPDATED, lambda e: calls.append("second"))

        bus.publish(LibraryEvent.ITEM_UPDATED, _event())

        assert calls == ["first", "second"]

    def test_publish_only_targets_event(self) -> None:
        bus = EventBus()
        handler = MagicMock()
        bus.subscribe(LibraryEvent.ITEM_REMOVED, handler)

        bus.publish(LibraryEvent.ITEM_UPDATED, _event())

        handler.assert_not_called()

    def test_subscribe_twice_registers_once(self) -> None:
        bus = EventBus()
        handler = MagicMock()
        bus.subscribe(LibraryEvent.REFRESH_COMPLETED, handler)
        bus.subscribe(LibraryEvent.REFRESH_COMPLETED, handler)

        assert bus.handler_count(LibraryEvent.REFRESH_COMPLETED) == 1

    def test_unsubscribe(self) -> None:
        bus = EventBus()
        handler = MagicMock()
        bus.subscribe(LibraryEvent.REFRESH_COMPLETED, handler)

        bus.unsubscribe(LibraryEvent.REFRESH_COMPLETED, handler)
        bus.unsubscribe(LibraryEvent.REFRESH_COMPLETED, handler)
        bus.publish(LibraryEvent.REFRESH_COMPLETED, _event())

        handler.assert_not_called()
        assert bus.handler_count(LibraryEvent.REFRESH_COMPLETED) == 0

    def test_failing_handler_does_not_stop_others(self) -> None:
        """Un handler en erreur est journalise, les suivants sont appeles."""
        bus = EventBus()
        after = MagicMock()
        bus.subscribe(LibraryEvent.ITEM_UPDATED, MagicMock(side_effect=RuntimeError("boom")))
        bus.subscribe(LibraryEvent.ITEM_UPDATED, after)

        event = _event()
        bus.publish(LibraryEvent.ITEM_UPDATED, event)

        after.assert_called_once_with(event)
