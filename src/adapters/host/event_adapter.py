"""
Adaptateur entre les evenements de bibliotheque et le service de reconciliation.

Les handlers abonnes a la source d'evenements ne font qu'empiler un travail ;
un worker asyncio unique depile les travaux dans l'ordre d'arrivee. La
reconciliation declenchee par l'evenement N est donc terminee avant que
celle de l'evenement N+1 ne commence, sans bloquer le thread emetteur.

Usage:
    adapter = LibraryEventAdapter(reconciler)
    adapter.attach(event_bus)          # dans une boucle asyncio en cours
    event_bus.publish(LibraryEvent.REFRESH_COMPLETED, ItemChangeEvent(series))
    await adapter.drain()
    await adapter.detach(event_bus)
"""

import asyncio
from typing import Awaitable, Callable, Optional

from loguru import logger

from src.core.entities.media import Episode, Season, Series
from src.core.ports.events import IEventSource, ItemChangeEvent, LibraryEvent
from src.services.reconciler import MissingEpisodeReconciler

Job = tuple[Callable[[ItemChangeEvent], Awaitable[None]], ItemChangeEvent]

_STOP = object()


class LibraryEventAdapter:
    """
    Traduit les evenements de l'hote en appels au service de reconciliation.

    Aucune exception ne remonte vers la source d'evenements : chaque
    traitement journalise ses propres erreurs.
    """

    def __init__(self, reconciler: MissingEpisodeReconciler) -> None:
        self._reconciler = reconciler
        self._source: Optional[IEventSource] = None
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._queue: Optional[asyncio.Queue] = None
        self._worker: Optional[asyncio.Task] = None

    @property
    def is_attached(self) -> bool:
        return self._source is not None

    # ------------------------------------------------------------------
    # Cycle de vie
    # ------------------------------------------------------------------

    def attach(self, event_source: IEventSource) -> None:
        """
        S'abonne aux evenements et demarre le worker.

        Doit etre appele depuis une boucle asyncio en cours d'execution.
        """
        if self._source is not None:
            raise RuntimeError("Adaptateur deja attache a une source d'evenements")

        self._loop = asyncio.get_running_loop()
        self._queue = asyncio.Queue()
        self._worker = self._loop.create_task(self._run())

        event_source.subscribe(LibraryEvent.REFRESH_COMPLETED, self._on_refresh_completed)
        event_source.subscribe(LibraryEvent.ITEM_UPDATED, self._on_item_updated)
        event_source.subscribe(LibraryEvent.ITEM_REMOVED, self._on_item_removed)
        self._source = event_source
        logger.debug("Adaptateur d'evenements attache")

    async def detach(self, event_source: Optional[IEventSource] = None) -> None:
        """Se desabonne puis arrete le worker apres les travaux en attente."""
        source = event_source or self._source
        if source is not None:
            source.unsubscribe(LibraryEvent.REFRESH_COMPLETED, self._on_refresh_completed)
            source.unsubscribe(LibraryEvent.ITEM_UPDATED, self._on_item_updated)
            source.unsubscribe(LibraryEvent.ITEM_REMOVED, self._on_item_removed)
        self._source = None

        if self._queue is not None and self._worker is not None:
            self._queue.put_nowait(_STOP)
            await self._worker
        self._worker = None
        self._queue = None
        self._loop = None
        logger.debug("Adaptateur d'evenements detache")

    async def drain(self) -> None:
        """Attend que tous les travaux empiles soient termines."""
        if self._queue is not None:
            await self._queue.join()

    # ------------------------------------------------------------------
    # File de travaux
    # ------------------------------------------------------------------

    def _on_refresh_completed(self, event: ItemChangeEvent) -> None:
        self._enqueue((self.handle_refresh_completed, event))

    def _on_item_updated(self, event: ItemChangeEvent) -> None:
        self._enqueue((self.handle_item_updated, event))

    def _on_item_removed(self, event: ItemChangeEvent) -> None:
        self._enqueue((self.handle_item_removed, event))

    def _enqueue(self, job: Job) -> None:
        if self._queue is None or self._loop is None:
            logger.warning("Evenement recu alors que l'adaptateur est detache")
            return
        try:
            running = asyncio.get_running_loop()
        except RuntimeError:
            running = None
        if running is self._loop:
            self._queue.put_nowait(job)
        else:
            # Evenement emis depuis un autre thread
            try:
                self._loop.call_soon_threadsafe(self._queue.put_nowait, job)
            except RuntimeError as e:
                # Boucle fermee sans detach() : l'evenement est perdu
                logger.warning(f"Evenement ignore, boucle d'evenements fermee: {e}")

    async def _run(self) -> None:
        queue = self._queue
        while True:
            job = await queue.get()
            try:
                if job is _STOP:
                    return
                handler, event = job
                await handler(event)
            except Exception:
                logger.exception("Erreur inattendue dans le worker d'evenements")
            finally:
                queue.task_done()

    # ------------------------------------------------------------------
    # Traitements
    # ------------------------------------------------------------------

    async def handle_refresh_completed(self, event: ItemChangeEvent) -> None:
        """Rafraichissement termine : reconciliation de la serie ou de la saison."""
        item = event.item
        try:
            if not self._reconciler.is_enabled_for_library(item):
                logger.debug(f"Reconciliation desactivee pour {item.name}")
                return

            if isinstance(item, Series):
                logger.debug(f"Rafraichissement de la serie {item.name}")
                await self._reconciler.reconcile_series(item)
            elif isinstance(item, Season):
                logger.debug(f"Rafraichissement de {item.series.name} {item.name}")
                await self._reconciler.reconcile_season(item)
        except Exception:
            logger.exception(f"Echec de la reconciliation apres rafraichissement de {item.name}")

    async def handle_item_updated(self, event: ItemChangeEvent) -> None:
        """Saison ou episode reel mis a jour : suppression de son double virtuel."""
        item = event.item
        try:
            if item.is_virtual or not isinstance(item, (Season, Episode)):
                logger.debug(
                    f"Ignore: element {'virtuel' if item.is_virtual else 'hors saison/episode'}"
                    f" ({event.reason})"
                )
                return
            if not self._reconciler.is_enabled_for_library(item):
                logger.debug(f"Reconciliation desactivee pour {item.name}")
                return

            siblings = self._reconciler.find_virtual_siblings(item, event.parent)
            self._reconciler.delete_virtual_items(siblings)
        except Exception:
            logger.exception(f"Echec du traitement de la mise a jour de {item.name}")

    async def handle_item_removed(self, event: ItemChangeEvent) -> None:
        """Saison ou episode reel supprime : recreation de son equivalent virtuel."""
        item = event.item
        try:
            if item.is_virtual or not self._reconciler.is_enabled_for_library(item):
                logger.debug(f"Ignore: suppression de {item.name} ({event.reason})")
                return

            if isinstance(item, Season):
                await self._reconciler.restore_season(item)
            elif isinstance(item, Episode):
                await self._reconciler.restore_episode(item)
        except Exception:
            logger.exception(f"Echec du traitement de la suppression de {item.name}")
