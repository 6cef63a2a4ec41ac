from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable

from panelmon.models.event import Event

logger = logging.getLogger(__name__)

Subscriber = Callable[[Event], Awaitable[None]]


class EventBus:
    """Hands sampled snapshots from the collector to the display side.

    A panel only cares about recent readings, so ``publish`` never waits:
    when the backlog is full the stalest snapshot is discarded and counted
    in ``dropped``. Subscribers run in subscription order, one snapshot at a
    time, and a failing subscriber is logged and skipped.
    """

    def __init__(self, maxsize: int = 100) -> None:
        self._backlog: asyncio.Queue[Event] = asyncio.Queue(maxsize=maxsize)
        self._subscribers: list[Subscriber] = []
        self._running = False
        self._consumer_task: asyncio.Task | None = None
        self.published = 0
        self.dropped = 0
        self.subscriber_errors = 0
        self.latest: Event | None = None

    # ── lifecycle ────────────────────────────────────────

    async def start(self) -> None:
        if self._running:
            return
        self._running = True
        self._consumer_task = asyncio.create_task(self._deliver_loop())
        logger.info("EventBus started (backlog %d)", self._backlog.maxsize)

    async def stop(self) -> None:
        """Stop delivering; snapshots still in the backlog are flushed first."""
        if not self._running:
            return
        self._running = False
        if self._consumer_task:
            self._consumer_task.cancel()
            try:
                await self._consumer_task
            except asyncio.CancelledError:
                pass
            self._consumer_task = None
        await self._flush()
        logger.info(
            "EventBus stopped: %d published, %d dropped, %d subscriber errors",
            self.published,
            self.dropped,
            self.subscriber_errors,
        )

    # ── publish / subscribe ─────────────────────────────

    async def publish(self, event: Event) -> None:
        if self._backlog.full():
            stale = self._backlog.get_nowait()
            self._backlog.task_done()
            self.dropped += 1
            logger.debug("Backlog full, discarded snapshot %s", stale.id)
        self._backlog.put_nowait(event)
        self.published += 1
        self.latest = event

    def subscribe(self, callback: Subscriber) -> None:
        self._subscribers.append(callback)

    def unsubscribe(self, callback: Subscriber) -> None:
        self._subscribers.remove(callback)

    # ── internals ───────────────────────────────────────

    async def _deliver_loop(self) -> None:
        while True:
            event = await self._backlog.get()
            try:
                await self._deliver(event)
            finally:
                self._backlog.task_done()

    async def _flush(self) -> None:
        while True:
            try:
                event = self._backlog.get_nowait()
            except asyncio.QueueEmpty:
                return
            await self._deliver(event)
            self._backlog.task_done()

    async def _deliver(self, event: Event) -> None:
        for sub in list(self._subscribers):
            try:
                await sub(event)
            except Exception:
                self.subscriber_errors += 1
                logger.exception("Subscriber %s failed on snapshot %s", sub, event.id)

    # ── introspection ───────────────────────────────────

    @property
    def pending(self) -> int:
        return self._backlog.qsize()

    @property
    def running(self) -> bool:
        return self._running

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)
