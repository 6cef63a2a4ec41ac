from __future__ import annotations

import asyncio
import logging
import time
from abc import ABC, abstractmethod

from panelmon.engine.event_bus import EventBus
from panelmon.models.event import Event

logger = logging.getLogger(__name__)


class BaseCollector(ABC):
    """Periodic sampling timer.

    Calls ``collect()`` once per ``interval`` seconds and publishes what it
    returns. Ticks are scheduled against the monotonic clock, so a slow
    ``collect()`` shortens the following wait instead of stretching the
    period. A tick that overruns a whole period is not replayed. Changing
    ``interval`` takes effect from the next tick.

    ``ticks`` counts completed ticks, ``failed_ticks`` those whose
    ``collect()`` raised; a failed tick is logged and the timer keeps going.
    """

    name: str = "base"
    interval: float = 1.0

    def __init__(self, event_bus: EventBus, interval: float | None = None) -> None:
        self._event_bus = event_bus
        if interval is not None:
            self.interval = interval
        self._running = False
        self._task: asyncio.Task | None = None
        self.ticks = 0
        self.failed_ticks = 0
        self.last_tick_at: float | None = None

    # ── lifecycle ────────────────────────────────────────

    async def start(self) -> None:
        if self._running:
            return
        self._running = True
        self._task = asyncio.create_task(self._timer())
        logger.info("Collector [%s] sampling every %.1fs", self.name, self.interval)

    async def stop(self) -> None:
        if not self._running:
            return
        self._running = False
        if self._task:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None
        logger.info(
            "Collector [%s] stopped after %d ticks (%d failed)",
            self.name,
            self.ticks,
            self.failed_ticks,
        )

    @abstractmethod
    async def collect(self) -> list[Event]:
        """Take one sample and return the events to publish for it."""
        ...

    # ── internals ───────────────────────────────────────

    async def _tick(self) -> None:
        self.last_tick_at = time.monotonic()
        try:
            events = await self.collect()
        except Exception:
            self.failed_ticks += 1
            logger.exception("Collector [%s] tick failed", self.name)
            return
        self.ticks += 1
        for event in events:
            await self._event_bus.publish(event)

    async def _timer(self) -> None:
        deadline = time.monotonic()
        while self._running:
            await self._tick()
            deadline += self.interval
            now = time.monotonic()
            if deadline < now:
                logger.debug("Collector [%s] overran its %.1fs period", self.name, self.interval)
                deadline = now
            await asyncio.sleep(deadline - now)

    @property
    def running(self) -> bool:
        return self._running
