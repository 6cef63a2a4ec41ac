from __future__ import annotations

import logging
from typing import Callable

from panelmon.collectors.base import BaseCollector
from panelmon.collectors.sampler import MetricSampler
from panelmon.config import Settings
from panelmon.engine.event_bus import EventBus
from panelmon.models import Event, EventSource, EventType, MetricSnapshot

logger = logging.getLogger(__name__)


class MetricsCollector(BaseCollector):
    """Drives a ``MetricSampler`` once per refresh interval.

    The configuration is pulled through ``config_provider`` on each tick;
    only the active monitor kinds are sampled, and the tick interval follows
    ``refresh_rate``.
    """

    name = "metrics_collector"

    def __init__(
        self,
        event_bus: EventBus,
        config_provider: Callable[[], Settings],
        sampler: MetricSampler | None = None,
    ) -> None:
        config = config_provider()
        super().__init__(event_bus, interval=config.refresh_interval)
        self.config_provider = config_provider
        self.sampler = sampler or MetricSampler(config.proc_root)
        self.last_snapshot: MetricSnapshot | None = None

    async def collect(self) -> list[Event]:
        config = self.config_provider()
        if config.refresh_interval != self.interval:
            logger.info("Refresh interval changed %.1fs -> %.1fs", self.interval, config.refresh_interval)
            self.interval = config.refresh_interval

        snapshot = self.sampler.sample(monitors=config.monitor_types)
        self.last_snapshot = snapshot
        return [
            Event(
                source=EventSource.METRICS_COLLECTOR,
                event_type=EventType.METRICS_SAMPLED,
                payload=snapshot.model_dump(),
            )
        ]

    async def stop(self) -> None:
        await super().stop()
        self.sampler.reset()
        self.last_snapshot = None
