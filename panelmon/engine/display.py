from __future__ import annotations

import logging
from typing import Awaitable, Callable

from panelmon.config import Settings
from panelmon.engine.formatting import format_speed
from panelmon.models import (
    TEXT_LABELS,
    Event,
    EventType,
    Level,
    LoadAverage,
    MetricSnapshot,
    MonitorReading,
    MonitorType,
    NetworkRate,
)

logger = logging.getLogger(__name__)

# Combined rx+tx MiB/s levels; network has no percentage to compare against
NET_WARNING_MIBPS = 10.0
NET_CRITICAL_MIBPS = 100.0


def classify_percent(value: float, yellow: int, red: int) -> Level:
    if value >= red:
        return Level.CRITICAL
    if value >= yellow:
        return Level.WARNING
    return Level.NORMAL


def classify_network(rate: NetworkRate) -> Level:
    mibps = (rate.rx_per_sec + rate.tx_per_sec) / (1024 * 1024)
    if mibps >= NET_CRITICAL_MIBPS:
        return Level.CRITICAL
    if mibps >= NET_WARNING_MIBPS:
        return Level.WARNING
    return Level.NORMAL


def classify_load(load: LoadAverage, cores: int | None, yellow: int, red: int) -> Level:
    """Classify the 1-minute load as a percentage of available cores."""
    return classify_percent(load.load1 / (cores or 1) * 100, yellow, red)


def render_reading(
    monitor: MonitorType,
    snapshot: MetricSnapshot,
    config: Settings,
    cores: int | None = None,
) -> MonitorReading:
    prefix = "" if config.use_icon else f"{TEXT_LABELS[monitor]} "

    if monitor == MonitorType.NET:
        rate = snapshot.network
        if rate is None:
            return MonitorReading(monitor=monitor, text=f"{prefix}--↑ --↓")
        return MonitorReading(
            monitor=monitor,
            text=f"{prefix}{format_speed(rate.tx_per_sec)}↑ {format_speed(rate.rx_per_sec)}↓",
            level=classify_network(rate),
            value=rate.rx_per_sec + rate.tx_per_sec,
        )

    if monitor == MonitorType.LOAD:
        load = snapshot.load
        if load is None:
            return MonitorReading(monitor=monitor, text=f"{prefix}--")
        return MonitorReading(
            monitor=monitor,
            text=f"{prefix}{load.load1:.2f}",
            level=classify_load(load, cores, config.yellow_threshold, config.red_threshold),
            value=load.load1,
        )

    value = {
        MonitorType.CPU: snapshot.cpu,
        MonitorType.MEMORY: snapshot.memory,
        MonitorType.SWAP: snapshot.swap,
    }[monitor]
    if value is None:
        return MonitorReading(monitor=monitor, text=f"{prefix}--%")
    return MonitorReading(
        monitor=monitor,
        text=f"{prefix}{value}%",
        level=classify_percent(value, config.yellow_threshold, config.red_threshold),
        value=value,
    )


def render_readings(
    snapshot: MetricSnapshot,
    config: Settings,
    cores: int | None = None,
) -> list[MonitorReading]:
    """One reading per configured monitor, in configured order."""
    return [render_reading(m, snapshot, config, cores) for m in config.monitor_types]


class PanelDisplay:
    """EventBus subscriber that keeps the latest rendered panel readings.

    The configuration is fetched through ``config_provider`` on every event
    so threshold and label changes apply on the next tick.
    """

    def __init__(
        self,
        config_provider: Callable[[], Settings],
        cores: int | None = None,
        on_render_callback: Callable[[list[MonitorReading]], Awaitable[None]] | None = None,
    ) -> None:
        self.config_provider = config_provider
        self.cores = cores
        self.on_render_callback = on_render_callback
        self.snapshot: MetricSnapshot | None = None
        self.readings: list[MonitorReading] = []

    async def handle_event(self, event: Event) -> None:
        if event.event_type != EventType.METRICS_SAMPLED:
            return
        self.snapshot = MetricSnapshot.model_validate(event.payload)
        self.readings = render_readings(self.snapshot, self.config_provider(), self.cores)
        logger.debug("Rendered %d readings", len(self.readings))

        if self.on_render_callback:
            await self.on_render_callback(self.readings)
