from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from panelmon.api.routes import router, ws_manager
from panelmon.collectors import MetricsCollector, MetricSampler
from panelmon.config import Settings, settings
from panelmon.engine import EventBus, PanelDisplay
from panelmon.models import MonitorReading

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


def get_settings() -> Settings:
    return settings


async def _ws_broadcast(readings: list[MonitorReading]) -> None:
    """PanelDisplay callback — push fresh readings to all WebSocket clients."""
    await ws_manager.broadcast(
        {
            "type": "readings",
            "readings": [r.model_dump(mode="json") for r in readings],
        }
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    # ── startup ───────────────────────────────────────
    config = get_settings()
    event_bus = EventBus()
    stats_sampler = MetricSampler(config.proc_root)
    display = PanelDisplay(
        get_settings,
        cores=stats_sampler.core_count(),
        on_render_callback=_ws_broadcast,
    )
    collector = MetricsCollector(event_bus, get_settings)

    event_bus.subscribe(display.handle_event)
    await event_bus.start()
    await collector.start()

    # Store on app.state for route access
    app.state.config_provider = get_settings
    app.state.event_bus = event_bus
    app.state.display = display
    app.state.stats_sampler = stats_sampler
    app.state.collector = collector

    logger.info(
        "Panel monitor started — monitors=%s refresh=%dms",
        ",".join(config.monitor_types),
        config.refresh_rate,
    )

    yield

    # ── shutdown ──────────────────────────────────────
    await collector.stop()
    await event_bus.stop()
    stats_sampler.reset()
    logger.info("Panel monitor shut down")


app = FastAPI(title=settings.app_name, debug=settings.debug, lifespan=lifespan)

app.include_router(router)
