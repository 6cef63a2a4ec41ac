from .event_bus import EventBus
from .display import (
    PanelDisplay,
    classify_load,
    classify_network,
    classify_percent,
    render_reading,
    render_readings,
)
from .formatting import format_bytes, format_speed

__all__ = [
    "EventBus",
    "PanelDisplay",
    "classify_load",
    "classify_network",
    "classify_percent",
    "render_reading",
    "render_readings",
    "format_bytes",
    "format_speed",
]
