from .event import Event, EventSource, EventType
from .metrics import (
    CpuSample,
    DetailedStats,
    InterfaceTotals,
    LoadAverage,
    MemoryDetails,
    MetricSnapshot,
    NetSample,
    NetworkDetails,
    NetworkRate,
    SwapDetails,
    Uptime,
)
from .monitor import TEXT_LABELS, Level, MonitorReading, MonitorType

__all__ = [
    "Event",
    "EventSource",
    "EventType",
    "CpuSample",
    "DetailedStats",
    "InterfaceTotals",
    "LoadAverage",
    "MemoryDetails",
    "MetricSnapshot",
    "NetSample",
    "NetworkDetails",
    "NetworkRate",
    "SwapDetails",
    "Uptime",
    "TEXT_LABELS",
    "Level",
    "MonitorReading",
    "MonitorType",
]
