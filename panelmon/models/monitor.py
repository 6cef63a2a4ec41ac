from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel


class MonitorType(StrEnum):
    CPU = "cpu"
    MEMORY = "memory"
    SWAP = "swap"
    NET = "net"
    LOAD = "load"


class Level(StrEnum):
    NORMAL = "normal"
    WARNING = "warning"
    CRITICAL = "critical"


# Prefixes shown in text mode (icon mode shows no prefix)
TEXT_LABELS: dict[MonitorType, str] = {
    MonitorType.CPU: "CPU",
    MonitorType.MEMORY: "MEM",
    MonitorType.SWAP: "SWP",
    MonitorType.NET: "NET",
    MonitorType.LOAD: "LOAD",
}


class MonitorReading(BaseModel):
    """One rendered panel slot: label text plus its color level."""

    monitor: MonitorType
    text: str
    level: Level | None = None
    value: float | None = None
