from __future__ import annotations

from pydantic import BaseModel, Field, computed_field


# ── stored counter samples ──────────────────────────────


class CpuSample(BaseModel):
    """Cumulative jiffies since boot from the aggregate ``cpu`` line."""

    idle_ticks: int
    total_ticks: int


class NetSample(BaseModel):
    """Cumulative non-loopback byte counters and the monotonic time they were read."""

    rx_bytes: int
    tx_bytes: int
    timestamp_us: int


# ── derived values ──────────────────────────────────────


class NetworkRate(BaseModel):
    rx_per_sec: float
    tx_per_sec: float


class LoadAverage(BaseModel):
    load1: float
    load5: float
    load15: float


class Uptime(BaseModel):
    seconds: float
    days: int
    hours: int
    minutes: int

    @classmethod
    def from_seconds(cls, seconds: float) -> Uptime:
        total = int(seconds)
        return cls(
            seconds=seconds,
            days=total // 86400,
            hours=(total % 86400) // 3600,
            minutes=(total % 3600) // 60,
        )

    @computed_field  # type: ignore[prop-decorator]
    @property
    def display(self) -> str:
        if self.days > 0:
            return f"{self.days}d {self.hours}h {self.minutes}m"
        if self.hours > 0:
            return f"{self.hours}h {self.minutes}m"
        return f"{self.minutes}m"


class InterfaceTotals(BaseModel):
    name: str
    rx_bytes: int
    tx_bytes: int


class MemoryDetails(BaseModel):
    """Memory breakdown in bytes."""

    total: int
    used: int
    free: int
    available: int
    buffers: int
    cached: int
    percent: int


class SwapDetails(BaseModel):
    total: int
    used: int
    free: int
    percent: int


class NetworkDetails(BaseModel):
    rx_total: int
    tx_total: int
    interfaces: list[InterfaceTotals] = Field(default_factory=list)


# ── aggregates ──────────────────────────────────────────


class MetricSnapshot(BaseModel):
    """Point-in-time panel values. ``None`` means unavailable or not requested."""

    taken_at_us: int
    cpu: int | None = None
    memory: int | None = None
    swap: int | None = None
    network: NetworkRate | None = None
    load: LoadAverage | None = None


class DetailedStats(BaseModel):
    """Everything shown in the expanded stats view."""

    cpu: int | None = None
    cpu_cores: int | None = None
    load: LoadAverage | None = None
    memory: MemoryDetails | None = None
    swap: SwapDetails | None = None
    network: NetworkDetails | None = None
    network_rate: NetworkRate | None = None
    uptime: Uptime | None = None
