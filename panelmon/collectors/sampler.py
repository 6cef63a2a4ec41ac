from __future__ import annotations

import logging
import time
from collections.abc import Iterable
from decimal import ROUND_HALF_UP, Decimal
from pathlib import Path

from panelmon.collectors import procfs
from panelmon.models import (
    CpuSample,
    DetailedStats,
    InterfaceTotals,
    LoadAverage,
    MemoryDetails,
    MetricSnapshot,
    MonitorType,
    NetSample,
    NetworkDetails,
    NetworkRate,
    SwapDetails,
    Uptime,
)

logger = logging.getLogger(__name__)

# Everything a /proc read or parse can throw
_READ_ERRORS = (OSError, ValueError, IndexError, OverflowError)


def monotonic_us() -> int:
    return time.monotonic_ns() // 1000


def percent(part: float, whole: float) -> int:
    """Integer percentage rounded half-up."""
    return int(Decimal(part * 100 / whole).quantize(Decimal(1), rounding=ROUND_HALF_UP))


class MetricSampler:
    """Reads ``/proc`` counters and turns them into panel metrics.

    Holds only the previous CPU and network samples, which the delta-based
    metrics need. Every accessor returns ``None`` when the value is not
    available (file unreadable, malformed, or first sample not yet taken)
    and never raises.
    """

    def __init__(self, proc_root: str | Path = "/proc") -> None:
        self.proc_root = Path(proc_root)
        self._last_cpu: CpuSample | None = None
        self._last_net: NetSample | None = None

    # ── lifecycle ────────────────────────────────────────

    def reset(self) -> None:
        """Forget stored samples; the next delta read warms up again."""
        self._last_cpu = None
        self._last_net = None

    @property
    def warmed_up(self) -> bool:
        """True once a CPU or network baseline is stored, so the next tick yields rates."""
        return self._last_cpu is not None or self._last_net is not None

    # ── delta-based metrics ─────────────────────────────

    def cpu_percent(self) -> int | None:
        try:
            idle_total, total = procfs.parse_cpu_times(self._read("stat"))
        except _READ_ERRORS:
            logger.debug("Cannot read CPU times from %s/stat", self.proc_root, exc_info=True)
            return None

        prev = self._last_cpu
        self._last_cpu = CpuSample(idle_ticks=idle_total, total_ticks=total)
        if prev is None:
            return None

        idle_delta = idle_total - prev.idle_ticks
        total_delta = total - prev.total_ticks
        if total_delta == 0:
            return 0
        return max(0, min(100, percent(total_delta - idle_delta, total_delta)))

    def network_rate(self, now: int | None = None) -> NetworkRate | None:
        """Bytes per second across non-loopback interfaces since the last call.

        ``now`` is a monotonic clock reading in microseconds.
        """
        if now is None:
            now = monotonic_us()
        try:
            rx, tx = self._network_totals()
        except _READ_ERRORS:
            logger.debug("Cannot read %s/net/dev", self.proc_root, exc_info=True)
            return None

        prev = self._last_net
        self._last_net = NetSample(rx_bytes=rx, tx_bytes=tx, timestamp_us=now)
        if prev is None:
            return None

        elapsed = (now - prev.timestamp_us) / 1_000_000
        if elapsed <= 0:
            return None

        rx_delta = rx - prev.rx_bytes
        tx_delta = tx - prev.tx_bytes
        if rx_delta < 0 or tx_delta < 0:
            logger.debug("Network counters went backwards (rx=%d, tx=%d)", rx_delta, tx_delta)
        return NetworkRate(
            rx_per_sec=max(rx_delta, 0) / elapsed,
            tx_per_sec=max(tx_delta, 0) / elapsed,
        )

    # ── single-shot metrics ─────────────────────────────

    def memory_percent(self) -> int | None:
        try:
            info = procfs.parse_meminfo(self._read("meminfo"))
        except _READ_ERRORS:
            logger.debug("Cannot read %s/meminfo", self.proc_root, exc_info=True)
            return None
        total = info.get("MemTotal", 0)
        if total == 0:
            return None
        return percent(total - info.get("MemAvailable", 0), total)

    def swap_percent(self) -> int | None:
        try:
            info = procfs.parse_meminfo(self._read("meminfo"))
        except _READ_ERRORS:
            logger.debug("Cannot read %s/meminfo", self.proc_root, exc_info=True)
            return None
        total = info.get("SwapTotal", 0)
        if total == 0:
            return 0  # no swap configured
        return percent(total - info.get("SwapFree", 0), total)

    def core_count(self) -> int | None:
        try:
            cores = procfs.parse_cpuinfo_cores(self._read("cpuinfo"))
        except _READ_ERRORS:
            logger.debug("Cannot read %s/cpuinfo", self.proc_root, exc_info=True)
            return None
        return cores or None

    def load_average(self) -> LoadAverage | None:
        try:
            load1, load5, load15 = procfs.parse_loadavg(self._read("loadavg"))
        except _READ_ERRORS:
            logger.debug("Cannot read %s/loadavg", self.proc_root, exc_info=True)
            return None
        return LoadAverage(load1=load1, load5=load5, load15=load15)

    def uptime(self) -> Uptime | None:
        try:
            return Uptime.from_seconds(procfs.parse_uptime(self._read("uptime")))
        except _READ_ERRORS:
            logger.debug("Cannot read %s/uptime", self.proc_root, exc_info=True)
            return None

    def interfaces(self, active_only: bool = True) -> list[InterfaceTotals] | None:
        """Cumulative per-interface totals, loopback excluded."""
        try:
            rows = procfs.parse_net_dev(self._read("net/dev"))
        except _READ_ERRORS:
            logger.debug("Cannot read %s/net/dev", self.proc_root, exc_info=True)
            return None
        return [
            InterfaceTotals(name=name, rx_bytes=rx, tx_bytes=tx)
            for name, rx, tx in rows
            if name != procfs.LOOPBACK and (not active_only or rx > 0 or tx > 0)
        ]

    def memory_details(self) -> MemoryDetails | None:
        try:
            info = procfs.parse_meminfo(self._read("meminfo"))
        except _READ_ERRORS:
            logger.debug("Cannot read %s/meminfo", self.proc_root, exc_info=True)
            return None
        total = info.get("MemTotal", 0) * 1024
        available = info.get("MemAvailable", 0) * 1024
        used = total - available
        return MemoryDetails(
            total=total,
            used=used,
            free=info.get("MemFree", 0) * 1024,
            available=available,
            buffers=info.get("Buffers", 0) * 1024,
            cached=info.get("Cached", 0) * 1024,
            percent=percent(used, total) if total > 0 else 0,
        )

    def swap_details(self) -> SwapDetails | None:
        try:
            info = procfs.parse_meminfo(self._read("meminfo"))
        except _READ_ERRORS:
            logger.debug("Cannot read %s/meminfo", self.proc_root, exc_info=True)
            return None
        total = info.get("SwapTotal", 0) * 1024
        free = info.get("SwapFree", 0) * 1024
        used = total - free
        return SwapDetails(
            total=total,
            used=used,
            free=free,
            percent=percent(used, total) if total > 0 else 0,
        )

    def network_details(self) -> NetworkDetails | None:
        interfaces = self.interfaces(active_only=False)
        if interfaces is None:
            return None
        return NetworkDetails(
            rx_total=sum(i.rx_bytes for i in interfaces),
            tx_total=sum(i.tx_bytes for i in interfaces),
            interfaces=[i for i in interfaces if i.rx_bytes > 0 or i.tx_bytes > 0],
        )

    # ── aggregates ───────────────────────────────────────

    def sample(
        self,
        now: int | None = None,
        monitors: Iterable[MonitorType] | None = None,
    ) -> MetricSnapshot:
        """Read the requested monitor kinds (all of them by default).

        Kinds not requested are left ``None`` and their stored samples are
        not advanced.
        """
        if now is None:
            now = monotonic_us()
        wanted = set(MonitorType) if monitors is None else set(monitors)

        snapshot = MetricSnapshot(taken_at_us=now)
        if MonitorType.CPU in wanted:
            snapshot.cpu = self.cpu_percent()
        if MonitorType.MEMORY in wanted:
            snapshot.memory = self.memory_percent()
        if MonitorType.SWAP in wanted:
            snapshot.swap = self.swap_percent()
        if MonitorType.NET in wanted:
            snapshot.network = self.network_rate(now)
        if MonitorType.LOAD in wanted:
            snapshot.load = self.load_average()
        return snapshot

    def detailed_stats(self, now: int | None = None) -> DetailedStats:
        if now is None:
            now = monotonic_us()
        return DetailedStats(
            cpu=self.cpu_percent(),
            cpu_cores=self.core_count(),
            load=self.load_average(),
            memory=self.memory_details(),
            swap=self.swap_details(),
            network=self.network_details(),
            network_rate=self.network_rate(now),
            uptime=self.uptime(),
        )

    # ── internals ───────────────────────────────────────

    def _read(self, name: str) -> str:
        return procfs.read_proc_file(self.proc_root, name)

    def _network_totals(self) -> tuple[int, int]:
        rx_total = tx_total = 0
        for name, rx, tx in procfs.parse_net_dev(self._read("net/dev")):
            if name == procfs.LOOPBACK:
                continue
            rx_total += rx
            tx_total += tx
        return rx_total, tx_total
