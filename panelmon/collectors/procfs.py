"""Parsers for the handful of ``/proc`` files the sampler reads.

Each parser takes the file's text and returns plain values. Malformed input
raises ``ValueError`` (or ``IndexError``); callers decide how to degrade.
"""

from __future__ import annotations

import math
import re
from pathlib import Path

LOOPBACK = "lo"

_PROCESSOR_RE = re.compile(r"^processor\s*:", re.MULTILINE)
_FIRST_INT_RE = re.compile(r"(\d+)")


def read_proc_file(proc_root: Path, name: str) -> str:
    return (proc_root / name).read_text(encoding="utf-8", errors="replace")


def parse_cpu_times(text: str) -> tuple[int, int]:
    """Return ``(idle_total, total)`` jiffies from the aggregate ``cpu`` line.

    Fields are user, nice, system, idle, iowait, irq, softirq, steal. Older
    kernels omit the trailing ones; those count as zero.
    """
    line = next((l for l in text.splitlines() if l.startswith("cpu ")), None)
    if line is None:
        raise ValueError("aggregate cpu line not found")

    fields = [int(v) for v in line.split()[1:9]]
    if len(fields) < 4:
        raise ValueError(f"too few cpu fields: {line!r}")
    fields += [0] * (8 - len(fields))

    user, nice, system, idle, iowait, irq, softirq, steal = fields
    idle_total = idle + iowait
    active = user + nice + system + irq + softirq + steal
    return idle_total, idle_total + active


def parse_meminfo(text: str) -> dict[str, int]:
    """Map every ``Key:`` in meminfo to the first integer on its line (kB)."""
    values: dict[str, int] = {}
    for line in text.splitlines():
        key, sep, rest = line.partition(":")
        if not sep:
            continue
        match = _FIRST_INT_RE.search(rest)
        values[key.strip()] = int(match.group(1)) if match else 0
    return values


def parse_net_dev(text: str) -> list[tuple[str, int, int]]:
    """Return ``(interface, rx_bytes, tx_bytes)`` for every interface line.

    The two header lines are skipped. Loopback is included here; callers
    filter it out.
    """
    interfaces: list[tuple[str, int, int]] = []
    for line in text.splitlines()[2:]:
        line = line.strip()
        if not line:
            continue
        name, sep, rest = line.partition(":")
        fields = rest.split()
        if not sep or len(fields) < 9:
            continue
        interfaces.append((name.strip(), int(fields[0]), int(fields[8])))
    return interfaces


def parse_loadavg(text: str) -> tuple[float, float, float]:
    parts = text.split()
    return float(parts[0]), float(parts[1]), float(parts[2])


def parse_cpuinfo_cores(text: str) -> int:
    return len(_PROCESSOR_RE.findall(text))


def parse_uptime(text: str) -> float:
    seconds = float(text.split()[0])
    if not math.isfinite(seconds) or seconds < 0:
        raise ValueError(f"implausible uptime {seconds!r}")
    return seconds
