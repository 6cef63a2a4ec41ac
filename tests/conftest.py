from __future__ import annotations

from pathlib import Path

import pytest

NET_DEV_HEADER = (
    "Inter-|   Receive                                                |  Transmit\n"
    " face |bytes    packets errs drop fifo frame compressed multicast|"
    "bytes    packets errs drop fifo colls carrier compressed\n"
)


class FakeProc:
    """Writes ``/proc``-shaped files under a temporary directory."""

    def __init__(self, root: Path) -> None:
        self.root = root
        (root / "net").mkdir(parents=True, exist_ok=True)

    def write(self, name: str, text: str) -> None:
        (self.root / name).write_text(text)

    def stat(
        self,
        user: int = 0,
        nice: int = 0,
        system: int = 0,
        idle: int = 0,
        iowait: int = 0,
        irq: int = 0,
        softirq: int = 0,
        steal: int = 0,
    ) -> None:
        self.write(
            "stat",
            f"cpu  {user} {nice} {system} {idle} {iowait} {irq} {softirq} {steal} 0 0\n"
            f"cpu0 {user} {nice} {system} {idle} {iowait} {irq} {softirq} {steal} 0 0\n"
            "intr 12345 0 0\n"
            "ctxt 99999\n",
        )

    def meminfo(self, **values_kb: int) -> None:
        self.write("meminfo", "".join(f"{k}: {v:>12} kB\n" for k, v in values_kb.items()))

    def net_dev(self, interfaces: dict[str, tuple[int, int]]) -> None:
        lines = [
            f"{name:>6}: {rx} 10 0 0 0 0 0 0 {tx} 20 0 0 0 0 0 0\n"
            for name, (rx, tx) in interfaces.items()
        ]
        self.write("net/dev", NET_DEV_HEADER + "".join(lines))

    def loadavg(self, load1: float, load5: float, load15: float) -> None:
        self.write("loadavg", f"{load1:.2f} {load5:.2f} {load15:.2f} 2/345 6789\n")

    def cpuinfo(self, cores: int) -> None:
        self.write(
            "cpuinfo",
            "".join(
                f"processor\t: {i}\nmodel name\t: Test CPU\ncpu MHz\t\t: 2400.000\n\n"
                for i in range(cores)
            ),
        )

    def uptime(self, seconds: float) -> None:
        self.write("uptime", f"{seconds:.2f} 1234.56\n")


@pytest.fixture
def fake_proc(tmp_path: Path) -> FakeProc:
    return FakeProc(tmp_path / "proc")
