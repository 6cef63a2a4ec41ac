"""Tests for panelmon.collectors.procfs — pure /proc text parsers."""

from __future__ import annotations

import pytest

from panelmon.collectors import procfs

from conftest import NET_DEV_HEADER


# ── /proc/stat ────────────────────────────────────────


class TestParseCpuTimes:
    def test_eight_fields(self):
        text = "cpu  10 20 30 400 50 6 7 8 0 0\ncpu0 1 2 3 4 5 6 7 8 0 0\n"
        idle_total, total = procfs.parse_cpu_times(text)
        assert idle_total == 450
        assert total == 450 + 10 + 20 + 30 + 6 + 7 + 8

    def test_guest_fields_ignored(self):
        # guest and guest_nice are already counted in user/nice
        text = "cpu  1 1 1 1 1 1 1 1 999 999\n"
        assert procfs.parse_cpu_times(text) == (2, 8)

    def test_missing_steal_counts_as_zero(self):
        text = "cpu  10 0 10 80 0 0 0\n"
        assert procfs.parse_cpu_times(text) == (80, 100)

    def test_per_cpu_lines_not_used(self):
        with pytest.raises(ValueError):
            procfs.parse_cpu_times("cpu0 1 2 3 4 5 6 7 8\n")

    def test_too_few_fields(self):
        with pytest.raises(ValueError):
            procfs.parse_cpu_times("cpu  1 2 3\n")

    def test_garbage_numbers(self):
        with pytest.raises(ValueError):
            procfs.parse_cpu_times("cpu  a b c d e f g h\n")


# ── /proc/meminfo ─────────────────────────────────────


class TestParseMeminfo:
    def test_first_integer_per_key(self):
        text = (
            "MemTotal:       16384000 kB\n"
            "MemFree:         1000000 kB\n"
            "MemAvailable:    8000000 kB\n"
            "Cached:          2000000 kB\n"
            "SwapCached:            0 kB\n"
            "HugePages_Total:       0\n"
        )
        info = procfs.parse_meminfo(text)
        assert info["MemTotal"] == 16384000
        assert info["MemAvailable"] == 8000000
        assert info["Cached"] == 2000000
        assert info["SwapCached"] == 0
        assert info["HugePages_Total"] == 0

    def test_line_without_number_is_zero(self):
        assert procfs.parse_meminfo("Weird: n/a\n") == {"Weird": 0}

    def test_empty(self):
        assert procfs.parse_meminfo("") == {}


# ── /proc/net/dev ─────────────────────────────────────


class TestParseNetDev:
    def test_rx_and_tx_columns(self):
        text = NET_DEV_HEADER + (
            "    lo: 500 5 0 0 0 0 0 0 500 5 0 0 0 0 0 0\n"
            "  eth0: 1000 10 0 0 0 0 0 0 2000 20 0 0 0 0 0 0\n"
        )
        assert procfs.parse_net_dev(text) == [("lo", 500, 500), ("eth0", 1000, 2000)]

    def test_no_space_after_colon(self):
        text = NET_DEV_HEADER + "wlan0:123 1 0 0 0 0 0 0 456 1 0 0 0 0 0 0\n"
        assert procfs.parse_net_dev(text) == [("wlan0", 123, 456)]

    def test_headers_and_blank_lines_skipped(self):
        text = NET_DEV_HEADER + "\n  eth0: 1 0 0 0 0 0 0 0 2 0 0 0 0 0 0 0\n\n"
        assert procfs.parse_net_dev(text) == [("eth0", 1, 2)]

    def test_short_lines_skipped(self):
        text = NET_DEV_HEADER + "  eth0: 1 2 3\n"
        assert procfs.parse_net_dev(text) == []


# ── single-value files ────────────────────────────────


def test_parse_loadavg():
    assert procfs.parse_loadavg("0.52 1.10 2.05 3/456 7890\n") == (0.52, 1.10, 2.05)


def test_parse_loadavg_truncated():
    with pytest.raises(IndexError):
        procfs.parse_loadavg("0.52\n")


def test_parse_cpuinfo_cores():
    text = "processor\t: 0\nmodel name\t: X\n\nprocessor\t: 1\nmodel name\t: X\n"
    assert procfs.parse_cpuinfo_cores(text) == 2


def test_parse_cpuinfo_no_processor_lines():
    assert procfs.parse_cpuinfo_cores("Hardware\t: BCM2835\n") == 0


def test_parse_uptime():
    assert procfs.parse_uptime("93784.12 350000.00\n") == 93784.12


def test_parse_uptime_empty():
    with pytest.raises(IndexError):
        procfs.parse_uptime("")


@pytest.mark.parametrize("text", ["nan 0\n", "inf 0\n", "-inf 0\n", "-5.00 0\n"])
def test_parse_uptime_rejects_implausible(text):
    with pytest.raises(ValueError):
        procfs.parse_uptime(text)
