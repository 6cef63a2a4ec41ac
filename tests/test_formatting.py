"""Tests for panelmon.engine.formatting — fixed-width rates and byte sizes."""

from __future__ import annotations

import math

import pytest

from panelmon.engine.formatting import format_bytes, format_speed


# ── format_speed ──────────────────────────────────────


@pytest.mark.parametrize(
    "value, expected",
    [
        (0, "    0B"),
        (1, "    1B"),
        (512.4, "  512B"),
        (512.5, "  513B"),
        (1023, " 1023B"),
        (1024, "  1.0K"),
        (1536, "  1.5K"),
        (1280, "  1.3K"),  # ties round up
        (1000024, "976.6K"),
        (1024 * 1024, "  1.0M"),
        (5.25 * 1024 * 1024, "  5.3M"),
        (1073741824, "  1.0G"),
        (999.9 * 1024**3, "999.9G"),
    ],
)
def test_format_speed(value, expected):
    assert format_speed(value) == expected


@pytest.mark.parametrize("value", [None, math.nan, math.inf, -5, -0.0])
def test_format_speed_degenerate_values_render_zero(value):
    assert format_speed(value) == "    0B"


def test_format_speed_promotes_unit_instead_of_widening():
    # 1023.96 KiB/s would be "1024.0K"
    assert format_speed(1023.96 * 1024) == "  1.0M"
    assert format_speed(1023.96 * 1024 * 1024) == "  1.0G"


def test_format_speed_drops_decimal_for_huge_rates():
    assert format_speed(12345 * 1024**3) == "12345G"


@pytest.mark.parametrize("value", [99999.5 * 1024**3, 1e15, 1e20, 2.0**80])
def test_format_speed_saturates_beyond_largest_unit(value):
    assert format_speed(value) == "99999G"


@pytest.mark.parametrize(
    "value",
    [0, 0.4, 7, 99, 1023.4, 1023.6, 1024, 10_000, 500_000, 1_048_575, 3_000_000,
     999_999_999, 1024**3, 50 * 1024**3, 1023.99 * 1024**3, 99_999 * 1024**3, 1e15, 1e30],
)
def test_format_speed_constant_width(value):
    assert len(format_speed(value)) == 6


# ── format_bytes ──────────────────────────────────────


@pytest.mark.parametrize(
    "value, expected",
    [
        (0, "0 B"),
        (512, "512 B"),
        (1023, "1023 B"),
        (2048, "2.0 KB"),
        (1536, "1.5 KB"),
        (10 * 1024**2, "10.0 MB"),
        (3.75 * 1024**3, "3.8 GB"),
        (2 * 1024**4, "2.0 TB"),
        (5000 * 1024**4, "5000.0 TB"),
    ],
)
def test_format_bytes(value, expected):
    assert format_bytes(value) == expected


@pytest.mark.parametrize("value", [None, math.nan])
def test_format_bytes_missing(value):
    assert format_bytes(value) == "0 B"
