from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal

_RATE_UNITS = ("B", "K", "M", "G")
_SIZE_UNITS = ("B", "KB", "MB", "GB", "TB")

# Numeric part width of a rate; the unit adds one more character
RATE_WIDTH = 5


def _fixed(value: float, places: int) -> str:
    """Format like ``toFixed``: exact value, ties rounded away from zero."""
    exp = Decimal(1).scaleb(-places)
    return str(Decimal(value).quantize(exp, rounding=ROUND_HALF_UP))


def _is_number(value: float | None) -> bool:
    return value is not None and math.isfinite(value)


def format_speed(bytes_per_sec: float | None) -> str:
    """Render a byte rate as a constant-width 6 character string.

    ``"    0B"``, ``" 1023B"``, ``"  1.5K"``, ``"976.6K"``, ``"  1.0G"``.
    """
    if not _is_number(bytes_per_sec) or bytes_per_sec <= 0:
        return "0".rjust(RATE_WIDTH) + "B"

    exp = 0
    while exp < len(_RATE_UNITS) - 1 and bytes_per_sec >= 1024 ** (exp + 1):
        exp += 1
    num = _fixed(bytes_per_sec / 1024**exp, 1 if exp else 0)

    # 1023.96K would print as "1024.0"
    if len(num) > RATE_WIDTH and exp < len(_RATE_UNITS) - 1:
        exp += 1
        num = _fixed(bytes_per_sec / 1024**exp, 1)
    if len(num) > RATE_WIDTH:
        num = _fixed(bytes_per_sec / 1024**exp, 0)
    # G is the largest unit, so saturate there
    if len(num) > RATE_WIDTH:
        num = "9" * RATE_WIDTH

    return num.rjust(RATE_WIDTH) + _RATE_UNITS[exp]


def format_bytes(num_bytes: float | None) -> str:
    """Render a byte quantity, e.g. ``"512 B"`` or ``"2.0 KB"``."""
    if not _is_number(num_bytes):
        return "0 B"
    if num_bytes < 1024:
        return f"{_fixed(num_bytes, 0)} B"

    exp = 1
    while exp < len(_SIZE_UNITS) - 1 and num_bytes >= 1024 ** (exp + 1):
        exp += 1
    return f"{_fixed(num_bytes / 1024**exp, 1)} {_SIZE_UNITS[exp]}"
