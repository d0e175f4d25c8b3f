"""Human-readable sizes and timestamps for cache reports."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime

_SIZE_UNITS = ["Bytes", "KB", "MB", "GB", "TB"]


def bytes_to_size(num_bytes: int) -> str:
    """Format a byte count with a 1024 base, e.g. ``1.5 KB``."""
    if num_bytes <= 0:
        return "0 Byte"
    value = float(num_bytes)
    unit = 0
    while value >= 1024 and unit < len(_SIZE_UNITS) - 1:
        value /= 1024
        unit += 1
    return f"{round(value, 2):g} {_SIZE_UNITS[unit]}"


def format_timestamp(ms: int) -> str:
    """Local date and time for an epoch-milliseconds timestamp."""
    return datetime.fromtimestamp(ms / 1000).strftime("%Y-%m-%d %H:%M:%S")


def size_thresholds(sizes: Iterable[int]) -> tuple[float, float]:
    """Lower and upper tertile boundaries of the non-zero sizes."""
    ordered = sorted(s for s in sizes if s > 0)
    n = len(ordered)
    low = ordered[n // 3] if n // 3 < n else float("inf")
    mid = ordered[(n * 2) // 3] if (n * 2) // 3 < n else float("inf")
    return low, mid


def size_color(size: int, low: float, mid: float) -> str:
    """Rich colour for a remote's size relative to the tertile thresholds."""
    if size > mid:
        return "red"
    if size > low:
        return "yellow"
    return "green"
