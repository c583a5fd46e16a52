"""Statistics and formatting helpers for trend reporting.

This module provides utilities for:
- Rounding to the nearest whole number with halves rounded up.
- Computing means and medians of whole-day samples.
- Computing percentages with a zero-denominator guard.
- Formatting day counts for human-readable reports.
"""

from __future__ import annotations

import math
from typing import List, Optional, Sequence


def round_half_up(value: float) -> int:
    """Round to the nearest integer, with ``.5`` always rounding up (``2.5 -> 3``)."""
    return int(math.floor(value + 0.5))


def calculate_mean(values: Sequence[float]) -> Optional[float]:
    """Return the arithmetic mean, or ``None`` for an empty sample."""
    if not values:
        return None
    return sum(values) / len(values)


def calculate_median(values: Sequence[int]) -> Optional[int]:
    """Calculate the median of whole-day samples.

    The input does not need to be sorted. For an even number of samples the
    two middle values are averaged and rounded half-up.

    Args:
        values: Whole-day samples.

    Returns:
        Median as ``int`` or ``None`` when input is empty.
    """
    if not values:
        return None

    sorted_values: List[int] = sorted(values)
    middle = len(sorted_values) // 2

    if len(sorted_values) % 2 == 0:
        return round_half_up((sorted_values[middle - 1] + sorted_values[middle]) / 2)

    return sorted_values[middle]


def calculate_percentage(count: float, total: float) -> float:
    """Return ``count`` as a percentage of ``total``, or ``0.0`` when total is zero."""
    if total <= 0:
        return 0.0
    return (count / total) * 100


def clamp(value: float, lower: float = 0.0, upper: float = 1.0) -> float:
    """Clamp ``value`` into ``[lower, upper]``."""
    return max(lower, min(upper, value))


def format_days(days: Optional[float]) -> str:
    """Format a day count for reports.

    Returns:
        ``"n/a"`` when ``days`` is ``None``; otherwise e.g. ``"1 day"`` or
        ``"12 days"``.
    """
    if days is None:
        return "n/a"

    whole_days = round_half_up(days)
    unit = "day" if whole_days == 1 else "days"
    return f"{whole_days} {unit}"
