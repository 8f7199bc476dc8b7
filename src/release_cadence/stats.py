"""Statistics and formatting helpers for release cadence reporting.

This module provides utilities for:
- Converting durations to fractional days.
- Averaging durations at native precision with truncating integer division.
- Computing population standard deviation around a given mean.
- Rendering per-repository statistics as a column-aligned table.
"""

from __future__ import annotations

import math
from datetime import timedelta
from typing import List, Sequence

from .models import RepoStats

_ONE_DAY = timedelta(days=1)
_ONE_MICROSECOND = timedelta(microseconds=1)

REPORT_HEADER = (
    "Repo",
    "x.y.0 releases",
    "Min days between",
    "Avg days between",
    "Max days between",
    "StdDev",
)
_COLUMN_PADDING = 2


def to_days(duration: timedelta) -> float:
    """Convert a duration to fractional days using exact division."""
    return duration / _ONE_DAY


def truncated_mean_duration(durations: Sequence[timedelta]) -> timedelta:
    """Average durations at microsecond precision.

    The sum is integer-divided by the count, truncating toward zero, and the
    result is returned as a single duration. Converting that duration to days
    can differ slightly from averaging per-interval day values; callers rely on
    this order.

    Raises:
        ValueError: If ``durations`` is empty.
    """
    if not durations:
        raise ValueError("Cannot average an empty sequence of durations.")

    total = sum((duration // _ONE_MICROSECOND for duration in durations), 0)
    count = len(durations)
    quotient = abs(total) // count
    if total < 0:
        quotient = -quotient
    return timedelta(microseconds=quotient)


def population_stddev(values: Sequence[float], mean: float) -> float:
    """Population standard deviation (divide by N) of ``values`` around ``mean``.

    Raises:
        ValueError: If ``values`` is empty.
    """
    if not values:
        raise ValueError("Cannot compute standard deviation of an empty sequence.")

    squared = sum((value - mean) * (value - mean) for value in values)
    return math.sqrt(squared / len(values))


def _format_row(stats: RepoStats) -> List[str]:
    return [
        stats.full_name,
        str(stats.qualifying_count),
        f"{stats.min_days:.2f}",
        f"{stats.avg_days:.2f}",
        f"{stats.max_days:.2f}",
        f"{stats.stddev_days:.2f}",
    ]


def generate_report(repo_stats: Sequence[RepoStats]) -> str:
    """Render per-repository statistics as a left-aligned text table.

    Rows keep the order of ``repo_stats``. Every column except the last is
    padded to its widest cell plus two spaces; numbers use two decimals.

    Args:
        repo_stats: Statistics records in repository processing order.

    Returns:
        Formatted multi-line table, header line included.
    """
    rows = [list(REPORT_HEADER)] + [_format_row(stats) for stats in repo_stats]
    widths = [max(len(row[index]) for row in rows) for index in range(len(REPORT_HEADER))]

    lines = []
    for row in rows:
        cells = [
            cell.ljust(widths[index] + _COLUMN_PADDING)
            for index, cell in enumerate(row[:-1])
        ]
        cells.append(row[-1])
        lines.append("".join(cells))

    return "\n".join(lines)
