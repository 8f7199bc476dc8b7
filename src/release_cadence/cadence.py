"""Interval statistics between x.y.0 releases.

This module reduces an ascending release history to ``RepoStats``:
- Releases named ``major.minor.0`` qualify; every other release is skipped.
- The first named release only seeds the anchor, whether or not it qualifies.
- Each qualifying release yields one interval against the anchor and then
  becomes the new anchor.
"""

from __future__ import annotations

from datetime import timedelta
from typing import Iterable, List, Optional

from .models import Release, RepoStats
from .stats import population_stddev, to_days, truncated_mean_duration


def is_qualifying_release(name: str) -> bool:
    """Return True when ``name`` is a ``major.minor.0`` release.

    The check is structural: the third dot-separated part must be exactly
    ``"0"``, so ``"1.4.0-rc1"`` and ``"2.0.00"`` do not qualify.
    """
    parts = name.split(".")
    return len(parts) >= 3 and parts[2] == "0"


def collect_intervals(releases: Iterable[Release]) -> List[timedelta]:
    """Collect durations between consecutive qualifying releases.

    ``releases`` must be in ascending time order. A release with an empty name
    cannot seed the anchor.
    """
    intervals: List[timedelta] = []
    anchor: Optional[Release] = None

    for release in releases:
        if anchor is None:
            if release.name:
                anchor = release
            continue

        if not is_qualifying_release(release.name):
            continue

        intervals.append(release.published_at - anchor.published_at)
        anchor = release

    return intervals


def compute_repo_stats(owner: str, repo: str, releases: Iterable[Release]) -> Optional[RepoStats]:
    """Compute interval statistics in days for one repository.

    Business logic:
    - ``min_days`` and ``max_days`` are the extreme intervals.
    - ``avg_days`` converts the truncated integer mean duration to days, it is
      not the mean of per-interval day values.
    - ``stddev_days`` is the population standard deviation around ``avg_days``.

    Returns ``None`` when no interval between x.y.0 releases exists.
    """
    intervals = collect_intervals(releases)

    if not intervals:
        return None

    interval_days = [to_days(interval) for interval in intervals]
    avg_days = to_days(truncated_mean_duration(intervals))

    return RepoStats(
        owner=owner,
        repo=repo,
        qualifying_count=len(intervals),
        min_days=to_days(min(intervals)),
        avg_days=avg_days,
        max_days=to_days(max(intervals)),
        stddev_days=population_stddev(interval_days, avg_days),
    )
