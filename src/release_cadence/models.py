"""Domain models for release cadence processing.

These dataclasses intentionally model only the subset of GraphQL payload fields
that are required for interval statistics.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True, slots=True)
class Release:
    """Represents a published release as returned by the GitHub releases connection."""

    name: str
    published_at: datetime


@dataclass(frozen=True, slots=True)
class RepoRef:
    """Represents a resolved ``owner/name`` repository identifier."""

    owner: str
    repo: str

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.repo}"


@dataclass(frozen=True, slots=True)
class RepoStats:
    """Represents aggregated interval statistics between x.y.0 releases."""

    owner: str
    repo: str
    qualifying_count: int
    min_days: float
    avg_days: float
    max_days: float
    stddev_days: float

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.repo}"
