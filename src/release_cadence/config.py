"""Configuration parsing and repository resolution for the release cadence report."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Iterable, Optional, Tuple

from .errors import ConfigurationError, ResolutionError
from .models import RepoRef

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://api.github.com/graphql"


@dataclass(frozen=True)
class Config:
    """Validated runtime settings used by the release cadence report."""

    default_owner: Optional[str]
    repos: Tuple[str, ...]
    token: str
    api_url: str = DEFAULT_API_URL


def load_config(
    default_owner: Optional[str],
    repos: Iterable[str],
    api_url: str = DEFAULT_API_URL,
) -> Config:
    """Build and validate application configuration.

    Args:
        default_owner: Owner applied to identifiers given without ``owner/``.
        repos: Repository identifiers, each ``NAME`` or ``OWNER/NAME``.
        api_url: GitHub GraphQL endpoint.

    Returns:
        A validated ``Config`` instance.

    Raises:
        ConfigurationError: If no repository identifiers were supplied.
    """
    cleaned = tuple(repo.strip() for repo in repos if repo and repo.strip())
    if not cleaned:
        raise ConfigurationError("At least 1 repo must be specified")

    token: str = os.getenv("GITHUB_TOKEN", "").strip()
    if not token:
        logger.warning(
            "GITHUB_TOKEN is not set; GitHub GraphQL requests will be unauthenticated"
        )

    owner = (default_owner or "").strip() or None

    return Config(
        default_owner=owner,
        repos=cleaned,
        token=token,
        api_url=api_url,
    )


def resolve_repository(identifier: str, default_owner: Optional[str]) -> RepoRef:
    """Resolve ``NAME`` or ``OWNER/NAME`` into a repository reference.

    An explicit owner always wins over ``default_owner``.

    Raises:
        ResolutionError: If ``identifier`` has no owner and no default owner is set.
    """
    if "/" in identifier:
        parts = identifier.split("/")
        return RepoRef(owner=parts[0], repo=parts[1])

    if not default_owner:
        raise ResolutionError(f"Skipping repo {identifier!r} because --owner is unset")

    return RepoRef(owner=default_owner, repo=identifier)
