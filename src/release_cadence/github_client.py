"""GitHub GraphQL API client for release history retrieval."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple

import requests

from .config import Config
from .errors import AuthenticationError, FetchError
from .models import Release

logger = logging.getLogger(__name__)

RELEASES_QUERY = """
query($owner: String!, $name: String!, $after: String) {
  repository(owner: $owner, name: $name) {
    releases(first: 100, after: $after, orderBy: {direction: ASC, field: CREATED_AT}) {
      nodes {
        name
        publishedAt
      }
      pageInfo {
        endCursor
        hasNextPage
      }
    }
  }
}
"""


class GitHubClient:
    """Small, typed client for the GitHub GraphQL releases connection."""

    def __init__(self, config: Config, timeout_seconds: int = 30) -> None:
        """Initialize a GitHub GraphQL client.

        Args:
            config: Validated runtime configuration including the access token.
            timeout_seconds: Per-request timeout in seconds.
        """
        self._config = config
        self._timeout_seconds = timeout_seconds
        self._url = config.api_url

        self._session = requests.Session()
        self._session.headers.update(
            {"Accept": "application/json", "Content-Type": "application/json"}
        )
        if config.token:
            self._session.headers["Authorization"] = f"bearer {config.token}"

    def close(self) -> None:
        self._session.close()

    def _parse_datetime(self, value: Optional[str]) -> Optional[datetime]:
        """Parse GitHub ISO8601 timestamps into timezone-aware datetimes."""
        if not value:
            return None

        normalized = value[:-1] + "+00:00" if value.endswith("Z") else value
        parsed = datetime.fromisoformat(normalized)
        if parsed.tzinfo is None:
            return parsed.replace(tzinfo=timezone.utc)
        return parsed

    def _post_query(self, query: str, variables: Dict[str, Any]) -> Dict[str, Any]:
        """Execute a single GraphQL request and return its ``data`` object.

        Raises:
            AuthenticationError: If GitHub answers with HTTP 401.
            FetchError: If the request fails, returns HTTP >= 400, does not return
                valid JSON, or reports GraphQL errors.
        """
        try:
            response = self._session.post(
                self._url,
                json={"query": query, "variables": variables},
                timeout=self._timeout_seconds,
            )
        except requests.RequestException as exc:
            raise FetchError(f"GitHub GraphQL request failed: POST {self._url}") from exc

        status_code = response.status_code
        if status_code == 401:
            raise AuthenticationError(
                "GitHub rejected the access token (HTTP 401). "
                "Set the 'GITHUB_TOKEN' environment variable to a valid token."
            )

        if status_code >= 400:
            raise FetchError(
                "GitHub GraphQL request failed: "
                f"POST {self._url} returned {status_code} - {response.text}"
            )

        try:
            payload = response.json()
        except ValueError as exc:
            raise FetchError(f"GitHub GraphQL API returned invalid JSON: POST {self._url}") from exc

        if not isinstance(payload, dict):
            raise FetchError(f"GitHub GraphQL API returned unexpected payload shape: POST {self._url}")

        errors = payload.get("errors")
        if errors:
            messages = "; ".join(
                str(error.get("message", error)) if isinstance(error, dict) else str(error)
                for error in errors
            )
            raise FetchError(f"GitHub GraphQL query returned errors: {messages}")

        data = payload.get("data")
        if not isinstance(data, dict):
            raise FetchError(f"GitHub GraphQL API returned no data: POST {self._url}")

        return data

    def _parse_releases_page(
        self,
        owner: str,
        repo: str,
        repository: Dict[str, Any],
    ) -> Tuple[List[Release], bool, Optional[str]]:
        """Parse one page of the releases connection.

        Returns:
            ``(releases, has_next_page, end_cursor)`` for the page.
        """
        connection = repository.get("releases") or {}
        releases: List[Release] = []

        for node in connection.get("nodes") or []:
            if node is None:
                continue

            published_at = self._parse_datetime(node.get("publishedAt"))
            if published_at is None:
                logger.debug(
                    "Skipping unpublished release",
                    extra={"repo": f"{owner}/{repo}", "release_name": node.get("name")},
                )
                continue

            releases.append(Release(name=node.get("name") or "", published_at=published_at))

        page_info = connection.get("pageInfo") or {}
        return releases, bool(page_info.get("hasNextPage")), page_info.get("endCursor")

    def list_releases(self, owner: str, repo: str) -> List[Release]:
        """List all releases of a repository, ascending by creation time.

        Follows the ``pageInfo`` cursor until ``hasNextPage`` is false. Releases
        without ``publishedAt`` are unpublished drafts and are left out.

        Raises:
            FetchError: If any page cannot be retrieved, the repository does not
                exist, or the payload is malformed.
        """
        releases: List[Release] = []
        after: Optional[str] = None

        while True:
            data = self._post_query(
                RELEASES_QUERY,
                {"owner": owner, "name": repo, "after": after},
            )

            repository = data.get("repository")
            if repository is None:
                raise FetchError(f"Repository '{owner}/{repo}' was not found.")

            try:
                page, has_next_page, end_cursor = self._parse_releases_page(owner, repo, repository)
            except (AttributeError, TypeError, ValueError) as exc:
                raise FetchError(
                    f"GitHub GraphQL API returned a malformed releases payload for '{owner}/{repo}'"
                ) from exc

            releases.extend(page)
            if not has_next_page:
                break

            if not end_cursor:
                raise FetchError(
                    f"GitHub GraphQL API reported another releases page for '{owner}/{repo}' "
                    "without an end cursor"
                )
            after = end_cursor

        logger.debug(
            "Fetched releases",
            extra={"repo": f"{owner}/{repo}", "release_count": len(releases)},
        )
        return releases
