"""Release cadence report entry point."""

from __future__ import annotations

import logging
import sys
from typing import List, Optional, Sequence

from .cadence import compute_repo_stats
from .cli import build_parser, parse_args
from .config import Config, load_config, resolve_repository
from .errors import ConfigurationError, FetchError, NoQualifyingDataError, ResolutionError
from .github_client import GitHubClient
from .models import RepoStats
from .stats import generate_report

logger = logging.getLogger(__name__)

EXIT_SUCCESS = 0
EXIT_FAILURE = 1


def configure_logging(verbose: bool = False) -> None:
    """Send diagnostics to stderr so stdout only carries the report."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def get_repo_stats(client: GitHubClient, owner: str, repo: str) -> RepoStats:
    """Fetch releases for one repository and reduce them to ``RepoStats``.

    Raises:
        FetchError: If the release history cannot be retrieved.
        NoQualifyingDataError: If no interval between x.y.0 releases exists.
    """
    logger.info("Getting stats for %s/%s", owner, repo)
    releases = client.list_releases(owner, repo)

    stats = compute_repo_stats(owner, repo, releases)
    if stats is None:
        raise NoQualifyingDataError(f"No x.y.0 release intervals found for {owner}/{repo}")

    return stats


def collect_repo_stats(client: GitHubClient, config: Config) -> List[RepoStats]:
    """Process every configured repository in order, skipping failures."""
    collected: List[RepoStats] = []

    for identifier in config.repos:
        try:
            ref = resolve_repository(identifier, config.default_owner)
        except ResolutionError as exc:
            logger.warning("%s", exc)
            continue

        try:
            collected.append(get_repo_stats(client, ref.owner, ref.repo))
        except FetchError as exc:
            logger.error("Error getting stats for %s: %s", ref.full_name, exc)
        except NoQualifyingDataError as exc:
            logger.warning("%s - skipping", exc)

    return collected


def orchestrate_report(argv: Optional[Sequence[str]] = None) -> int:
    """Run the report and return a process exit code."""
    try:
        args = parse_args(argv)
        configure_logging(args.verbose)

        try:
            config = load_config(
                default_owner=args.owner,
                repos=args.repos,
                api_url=args.api_url,
            )
        except ConfigurationError as exc:
            logger.error("%s", exc)
            build_parser().print_usage(sys.stderr)
            return EXIT_FAILURE

        client = GitHubClient(config=config, timeout_seconds=args.timeout)
        try:
            repo_stats = collect_repo_stats(client, config)
        finally:
            client.close()

        print(generate_report(repo_stats))
        return EXIT_SUCCESS
    except Exception:
        logger.exception("Unexpected error while generating the release cadence report")
        return EXIT_FAILURE


def main() -> None:
    sys.exit(orchestrate_report())


if __name__ == "__main__":
    main()
