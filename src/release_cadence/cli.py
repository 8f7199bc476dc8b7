"""Command-line argument parsing for the release cadence report."""

from __future__ import annotations

import argparse
from typing import List, Optional, Sequence

from .config import DEFAULT_API_URL


def _positive_int(value: str) -> int:
    """Parse and validate a positive integer CLI value.

    Args:
        value: Raw command-line argument value.

    Returns:
        The validated positive integer.

    Raises:
        argparse.ArgumentTypeError: If value is not a positive integer.
    """
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError("must be an integer") from exc

    if parsed <= 0:
        raise argparse.ArgumentTypeError("must be greater than 0")

    return parsed


def _comma_separated(value: str) -> List[str]:
    """Split a comma-separated flag value, dropping blank entries."""
    return [item.strip() for item in value.split(",") if item.strip()]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="release-cadence",
        description=(
            "Report how many days pass between x.y.0 releases of GitHub "
            "repositories (min, average, max and standard deviation)."
        ),
    )

    parser.add_argument(
        "--owner",
        default=None,
        help="Default owner to use for repos not in the OWNER/NAME format.",
    )
    parser.add_argument(
        "--repos",
        type=_comma_separated,
        action="extend",
        default=[],
        help=(
            "List of repos to query. May specify as NAME or OWNER/NAME. "
            "If OWNER is omitted, falls back to --owner. Comma-separated and repeatable."
        ),
    )
    parser.add_argument(
        "--timeout",
        type=_positive_int,
        default=30,
        help="Per-request timeout in seconds (default: 30).",
    )
    parser.add_argument(
        "--api-url",
        default=DEFAULT_API_URL,
        help=f"GitHub GraphQL endpoint (default: {DEFAULT_API_URL}).",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging.",
    )

    return parser


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments for the release cadence report.

    Returns:
        Parsed CLI arguments containing the default owner, the flattened list of
        repository identifiers, request timeout, API URL and verbosity.
    """
    return build_parser().parse_args(argv)
