"""Tests for application orchestration in the main module."""

import logging
import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path
from unittest.mock import MagicMock, Mock, patch

# Add src directory to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from release_cadence.errors import FetchError
from release_cadence.main import orchestrate_report
from release_cadence.models import Release

_BASE = datetime(2024, 1, 1, tzinfo=timezone.utc)


def _releases(*days_and_names):
    return [Release(name=name, published_at=_BASE + timedelta(days=day)) for day, name in days_and_names]


def test_orchestrate_report_success_prints_rows_in_input_order(monkeypatch, capsys):
    """Verify orchestration returns 0 and reports every repository in input order."""
    monkeypatch.setenv("GITHUB_TOKEN", "secret")
    client = Mock()
    client.list_releases.side_effect = lambda owner, repo: {
        "zeta": _releases((0, "1.0.0"), (10, "2.0.0")),
        "alpha": _releases((0, "1.0.0"), (10, "1.1.0"), (40, "1.2.0")),
    }[repo]

    with patch("release_cadence.main.GitHubClient", return_value=client) as client_ctor_mock:
        exit_code = orchestrate_report(["--owner", "octo", "--repos", "zeta,other/alpha"])

    assert exit_code == 0
    client_ctor_mock.assert_called_once()
    assert client_ctor_mock.call_args.kwargs["timeout_seconds"] == 30
    assert client_ctor_mock.call_args.kwargs["config"].token == "secret"
    client.list_releases.assert_any_call("octo", "zeta")
    client.list_releases.assert_any_call("other", "alpha")
    client.close.assert_called_once_with()

    lines = capsys.readouterr().out.strip().split("\n")
    assert lines[0].startswith("Repo")
    assert lines[1].startswith("octo/zeta")
    assert lines[2].startswith("other/alpha")
    assert "20.00" in lines[2]


def test_orchestrate_report_skips_failing_repository(monkeypatch, capsys, caplog):
    """Verify an erroring repository is logged and only the valid one is reported."""
    monkeypatch.setenv("GITHUB_TOKEN", "secret")
    client = Mock()

    def _list_releases(owner, repo):
        if repo == "broken":
            raise FetchError("GitHub GraphQL request failed")
        return _releases((0, "1.0.0"), (7, "1.1.0"))

    client.list_releases.side_effect = _list_releases

    with patch("release_cadence.main.GitHubClient", return_value=client):
        exit_code = orchestrate_report(["--repos", "octo/broken,octo/widget"])

    assert exit_code == 0
    out = capsys.readouterr().out
    assert "octo/widget" in out
    assert "octo/broken" not in out
    assert "Error getting stats for octo/broken" in caplog.text


def test_orchestrate_report_skips_unresolvable_and_empty_repositories(monkeypatch, capsys, caplog):
    """Verify unresolvable identifiers and repos without x.y.0 intervals are skipped."""
    monkeypatch.setenv("GITHUB_TOKEN", "secret")
    client = Mock()
    client.list_releases.return_value = _releases((0, "1.0.0"), (3, "1.0.1"))

    with patch("release_cadence.main.GitHubClient", return_value=client):
        exit_code = orchestrate_report(["--repos", "widget,octo/patches-only"])

    assert exit_code == 0
    client.list_releases.assert_called_once_with("octo", "patches-only")
    out = capsys.readouterr().out.strip().split("\n")
    assert len(out) == 1
    assert out[0].startswith("Repo")
    assert "--owner is unset" in caplog.text
    assert "No x.y.0 release intervals found for octo/patches-only" in caplog.text


def test_orchestrate_report_without_repos_prints_usage_and_fails(capsys):
    """Verify zero repositories aborts before any client is created."""
    with patch("release_cadence.main.GitHubClient") as client_ctor_mock:
        exit_code = orchestrate_report(["--owner", "octo"])

    assert exit_code == 1
    client_ctor_mock.assert_not_called()
    captured = capsys.readouterr()
    assert "usage: release-cadence" in captured.err
    assert captured.out == ""


def test_orchestrate_report_unexpected_error_returns_generic_exit_code():
    """Verify unexpected exceptions are mapped to the generic non-zero exit code."""
    with patch("release_cadence.main.parse_args", side_effect=RuntimeError("boom")):
        exit_code = orchestrate_report()

    assert exit_code == 1


def _graphql_response(nodes):
    response = Mock()
    response.status_code = 200
    response.text = ""
    response.json.return_value = {
        "data": {
            "repository": {
                "releases": {
                    "nodes": nodes,
                    "pageInfo": {"hasNextPage": False, "endCursor": None},
                }
            }
        }
    }
    return response


def test_orchestrate_report_malformed_payload_skips_only_that_repository(monkeypatch, capsys, caplog):
    """Verify a bad timestamp in one repository does not lose the other repository's row."""
    monkeypatch.setenv("GITHUB_TOKEN", "secret")
    session = MagicMock()
    session.post.side_effect = [
        _graphql_response([{"name": "1.0.0", "publishedAt": "garbage"}]),
        _graphql_response(
            [
                {"name": "1.0.0", "publishedAt": "2024-01-01T00:00:00Z"},
                {"name": "1.1.0", "publishedAt": "2024-01-11T00:00:00Z"},
            ]
        ),
    ]

    with patch("release_cadence.github_client.requests.Session", return_value=session):
        exit_code = orchestrate_report(["--repos", "octo/bad,octo/good"])

    assert exit_code == 0
    out = capsys.readouterr().out.strip().split("\n")
    assert len(out) == 2
    assert out[1].startswith("octo/good")
    assert "10.00" in out[1]
    assert "Error getting stats for octo/bad" in caplog.text


def test_orchestrate_report_fetch_error_names_resolved_repository(monkeypatch, caplog):
    """Verify fetch errors are reported with the resolved owner/repo name."""
    monkeypatch.setenv("GITHUB_TOKEN", "secret")
    client = Mock()
    client.list_releases.side_effect = FetchError("unreachable")

    with patch("release_cadence.main.GitHubClient", return_value=client):
        exit_code = orchestrate_report(["--owner", "octo", "--repos", "widget"])

    assert exit_code == 0
    assert "Error getting stats for octo/widget: unreachable" in caplog.text


def test_orchestrate_report_logs_missing_intervals_once(monkeypatch, caplog):
    """Verify a repository without x.y.0 intervals produces a single diagnostic naming it."""
    monkeypatch.setenv("GITHUB_TOKEN", "secret")
    caplog.set_level(logging.INFO)
    client = Mock()
    client.list_releases.return_value = _releases((0, "1.0.0"), (3, "1.0.1"))

    with patch("release_cadence.main.GitHubClient", return_value=client):
        orchestrate_report(["--repos", "octo/patches-only"])

    messages = [record.getMessage() for record in caplog.records if "x.y.0" in record.getMessage()]
    assert len(messages) == 1
    assert "octo/patches-only" in messages[0]
