"""Test configuration and fixtures."""

from collections.abc import Callable
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import pytest

from github_issue_frames.github_client.models import (
    ListIssuesOptions,
    TimeField,
    TimeRange,
)

IssueNodeFactory = Callable[..., dict[str, Any]]


class StubTransport:
    """Scripted GraphQL transport.

    Each call pops the next scripted item: a dict is returned as the
    response ``data``, an exception instance is raised.
    """

    def __init__(self, responses: list[Any]):
        self.responses = list(responses)
        self.calls: list[dict[str, Any]] = []

    def query(self, document: str, variables: dict[str, Any]) -> dict[str, Any]:
        self.calls.append(dict(variables))
        item = self.responses.pop(0)
        if isinstance(item, BaseException):
            raise item
        return item


@pytest.fixture
def temp_data_dir(tmp_path: Path) -> Path:
    """Create temporary data directory structure."""
    data_dir = tmp_path / "data"
    (data_dir / "tables").mkdir(parents=True)
    return data_dir


@pytest.fixture
def list_options() -> ListIssuesOptions:
    return ListIssuesOptions(
        owner="acme", repository="widgets", time_field=TimeField.CREATED
    )


@pytest.fixture
def time_range() -> TimeRange:
    return TimeRange(
        start=datetime(2024, 1, 1, tzinfo=timezone.utc),
        end=datetime(2024, 2, 1, tzinfo=timezone.utc),
    )


@pytest.fixture
def issue_node() -> IssueNodeFactory:
    """Factory for GraphQL ``... on Issue`` search nodes."""

    def _make(
        number: int = 1,
        title: str | None = None,
        closed_at: str | None = None,
        login: str = "octocat",
        company: str | None = None,
        owner: str = "acme",
        name: str = "widgets",
    ) -> dict[str, Any]:
        return {
            "__typename": "Issue",
            "number": number,
            "title": title if title is not None else f"Issue {number}",
            "createdAt": "2024-01-05T12:00:00Z",
            "closedAt": closed_at,
            "closed": closed_at is not None,
            "author": {"login": login, "company": company},
            "repository": {"name": name, "owner": {"login": owner}},
        }

    return _make


@pytest.fixture
def search_response() -> Callable[..., dict[str, Any]]:
    """Factory for the ``data`` object of one search page."""

    def _make(
        nodes: list[dict[str, Any]],
        has_next_page: bool = False,
        end_cursor: str | None = None,
    ) -> dict[str, Any]:
        return {
            "rateLimit": {"remaining": 4999, "resetAt": "2024-01-01T01:00:00Z"},
            "search": {
                "issueCount": len(nodes),
                "pageInfo": {"hasNextPage": has_next_page, "endCursor": end_cursor},
                "nodes": nodes,
            },
        }

    return _make


@pytest.fixture
def stub_transport() -> Callable[[list[Any]], StubTransport]:
    """Factory for scripted transports."""
    return StubTransport
