"""Tests for GitHub GraphQL client."""

import json
import logging
import os
from collections.abc import Callable
from typing import Any
from unittest.mock import patch

import httpx
import pytest

from github_issue_frames.github_client.client import GitHubGraphQLClient
from github_issue_frames.github_client.config import DEFAULT_GRAPHQL_URL, GitHubConfig
from github_issue_frames.github_client.errors import GitHubGraphQLError
from github_issue_frames.github_client.models import ListIssuesOptions, TimeRange
from github_issue_frames.github_client.search import get_issues_in_range

Handler = Callable[[httpx.Request], httpx.Response]


def _client(handler: Handler, token: str = "test_token") -> GitHubGraphQLClient:
    return GitHubGraphQLClient(token=token, transport=httpx.MockTransport(handler))


class TestGitHubConfig:
    """Test GitHubConfig class."""

    @patch.dict(os.environ, {"GITHUB_TOKEN": "env_token"}, clear=True)
    def test_env_token(self) -> None:
        config = GitHubConfig()
        assert config.token == "env_token"
        assert config.graphql_url == DEFAULT_GRAPHQL_URL
        assert config.timeout == 30.0
        assert config.is_configured()

    @patch.dict(os.environ, {"GITHUB_TOKEN": "env_token"}, clear=True)
    def test_explicit_token_wins(self) -> None:
        assert GitHubConfig(token="explicit").token == "explicit"

    @patch.dict(
        os.environ,
        {"GITHUB_GRAPHQL_URL": "https://ghe.example.com/api/graphql", "GITHUB_TIMEOUT": "5"},
        clear=True,
    )
    def test_overrides(self) -> None:
        config = GitHubConfig(token="t")
        assert config.graphql_url == "https://ghe.example.com/api/graphql"
        assert config.timeout == 5.0

    @patch.dict(os.environ, {"GITHUB_TIMEOUT": "soon"}, clear=True)
    def test_invalid_timeout(self) -> None:
        with pytest.raises(ValueError, match="GITHUB_TIMEOUT"):
            GitHubConfig(token="t")

    @patch.dict(os.environ, {}, clear=True)
    def test_validate_without_token(self) -> None:
        config = GitHubConfig()
        assert not config.is_configured()
        with pytest.raises(ValueError, match="GitHub token is required"):
            config.validate()


class TestGitHubGraphQLClient:
    """Test GitHubGraphQLClient class."""

    @patch.dict(os.environ, {}, clear=True)
    def test_init_without_token(self) -> None:
        with pytest.raises(ValueError, match="GitHub token is required"):
            GitHubGraphQLClient()

    def test_query_posts_document_and_variables(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"data": {"search": {"issueCount": 0}}})

        with _client(handler) as client:
            data = client.query("query { x }", {"query": "is:issue", "cursor": None})

        assert data == {"search": {"issueCount": 0}}
        request = seen[0]
        assert request.method == "POST"
        assert str(request.url) == DEFAULT_GRAPHQL_URL
        assert request.headers["Authorization"] == "Bearer test_token"
        assert json.loads(request.content) == {
            "query": "query { x }",
            "variables": {"query": "is:issue", "cursor": None},
        }

    def test_http_error_status(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(401, json={"message": "Bad credentials"})

        with _client(handler) as client:
            with pytest.raises(GitHubGraphQLError, match="status 401") as exc_info:
                client.query("query { x }", {})

        assert exc_info.value.status == 401

    def test_network_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with _client(handler) as client:
            with pytest.raises(GitHubGraphQLError, match="connection refused"):
                client.query("query { x }", {})

    def test_timeout(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        with _client(handler) as client:
            with pytest.raises(GitHubGraphQLError) as exc_info:
                client.query("query { x }", {})

        assert exc_info.value.status is None
        assert isinstance(exc_info.value.__cause__, httpx.ReadTimeout)

    def test_graphql_errors(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                200,
                json={
                    "data": None,
                    "errors": [
                        {"message": "Field 'foo' doesn't exist"},
                        {"message": "Something else"},
                    ],
                },
            )

        with _client(handler) as client:
            with pytest.raises(
                GitHubGraphQLError, match="Field 'foo' doesn't exist; Something else"
            ):
                client.query("query { x }", {})

    def test_invalid_json(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, content=b"<html>oops</html>")

        with _client(handler) as client:
            with pytest.raises(GitHubGraphQLError, match="not valid JSON"):
                client.query("query { x }", {})

    def test_missing_data_returns_empty(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={})

        with _client(handler) as client:
            assert client.query("query { x }", {}) == {}

    def test_low_rate_limit_warns(self, caplog: pytest.LogCaptureFixture) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                200,
                json={
                    "data": {
                        "rateLimit": {"remaining": 3, "resetAt": "2024-01-01T01:00:00Z"}
                    }
                },
            )

        with caplog.at_level(logging.WARNING, logger="github_issue_frames"):
            with _client(handler) as client:
                client.query("query { x }", {})

        assert "rate limit low: 3 remaining" in caplog.text

    def test_implements_search_transport(
        self, issue_node: Any, search_response: Any
    ) -> None:
        pages = [
            search_response([issue_node(number=1)], has_next_page=True, end_cursor="c1"),
            search_response([issue_node(number=2)]),
        ]
        cursors = []

        def handler(request: httpx.Request) -> httpx.Response:
            cursors.append(json.loads(request.content)["variables"]["cursor"])
            return httpx.Response(200, json={"data": pages[len(cursors) - 1]})

        with _client(handler) as client:
            issues = get_issues_in_range(
                client,
                ListIssuesOptions(owner="acme", repository="widgets"),
                TimeRange.model_validate(
                    {"start": "2024-01-01T00:00:00Z", "end": "2024-02-01T00:00:00Z"}
                ),
            )

        assert [issue.number for issue in issues] == [1, 2]
        assert cursors == [None, "c1"]
