"""GitHub GraphQL API client using httpx."""

import logging
from typing import Any

import httpx

from .. import __version__
from .config import GitHubConfig
from .errors import GitHubGraphQLError

logger = logging.getLogger(__name__)

RATE_LIMIT_WARNING_THRESHOLD = 10


class GitHubGraphQLClient:
    """GitHub GraphQL client with token authentication.

    Implements the ``GraphQLTransport`` protocol used by the issue search:
    one ``query`` call per request, no retries.
    """

    def __init__(
        self,
        token: str | None = None,
        config: GitHubConfig | None = None,
        transport: httpx.BaseTransport | None = None,
    ):
        """Initialize GitHub client with authentication.

        Args:
            token: GitHub personal access token. If None, reads from
                GITHUB_TOKEN env var.
            config: Explicit configuration; built from the environment if None
            transport: httpx transport override, mainly for tests
        """
        self.config = config or GitHubConfig(token=token)
        self.config.validate()

        self._http = httpx.Client(
            headers={
                "Authorization": f"Bearer {self.config.token}",
                "User-Agent": f"github-issue-frames/{__version__}",
                "Accept": "application/json",
            },
            timeout=self.config.timeout,
            transport=transport,
        )

    def __enter__(self) -> "GitHubGraphQLClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        """Close the underlying HTTP connection pool."""
        self._http.close()

    def query(self, document: str, variables: dict[str, Any]) -> dict[str, Any]:
        """Execute a GraphQL document and return its ``data`` object.

        Args:
            document: GraphQL query text
            variables: Values for the document's variables

        Returns:
            The ``data`` object of the response

        Raises:
            GitHubGraphQLError: On HTTP, network or GraphQL level failure
        """
        try:
            response = self._http.post(
                self.config.graphql_url,
                json={"query": document, "variables": variables},
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            raise GitHubGraphQLError(
                f"GitHub GraphQL request failed with status {status}", status=status
            ) from e
        except httpx.HTTPError as e:
            raise GitHubGraphQLError(f"GitHub GraphQL request failed: {e}") from e

        try:
            payload = response.json()
        except ValueError as e:
            raise GitHubGraphQLError(
                "GitHub GraphQL response is not valid JSON",
                status=response.status_code,
            ) from e

        errors = payload.get("errors")
        if errors:
            messages = "; ".join(
                err.get("message", str(err)) if isinstance(err, dict) else str(err)
                for err in errors
            )
            raise GitHubGraphQLError(
                f"GitHub GraphQL errors: {messages}", status=response.status_code
            )

        data = payload.get("data") or {}
        self._log_rate_limit(data.get("rateLimit"))
        return data

    def _log_rate_limit(self, rate_limit: dict[str, Any] | None) -> None:
        """Log the remaining GraphQL budget reported with a response."""
        if not rate_limit:
            return
        remaining = rate_limit.get("remaining")
        if remaining is None:
            return
        if remaining < RATE_LIMIT_WARNING_THRESHOLD:
            logger.warning(
                "GitHub GraphQL rate limit low: %s remaining, resets at %s",
                remaining,
                rate_limit.get("resetAt"),
            )
        else:
            logger.debug("GitHub GraphQL rate limit: %s remaining", remaining)
