"""GitHub issue search: query building and cursor pagination."""

import logging
import threading
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Protocol

from .errors import IssueSearchError, SearchCancelledError, SearchResponseError
from .models import Issues, ListIssuesOptions, SearchPage, TimeRange
from .queries import SEARCH_ISSUES_QUERY

logger = logging.getLogger(__name__)

# GitHub caps search connections at 100 nodes per page.
PAGE_SIZE = 100


class GraphQLTransport(Protocol):
    """Anything that can execute a GraphQL document.

    Implementations return the ``data`` object of the response and raise on
    any failure. ``GitHubGraphQLClient`` is the production implementation.
    """

    def query(self, document: str, variables: dict[str, Any]) -> dict[str, Any]: ...


def format_timestamp(dt: datetime) -> str:
    """Format a datetime for a GitHub search range qualifier.

    Uses RFC 3339 with second precision. Naive datetimes are taken as UTC,
    and UTC is written as ``Z``.

    Example:
        >>> format_timestamp(datetime(2024, 1, 1, tzinfo=timezone.utc))
        '2024-01-01T00:00:00Z'
    """
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    text = dt.replace(microsecond=0).isoformat()
    if text.endswith("+00:00"):
        text = text[: -len("+00:00")] + "Z"
    return text


def build_search_filter(opts: ListIssuesOptions, time_range: TimeRange) -> str:
    """Build the GitHub search query for issues of one repository in a range.

    Args:
        opts: Repository scope, time field and optional extra qualifiers
        time_range: Range applied to ``opts.time_field``

    Returns:
        GitHub search query string

    Example:
        >>> build_search_filter(
        ...     ListIssuesOptions(owner="grafana", repository="grafana"),
        ...     TimeRange(start=datetime(2020, 8, 19), end=datetime(2020, 9, 1)),
        ... )
        'is:issue repo:grafana/grafana created:2020-08-19T00:00:00Z..2020-09-01T00:00:00Z'
    """
    query_parts = [
        "is:issue",
        f"repo:{opts.owner}/{opts.repository}",
        f"{opts.time_field.value}:{format_timestamp(time_range.start)}"
        f"..{format_timestamp(time_range.end)}",
    ]

    if opts.query is not None:
        query_parts.append(opts.query)

    return " ".join(query_parts)


class PaginationState(str, Enum):
    """States of an issue search."""

    REQUESTING = "requesting"
    HAS_MORE = "has_more"
    DONE = "done"
    FAILED = "failed"


class IssuePaginator:
    """Walks every page of one issue search.

    Each ``step`` requests exactly one page using the cursor left by the
    previous page, so requests are strictly sequential. A failed step
    discards everything gathered so far; a search is restarted with a new
    paginator.

    The cancel event is checked before each request and again when a request
    returns. A request already in flight is not interrupted: it runs until
    the transport answers or its timeout (``GITHUB_TIMEOUT``) expires, and
    its page is then discarded.
    """

    def __init__(
        self,
        transport: GraphQLTransport,
        search_filter: str,
        cancel_event: threading.Event | None = None,
        page_size: int = PAGE_SIZE,
    ):
        """Initialize paginator.

        Args:
            transport: GraphQL transport used for every page request
            search_filter: GitHub search query string
            cancel_event: When set, the next page request is not made and the
                search fails with SearchCancelledError
            page_size: Nodes requested per page
        """
        self.transport = transport
        self.search_filter = search_filter
        self.cancel_event = cancel_event
        self.page_size = page_size

        self.state = PaginationState.REQUESTING
        self.cursor: str | None = None
        self.pages_fetched = 0
        self._issues: Issues = []

    @property
    def finished(self) -> bool:
        return self.state in (PaginationState.DONE, PaginationState.FAILED)

    @property
    def issues(self) -> Issues:
        """Copy of the issues accumulated so far."""
        return list(self._issues)

    def step(self) -> PaginationState:
        """Request the next page and return the resulting state.

        Raises:
            IssueSearchError: If the page request or its payload failed. On
                this or any other error the paginator is left in the FAILED
                state with no issues.
            RuntimeError: If the search already finished
        """
        if self.finished:
            raise RuntimeError(
                f"Cannot request another page, search is {self.state.value}"
            )

        self.state = PaginationState.REQUESTING
        page_number = self.pages_fetched + 1

        try:
            page, issues = self._request_page(page_number)
        except Exception:
            self.state = PaginationState.FAILED
            self._issues = []
            raise

        self.pages_fetched = page_number
        self._issues.extend(issues)
        logger.debug(
            "Page %d: %d issues, %d other nodes skipped (cursor=%s)",
            page_number,
            len(issues),
            len(page.nodes) - len(issues),
            self.cursor,
        )

        if page.page_info.has_next_page:
            self.cursor = page.page_info.end_cursor
            self.state = PaginationState.HAS_MORE
        else:
            self.state = PaginationState.DONE
        return self.state

    def run(self) -> Issues:
        """Step until the last page and return all issues in server order."""
        while self.step() is PaginationState.HAS_MORE:
            pass
        return self.issues

    def _check_cancelled(self, page_number: int, when: str) -> None:
        if self.cancel_event is not None and self.cancel_event.is_set():
            raise SearchCancelledError(
                f"Issue search cancelled {when} page {page_number}",
                page=page_number,
                cursor=self.cursor,
            )

    def _request_page(self, page_number: int) -> tuple[SearchPage, Issues]:
        self._check_cancelled(page_number, "before")

        variables: dict[str, Any] = {
            "query": self.search_filter,
            "first": self.page_size,
            "cursor": self.cursor,
        }

        try:
            data = self.transport.query(SEARCH_ISSUES_QUERY, variables)
        except Exception as e:
            raise IssueSearchError(
                f"Failed to fetch page {page_number} of issue search: {e}",
                page=page_number,
                cursor=self.cursor,
            ) from e

        self._check_cancelled(page_number, "while fetching")

        try:
            page = SearchPage.from_response(data)
            issues = page.issues()
        except ValueError as e:
            raise SearchResponseError(
                f"Malformed search response on page {page_number}: {e}",
                page=page_number,
                cursor=self.cursor,
            ) from e

        if page.page_info.has_next_page and not page.page_info.end_cursor:
            raise SearchResponseError(
                f"Page {page_number} reports another page but no end cursor",
                page=page_number,
                cursor=self.cursor,
            )

        return page, issues


def get_issues_in_range(
    transport: GraphQLTransport,
    opts: ListIssuesOptions,
    time_range: TimeRange,
    cancel_event: threading.Event | None = None,
) -> Issues:
    """List all issues of a repository whose time field falls in a range.

    Args:
        transport: GraphQL transport
        opts: Repository scope, time field and optional extra qualifiers
        time_range: Range applied to ``opts.time_field``
        cancel_event: Optional cancellation flag checked before each page

    Returns:
        Every matching issue, first page first, in server order

    Raises:
        IssueSearchError: If any page fails. No partial result is returned.
    """
    search_filter = build_search_filter(opts, time_range)
    logger.debug("Searching issues with query: %s", search_filter)

    paginator = IssuePaginator(transport, search_filter, cancel_event=cancel_event)
    issues = paginator.run()

    logger.info(
        "Fetched %d issues for %s/%s in %d pages",
        len(issues),
        opts.owner,
        opts.repository,
        paginator.pages_fetched,
    )
    return issues


class IssueSearcher:
    """High-level interface for searching GitHub issues."""

    def __init__(self, client: GraphQLTransport):
        """Initialize searcher with a GraphQL client.

        Args:
            client: Authenticated GitHubGraphQLClient or other transport
        """
        self.client = client

    def search_issues(
        self,
        opts: ListIssuesOptions,
        time_range: TimeRange,
        cancel_event: threading.Event | None = None,
    ) -> Issues:
        """Search for issues of one repository within a time range.

        Args:
            opts: Repository scope, time field and optional extra qualifiers
            time_range: Range applied to ``opts.time_field``
            cancel_event: Optional cancellation flag checked before each page

        Returns:
            List of Issue objects across all result pages
        """
        return get_issues_in_range(
            self.client, opts, time_range, cancel_event=cancel_event
        )
