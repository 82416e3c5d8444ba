"""GitHub client package for GraphQL issue search."""

from .client import GitHubGraphQLClient
from .config import GitHubConfig
from .errors import (
    GitHubGraphQLError,
    IssueSearchError,
    SearchCancelledError,
    SearchResponseError,
)
from .models import (
    Issue,
    IssueAuthor,
    IssueRepository,
    Issues,
    ListIssuesOptions,
    PageInfo,
    SearchNode,
    SearchNodeKind,
    SearchPage,
    TimeField,
    TimeRange,
)
from .search import (
    PAGE_SIZE,
    GraphQLTransport,
    IssuePaginator,
    IssueSearcher,
    PaginationState,
    build_search_filter,
    format_timestamp,
    get_issues_in_range,
)

__all__ = [
    "GitHubConfig",
    "GitHubGraphQLClient",
    "GitHubGraphQLError",
    "GraphQLTransport",
    "Issue",
    "IssueAuthor",
    "IssuePaginator",
    "IssueRepository",
    "IssueSearchError",
    "IssueSearcher",
    "Issues",
    "ListIssuesOptions",
    "PAGE_SIZE",
    "PageInfo",
    "PaginationState",
    "SearchCancelledError",
    "SearchNode",
    "SearchNodeKind",
    "SearchPage",
    "SearchResponseError",
    "TimeField",
    "TimeRange",
    "build_search_filter",
    "format_timestamp",
    "get_issues_in_range",
]
