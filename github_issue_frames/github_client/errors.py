"""Exceptions raised by the GitHub client and the issue search."""


class GitHubGraphQLError(RuntimeError):
    """A GraphQL request failed.

    Covers HTTP errors, network failures, timeouts, unparseable bodies and
    responses carrying a GraphQL ``errors`` array.
    """

    def __init__(self, message: str, *, status: int | None = None):
        super().__init__(message)
        self.status = status


class IssueSearchError(RuntimeError):
    """A paginated issue search was abandoned.

    Args:
        message: Description of the failure
        page: 1-based number of the page that was being requested
        cursor: Cursor sent with that page request (None for the first page)
    """

    def __init__(self, message: str, *, page: int, cursor: str | None):
        super().__init__(message)
        self.page = page
        self.cursor = cursor


class SearchCancelledError(IssueSearchError):
    """The search was cancelled before a page request."""


class SearchResponseError(IssueSearchError):
    """A page came back in a shape the search cannot use."""
