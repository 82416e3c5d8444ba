"""Pydantic models for GitHub GraphQL issue search results.

These models map to the shapes returned by GitHub's GraphQL v4 ``search``
connection when it is queried with ``type: ISSUE``.
API Reference: https://docs.github.com/en/graphql/reference/queries#search
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class TimeField(str, Enum):
    """Issue timestamp that a search time range is applied to.

    The value is the search qualifier name understood by GitHub search.
    """

    CREATED = "created"
    CLOSED = "closed"
    UPDATED = "updated"


class ListIssuesOptions(BaseModel):
    """Options selecting which issues of a repository are listed."""

    model_config = ConfigDict(frozen=True)

    owner: str = Field(..., description="Repository owner login (user or org)")
    repository: str = Field(..., description="Repository name")
    time_field: TimeField = Field(
        TimeField.CREATED, description="Timestamp the time range filters on"
    )
    query: str | None = Field(
        None, description="Extra search qualifiers appended verbatim"
    )


class TimeRange(BaseModel):
    """Time window for a search. Naive datetimes are taken as UTC."""

    model_config = ConfigDict(frozen=True)

    start: datetime = Field(..., description="Start of the range")
    end: datetime = Field(..., description="End of the range")

    @field_validator("start", "end")
    @classmethod
    def assume_utc(cls, v: datetime) -> datetime:
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v


class IssueAuthor(BaseModel):
    """Issue author as seen through the ``... on User`` fragment.

    Bots and deleted accounts do not match the fragment and come back as an
    empty object, so every field has a default.
    """

    model_config = ConfigDict(frozen=True)

    login: str = Field("", description="GitHub username/login (string)")
    company: str | None = Field(None, description="Company from the user profile")


class IssueRepository(BaseModel):
    """Repository an issue belongs to.

    GraphQL returns ``{name, owner: {login}}``; the owner login is flattened.
    """

    model_config = ConfigDict(frozen=True)

    owner_login: str = Field(..., description="Login of the repository owner")
    name: str = Field(..., description="Repository name")

    @model_validator(mode="before")
    @classmethod
    def flatten_owner(cls, data: Any) -> Any:
        if isinstance(data, dict) and "owner" in data:
            owner = data.get("owner") or {}
            data = {**data, "owner_login": owner.get("login", "")}
        return data

    @property
    def full_name(self) -> str:
        return f"{self.owner_login}/{self.name}"


class Issue(BaseModel):
    """GitHub issue as returned by the search connection.

    ``closed_at`` is ``None`` for issues that were never closed. GitHub's
    zero timestamp (``0001-01-01T00:00:00Z``) is treated the same as ``null``
    and never reaches callers.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    number: int = Field(..., description="Issue number within the repository")
    title: str = Field(..., description="Title of the issue")
    created_at: datetime = Field(
        ..., alias="createdAt", description="Timestamp of issue creation"
    )
    closed_at: datetime | None = Field(
        None, alias="closedAt", description="Timestamp the issue was closed"
    )
    closed: bool = Field(False, description="Whether the issue is closed")
    author: IssueAuthor = Field(default_factory=IssueAuthor)
    repository: IssueRepository

    @field_validator("author", mode="before")
    @classmethod
    def missing_author(cls, v: Any) -> Any:
        # Ghost (deleted) users come back as null.
        return {} if v is None else v

    @field_validator("closed_at")
    @classmethod
    def zero_closed_at_is_absent(cls, v: datetime | None) -> datetime | None:
        if v is not None and v.replace(tzinfo=None) == datetime.min:
            return None
        return v

    @property
    def repo_full_name(self) -> str:
        """Repository identifier in ``owner/name`` form."""
        return self.repository.full_name


Issues = list[Issue]


class SearchNodeKind(str, Enum):
    """Members of GitHub's ``SearchResultItem`` union, keyed by __typename."""

    APP = "App"
    DISCUSSION = "Discussion"
    ISSUE = "Issue"
    MARKETPLACE_LISTING = "MarketplaceListing"
    ORGANIZATION = "Organization"
    PULL_REQUEST = "PullRequest"
    REPOSITORY = "Repository"
    USER = "User"
    UNKNOWN = "Unknown"


class SearchNode(BaseModel):
    """One search result, tagged with the union member it represents."""

    model_config = ConfigDict(frozen=True)

    kind: SearchNodeKind = SearchNodeKind.UNKNOWN
    payload: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_payload(cls, data: dict[str, Any] | None) -> "SearchNode":
        """Tag a raw GraphQL node using its ``__typename``.

        Raises:
            ValueError: If the node is neither an object nor null
        """
        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ValueError(
                f"Search node must be an object, got {type(data).__name__}"
            )
        try:
            kind = SearchNodeKind(data.get("__typename"))
        except ValueError:
            kind = SearchNodeKind.UNKNOWN
        return cls(kind=kind, payload=data)

    def as_issue(self) -> Issue | None:
        """Return the issue carried by this node, or None for other kinds."""
        if self.kind is not SearchNodeKind.ISSUE:
            return None
        return Issue.model_validate(self.payload)


class PageInfo(BaseModel):
    """Cursor information for one page of a connection."""

    model_config = ConfigDict(populate_by_name=True)

    has_next_page: bool = Field(False, alias="hasNextPage")
    end_cursor: str | None = Field(None, alias="endCursor")


class SearchPage(BaseModel):
    """One page of the ``search`` connection."""

    model_config = ConfigDict(populate_by_name=True)

    issue_count: int = Field(0, alias="issueCount")
    nodes: list[SearchNode] = Field(default_factory=list)
    page_info: PageInfo = Field(..., alias="pageInfo")

    @field_validator("nodes", mode="before")
    @classmethod
    def tag_nodes(cls, v: Any) -> Any:
        if v is None:
            return []
        return [
            node if isinstance(node, SearchNode) else SearchNode.from_payload(node)
            for node in v
        ]

    @classmethod
    def from_response(cls, data: dict[str, Any] | None) -> "SearchPage":
        """Build a page from the ``data`` object of a GraphQL response.

        Raises:
            ValueError: If the payload is not an object, lacks a ``search``
                object or does not validate
        """
        if not isinstance(data, dict | None):
            raise ValueError(
                f"GraphQL response data must be an object, got {type(data).__name__}"
            )
        search = (data or {}).get("search")
        if search is None:
            raise ValueError("GraphQL response has no 'search' object")
        return cls.model_validate(search)

    def issues(self) -> Issues:
        """Issue-typed nodes of this page, in server order."""
        issues = []
        for node in self.nodes:
            issue = node.as_issue()
            if issue is not None:
                issues.append(issue)
        return issues
