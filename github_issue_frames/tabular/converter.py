"""Convert issues into a fixed-schema pandas DataFrame."""

from collections.abc import Iterable
from typing import Any

import pandas as pd

from ..github_client.models import Issue

FRAME_NAME = "issues"

# Column name -> pandas dtype, in output order.
ISSUE_COLUMNS: dict[str, str] = {
    "title": "string",
    "author": "string",
    "author_company": "string",
    "repo": "string",
    "number": "int64",
    "closed": "bool",
    "created_at": "datetime64[ns, UTC]",
    "closed_at": "datetime64[ns, UTC]",
}

_TIMESTAMP_COLUMNS = ("created_at", "closed_at")


def _issue_row(issue: Issue) -> dict[str, Any]:
    return {
        "title": issue.title,
        "author": issue.author.login,
        "author_company": issue.author.company,
        "repo": issue.repo_full_name,
        "number": issue.number,
        "closed": issue.closed,
        "created_at": issue.created_at,
        "closed_at": issue.closed_at,
    }


def issues_to_frame(issues: Iterable[Issue]) -> pd.DataFrame:
    """Convert issues into a DataFrame with one row per issue.

    Rows keep the input order. A missing author company is ``<NA>`` and an
    issue that was never closed has ``NaT`` in ``closed_at``. Every call
    builds a new frame; empty input gives an empty frame with the same
    columns and dtypes.

    Args:
        issues: Issues in the order they should appear

    Returns:
        DataFrame with the columns of ISSUE_COLUMNS
    """
    frame = pd.DataFrame(
        [_issue_row(issue) for issue in issues], columns=list(ISSUE_COLUMNS)
    )
    for column in _TIMESTAMP_COLUMNS:
        frame[column] = pd.to_datetime(frame[column], utc=True)
    frame = frame.astype(ISSUE_COLUMNS)
    frame.attrs["name"] = FRAME_NAME
    return frame


def frame_records(frame: pd.DataFrame) -> list[dict[str, Any]]:
    """Rows of a frame as dicts, with ``None`` for absent cells."""
    records = []
    for row in frame.itertuples(index=False, name=None):
        records.append(
            {
                column: None if pd.isna(value) else value
                for column, value in zip(frame.columns, row)
            }
        )
    return records
