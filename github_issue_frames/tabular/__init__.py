"""Conversion of issue lists into columnar tables."""

from .converter import ISSUE_COLUMNS, frame_records, issues_to_frame

__all__ = ["ISSUE_COLUMNS", "frame_records", "issues_to_frame"]
