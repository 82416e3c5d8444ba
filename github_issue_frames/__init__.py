"""Paginated GitHub issue search converted into tabular frames."""

__version__ = "0.1.0"
