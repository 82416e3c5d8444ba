"""Logging configuration for the command line interface."""

import logging

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def setup_logging(verbose: bool = False) -> None:
    """Send package log records to stderr.

    Args:
        verbose: Log at DEBUG level (per-page details) instead of WARNING
    """
    logger = logging.getLogger("github_issue_frames")
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)

    # Repeated invocations in one process must not stack handlers
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
