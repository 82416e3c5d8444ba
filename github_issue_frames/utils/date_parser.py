"""Date parsing and validation utilities for issue search ranges."""

from datetime import datetime, timedelta, timezone

import typer

from ..github_client.models import TimeRange

DEFAULT_RANGE_DAYS = 30


def parse_date_input(date_str: str) -> datetime:
    """Parse various date formats into timezone-aware datetimes.

    Supports:
    - ISO dates: 2024-01-01, 2024-01-01T10:00:00Z, 2024-01-01T10:00:00+02:00
    - Common formats: January 1, 2024, Jan 1 2024

    Values without an explicit offset are taken as UTC.

    Args:
        date_str: Date string to parse

    Returns:
        Parsed timezone-aware datetime

    Raises:
        ValueError: If date format is not recognized
    """
    formats = [
        "%Y-%m-%d",  # 2024-01-01
        "%Y-%m-%dT%H:%M:%SZ",  # 2024-01-01T10:00:00Z
        "%Y-%m-%dT%H:%M:%S",  # 2024-01-01T10:00:00
        "%Y-%m-%dT%H:%M:%S%z",  # 2024-01-01T10:00:00+02:00
        "%B %d, %Y",  # January 1, 2024
        "%b %d, %Y",  # Jan 1, 2024
        "%B %d %Y",  # January 1 2024
        "%b %d %Y",  # Jan 1 2024
        "%Y/%m/%d",  # 2024/01/01
        "%m/%d/%Y",  # 01/01/2024
    ]

    for fmt in formats:
        try:
            parsed = datetime.strptime(date_str, fmt)
        except ValueError:
            continue
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=timezone.utc)
        return parsed

    raise ValueError(
        f"Unable to parse date '{date_str}'. "
        f"Supported formats include: YYYY-MM-DD, YYYY-MM-DDTHH:MM:SSZ, "
        f"'January 1, 2024', 'Jan 1 2024', MM/DD/YYYY"
    )


def validate_date_range(start: datetime, end: datetime) -> None:
    """Validate date range logic.

    Args:
        start: Start of the range
        end: End of the range

    Raises:
        ValueError: If the start is after the end
    """
    if start > end:
        raise ValueError(
            f"Start date ({start.strftime('%Y-%m-%d')}) must not be after "
            f"end date ({end.strftime('%Y-%m-%d')})"
        )

    # Future dates are allowed, GitHub simply has nothing there yet
    now = datetime.now(timezone.utc)
    if start > now:
        typer.echo(
            f"Warning: Start date {start.strftime('%Y-%m-%d')} is in the future",
            err=True,
        )


def relative_date_to_absolute(days: int, now: datetime | None = None) -> datetime:
    """Convert "last N days" into an absolute UTC datetime.

    Raises:
        ValueError: If days is not positive
    """
    if days <= 0:
        raise ValueError("Days must be a positive integer")
    now = now or datetime.now(timezone.utc)
    return now - timedelta(days=days)


def resolve_time_range(
    start: str | None = None,
    end: str | None = None,
    last_days: int | None = None,
    now: datetime | None = None,
) -> TimeRange:
    """Build a search time range from CLI style inputs.

    Args:
        start: Start date string
        end: End date string (defaults to now)
        last_days: Last N days ending now, cannot be combined with start/end
        now: Reference time, mainly for tests

    Returns:
        Validated TimeRange

    Raises:
        ValueError: If parameters are invalid or conflicting
    """
    now = now or datetime.now(timezone.utc)

    if last_days is not None:
        if start is not None or end is not None:
            raise ValueError("Cannot combine --last-days with --from/--to")
        return TimeRange(start=relative_date_to_absolute(last_days, now), end=now)

    try:
        start_dt = (
            parse_date_input(start)
            if start
            else now - timedelta(days=DEFAULT_RANGE_DAYS)
        )
    except ValueError as e:
        raise ValueError(f"Invalid --from date: {e}")

    try:
        end_dt = parse_date_input(end) if end else now
    except ValueError as e:
        raise ValueError(f"Invalid --to date: {e}")

    validate_date_range(start_dt, end_dt)
    return TimeRange(start=start_dt, end=end_dt)
