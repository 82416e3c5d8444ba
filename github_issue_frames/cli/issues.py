"""CLI command for listing GitHub issues as a table."""

import pandas as pd
import typer
from rich.console import Console
from rich.table import Table

from ..github_client.client import GitHubGraphQLClient
from ..github_client.errors import IssueSearchError
from ..github_client.models import ListIssuesOptions, TimeField, TimeRange
from ..github_client.search import IssueSearcher, build_search_filter
from ..storage.manager import SUPPORTED_FORMATS, TableStorage
from ..tabular.converter import frame_records, issues_to_frame
from ..utils.date_parser import resolve_time_range
from ..utils.logging_setup import setup_logging
from .options import (
    FORMAT_OPTION,
    FROM_OPTION,
    LAST_DAYS_OPTION,
    LIMIT_ROWS_OPTION,
    OUTPUT_DIR_OPTION,
    OWNER_OPTION,
    QUERY_OPTION,
    REPO_OPTION,
    TIME_FIELD_OPTION,
    TO_OPTION,
    TOKEN_OPTION,
    VERBOSE_OPTION,
)

console = Console()

OUTPUT_FORMATS = ("table", *SUPPORTED_FORMATS)


def _print_parameters(
    opts: ListIssuesOptions, time_range: TimeRange, search_filter: str
) -> None:
    params_table = Table(title="Search Parameters")
    params_table.add_column("Parameter", style="cyan")
    params_table.add_column("Value", style="green")

    params_table.add_row("Repository", f"{opts.owner}/{opts.repository}")
    params_table.add_row("Time Field", opts.time_field.value)
    params_table.add_row("From", time_range.start.isoformat())
    params_table.add_row("To", time_range.end.isoformat())
    params_table.add_row("Query", opts.query or "None")
    params_table.add_row("Search", search_filter)

    console.print(params_table)


def _print_frame(frame: pd.DataFrame, limit_rows: int) -> None:
    results_table = Table(title=f"Issues ({len(frame)} rows)")
    for column in frame.columns:
        justify = "right" if column == "number" else "left"
        results_table.add_column(column, justify=justify)

    for record in frame_records(frame.head(limit_rows)):
        results_table.add_row(*("" if v is None else str(v) for v in record.values()))

    console.print(results_table)
    if len(frame) > limit_rows:
        console.print(f"... {len(frame) - limit_rows} more rows not shown")


def issues(
    owner: str = OWNER_OPTION,
    repo: str = REPO_OPTION,
    time_field: TimeField = TIME_FIELD_OPTION,
    start: str | None = FROM_OPTION,
    end: str | None = TO_OPTION,
    last_days: int | None = LAST_DAYS_OPTION,
    query: str | None = QUERY_OPTION,
    output_format: str = FORMAT_OPTION,
    output_dir: str = OUTPUT_DIR_OPTION,
    limit_rows: int = LIMIT_ROWS_OPTION,
    token: str | None = TOKEN_OPTION,
    verbose: bool = VERBOSE_OPTION,
) -> None:
    """List issues of a repository within a time range.

    All result pages are fetched before anything is shown. With --format
    csv or json the table is written to --output-dir instead.

    Examples:
        github-issue-frames issues --owner grafana --repo grafana --last-days 7
        github-issue-frames issues -o grafana -r grafana --time-field closed \\
            --from 2024-01-01 --to 2024-02-01 -q "label:bug" --format csv
    """
    setup_logging(verbose)

    if output_format not in OUTPUT_FORMATS:
        console.print(
            f"❌ Error: Unsupported format '{output_format}'. "
            f"Use one of: {', '.join(OUTPUT_FORMATS)}."
        )
        raise typer.Exit(1)

    try:
        time_range = resolve_time_range(start=start, end=end, last_days=last_days)
        opts = ListIssuesOptions(
            owner=owner, repository=repo, time_field=time_field, query=query
        )
        _print_parameters(opts, time_range, build_search_filter(opts, time_range))

        console.print("🔑 Initializing GitHub client...")
        with GitHubGraphQLClient(token=token) as client:
            searcher = IssueSearcher(client)
            console.print("🔎 Searching for issues...")
            found = searcher.search_issues(opts, time_range)

    except ValueError as e:
        console.print(f"❌ Error: {e}")
        raise typer.Exit(1)
    except IssueSearchError as e:
        console.print(f"❌ Error: {e}")
        console.print("Please check your GitHub token and network connection.")
        raise typer.Exit(1)

    if not found:
        console.print("❌ No issues found matching the criteria")
        if output_format == "table":
            return
    else:
        console.print(f"✅ Found {len(found)} issues")

    frame = issues_to_frame(found)

    if output_format == "table":
        _print_frame(frame, limit_rows)
        return

    storage = TableStorage(base_path=output_dir)
    path = storage.save_table(owner, repo, frame, fmt=output_format)
    console.print(f"💾 Table written to {path}")
