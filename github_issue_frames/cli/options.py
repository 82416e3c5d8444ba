"""Shared CLI option definitions."""

import typer

from ..github_client.models import TimeField

OWNER_OPTION = typer.Option(..., "--owner", "-o", help="Repository owner login")
REPO_OPTION = typer.Option(..., "--repo", "-r", help="GitHub repository name")

TIME_FIELD_OPTION = typer.Option(
    TimeField.CREATED,
    "--time-field",
    "-t",
    help="Issue timestamp the range applies to",
    case_sensitive=False,
)
FROM_OPTION = typer.Option(
    None, "--from", help="Range start (default: 30 days ago)"
)
TO_OPTION = typer.Option(None, "--to", help="Range end (default: now)")
LAST_DAYS_OPTION = typer.Option(
    None, "--last-days", help="Range covering the last N days"
)
QUERY_OPTION = typer.Option(
    None, "--query", "-q", help="Extra search qualifiers, e.g. 'label:bug'"
)

FORMAT_OPTION = typer.Option(
    "table", "--format", "-f", help="Output format: table, csv or json"
)
OUTPUT_DIR_OPTION = typer.Option(
    "data/tables", "--output-dir", help="Directory for csv/json output"
)
LIMIT_ROWS_OPTION = typer.Option(
    50, "--limit-rows", help="Maximum rows shown in table format"
)

TOKEN_OPTION = typer.Option(
    None, "--token", help="GitHub API token (defaults to GITHUB_TOKEN env var)"
)
VERBOSE_OPTION = typer.Option(
    False, "--verbose", "-v", help="Log per-page request details"
)
