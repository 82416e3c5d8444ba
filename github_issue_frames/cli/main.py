"""Main CLI entry point."""

import typer
from dotenv import load_dotenv
from rich.console import Console

from .issues import issues

# Load environment variables from .env file
load_dotenv()

app = typer.Typer(
    name="github-issue-frames",
    help="Search GitHub issues and convert them into tables",
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)
console = Console()


app.command(name="issues", context_settings={"help_option_names": ["-h", "--help"]})(
    issues
)


@app.command(context_settings={"help_option_names": ["-h", "--help"]})
def version() -> None:
    """Show version information."""
    from github_issue_frames import __version__

    console.print(f"GitHub Issue Frames v{__version__}")


if __name__ == "__main__":
    app()
