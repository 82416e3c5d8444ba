"""Configuration for the GitHub GraphQL client."""

import os

DEFAULT_GRAPHQL_URL = "https://api.github.com/graphql"
DEFAULT_TIMEOUT_SECONDS = 30.0


class GitHubConfig:
    """Configuration class for GitHub GraphQL access."""

    def __init__(self, token: str | None = None) -> None:
        """Initialize configuration from environment variables.

        Args:
            token: GitHub personal access token. If None, reads from
                GITHUB_TOKEN env var.
        """
        self.token: str | None = token or os.getenv("GITHUB_TOKEN")
        self.graphql_url: str = os.getenv("GITHUB_GRAPHQL_URL", DEFAULT_GRAPHQL_URL)
        timeout = os.getenv("GITHUB_TIMEOUT")
        try:
            self.timeout: float = float(timeout) if timeout else DEFAULT_TIMEOUT_SECONDS
        except ValueError:
            raise ValueError(f"GITHUB_TIMEOUT must be a number of seconds: {timeout!r}")

    def is_configured(self) -> bool:
        """Check if a token is available."""
        return bool(self.token)

    def validate(self) -> None:
        """Validate configuration and raise error if invalid."""
        if not self.token:
            raise ValueError(
                "GitHub token is required. Set GITHUB_TOKEN environment variable."
            )
