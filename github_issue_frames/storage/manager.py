"""Storage manager for issue tables."""

from pathlib import Path
from typing import Any

import pandas as pd
from rich.console import Console

console = Console()

SUPPORTED_FORMATS = ("csv", "json")


class TableStorage:
    """Writes issue tables to CSV or JSON files."""

    def __init__(self, base_path: str = "data/tables"):
        """Initialize table storage.

        Args:
            base_path: Base directory for storing table files
        """
        self.base_path = Path(base_path)
        self.base_path.mkdir(parents=True, exist_ok=True)

    def _generate_filename(self, owner: str, repo: str, fmt: str) -> str:
        return f"{owner}_{repo}_issues.{fmt}"

    def get_file_path(self, owner: str, repo: str, fmt: str) -> Path:
        """Get full file path for a repository's table.

        Args:
            owner: Repository owner login
            repo: Repository name
            fmt: File format (csv or json)

        Returns:
            Path object for the table file
        """
        return self.base_path / self._generate_filename(owner, repo, fmt)

    def save_table(
        self, owner: str, repo: str, frame: pd.DataFrame, fmt: str = "csv"
    ) -> Path:
        """Save an issue table, replacing any previous table for the repository.

        Args:
            owner: Repository owner login
            repo: Repository name
            frame: Table produced by issues_to_frame
            fmt: File format, one of SUPPORTED_FORMATS

        Returns:
            Path to the saved file

        Raises:
            ValueError: If the format is not supported
        """
        if fmt not in SUPPORTED_FORMATS:
            raise ValueError(
                f"Unsupported format '{fmt}'. Use one of: "
                f"{', '.join(SUPPORTED_FORMATS)}"
            )

        file_path = self.get_file_path(owner, repo, fmt)

        try:
            if fmt == "csv":
                frame.to_csv(file_path, index=False)
            else:
                frame.to_json(file_path, orient="records", date_format="iso", indent=2)

            console.print(f"Saved {len(frame)} rows to {file_path}")
            return file_path

        except Exception as e:
            console.print(f"Error saving table for {owner}/{repo}: {e}")
            raise

    def get_storage_stats(self) -> dict[str, Any]:
        """Get statistics about stored tables.

        Returns:
            Dictionary with storage statistics
        """
        all_files = [
            f
            for fmt in SUPPORTED_FORMATS
            for f in self.base_path.glob(f"*_issues.{fmt}")
        ]
        total_size = sum(f.stat().st_size for f in all_files)

        return {
            "total_tables": len(all_files),
            "total_size_bytes": total_size,
            "total_size_mb": round(total_size / (1024 * 1024), 2),
            "storage_path": str(self.base_path.absolute()),
        }
