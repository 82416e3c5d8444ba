"""Local storage for issue tables."""

from .manager import TableStorage

__all__ = ["TableStorage"]
