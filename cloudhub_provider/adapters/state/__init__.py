"""State store adapters for managed resource records."""

from .json_file import JsonFileStateStore

__all__ = ["JsonFileStateStore"]
