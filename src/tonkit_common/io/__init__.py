"""File I/O helpers shared across tonkit packages."""

from .files import (
    FileOperationError,
    ensure_dir,
    is_regular_file,
    safe_read_json,
    safe_read_yaml,
)

__all__ = [
    "FileOperationError",
    "ensure_dir",
    "is_regular_file",
    "safe_read_json",
    "safe_read_yaml",
]
