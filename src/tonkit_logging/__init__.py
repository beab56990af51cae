"""Logging setup shared by tonkit packages."""

from .config import configure_logger, get_cli_logger, get_logger

__all__ = ["configure_logger", "get_cli_logger", "get_logger"]
