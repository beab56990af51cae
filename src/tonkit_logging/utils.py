"""Utility helpers for tonkit logging."""

import logging
from pathlib import Path

from tonkit_common.config import config
from tonkit_common.constants import (
    DEFAULT_LOG_FILE,
    DEFAULT_LOG_LEVEL,
    VALID_LOG_LEVELS,
)
from tonkit_common.path import get_tonkit_log_dir

TRACE = 5


def register_trace_level() -> None:
    """Register the TRACE level name with the stdlib logging module."""
    if logging.getLevelName(TRACE) != "TRACE":
        logging.addLevelName(TRACE, "TRACE")


def get_log_level(default: str = DEFAULT_LOG_LEVEL) -> str:
    """Return the log level requested through the environment.

    Invalid names fall back to ``default``.
    """
    level = config.get_log_level()
    return level if level in VALID_LOG_LEVELS else default


def level_to_int(level: str) -> int:
    """Convert a level name (including TRACE) to its numeric value."""
    if level.upper() == "TRACE":
        return TRACE
    value = logging.getLevelName(level.upper())
    return value if isinstance(value, int) else logging.INFO


def get_log_file_path(filename: str = DEFAULT_LOG_FILE, log_dir: Path | None = None) -> str:
    """Return the log file path, creating its directory.

    ``TONKIT_LOG_FILE`` wins over ``filename``/``log_dir``.
    """
    explicit = config.get_log_file()
    if explicit:
        path = Path(explicit).expanduser()
    else:
        path = (log_dir or get_tonkit_log_dir()) / filename
    path.parent.mkdir(parents=True, exist_ok=True)
    return str(path)


def should_use_console_logging() -> bool:
    """Whether console logging was requested through the environment."""
    return config.is_console_logging_enabled()
