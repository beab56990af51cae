"""Logger configuration profiles for tonkit packages."""

import logging
import sys
from logging.handlers import RotatingFileHandler

from .utils import (
    get_log_file_path,
    get_log_level,
    level_to_int,
    register_trace_level,
    should_use_console_logging,
)

PROFILES = ("tonkit", "cli", "test")

DETAILED_FORMAT = "%(asctime)s %(levelname)-8s %(name)s:%(lineno)d %(message)s"
CONSOLE_FORMAT = "%(levelname)s: %(message)s"

MAX_LOG_BYTES = 5 * 1024 * 1024
LOG_BACKUP_COUNT = 3


def _clear(logger: logging.Logger) -> None:
    for handler in logger.handlers[:]:
        handler.close()
        logger.removeHandler(handler)
    logger.filters.clear()


def _console_handler() -> logging.Handler:
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    return handler


def _file_handler(log_file: str) -> logging.Handler:
    handler = RotatingFileHandler(
        log_file,
        maxBytes=MAX_LOG_BYTES,
        backupCount=LOG_BACKUP_COUNT,
        encoding="utf-8",
    )
    handler.setFormatter(logging.Formatter(DETAILED_FORMAT))
    return handler


def configure_logger(
    name: str,
    profile: str = "tonkit",
    level: str | None = None,
    log_file: str | None = None,
    to_console: bool | None = None,
) -> logging.Logger:
    """Configure a package logger according to a profile.

    Parameters
    ----------
    name : str
        Logger name, usually a top-level package
    profile : str
        ``tonkit`` (file, console on request), ``cli`` (file only unless
        ``to_console``) or ``test`` (console only, propagates to pytest)
    level : str, optional
        Level name; defaults to ``TONKIT_LOG_LEVEL``
    log_file : str, optional
        Explicit log file path
    to_console : bool, optional
        Force console output on or off

    Returns
    -------
    logging.Logger
        The configured logger

    Raises
    ------
    ValueError
        If the profile is unknown
    """
    if profile not in PROFILES:
        msg = f"Unknown profile: {profile}"
        raise ValueError(msg)

    register_trace_level()
    logger = logging.getLogger(name)
    _clear(logger)
    logger.setLevel(level_to_int(level or get_log_level()))

    if profile == "test":
        logger.propagate = True
        if to_console:
            logger.addHandler(_console_handler())
        return logger

    logger.propagate = False
    logger.addHandler(_file_handler(log_file or get_log_file_path()))

    console = should_use_console_logging() if to_console is None else to_console
    if console:
        logger.addHandler(_console_handler())
    return logger


def get_logger(name: str) -> logging.Logger:
    """Return a logger for library code (configuration left to the host)."""
    return logging.getLogger(name)


def get_cli_logger(name: str) -> logging.Logger:
    """Return a logger for CLI modules."""
    return logging.getLogger(name)
