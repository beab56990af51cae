"""Path utilities for consistent path handling across tonkit."""

from __future__ import annotations

from pathlib import Path

from tonkit_common.constants import (
    CONFIG_DIR_NAME,
    LOG_SUBDIR,
    PROJECT_CONFIG_FILE,
    TONKIT_HOME_DIR,
    USER_CONFIG_FILE,
)


def get_tonkit_home() -> Path:
    """Get the tonkit home directory (~/.tonkit).

    Returns
    -------
    Path
        The tonkit home directory path
    """
    return Path.home() / TONKIT_HOME_DIR


def get_tonkit_log_dir() -> Path:
    """Get the tonkit log directory (~/.tonkit/log).

    Returns
    -------
    Path
        The tonkit log directory path
    """
    return get_tonkit_home() / LOG_SUBDIR


def get_user_config_path() -> Path:
    """Get path to user-level tonkit configuration file."""
    return Path.home() / ".config" / CONFIG_DIR_NAME / USER_CONFIG_FILE


def get_project_config_path(root: Path) -> Path:
    """Get path to project-level tonkit configuration file."""
    return root / PROJECT_CONFIG_FILE


def anchor_path(path: str | Path, base: Path | None = None) -> Path:
    """Anchor a possibly relative path against ``base``.

    ``base`` defaults to the process working directory read at call time.
    Absolute paths are returned unchanged.
    """
    base = Path.cwd() if base is None else base
    return base.joinpath(path)
