"""Project/user YAML configuration loading for tonkit.

This module provides shared helpers to locate, load, and deep-merge configuration from
user (~/.config/tonkit/config.yaml) and project (.tonkit.yaml) files. It also applies
the defaults used by the provisioning layer and the debug bridge.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from tonkit_common.constants import (
    DEFAULT_DEBUG_HOST,
    DEFAULT_DEBUG_PORT,
    DEFAULT_DEBUG_TIMEOUT_MS,
    DEFAULT_HTTP_TIMEOUT_S,
)
from tonkit_common.io import safe_read_yaml
from tonkit_common.io.files import FileOperationError
from tonkit_common.path import get_project_config_path, get_user_config_path


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Deep-merge two dictionaries in place and return ``base``.

    Values from ``override`` take precedence. Nested dicts are merged
    recursively; other values are replaced.
    """
    for key, value in override.items():
        if key in base and isinstance(base[key], dict) and isinstance(value, dict):
            deep_merge(base[key], value)
        else:
            base[key] = value
    return base


def default_config() -> dict[str, Any]:
    """Return the shared default configuration structure.

    ``tools`` maps a tool identifier to a preset name or to an explicit
    resolver definition (see ``tonkit.provisioning.dispatcher``).
    """
    return {
        "defaults": {
            "log_level": "INFO",
        },
        "provisioning": {
            "cache_dir": None,
            "http_timeout": DEFAULT_HTTP_TIMEOUT_S,
            "verify_once": True,
        },
        "runtime": {
            "node": None,
        },
        "tools": {
            "func": "ton",
            "tolk": "ton",
            "fift": "ton",
            "tlb": "ton",
            "tact": "tact",
        },
        "debug": {
            "host": DEFAULT_DEBUG_HOST,
            "port": DEFAULT_DEBUG_PORT,
            "timeout_ms": DEFAULT_DEBUG_TIMEOUT_MS,
        },
    }


def load_yaml(path: Path) -> dict[str, Any]:
    """Load YAML file with shared IO helper and tolerant fallback.

    Returns an empty dict when the file is missing, unreadable, or not a mapping at
    the top level.
    """
    try:
        if not path.exists():
            return {}
        data = safe_read_yaml(path) or {}
        return data if isinstance(data, dict) else {}
    except FileOperationError:
        return {}


def load_merged_config(root: Path | None = None) -> dict[str, Any]:
    """Load default + user + project YAML config into a single dict.

    Parameters
    ----------
    root : Path, optional
        Directory holding the project ``.tonkit.yaml``; defaults to the working
        directory.
    """
    cfg = default_config()

    user_cfg = load_yaml(get_user_config_path())
    if user_cfg:
        deep_merge(cfg, user_cfg)

    project_cfg = load_yaml(get_project_config_path(root or Path.cwd()))
    if project_cfg:
        deep_merge(cfg, project_cfg)

    return cfg
