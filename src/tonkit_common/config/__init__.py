"""Shared configuration utilities for tonkit (tonkit_common.config).

This package provides:
- runtime: Environment-driven configuration (``config`` singleton)
- project: YAML-based project/user configuration loader
"""

from .project import deep_merge, default_config, load_merged_config
from .runtime import ConfigManager, config

__all__ = [
    "ConfigManager",
    "config",
    "deep_merge",
    "default_config",
    "load_merged_config",
]
