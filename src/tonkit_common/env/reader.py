"""Typed environment variable readers."""

import os

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off"}


def read_str(name: str, default: str | None = None) -> str | None:
    """Read a string variable, treating empty values as unset."""
    value = os.environ.get(name)
    if value is None or value.strip() == "":
        return default
    return value.strip()


def read_bool(name: str, default: bool = False) -> bool:
    """Read a boolean variable.

    Unrecognised values fall back to ``default``.
    """
    value = read_str(name)
    if value is None:
        return default
    lowered = value.lower()
    if lowered in _TRUTHY:
        return True
    if lowered in _FALSY:
        return False
    return default


def read_float(name: str, default: float | None = None) -> float | None:
    """Read a float variable, returning ``default`` when unset or invalid."""
    value = read_str(name)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        return default
