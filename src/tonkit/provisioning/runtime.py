"""Locate the interpreter used to run language servers."""

import shutil

from tonkit.common.errors import RuntimeNotFoundError
from tonkit_common.config import config
from tonkit_common.constants import NODE_BINARY
from tonkit_common.io import is_regular_file


def find_node_binary(configured: str | None = None) -> str:
    """Return the node executable to launch language servers with.

    Lookup order: ``configured``, ``TONKIT_NODE_PATH``, ``node`` on ``PATH``.

    Raises
    ------
    RuntimeNotFoundError
        If no candidate resolves to an executable
    """
    for candidate in (configured, config.get_node_path()):
        if not candidate:
            continue
        if is_regular_file(candidate):
            return candidate
        found = shutil.which(candidate)
        if found:
            return found

    found = shutil.which(NODE_BINARY)
    if found:
        return found
    raise RuntimeNotFoundError(NODE_BINARY)
