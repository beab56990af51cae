"""Common building blocks for the tonkit core."""

from .context import TonkitContext
from .errors import TonkitError

__all__ = ["TonkitContext", "TonkitError"]
