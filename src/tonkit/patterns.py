"""Base object pattern for context-carrying tonkit classes."""

from tonkit.common.context import TonkitContext


class Obj:
    """Base class giving subclasses a ``ctx`` for logging.

    Parameters
    ----------
    ctx : TonkitContext, optional
        Context to log through; a default context is created when omitted
    """

    def __init__(self, ctx: TonkitContext | None = None) -> None:
        self.ctx = ctx if ctx is not None else TonkitContext()
