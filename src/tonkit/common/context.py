"""Logging context handed to tonkit objects."""

import logging

from tonkit_logging import get_logger
from tonkit_logging.utils import TRACE


class TonkitContext:
    """Thin logging facade shared by core objects.

    Parameters
    ----------
    logger : logging.Logger, optional
        Logger to write to; defaults to the ``tonkit`` package logger
    """

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self.logger = logger or get_logger("tonkit")

    def trace(self, msg: str, *args) -> None:
        self.logger.log(TRACE, msg, *args)

    def debug(self, msg: str, *args) -> None:
        self.logger.debug(msg, *args)

    def info(self, msg: str, *args) -> None:
        self.logger.info(msg, *args)

    def warning(self, msg: str, *args) -> None:
        self.logger.warning(msg, *args)

    def error(self, msg: str, *args) -> None:
        self.logger.error(msg, *args)
