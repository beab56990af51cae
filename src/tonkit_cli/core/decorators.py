"""Custom Click decorators for common CLI patterns."""

import functools
from collections.abc import Callable
from typing import Any, TypeVar

import click

from tonkit.common.errors import ConfigurationError, TonkitError
from tonkit_cli.core.constants import ExitCode
from tonkit_cli.core.utils import CliOutput
from tonkit_logging import get_cli_logger

logger = get_cli_logger(__name__)

F = TypeVar("F", bound=Callable[..., Any])


def handle_exceptions(func: F) -> F:
    """Convert tonkit errors into an error line and a non-zero exit code.

    Parameters
    ----------
    func : Callable
        Function to wrap

    Returns
    -------
    Callable
        Wrapped function
    """

    @functools.wraps(func)
    def wrapper(*args, **kwargs) -> Any:
        try:
            return func(*args, **kwargs)
        except ConfigurationError as e:
            logger.error("Configuration error: %s", e)
            CliOutput.error(str(e))
            click.get_current_context().exit(ExitCode.CONFIG_ERROR)
        except TonkitError as e:
            logger.error("%s: %s", type(e).__name__, e)
            CliOutput.error(str(e))
            click.get_current_context().exit(ExitCode.GENERAL_ERROR)

    return wrapper  # type: ignore[return-value]
