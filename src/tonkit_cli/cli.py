"""Main CLI entry point for tonkit.

This module provides the main Click command group. The CLI plays the editor's
role: it asks for language server commands and debug sessions and prints the
results as JSON.
"""

from pathlib import Path
from typing import Any

import click

from tonkit.debug import DebugBridge
from tonkit.provisioning import StatusSink, ToolDispatcher
from tonkit_cli.commands import dap, lsp
from tonkit_cli.core.constants import LOGGING_PACKAGES
from tonkit_common.config import config as runtime_config
from tonkit_common.config import load_merged_config
from tonkit_common.constants import VALID_LOG_LEVELS, EnvVars
from tonkit_logging import configure_logger, get_cli_logger

logger = get_cli_logger(__name__)


class Context:
    """Shared state handed to every command through ``ctx.obj``."""

    def __init__(self, root: Path, verbose: bool = False) -> None:
        self.root = root
        self.verbose = verbose
        self._config: dict[str, Any] | None = None
        self._bridge: DebugBridge | None = None

    @property
    def config(self) -> dict[str, Any]:
        """Merged default/user/project configuration (loaded once)."""
        if self._config is None:
            self._config = load_merged_config(self.root)
        return self._config

    @property
    def bridge(self) -> DebugBridge:
        if self._bridge is None:
            self._bridge = DebugBridge.from_config(self.config)
        return self._bridge

    def create_dispatcher(self, status_sink: StatusSink | None = None) -> ToolDispatcher:
        return ToolDispatcher.from_config(self.config, status_sink=status_sink)


def _configure_logging(verbose: bool, log_level: str | None) -> None:
    """Configure package loggers for file logging.

    ``--log-level`` wins over ``-v``; either is exported through
    ``TONKIT_LOG_LEVEL`` so that later readers agree.
    """
    if log_level:
        runtime_config.set_env_var(EnvVars.LOG_LEVEL, log_level.upper())
    elif verbose:
        runtime_config.set_env_var(EnvVars.LOG_LEVEL, "DEBUG")

    for pkg_name in LOGGING_PACKAGES:
        try:
            configure_logger(pkg_name, profile="cli")
        except OSError as e:
            logger.debug("Failed to configure logger for package %s: %s", pkg_name, e)


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.option(
    "--log-level",
    type=click.Choice(VALID_LOG_LEVELS, case_sensitive=False),
    default=None,
    help="Explicit log level",
)
@click.option(
    "--root",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory holding .tonkit.yaml (default: current directory)",
)
@click.version_option(package_name="tonkit")
@click.pass_context
def cli(ctx: click.Context, verbose: bool, log_level: str | None, root: Path | None) -> None:
    """Provision TON language servers and bridge TVM debug sessions."""
    _configure_logging(verbose, log_level)
    ctx.obj = Context(root or Path.cwd(), verbose=verbose)
    logger.debug("tonkit invoked with %s", ctx.invoked_subcommand)


cli.add_command(lsp.group)
cli.add_command(dap.group)


def main() -> None:
    """Console script entry point."""
    cli()


if __name__ == "__main__":
    main()
