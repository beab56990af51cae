"""Language server commands for the tonkit CLI.

Resolves language servers and prints the command that launches them.
"""

import click

from tonkit.provisioning import (
    InstallationStatus,
    ReleaseAssetTool,
    StatusSink,
    build_tool_table,
)
from tonkit_cli.core.decorators import handle_exceptions
from tonkit_cli.core.utils import CliOutput
from tonkit_logging import get_cli_logger

logger = get_cli_logger(__name__)


class ConsoleStatusSink(StatusSink):
    """Echo provisioning progress to stderr."""

    MESSAGES = {
        InstallationStatus.CHECKING_FOR_UPDATE: "checking for updates",
        InstallationStatus.DOWNLOADING: "downloading",
    }

    def set_status(self, tool_id: str, status: InstallationStatus) -> None:
        logger.debug("%s: %s", tool_id, status.value)
        click.echo(f"{tool_id}: {self.MESSAGES[status]}...", err=True)


@click.group(name="lsp")
def group() -> None:
    """Language server provisioning commands."""


@group.command(name="tools")
@click.pass_context
@handle_exceptions
def tools(ctx: click.Context) -> None:
    """List configured tool identifiers and where they come from."""
    table = build_tool_table(ctx.obj.config)
    for tool_id in sorted(table):
        tool = table[tool_id]
        if isinstance(tool, ReleaseAssetTool):
            CliOutput.plain(f"{tool_id}\trelease\t{tool.repo}")
        else:
            CliOutput.plain(f"{tool_id}\tregistry\t{tool.package}")


@group.command(name="command")
@click.argument("tool_id")
@click.option("--pretty", is_flag=True, help="Indent the JSON output")
@click.pass_context
@handle_exceptions
def command(ctx: click.Context, tool_id: str, pretty: bool) -> None:
    """Resolve TOOL_ID and print its launch command as JSON.

    Downloads or updates the language server when needed. Relative cache
    paths resolve against the current directory.

    \b
    Examples
    --------
    tonkit lsp command func
    tonkit lsp command tact --pretty
    """  # noqa: W605
    dispatcher = ctx.obj.create_dispatcher(status_sink=ConsoleStatusSink())
    resolved = dispatcher.command_for(tool_id)
    CliOutput.json(resolved.to_dict(), pretty=pretty)
