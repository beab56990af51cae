"""Debug adapter commands for the tonkit CLI."""

import os
import sys
from ipaddress import AddressValueError, IPv4Address

import click

from tonkit.debug import (
    AttachRequest,
    DebugConfig,
    DebugTaskDefinition,
    LaunchRequest,
    TcpConnectionTemplate,
)
from tonkit_cli.core.decorators import handle_exceptions
from tonkit_cli.core.utils import CliOutput

DEFAULT_ADAPTER = "ton"
DEFAULT_LABEL = "TON: launch"


def _parse_env(
    _ctx: click.Context,
    _param: click.Parameter,
    values: tuple[str, ...],
) -> dict[str, str]:
    env: dict[str, str] = {}
    for item in values:
        key, sep, value = item.partition("=")
        if not sep or not key:
            msg = f"expected KEY=VALUE, got {item!r}"
            raise click.BadParameter(msg)
        env[key] = value
    return env


def _parse_host(
    _ctx: click.Context,
    _param: click.Parameter,
    value: str | None,
) -> IPv4Address | None:
    if value is None:
        return None
    try:
        return IPv4Address(value)
    except AddressValueError as e:
        msg = f"not an IPv4 address: {value}"
        raise click.BadParameter(msg) from e


@click.group(name="dap")
def group() -> None:
    """TVM debug adapter commands."""


@group.command(name="scenario")
@click.option("--program", help="Program to debug (required for launch)")
@click.option("--cwd", default=None, help="Working directory of the debuggee")
@click.option("--arg", "args", multiple=True, help="Program argument (repeatable)")
@click.option(
    "--env",
    "envs",
    multiple=True,
    callback=_parse_env,
    help="Environment entry KEY=VALUE (repeatable)",
)
@click.option("--label", default=DEFAULT_LABEL, show_default=True)
@click.option("--adapter", default=DEFAULT_ADAPTER, show_default=True)
@click.option("--stop-on-entry", is_flag=True, help="Pause on the first instruction")
@click.option("--attach", "attach_pid", type=int, default=None, help="Attach to PID")
@click.pass_context
@handle_exceptions
def scenario(
    ctx: click.Context,
    program: str | None,
    cwd: str | None,
    args: tuple[str, ...],
    envs: dict[str, str],
    label: str,
    adapter: str,
    stop_on_entry: bool,
    attach_pid: int | None,
) -> None:
    """Print the debug scenario for a launch request as JSON.

    \b
    Examples
    --------
    tonkit dap scenario --program main.fif --cwd . --arg x --env A=1
    """  # noqa: W605
    if attach_pid is not None:
        request = AttachRequest(process_id=attach_pid)
    elif program is None:
        msg = "--program is required for launch scenarios"
        raise click.UsageError(msg)
    else:
        request = LaunchRequest(program=program, cwd=cwd, args=list(args), envs=envs)

    config = DebugConfig(
        label=label,
        adapter=adapter,
        request=request,
        stop_on_entry=stop_on_entry or None,
    )
    result = ctx.obj.bridge.config_to_scenario(config)
    CliOutput.json(result.to_dict())


@group.command(name="binary")
@click.argument("config")
@click.option("--host", default=None, callback=_parse_host, help="Adapter host (IPv4)")
@click.option("--port", type=click.IntRange(0, 65535), default=None)
@click.option("--timeout", type=click.IntRange(min=0), default=None, help="Milliseconds")
@click.option("--label", default=DEFAULT_LABEL, show_default=True)
@click.option("--adapter", default=DEFAULT_ADAPTER, show_default=True)
@click.option("--inherit-env", is_flag=True, help="Pass the current environment through")
@click.pass_context
@handle_exceptions
def binary(
    ctx: click.Context,
    config: str,
    host: IPv4Address | None,
    port: int | None,
    timeout: int | None,
    label: str,
    adapter: str,
    inherit_env: bool,
) -> None:
    """Print the adapter connection for CONFIG (JSON text, or - for stdin).

    Any of --host/--port/--timeout makes a caller connection template; fields
    left out fall back to the defaults.
    """
    raw = sys.stdin.read() if config == "-" else config
    template = None
    if host is not None or port is not None or timeout is not None:
        template = TcpConnectionTemplate(host=host, port=port, timeout=timeout)

    task = DebugTaskDefinition(label=label, adapter=adapter, config=raw, tcp_connection=template)
    shell_env = dict(os.environ) if inherit_env else None
    result = ctx.obj.bridge.get_adapter_binary(adapter, task, shell_env)
    CliOutput.json(result.to_dict())
