"""Data types exchanged by the debug session bridge."""

import json
from dataclasses import dataclass, field
from enum import Enum
from ipaddress import IPv4Address
from typing import Any

from tonkit.common.errors import ConfigParseError
from tonkit_common.constants import DEBUG_ADAPTER_TYPE

MAX_PORT = 65535


def _compact_json(data: Any) -> str:
    return json.dumps(data, separators=(",", ":"))


class RequestKind(str, Enum):
    """DAP start request kinds."""

    LAUNCH = "launch"


# ---------------------------------------------------------------------------
# TCP connection
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class TcpConnection:
    """Fully resolved TCP endpoint of the debug adapter."""

    host: IPv4Address
    port: int
    timeout: int

    def to_dict(self) -> dict[str, Any]:
        return {"host": str(self.host), "port": self.port, "timeout": self.timeout}


@dataclass(frozen=True)
class TcpConnectionTemplate:
    """Partially specified TCP endpoint.

    Attributes
    ----------
    host : IPv4Address | None
        Adapter host
    port : int | None
        Adapter port
    timeout : int | None
        Connect timeout in milliseconds
    """

    host: IPv4Address | None = None
    port: int | None = None
    timeout: int | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "host": str(self.host) if self.host is not None else None,
            "port": self.port,
            "timeout": self.timeout,
        }


# ---------------------------------------------------------------------------
# Generic launch configuration (inbound)
# ---------------------------------------------------------------------------


def _field(data: dict[str, Any], key: str, expected: type, default: Any) -> Any:
    value = data.get(key)
    if value is None:
        return default
    # bool is an int subclass; keep ports and flags apart
    if isinstance(value, bool) and expected is not bool:
        msg = f"invalid type for `{key}`: expected {expected.__name__}, got bool"
        raise ConfigParseError(msg)
    if not isinstance(value, expected):
        msg = f"invalid type for `{key}`: expected {expected.__name__}, got {type(value).__name__}"
        raise ConfigParseError(msg)
    return value


@dataclass
class GenericLaunchConfig:
    """Adapter-agnostic debug configuration submitted by the caller.

    Only ``request`` is mandatory. ``program`` is accepted in addition to
    ``command`` so that a configuration produced by ``config_to_scenario`` can
    be submitted back unchanged.
    """

    request: str
    host: str = ""
    command: str | None = None
    program: str | None = None
    cwd: str | None = None
    args: list[str] = field(default_factory=list)
    env: dict[str, str] = field(default_factory=dict)
    stop_on_entry: bool = False
    stop_on_breakpoint: bool = False
    stop_on_step: bool | None = None
    port: int | None = None

    @classmethod
    def from_dict(cls, data: Any) -> "GenericLaunchConfig":
        """Validate and convert a decoded JSON object.

        Raises
        ------
        ConfigParseError
            If ``data`` is not an object, ``request`` is missing, or a field
            has the wrong type
        """
        if not isinstance(data, dict):
            msg = f"expected a JSON object, got {type(data).__name__}"
            raise ConfigParseError(msg)
        if data.get("request") is None:
            msg = "missing field `request`"
            raise ConfigParseError(msg)

        args = _field(data, "args", list, [])
        if not all(isinstance(arg, str) for arg in args):
            msg = "invalid type for `args`: expected a list of strings"
            raise ConfigParseError(msg)
        env = _field(data, "env", dict, {})
        if not all(isinstance(k, str) and isinstance(v, str) for k, v in env.items()):
            msg = "invalid type for `env`: expected a map of strings"
            raise ConfigParseError(msg)
        port = _field(data, "port", int, None)
        if port is not None and not 0 <= port <= MAX_PORT:
            msg = f"invalid value for `port`: {port} is out of range"
            raise ConfigParseError(msg)

        return cls(
            request=_field(data, "request", str, None),
            host=_field(data, "host", str, ""),
            command=_field(data, "command", str, None),
            program=_field(data, "program", str, None),
            cwd=_field(data, "cwd", str, None),
            args=list(args),
            env=dict(env),
            stop_on_entry=_field(data, "stopOnEntry", bool, False),
            stop_on_breakpoint=_field(data, "stopOnBreakpoint", bool, False),
            stop_on_step=_field(data, "stopOnStep", bool, None),
            port=port,
        )


# ---------------------------------------------------------------------------
# Host-side request shapes (outbound)
# ---------------------------------------------------------------------------


@dataclass
class LaunchRequest:
    """Launch variant of a structured debug request."""

    program: str
    cwd: str | None = None
    args: list[str] = field(default_factory=list)
    envs: dict[str, str] = field(default_factory=dict)


@dataclass
class AttachRequest:
    """Attach variant of a structured debug request."""

    process_id: int | None = None


@dataclass
class DebugConfig:
    """Structured debug request coming from the editor."""

    label: str
    adapter: str
    request: LaunchRequest | AttachRequest
    stop_on_entry: bool | None = None


# ---------------------------------------------------------------------------
# Adapter wire configuration
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class AdapterWireConfig:
    """JSON object sent to the TVM debug adapter.

    Build it with ``from_launch_config`` or ``from_launch_request``.
    """

    request: str
    program: str | None
    cwd: str | None
    args: tuple[str, ...]
    env: tuple[tuple[str, str], ...]
    stop_on_entry: bool = False
    type: str = DEBUG_ADAPTER_TYPE

    @classmethod
    def from_launch_config(cls, config: GenericLaunchConfig) -> "AdapterWireConfig":
        return cls(
            request=config.request,
            program=config.program if config.program is not None else config.command,
            cwd=config.cwd,
            args=tuple(config.args),
            env=tuple(config.env.items()),
            stop_on_entry=config.stop_on_entry,
        )

    @classmethod
    def from_launch_request(
        cls,
        launch: LaunchRequest,
        stop_on_entry: bool | None = None,
    ) -> "AdapterWireConfig":
        return cls(
            request=RequestKind.LAUNCH.value,
            program=launch.program,
            cwd=launch.cwd,
            args=tuple(launch.args),
            env=tuple(launch.envs.items()),
            stop_on_entry=bool(stop_on_entry),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type,
            "request": self.request,
            "program": self.program,
            "cwd": self.cwd,
            "args": list(self.args),
            "env": dict(self.env),
            "stopOnEntry": self.stop_on_entry,
        }

    def to_json(self) -> str:
        return _compact_json(self.to_dict())


# ---------------------------------------------------------------------------
# Results handed back to the host
# ---------------------------------------------------------------------------


@dataclass
class DebugScenario:
    """Adapter-specific scenario ready to be launched by the editor."""

    adapter: str
    label: str
    config: str
    build: Any = None
    tcp_connection: TcpConnectionTemplate | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "adapter": self.adapter,
            "label": self.label,
            "build": self.build,
            "config": self.config,
            "tcp_connection": (
                self.tcp_connection.to_dict() if self.tcp_connection is not None else None
            ),
        }

    def to_json(self) -> str:
        return _compact_json(self.to_dict())


@dataclass
class DebugTaskDefinition:
    """Debug request submitted by the editor when a session starts.

    Attributes
    ----------
    label : str
        Human-readable session name
    adapter : str
        Adapter identifier
    config : str
        Caller configuration as JSON text
    tcp_connection : TcpConnectionTemplate | None
        Caller-supplied connection template
    """

    label: str
    adapter: str
    config: str
    tcp_connection: TcpConnectionTemplate | None = None


@dataclass
class StartDebuggingRequestArguments:
    """Arguments of the DAP start request."""

    configuration: str
    request: RequestKind

    def to_dict(self) -> dict[str, Any]:
        return {"configuration": self.configuration, "request": self.request.value}


@dataclass
class DebugAdapterBinary:
    """Everything the host needs to connect to the debug adapter."""

    connection: TcpConnection
    request_args: StartDebuggingRequestArguments
    command: str | None = None
    arguments: list[str] = field(default_factory=list)
    cwd: str | None = None
    envs: dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "command": self.command,
            "arguments": list(self.arguments),
            "connection": self.connection.to_dict(),
            "cwd": self.cwd,
            "envs": dict(self.envs),
            "request_args": self.request_args.to_dict(),
        }
