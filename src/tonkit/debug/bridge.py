"""Debug session bridge for the TVM debug adapter.

Turns editor-side debug requests into what the adapter understands. A session
request moves through ``classify`` -> ``resolve_connection`` -> wire
translation and ends as a ``DebugAdapterBinary``; any failure stops it with an
error and nothing is retried here. Attach-style debugging is not supported by
the adapter and is rejected before a session starts.
"""

import json
from collections.abc import Mapping
from ipaddress import AddressValueError, IPv4Address
from typing import Any

from tonkit.common.errors import (
    ConfigParseError,
    ConfigurationError,
    InvalidRequestKindError,
    UnsupportedOperationError,
)
from tonkit.debug.models import (
    MAX_PORT,
    AdapterWireConfig,
    AttachRequest,
    DebugAdapterBinary,
    DebugConfig,
    DebugScenario,
    DebugTaskDefinition,
    GenericLaunchConfig,
    RequestKind,
    StartDebuggingRequestArguments,
    TcpConnection,
    TcpConnectionTemplate,
)
from tonkit.patterns import Obj
from tonkit_common.constants import (
    DEFAULT_DEBUG_HOST,
    DEFAULT_DEBUG_PORT,
    DEFAULT_DEBUG_TIMEOUT_MS,
)


def parse_ipv4(value: str | None, fallback: IPv4Address) -> IPv4Address:
    """Parse ``value`` as an IPv4 address, returning ``fallback`` if invalid."""
    if not value:
        return fallback
    try:
        return IPv4Address(value)
    except (AddressValueError, ValueError):
        return fallback


def decode_config(raw_config: str) -> Any:
    """Decode the caller's JSON configuration text.

    Raises
    ------
    ConfigParseError
        If ``raw_config`` is not valid JSON
    """
    try:
        return json.loads(raw_config)
    except (TypeError, ValueError) as e:
        msg = f"`config` is not a valid JSON: {e}"
        raise ConfigParseError(msg) from e


def _debug_setting(debug: Mapping[str, Any], key: str, default: Any) -> Any:
    value = debug.get(key, default)
    if value is None:
        msg = f"debug.{key}: value must not be null"
        raise ConfigurationError(msg)
    return value


def _debug_int(
    debug: Mapping[str, Any],
    key: str,
    default: int,
    maximum: int | None = None,
) -> int:
    value = _debug_setting(debug, key, default)
    # bool is an int subclass; YAML "yes" must not become 1
    if isinstance(value, bool) or not isinstance(value, int):
        msg = f"debug.{key}: expected an integer, got {value!r}"
        raise ConfigurationError(msg)
    if value < 0 or (maximum is not None and value > maximum):
        msg = f"debug.{key}: {value} is out of range"
        raise ConfigurationError(msg)
    return value


class DebugBridge(Obj):
    """Translate debug requests for the TVM debug adapter.

    Parameters
    ----------
    default_host : str
        Host used when the caller's config has no valid IPv4 ``host``
    default_port : int
        Port used when the caller's config has no ``port``
    default_timeout_ms : int
        Connect timeout used when none is supplied
    ctx : TonkitContext, optional
        Context for logging
    """

    def __init__(
        self,
        default_host: str = DEFAULT_DEBUG_HOST,
        default_port: int = DEFAULT_DEBUG_PORT,
        default_timeout_ms: int = DEFAULT_DEBUG_TIMEOUT_MS,
        ctx=None,
    ) -> None:
        super().__init__(ctx)
        self.default_host = IPv4Address(default_host)
        self.default_port = default_port
        self.default_timeout_ms = default_timeout_ms

    @classmethod
    def from_config(cls, cfg: Mapping[str, Any] | None = None, ctx=None) -> "DebugBridge":
        """Create a bridge from the ``debug`` configuration section.

        Raises
        ------
        ConfigurationError
            If the section is not a mapping or a value is malformed
        """
        debug = (cfg or {}).get("debug", {}) or {}
        if not isinstance(debug, Mapping):
            msg = "debug: expected a mapping"
            raise ConfigurationError(msg)

        host = _debug_setting(debug, "host", DEFAULT_DEBUG_HOST)
        if not isinstance(host, str):
            msg = f"debug.host: expected an IPv4 address, got {host!r}"
            raise ConfigurationError(msg)
        try:
            IPv4Address(host)
        except AddressValueError as e:
            msg = f"debug.host: expected an IPv4 address, got {host!r}"
            raise ConfigurationError(msg) from e

        return cls(
            default_host=host,
            default_port=_debug_int(debug, "port", DEFAULT_DEBUG_PORT, MAX_PORT),
            default_timeout_ms=_debug_int(debug, "timeout_ms", DEFAULT_DEBUG_TIMEOUT_MS),
            ctx=ctx,
        )

    def classify(self, raw_config: Any) -> RequestKind:
        """Return the start request kind of a decoded configuration.

        Raises
        ------
        InvalidRequestKindError
            Unless ``request`` is exactly ``"launch"``
        """
        value = raw_config.get("request") if isinstance(raw_config, Mapping) else None
        if value == RequestKind.LAUNCH.value:
            return RequestKind.LAUNCH
        raise InvalidRequestKindError(value)

    def parse_config(self, raw_config: str) -> GenericLaunchConfig:
        """Decode and validate the caller's JSON configuration.

        Raises
        ------
        ConfigParseError
            If the text is not JSON or does not have the launch config shape
        """
        return GenericLaunchConfig.from_dict(decode_config(raw_config))

    def resolve_connection(
        self,
        template: TcpConnectionTemplate | None,
        config: GenericLaunchConfig,
    ) -> TcpConnection:
        """Return the adapter endpoint with every field populated.

        A caller template is used as given, only its missing fields are
        filled. Without one, port and host come from ``config``.
        """
        if template is None:
            template = TcpConnectionTemplate(
                host=parse_ipv4(config.host, self.default_host),
                port=config.port if config.port is not None else self.default_port,
                timeout=self.default_timeout_ms,
            )
        return TcpConnection(
            host=template.host if template.host is not None else self.default_host,
            port=template.port if template.port is not None else self.default_port,
            timeout=(
                template.timeout if template.timeout is not None else self.default_timeout_ms
            ),
        )

    def to_wire_config(self, config: GenericLaunchConfig) -> AdapterWireConfig:
        """Translate a generic launch configuration to the adapter's shape."""
        return AdapterWireConfig.from_launch_config(config)

    def get_adapter_binary(
        self,
        adapter_name: str,
        task: DebugTaskDefinition,
        shell_env: Mapping[str, str] | None = None,
    ) -> DebugAdapterBinary:
        """Prepare a debug session from the editor's task definition.

        Parameters
        ----------
        adapter_name : str
            Adapter identifier chosen by the editor
        task : DebugTaskDefinition
            Caller configuration and optional TCP template
        shell_env : Mapping, optional
            Environment of the worktree shell, passed through to the adapter

        Returns
        -------
        DebugAdapterBinary
            Connection, start request arguments and environment

        Raises
        ------
        ConfigParseError
            If the configuration is not valid JSON or has the wrong shape
        InvalidRequestKindError
            If the request is not a launch
        """
        raw_config = decode_config(task.config)
        request = self.classify(raw_config)
        launch = GenericLaunchConfig.from_dict(raw_config)
        connection = self.resolve_connection(task.tcp_connection, launch)
        wire = self.to_wire_config(launch)

        self.ctx.debug(
            "Debug session for %s (%s) via %s:%d",
            adapter_name,
            task.label,
            connection.host,
            connection.port,
        )
        return DebugAdapterBinary(
            connection=connection,
            request_args=StartDebuggingRequestArguments(
                configuration=wire.to_json(),
                request=request,
            ),
            envs=dict(shell_env or {}),
        )

    def config_to_scenario(self, config: DebugConfig) -> DebugScenario:
        """Turn a structured debug request into a launchable scenario.

        Raises
        ------
        UnsupportedOperationError
            For attach requests
        """
        if isinstance(config.request, AttachRequest):
            msg = "attach"
            raise UnsupportedOperationError(msg)

        wire = AdapterWireConfig.from_launch_request(config.request, config.stop_on_entry)
        return DebugScenario(
            adapter=config.adapter,
            label=config.label,
            config=wire.to_json(),
        )
