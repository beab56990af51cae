"""Debug session bridge for the TVM debug adapter."""

from .bridge import DebugBridge, decode_config, parse_ipv4
from .models import (
    AdapterWireConfig,
    AttachRequest,
    DebugAdapterBinary,
    DebugConfig,
    DebugScenario,
    DebugTaskDefinition,
    GenericLaunchConfig,
    LaunchRequest,
    RequestKind,
    StartDebuggingRequestArguments,
    TcpConnection,
    TcpConnectionTemplate,
)

__all__ = [
    "AdapterWireConfig",
    "AttachRequest",
    "DebugAdapterBinary",
    "DebugBridge",
    "DebugConfig",
    "DebugScenario",
    "DebugTaskDefinition",
    "GenericLaunchConfig",
    "LaunchRequest",
    "RequestKind",
    "StartDebuggingRequestArguments",
    "TcpConnection",
    "TcpConnectionTemplate",
    "decode_config",
    "parse_ipv4",
]
