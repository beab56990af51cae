"""Tool dispatcher: map tool identifiers to resolvers and runnable commands."""

from collections.abc import Callable, Mapping
from pathlib import Path
from string import Formatter
from typing import Any

from tonkit.common.errors import ConfigurationError, UnsupportedToolError
from tonkit.patterns import Obj
from tonkit.provisioning.archive import ArchiveFetcher, ArchiveKind
from tonkit.provisioning.models import ResolvedCommand
from tonkit.provisioning.registry import RegistryPackageResolver, RegistryPackageTool
from tonkit.provisioning.release import ReleaseAssetResolver, ReleaseAssetTool
from tonkit.provisioning.runtime import find_node_binary
from tonkit.provisioning.sources import GitHubReleasesSource, NpmRegistrySource
from tonkit.provisioning.sources.base import RegistrySource
from tonkit.provisioning.status import LoggingStatusSink, StatusSink
from tonkit_common.config import config as runtime_config
from tonkit_common.constants import LSP_STDIO_FLAG, ToolKind
from tonkit_common.path import anchor_path

ToolSpec = ReleaseAssetTool | RegistryPackageTool

TON_LANGUAGE_SERVER = ReleaseAssetTool(
    repo="ton-blockchain/ton-language-server",
    asset_template="ton-language-server-{version}.zip",
    directory_prefix="ton-lsp",
    entry_point="ton-language-server/server.js",
)

TACT_LANGUAGE_SERVER_RELEASE = ReleaseAssetTool(
    repo="tact-lang/tact-language-server",
    asset_template="vscode-tact-{bare_version}.vsix",
    directory_prefix="tact-lsp",
    entry_point="extension/dist/server.js",
)

TACT_LANGUAGE_SERVER_PACKAGE = RegistryPackageTool(
    package="@tact-lang/tact-language-server",
    entry_point="node_modules/@tact-lang/tact-language-server/dist/server.js",
)

PRESETS: dict[str, ToolSpec] = {
    "ton": TON_LANGUAGE_SERVER,
    "tact": TACT_LANGUAGE_SERVER_PACKAGE,
    "tact-release": TACT_LANGUAGE_SERVER_RELEASE,
}

DEFAULT_TOOLS: dict[str, ToolSpec] = {
    "func": TON_LANGUAGE_SERVER,
    "tolk": TON_LANGUAGE_SERVER,
    "fift": TON_LANGUAGE_SERVER,
    "tlb": TON_LANGUAGE_SERVER,
    "tact": TACT_LANGUAGE_SERVER_PACKAGE,
}


def _require(tool_id: str, entry: Mapping[str, Any], key: str) -> str:
    value = entry.get(key)
    if not isinstance(value, str) or not value:
        msg = f"tools.{tool_id}: missing or invalid '{key}'"
        raise ConfigurationError(msg)
    return value


ASSET_PLACEHOLDERS = frozenset({"version", "bare_version"})


def _asset_template(tool_id: str, entry: Mapping[str, Any]) -> str:
    """Return the ``asset`` template after checking its placeholders."""
    template = _require(tool_id, entry, "asset")
    try:
        fields = [field for _, field, _, _ in Formatter().parse(template) if field is not None]
    except ValueError as e:
        msg = f"tools.{tool_id}: malformed 'asset' template: {e}"
        raise ConfigurationError(msg) from e

    unknown = sorted({field for field in fields if field not in ASSET_PLACEHOLDERS})
    if unknown:
        allowed = ", ".join(f"{{{name}}}" for name in sorted(ASSET_PLACEHOLDERS))
        msg = (
            f"tools.{tool_id}: unknown placeholder(s) in 'asset' template: "
            f"{', '.join(unknown)} (allowed: {allowed})"
        )
        raise ConfigurationError(msg)
    return template


def parse_tool_entry(tool_id: str, entry: Any) -> ToolSpec:
    """Turn one ``tools.<id>`` configuration value into a routing entry.

    ``entry`` is either a preset name or a mapping with ``kind`` set to
    ``release`` or ``registry``.

    Raises
    ------
    ConfigurationError
        If the entry is neither a known preset nor a valid definition
    """
    if isinstance(entry, str):
        if entry not in PRESETS:
            msg = f"tools.{tool_id}: unknown preset '{entry}'"
            raise ConfigurationError(msg)
        return PRESETS[entry]

    if not isinstance(entry, Mapping):
        msg = f"tools.{tool_id}: expected a preset name or a mapping"
        raise ConfigurationError(msg)

    kind = entry.get("kind")
    if kind == ToolKind.RELEASE.value:
        archive = entry.get("archive", ArchiveKind.ZIP.value)
        try:
            archive_kind = ArchiveKind(archive)
        except ValueError as e:
            msg = f"tools.{tool_id}: unknown archive kind '{archive}'"
            raise ConfigurationError(msg) from e
        return ReleaseAssetTool(
            repo=_require(tool_id, entry, "repo"),
            asset_template=_asset_template(tool_id, entry),
            directory_prefix=_require(tool_id, entry, "directory_prefix"),
            entry_point=_require(tool_id, entry, "entry_point"),
            archive_kind=archive_kind,
        )
    if kind == ToolKind.REGISTRY.value:
        return RegistryPackageTool(
            package=_require(tool_id, entry, "package"),
            entry_point=_require(tool_id, entry, "entry_point"),
        )

    msg = f"tools.{tool_id}: unknown kind '{kind}'"
    raise ConfigurationError(msg)


def build_tool_table(cfg: Mapping[str, Any] | None) -> dict[str, ToolSpec]:
    """Build the routing table from the ``tools`` configuration section.

    A missing or empty section yields the built-in table.
    """
    tools = (cfg or {}).get("tools")
    if not tools:
        return dict(DEFAULT_TOOLS)
    if not isinstance(tools, Mapping):
        msg = "tools: expected a mapping of tool identifiers"
        raise ConfigurationError(msg)
    return {str(tool_id): parse_tool_entry(str(tool_id), entry) for tool_id, entry in tools.items()}


class ToolDispatcher(Obj):
    """Route tool identifiers to a resolver and wrap the result as a command.

    Release tools share one ``ReleaseAssetResolver``. Each registry tool gets
    its own ``RegistryPackageResolver`` so that verification state is never
    shared between packages.
    """

    def __init__(
        self,
        tools: Mapping[str, ToolSpec],
        release_resolver: ReleaseAssetResolver,
        registry_source: RegistrySource,
        status_sink: StatusSink,
        install_root: Path | None = None,
        cache_verification: bool = True,
        interpreter: Callable[[], str] = find_node_binary,
        default_env: Mapping[str, str] | None = None,
        ctx=None,
    ) -> None:
        super().__init__(ctx)
        self.tools = dict(tools)
        self.release_resolver = release_resolver
        self.registry_source = registry_source
        self.status_sink = status_sink
        self.install_root = install_root
        self.cache_verification = cache_verification
        self.interpreter = interpreter
        self.default_env = dict(default_env or {})
        self._registry_resolvers: dict[str, RegistryPackageResolver] = {}

    @classmethod
    def from_config(
        cls,
        cfg: Mapping[str, Any] | None = None,
        status_sink: StatusSink | None = None,
        default_env: Mapping[str, str] | None = None,
        ctx=None,
    ) -> "ToolDispatcher":
        """Wire a dispatcher with the GitHub and npm sources.

        Parameters
        ----------
        cfg : Mapping, optional
            Merged configuration (see ``load_merged_config``)
        status_sink : StatusSink, optional
            Progress sink; logs status updates when omitted
        default_env : Mapping, optional
            Environment handed to every resolved command
        ctx : TonkitContext, optional
            Context for logging
        """
        cfg = cfg or {}
        provisioning = cfg.get("provisioning", {}) or {}
        runtime = cfg.get("runtime", {}) or {}

        cache_dir = runtime_config.get_cache_dir() or provisioning.get("cache_dir")
        root = Path(cache_dir).expanduser() if cache_dir else None
        timeout = provisioning.get("http_timeout")
        node_path = runtime.get("node")
        sink = status_sink or LoggingStatusSink(ctx)

        release_resolver = ReleaseAssetResolver(
            source=GitHubReleasesSource(ctx=ctx, timeout=timeout),
            fetcher=ArchiveFetcher(ctx=ctx, timeout=timeout),
            status_sink=sink,
            cache_root=root,
            ctx=ctx,
        )
        return cls(
            tools=build_tool_table(cfg),
            release_resolver=release_resolver,
            registry_source=NpmRegistrySource(ctx=ctx, prefix=root, timeout=timeout),
            status_sink=sink,
            install_root=root,
            cache_verification=bool(provisioning.get("verify_once", True)),
            interpreter=lambda: find_node_binary(node_path),
            default_env=default_env,
            ctx=ctx,
        )

    def tool_for(self, tool_id: str) -> ToolSpec:
        """Return the routing entry for ``tool_id``.

        Raises
        ------
        UnsupportedToolError
            If ``tool_id`` is not in the table
        """
        tool = self.tools.get(tool_id)
        if tool is None:
            raise UnsupportedToolError(tool_id)
        return tool

    def registry_resolver(self, tool_id: str) -> RegistryPackageResolver:
        resolver = self._registry_resolvers.get(tool_id)
        if resolver is None:
            resolver = RegistryPackageResolver(
                source=self.registry_source,
                status_sink=self.status_sink,
                install_root=self.install_root,
                cache_verification=self.cache_verification,
                ctx=self.ctx,
            )
            self._registry_resolvers[tool_id] = resolver
        return resolver

    def resolve_path(self, tool_id: str) -> Path:
        """Resolve the entry point of ``tool_id`` without wrapping it."""
        return self._resolve(tool_id, self.tool_for(tool_id))

    def _resolve(self, tool_id: str, tool: ToolSpec) -> Path:
        if isinstance(tool, ReleaseAssetTool):
            return self.release_resolver.resolve(tool_id, tool)
        return self.registry_resolver(tool_id).resolve(tool_id, tool)

    def command_for(self, tool_id: str) -> ResolvedCommand:
        """Resolve ``tool_id`` and return the command that launches it.

        The entry point is anchored against the process working directory at
        call time, which must be the directory tool-relative paths resolve
        against.

        Raises
        ------
        UnsupportedToolError
            If ``tool_id`` is not in the table
        ProvisioningError
            Any failure raised by the underlying resolver
        """
        tool = self.tool_for(tool_id)
        server_path = self._resolve(tool_id, tool)
        interpreter = self.interpreter()
        self.ctx.debug("Resolved %s (%s) to %s", tool_id, type(tool).__name__, server_path)
        return ResolvedCommand(
            command=interpreter,
            args=[str(anchor_path(server_path)), LSP_STDIO_FLAG],
            env=dict(self.default_env),
        )
