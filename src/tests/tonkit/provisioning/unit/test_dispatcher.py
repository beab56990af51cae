"""Unit tests for ToolDispatcher and tool table parsing."""

from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from tests._fixtures.unit.provisioning import (
    FakeFetcher,
    FakeRegistrySource,
    FakeReleaseSource,
)
from tonkit.common.errors import (
    ConfigurationError,
    ReleaseLookupError,
    RuntimeNotFoundError,
    UnsupportedToolError,
)
from tonkit.provisioning.archive import ArchiveKind
from tonkit.provisioning.dispatcher import (
    DEFAULT_TOOLS,
    TACT_LANGUAGE_SERVER_PACKAGE,
    TACT_LANGUAGE_SERVER_RELEASE,
    TON_LANGUAGE_SERVER,
    ToolDispatcher,
    build_tool_table,
    parse_tool_entry,
)
from tonkit.provisioning.models import ReleaseDescriptor
from tonkit.provisioning.registry import RegistryPackageTool
from tonkit.provisioning.release import ReleaseAssetResolver, ReleaseAssetTool
from tonkit.provisioning.status import RecordingStatusSink
from tonkit_common.config import default_config

NODE = "/usr/bin/node"
TON_ENTRY = "ton-lsp-v1.4.0/ton-language-server/server.js"


def write_tact_entry(root: Path) -> None:
    entry = root / TACT_LANGUAGE_SERVER_PACKAGE.entry_point
    entry.parent.mkdir(parents=True, exist_ok=True)
    entry.write_text("// tact")


@pytest.fixture
def dispatcher_parts(
    work_dir: Path,
    mock_ctx: MagicMock,
    ton_release: ReleaseDescriptor,
    status_sink: RecordingStatusSink,
) -> dict:
    """Fakes wired into a dispatcher rooted at the working directory."""
    release_source = FakeReleaseSource(release=ton_release)
    fetcher = FakeFetcher(files={"ton-language-server/server.js": "// ton"})
    registry_source = FakeRegistrySource(on_install=lambda: write_tact_entry(work_dir))
    resolver = ReleaseAssetResolver(
        source=release_source,
        fetcher=fetcher,  # type: ignore[arg-type]
        status_sink=status_sink,
        ctx=mock_ctx,
    )
    dispatcher = ToolDispatcher(
        tools=DEFAULT_TOOLS,
        release_resolver=resolver,
        registry_source=registry_source,
        status_sink=status_sink,
        interpreter=lambda: NODE,
        default_env={"NODE_OPTIONS": "--max-old-space-size=4096"},
        ctx=mock_ctx,
    )
    return {
        "dispatcher": dispatcher,
        "release_source": release_source,
        "fetcher": fetcher,
        "registry_source": registry_source,
        "work_dir": work_dir,
    }


# =============================================================================
# TestToolTable
# =============================================================================


class TestToolTable:
    """Tests for the built-in and configured routing tables."""

    @pytest.mark.parametrize("tool_id", ["func", "tolk", "fift", "tlb"])
    def test_ton_family_shares_one_server(self, tool_id: str) -> None:
        """Test that the TON languages route to the same release asset."""
        assert DEFAULT_TOOLS[tool_id] is TON_LANGUAGE_SERVER

    def test_ton_server_naming(self) -> None:
        """Test the TON language server asset and layout."""
        assert TON_LANGUAGE_SERVER.repo == "ton-blockchain/ton-language-server"
        assert TON_LANGUAGE_SERVER.asset_template == "ton-language-server-{version}.zip"
        assert TON_LANGUAGE_SERVER.directory_prefix == "ton-lsp"
        assert TON_LANGUAGE_SERVER.entry_point == "ton-language-server/server.js"

    def test_tact_release_naming(self) -> None:
        """Test the Tact release asset and layout."""
        release = ReleaseDescriptor(version="v0.8.1")

        assert TACT_LANGUAGE_SERVER_RELEASE.asset_name(release) == "vscode-tact-0.8.1.vsix"
        assert TACT_LANGUAGE_SERVER_RELEASE.entry_point == "extension/dist/server.js"

    def test_default_config_matches_builtin_table(self) -> None:
        """Test that the default YAML tools section reproduces DEFAULT_TOOLS."""
        assert build_tool_table(default_config()) == DEFAULT_TOOLS

    def test_missing_section_uses_builtin_table(self) -> None:
        """Test that no tools section yields the built-in table."""
        assert build_tool_table({}) == DEFAULT_TOOLS
        assert build_tool_table(None) == DEFAULT_TOOLS

    def test_preset_override(self) -> None:
        """Test that a preset name swaps the resolver family."""
        table = build_tool_table({"tools": {"tact": "tact-release"}})

        assert table == {"tact": TACT_LANGUAGE_SERVER_RELEASE}

    def test_release_definition(self) -> None:
        """Test parsing an explicit release definition."""
        tool = parse_tool_entry(
            "mylang",
            {
                "kind": "release",
                "repo": "owner/mylang",
                "asset": "server-{version}.tar.gz",
                "directory_prefix": "mylang-lsp",
                "entry_point": "server.js",
                "archive": "gzip_tar",
            },
        )

        assert tool == ReleaseAssetTool(
            repo="owner/mylang",
            asset_template="server-{version}.tar.gz",
            directory_prefix="mylang-lsp",
            entry_point="server.js",
            archive_kind=ArchiveKind.GZIP_TAR,
        )

    def test_registry_definition(self) -> None:
        """Test parsing an explicit registry definition."""
        tool = parse_tool_entry(
            "mylang",
            {"kind": "registry", "package": "mylang-ls", "entry_point": "node_modules/x.js"},
        )

        assert tool == RegistryPackageTool(package="mylang-ls", entry_point="node_modules/x.js")

    @pytest.mark.parametrize(
        ("entry", "message"),
        [
            ("nope", "unknown preset 'nope'"),
            (42, "expected a preset name or a mapping"),
            ({"kind": "git"}, "unknown kind 'git'"),
            ({"kind": "registry", "entry_point": "x.js"}, "missing or invalid 'package'"),
            (
                {
                    "kind": "release",
                    "repo": "o/r",
                    "asset": "a.zip",
                    "directory_prefix": "p",
                    "entry_point": "e.js",
                    "archive": "rar",
                },
                "unknown archive kind 'rar'",
            ),
        ],
    )
    def test_invalid_entries(self, entry: object, message: str) -> None:
        """Test that malformed entries raise ConfigurationError."""
        with pytest.raises(ConfigurationError, match=message):
            parse_tool_entry("mylang", entry)

    @pytest.mark.parametrize(
        ("asset", "message"),
        [
            ("server-{ver}.zip", "unknown placeholder.*: ver "),
            ("server-{version}-{arch}.zip", "unknown placeholder.*: arch "),
            ("server-{0}.zip", "unknown placeholder.*: 0 "),
            ("server-{version.major}.zip", "unknown placeholder.*: version.major "),
            ("server-{version.zip", "malformed 'asset' template"),
            ("server-}.zip", "malformed 'asset' template"),
        ],
    )
    def test_invalid_asset_template(self, asset: str, message: str) -> None:
        """Test that asset templates may only use the version placeholders."""
        entry = {
            "kind": "release",
            "repo": "o/r",
            "asset": asset,
            "directory_prefix": "p",
            "entry_point": "e.js",
        }

        with pytest.raises(ConfigurationError, match=message):
            parse_tool_entry("mylang", entry)

    def test_asset_template_placeholders(self) -> None:
        """Test that both version placeholders and escaped braces are accepted."""
        tool = parse_tool_entry(
            "mylang",
            {
                "kind": "release",
                "repo": "o/r",
                "asset": "server-{version}-{bare_version}-{{x}}.zip",
                "directory_prefix": "p",
                "entry_point": "e.js",
            },
        )

        assert tool.asset_template == "server-{version}-{bare_version}-{{x}}.zip"

    def test_tools_section_must_be_mapping(self) -> None:
        """Test that a list-valued tools section is rejected."""
        with pytest.raises(ConfigurationError):
            build_tool_table({"tools": ["func"]})


# =============================================================================
# TestToolDispatcherRouting
# =============================================================================


class TestToolDispatcherRouting:
    """Tests for tool_for() and resolve_path()."""

    def test_unknown_tool(self, dispatcher_parts: dict) -> None:
        """Test that an unknown identifier is rejected by name."""
        dispatcher = dispatcher_parts["dispatcher"]

        with pytest.raises(UnsupportedToolError) as exc_info:
            dispatcher.command_for("solidity")

        assert exc_info.value.tool_id == "solidity"
        assert "solidity" in str(exc_info.value)
        assert str(exc_info.value) == "Unrecognized language server for solidity"
        assert dispatcher_parts["release_source"].calls == []
        assert dispatcher_parts["registry_source"].network_calls == 0

    def test_release_tool_routing(self, dispatcher_parts: dict) -> None:
        """Test that func goes through the release resolver."""
        path = dispatcher_parts["dispatcher"].resolve_path("func")

        assert path == Path(TON_ENTRY)
        assert dispatcher_parts["registry_source"].network_calls == 0

    def test_registry_tool_routing(self, dispatcher_parts: dict) -> None:
        """Test that tact goes through the registry resolver."""
        path = dispatcher_parts["dispatcher"].resolve_path("tact")

        assert path == Path(TACT_LANGUAGE_SERVER_PACKAGE.entry_point)
        assert dispatcher_parts["release_source"].calls == []

    def test_registry_resolver_is_reused(self, dispatcher_parts: dict) -> None:
        """Test that repeated calls share the verification state."""
        dispatcher = dispatcher_parts["dispatcher"]
        dispatcher.resolve_path("tact")
        dispatcher.resolve_path("tact")

        assert dispatcher.registry_resolver("tact") is dispatcher.registry_resolver("tact")
        assert dispatcher_parts["registry_source"].latest_calls == 1


# =============================================================================
# TestToolDispatcherCommand
# =============================================================================


class TestToolDispatcherCommand:
    """Tests for command_for()."""

    @pytest.mark.parametrize("tool_id", ["func", "tolk", "fift", "tlb", "tact"])
    def test_command_shape(self, dispatcher_parts: dict, tool_id: str) -> None:
        """Test that every tool yields node <absolute entry> --stdio."""
        resolved = dispatcher_parts["dispatcher"].command_for(tool_id)

        assert resolved.command == NODE
        assert len(resolved.args) == 2
        assert Path(resolved.args[0]).is_absolute()
        assert Path(resolved.args[0]).is_file()
        assert resolved.args[1] == "--stdio"

    def test_entry_anchored_at_working_directory(self, dispatcher_parts: dict) -> None:
        """Test that the relative entry point is joined to the cwd."""
        resolved = dispatcher_parts["dispatcher"].command_for("func")

        assert resolved.args[0] == str(dispatcher_parts["work_dir"] / TON_ENTRY)

    def test_default_env_is_copied(self, dispatcher_parts: dict) -> None:
        """Test that every command carries its own copy of the default env."""
        dispatcher = dispatcher_parts["dispatcher"]
        first = dispatcher.command_for("func")
        first.env["EXTRA"] = "1"

        second = dispatcher.command_for("func")

        assert second.env == {"NODE_OPTIONS": "--max-old-space-size=4096"}

    def test_to_dict(self, dispatcher_parts: dict) -> None:
        """Test the serialized command."""
        data = dispatcher_parts["dispatcher"].command_for("tact").to_dict()

        assert set(data) == {"command", "args", "env"}
        assert data["args"][1] == "--stdio"

    def test_resolver_errors_propagate(self, dispatcher_parts: dict) -> None:
        """Test that resolver failures reach the caller unchanged."""
        dispatcher_parts["release_source"].error = ReleaseLookupError("o/r", "boom")

        with pytest.raises(ReleaseLookupError):
            dispatcher_parts["dispatcher"].command_for("func")

    def test_tool_looked_up_once(self, dispatcher_parts: dict) -> None:
        """Test that command_for() consults the routing table a single time."""
        dispatcher = dispatcher_parts["dispatcher"]

        with patch.object(dispatcher, "tool_for", wraps=dispatcher.tool_for) as mock_tool_for:
            dispatcher.command_for("func")

        mock_tool_for.assert_called_once_with("func")

    def test_missing_interpreter(self, dispatcher_parts: dict) -> None:
        """Test that a missing node binary surfaces as RuntimeNotFoundError."""
        dispatcher = dispatcher_parts["dispatcher"]

        def no_node() -> str:
            raise RuntimeNotFoundError("node")

        dispatcher.interpreter = no_node

        with pytest.raises(RuntimeNotFoundError):
            dispatcher.command_for("func")


# =============================================================================
# TestToolDispatcherFromConfig
# =============================================================================


class TestToolDispatcherFromConfig:
    """Tests for wiring a dispatcher from configuration."""

    def test_defaults(self) -> None:
        """Test that the default config produces relative cache paths."""
        dispatcher = ToolDispatcher.from_config(default_config())

        assert dispatcher.tools == DEFAULT_TOOLS
        assert dispatcher.install_root is None
        assert dispatcher.release_resolver.cache_root is None
        assert dispatcher.cache_verification is True

    def test_cache_dir_from_config(self, tmp_path: Path) -> None:
        """Test that provisioning.cache_dir roots both resolvers."""
        cfg = default_config()
        cfg["provisioning"]["cache_dir"] = str(tmp_path)
        cfg["provisioning"]["verify_once"] = False

        dispatcher = ToolDispatcher.from_config(cfg)

        assert dispatcher.install_root == tmp_path
        assert dispatcher.release_resolver.cache_root == tmp_path
        assert dispatcher.registry_source.prefix == tmp_path
        assert dispatcher.cache_verification is False

    def test_cache_dir_env_wins(
        self,
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        """Test that TONKIT_CACHE_DIR overrides the config file."""
        monkeypatch.setenv("TONKIT_CACHE_DIR", str(tmp_path / "env"))
        cfg = default_config()
        cfg["provisioning"]["cache_dir"] = str(tmp_path / "cfg")

        dispatcher = ToolDispatcher.from_config(cfg)

        assert dispatcher.install_root == tmp_path / "env"
