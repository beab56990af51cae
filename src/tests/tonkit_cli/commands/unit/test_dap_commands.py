"""Tests for debug adapter commands."""

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from tonkit_cli.cli import cli
from tonkit_cli.core.constants import ExitCode


@pytest.fixture
def cli_runner() -> CliRunner:
    """Click test runner."""
    return CliRunner()


class TestDapScenario:
    """Test scenario generation."""

    def test_launch_scenario(self, cli_runner: CliRunner, work_dir: Path) -> None:
        """Test the scenario printed for a launch request."""
        result = cli_runner.invoke(
            cli,
            [
                "dap",
                "scenario",
                "--program",
                "a.fif",
                "--cwd",
                "/tmp",
                "--arg",
                "x",
                "--env",
                "A=1",
            ],
        )

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["adapter"] == "ton"
        assert data["label"] == "TON: launch"
        assert data["config"] == (
            '{"type":"tvm","request":"launch","program":"a.fif","cwd":"/tmp",'
            '"args":["x"],"env":{"A":"1"},"stopOnEntry":false}'
        )

    def test_stop_on_entry_flag(self, cli_runner: CliRunner, work_dir: Path) -> None:
        """Test that --stop-on-entry reaches the adapter config."""
        result = cli_runner.invoke(
            cli,
            ["dap", "scenario", "--program", "a.fif", "--stop-on-entry"],
        )

        assert result.exit_code == 0
        assert json.loads(json.loads(result.output)["config"])["stopOnEntry"] is True

    def test_attach_rejected(self, cli_runner: CliRunner, work_dir: Path) -> None:
        """Test that attach scenarios fail with an error."""
        result = cli_runner.invoke(cli, ["dap", "scenario", "--attach", "42"])

        assert result.exit_code == ExitCode.GENERAL_ERROR
        assert "attach is not supported" in result.output

    def test_program_required(self, cli_runner: CliRunner, work_dir: Path) -> None:
        """Test that launch scenarios need --program."""
        result = cli_runner.invoke(cli, ["dap", "scenario"])

        assert result.exit_code == 2
        assert "--program is required" in result.output

    def test_bad_env_entry(self, cli_runner: CliRunner, work_dir: Path) -> None:
        """Test that --env must be KEY=VALUE."""
        result = cli_runner.invoke(
            cli,
            ["dap", "scenario", "--program", "a.fif", "--env", "NOVALUE"],
        )

        assert result.exit_code == 2
        assert "expected KEY=VALUE" in result.output


class TestDapBinary:
    """Test adapter connection output."""

    def test_default_connection(self, cli_runner: CliRunner, work_dir: Path) -> None:
        """Test that a bare launch config gets the default endpoint."""
        result = cli_runner.invoke(
            cli,
            ["dap", "binary", '{"request":"launch","command":"main.fif"}'],
        )

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["connection"] == {"host": "127.0.0.1", "port": 42069, "timeout": 5000}
        assert data["request_args"]["request"] == "launch"
        assert json.loads(data["request_args"]["configuration"])["program"] == "main.fif"
        assert data["envs"] == {}

    def test_config_from_stdin(self, cli_runner: CliRunner, work_dir: Path) -> None:
        """Test reading the config from stdin with -."""
        result = cli_runner.invoke(
            cli,
            ["dap", "binary", "-"],
            input='{"request":"launch","port":9000}',
        )

        assert result.exit_code == 0
        assert json.loads(result.output)["connection"]["port"] == 9000

    def test_connection_options(self, cli_runner: CliRunner, work_dir: Path) -> None:
        """Test that --host/--port/--timeout form the connection template."""
        result = cli_runner.invoke(
            cli,
            [
                "dap",
                "binary",
                '{"request":"launch","port":9000}',
                "--host",
                "10.0.0.2",
                "--timeout",
                "100",
            ],
        )

        assert result.exit_code == 0
        assert json.loads(result.output)["connection"] == {
            "host": "10.0.0.2",
            "port": 42069,
            "timeout": 100,
        }

    def test_project_debug_defaults(self, cli_runner: CliRunner, work_dir: Path) -> None:
        """Test that .tonkit.yaml debug settings change the defaults."""
        (work_dir / ".tonkit.yaml").write_text("debug:\n  port: 5000\n")

        result = cli_runner.invoke(cli, ["dap", "binary", '{"request":"launch"}'])

        assert result.exit_code == 0
        assert json.loads(result.output)["connection"]["port"] == 5000

    @pytest.mark.parametrize(
        ("debug", "message"),
        [
            ("host: localhost", "debug.host: expected an IPv4 address"),
            ("port: abc", "debug.port: expected an integer"),
            ("port: null", "debug.port: value must not be null"),
            ("timeout_ms: -5", "debug.timeout_ms: -5 is out of range"),
        ],
    )
    def test_invalid_project_debug_settings(
        self,
        cli_runner: CliRunner,
        work_dir: Path,
        debug: str,
        message: str,
    ) -> None:
        """Test that malformed debug settings exit with the config error code."""
        (work_dir / ".tonkit.yaml").write_text(f"debug:\n  {debug}\n")

        result = cli_runner.invoke(cli, ["dap", "binary", '{"request":"launch"}'])

        assert result.exit_code == ExitCode.CONFIG_ERROR
        assert message in result.output

    def test_attach_rejected(self, cli_runner: CliRunner, work_dir: Path) -> None:
        """Test that attach configs exit non-zero."""
        result = cli_runner.invoke(cli, ["dap", "binary", '{"request":"attach"}'])

        assert result.exit_code == ExitCode.GENERAL_ERROR
        assert "unsupported request kind 'attach'" in result.output

    def test_invalid_json(self, cli_runner: CliRunner, work_dir: Path) -> None:
        """Test that unparsable configs exit non-zero."""
        result = cli_runner.invoke(cli, ["dap", "binary", "{"])

        assert result.exit_code == ExitCode.GENERAL_ERROR
        assert "not a valid JSON" in result.output

    def test_invalid_host_option(self, cli_runner: CliRunner, work_dir: Path) -> None:
        """Test that --host must be IPv4."""
        result = cli_runner.invoke(
            cli,
            ["dap", "binary", '{"request":"launch"}', "--host", "localhost"],
        )

        assert result.exit_code == 2
        assert "not an IPv4 address" in result.output
