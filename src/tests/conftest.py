"""Root pytest configuration and shared fixtures for the tonkit test suite."""

import sys
from pathlib import Path

import pytest

# Add src directory to path for imports
src_path = Path(__file__).parent.parent
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from tests._fixtures.unit.context import mock_ctx  # noqa: E402, F401
from tests._fixtures.unit.provisioning import (  # noqa: E402, F401
    status_sink,
    ton_release,
    ton_tool,
)
from tonkit_common.constants import EnvVars  # noqa: E402


@pytest.fixture(autouse=True)
def isolated_environment(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    """Keep tests away from the user's home, environment and log files."""
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.setenv(EnvVars.LOG_FILE, str(tmp_path / "log" / "tonkit.log"))
    for name in (
        EnvVars.LOG_LEVEL,
        EnvVars.CONSOLE_LOGGING,
        EnvVars.CACHE_DIR,
        EnvVars.NODE_PATH,
        EnvVars.HTTP_TIMEOUT,
        EnvVars.NPM_REGISTRY,
        EnvVars.GITHUB_TOKEN,
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def work_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run the test from an empty working directory."""
    directory = tmp_path / "work"
    directory.mkdir()
    monkeypatch.chdir(directory)
    return directory
