"""Environment-driven runtime configuration."""

import os
from pathlib import Path

from tonkit_common.constants import (
    DEFAULT_HTTP_TIMEOUT_S,
    DEFAULT_LOG_LEVEL,
    NPM_REGISTRY_URL,
    EnvVars,
)
from tonkit_common.env import reader


class ConfigManager:
    """Read-through accessor for ``TONKIT_*`` environment variables.

    Values are read on every access so that CLI flags which update the
    environment take effect for code that runs afterwards.
    """

    _instance: "ConfigManager | None" = None

    def __new__(cls) -> "ConfigManager":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def set_env_var(self, name: str, value: str) -> None:
        """Set an environment variable for the current process."""
        os.environ[name] = value

    def get_log_level(self) -> str:
        """Return the configured log level name (upper-case)."""
        return (reader.read_str(EnvVars.LOG_LEVEL) or DEFAULT_LOG_LEVEL).upper()

    def get_log_file(self) -> str | None:
        """Return an explicit log file path, if configured."""
        return reader.read_str(EnvVars.LOG_FILE)

    def is_console_logging_enabled(self) -> bool:
        """Whether log records are also written to the console."""
        return reader.read_bool(EnvVars.CONSOLE_LOGGING, default=False)

    def get_cache_dir(self) -> Path | None:
        """Return the provisioning cache root override, if any."""
        value = reader.read_str(EnvVars.CACHE_DIR)
        return Path(value).expanduser() if value else None

    def get_node_path(self) -> str | None:
        """Return an explicit node binary path, if configured."""
        return reader.read_str(EnvVars.NODE_PATH)

    def get_http_timeout(self) -> float:
        """Return the per-request HTTP timeout in seconds."""
        value = reader.read_float(EnvVars.HTTP_TIMEOUT, DEFAULT_HTTP_TIMEOUT_S)
        return value if value and value > 0 else DEFAULT_HTTP_TIMEOUT_S

    def get_github_token(self) -> str | None:
        """Return the GitHub API token used to lift rate limits."""
        return reader.read_str(EnvVars.GITHUB_TOKEN)

    def get_npm_registry(self) -> str:
        """Return the npm registry base URL."""
        registry = reader.read_str(EnvVars.NPM_REGISTRY) or NPM_REGISTRY_URL
        return registry.rstrip("/")


config = ConfigManager()
