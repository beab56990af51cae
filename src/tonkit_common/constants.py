"""Constants shared by all tonkit packages."""

from enum import Enum

TONKIT_HOME_DIR = ".tonkit"
LOG_SUBDIR = "log"
CONFIG_DIR_NAME = "tonkit"
USER_CONFIG_FILE = "config.yaml"
PROJECT_CONFIG_FILE = ".tonkit.yaml"

DEFAULT_LOG_FILE = "tonkit.log"
DEFAULT_LOG_LEVEL = "INFO"
VALID_LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

# Network
DEFAULT_HTTP_TIMEOUT_S = 30.0
GITHUB_API_URL = "https://api.github.com"
NPM_REGISTRY_URL = "https://registry.npmjs.org"

# Language server invocation
LSP_STDIO_FLAG = "--stdio"
NODE_BINARY = "node"
NPM_BINARY = "npm"

# Debug adapter connection defaults
DEBUG_ADAPTER_TYPE = "tvm"
DEFAULT_DEBUG_HOST = "127.0.0.1"
DEFAULT_DEBUG_PORT = 42069
DEFAULT_DEBUG_TIMEOUT_MS = 5000


class EnvVars:
    """Environment variable names read by tonkit."""

    LOG_LEVEL = "TONKIT_LOG_LEVEL"
    LOG_FILE = "TONKIT_LOG_FILE"
    CONSOLE_LOGGING = "TONKIT_CONSOLE_LOGGING"
    CACHE_DIR = "TONKIT_CACHE_DIR"
    NODE_PATH = "TONKIT_NODE_PATH"
    HTTP_TIMEOUT = "TONKIT_HTTP_TIMEOUT"
    NPM_REGISTRY = "TONKIT_NPM_REGISTRY"
    GITHUB_TOKEN = "GITHUB_TOKEN"


class ToolKind(str, Enum):
    """Resolver family a tool identifier is routed to."""

    RELEASE = "release"
    REGISTRY = "registry"
