"""Exception hierarchy for tonkit.

Every error carries the offending identifier or value as an attribute; the
human-readable message is built once in ``__init__`` so callers can surface
``str(error)`` directly.
"""


class TonkitError(Exception):
    """Base class for all tonkit errors."""


class ConfigurationError(TonkitError):
    """Raised when tonkit's own YAML/env configuration is malformed."""


# ---------------------------------------------------------------------------
# Provisioning
# ---------------------------------------------------------------------------


class ProvisioningError(TonkitError):
    """Base class for tool provisioning failures."""


class SourceLookupError(ProvisioningError):
    """A release or registry source could not answer a lookup."""


class ReleaseLookupError(SourceLookupError):
    """No qualifying release could be obtained for a repository."""

    def __init__(self, repo: str, reason: str) -> None:
        self.repo = repo
        self.reason = reason
        super().__init__(f"Failed to look up latest release of {repo}: {reason}")


class RegistryLookupError(SourceLookupError):
    """The package registry could not report a latest version."""

    def __init__(self, package: str, reason: str) -> None:
        self.package = package
        self.reason = reason
        super().__init__(
            f"Failed to look up latest version of package {package}: {reason}",
        )


class AssetNotFoundError(ProvisioningError):
    """A located release carries no asset with the expected name."""

    def __init__(self, asset_name: str, version: str) -> None:
        self.asset_name = asset_name
        self.version = version
        super().__init__(f"No asset named {asset_name} found in release {version}")


class DownloadError(ProvisioningError):
    """Fetching or unpacking an archive failed."""

    def __init__(self, url: str, reason: str) -> None:
        self.url = url
        self.reason = reason
        super().__init__(f"Failed to download {url}: {reason}")


class InstallError(ProvisioningError):
    """Registry install failed and no usable local copy exists."""

    def __init__(self, package: str, version: str) -> None:
        self.package = package
        self.version = version
        super().__init__(f"Failed to install {package}@{version}")


class InstallIncompleteError(ProvisioningError):
    """Registry install reported success but the entry point is missing."""

    def __init__(self, package: str, version: str, entry_path: str) -> None:
        self.package = package
        self.version = version
        self.entry_path = entry_path
        super().__init__(
            f"Installed {package}@{version} but expected entry point "
            f"{entry_path} does not exist",
        )


class UnsupportedToolError(ProvisioningError):
    """The tool identifier has no entry in the dispatch table."""

    def __init__(self, tool_id: str) -> None:
        self.tool_id = tool_id
        super().__init__(f"Unrecognized language server for {tool_id}")


class RuntimeNotFoundError(ProvisioningError):
    """The interpreter needed to run a language server was not found."""

    def __init__(self, runtime: str) -> None:
        self.runtime = runtime
        super().__init__(f"Could not locate the {runtime} runtime binary")


# ---------------------------------------------------------------------------
# Debug bridge
# ---------------------------------------------------------------------------


class DebugBridgeError(TonkitError):
    """Base class for debug session setup failures."""


class InvalidRequestKindError(DebugBridgeError):
    """The ``request`` field is missing or not ``launch``."""

    def __init__(self, value: object) -> None:
        self.value = value
        super().__init__(f"Invalid config: unsupported request kind {value!r}")


class ConfigParseError(DebugBridgeError):
    """The caller's debug configuration does not have the expected shape."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"`config` is not a valid ton config: {reason}")


class UnsupportedOperationError(DebugBridgeError):
    """The adapter does not implement the requested operation."""

    def __init__(self, operation: str) -> None:
        self.operation = operation
        super().__init__(f"{operation} is not supported by this adapter")
