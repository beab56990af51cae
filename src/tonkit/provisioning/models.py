"""Data types produced and consumed by the provisioning layer."""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class ReleaseAsset:
    """A named downloadable attachment of a release."""

    name: str
    download_url: str


@dataclass(frozen=True)
class ReleaseDescriptor:
    """Latest stable release of a repository.

    Attributes
    ----------
    version : str
        Release tag as published (may carry a ``v`` prefix)
    assets : tuple[ReleaseAsset, ...]
        Attachments in the order the source listed them
    """

    version: str
    assets: tuple[ReleaseAsset, ...] = ()

    @property
    def bare_version(self) -> str:
        """Version with a leading ``v`` removed."""
        return self.version.lstrip("v")

    def find_asset(self, name: str) -> ReleaseAsset | None:
        """Return the asset named exactly ``name`` (case-sensitive)."""
        for asset in self.assets:
            if asset.name == name:
                return asset
        return None


@dataclass(frozen=True)
class InstalledPackageState:
    """Installed vs. latest version of a registry package."""

    installed_version: str | None
    latest_version: str

    @property
    def needs_install(self) -> bool:
        return self.installed_version != self.latest_version


@dataclass
class ResolvedCommand:
    """Runnable command handed to the host's process spawner.

    Attributes
    ----------
    command : str
        Interpreter binary path
    args : list[str]
        Arguments, entry point first
    env : dict[str, str]
        Extra environment for the process
    """

    command: str
    args: list[str] = field(default_factory=list)
    env: dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary format."""
        return {"command": self.command, "args": list(self.args), "env": dict(self.env)}
