"""Registry package resolver.

Keeps a language server installed from a package registry up to date. Once a
resolver instance has verified its package it stops consulting the registry for
as long as the entry point exists; version drift during that window is
accepted.
"""

from dataclasses import dataclass
from pathlib import Path

from tonkit.common.errors import InstallError, InstallIncompleteError
from tonkit.patterns import Obj
from tonkit.provisioning.models import InstalledPackageState
from tonkit.provisioning.sources.base import RegistrySource
from tonkit.provisioning.status import InstallationStatus, StatusSink
from tonkit_common.io import is_regular_file


@dataclass(frozen=True)
class RegistryPackageTool:
    """Routing entry for a tool distributed as a registry package.

    Attributes
    ----------
    package : str
        Registry package name
    entry_point : str
        Entry-point path relative to the install root
    """

    package: str
    entry_point: str


class RegistryPackageResolver(Obj):
    """Resolve a registry package, reinstalling when a newer version exists.

    Parameters
    ----------
    source : RegistrySource
        Registry to query and install from
    status_sink : StatusSink
        Receives progress updates
    install_root : Path, optional
        Directory the entry point is relative to; paths stay relative to the
        working directory when omitted
    cache_verification : bool
        When False the ``verified`` flag is never set and every call checks
        the registry
    ctx : TonkitContext, optional
        Context for logging
    """

    def __init__(
        self,
        source: RegistrySource,
        status_sink: StatusSink,
        install_root: Path | None = None,
        cache_verification: bool = True,
        ctx=None,
    ) -> None:
        super().__init__(ctx)
        self.source = source
        self.status_sink = status_sink
        self.install_root = install_root
        self.cache_verification = cache_verification
        self.verified = False

    def entry_path(self, tool: RegistryPackageTool) -> Path:
        if self.install_root is None:
            return Path(tool.entry_point)
        return self.install_root / tool.entry_point

    def package_state(self, package: str) -> InstalledPackageState:
        """Query latest and installed versions of ``package``.

        Raises
        ------
        RegistryLookupError
            If the latest version cannot be determined
        """
        latest = self.source.latest_version(package)
        return InstalledPackageState(
            installed_version=self.source.installed_version(package),
            latest_version=latest,
        )

    def resolve(self, tool_id: str, tool: RegistryPackageTool) -> Path:
        """Return the package entry point, installing or updating it if needed.

        Parameters
        ----------
        tool_id : str
            Identifier reported to the status sink
        tool : RegistryPackageTool
            Package and entry point to resolve

        Returns
        -------
        Path
            Entry-point path

        Raises
        ------
        RegistryLookupError
            If the registry cannot be queried
        InstallIncompleteError
            If install succeeded but the entry point is still missing
        InstallError
            If install failed and no earlier copy is available
        """
        entry_path = self.entry_path(tool)
        if self.verified and is_regular_file(entry_path):
            return entry_path

        self.status_sink.set_status(tool_id, InstallationStatus.CHECKING_FOR_UPDATE)
        state = self.package_state(tool.package)

        if not is_regular_file(entry_path) or state.needs_install:
            self.status_sink.set_status(tool_id, InstallationStatus.DOWNLOADING)
            self.ctx.info(
                "Installing %s@%s (installed: %s)",
                tool.package,
                state.latest_version,
                state.installed_version,
            )
            if self.source.install(tool.package, state.latest_version):
                if not is_regular_file(entry_path):
                    raise InstallIncompleteError(
                        tool.package,
                        state.latest_version,
                        str(entry_path),
                    )
            elif is_regular_file(entry_path):
                self.ctx.warning(
                    "Failed to update %s to %s, using installed version %s",
                    tool.package,
                    state.latest_version,
                    state.installed_version,
                )
            else:
                raise InstallError(tool.package, state.latest_version)

        if self.cache_verification:
            self.verified = True
        return entry_path
