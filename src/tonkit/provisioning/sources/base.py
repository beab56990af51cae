"""Abstract interfaces for release and registry sources."""

from abc import ABC, abstractmethod

from tonkit.provisioning.models import ReleaseDescriptor


class ReleaseSource(ABC):
    """Source of published releases with downloadable assets."""

    @abstractmethod
    def fetch_latest_release(
        self,
        repo: str,
        *,
        require_assets: bool = True,
        pre_release: bool = False,
    ) -> ReleaseDescriptor:
        """Fetch the newest release of ``repo`` that qualifies.

        Parameters
        ----------
        repo : str
            Repository in format "owner/name"
        require_assets : bool
            Skip releases without attachments
        pre_release : bool
            Whether prereleases qualify

        Returns
        -------
        ReleaseDescriptor
            The latest qualifying release

        Raises
        ------
        ReleaseLookupError
            If the source is unreachable or no release qualifies
        """


class RegistrySource(ABC):
    """Package registry able to report versions and install packages."""

    @abstractmethod
    def latest_version(self, package: str) -> str:
        """Return the latest published version of ``package``.

        Raises
        ------
        RegistryLookupError
            If the registry cannot be queried
        """

    @abstractmethod
    def installed_version(self, package: str) -> str | None:
        """Return the locally installed version, or None if not installed."""

    @abstractmethod
    def install(self, package: str, version: str) -> bool:
        """Install ``package`` at ``version``; return whether it succeeded."""
