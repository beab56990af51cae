"""Release asset resolver.

Resolves a language server shipped as a release archive. The cache key is the
release version: ``<prefix>-<version>/`` is populated once and never touched
again, and a missing entry-point file is the only sign that population did not
finish. Two resolutions of the same version therefore converge on the same
directory without any locking.
"""

from dataclasses import dataclass
from pathlib import Path

from tonkit.common.errors import AssetNotFoundError, DownloadError
from tonkit.patterns import Obj
from tonkit.provisioning.archive import ArchiveFetcher, ArchiveKind
from tonkit.provisioning.models import ReleaseDescriptor
from tonkit.provisioning.sources.base import ReleaseSource
from tonkit.provisioning.status import InstallationStatus, StatusSink
from tonkit_common.io import ensure_dir, is_regular_file
from tonkit_common.io.files import FileOperationError


@dataclass(frozen=True)
class ReleaseAssetTool:
    """Routing entry for a tool distributed as a release asset.

    Attributes
    ----------
    repo : str
        Repository in format "owner/name"
    asset_template : str
        Asset file name; ``{version}`` is the release tag and ``{bare_version}``
        the tag without its leading ``v``
    directory_prefix : str
        Prefix of the version directory name
    entry_point : str
        Entry-point path relative to the version directory
    archive_kind : ArchiveKind
        How the asset is unpacked
    """

    repo: str
    asset_template: str
    directory_prefix: str
    entry_point: str
    archive_kind: ArchiveKind = ArchiveKind.ZIP

    def asset_name(self, release: ReleaseDescriptor) -> str:
        return self.asset_template.format(
            version=release.version,
            bare_version=release.bare_version,
        )

    def version_dir_name(self, version: str) -> str:
        return f"{self.directory_prefix}-{version}"


class ReleaseAssetResolver(Obj):
    """Resolve, download and cache release-asset language servers."""

    def __init__(
        self,
        source: ReleaseSource,
        fetcher: ArchiveFetcher,
        status_sink: StatusSink,
        cache_root: Path | None = None,
        ctx=None,
    ) -> None:
        """Initialize the resolver.

        Parameters
        ----------
        source : ReleaseSource
            Where releases are looked up
        fetcher : ArchiveFetcher
            Downloads and unpacks assets
        status_sink : StatusSink
            Receives progress updates
        cache_root : Path, optional
            Parent of the version directories; when omitted paths stay relative
            to the working directory
        ctx : TonkitContext, optional
            Context for logging
        """
        super().__init__(ctx)
        self.source = source
        self.fetcher = fetcher
        self.status_sink = status_sink
        self.cache_root = cache_root

    def version_dir(self, tool: ReleaseAssetTool, version: str) -> Path:
        name = tool.version_dir_name(version)
        return self.cache_root / name if self.cache_root is not None else Path(name)

    def resolve(self, tool_id: str, tool: ReleaseAssetTool) -> Path:
        """Return the entry point of the latest release, downloading if needed.

        Parameters
        ----------
        tool_id : str
            Identifier reported to the status sink
        tool : ReleaseAssetTool
            Which repository and asset to resolve

        Returns
        -------
        Path
            Entry-point path; relative unless ``cache_root`` is absolute

        Raises
        ------
        ReleaseLookupError
            If no qualifying release can be found
        AssetNotFoundError
            If the release has no asset with the expected name
        DownloadError
            If fetching or unpacking fails
        """
        self.status_sink.set_status(tool_id, InstallationStatus.CHECKING_FOR_UPDATE)

        release = self.source.fetch_latest_release(
            tool.repo,
            require_assets=True,
            pre_release=False,
        )

        asset_name = tool.asset_name(release)
        asset = release.find_asset(asset_name)
        if asset is None:
            raise AssetNotFoundError(asset_name, release.version)

        version_dir = self.version_dir(tool, release.version)
        try:
            ensure_dir(version_dir)
        except FileOperationError as e:
            reason = f"failed to create directory: {e}"
            raise DownloadError(asset.download_url, reason) from e

        entry_path = version_dir / tool.entry_point
        if is_regular_file(entry_path):
            self.ctx.debug("%s %s already present at %s", tool_id, release.version, entry_path)
            return entry_path

        self.status_sink.set_status(tool_id, InstallationStatus.DOWNLOADING)
        self.fetcher.fetch(asset.download_url, version_dir, tool.archive_kind)
        self.ctx.info("Installed %s %s into %s", tool_id, release.version, version_dir)
        return entry_path
