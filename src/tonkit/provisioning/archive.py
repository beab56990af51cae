"""Archive download and extraction.

Downloads land in a temporary file first and are unpacked into the destination
directory only after every archive member has been checked to stay inside it.
"""

import shutil
import tarfile
import tempfile
import zipfile
from enum import Enum
from pathlib import Path
from urllib.parse import urlparse

import requests

from tonkit.common.errors import DownloadError
from tonkit.patterns import Obj
from tonkit_common.config import config


class ArchiveKind(str, Enum):
    """Supported archive layouts."""

    ZIP = "zip"
    GZIP_TAR = "gzip_tar"
    UNCOMPRESSED = "uncompressed"


ALLOWED_SCHEMES = frozenset({"https", "http"})


def _is_within_directory(directory: Path, target: Path) -> bool:
    try:
        target.resolve().relative_to(directory.resolve())
    except ValueError:
        return False
    return True


class ArchiveFetcher(Obj):
    """Fetch an archive over HTTP and unpack it into a directory."""

    def __init__(self, ctx=None, timeout: float | None = None) -> None:
        """Initialize the fetcher.

        Parameters
        ----------
        ctx : TonkitContext, optional
            Context for logging
        timeout : float, optional
            Per-request timeout in seconds (default from ``TONKIT_HTTP_TIMEOUT``)
        """
        super().__init__(ctx)
        self.timeout = timeout if timeout is not None else config.get_http_timeout()

    def fetch(
        self,
        url: str,
        destination: Path,
        kind: ArchiveKind = ArchiveKind.ZIP,
    ) -> None:
        """Download ``url`` and unpack it into ``destination``.

        Parameters
        ----------
        url : str
            Archive download URL
        destination : Path
            Directory receiving the archive contents (created if missing)
        kind : ArchiveKind
            How to unpack the payload

        Raises
        ------
        DownloadError
            On a disallowed URL, transport failure, corrupt archive or unsafe
            member path
        """
        parsed = urlparse(url)
        if parsed.scheme not in ALLOWED_SCHEMES:
            raise DownloadError(url, f"disallowed URL scheme: {parsed.scheme!r}")

        self.ctx.info("Downloading %s into %s", url, destination)
        tmp_path = self._download_to_temp(url)
        try:
            destination.mkdir(parents=True, exist_ok=True)
            if kind is ArchiveKind.ZIP:
                self._extract_zip(url, tmp_path, destination)
            elif kind is ArchiveKind.GZIP_TAR:
                self._extract_tar(url, tmp_path, destination)
            else:
                name = Path(parsed.path).name or "download"
                shutil.move(str(tmp_path), destination / name)
        except OSError as e:
            raise DownloadError(url, str(e)) from e
        finally:
            tmp_path.unlink(missing_ok=True)

    def _download_to_temp(self, url: str) -> Path:
        try:
            resp = requests.get(url, timeout=self.timeout)
            resp.raise_for_status()
        except requests.RequestException as e:
            raise DownloadError(url, str(e)) from e

        with tempfile.NamedTemporaryFile(suffix=".download", delete=False) as tmp_file:
            tmp_file.write(resp.content)
            return Path(tmp_file.name)

    def _extract_zip(self, url: str, archive: Path, destination: Path) -> None:
        try:
            with zipfile.ZipFile(archive) as zf:
                for name in zf.namelist():
                    if not _is_within_directory(destination, destination / name):
                        raise DownloadError(url, f"unsafe path in zip archive: {name}")
                zf.extractall(destination)
        except zipfile.BadZipFile as e:
            raise DownloadError(url, f"corrupt zip archive: {e}") from e

    def _extract_tar(self, url: str, archive: Path, destination: Path) -> None:
        try:
            with tarfile.open(archive, "r:gz") as tar:
                members = tar.getmembers()
                for member in members:
                    if not _is_within_directory(destination, destination / member.name):
                        raise DownloadError(
                            url,
                            f"unsafe path in tar archive: {member.name}",
                        )
                for member in members:
                    tar.extract(member, path=destination)
        except tarfile.TarError as e:
            raise DownloadError(url, f"corrupt tar archive: {e}") from e
