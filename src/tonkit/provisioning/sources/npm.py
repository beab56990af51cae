"""npm registry source for Node-based language servers."""

import platform
import subprocess
from pathlib import Path

import requests

from tonkit.common.errors import RegistryLookupError
from tonkit.patterns import Obj
from tonkit_common.config import config
from tonkit_common.constants import NPM_BINARY
from tonkit_common.io import safe_read_json
from tonkit_common.io.files import FileOperationError

from .base import RegistrySource


class NpmRegistrySource(Obj, RegistrySource):
    """Query the npm registry and install packages under a local prefix.

    Packages are installed with ``npm install --prefix <prefix>``, so the
    package lands in ``<prefix>/node_modules/<name>``.
    """

    NPM_API = "{registry}/{package}/latest"
    INSTALL_TIMEOUT_S = 300

    def __init__(
        self,
        ctx=None,
        prefix: Path | None = None,
        registry: str | None = None,
        timeout: float | None = None,
        npm_binary: str | None = None,
    ) -> None:
        """Initialize the source.

        Parameters
        ----------
        ctx : TonkitContext, optional
            Context for logging
        prefix : Path, optional
            Install prefix; the working directory when omitted
        registry : str, optional
            Registry base URL (default from ``TONKIT_NPM_REGISTRY``)
        timeout : float, optional
            Per-request HTTP timeout in seconds
        npm_binary : str, optional
            npm executable; ``npm.cmd`` on Windows by default
        """
        super().__init__(ctx)
        self.prefix = prefix if prefix is not None else Path()
        self.registry = (registry or config.get_npm_registry()).rstrip("/")
        self.timeout = timeout if timeout is not None else config.get_http_timeout()
        default_npm = f"{NPM_BINARY}.cmd" if platform.system() == "Windows" else NPM_BINARY
        self.npm_binary = npm_binary or default_npm

    def package_dir(self, package: str) -> Path:
        """Directory a package is installed into."""
        return self.prefix / "node_modules" / package

    def latest_version(self, package: str) -> str:
        url = self.NPM_API.format(registry=self.registry, package=package)
        self.ctx.debug("Fetching latest version from %s", url)
        try:
            response = requests.get(url, timeout=self.timeout)
            response.raise_for_status()
            data = response.json()
        except requests.RequestException as e:
            raise RegistryLookupError(package, str(e)) from e
        except ValueError as e:
            raise RegistryLookupError(package, f"invalid JSON response: {e}") from e

        version = data.get("version") if isinstance(data, dict) else None
        if not version:
            raise RegistryLookupError(package, "response carries no version")
        return str(version)

    def installed_version(self, package: str) -> str | None:
        manifest = self.package_dir(package) / "package.json"
        if not manifest.exists():
            return None
        try:
            version = safe_read_json(manifest).get("version")
        except FileOperationError as e:
            self.ctx.warning("Unreadable manifest %s: %s", manifest, e)
            return None
        return str(version) if version else None

    def install(self, package: str, version: str) -> bool:
        cmd = [
            self.npm_binary,
            "install",
            "--prefix",
            str(self.prefix),
            f"{package}@{version}",
        ]
        self.ctx.info("Running %s", " ".join(cmd))
        try:
            result = subprocess.run(  # noqa: S603
                cmd,
                capture_output=True,
                text=True,
                check=False,
                timeout=self.INSTALL_TIMEOUT_S,
            )
        except (OSError, subprocess.TimeoutExpired) as e:
            self.ctx.error("npm install of %s@%s failed: %s", package, version, e)
            return False

        if result.returncode != 0:
            self.ctx.error(
                "npm install of %s@%s exited with %d: %s",
                package,
                version,
                result.returncode,
                result.stderr.strip(),
            )
            return False
        return True
