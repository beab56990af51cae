"""GitHub Releases API source for language server archives."""

from typing import Any

import requests

from tonkit.common.errors import ReleaseLookupError
from tonkit.patterns import Obj
from tonkit.provisioning.models import ReleaseAsset, ReleaseDescriptor
from tonkit_common.config import config
from tonkit_common.constants import GITHUB_API_URL

from .base import ReleaseSource


class GitHubReleasesSource(Obj, ReleaseSource):
    """Fetch latest releases and their assets from GitHub."""

    GITHUB_API = GITHUB_API_URL + "/repos/{}/releases"

    def __init__(
        self,
        ctx=None,
        timeout: float | None = None,
        token: str | None = None,
    ) -> None:
        """Initialize the source.

        Parameters
        ----------
        ctx : TonkitContext, optional
            Context for logging
        timeout : float, optional
            Per-request timeout in seconds (default from ``TONKIT_HTTP_TIMEOUT``)
        token : str, optional
            API token (default from ``GITHUB_TOKEN``)
        """
        super().__init__(ctx)
        self.timeout = timeout if timeout is not None else config.get_http_timeout()
        self.token = token if token is not None else config.get_github_token()

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/vnd.github+json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def fetch_releases(self, repo: str) -> list[dict[str, Any]]:
        """Fetch all releases from GitHub, newest first.

        Parameters
        ----------
        repo : str
            Repository name in format "owner/name"

        Returns
        -------
        list[dict[str, Any]]
            Raw release objects

        Raises
        ------
        ReleaseLookupError
            On transport errors, HTTP errors or a malformed payload
        """
        url = self.GITHUB_API.format(repo)
        self.ctx.debug("Fetching releases from %s", url)
        try:
            response = requests.get(url, headers=self._headers(), timeout=self.timeout)
            response.raise_for_status()
            data = response.json()
        except requests.RequestException as e:
            raise ReleaseLookupError(repo, str(e)) from e
        except ValueError as e:
            raise ReleaseLookupError(repo, f"invalid JSON response: {e}") from e

        if not isinstance(data, list):
            raise ReleaseLookupError(repo, "unexpected response payload")
        return data

    def find_latest_stable_release(
        self,
        releases: list[dict[str, Any]],
        *,
        require_assets: bool = True,
        pre_release: bool = False,
    ) -> dict[str, Any] | None:
        """Find the latest qualifying release from a list.

        Drafts never qualify; prereleases qualify only when ``pre_release``;
        releases without assets are skipped when ``require_assets``.
        """
        for release in releases:
            tag = release.get("tag_name")
            if release.get("draft", False):
                reason = "draft"
            elif release.get("prerelease", False) and not pre_release:
                reason = "prerelease"
            elif require_assets and not release.get("assets"):
                reason = "no assets"
            elif not tag:
                reason = "no tag"
            else:
                return release
            self.ctx.trace("Skipping release %s (%s)", tag, reason)

        return None

    def fetch_latest_release(
        self,
        repo: str,
        *,
        require_assets: bool = True,
        pre_release: bool = False,
    ) -> ReleaseDescriptor:
        releases = self.fetch_releases(repo)
        release = self.find_latest_stable_release(
            releases,
            require_assets=require_assets,
            pre_release=pre_release,
        )
        if release is None:
            raise ReleaseLookupError(repo, "no qualifying release found")

        assets = tuple(
            ReleaseAsset(
                name=asset.get("name", ""),
                download_url=asset.get("browser_download_url", ""),
            )
            for asset in release.get("assets", [])
        )
        return ReleaseDescriptor(version=release["tag_name"], assets=assets)
