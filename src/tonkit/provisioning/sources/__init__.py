"""Release and registry sources used by the resolvers."""

from .base import RegistrySource, ReleaseSource
from .github import GitHubReleasesSource
from .npm import NpmRegistrySource

__all__ = [
    "GitHubReleasesSource",
    "NpmRegistrySource",
    "RegistrySource",
    "ReleaseSource",
]
