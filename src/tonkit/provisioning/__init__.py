"""Language server provisioning.

This package resolves language servers published as release archives or as
registry packages, caches them under version-keyed directories, and turns the
result into a runnable command.
"""

from .archive import ArchiveFetcher, ArchiveKind
from .dispatcher import (
    DEFAULT_TOOLS,
    PRESETS,
    ToolDispatcher,
    build_tool_table,
    parse_tool_entry,
)
from .models import InstalledPackageState, ReleaseAsset, ReleaseDescriptor, ResolvedCommand
from .registry import RegistryPackageResolver, RegistryPackageTool
from .release import ReleaseAssetResolver, ReleaseAssetTool
from .status import InstallationStatus, LoggingStatusSink, RecordingStatusSink, StatusSink

__all__ = [
    "ArchiveFetcher",
    "ArchiveKind",
    "DEFAULT_TOOLS",
    "InstallationStatus",
    "InstalledPackageState",
    "LoggingStatusSink",
    "PRESETS",
    "RecordingStatusSink",
    "RegistryPackageResolver",
    "RegistryPackageTool",
    "ReleaseAsset",
    "ReleaseAssetResolver",
    "ReleaseAssetTool",
    "ReleaseDescriptor",
    "ResolvedCommand",
    "StatusSink",
    "ToolDispatcher",
    "build_tool_table",
    "parse_tool_entry",
]
