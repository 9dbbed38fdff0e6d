"""Version metadata documents, fetched through the disk cache."""

from __future__ import annotations

from launcher_core.metadata.asset import AssetIndex, AssetInfo, AssetObject
from launcher_core.metadata.common import DependencyPackage
from launcher_core.metadata.library import (
    Action,
    Artifact,
    CommonLibrary,
    Download,
    Extract,
    Library,
    MavenLibrary,
    Platform,
    Rule,
    is_allowed,
)
from launcher_core.metadata.package import PackageDetails, PackageInfo, PackageList
from launcher_core.metadata.version import VersionDetails, VersionInfo

__all__ = [
    "Action",
    "Artifact",
    "AssetIndex",
    "AssetInfo",
    "AssetObject",
    "CommonLibrary",
    "DependencyPackage",
    "Download",
    "Extract",
    "Library",
    "MavenLibrary",
    "PackageDetails",
    "PackageInfo",
    "PackageList",
    "Platform",
    "Rule",
    "VersionDetails",
    "VersionInfo",
    "is_allowed",
]
