from __future__ import annotations

import logging
from pathlib import Path
from typing import ClassVar, Optional

from launcher_core.cache.content_cache import Cache
from launcher_core.cache.fetcher import Fetcher
from launcher_core.digest import Digest
from launcher_core.metadata.common import MetaModel, join_url
from launcher_core.metadata.version import VersionInfo
from launcher_core.storage.persistence import Load, Save, Storage
from launcher_core.storage.store_point import StorePoint

logger = logging.getLogger(__name__)


class PackageInfo(MetaModel):
    """Summary of a package (minecraft, fabric-loader, ...) in the package list."""

    name: str
    uid: str
    sha256: Digest

    async def get_details(self, store_point: StorePoint, fetcher: Fetcher, base_url: str) -> PackageDetails:
        return await PackageDetails.fetch(store_point, fetcher, base_url, self)


class PackageList(Storage, Cache, MetaModel):
    FILE_PATH: ClassVar[tuple[str, ...]] = ("packages.json",)

    format_version: int
    packages: list[PackageInfo]

    def find(self, uid: str) -> Optional[PackageInfo]:
        return next((package for package in self.packages if package.uid == uid), None)

    @classmethod
    async def fetch(cls, store_point: StorePoint, fetcher: Fetcher, base_url: str) -> PackageList:
        builder = cls.builder().base_on(store_point).url(join_url(base_url, "index.json"))
        for segment in cls.FILE_PATH:
            builder.add(segment)
        packages = await builder.build_try(fetcher)
        logger.info("Package list loaded. packages=%d", len(packages.packages))
        return packages


class PackageDetails(Cache, Save, Load, MetaModel):
    format_version: int
    name: str
    uid: str
    versions: list[VersionInfo]

    def suffix(self) -> Path:
        return Path(self.uid) / "index.json"

    def find_version(self, version: str) -> Optional[VersionInfo]:
        return next((info for info in self.versions if info.version == version), None)

    def recommended(self) -> list[VersionInfo]:
        return [info for info in self.versions if info.recommended]

    @classmethod
    async def fetch(
        cls,
        store_point: StorePoint,
        fetcher: Fetcher,
        base_url: str,
        package_info: PackageInfo,
    ) -> PackageDetails:
        return await (
            cls.builder()
            .base_on(store_point)
            .url(join_url(base_url, package_info.uid, "index.json"))
            .add(package_info.uid)
            .add("index.json")
            .build_check(fetcher, package_info.sha256)
        )
