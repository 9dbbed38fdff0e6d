from __future__ import annotations

from typing import Optional

from pydantic import Field

from launcher_core.cache.content_cache import Cache
from launcher_core.cache.fetcher import Fetcher
from launcher_core.digest import Digest
from launcher_core.metadata.asset import AssetIndex
from launcher_core.metadata.common import DependencyPackage, MetaModel, join_url
from launcher_core.metadata.library import CommonLibrary, Library
from launcher_core.storage.store_point import StorePoint


class VersionInfo(MetaModel):
    """One entry of a package's version list, e.g. minecraft "1.8.9"."""

    version: str
    release_time: str
    sha256: Digest
    recommended: bool = False
    release_type: Optional[str] = Field(default=None, alias="type")
    requires: list[DependencyPackage] = []
    conflicts: list[DependencyPackage] = []
    volatile: Optional[bool] = None

    async def get_details(self, store_point: StorePoint, fetcher: Fetcher, base_url: str, uid: str) -> VersionDetails:
        return await VersionDetails.fetch(store_point, fetcher, base_url, uid, self)


class VersionDetails(Cache, MetaModel):
    """Full description of one package version: libraries, main class, assets."""

    format_version: int
    name: str
    uid: str
    version: str
    release_time: str
    release_type: Optional[str] = Field(default=None, alias="type")
    requires: list[DependencyPackage] = []
    conflicts: list[DependencyPackage] = []
    libraries: list[Library] = []
    # forge and neoforge ship installer artifacts here
    maven_files: list[Library] = []
    volatile: Optional[bool] = None
    main_class: Optional[str] = None
    main_jar: Optional[CommonLibrary] = None
    minecraft_arguments: Optional[str] = None
    asset_index: Optional[AssetIndex] = None

    @classmethod
    async def fetch(
        cls,
        store_point: StorePoint,
        fetcher: Fetcher,
        base_url: str,
        uid: str,
        version_info: VersionInfo,
    ) -> VersionDetails:
        filename = f"{version_info.version}.json"
        return await (
            cls.builder()
            .base_on(store_point)
            .url(join_url(base_url, uid, filename))
            .add(uid)
            .add(filename)
            .build_check(fetcher, version_info.sha256)
        )
