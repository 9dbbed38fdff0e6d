from __future__ import annotations

from pathlib import PurePosixPath

from pydantic import BaseModel

from launcher_core.cache.content_cache import Cache
from launcher_core.cache.fetcher import Fetcher
from launcher_core.digest import Digest
from launcher_core.metadata.common import MetaModel
from launcher_core.storage.store_point import StorePoint


class AssetObject(BaseModel):
    hash: Digest
    size: int

    def object_path(self) -> PurePosixPath:
        """Location of the object below ``assets/objects``, bucketed by hash prefix."""
        hex_hash = self.hash.hex()
        return PurePosixPath(hex_hash[:2], hex_hash)


class AssetInfo(Cache, BaseModel):
    objects: dict[str, AssetObject]

    @classmethod
    async def fetch(cls, store_point: StorePoint, fetcher: Fetcher, index: AssetIndex) -> AssetInfo:
        return await (
            cls.builder()
            .base_on(store_point)
            .url(index.url)
            .add("assets")
            .add("indexes")
            .add(f"{index.id}.json")
            .build_check(fetcher, index.sha1)
        )


class AssetIndex(MetaModel):
    id: str
    sha1: Digest
    size: int
    url: str

    async def fetch_assets_info(self, store_point: StorePoint, fetcher: Fetcher) -> AssetInfo:
        return await AssetInfo.fetch(store_point, fetcher, self)
