from __future__ import annotations

from pathlib import Path, PurePath
from typing import Generic, Type, TypeVar

from pydantic import BaseModel

from launcher_core.cache.content_cache import check_cache, try_cache
from launcher_core.cache.fetcher import Fetcher
from launcher_core.digest import Digest
from launcher_core.storage.store_point import StorePoint

M = TypeVar("M", bound=BaseModel)


class CacheBuilder(Generic[M]):
    """
    Accumulates the relative path and source url of a cache request.

    Terminal operations only exist on the builder returned by ``base_on``, so a
    request cannot be issued without a store point.
    """

    def __init__(self, model_cls: Type[M], *, url: str = "", path: PurePath = PurePath()) -> None:
        self._model_cls = model_cls
        self._url = url
        self._path = path

    @property
    def relative_path(self) -> PurePath:
        return self._path

    @property
    def source_url(self) -> str:
        return self._url

    def add(self, segment: str | PurePath) -> CacheBuilder[M]:
        """Append a path segment to the relative path."""
        self._path = self._path / segment
        return self

    def url(self, url: str) -> CacheBuilder[M]:
        self._url = url
        return self

    def base_on(self, store_point: StorePoint) -> BoundCacheBuilder[M]:
        return BoundCacheBuilder(self._model_cls, store_point, url=self._url, path=self._path)


class BoundCacheBuilder(CacheBuilder[M]):
    def __init__(self, model_cls: Type[M], store_point: StorePoint, *, url: str = "", path: PurePath = PurePath()) -> None:
        super().__init__(model_cls, url=url, path=path)
        self._store_point = store_point

    @property
    def store_point(self) -> StorePoint:
        return self._store_point

    def add(self, segment: str | PurePath) -> BoundCacheBuilder[M]:
        super().add(segment)
        return self

    def url(self, url: str) -> BoundCacheBuilder[M]:
        super().url(url)
        return self

    async def build_try(self, fetcher: Fetcher) -> M:
        return await try_cache(self._model_cls, self._store_point, Path(self._path), fetcher, self._url)

    async def build_check(self, fetcher: Fetcher, digest: Digest) -> M:
        return await check_cache(self._model_cls, self._store_point, Path(self._path), fetcher, self._url, digest)
