"""
Disk cache for documents fetched over HTTP.

A cached document is addressed by an explicit relative path below a store point.
``try_cache`` trusts any file that is already present. ``check_cache`` re-validates
the file against an expected digest and re-fetches on mismatch; when that re-fetch
fails the stale file is still served.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Type, TypeVar

from pydantic import BaseModel

from launcher_core.digest import Digest
from launcher_core.errors import NetworkFetchError, StorageIOError
from launcher_core.storage.io import atomic_write_bytes, read_bytes
from launcher_core.storage.persistence import decode_model
from launcher_core.storage.store_point import StorePoint

if TYPE_CHECKING:
    from launcher_core.cache.builder import CacheBuilder
    from launcher_core.cache.fetcher import Fetcher

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


async def ensure_cached(path: Path, fetcher: Fetcher, url: str) -> None:
    """Fetch ``url`` into ``path`` unless the file already exists."""
    try:
        await asyncio.to_thread(path.parent.mkdir, parents=True, exist_ok=True)
    except OSError as e:
        raise StorageIOError(f"Failed to create cache directory. path={path.parent} error={e}") from e

    if path.exists():
        logger.debug("cache.hit path=%s", path)
        return

    logger.info("cache.miss path=%s url=%s", path, url)
    data = await fetcher.fetch_bytes(url)
    await asyncio.to_thread(atomic_write_bytes, path, data)


async def _read_cached(model_cls: Type[M], path: Path) -> M:
    content = await asyncio.to_thread(read_bytes, path)
    return decode_model(model_cls, content, path=path)


async def try_cache(
    model_cls: Type[M],
    store_point: StorePoint,
    suffix: str | Path,
    fetcher: Fetcher,
    url: str,
) -> M:
    path = store_point.root() / suffix
    await ensure_cached(path, fetcher, url)
    return await _read_cached(model_cls, path)


async def check_cache(
    model_cls: Type[M],
    store_point: StorePoint,
    suffix: str | Path,
    fetcher: Fetcher,
    url: str,
    digest: Digest,
) -> M:
    path = store_point.root() / suffix
    await ensure_cached(path, fetcher, url)

    content = await asyncio.to_thread(read_bytes, path)
    if digest.matches(content):
        return decode_model(model_cls, content, path=path)

    logger.warning("cache.digest_mismatch path=%s expected=%s", path, digest)
    try:
        data = await fetcher.fetch_bytes(url)
    except NetworkFetchError as e:
        logger.error("Error while re-fetching cached file, serving stale copy. url=%s error=%s", url, e)
    else:
        await asyncio.to_thread(atomic_write_bytes, path, data)

    # Re-fetched content is trusted without a second digest check.
    return await _read_cached(model_cls, path)


class Cache:
    """Mixin giving a pydantic model fetch-or-read access through the disk cache."""

    @classmethod
    async def try_cache(
        cls: Type[M],
        store_point: StorePoint,
        suffix: str | Path,
        fetcher: Fetcher,
        url: str,
    ) -> M:
        return await try_cache(cls, store_point, suffix, fetcher, url)

    @classmethod
    async def check_cache(
        cls: Type[M],
        store_point: StorePoint,
        suffix: str | Path,
        fetcher: Fetcher,
        url: str,
        digest: Digest,
    ) -> M:
        return await check_cache(cls, store_point, suffix, fetcher, url, digest)

    @classmethod
    def builder(cls: Type[M]) -> CacheBuilder[M]:
        from launcher_core.cache.builder import CacheBuilder

        return CacheBuilder(cls)
