from __future__ import annotations

from launcher_core.cache.builder import BoundCacheBuilder, CacheBuilder
from launcher_core.cache.content_cache import Cache, check_cache, try_cache
from launcher_core.cache.fetcher import Fetcher, HttpFetcher

__all__ = [
    "BoundCacheBuilder",
    "Cache",
    "CacheBuilder",
    "Fetcher",
    "HttpFetcher",
    "check_cache",
    "try_cache",
]
