"""
Client-side core of a game launcher.

Provides an expiring, self-refreshing data container, a digest-checked disk cache
for HTTP documents, and the sign-in and metadata types built on top of them.
"""

from __future__ import annotations

from launcher_core.cache import BoundCacheBuilder, Cache, CacheBuilder, Fetcher, HttpFetcher
from launcher_core.digest import Digest
from launcher_core.errors import (
    CorruptError,
    DigestError,
    LauncherCoreError,
    MalformedDigestError,
    NetworkFetchError,
    NotFoundError,
    RefreshFailedError,
    RefreshUnsupportedError,
    StorageIOError,
    UnsupportedDigestLengthError,
)
from launcher_core.expiring import Expirable, ExpiringData, NoRefresh, Refreshable, TtlField
from launcher_core.storage import DirectoryStorePoint, Load, Save, Storage, StorePoint

__version__ = "0.1.0"

__all__ = [
    "BoundCacheBuilder",
    "Cache",
    "CacheBuilder",
    "CorruptError",
    "Digest",
    "DigestError",
    "DirectoryStorePoint",
    "Expirable",
    "ExpiringData",
    "Fetcher",
    "HttpFetcher",
    "LauncherCoreError",
    "Load",
    "MalformedDigestError",
    "NetworkFetchError",
    "NoRefresh",
    "NotFoundError",
    "Refreshable",
    "RefreshFailedError",
    "RefreshUnsupportedError",
    "Save",
    "Storage",
    "StorageIOError",
    "StorePoint",
    "TtlField",
    "UnsupportedDigestLengthError",
]
