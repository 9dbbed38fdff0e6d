from __future__ import annotations

from launcher_core.storage.persistence import Load, Save, Storage
from launcher_core.storage.store_point import DirectoryStorePoint, StorePoint

__all__ = ["DirectoryStorePoint", "Load", "Save", "Storage", "StorePoint"]
