from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Protocol, runtime_checkable


@runtime_checkable
class StorePoint(Protocol):
    """
    A root directory under which persisted and cached files live.

    Implementations must be immutable: a store point is shared by every concurrent
    cache and persistence call that references it.
    """

    def root(self) -> Path: ...


@dataclass(frozen=True, slots=True)
class DirectoryStorePoint:
    path: Path

    def __init__(self, path: str | Path) -> None:
        object.__setattr__(self, "path", Path(path))

    def root(self) -> Path:
        return self.path

    def child(self, *segments: str) -> DirectoryStorePoint:
        """Return a store point rooted at a sub directory of this one."""
        return DirectoryStorePoint(self.path.joinpath(*segments))
