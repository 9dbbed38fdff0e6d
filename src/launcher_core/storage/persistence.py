"""
Save and load pydantic models under a store point.

``Storage`` is for types that always live at one constant path. ``Save`` and ``Load``
are for types whose path depends on the instance, so many of them can coexist under
one root. The mixins are meant to be combined with ``pydantic.BaseModel``::

    class Settings(Storage, BaseModel):
        FILE_PATH: ClassVar[tuple[str, ...]] = ("settings.json",)
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import ClassVar, Type, TypeVar

from pydantic import BaseModel, ValidationError

from launcher_core.errors import CorruptError
from launcher_core.storage.io import atomic_write_text, read_bytes
from launcher_core.storage.store_point import StorePoint

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


def encode_model(value: BaseModel) -> str:
    return value.model_dump_json(by_alias=True)


def decode_model(model_cls: Type[M], content: bytes, *, path: Path) -> M:
    try:
        return model_cls.model_validate_json(content)
    except ValidationError as e:
        raise CorruptError(f"Failed to decode {model_cls.__name__}. path={path} error={e}") from e


def write_model(path: Path, value: BaseModel) -> None:
    atomic_write_text(path, encode_model(value))
    logger.debug("storage.saved type=%s path=%s", type(value).__name__, path)


def read_model(model_cls: Type[M], path: Path) -> M:
    return decode_model(model_cls, read_bytes(path), path=path)


class Storage:
    """Persistence for a type stored at a constant path below the store point root."""

    FILE_PATH: ClassVar[tuple[str, ...]]

    @classmethod
    def full_path(cls, store_point: StorePoint) -> Path:
        return store_point.root().joinpath(*cls.FILE_PATH)

    def save(self, store_point: StorePoint) -> None:
        write_model(type(self).full_path(store_point), self)  # type: ignore[arg-type]

    @classmethod
    def load(cls: Type[M], store_point: StorePoint) -> M:
        return read_model(cls, cls.full_path(store_point))  # type: ignore[attr-defined]


class Save:
    """Persistence for a type whose relative path is computed from the instance."""

    def suffix(self) -> Path:
        raise NotImplementedError

    def save(self, store_point: StorePoint) -> None:
        write_model(store_point.root() / self.suffix(), self)  # type: ignore[arg-type]


class Load:
    @classmethod
    def load(cls: Type[M], store_point: StorePoint, suffix: str | Path) -> M:
        return read_model(cls, store_point.root() / suffix)
