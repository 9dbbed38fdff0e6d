from __future__ import annotations

import uuid
from pathlib import Path

from launcher_core.errors import NotFoundError, StorageIOError


def atomic_write_bytes(path: Path, data: bytes) -> None:
    # One temp file per call; concurrent writers of a path end with the last replace.
    tmp_path = path.with_name(f"{path.name}.{uuid.uuid4().hex}.tmp")
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path.write_bytes(data)
        tmp_path.replace(path)
    except OSError as e:
        tmp_path.unlink(missing_ok=True)
        raise StorageIOError(f"Failed to write file. path={path} error={e}") from e


def atomic_write_text(path: Path, text: str) -> None:
    atomic_write_bytes(path, text.encode("utf-8"))


def read_bytes(path: Path) -> bytes:
    try:
        return path.read_bytes()
    except FileNotFoundError as e:
        raise NotFoundError(f"File not found. path={path}") from e
    except OSError as e:
        raise StorageIOError(f"Failed to read file. path={path} error={e}") from e
