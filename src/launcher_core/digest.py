"""
Typed cryptographic digests used as cache integrity tokens.

The algorithm is implied by the digest width: 20 bytes is SHA-1, 32 bytes is SHA-256.
Metadata documents carry no explicit algorithm tag, so this convention is the only
signal available.
"""

from __future__ import annotations

import hashlib
import re
from dataclasses import dataclass
from typing import Any, Literal

from pydantic import GetCoreSchemaHandler
from pydantic_core import core_schema

from launcher_core.errors import MalformedDigestError, UnsupportedDigestLengthError

Algorithm = Literal["sha1", "sha256"]

_HEX_RE = re.compile(r"(?:[0-9a-fA-F]{2})*")
_ALGORITHM_BY_LENGTH: dict[int, Algorithm] = {20: "sha1", 32: "sha256"}


@dataclass(frozen=True, slots=True)
class Digest:
    algorithm: Algorithm
    value: bytes

    def __post_init__(self) -> None:
        expected = _ALGORITHM_BY_LENGTH.get(len(self.value))
        if expected is None:
            raise UnsupportedDigestLengthError(
                f"Digest must be 20 or 32 bytes, got {len(self.value)} bytes"
            )
        if expected != self.algorithm:
            raise UnsupportedDigestLengthError(
                f"A {self.algorithm} digest cannot be {len(self.value)} bytes long"
            )

    @classmethod
    def from_bytes(cls, value: bytes) -> Digest:
        algorithm = _ALGORITHM_BY_LENGTH.get(len(value))
        if algorithm is None:
            raise UnsupportedDigestLengthError(f"Digest must be 20 or 32 bytes, got {len(value)} bytes")
        return cls(algorithm=algorithm, value=bytes(value))

    @classmethod
    def from_hex(cls, text: str) -> Digest:
        if not _HEX_RE.fullmatch(text):
            raise MalformedDigestError(f"Digest is not valid hex: {text!r}")
        return cls.from_bytes(bytes.fromhex(text))

    @classmethod
    def of(cls, content: bytes, algorithm: Algorithm) -> Digest:
        """Compute the digest of ``content`` with the given algorithm."""
        return cls(algorithm=algorithm, value=hashlib.new(algorithm, content).digest())

    def hex(self) -> str:
        return self.value.hex()

    def matches(self, content: bytes) -> bool:
        return hashlib.new(self.algorithm, content).digest() == self.value

    def __str__(self) -> str:
        return self.hex()

    def __repr__(self) -> str:
        return f"Digest({self.algorithm}:{self.hex()})"

    @classmethod
    def __get_pydantic_core_schema__(cls, source_type: Any, handler: GetCoreSchemaHandler) -> core_schema.CoreSchema:
        return core_schema.no_info_plain_validator_function(
            cls._validate,
            serialization=core_schema.plain_serializer_function_ser_schema(cls.hex),
        )

    @classmethod
    def _validate(cls, value: Any) -> Digest:
        if isinstance(value, Digest):
            return value
        if isinstance(value, str):
            return cls.from_hex(value)
        raise MalformedDigestError(f"Digest must be a hex string, got {type(value).__name__}")


__all__ = ["Algorithm", "Digest"]
