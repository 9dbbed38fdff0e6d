from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class MetaModel(BaseModel):
    """Base for metadata documents, whose JSON keys are camelCase."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class DependencyPackage(MetaModel):
    """
    A relation to another package.

    ``equals`` pins an exact version, ``suggests`` only recommends one; with neither
    set the package is required in any version.
    """

    uid: str
    suggests: Optional[str] = None
    equals: Optional[str] = None


def join_url(base_url: str, *segments: str) -> str:
    return "/".join([base_url.rstrip("/"), *segments])
