from __future__ import annotations

import platform
import sys
from enum import Enum
from typing import Optional, Union

from launcher_core.digest import Digest
from launcher_core.metadata.common import MetaModel


class Platform(str, Enum):
    WINDOWS = "windows"
    WINDOWS_ARM64 = "windows-arm64"
    LINUX = "linux"
    LINUX_ARM32 = "linux-arm32"
    LINUX_ARM64 = "linux-arm64"
    MACOS = "osx"
    MACOS_ARM64 = "osx-arm64"
    UNKNOWN = "unknown"

    @classmethod
    def _missing_(cls, value: object) -> Platform:
        return cls.UNKNOWN

    @classmethod
    def current(cls) -> Platform:
        machine = platform.machine().lower()
        arm64 = machine in ("arm64", "aarch64")
        if sys.platform.startswith("win"):
            return cls.WINDOWS_ARM64 if arm64 else cls.WINDOWS
        if sys.platform == "darwin":
            return cls.MACOS_ARM64 if arm64 else cls.MACOS
        if sys.platform.startswith("linux"):
            if arm64:
                return cls.LINUX_ARM64
            if machine.startswith("arm"):
                return cls.LINUX_ARM32
            return cls.LINUX
        return cls.UNKNOWN


class Action(str, Enum):
    ALLOW = "allow"
    DISALLOW = "disallow"


class OsRule(MetaModel):
    name: Platform


class Rule(MetaModel):
    action: Action
    os: Optional[OsRule] = None

    def matches(self, target: Platform) -> bool:
        return self.os is None or self.os.name == target


def is_allowed(rules: list[Rule], target: Platform) -> bool:
    """Evaluate library rules: the last matching rule wins, no rules means allowed."""
    if not rules:
        return True
    allowed = False
    for rule in rules:
        if rule.matches(target):
            allowed = rule.action == Action.ALLOW
    return allowed


class Artifact(MetaModel):
    url: str
    size: int
    sha1: Digest


class Download(MetaModel):
    artifact: Optional[Artifact] = None
    # Platform specific natives, keyed by classifier name.
    classifiers: dict[str, Artifact] = {}


class Extract(MetaModel):
    exclude: list[str] = []


class CommonLibrary(MetaModel):
    name: str
    downloads: Download
    rules: list[Rule] = []
    extract: Optional[Extract] = None
    natives: dict[str, str] = {}

    def is_allowed_on(self, target: Optional[Platform] = None) -> bool:
        """Evaluate the rules for ``target``, or for the running platform when omitted."""
        return is_allowed(self.rules, target or Platform.current())


class MavenLibrary(MetaModel):
    """A library resolved from a maven repository (forge, neoforge installers)."""

    name: str
    url: str


Library = Union[CommonLibrary, MavenLibrary]
