"""Exception taxonomy shared by the storage, cache and expiring-data layers."""

from __future__ import annotations


class LauncherCoreError(Exception):
    """Base exception for all launcher core errors."""


class NotFoundError(LauncherCoreError):
    """Raised when a persisted file does not exist."""


class CorruptError(LauncherCoreError):
    """Raised when bytes are present on disk but cannot be deserialized."""


class StorageIOError(LauncherCoreError):
    """Raised when a filesystem operation fails."""


class NetworkFetchError(LauncherCoreError):
    """Raised when a required HTTP fetch fails (transport error or non-2xx status)."""

    def __init__(self, url: str, message: str, *, status: int | None = None) -> None:
        super().__init__(f"Failed to fetch url={url} status={status} error={message}")
        self.url = url
        self.status = status


class RefreshFailedError(LauncherCoreError):
    """Raised when a wrapped value fails to refresh itself."""


class RefreshUnsupportedError(RefreshFailedError):
    """Raised by values that never support refreshing."""


class DigestError(LauncherCoreError, ValueError):
    """Base exception for digest parsing errors."""


class MalformedDigestError(DigestError):
    """Raised when a digest string is not valid hex."""


class UnsupportedDigestLengthError(DigestError):
    """Raised when a decoded digest is neither 20 nor 32 bytes long."""
