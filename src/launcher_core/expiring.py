"""
Time-boxed values that know how to refresh themselves.

A wrapped value reports its own lifetime through ``ttl()`` and renews itself through
``refresh(args)``. ``ExpiringData`` pairs such a value with the instant it was created
or last refreshed, and decides when a refresh is due.
"""

from __future__ import annotations

import copy
import logging
from datetime import timedelta
from typing import Any, ClassVar, Generic, Protocol, TypeVar, runtime_checkable

from pydantic import BaseModel, Field

from launcher_core.errors import RefreshFailedError, RefreshUnsupportedError
from launcher_core.utils import Rfc3339, utc_now

logger = logging.getLogger(__name__)


@runtime_checkable
class Expirable(Protocol):
    def ttl(self) -> timedelta: ...


@runtime_checkable
class Refreshable(Protocol):
    async def refresh(self, args: Any) -> None:
        """Renew the value in place. ``args`` carries whatever the refresh needs."""
        ...


class TtlField:
    """Implements ``ttl()`` by reading the field named in ``TTL_FIELD``."""

    TTL_FIELD: ClassVar[str]

    def ttl(self) -> timedelta:
        value = getattr(self, self.TTL_FIELD)
        if not isinstance(value, timedelta):
            raise TypeError(f"{type(self).__name__}.{self.TTL_FIELD} must be a timedelta, got {type(value).__name__}")
        return value


class NoRefresh:
    """For values that must be obtained anew instead of refreshed."""

    async def refresh(self, args: Any = None) -> None:
        raise RefreshUnsupportedError(f"{type(self).__name__} can't be refreshed.")


T = TypeVar("T")


class ExpiringData(BaseModel, Generic[T]):
    """
    A value plus the time it was created or last refreshed.

    No internal locking: callers sharing one instance across tasks must serialize
    ``refresh`` and ``try_ref`` themselves.
    """

    data: T
    created_at: Rfc3339 = Field(default_factory=utc_now)

    @classmethod
    def wrap(cls, data: T) -> ExpiringData[T]:
        """Wrap ``data`` stamped with the current time. ``data`` must be valid right now."""
        return cls(data=data, created_at=utc_now())

    def is_expired(self) -> bool:
        return utc_now() - self.created_at >= self.data.ttl()

    def get_ref(self) -> T:
        """Return the value without checking expiry."""
        return self.data

    async def refresh(self, args: Any = None) -> None:
        # Refresh a copy so a failure leaves both data and created_at untouched.
        candidate = copy.deepcopy(self.data)
        try:
            await candidate.refresh(args)
        except RefreshFailedError:
            raise
        except Exception as e:
            raise RefreshFailedError(f"Failed to refresh {type(self.data).__name__}: {e}") from e
        self.data = candidate
        self.created_at = utc_now()
        logger.debug("expiring.refreshed type=%s", type(candidate).__name__)

    async def try_ref(self, args: Any = None) -> T:
        """Return the value, refreshing it first when it has expired."""
        if self.is_expired():
            logger.info("expiring.expired type=%s created_at=%s", type(self.data).__name__, self.created_at)
            await self.refresh(args)
        return self.data


__all__ = ["Expirable", "ExpiringData", "NoRefresh", "Refreshable", "TtlField"]
