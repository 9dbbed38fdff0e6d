from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Annotated

from pydantic import PlainSerializer


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def format_rfc3339(dt: datetime) -> str:
    return dt.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


# OAuth payloads carry lifetimes as integer seconds.
Seconds = Annotated[
    timedelta,
    PlainSerializer(lambda value: int(value.total_seconds()), return_type=int),
]

# Timestamps are stored as RFC3339 UTC strings ending in "Z".
Rfc3339 = Annotated[
    datetime,
    PlainSerializer(format_rfc3339, return_type=str),
]
