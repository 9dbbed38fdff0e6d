from __future__ import annotations

import asyncio
import logging
from typing import Optional, Protocol

import aiohttp

from launcher_core.config.models import HttpSettings
from launcher_core.errors import NetworkFetchError

logger = logging.getLogger(__name__)


class Fetcher(Protocol):
    async def fetch_bytes(self, url: str) -> bytes:
        """Return the full response body of an HTTP GET to ``url``."""
        ...


class HttpFetcher:
    """
    Fetches raw response bodies over one reusable aiohttp session.

    Pass an existing session to share it with other callers (auth requests, for
    example); otherwise the fetcher owns a session for the lifetime of the
    ``async with`` block.
    """

    def __init__(self, settings: HttpSettings, session: Optional[aiohttp.ClientSession] = None) -> None:
        self._settings = settings
        self._session = session
        self._owns_session = session is None

    async def __aenter__(self) -> HttpFetcher:
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.stop()

    @property
    def session(self) -> aiohttp.ClientSession:
        if self._session is None:
            raise RuntimeError("HttpFetcher is not started.")
        return self._session

    async def start(self) -> None:
        if self._session is not None:
            return
        self._session = create_session(self._settings)
        self._owns_session = True

    async def stop(self) -> None:
        if self._owns_session and self._session is not None:
            await self._session.close()
            self._session = None

    async def fetch_bytes(self, url: str) -> bytes:
        logger.debug("http.fetch_start url=%s", url)
        try:
            async with self.session.get(url) as response:
                if response.status >= 400:
                    raise NetworkFetchError(url, response.reason or "HTTP error", status=response.status)
                data = await response.read()
        except asyncio.TimeoutError as e:
            raise NetworkFetchError(url, "timeout") from e
        except aiohttp.ClientError as e:
            raise NetworkFetchError(url, str(e)) from e
        logger.debug("http.fetch_success url=%s size=%d", url, len(data))
        return data


def create_session(settings: HttpSettings) -> aiohttp.ClientSession:
    timeout = aiohttp.ClientTimeout(total=settings.timeout_seconds)
    return aiohttp.ClientSession(timeout=timeout, headers={"User-Agent": settings.user_agent})
