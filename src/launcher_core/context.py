from __future__ import annotations

import asyncio
import logging
from collections import defaultdict
from typing import Callable, Optional

from launcher_core.auth.account import AccountRecord, login_with_device_code
from launcher_core.auth.endpoints import DEFAULT_ENDPOINTS, AuthArgs, AuthEndpoints
from launcher_core.auth.microsoft import DeviceCode
from launcher_core.cache.fetcher import HttpFetcher
from launcher_core.config.models import AppConfig
from launcher_core.errors import NotFoundError
from launcher_core.metadata.package import PackageList
from launcher_core.storage.store_point import DirectoryStorePoint

logger = logging.getLogger(__name__)


class LauncherContext:
    """
    Long-lived handles shared by one launcher process.

    Owns the HTTP session (through ``HttpFetcher``) and the store points. Account
    refreshes are serialized per profile because ``ExpiringData`` has no locking.
    """

    def __init__(self, config: AppConfig, *, endpoints: AuthEndpoints = DEFAULT_ENDPOINTS) -> None:
        self.config = config
        self.metadata_store = DirectoryStorePoint(config.storage.metadata_dir)
        self.accounts_store = DirectoryStorePoint(config.storage.accounts_dir)
        self.fetcher = HttpFetcher(config.http)
        self._endpoints = endpoints
        self._account_locks: defaultdict[str, asyncio.Lock] = defaultdict(asyncio.Lock)

    async def __aenter__(self) -> LauncherContext:
        await self.fetcher.start()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.fetcher.stop()

    @property
    def auth_args(self) -> AuthArgs:
        return AuthArgs(
            session=self.fetcher.session,
            client_id=self.config.auth.client_id,
            endpoints=self._endpoints,
        )

    async def package_list(self) -> PackageList:
        return await PackageList.fetch(self.metadata_store, self.fetcher, self.config.metadata.endpoint)

    async def login(self, *, on_device_code: Optional[Callable[[DeviceCode], None]] = None) -> AccountRecord:
        record = await login_with_device_code(
            self.auth_args,
            on_device_code=on_device_code,
            limit_seconds=self.config.auth.device_code_poll_limit_seconds,
        )
        await asyncio.to_thread(record.save, self.accounts_store)
        logger.info("Account signed in and saved. profile=%s", record.data.profile.name)
        return record

    async def load_account(self, profile_id: str) -> Optional[AccountRecord]:
        try:
            return await asyncio.to_thread(AccountRecord.load, self.accounts_store, f"{profile_id}.json")
        except NotFoundError:
            return None

    async def valid_account(self, record: AccountRecord) -> AccountRecord:
        """Refresh ``record`` if it has expired and save it; returns the same record."""
        async with self._account_locks[record.data.profile.id]:
            if record.is_expired():
                await record.refresh(self.auth_args)
                await asyncio.to_thread(record.save, self.accounts_store)
                logger.info("Account refreshed. profile=%s", record.data.profile.name)
        return record
