import asyncio
import tempfile
import unittest
from datetime import timedelta
from pathlib import Path

from launcher_core.auth import AccountRecord
from launcher_core.config.models import AppConfig, AuthSettings, StorageSettings
from launcher_core.context import LauncherContext
from launcher_core.storage import DirectoryStorePoint

from support import FakeIdentityService


class LauncherContextAccountTests(unittest.IsolatedAsyncioTestCase):
    async def asyncSetUp(self) -> None:
        self.service = FakeIdentityService()
        endpoints = await self.service.start()
        self._tmp = tempfile.TemporaryDirectory()
        self.accounts_dir = Path(self._tmp.name) / "accounts"
        config = AppConfig(
            auth=AuthSettings(client_id="client-1"),
            storage=StorageSettings(
                metadata_dir=str(Path(self._tmp.name) / "metadata"),
                accounts_dir=str(self.accounts_dir),
            ),
        )
        self.ctx = LauncherContext(config, endpoints=endpoints)
        await self.ctx.__aenter__()

    async def asyncTearDown(self) -> None:
        await self.ctx.__aexit__(None, None, None)
        await self.service.close()
        self._tmp.cleanup()

    async def test_login_saves_account(self) -> None:
        record = await self.ctx.login(on_device_code=lambda code: None)

        self.assertTrue((self.accounts_dir / "profile-1.json").is_file())
        self.assertEqual(await self.ctx.load_account("profile-1"), record)

    async def test_unknown_account_loads_as_none(self) -> None:
        self.assertIsNone(await self.ctx.load_account("nobody"))

    async def test_valid_account_keeps_fresh_record(self) -> None:
        record = await self.ctx.login()

        same = await self.ctx.valid_account(record)

        self.assertIs(same, record)
        self.assertEqual(self.service.minecraft_logins, 1)

    async def test_valid_account_refreshes_and_saves_expired_record(self) -> None:
        await self.ctx.login()
        record = await self.ctx.load_account("profile-1")
        record.created_at -= timedelta(days=2)

        await self.ctx.valid_account(record)

        self.assertEqual(record.get_ref().mc_auth.access_token, "mc-2")
        saved = AccountRecord.load(DirectoryStorePoint(self.accounts_dir), "profile-1.json")
        self.assertEqual(saved.get_ref().mc_auth.access_token, "mc-2")
        self.assertFalse(saved.is_expired())

    async def test_concurrent_refreshes_of_one_account_run_once(self) -> None:
        record = await self.ctx.login()
        record.created_at -= timedelta(days=2)

        await asyncio.gather(self.ctx.valid_account(record), self.ctx.valid_account(record))

        self.assertEqual(self.service.minecraft_logins, 2)


if __name__ == "__main__":
    unittest.main()
