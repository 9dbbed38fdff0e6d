"""
A signed-in player account.

An ``Account`` expires with its Minecraft token. Refreshing it walks the whole chain
again: the Microsoft token (itself refreshed when expired), Xbox Live, XSTS, the
Minecraft login and finally the profile.
"""

from __future__ import annotations

import logging
from datetime import timedelta
from pathlib import Path
from typing import Callable, Optional

import aiohttp
from pydantic import BaseModel

from launcher_core.auth.endpoints import DEFAULT_ENDPOINTS, AuthArgs, AuthEndpoints
from launcher_core.auth.microsoft import DeviceCode, MicrosoftAuth
from launcher_core.auth.minecraft import MinecraftAuth, Profile
from launcher_core.auth.xbox import XboxLiveToken, XboxSecurityToken
from launcher_core.expiring import ExpiringData
from launcher_core.storage.persistence import Load, Save

logger = logging.getLogger(__name__)


async def fetch_minecraft_identity(
    session: aiohttp.ClientSession,
    ms_access_token: str,
    *,
    endpoints: AuthEndpoints = DEFAULT_ENDPOINTS,
) -> tuple[MinecraftAuth, Profile]:
    live_token = await XboxLiveToken.fetch(session, ms_access_token, endpoints=endpoints)
    logger.debug("auth.xbox_live_ok")
    xsts = await XboxSecurityToken.fetch(session, live_token, endpoints=endpoints)
    logger.debug("auth.xsts_ok uhs=%s", xsts.uhs)
    mc_auth = await MinecraftAuth.fetch(session, xsts, endpoints=endpoints)
    profile = await Profile.fetch(session, mc_auth, endpoints=endpoints)
    logger.info("Minecraft identity resolved. profile=%s", profile.name)
    return mc_auth, profile


class Account(BaseModel):
    mc_auth: MinecraftAuth
    profile: Profile
    msa: ExpiringData[MicrosoftAuth]

    def ttl(self) -> timedelta:
        return self.mc_auth.ttl()

    async def refresh(self, args: AuthArgs) -> None:
        msa = await self.msa.try_ref(args)
        mc_auth, profile = await fetch_minecraft_identity(args.session, msa.access_token, endpoints=args.endpoints)
        self.mc_auth = mc_auth
        self.profile = profile


class AccountRecord(Save, Load, ExpiringData[Account]):
    """An account with its refresh timestamp, saved as ``<profile id>.json``."""

    async def refresh(self, args: AuthArgs) -> None:
        # A rotated Microsoft refresh token is kept even if a later hop fails.
        await self.data.msa.try_ref(args)
        await super().refresh(args)

    def suffix(self) -> Path:
        return Path(f"{self.data.profile.id}.json")


async def login_with_device_code(
    args: AuthArgs,
    *,
    on_device_code: Optional[Callable[[DeviceCode], None]] = None,
    limit_seconds: Optional[float] = None,
) -> AccountRecord:
    device_code = await DeviceCode.fetch(args.session, args.client_id, endpoints=args.endpoints)
    if on_device_code is not None:
        on_device_code(device_code)
    else:
        logger.info(
            "Sign in required. verification_uri=%s user_code=%s",
            device_code.verification_uri,
            device_code.user_code,
        )

    msa = await device_code.poll(args.session, args.client_id, endpoints=args.endpoints, limit_seconds=limit_seconds)
    mc_auth, profile = await fetch_minecraft_identity(args.session, msa.get_ref().access_token, endpoints=args.endpoints)
    return AccountRecord.wrap(Account(mc_auth=mc_auth, profile=profile, msa=msa))
