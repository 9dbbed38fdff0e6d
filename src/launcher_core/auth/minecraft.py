from __future__ import annotations

import asyncio
import logging
from typing import ClassVar

import aiohttp
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from launcher_core.auth.endpoints import DEFAULT_ENDPOINTS, AuthEndpoints
from launcher_core.auth.xbox import XboxSecurityToken
from launcher_core.errors import LauncherCoreError
from launcher_core.expiring import NoRefresh, TtlField
from launcher_core.utils import Seconds

logger = logging.getLogger(__name__)


class MinecraftAuthError(LauncherCoreError):
    pass


class ProfileNotFoundError(MinecraftAuthError):
    """The account does not own the game, so it has no profile."""


class MinecraftAuth(TtlField, NoRefresh, BaseModel):
    """Minecraft services token; obtained anew from an XSTS token rather than refreshed."""

    TTL_FIELD: ClassVar[str] = "expires_in"

    username: str
    access_token: str
    expires_in: Seconds
    token_type: str

    @classmethod
    async def fetch(
        cls,
        session: aiohttp.ClientSession,
        xsts: XboxSecurityToken,
        *,
        endpoints: AuthEndpoints = DEFAULT_ENDPOINTS,
    ) -> MinecraftAuth:
        body = {"identityToken": f"XBL3.0 x={xsts.uhs};{xsts.token}"}
        try:
            async with session.post(endpoints.minecraft_login_url, json=body) as response:
                if response.status >= 400:
                    raise MinecraftAuthError(f"Minecraft login failed. status={response.status}")
                payload = await response.json(content_type=None)
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
            raise MinecraftAuthError(f"Error while logging in to Minecraft services: {e}") from e
        return cls.model_validate(payload)


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Skin(_CamelModel):
    id: str
    state: str
    url: str
    texture_key: str
    variant: str


class Cape(_CamelModel):
    id: str
    state: str
    url: str
    alias: str


class Profile(_CamelModel):
    id: str
    name: str
    skins: list[Skin] = []
    capes: list[Cape] = []

    @classmethod
    async def fetch(
        cls,
        session: aiohttp.ClientSession,
        mc_auth: MinecraftAuth,
        *,
        endpoints: AuthEndpoints = DEFAULT_ENDPOINTS,
    ) -> Profile:
        headers = {"Authorization": f"Bearer {mc_auth.access_token}"}
        try:
            async with session.get(endpoints.minecraft_profile_url, headers=headers) as response:
                if response.status == 404:
                    raise ProfileNotFoundError(f"No Minecraft profile for {mc_auth.username}.")
                if response.status >= 400:
                    raise MinecraftAuthError(f"Profile request failed. status={response.status}")
                payload = await response.json(content_type=None)
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
            raise MinecraftAuthError(f"Error while fetching Minecraft profile: {e}") from e
        return cls.model_validate(payload)
