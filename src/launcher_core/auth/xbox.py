"""Xbox Live user authentication and XSTS authorization."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

import aiohttp
from pydantic import BaseModel

from launcher_core.auth.endpoints import DEFAULT_ENDPOINTS, AuthEndpoints
from launcher_core.errors import LauncherCoreError

logger = logging.getLogger(__name__)


class XboxAuthError(LauncherCoreError):
    pass


class XboxSecurityError(XboxAuthError):
    """XSTS authorization was refused."""


class XboxAccountMissingError(XboxSecurityError):
    """The account has no Xbox profile yet; signing in on minecraft.net creates one."""


class XboxCountryBannedError(XboxSecurityError):
    pass


class XboxAdultVerificationError(XboxSecurityError):
    pass


class XboxChildAccountError(XboxSecurityError):
    """The account is under 18 and must be added to a Family by an adult."""


_XERR_ERRORS: dict[int, type[XboxSecurityError]] = {
    2148916233: XboxAccountMissingError,
    2148916235: XboxCountryBannedError,
    2148916236: XboxAdultVerificationError,
    2148916237: XboxAdultVerificationError,
    2148916238: XboxChildAccountError,
}


async def _post_json(session: aiohttp.ClientSession, url: str, body: dict[str, Any]) -> tuple[int, Any]:
    try:
        async with session.post(url, json=body, headers={"Accept": "application/json"}) as response:
            payload = await response.json(content_type=None)
            return response.status, payload
    except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
        raise XboxAuthError(f"Error while requesting {url}: {e}") from e


class XboxLiveToken(BaseModel):
    token: str

    @classmethod
    async def fetch(
        cls,
        session: aiohttp.ClientSession,
        access_token: str,
        *,
        endpoints: AuthEndpoints = DEFAULT_ENDPOINTS,
    ) -> XboxLiveToken:
        """Trade a Microsoft access token for an Xbox Live user token."""
        status, payload = await _post_json(
            session,
            endpoints.xbox_user_authenticate_url,
            {
                "Properties": {
                    "AuthMethod": "RPS",
                    "SiteName": "user.auth.xboxlive.com",
                    "RpsTicket": f"d={access_token}",
                },
                "RelyingParty": "http://auth.xboxlive.com",
                "TokenType": "JWT",
            },
        )
        if status >= 400:
            raise XboxAuthError(f"Xbox Live authentication failed. status={status}")
        token = payload.get("Token") if isinstance(payload, dict) else None
        if not isinstance(token, str):
            raise XboxAuthError("Token not found in Xbox Live response.")
        return cls(token=token)


class XboxSecurityToken(BaseModel):
    token: str
    uhs: str

    @classmethod
    async def fetch(
        cls,
        session: aiohttp.ClientSession,
        live_token: XboxLiveToken,
        *,
        endpoints: AuthEndpoints = DEFAULT_ENDPOINTS,
    ) -> XboxSecurityToken:
        status, payload = await _post_json(
            session,
            endpoints.xbox_xsts_authorize_url,
            {
                "Properties": {
                    "SandboxId": "RETAIL",
                    "UserTokens": [live_token.token],
                },
                "RelyingParty": "rp://api.minecraftservices.com/",
                "TokenType": "JWT",
            },
        )
        if not isinstance(payload, dict):
            raise XboxSecurityError(f"Unexpected XSTS response. status={status}")

        if status < 400:
            try:
                token = payload["Token"]
                uhs = payload["DisplayClaims"]["xui"][0]["uhs"]
            except (KeyError, IndexError, TypeError) as e:
                raise XboxSecurityError(f"Error while parsing XSTS response: {e}") from e
            return cls(token=token, uhs=uhs)

        xerr = payload.get("XErr")
        if not isinstance(xerr, int):
            raise XboxSecurityError(f"Error while fetching XErr code. status={status}")
        error_cls = _XERR_ERRORS.get(xerr, XboxSecurityError)
        logger.warning("XSTS authorization refused. xerr=%s", xerr)
        raise error_cls(f"XSTS authorization refused. xerr={xerr}")
