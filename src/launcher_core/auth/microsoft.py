"""Microsoft OAuth2 device code flow."""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Any, ClassVar, Optional

import aiohttp
from pydantic import BaseModel

from launcher_core.auth.endpoints import (
    DEFAULT_ENDPOINTS,
    DEVICE_CODE_GRANT_TYPE,
    REFRESH_GRANT_TYPE,
    SCOPE,
    AuthArgs,
    AuthEndpoints,
)
from launcher_core.errors import LauncherCoreError
from launcher_core.expiring import ExpiringData, NoRefresh, TtlField
from launcher_core.utils import Seconds

logger = logging.getLogger(__name__)


class MicrosoftAuthError(LauncherCoreError):
    """Failure talking to the Microsoft identity platform."""


class AuthorizationPendingError(MicrosoftAuthError):
    """The user has not finished signing in yet; poll again after ``interval``."""


class AuthorizationDeclinedError(MicrosoftAuthError):
    pass


class BadVerificationCodeError(MicrosoftAuthError):
    pass


class ExpiredTokenError(MicrosoftAuthError):
    pass


_EXCHANGE_ERRORS: dict[str, type[MicrosoftAuthError]] = {
    "authorization_pending": AuthorizationPendingError,
    "authorization_declined": AuthorizationDeclinedError,
    "bad_verification_code": BadVerificationCodeError,
    "expired_token": ExpiredTokenError,
}


async def _post_form(session: aiohttp.ClientSession, url: str, data: dict[str, str]) -> tuple[int, Any]:
    try:
        async with session.post(url, data=data) as response:
            payload = await response.json(content_type=None)
            return response.status, payload
    except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
        raise MicrosoftAuthError(f"Error while requesting {url}: {e}") from e


class MicrosoftAuth(TtlField, BaseModel):
    TTL_FIELD: ClassVar[str] = "expires_in"

    token_type: str
    scope: str
    expires_in: Seconds
    access_token: str
    refresh_token: str

    async def refresh(self, args: AuthArgs) -> None:
        """Redeem the refresh token for a new access token."""
        status, payload = await _post_form(
            args.session,
            args.endpoints.token_url,
            {
                "client_id": args.client_id,
                "grant_type": REFRESH_GRANT_TYPE,
                "scope": SCOPE,
                "refresh_token": self.refresh_token,
            },
        )
        if status >= 400:
            raise MicrosoftAuthError(f"Failed to refresh Microsoft token. status={status} payload={payload}")
        renewed = MicrosoftAuth.model_validate(payload)
        for name in MicrosoftAuth.model_fields:
            setattr(self, name, getattr(renewed, name))
        logger.info("Microsoft token refreshed. expires_in=%s", self.expires_in)


class DeviceCode(TtlField, NoRefresh, BaseModel):
    """
    A pending device code sign-in.

    Not refreshable: once it expires a new one must be requested.
    """

    TTL_FIELD: ClassVar[str] = "expires_in"

    user_code: str
    device_code: str
    verification_uri: str
    expires_in: Seconds
    interval: Seconds
    message: Optional[str] = None

    @classmethod
    async def fetch(
        cls,
        session: aiohttp.ClientSession,
        client_id: str,
        *,
        endpoints: AuthEndpoints = DEFAULT_ENDPOINTS,
    ) -> DeviceCode:
        status, payload = await _post_form(
            session,
            endpoints.device_code_url,
            {"client_id": client_id, "scope": SCOPE},
        )
        if status >= 400:
            raise MicrosoftAuthError(f"Failed to request device code. status={status} payload={payload}")
        return cls.model_validate(payload)

    async def exchange(
        self,
        session: aiohttp.ClientSession,
        client_id: str,
        *,
        endpoints: AuthEndpoints = DEFAULT_ENDPOINTS,
    ) -> ExpiringData[MicrosoftAuth]:
        status, payload = await _post_form(
            session,
            endpoints.token_url,
            {
                "client_id": client_id,
                "grant_type": DEVICE_CODE_GRANT_TYPE,
                "device_code": self.device_code,
            },
        )
        if status < 400:
            return ExpiringData[MicrosoftAuth].wrap(MicrosoftAuth.model_validate(payload))

        if not isinstance(payload, dict) or not isinstance(payload.get("error"), str):
            raise MicrosoftAuthError(f"Error while reading error field. status={status}")
        error = payload["error"]
        error_cls = _EXCHANGE_ERRORS.get(error)
        if error_cls is None:
            raise MicrosoftAuthError(f"Unknown error: {error!r}")
        raise error_cls(f"Failed to exchange device code. details: {error}")

    async def poll(
        self,
        session: aiohttp.ClientSession,
        client_id: str,
        *,
        endpoints: AuthEndpoints = DEFAULT_ENDPOINTS,
        limit_seconds: Optional[float] = None,
    ) -> ExpiringData[MicrosoftAuth]:
        """Exchange the device code, waiting ``interval`` between attempts while sign-in is pending."""
        budget = self.expires_in.total_seconds()
        if limit_seconds is not None:
            budget = min(budget, limit_seconds)
        deadline = time.monotonic() + budget
        while True:
            try:
                return await self.exchange(session, client_id, endpoints=endpoints)
            except AuthorizationPendingError:
                if time.monotonic() + self.interval.total_seconds() >= deadline:
                    raise ExpiredTokenError("Device code expired before the user signed in.") from None
                logger.debug("auth.device_code_pending interval=%s", self.interval)
                await asyncio.sleep(self.interval.total_seconds())
