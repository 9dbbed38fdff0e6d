"""Microsoft / Xbox / Minecraft sign-in built on the expiring data container."""

from __future__ import annotations

from launcher_core.auth.account import Account, AccountRecord, fetch_minecraft_identity, login_with_device_code
from launcher_core.auth.endpoints import DEFAULT_ENDPOINTS, AuthArgs, AuthEndpoints
from launcher_core.auth.microsoft import DeviceCode, MicrosoftAuth, MicrosoftAuthError
from launcher_core.auth.minecraft import MinecraftAuth, MinecraftAuthError, Profile
from launcher_core.auth.xbox import XboxAuthError, XboxLiveToken, XboxSecurityError, XboxSecurityToken

__all__ = [
    "Account",
    "AccountRecord",
    "AuthArgs",
    "AuthEndpoints",
    "DEFAULT_ENDPOINTS",
    "DeviceCode",
    "MicrosoftAuth",
    "MicrosoftAuthError",
    "MinecraftAuth",
    "MinecraftAuthError",
    "Profile",
    "XboxAuthError",
    "XboxLiveToken",
    "XboxSecurityError",
    "XboxSecurityToken",
    "fetch_minecraft_identity",
    "login_with_device_code",
]
