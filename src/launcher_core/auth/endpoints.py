from __future__ import annotations

from dataclasses import dataclass

import aiohttp

SCOPE = "XboxLive.signin offline_access"
DEVICE_CODE_GRANT_TYPE = "urn:ietf:params:oauth:grant-type:device_code"
REFRESH_GRANT_TYPE = "refresh_token"


@dataclass(frozen=True, slots=True)
class AuthEndpoints:
    device_code_url: str = "https://login.microsoftonline.com/consumers/oauth2/v2.0/devicecode"
    token_url: str = "https://login.microsoftonline.com/consumers/oauth2/v2.0/token"
    xbox_user_authenticate_url: str = "https://user.auth.xboxlive.com/user/authenticate"
    xbox_xsts_authorize_url: str = "https://xsts.auth.xboxlive.com/xsts/authorize"
    minecraft_login_url: str = "https://api.minecraftservices.com/authentication/login_with_xbox"
    minecraft_profile_url: str = "https://api.minecraftservices.com/minecraft/profile"


DEFAULT_ENDPOINTS = AuthEndpoints()


@dataclass(frozen=True, slots=True)
class AuthArgs:
    """Everything a credential needs to refresh itself."""

    session: aiohttp.ClientSession
    client_id: str
    endpoints: AuthEndpoints = DEFAULT_ENDPOINTS
