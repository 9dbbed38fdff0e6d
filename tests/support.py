import asyncio
from typing import Any, Dict, Optional

from aiohttp import test_utils, web

from launcher_core.auth.endpoints import DEVICE_CODE_GRANT_TYPE, SCOPE, AuthEndpoints
from launcher_core.errors import NetworkFetchError


class StubFetcher:
    """In-memory ``Fetcher`` that records every requested url."""

    def __init__(
        self,
        responses: Optional[Dict[str, bytes]] = None,
        *,
        fail: bool = False,
        max_calls: Optional[int] = None,
        delay: float = 0.0,
    ) -> None:
        self.responses = dict(responses or {})
        self.fail = fail
        self.max_calls = max_calls
        self.delay = delay
        self.calls: list[str] = []

    async def fetch_bytes(self, url: str) -> bytes:
        self.calls.append(url)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.max_calls is not None and len(self.calls) > self.max_calls:
            raise AssertionError(f"Unexpected extra fetch of {url}")
        if self.fail or url not in self.responses:
            raise NetworkFetchError(url, "stubbed failure", status=503)
        return self.responses[url]


class FakeIdentityService:
    """
    Local stand-in for the Microsoft, Xbox Live and Minecraft services.

    Tokens are numbered so tests can tell which step of the chain produced them:
    the n-th Microsoft token is ``ms-n`` and the n-th Minecraft login is ``mc-n``.
    """

    def __init__(self) -> None:
        self.pending_polls = 1
        self.exchange_error: Optional[str] = None
        self.xerr: Optional[int] = None
        self.owns_game = True
        self.token_requests: list[Dict[str, str]] = []
        self.rps_tickets: list[str] = []
        self.identity_tokens: list[str] = []
        self.profile_auth: list[str] = []
        self._ms_tokens = 0
        self._mc_logins = 0
        self._server: Optional[test_utils.TestServer] = None

    async def start(self) -> AuthEndpoints:
        app = web.Application()
        app.router.add_post("/consumers/devicecode", self._device_code)
        app.router.add_post("/consumers/token", self._token)
        app.router.add_post("/user/authenticate", self._xbox_live)
        app.router.add_post("/xsts/authorize", self._xsts)
        app.router.add_post("/authentication/login_with_xbox", self._minecraft_login)
        app.router.add_get("/minecraft/profile", self._profile)
        self._server = test_utils.TestServer(app)
        await self._server.start_server()

        def url(path: str) -> str:
            return str(self._server.make_url(path))

        return AuthEndpoints(
            device_code_url=url("/consumers/devicecode"),
            token_url=url("/consumers/token"),
            xbox_user_authenticate_url=url("/user/authenticate"),
            xbox_xsts_authorize_url=url("/xsts/authorize"),
            minecraft_login_url=url("/authentication/login_with_xbox"),
            minecraft_profile_url=url("/minecraft/profile"),
        )

    async def close(self) -> None:
        if self._server is not None:
            await self._server.close()

    @property
    def minecraft_logins(self) -> int:
        return self._mc_logins

    def grant_types(self) -> list[str]:
        return [request["grant_type"] for request in self.token_requests]

    def _ms_token(self) -> Dict[str, Any]:
        self._ms_tokens += 1
        return {
            "token_type": "Bearer",
            "scope": SCOPE,
            "expires_in": 3600,
            "ext_expires_in": 3600,
            "access_token": f"ms-{self._ms_tokens}",
            "refresh_token": f"refresh-{self._ms_tokens}",
        }

    async def _device_code(self, request: web.Request) -> web.Response:
        form = await request.post()
        if form.get("client_id") != "client-1":
            return web.json_response({"error": "invalid_client"}, status=400)
        return web.json_response(
            {
                "user_code": "ABCD-EFGH",
                "device_code": "device-1",
                "verification_uri": "https://www.microsoft.com/link",
                "expires_in": 900,
                "interval": 0,
                "message": "To sign in, use a web browser to open the page https://www.microsoft.com/link",
            }
        )

    async def _token(self, request: web.Request) -> web.Response:
        form = {key: str(value) for key, value in (await request.post()).items()}
        self.token_requests.append(form)
        if form["grant_type"] == DEVICE_CODE_GRANT_TYPE:
            if self.exchange_error is not None:
                return web.json_response({"error": self.exchange_error}, status=400)
            if self.pending_polls > 0:
                self.pending_polls -= 1
                return web.json_response({"error": "authorization_pending"}, status=400)
            return web.json_response(self._ms_token())
        if form.get("refresh_token") != f"refresh-{self._ms_tokens}":
            return web.json_response({"error": "invalid_grant"}, status=400)
        return web.json_response(self._ms_token())

    async def _xbox_live(self, request: web.Request) -> web.Response:
        body = await request.json()
        self.rps_tickets.append(body["Properties"]["RpsTicket"])
        return web.json_response({"Token": "xbl-token", "DisplayClaims": {"xui": [{"uhs": "uhs-1"}]}})

    async def _xsts(self, request: web.Request) -> web.Response:
        body = await request.json()
        if self.xerr is not None:
            return web.json_response({"Identity": "0", "XErr": self.xerr, "Message": ""}, status=401)
        if body["Properties"]["UserTokens"] != ["xbl-token"]:
            return web.json_response({"XErr": 0}, status=401)
        return web.json_response({"Token": "xsts-token", "DisplayClaims": {"xui": [{"uhs": "uhs-1"}]}})

    async def _minecraft_login(self, request: web.Request) -> web.Response:
        body = await request.json()
        self.identity_tokens.append(body["identityToken"])
        self._mc_logins += 1
        return web.json_response(
            {
                "username": "c7e2b0a6-0000-0000-0000-000000000000",
                "roles": [],
                "access_token": f"mc-{self._mc_logins}",
                "token_type": "Bearer",
                "expires_in": 86400,
            }
        )

    async def _profile(self, request: web.Request) -> web.Response:
        self.profile_auth.append(request.headers.get("Authorization", ""))
        if not self.owns_game:
            return web.json_response({"error": "NOT_FOUND"}, status=404)
        return web.json_response(
            {
                "id": "profile-1",
                "name": "Steve",
                "skins": [
                    {
                        "id": "skin-1",
                        "state": "ACTIVE",
                        "url": "http://textures.minecraft.net/texture/abc",
                        "textureKey": "abc",
                        "variant": "CLASSIC",
                    }
                ],
                "capes": [],
            }
        )
