import unittest

from aiohttp import test_utils, web

from launcher_core.cache.fetcher import HttpFetcher, create_session
from launcher_core.config.models import HttpSettings
from launcher_core.errors import NetworkFetchError


class HttpFetcherTests(unittest.IsolatedAsyncioTestCase):
    async def asyncSetUp(self) -> None:
        self.user_agents: list[str] = []

        async def document(request: web.Request) -> web.Response:
            self.user_agents.append(request.headers.get("User-Agent", ""))
            return web.Response(body=b'{"ok": true}', content_type="application/json")

        async def missing(request: web.Request) -> web.Response:
            return web.Response(status=404, text="nope")

        app = web.Application()
        app.router.add_get("/doc.json", document)
        app.router.add_get("/missing.json", missing)
        self.server = test_utils.TestServer(app)
        await self.server.start_server()

    async def asyncTearDown(self) -> None:
        await self.server.close()

    async def test_fetch_returns_body_and_sends_user_agent(self) -> None:
        async with HttpFetcher(HttpSettings(user_agent="launcher-tests")) as fetcher:
            body = await fetcher.fetch_bytes(str(self.server.make_url("/doc.json")))

        self.assertEqual(body, b'{"ok": true}')
        self.assertEqual(self.user_agents, ["launcher-tests"])

    async def test_error_status_raises_with_status(self) -> None:
        url = str(self.server.make_url("/missing.json"))
        async with HttpFetcher(HttpSettings()) as fetcher:
            with self.assertRaises(NetworkFetchError) as ctx:
                await fetcher.fetch_bytes(url)

        self.assertEqual(ctx.exception.status, 404)
        self.assertEqual(ctx.exception.url, url)

    async def test_transport_failure_raises(self) -> None:
        url = str(self.server.make_url("/doc.json"))
        await self.server.close()

        async with HttpFetcher(HttpSettings(timeout_seconds=5)) as fetcher:
            with self.assertRaises(NetworkFetchError) as ctx:
                await fetcher.fetch_bytes(url)

        self.assertIsNone(ctx.exception.status)

    async def test_injected_session_is_not_closed(self) -> None:
        session = create_session(HttpSettings())
        try:
            fetcher = HttpFetcher(HttpSettings(), session=session)
            async with fetcher:
                await fetcher.fetch_bytes(str(self.server.make_url("/doc.json")))
            self.assertFalse(session.closed)
        finally:
            await session.close()

    async def test_session_requires_start(self) -> None:
        fetcher = HttpFetcher(HttpSettings())
        with self.assertRaises(RuntimeError):
            _ = fetcher.session


if __name__ == "__main__":
    unittest.main()
