import asyncio
from typing import Any, Awaitable, Callable, Dict, List

import pytest
from aiohttp import web
from aiohttp.test_utils import TestServer

from perplexica_mcp.config import PerplexicaSettings, reset_perplexica_settings_cache


@pytest.fixture(autouse=True)
def _clean_settings(monkeypatch):
    for key in ("PERPLEXICA_API_KEY", "PERPLEXICA_REQUEST_TIMEOUT", "PERPLEXICA_LOG_LEVEL"):
        monkeypatch.delenv(key, raising=False)
    reset_perplexica_settings_cache()
    yield
    reset_perplexica_settings_cache()


@pytest.fixture
def captured() -> List[Dict[str, Any]]:
    return []


@pytest.fixture
def json_backend(captured):
    """Build a /api/search handler that records requests and replies with ``payload``."""

    def _factory(payload: Any = None, *, status: int = 200, text: str = None):
        async def handler(request: web.Request) -> web.Response:
            captured.append({"headers": dict(request.headers), "body": await request.json()})
            if text is not None:
                return web.Response(status=status, text=text)
            return web.json_response(payload, status=status)

        return handler

    return _factory


@pytest.fixture
def run_against_backend():
    """Serve ``handler`` locally and run ``call(settings)`` against it."""

    def _run(
        handler: Callable[[web.Request], Awaitable[web.StreamResponse]],
        call: Callable[[PerplexicaSettings], Awaitable[Any]],
        **settings_kwargs: Any,
    ) -> Any:
        async def _main() -> Any:
            app = web.Application()
            app.router.add_post("/api/search", handler)
            server = TestServer(app)
            await server.start_server()
            try:
                settings = PerplexicaSettings(
                    api_url=str(server.make_url("/api/search")), **settings_kwargs
                )
                return await call(settings)
            finally:
                await server.close()

        return asyncio.run(_main())

    return _run
