# File: tests/conftest.py
from __future__ import annotations

import logging
from collections import Counter
from typing import Any, AsyncIterator, Awaitable, Callable, Dict, List

import pytest
import pytest_asyncio
from aiohttp import web

from sitemap_scout.config import CrawlerConfig
from sitemap_scout.logger import LOGGER_NAME

Route = Any


class LocalServer:
    """Base URL of a running test app plus the request log."""

    def __init__(self, url: str) -> None:
        self.url = url
        self.hits: Counter[str] = Counter()
        self.paths: List[str] = []
        self.requests: List[Any] = []

    def __call__(self, path: str) -> str:
        return f"{self.url}{path}"


def _static(server: LocalServer, body, content_type: str = "application/xml", status: int = 200):
    async def handler(_request: web.Request) -> web.Response:
        payload = body
        if isinstance(payload, str):
            # "{base}" lets route bodies reference the server's own URL
            payload = payload.replace("{base}", server.url).encode("utf-8")
        return web.Response(body=payload, status=status, headers={"Content-Type": content_type})

    return handler


def _handler(server: LocalServer, route: Route):
    if callable(route):
        return route
    if isinstance(route, tuple):
        return _static(server, *route)
    return _static(server, route)


@pytest.fixture(autouse=True)
def reset_project_logger():
    """configure() from CLI tests turns propagation off; restore it for caplog."""
    yield
    lg = logging.getLogger(LOGGER_NAME)
    lg.handlers.clear()
    lg.propagate = True
    lg.setLevel(logging.NOTSET)


@pytest.fixture()
def fast_config() -> CrawlerConfig:
    """
    Config without politeness delays and with a short timeout.
    """
    return CrawlerConfig(
        timeout=2.0,
        workers=3,
        child_delay=0.0,
        page_delay=0.0,
    )


@pytest.fixture()
def dead_url(unused_tcp_port_factory) -> str:
    """Base URL of a port nothing listens on (connection refused)."""
    return f"http://127.0.0.1:{unused_tcp_port_factory()}"


@pytest_asyncio.fixture
async def serve(
    unused_tcp_port_factory,
) -> AsyncIterator[Callable[[Dict[str, Route]], Awaitable[LocalServer]]]:
    """
    Start an aiohttp app from a ``{path: route}`` mapping.

    A route is a body (str/bytes, served as application/xml), a tuple
    ``(body, content_type[, status])`` or a ready aiohttp handler.
    """
    runners: List[web.AppRunner] = []

    async def _serve(routes: Dict[str, Route]) -> LocalServer:
        port = unused_tcp_port_factory()
        server = LocalServer(f"http://127.0.0.1:{port}")

        @web.middleware
        async def record(request: web.Request, handler):
            server.hits[request.path] += 1
            server.paths.append(request.path)
            server.requests.append(request.headers.copy())
            return await handler(request)

        app = web.Application(middlewares=[record])
        for path, route in routes.items():
            app.router.add_get(path, _handler(server, route))

        runner = web.AppRunner(app)
        await runner.setup()
        runners.append(runner)
        site = web.TCPSite(runner, "127.0.0.1", port)
        await site.start()
        return server

    yield _serve

    for runner in runners:
        await runner.cleanup()


def urlset(*locations: str) -> str:
    entries = "".join(f"<url><loc>{loc}</loc></url>" for loc in locations)
    return (
        '<?xml version="1.0" encoding="UTF-8"?>'
        f'<urlset xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">{entries}</urlset>'
    )


def sitemapindex(*locations: str) -> str:
    entries = "".join(f"<sitemap><loc>{loc}</loc></sitemap>" for loc in locations)
    return (
        '<?xml version="1.0" encoding="UTF-8"?>'
        f'<sitemapindex xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">{entries}</sitemapindex>'
    )


@pytest.fixture()
def make_urlset() -> Callable[..., str]:
    return urlset


@pytest.fixture()
def make_index() -> Callable[..., str]:
    return sitemapindex
