from __future__ import annotations

import asyncio

import aiohttp
import pytest
import pytest_asyncio
from aiohttp import web
from aiohttp.test_utils import TestServer

from wearable_scraper.domain.errors import FetchError
from wearable_scraper.scraping.page_fetcher import PageFetcher

UA = "wearable-test-agent/1.0"


async def _echo_agent(request: web.Request) -> web.Response:
    return web.Response(text=f"<html><body>{request.headers.get('User-Agent')}</body></html>", content_type="text/html")


async def _missing(request: web.Request) -> web.Response:
    return web.Response(status=404, text="nope")


async def _slow(request: web.Request) -> web.Response:
    await asyncio.sleep(1)
    return web.Response(text="late")


@pytest_asyncio.fixture
async def server():
    app = web.Application()
    app.router.add_get("/ok", _echo_agent)
    app.router.add_get("/missing", _missing)
    app.router.add_get("/slow", _slow)
    async with TestServer(app) as srv:
        yield srv


@pytest.mark.asyncio
async def test_fetch_returns_body_and_sends_user_agent(server: TestServer) -> None:
    async with PageFetcher(user_agent=UA) as fetcher:
        page = await fetcher.fetch(str(server.make_url("/ok")))

    assert page.status == 200
    assert UA in page.html


@pytest.mark.asyncio
async def test_non_2xx_is_fetch_error(server: TestServer) -> None:
    url = str(server.make_url("/missing"))
    async with PageFetcher(user_agent=UA) as fetcher:
        with pytest.raises(FetchError) as exc_info:
            await fetcher.fetch(url)

    assert exc_info.value.url == url
    assert exc_info.value.cause == "HTTP 404"


@pytest.mark.asyncio
async def test_timeout_is_fetch_error(server: TestServer) -> None:
    async with PageFetcher(user_agent=UA, timeout_seconds=0.1) as fetcher:
        with pytest.raises(FetchError) as exc_info:
            await fetcher.fetch(str(server.make_url("/slow")))

    assert "timed out" in exc_info.value.cause


@pytest.mark.asyncio
@pytest.mark.parametrize("url", ["", "not a url", "ftp://example.com/file", "/relative/path"])
async def test_invalid_url_is_rejected_before_any_request(url: str) -> None:
    fetcher = PageFetcher(user_agent=UA)
    with pytest.raises(FetchError) as exc_info:
        await fetcher.fetch(url)

    assert exc_info.value.cause.startswith("invalid URL")
    await fetcher.close()


@pytest.mark.asyncio
async def test_connection_refused_is_fetch_error(server: TestServer) -> None:
    url = str(server.make_url("/ok"))
    await server.close()

    async with PageFetcher(user_agent=UA) as fetcher:
        with pytest.raises(FetchError) as exc_info:
            await fetcher.fetch(url)

    assert isinstance(exc_info.value.__cause__, aiohttp.ClientError)
