"""aiohttp-based fetcher for static pages."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass

import aiohttp

from ..domain.errors import FetchError
from ..observability.logger import get_logger
from ..utils.validators import is_valid_http_url

logger = get_logger(__name__)


@dataclass(frozen=True)
class FetchedPage:
    url: str
    html: str
    status: int


class PageFetcher:
    """Scraping layer.

    Responsibilities:
    - GET a page with a fixed user agent and a bounded timeout
    - Return raw markup (no parsing, no storage)
    - Turn every failure into a FetchError carrying the URL and cause
    """

    def __init__(self, user_agent: str, timeout_seconds: float = 10.0):
        self._user_agent = user_agent
        self._timeout = aiohttp.ClientTimeout(total=float(timeout_seconds))
        self._session: aiohttp.ClientSession | None = None

    async def __aenter__(self) -> "PageFetcher":
        self._ensure_session()
        return self

    async def __aexit__(self, *args) -> None:
        await self.close()

    def _ensure_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                timeout=self._timeout,
                headers={"User-Agent": self._user_agent},
            )
        return self._session

    async def close(self) -> None:
        if self._session is not None and not self._session.closed:
            await self._session.close()
        self._session = None

    async def fetch(self, url: str) -> FetchedPage:
        if not is_valid_http_url(url):
            raise FetchError(url, "invalid URL: only absolute http(s) URLs can be fetched")

        session = self._ensure_session()
        try:
            async with session.get(url) as response:
                if not 200 <= response.status < 300:
                    raise FetchError(url, f"HTTP {response.status}")
                html = await response.text(errors="replace")
                logger.debug("page_fetched", url=url, status=response.status, bytes=len(html))
                return FetchedPage(url=url, html=html, status=response.status)
        except asyncio.TimeoutError as e:
            raise FetchError(url, f"timed out after {self._timeout.total:g}s") from e
        except aiohttp.ClientError as e:
            raise FetchError(url, f"{type(e).__name__}: {e}") from e
