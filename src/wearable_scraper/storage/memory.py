"""In-process catalog store (tests, ephemeral runs)."""

from __future__ import annotations

from typing import Iterable, Optional

from ..domain.models import CatalogSettings, Product, StoredNotification


class InMemoryCatalogStore:
    def __init__(
        self,
        products: Iterable[Product] = (),
        seen_urls: Iterable[str] = (),
        settings: CatalogSettings | None = None,
    ):
        self._products = list(products)
        self._seen_urls = set(seen_urls)
        self._last_scrape: Optional[int] = None
        self._settings = settings or CatalogSettings()
        self._notifications: list[StoredNotification] = []
        self.product_writes = 0

    async def get_products(self) -> list[Product]:
        return list(self._products)

    async def set_products(self, products: list[Product]) -> None:
        self._products = list(products)
        self.product_writes += 1

    async def get_seen_urls(self) -> set[str]:
        return set(self._seen_urls)

    async def set_seen_urls(self, urls: set[str]) -> None:
        self._seen_urls = set(urls)

    async def get_last_scrape_time(self) -> Optional[int]:
        return self._last_scrape

    async def set_last_scrape_time(self, timestamp_ms: int) -> None:
        self._last_scrape = timestamp_ms

    async def get_settings(self) -> CatalogSettings:
        return self._settings

    async def set_settings(self, settings: CatalogSettings) -> None:
        self._settings = settings

    async def get_notifications(self) -> list[StoredNotification]:
        return list(self._notifications)

    async def set_notifications(self, notifications: list[StoredNotification]) -> None:
        self._notifications = list(notifications)
