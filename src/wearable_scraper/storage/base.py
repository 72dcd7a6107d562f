"""Catalog store contract.

All reads and writes are whole-collection; callers that need
read-modify-write atomicity serialise themselves.
"""

from __future__ import annotations

from typing import Optional, Protocol

from ..domain.models import CatalogSettings, Product, StoredNotification


class CatalogStore(Protocol):
    async def get_products(self) -> list[Product]: ...

    async def set_products(self, products: list[Product]) -> None: ...

    async def get_seen_urls(self) -> set[str]: ...

    async def set_seen_urls(self, urls: set[str]) -> None: ...

    async def get_last_scrape_time(self) -> Optional[int]: ...

    async def set_last_scrape_time(self, timestamp_ms: int) -> None: ...

    async def get_settings(self) -> CatalogSettings: ...

    async def set_settings(self, settings: CatalogSettings) -> None: ...

    async def get_notifications(self) -> list[StoredNotification]: ...

    async def set_notifications(self, notifications: list[StoredNotification]) -> None: ...
