"""Discovery notifications, persisted next to the catalog."""

from __future__ import annotations

import asyncio
import uuid
from dataclasses import replace
from typing import Callable, Protocol

from ..domain.models import Notification, StoredNotification
from ..observability.logger import get_logger
from ..storage.base import CatalogStore
from ..utils.time import current_time_ms

logger = get_logger(__name__)


class Notifier(Protocol):
    async def notify(self, notification: Notification) -> None: ...


class NotificationCenter:
    """Keeps the most recent notifications in the store, newest first.

    The list is read and written whole, like every other store collection;
    one lock serialises the read-modify-write cycles of this instance.
    """

    def __init__(
        self,
        store: CatalogStore,
        max_items: int = 100,
        clock: Callable[[], int] = current_time_ms,
    ):
        self._store = store
        self._max_items = max_items
        self._clock = clock
        self._lock = asyncio.Lock()

    async def notify(self, notification: Notification) -> None:
        stored = StoredNotification(
            id=f"notification-{uuid.uuid4()}",
            title=notification.title,
            message=notification.message,
            source=notification.source,
            url=notification.url,
            timestamp=self._clock(),
        )
        async with self._lock:
            items = await self._store.get_notifications()
            await self._store.set_notifications([stored] + items[: self._max_items - 1])
        logger.info("notification_stored", id=stored.id, title=stored.title, url=stored.url)

    async def recent(self) -> list[StoredNotification]:
        return await self._store.get_notifications()

    async def mark_read(self, notification_id: str) -> bool:
        async with self._lock:
            items = await self._store.get_notifications()
            for i, item in enumerate(items):
                if item.id == notification_id:
                    items[i] = replace(item, read=True)
                    await self._store.set_notifications(items)
                    return True
        return False

    async def clear(self) -> None:
        async with self._lock:
            await self._store.set_notifications([])
        logger.info("notifications_cleared")
