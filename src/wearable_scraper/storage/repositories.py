"""SQLAlchemy-backed catalog store (products, seen URLs, app state)."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError

from ..domain.errors import StorageError
from ..domain.models import CatalogSettings, Product, StoredNotification
from ..models.database import AppStateRecord, ProductRecord, SeenUrlRecord
from ..observability.logger import get_logger

logger = get_logger(__name__)

_LAST_SCRAPE_KEY = "last_scrape"
_SETTINGS_KEY = "settings"
_NOTIFICATIONS_KEY = "notifications"


def _to_record(product: Product, position: int) -> ProductRecord:
    return ProductRecord(
        id=product.id,
        position=position,
        title=product.title,
        description=product.description,
        url=product.url,
        source=product.source,
        category=product.category,
        body_placement=product.body_placement,
        sensory_inputs=list(product.sensory_inputs),
        features=list(product.features),
        is_always_on=product.is_always_on,
        price=product.price,
        pricing_model=product.pricing_model,
        headings=list(product.headings),
        timestamp=product.timestamp,
        last_updated=product.last_updated,
    )


def _from_record(record: ProductRecord) -> Product:
    return Product(
        id=record.id,
        title=record.title,
        description=record.description,
        url=record.url,
        source=record.source,
        category=record.category,
        body_placement=record.body_placement,
        sensory_inputs=tuple(record.sensory_inputs or ()),
        features=tuple(record.features or ()),
        is_always_on=record.is_always_on,
        price=record.price,
        pricing_model=record.pricing_model,
        headings=tuple(record.headings or ()),
        timestamp=record.timestamp,
        last_updated=record.last_updated,
    )


class SqlCatalogStore:
    """Catalog store over an async session factory (one session per operation)."""

    def __init__(self, session_factory, default_settings: CatalogSettings | None = None):
        self._session_factory = session_factory
        self._default_settings = default_settings or CatalogSettings()

    async def get_products(self) -> list[Product]:
        try:
            async with self._session_factory() as session:
                result = await session.execute(select(ProductRecord).order_by(ProductRecord.position))
                return [_from_record(r) for r in result.scalars().all()]
        except SQLAlchemyError as e:
            raise StorageError("failed to load products", detail=str(e)) from e

    async def set_products(self, products: list[Product]) -> None:
        try:
            async with self._session_factory() as session:
                await session.execute(delete(ProductRecord))
                session.add_all([_to_record(p, i) for i, p in enumerate(products)])
                await session.commit()
        except SQLAlchemyError as e:
            raise StorageError("failed to save products", detail=str(e)) from e

    async def get_seen_urls(self) -> set[str]:
        try:
            async with self._session_factory() as session:
                result = await session.execute(select(SeenUrlRecord.url))
                return set(result.scalars().all())
        except SQLAlchemyError as e:
            raise StorageError("failed to load seen urls", detail=str(e)) from e

    async def set_seen_urls(self, urls: set[str]) -> None:
        try:
            async with self._session_factory() as session:
                await session.execute(delete(SeenUrlRecord))
                now = datetime.utcnow()
                session.add_all([SeenUrlRecord(url=u, created_at=now) for u in sorted(urls)])
                await session.commit()
        except SQLAlchemyError as e:
            raise StorageError("failed to save seen urls", detail=str(e)) from e

    async def get_last_scrape_time(self) -> Optional[int]:
        value = await self._get_state(_LAST_SCRAPE_KEY)
        if not value or value.get("timestamp") is None:
            return None
        return int(value["timestamp"])

    async def set_last_scrape_time(self, timestamp_ms: int) -> None:
        await self._set_state(_LAST_SCRAPE_KEY, {"timestamp": int(timestamp_ms)})

    async def get_settings(self) -> CatalogSettings:
        value = await self._get_state(_SETTINGS_KEY)
        if not value:
            return self._default_settings
        return CatalogSettings(
            auto_scrape_interval_hours=float(
                value.get("autoScrapeIntervalHours", self._default_settings.auto_scrape_interval_hours)
            ),
            notifications_enabled=bool(
                value.get("notificationsEnabled", self._default_settings.notifications_enabled)
            ),
        )

    async def set_settings(self, settings: CatalogSettings) -> None:
        await self._set_state(
            _SETTINGS_KEY,
            {
                "autoScrapeIntervalHours": settings.auto_scrape_interval_hours,
                "notificationsEnabled": settings.notifications_enabled,
            },
        )

    async def get_notifications(self) -> list[StoredNotification]:
        value = await self._get_state(_NOTIFICATIONS_KEY)
        if not value:
            return []
        return [StoredNotification.from_dict(item) for item in value.get("items") or ()]

    async def set_notifications(self, notifications: list[StoredNotification]) -> None:
        await self._set_state(_NOTIFICATIONS_KEY, {"items": [n.to_dict() for n in notifications]})

    async def _get_state(self, key: str) -> Optional[dict[str, Any]]:
        try:
            async with self._session_factory() as session:
                record = await session.get(AppStateRecord, key)
                return dict(record.value) if record is not None else None
        except SQLAlchemyError as e:
            raise StorageError(f"failed to load {key}", detail=str(e)) from e

    async def _set_state(self, key: str, value: dict[str, Any]) -> None:
        try:
            async with self._session_factory() as session:
                record = await session.get(AppStateRecord, key)
                if record is None:
                    session.add(AppStateRecord(key=key, value=value, updated_at=datetime.utcnow()))
                else:
                    record.value = value
                    record.updated_at = datetime.utcnow()
                await session.commit()
        except SQLAlchemyError as e:
            raise StorageError(f"failed to save {key}", detail=str(e)) from e
        logger.debug("app_state_saved", key=key)
