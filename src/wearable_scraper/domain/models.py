"""Framework-agnostic domain models."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

UNKNOWN = "Unknown"


class CycleState(str, Enum):
    IDLE = "IDLE"
    RUNNING = "RUNNING"


@dataclass(frozen=True)
class ListingSelectors:
    """CSS selectors for a news listing page.

    ``articles`` matches the repeating block; the other three are looked up
    inside each block and the first match wins.
    """

    articles: str
    title: str
    description: str
    link: str


@dataclass(frozen=True)
class SiteProfile:
    url: str
    selectors: ListingSelectors


@dataclass(frozen=True)
class ProductSiteProfile:
    url: str
    name: str
    category: str


@dataclass(frozen=True)
class ProductCandidate:
    """A freshly scraped record, before it is reconciled into the catalog.

    ``None`` for the optional fields means the extraction path did not look
    for that value, so an existing product keeps its own.
    """

    title: str
    description: str
    url: str
    source: str
    category: str
    body_placement: str
    sensory_inputs: tuple[str, ...]
    features: tuple[str, ...]
    is_always_on: bool
    price: Optional[str] = None
    pricing_model: Optional[str] = None
    headings: Optional[tuple[str, ...]] = None


@dataclass(frozen=True)
class Product:
    id: str
    title: str
    description: str
    url: str
    source: str
    category: str
    body_placement: str
    sensory_inputs: tuple[str, ...]
    features: tuple[str, ...]
    is_always_on: bool
    timestamp: int
    last_updated: int
    price: str = UNKNOWN
    pricing_model: str = UNKNOWN
    headings: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "url": self.url,
            "source": self.source,
            "category": self.category,
            "bodyPlacement": self.body_placement,
            "sensoryInputs": list(self.sensory_inputs),
            "features": list(self.features),
            "price": self.price,
            "pricingModel": self.pricing_model,
            "isAlwaysOn": self.is_always_on,
            "headings": list(self.headings),
            "timestamp": self.timestamp,
            "lastUpdated": self.last_updated,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Product":
        return cls(
            id=str(data["id"]),
            title=data.get("title") or "",
            description=data.get("description") or "",
            url=data.get("url") or "",
            source=data.get("source") or "",
            category=data.get("category") or "",
            body_placement=data.get("bodyPlacement") or UNKNOWN,
            sensory_inputs=tuple(data.get("sensoryInputs") or ()),
            features=tuple(data.get("features") or ()),
            price=data.get("price") or UNKNOWN,
            pricing_model=data.get("pricingModel") or UNKNOWN,
            is_always_on=bool(data.get("isAlwaysOn", False)),
            headings=tuple(data.get("headings") or ()),
            timestamp=int(data.get("timestamp") or 0),
            last_updated=int(data.get("lastUpdated") or 0),
        )


@dataclass(frozen=True)
class CatalogSettings:
    auto_scrape_interval_hours: float = 24.0
    notifications_enabled: bool = True


@dataclass(frozen=True)
class Notification:
    title: str
    message: str
    source: str
    url: str


@dataclass(frozen=True)
class StoredNotification:
    id: str
    title: str
    message: str
    source: str
    url: str
    timestamp: int
    read: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "message": self.message,
            "source": self.source,
            "url": self.url,
            "timestamp": self.timestamp,
            "read": self.read,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "StoredNotification":
        return cls(
            id=str(data["id"]),
            title=data.get("title") or "",
            message=data.get("message") or "",
            source=data.get("source") or "",
            url=data.get("url") or "",
            timestamp=int(data.get("timestamp") or 0),
            read=bool(data.get("read", False)),
        )


@dataclass(frozen=True)
class ScrapeResult:
    product: Product
    is_new: bool


@dataclass
class CycleReport:
    started_at_ms: int
    sites_total: int = 0
    sites_failed: int = 0
    articles_seen: int = 0
    new_products: int = 0
    updated_products: int = 0
    duration_ms: int = 0
    failed_urls: list[str] = field(default_factory=list)
