"""Request/response models for the HTTP surface."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field

from ..domain.models import CycleReport, Product, StoredNotification


class ScrapeUrlRequest(BaseModel):
    url: str = Field(..., min_length=1)


class ScheduleRequest(BaseModel):
    intervalHours: float


class ProductOut(BaseModel):
    id: str
    title: str
    description: str
    url: str
    source: str
    category: str
    bodyPlacement: str
    sensoryInputs: List[str]
    features: List[str]
    price: str
    pricingModel: str
    isAlwaysOn: bool
    headings: List[str]
    timestamp: int
    lastUpdated: int

    @classmethod
    def from_product(cls, product: Product) -> "ProductOut":
        return cls.model_validate(product.to_dict())


class ScrapeUrlResponse(BaseModel):
    isNew: bool
    product: ProductOut


class CycleReportOut(BaseModel):
    startedAt: int
    durationMs: int
    sitesTotal: int
    sitesFailed: int
    articlesSeen: int
    newProducts: int
    updatedProducts: int
    failedUrls: List[str]

    @classmethod
    def from_report(cls, report: CycleReport) -> "CycleReportOut":
        return cls(
            startedAt=report.started_at_ms,
            durationMs=report.duration_ms,
            sitesTotal=report.sites_total,
            sitesFailed=report.sites_failed,
            articlesSeen=report.articles_seen,
            newProducts=report.new_products,
            updatedProducts=report.updated_products,
            failedUrls=list(report.failed_urls),
        )


class StatusOut(BaseModel):
    cycleState: str
    scheduleArmed: bool
    intervalHours: float
    lastScrapeTime: Optional[int] = None
    lastReport: Optional[CycleReportOut] = None


class NotificationOut(BaseModel):
    id: str
    title: str
    message: str
    source: str
    url: str
    timestamp: int
    read: bool

    @classmethod
    def from_stored(cls, n: StoredNotification) -> "NotificationOut":
        return cls(
            id=n.id,
            title=n.title,
            message=n.message,
            source=n.source,
            url=n.url,
            timestamp=n.timestamp,
            read=n.read,
        )
