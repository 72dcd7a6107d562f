"""Scrape cycle orchestration (business logic)."""

from __future__ import annotations

import asyncio
from typing import Callable, Optional, Sequence

from ..config.sites import NEWS_SITES, PRODUCT_SITES
from ..domain.errors import ScrapeError, StorageError
from ..domain.models import (
    CycleReport,
    CycleState,
    Notification,
    Product,
    ProductCandidate,
    ProductSiteProfile,
    ScrapeResult,
    SiteProfile,
)
from ..observability.logger import get_logger
from ..scraping.page_fetcher import PageFetcher
from ..storage.base import CatalogStore
from ..utils.time import current_time_ms, elapsed_ms
from ..utils.validators import hostname_of
from .markup_extractor import MarkupExtractor
from .notifications import Notifier
from .product_reconciler import reconcile
from .text_classifier import TextClassifier

logger = get_logger(__name__)

NO_DESCRIPTION = "No description available"


class ScrapeOrchestrator:
    """Service layer for wearable AI discovery.

    Responsibilities:
    - Run one cycle over the configured news and product sites, never two at once
    - fetch -> extract -> classify -> reconcile -> persist -> notify, per site
    - Isolate failures to the site that caused them
    - Serve the ad-hoc single-URL scrape with the same reconciliation rules
    """

    def __init__(
        self,
        fetcher: PageFetcher,
        extractor: MarkupExtractor,
        classifier: TextClassifier,
        store: CatalogStore,
        notifier: Notifier,
        *,
        news_sites: Sequence[SiteProfile] = NEWS_SITES,
        product_sites: Sequence[ProductSiteProfile] = PRODUCT_SITES,
        clock: Callable[[], int] = current_time_ms,
    ):
        self._fetcher = fetcher
        self._extractor = extractor
        self._classifier = classifier
        self._store = store
        self._notifier = notifier
        self._news_sites = tuple(news_sites)
        self._product_sites = tuple(product_sites)
        self._clock = clock
        self._state = CycleState.IDLE
        # Single writer for the catalog and the seen-URL set.
        self._write_lock = asyncio.Lock()
        self._last_report: Optional[CycleReport] = None

    @property
    def state(self) -> CycleState:
        return self._state

    @property
    def last_report(self) -> Optional[CycleReport]:
        return self._last_report

    async def run_cycle(self) -> Optional[CycleReport]:
        """Scrape every configured site once.

        Returns None without doing anything if a cycle is already running.
        """
        if self._state is CycleState.RUNNING:
            logger.info("cycle_skipped", reason="already_running")
            return None

        self._state = CycleState.RUNNING
        start_ms = current_time_ms()
        report = CycleReport(
            started_at_ms=start_ms,
            sites_total=len(self._news_sites) + len(self._product_sites),
        )
        logger.info(
            "cycle_started",
            news_sites=len(self._news_sites),
            product_sites=len(self._product_sites),
        )
        try:
            for site in self._news_sites:
                await self._run_site(site.url, self.scrape_news_site(site, report), report)

            for product_site in self._product_sites:
                await self._run_site(product_site.url, self.scrape_product_site(product_site, report), report)

            try:
                await self._store.set_last_scrape_time(self._clock())
            except StorageError as e:
                logger.error("last_scrape_persist_failed", error=str(e))

            report.duration_ms = elapsed_ms(start_ms)
            self._last_report = report
            logger.info(
                "cycle_completed",
                sites_failed=report.sites_failed,
                articles_seen=report.articles_seen,
                new_products=report.new_products,
                updated_products=report.updated_products,
                duration_ms=report.duration_ms,
            )
            return report
        finally:
            self._state = CycleState.IDLE

    async def _run_site(self, url: str, work, report: CycleReport) -> None:
        try:
            await work
        except ScrapeError as e:
            report.sites_failed += 1
            report.failed_urls.append(url)
            logger.warning("site_failed", url=url, error_code=e.code, cause=e.cause)
        except StorageError as e:
            report.sites_failed += 1
            report.failed_urls.append(url)
            logger.error("site_persist_failed", url=url, error=str(e))
        except Exception as e:
            report.sites_failed += 1
            report.failed_urls.append(url)
            logger.exception("site_unexpected_error", url=url, error=str(e))

    async def scrape_news_site(self, site: SiteProfile, report: CycleReport | None = None) -> int:
        """Process one listing page; returns the number of new products."""
        logger.info("news_site_scraping", url=site.url)
        page = await self._fetcher.fetch(site.url)
        entries = self._extractor.extract_listing(page.html, site)
        source = hostname_of(site.url)
        logger.info("news_site_articles_found", url=site.url, articles=len(entries))

        created: list[Product] = []
        updated = 0
        async with self._write_lock:
            catalog = tuple(await self._store.get_products())
            seen = await self._store.get_seen_urls()

            for entry in entries:
                if not entry.link or entry.link in seen:
                    continue
                text = f"{entry.title} {entry.description}"
                if not self._classifier.is_relevant(text):
                    continue

                c = self._classifier.classify(text)
                candidate = ProductCandidate(
                    title=entry.title,
                    description=entry.description or NO_DESCRIPTION,
                    url=entry.link,
                    source=source,
                    category=c.category,
                    body_placement=c.body_placement,
                    sensory_inputs=c.sensory_inputs,
                    features=c.features,
                    is_always_on=c.is_always_on,
                )
                result = reconcile(candidate, catalog, now_ms=self._clock())
                catalog = result.catalog
                seen.add(entry.link)
                if result.is_new:
                    created.append(result.product)
                else:
                    updated += 1
                logger.info("wearable_article_found", title=entry.title, url=entry.link, is_new=result.is_new)

            await self._store.set_products(list(catalog))
            await self._store.set_seen_urls(seen)

        if report is not None:
            report.articles_seen += len(entries)
            report.new_products += len(created)
            report.updated_products += updated

        for product in created:
            await self._notify(
                Notification(
                    title="New Wearable AI Product Discovered",
                    message=f"Found new product: {product.title}",
                    source=source,
                    url=product.url,
                )
            )
        logger.info("news_site_scraped", url=site.url, new_products=len(created), updated_products=updated)
        return len(created)

    async def scrape_product_site(self, site: ProductSiteProfile, report: CycleReport | None = None) -> ScrapeResult:
        logger.info("product_site_scraping", url=site.url, name=site.name)
        page = await self._fetcher.fetch(site.url)
        content = self._extractor.extract_page(page.html, site.url)
        body = content.body_text

        candidate = ProductCandidate(
            title=site.name or content.title,
            description=content.description,
            url=site.url,
            source=hostname_of(site.url),
            category=site.category,
            body_placement=self._classifier.classify_body_placement(body),
            sensory_inputs=self._classifier.classify_sensory_inputs(body),
            features=self._classifier.extract_features(body),
            is_always_on=self._classifier.is_always_on(body),
            price=content.price,
        )
        result = await self._reconcile_and_persist(candidate)

        if report is not None:
            if result.is_new:
                report.new_products += 1
            else:
                report.updated_products += 1

        if result.is_new:
            await self._notify(
                Notification(
                    title="New Wearable AI Product Added",
                    message=f"Added {result.product.title} to the database",
                    source=candidate.source,
                    url=site.url,
                )
            )
        logger.info("product_site_scraped", url=site.url, title=result.product.title, is_new=result.is_new)
        return result

    async def scrape_one(self, url: str) -> ScrapeResult:
        """Scrape a user-supplied URL into the catalog.

        Raises ScrapeError (FetchError / ExtractionError) with the URL and cause.
        """
        url = (url or "").strip()
        logger.info("manual_scrape_started", url=url)
        page = await self._fetcher.fetch(url)
        content = self._extractor.extract_page(page.html, url)
        body = content.body_text

        title = content.title or (content.h1s[0] if content.h1s else url)
        description = content.description or (content.h1s[0] if content.h1s else NO_DESCRIPTION)
        candidate = ProductCandidate(
            title=title,
            description=description,
            url=url,
            source=hostname_of(url),
            category=self._classifier.classify_category(f"{content.title} {content.description} {body}"),
            body_placement=self._classifier.classify_body_placement(body),
            sensory_inputs=self._classifier.classify_sensory_inputs(body),
            features=self._classifier.extract_features(body),
            is_always_on=self._classifier.is_always_on(body),
            price=content.price,
            headings=content.headings,
        )
        result = await self._reconcile_and_persist(candidate, mark_seen=True)

        if result.is_new:
            await self._notify(
                Notification(
                    title="New Wearable AI Product Added",
                    message=f"Added {result.product.title} to the database",
                    source=candidate.source,
                    url=url,
                )
            )
        logger.info("manual_scrape_completed", url=url, product_id=result.product.id, is_new=result.is_new)
        return result

    async def _reconcile_and_persist(self, candidate: ProductCandidate, *, mark_seen: bool = False) -> ScrapeResult:
        async with self._write_lock:
            catalog = await self._store.get_products()
            result = reconcile(candidate, catalog, now_ms=self._clock())
            await self._store.set_products(list(result.catalog))
            if mark_seen:
                seen = await self._store.get_seen_urls()
                if candidate.url not in seen:
                    seen.add(candidate.url)
                    await self._store.set_seen_urls(seen)
                await self._store.set_last_scrape_time(self._clock())
        return ScrapeResult(product=result.product, is_new=result.is_new)

    async def _notify(self, notification: Notification) -> None:
        try:
            settings = await self._store.get_settings()
            if not settings.notifications_enabled:
                return
            await self._notifier.notify(notification)
        except Exception as e:
            logger.warning("notification_failed", title=notification.title, url=notification.url, error=str(e))
