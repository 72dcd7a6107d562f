from __future__ import annotations

import pytest

from wearable_scraper.domain.errors import InvalidInputError
from wearable_scraper.domain.models import CatalogSettings, CycleState
from wearable_scraper.services.markup_extractor import MarkupExtractor
from wearable_scraper.services.notifications import NotificationCenter
from wearable_scraper.services.schedule_controller import ScheduleController
from wearable_scraper.services.scrape_orchestrator import ScrapeOrchestrator
from wearable_scraper.services.scraper_service import WearableScraperService
from wearable_scraper.services.text_classifier import TextClassifier
from wearable_scraper.storage.memory import InMemoryCatalogStore


class NoPagesFetcher:
    async def fetch(self, url: str):
        raise AssertionError(f"unexpected fetch of {url}")


def _service(store: InMemoryCatalogStore) -> WearableScraperService:
    orchestrator = ScrapeOrchestrator(
        fetcher=NoPagesFetcher(),
        extractor=MarkupExtractor(),
        classifier=TextClassifier(),
        store=store,
        notifier=NotificationCenter(store),
        news_sites=(),
        product_sites=(),
    )
    schedule = ScheduleController(orchestrator.run_cycle, startup_delay_seconds=60)
    return WearableScraperService(orchestrator=orchestrator, schedule=schedule, store=store)


@pytest.mark.asyncio
async def test_start_arms_schedule_from_stored_settings() -> None:
    store = InMemoryCatalogStore(settings=CatalogSettings(auto_scrape_interval_hours=6))
    service = _service(store)

    await service.start()
    status = await service.status()
    assert status.schedule_armed is True
    assert status.interval_hours == 6.0
    assert status.cycle_state is CycleState.IDLE

    await service.stop()
    assert (await service.status()).schedule_armed is False


@pytest.mark.asyncio
async def test_configure_schedule_persists_interval() -> None:
    store = InMemoryCatalogStore(settings=CatalogSettings(auto_scrape_interval_hours=24, notifications_enabled=False))
    service = _service(store)

    await service.configure_schedule(0)

    assert (await store.get_settings()) == CatalogSettings(auto_scrape_interval_hours=0.0, notifications_enabled=False)
    assert (await service.status()).schedule_armed is False


@pytest.mark.asyncio
async def test_configure_schedule_rejects_negative_without_saving() -> None:
    store = InMemoryCatalogStore()
    service = _service(store)

    with pytest.raises(InvalidInputError):
        await service.configure_schedule(-1)
    assert (await store.get_settings()).auto_scrape_interval_hours == 24.0


@pytest.mark.asyncio
async def test_get_product_missing_returns_none() -> None:
    service = _service(InMemoryCatalogStore())
    assert await service.get_product("product-nope") is None
    assert await service.list_products() == []
