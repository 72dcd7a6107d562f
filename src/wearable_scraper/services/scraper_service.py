"""Manual trigger surface over the orchestrator, schedule and store."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional

from ..domain.models import CycleReport, CycleState, Product, ScrapeResult
from ..observability.logger import get_logger
from ..storage.base import CatalogStore
from .schedule_controller import ScheduleController
from .scrape_orchestrator import ScrapeOrchestrator

logger = get_logger(__name__)


@dataclass(frozen=True)
class ServiceStatus:
    cycle_state: CycleState
    schedule_armed: bool
    interval_hours: float
    last_scrape_time: Optional[int]
    last_report: Optional[CycleReport]


class WearableScraperService:
    def __init__(self, orchestrator: ScrapeOrchestrator, schedule: ScheduleController, store: CatalogStore):
        self._orchestrator = orchestrator
        self._schedule = schedule
        self._store = store

    async def start(self) -> None:
        """Arm the schedule from the stored settings."""
        await self._schedule.configure_from_settings(self._store)

    async def stop(self) -> None:
        await self._schedule.shutdown()

    async def scrape_one(self, url: str) -> ScrapeResult:
        return await self._orchestrator.scrape_one(url)

    async def run_cycle(self) -> Optional[CycleReport]:
        return await self._orchestrator.run_cycle()

    async def configure_schedule(self, interval_hours: float) -> None:
        self._schedule.configure(interval_hours)
        settings = await self._store.get_settings()
        await self._store.set_settings(replace(settings, auto_scrape_interval_hours=float(interval_hours)))
        logger.info("schedule_settings_saved", interval_hours=interval_hours)

    async def list_products(self) -> list[Product]:
        return await self._store.get_products()

    async def get_product(self, product_id: str) -> Optional[Product]:
        for product in await self._store.get_products():
            if product.id == product_id:
                return product
        return None

    async def status(self) -> ServiceStatus:
        return ServiceStatus(
            cycle_state=self._orchestrator.state,
            schedule_armed=self._schedule.is_armed,
            interval_hours=self._schedule.interval_hours,
            last_scrape_time=await self._store.get_last_scrape_time(),
            last_report=self._orchestrator.last_report,
        )
