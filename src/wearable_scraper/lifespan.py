"""Application lifespan management (startup/shutdown hooks)."""

from __future__ import annotations

from contextlib import asynccontextmanager

from .config.settings import get_settings
from .domain.models import CatalogSettings
from .observability.logger import configure_logging, get_logger
from .scraping.page_fetcher import PageFetcher
from .services.markup_extractor import MarkupExtractor
from .services.notifications import NotificationCenter
from .services.schedule_controller import ScheduleController
from .services.scrape_orchestrator import ScrapeOrchestrator
from .services.scraper_service import WearableScraperService
from .services.text_classifier import TextClassifier
from .storage.database import close_db, create_engine, create_session_factory, init_db
from .storage.repositories import SqlCatalogStore

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan_manager():
    """Manage application lifespan (startup and shutdown)."""
    settings = get_settings()

    configure_logging()
    logger.info("starting_application", service_name=settings.service_name)

    engine = create_engine(settings.database_url)
    await init_db(engine)
    logger.info("database_initialized")

    store = SqlCatalogStore(
        session_factory=create_session_factory(engine),
        default_settings=CatalogSettings(
            auto_scrape_interval_hours=settings.default_scrape_interval_hours,
            notifications_enabled=settings.notifications_enabled,
        ),
    )
    notifications = NotificationCenter(store, max_items=settings.max_stored_notifications)

    # Build layer dependencies (strict separation)
    fetcher = PageFetcher(
        user_agent=settings.scrape_user_agent,
        timeout_seconds=settings.scrape_timeout_seconds,
    )
    orchestrator = ScrapeOrchestrator(
        fetcher=fetcher,
        extractor=MarkupExtractor(),
        classifier=TextClassifier(),
        store=store,
        notifier=notifications,
    )
    schedule = ScheduleController(
        orchestrator.run_cycle,
        startup_delay_seconds=settings.schedule_startup_delay_seconds,
    )
    service = WearableScraperService(orchestrator=orchestrator, schedule=schedule, store=store)

    from .http_app import app_state

    app_state["scraper_service"] = service
    app_state["notifications"] = notifications

    await service.start()
    logger.info("application_started")
    try:
        yield service
    finally:
        await service.stop()
        await fetcher.close()
        await close_db(engine)
        app_state.clear()
        logger.info("application_shutdown_complete")
