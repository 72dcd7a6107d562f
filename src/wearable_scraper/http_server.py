"""Uvicorn runner for the manual-trigger and catalog API.

Serves `http_app.app` on the configured host and port inside the application
lifespan, so the schedule keeps firing while requests are handled.
"""

from __future__ import annotations

import uvicorn

from .config.settings import get_settings
from .http_app import app
from .observability.logger import get_logger

logger = get_logger(__name__)


async def run_http_server() -> None:
    settings = get_settings()
    if not settings.http_enable:
        return

    config = uvicorn.Config(
        app=app,
        host=settings.http_host,
        port=settings.http_port,
        log_level="warning",  # structlog is the primary logger
        loop="asyncio",
    )
    server = uvicorn.Server(config)

    logger.info(
        "catalog_api_listening",
        service_name=settings.service_name,
        address=f"http://{settings.http_host}:{settings.http_port}",
    )
    await server.serve()
