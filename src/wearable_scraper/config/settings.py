"""Configuration management using Pydantic Settings."""

from __future__ import annotations

import math

from pydantic_settings import BaseSettings, SettingsConfigDict


class ScraperSettings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Service
    service_name: str = "wearable-ai-scraper"

    # FastAPI (manual trigger surface)
    http_enable: bool = True
    http_host: str = "127.0.0.1"
    http_port: int = 8000

    # Catalog store (async SQLAlchemy URL)
    database_url: str = "sqlite+aiosqlite:///./wearable_ai.db"

    # Fetching (fixed per-request timeout, no retries)
    scrape_timeout_seconds: float = 10.0
    scrape_user_agent: str = (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36"
    )

    # Scheduling
    schedule_startup_delay_seconds: float = 5.0
    # Used to seed the store settings on first start; the store value wins afterwards.
    default_scrape_interval_hours: float = 24.0

    # Notifications
    notifications_enabled: bool = True
    max_stored_notifications: int = 100

    # Logging
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    def validate(self) -> None:
        if self.http_port <= 0:
            raise ValueError("http_port must be > 0")
        if self.scrape_timeout_seconds <= 0:
            raise ValueError("scrape_timeout_seconds must be > 0")
        if not self.scrape_user_agent.strip():
            raise ValueError("scrape_user_agent must not be empty")
        if self.schedule_startup_delay_seconds < 0:
            raise ValueError("schedule_startup_delay_seconds must be >= 0")
        if not math.isfinite(self.default_scrape_interval_hours) or self.default_scrape_interval_hours < 0:
            raise ValueError("default_scrape_interval_hours must be a finite number >= 0")
        if self.max_stored_notifications <= 0:
            raise ValueError("max_stored_notifications must be > 0")


_settings: ScraperSettings | None = None


def get_settings() -> ScraperSettings:
    global _settings
    if _settings is None:
        _settings = ScraperSettings()
        _settings.validate()
    return _settings


def reset_settings() -> None:
    global _settings
    _settings = None
