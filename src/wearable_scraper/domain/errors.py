"""Domain-specific errors.

These errors are mapped to HTTP status codes in the transport layer.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


class ScraperDomainError(Exception):
    """Base class for all domain errors."""


@dataclass(frozen=True)
class DomainErrorInfo:
    code: str
    message: str
    detail: Optional[str] = None


class InvalidInputError(ScraperDomainError):
    """Raised when request/config validation fails."""

    def __init__(self, message: str, detail: str | None = None):
        super().__init__(message)
        self.info = DomainErrorInfo(code="INVALID_INPUT", message=message, detail=detail)


class ScrapeError(ScraperDomainError):
    """A single page could not be scraped.

    Carries the failed URL and the underlying cause so the manual scrape path
    can report it as-is.
    """

    code = "SCRAPE_FAILED"

    def __init__(self, url: str, cause: str):
        super().__init__(f"Failed to scrape {url}: {cause}")
        self.url = url
        self.cause = cause
        self.info = DomainErrorInfo(code=self.code, message=str(self), detail=cause)


class FetchError(ScrapeError):
    """Timeout, network failure, invalid URL or non-2xx response."""

    code = "FETCH_FAILED"


class ExtractionError(ScrapeError):
    """The markup parser itself failed on the page."""

    code = "EXTRACTION_FAILED"


class StorageError(ScraperDomainError):
    def __init__(self, message: str, detail: str | None = None):
        super().__init__(message)
        self.info = DomainErrorInfo(code="STORAGE_ERROR", message=message, detail=detail)
