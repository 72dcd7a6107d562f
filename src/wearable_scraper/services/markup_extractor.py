"""Markup extraction (listing pages and single product pages)."""

from __future__ import annotations

import re
from dataclasses import dataclass

from bs4 import BeautifulSoup, Tag

from ..domain.errors import ExtractionError
from ..domain.models import UNKNOWN, SiteProfile
from ..observability.logger import get_logger
from ..utils.validators import resolve_link

logger = get_logger(__name__)

# "$499", "$1,299.00", "€ 89", "299 $", "45£"
_PRICE_RE = re.compile(
    r"[$€£]\s?\d+(?:,\d{3})*(?:\.\d{2})?"
    r"|\d+(?:,\d{3})*(?:\.\d{2})?\s?[$€£]"
)

_NON_VISIBLE_TAGS = ["script", "style", "noscript", "template"]


@dataclass(frozen=True)
class ListingEntry:
    title: str
    description: str
    link: str


@dataclass(frozen=True)
class PageContent:
    title: str
    description: str
    h1s: tuple[str, ...]
    h2s: tuple[str, ...]
    body_text: str
    price: str

    @property
    def headings(self) -> tuple[str, ...]:
        """All h1 texts followed by all h2 texts."""
        return self.h1s + self.h2s


def _text_of(el: Tag | None) -> str:
    if el is None:
        return ""
    return el.get_text(" ", strip=True)


def find_price(text: str) -> str:
    """Return the first currency-looking token in ``text``, else "Unknown"."""
    match = _PRICE_RE.search(text or "")
    return match.group(0) if match else UNKNOWN


class MarkupExtractor:
    """Processing layer component: turns raw HTML into field values.

    Missing elements degrade to empty values; only a parser failure is an
    error.
    """

    def __init__(self, parser: str = "lxml"):
        self._parser = parser

    def _soup(self, html: str, url: str) -> BeautifulSoup:
        try:
            return BeautifulSoup(html or "", self._parser)
        except Exception as e:
            raise ExtractionError(url, f"unparseable markup: {e}") from e

    def extract_listing(self, html: str, profile: SiteProfile) -> list[ListingEntry]:
        soup = self._soup(html, profile.url)
        selectors = profile.selectors
        entries: list[ListingEntry] = []

        for block in soup.select(selectors.articles):
            try:
                title = _text_of(block.select_one(selectors.title))
                if not title:
                    continue
                description = _text_of(block.select_one(selectors.description))
                link_el = block.select_one(selectors.link)
                href = link_el.get("href") if link_el is not None else None
                if isinstance(href, list):
                    href = href[0] if href else None
                entries.append(
                    ListingEntry(
                        title=title,
                        description=description,
                        link=resolve_link(profile.url, href or ""),
                    )
                )
            except Exception as e:
                logger.warning("article_block_skipped", site=profile.url, error=str(e))

        return entries

    def extract_page(self, html: str, url: str = "") -> PageContent:
        soup = self._soup(html, url)

        title = _text_of(soup.title)
        description = self._meta_description(soup)
        h1s = tuple(t for t in (_text_of(el) for el in soup.find_all("h1")) if t)
        h2s = tuple(t for t in (_text_of(el) for el in soup.find_all("h2")) if t)

        for tag in soup.find_all(_NON_VISIBLE_TAGS):
            tag.decompose()
        body = soup.body if soup.body is not None else soup
        body_text = _text_of(body)

        return PageContent(
            title=title,
            description=description,
            h1s=h1s,
            h2s=h2s,
            body_text=body_text,
            price=find_price(body_text),
        )

    def _meta_description(self, soup: BeautifulSoup) -> str:
        for attrs in ({"name": "description"}, {"property": "og:description"}):
            meta = soup.find("meta", attrs=attrs)
            if meta is None:
                continue
            content = meta.get("content")
            if isinstance(content, str) and content.strip():
                return content.strip()
        return ""
