"""Validation and URL helpers."""

from __future__ import annotations

from urllib.parse import urlparse


def is_valid_http_url(url: str) -> bool:
    try:
        parsed = urlparse(url)
        return parsed.scheme in ("http", "https") and bool(parsed.netloc)
    except Exception:
        return False


def hostname_of(url: str) -> str:
    """Return the lower-cased host of ``url`` (no port), or "" if it has none."""
    try:
        return (urlparse(url).hostname or "").lower()
    except ValueError:
        return ""


def resolve_link(site_url: str, href: str) -> str:
    """Make a listing link absolute using the site's own scheme and host.

    Only root-relative (``/path``) and protocol-relative (``//host/path``)
    links are rewritten; anything else is returned unchanged.
    """
    href = (href or "").strip()
    if not href:
        return ""
    parsed = urlparse(site_url)
    if href.startswith("//"):
        return f"{parsed.scheme}:{href}"
    if href.startswith("/"):
        return f"{parsed.scheme}://{parsed.netloc}{href}"
    return href
