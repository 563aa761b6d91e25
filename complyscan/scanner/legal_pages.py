"""Legal page resolver.

For each of the seven legal categories an independent task tries the
hyperlink discovered on the homepage first, then the conventional fallback
paths in order.  The first page that passes the acceptance rule wins and the
category is never overwritten afterwards.  All tasks run concurrently and are
joined with ``asyncio.gather(..., return_exceptions=True)`` so one category's
failure never affects another.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Optional
from urllib.parse import urlparse

import httpx

from complyscan.config import settings
from complyscan.errors import FetchError
from complyscan.scraper.extractor import extract_legal_page_text
from complyscan.scraper.fetcher import fetch_page
from complyscan.scraper.models import ExtractedDocument
from complyscan.scraper.patterns import LEGAL_PAGE_PATHS, LegalCategory
from complyscan.scraper.signals import find_legal_links

logger = logging.getLogger(__name__)

# Acceptance rule: body longer than 500 bytes and more than 200 chars of text.
MIN_LEGAL_BODY_BYTES = 501
MIN_LEGAL_TEXT = 200


class DiscoveryMethod(str, Enum):
    HYPERLINK = "hyperlink"
    GUESSED_PATH = "guessed_path"


@dataclass
class LegalPageEntry:
    category: LegalCategory
    found: bool = False
    url: Optional[str] = None
    text: Optional[str] = None
    discovery_method: Optional[DiscoveryMethod] = None

    def to_dict(self, include_text: bool = True) -> dict[str, Any]:
        payload: dict[str, Any] = {"found": self.found, "url": self.url}
        if include_text:
            payload["text"] = self.text
            payload["discoveryMethod"] = (
                self.discovery_method.value if self.discovery_method else None
            )
        return payload


def empty_legal_pages() -> dict[LegalCategory, LegalPageEntry]:
    """Return the initial ``found=False`` map covering every category."""
    return {category: LegalPageEntry(category) for category in LegalCategory}


def _origin(url: str) -> str:
    parsed = urlparse(url)
    return f"{parsed.scheme}://{parsed.netloc}"


async def _try_url(client: httpx.AsyncClient, url: str) -> Optional[ExtractedDocument]:
    """Fetch *url* and return its text if it passes the acceptance rule."""
    try:
        fetched = await fetch_page(
            client,
            url,
            timeout=settings.legal_page_timeout,
            min_body_bytes=MIN_LEGAL_BODY_BYTES,
        )
    except FetchError as exc:
        logger.debug("[legal] %s rejected: %s", url, exc.detail)
        return None

    document = extract_legal_page_text(fetched.html, url=url)
    if len(document.text) <= MIN_LEGAL_TEXT:
        logger.debug("[legal] %s rejected: only %d chars of text", url, len(document.text))
        return None
    return document


async def _resolve_category(
    client: httpx.AsyncClient,
    origin: str,
    category: LegalCategory,
    link: Optional[str],
) -> LegalPageEntry:
    entry = LegalPageEntry(category)

    candidates: list[tuple[str, DiscoveryMethod]] = []
    if link:
        candidates.append((link, DiscoveryMethod.HYPERLINK))
    for path in LEGAL_PAGE_PATHS.get(category, ()):
        url = f"{origin}{path}"
        if url != link:
            candidates.append((url, DiscoveryMethod.GUESSED_PATH))

    for url, method in candidates:
        document = await _try_url(client, url)
        if document is None:
            continue
        entry.found = True
        entry.url = url
        entry.text = document.text
        entry.discovery_method = method
        logger.info("[legal] %s: found %s (%s)", category.value, url, method.value)
        break

    return entry


async def resolve_legal_pages(
    client: httpx.AsyncClient,
    base_url: str,
    html: str,
    links: Optional[Mapping[LegalCategory, str]] = None,
) -> dict[LegalCategory, LegalPageEntry]:
    """Locate every legal page of the site served at *base_url*.

    Args:
        client: HTTP client shared by all category tasks.
        base_url: Final URL of the homepage; fallback paths hang off its origin.
        html: Raw homepage markup used for hyperlink discovery.
        links: Pre-computed hyperlink map; discovered from *html* when omitted.

    Returns:
        A map holding an entry for each of the seven categories.
    """
    if links is None:
        links = find_legal_links(html, base_url)
    origin = _origin(base_url)
    categories = list(LegalCategory)

    results = await asyncio.gather(
        *(
            _resolve_category(client, origin, category, links.get(category))
            for category in categories
        ),
        return_exceptions=True,
    )

    pages = empty_legal_pages()
    for category, result in zip(categories, results):
        if isinstance(result, BaseException):
            logger.warning("[legal] %s task failed: %r", category.value, result)
            continue
        pages[category] = result

    found = sum(1 for entry in pages.values() if entry.found)
    logger.info("[legal] %d/%d legal pages found for %s", found, len(pages), origin)
    return pages
