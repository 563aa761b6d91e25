"""Scraper package — fetching, HTML normalization and signal extraction."""

from complyscan.scraper.extractor import (
    extract_homepage_text,
    extract_legal_page_text,
    normalize_html,
)
from complyscan.scraper.fetcher import browser_headers, fetch_page, new_client
from complyscan.scraper.models import (
    CookieSignals,
    CopyrightSignals,
    ExtractedDocument,
    FetchAttempt,
    FetchResult,
    PageSignals,
    TrackingSignals,
)
from complyscan.scraper.signals import extract_all_signals, find_legal_links

__all__ = [
    "fetch_page",
    "new_client",
    "browser_headers",
    "normalize_html",
    "extract_homepage_text",
    "extract_legal_page_text",
    "extract_all_signals",
    "find_legal_links",
    "FetchResult",
    "FetchAttempt",
    "ExtractedDocument",
    "CookieSignals",
    "TrackingSignals",
    "CopyrightSignals",
    "PageSignals",
]
