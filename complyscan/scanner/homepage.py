"""Homepage resolver.

Walks an ordered list of URL variants for a domain, strictly one after the
other, and stops at the first one that yields readable content::

    TRYING(0) -> TRYING(1) -> ... -> SUCCEEDED(document, signals)
                                  \\-> EXHAUSTED(last_error)

``https://domain`` goes first so already-canonical sites need no redirect.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

import httpx

from complyscan.config import settings
from complyscan.errors import FetchError, FetchErrorKind, HomepageUnreachableError
from complyscan.scraper.extractor import extract_homepage_text
from complyscan.scraper.fetcher import fetch_page
from complyscan.scraper.models import ExtractedDocument, FetchAttempt, PageSignals
from complyscan.scraper.signals import extract_all_signals

logger = logging.getLogger(__name__)

# A reachable page with less cleaned text than this is not a success.
MIN_HOMEPAGE_TEXT = 50


class ResolverState(str, Enum):
    TRYING = "trying"
    SUCCEEDED = "succeeded"
    EXHAUSTED = "exhausted"


@dataclass
class HomepageResult:
    """The winning homepage candidate and everything derived from it."""

    url: str
    final_url: str
    html: str
    document: ExtractedDocument
    signals: PageSignals
    attempts: List[FetchAttempt] = field(default_factory=list)


def candidate_urls(domain: str) -> list[str]:
    """Return the URL variants to try for *domain*, in priority order."""
    bare = domain[4:] if domain.startswith("www.") else domain
    candidates: list[str] = []
    for scheme in ("https", "http"):
        for host in (domain, f"www.{bare}"):
            url = f"{scheme}://{host}"
            if url not in candidates:
                candidates.append(url)
    return candidates


async def resolve_homepage(client: httpx.AsyncClient, domain: str) -> HomepageResult:
    """Fetch the first working homepage variant of *domain*.

    Raises:
        HomepageUnreachableError: every candidate failed; the message is
            chosen from the last failure kind observed.
    """
    candidates = candidate_urls(domain)
    attempts: list[FetchAttempt] = []
    last_error: Optional[FetchError] = None
    state = ResolverState.TRYING

    for index, url in enumerate(candidates):
        logger.info("[homepage] Trying %s (%d/%d)", url, index + 1, len(candidates))
        try:
            fetched = await fetch_page(client, url, timeout=settings.homepage_timeout)
            document = extract_homepage_text(fetched.html, url=url)
            if len(document.text) < MIN_HOMEPAGE_TEXT:
                raise FetchError(
                    FetchErrorKind.INVALID_CONTENT,
                    url,
                    "Insufficient text content extracted",
                    status_code=fetched.status_code,
                )
        except FetchError as exc:
            logger.info("[homepage] %s failed: %s", url, exc.detail)
            attempts.append(
                FetchAttempt(
                    url=url,
                    ok=False,
                    status_code=exc.status_code,
                    error_kind=exc.kind,
                    detail=exc.detail,
                )
            )
            last_error = exc
            continue

        attempts.append(FetchAttempt(url=url, ok=True, status_code=fetched.status_code))
        state = ResolverState.SUCCEEDED
        logger.info(
            "[homepage] %s -> %s: %d chars of text",
            url, state.value, document.text_length,
        )
        return HomepageResult(
            url=url,
            final_url=fetched.final_url,
            html=fetched.html,
            document=document,
            signals=extract_all_signals(fetched.html, fetched.final_url),
            attempts=attempts,
        )

    state = ResolverState.EXHAUSTED
    logger.warning("[homepage] %s: all %d candidates %s", domain, len(candidates), state.value)
    raise HomepageUnreachableError(domain, last_error, attempts=attempts)
