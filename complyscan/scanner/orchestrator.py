"""Top-level scan sequencing.

``scan_domain`` is the single entry point used by the API and the CLI::

    normalize_domain -> resolve_homepage -> (short text? fail fast)
        -> resolve_legal_pages -> ScanBundle -> analyzer -> response dict
"""

from __future__ import annotations

import asyncio
import logging
import re
import time
from datetime import datetime, timezone
from typing import Any, Awaitable, Callable, Mapping, Optional

import httpx

from complyscan.analysis import analyze
from complyscan.config import settings
from complyscan.errors import (
    FetchErrorKind,
    HomepageUnreachableError,
    InputError,
    InsufficientContentError,
    ScanTimeoutError,
)
from complyscan.scanner.homepage import MIN_HOMEPAGE_TEXT, resolve_homepage
from complyscan.scanner.legal_pages import resolve_legal_pages
from complyscan.scanner.models import ScanBundle, SiteOptions
from complyscan.scraper.fetcher import new_client

logger = logging.getLogger(__name__)

Analyzer = Callable[[ScanBundle], Awaitable[dict[str, Any]]]

_SCHEME = re.compile(r"^https?://", re.IGNORECASE)
_DOMAIN_SHAPE = re.compile(r"^(?:[a-z0-9](?:[a-z0-9-]{0,61}[a-z0-9])?\.)+[a-z][a-z0-9-]*[a-z0-9]$")


def normalize_domain(raw: Optional[str]) -> str:
    """Strip scheme and trailing slash from *raw* and validate the result.

    Internationalised names are converted to their IDNA (punycode) form.

    Raises:
        InputError: empty input, no dot, or not shaped like a domain.
    """
    if raw is None or not str(raw).strip():
        raise InputError("Please provide a domain to scan", code="domain_required")

    domain = _SCHEME.sub("", str(raw).strip()).rstrip("/").lower()
    if "." not in domain:
        raise InputError("Please provide a valid domain name")
    try:
        domain = domain.encode("idna").decode("ascii")
    except UnicodeError as exc:
        raise InputError("Please provide a valid domain name") from exc

    tld = domain.rsplit(".", 1)[-1]
    if not _DOMAIN_SHAPE.match(domain) or not (tld.isalpha() or tld.startswith("xn--")):
        raise InputError("Please provide a valid domain name")
    return domain


async def _collect(
    domain: str,
    options: SiteOptions,
    homepage_client: httpx.AsyncClient,
    legal_client: httpx.AsyncClient,
) -> ScanBundle:
    started = time.perf_counter()
    try:
        homepage = await resolve_homepage(homepage_client, domain)
    except HomepageUnreachableError as exc:
        # A page that answered but rendered too little text outranks transport
        # failures on the other candidates.
        if any(a.error_kind is FetchErrorKind.INVALID_CONTENT for a in exc.attempts):
            raise InsufficientContentError(domain) from exc
        raise

    if len(homepage.document.text.strip()) < MIN_HOMEPAGE_TEXT:
        raise InsufficientContentError(domain)

    legal_pages = await resolve_legal_pages(
        legal_client,
        homepage.final_url,
        homepage.html,
        links=homepage.signals.legal_links,
    )

    return ScanBundle(
        domain=domain,
        url=homepage.url,
        document=homepage.document,
        cookies=homepage.signals.cookies,
        tracking=homepage.signals.tracking,
        copyright=homepage.signals.copyright,
        legal_pages=legal_pages,
        site_options=options,
        elapsed=time.perf_counter() - started,
    )


async def build_bundle(
    domain: str,
    site_options: Optional[Mapping[str, Any] | SiteOptions] = None,
    *,
    client: Optional[httpx.AsyncClient] = None,
) -> ScanBundle:
    """Collect the evidence bundle for *domain* without analysing it.

    A caller-supplied *client* is used for every fetch; otherwise two clients
    are opened so homepage and legal pages get their own redirect limits.
    """
    domain = normalize_domain(domain)
    options = (
        site_options
        if isinstance(site_options, SiteOptions)
        else SiteOptions.from_dict(site_options)
    )
    logger.info("[scan] Scanning domain: %s", domain)

    if client is not None:
        return await _collect(domain, options, client, client)

    async with new_client(settings.homepage_max_redirects) as homepage_client, \
            new_client(settings.legal_page_max_redirects) as legal_client:
        return await _collect(domain, options, homepage_client, legal_client)


def build_response(
    bundle: ScanBundle,
    analysis: dict[str, Any],
    elapsed: float,
) -> dict[str, Any]:
    """Shape the final response: the bundle minus legal-page text, plus timing."""
    payload = bundle.to_dict(include_legal_text=False)
    payload.update(
        {
            "success": True,
            "textAnalyzed": bundle.text_length,
            "scanTime": f"{elapsed:.2f}s",
            "analysis": analysis,
            "siteOptions": bundle.site_options.to_dict(),
            "scannedAt": datetime.now(timezone.utc).isoformat(),
        }
    )
    return payload


async def scan_domain(
    domain: str,
    site_options: Optional[Mapping[str, Any] | SiteOptions] = None,
    *,
    analyzer: Optional[Analyzer] = None,
    client: Optional[httpx.AsyncClient] = None,
    deadline: Optional[float] = None,
) -> dict[str, Any]:
    """Run a complete scan of *domain* and return the response payload.

    Args:
        domain: Domain as typed by the user; scheme and trailing slash allowed.
        site_options: Site context flags forwarded to the analyzer.
        analyzer: Coroutine function turning a bundle into a verdict.
            Defaults to :func:`complyscan.analysis.analyze`.
        client: Optional HTTP client (tests inject a mocked one).
        deadline: Seconds allowed for fetching; ``None`` uses
            ``settings.scan_deadline`` and ``0`` disables the limit.

    Raises:
        ScanError: any terminal failure (see :mod:`complyscan.errors`).
    """
    started = time.perf_counter()
    limit = settings.scan_deadline if deadline is None else deadline

    collecting = build_bundle(domain, site_options, client=client)
    if limit and limit > 0:
        try:
            bundle = await asyncio.wait_for(collecting, timeout=limit)
        except asyncio.TimeoutError as exc:
            raise ScanTimeoutError(domain, limit) from exc
    else:
        bundle = await collecting

    analysis = await (analyzer or analyze)(bundle)
    elapsed = time.perf_counter() - started
    logger.info(
        "[scan] %s done in %.2fs (source=%s)",
        bundle.domain, elapsed, analysis.get("source", "unknown"),
    )
    return build_response(bundle, analysis, elapsed)
