"""HTTP fetcher with browser-like headers and failure classification."""

from __future__ import annotations

import logging
import random
from typing import Optional

import httpx

from complyscan.config import settings
from complyscan.errors import FetchError, FetchErrorKind
from complyscan.scraper.models import FetchResult
from complyscan.scraper.patterns import USER_AGENTS

logger = logging.getLogger(__name__)

MIN_BODY_BYTES = 100

_DNS_MARKERS = (
    "name or service not known",
    "nodename nor servname",
    "getaddrinfo",
    "no address associated",
    "temporary failure in name resolution",
    "name resolution",
    "[errno -2]",
    "[errno -3]",
    "[errno 8]",
    "[errno 11001]",
)
_REFUSED_MARKERS = ("refused", "[errno 111]", "[errno 61]", "[errno 10061]")
_TEXT_CONTENT_TYPES = ("html", "text", "xml")


def browser_headers(user_agent: Optional[str] = None) -> dict[str, str]:
    """Return a header set imitating a real browser.

    The user agent is picked at random from the pool unless given.  Chrome
    user agents also get the ``Sec-Ch-*`` / ``Sec-Fetch-*`` client hints a
    real Chrome would send.
    """
    ua = user_agent or random.choice(USER_AGENTS)
    headers = {
        "User-Agent": ua,
        "Accept": (
            "text/html,application/xhtml+xml,application/xml;q=0.9,"
            "image/avif,image/webp,image/apng,*/*;q=0.8"
        ),
        "Accept-Language": "en-US,en;q=0.9",
        "Accept-Encoding": "gzip, deflate, br",
        "DNT": "1",
        "Upgrade-Insecure-Requests": "1",
        "Cache-Control": "max-age=0",
    }
    if "Chrome" in ua:
        headers.update(
            {
                "Sec-Ch-Ua": '"Google Chrome";v="131", "Chromium";v="131", "Not_A Brand";v="24"',
                "Sec-Ch-Ua-Mobile": "?0",
                "Sec-Ch-Ua-Platform": '"Windows"',
                "Sec-Fetch-Dest": "document",
                "Sec-Fetch-Mode": "navigate",
                "Sec-Fetch-Site": "none",
                "Sec-Fetch-User": "?1",
            }
        )
    return headers


def new_client(max_redirects: Optional[int] = None) -> httpx.AsyncClient:
    """Return an ``AsyncClient`` for one scan.

    Redirect limits are a client-level setting in httpx, so homepage and
    legal-page fetching may use separate clients.
    """
    return httpx.AsyncClient(
        follow_redirects=True,
        max_redirects=(
            settings.homepage_max_redirects if max_redirects is None else max_redirects
        ),
    )


def classify_exception(exc: Exception) -> FetchErrorKind:
    """Map a transport-level exception onto a :class:`FetchErrorKind`."""
    if isinstance(exc, httpx.TimeoutException):
        return FetchErrorKind.TIMEOUT
    message = str(exc).lower()
    if isinstance(exc, httpx.ConnectError):
        if any(marker in message for marker in _DNS_MARKERS):
            return FetchErrorKind.NOT_FOUND
        if any(marker in message for marker in _REFUSED_MARKERS):
            return FetchErrorKind.CONNECTION_REFUSED
    return FetchErrorKind.GENERIC


def classify_status(status_code: int) -> FetchErrorKind:
    if status_code == 403:
        return FetchErrorKind.FORBIDDEN
    if status_code in (404, 410):
        return FetchErrorKind.NOT_FOUND_PAGE
    return FetchErrorKind.GENERIC


async def fetch_page(
    client: httpx.AsyncClient,
    url: str,
    *,
    timeout: Optional[float] = None,
    min_body_bytes: int = MIN_BODY_BYTES,
    headers: Optional[dict[str, str]] = None,
) -> FetchResult:
    """GET *url* and return its body if it is usable.

    Raises:
        FetchError: network failure, status >= 400, a non-text body or a
            body shorter than *min_body_bytes*.  The error only concerns this
            URL; callers move on to their next candidate.
    """
    try:
        response = await client.get(
            url,
            headers=headers or browser_headers(),
            timeout=settings.homepage_timeout if timeout is None else timeout,
        )
    except httpx.TooManyRedirects as exc:
        raise FetchError(FetchErrorKind.GENERIC, url, f"Too many redirects: {exc}") from exc
    except httpx.InvalidURL as exc:
        raise FetchError(FetchErrorKind.GENERIC, url, f"Invalid URL: {exc}") from exc
    except httpx.HTTPError as exc:
        kind = classify_exception(exc)
        raise FetchError(kind, url, f"{type(exc).__name__}: {exc}") from exc

    status = response.status_code
    if status >= 400:
        raise FetchError(classify_status(status), url, f"HTTP {status}", status_code=status)

    content_type = response.headers.get("content-type", "").lower()
    if content_type and not any(t in content_type for t in _TEXT_CONTENT_TYPES):
        raise FetchError(
            FetchErrorKind.INVALID_CONTENT,
            url,
            f"Non-text response ({content_type})",
            status_code=status,
        )

    if len(response.content) < min_body_bytes:
        raise FetchError(
            FetchErrorKind.INVALID_CONTENT,
            url,
            "Invalid or empty response",
            status_code=status,
        )

    logger.debug("[fetch] %s -> HTTP %s (%d bytes)", url, status, len(response.content))
    return FetchResult(
        url=url,
        final_url=str(response.url),
        html=response.text,
        status_code=status,
    )
