"""Signal extractors over raw homepage markup.

Each extractor is a pure function of the raw HTML (and, for links, the page
URL).  They scan markup rather than cleaned text because consent platforms
and trackers are recognised by script URLs, ids and class names that the
normalizer strips.  None of them raise: absence of a pattern is the common
case and is reported as empty lists / ``False`` / ``None``.
"""

from __future__ import annotations

from datetime import datetime, timezone
from urllib.parse import unquote, urljoin, urlparse

from bs4 import BeautifulSoup

from complyscan.scraper.models import (
    CookieSignals,
    CopyrightSignals,
    PageSignals,
    TrackingSignals,
)
from complyscan.scraper.patterns import (
    ALL_RIGHTS_RESERVED,
    CONSENT_PLATFORMS,
    COOKIE_BANNER_PATTERNS,
    COOKIE_CONSENT_PHRASES,
    COOKIE_TYPE_PATTERNS,
    COPYRIGHT_MARKER,
    COPYRIGHT_SYMBOL,
    COPYRIGHT_YEAR,
    DATA_COLLECTION_INDICATORS,
    LEGAL_LINK_PATTERNS,
    SKIPPED_HREF_PREFIXES,
    TRACKER_PATTERNS,
    LegalCategory,
    TrackerKind,
)


def _first_match(haystack: str, needles) -> bool:
    return any(needle in haystack for needle in needles)


# ---------------------------------------------------------------------------
# Cookies
# ---------------------------------------------------------------------------

def extract_cookie_signals(html: str) -> CookieSignals:
    """Detect cookie banners, consent buttons, CMP vendors and cookie types."""
    lower = (html or "").lower()
    signals = CookieSignals()

    signals.has_cookie_banner = _first_match(lower, COOKIE_BANNER_PATTERNS)
    signals.has_cookie_consent = _first_match(lower, COOKIE_CONSENT_PHRASES)

    for fingerprint, vendor in CONSENT_PLATFORMS:
        if fingerprint in lower:
            signals.consent_platform = vendor
            break

    for cookie_type, keywords in COOKIE_TYPE_PATTERNS.items():
        if _first_match(lower, keywords):
            signals.cookie_types.append(cookie_type)

    return signals


# ---------------------------------------------------------------------------
# Trackers
# ---------------------------------------------------------------------------

def extract_tracking_signals(html: str) -> TrackingSignals:
    """Detect analytics, advertising and social tools plus data-collection points."""
    lower = (html or "").lower()
    signals = TrackingSignals()
    buckets = {
        TrackerKind.ANALYTICS: signals.analytics,
        TrackerKind.ADVERTISING: signals.advertising,
        TrackerKind.SOCIAL: signals.social_media,
    }

    for kind, table in TRACKER_PATTERNS.items():
        for name, fingerprints in table.items():
            if _first_match(lower, fingerprints):
                signals.add(buckets[kind], name)

    for label, keywords in DATA_COLLECTION_INDICATORS.items():
        if _first_match(lower, keywords):
            signals.add(signals.data_collection, label)

    return signals


# ---------------------------------------------------------------------------
# Copyright
# ---------------------------------------------------------------------------

def _footer_text(soup: BeautifulSoup) -> str:
    footers = list(soup.find_all("footer"))
    for attr in ("id", "class"):
        for tag in soup.find_all(attrs={attr: True}):
            value = tag.get(attr)
            joined = " ".join(value) if isinstance(value, list) else str(value)
            if "footer" in joined.lower() and tag not in footers:
                footers.append(tag)
    return " ".join(f.get_text(separator=" ") for f in footers).strip()


def extract_copyright_signals(html: str) -> CopyrightSignals:
    """Look for a copyright notice, preferring the page footer."""
    signals = CopyrightSignals()
    soup = BeautifulSoup(html or "", "html.parser")
    for tag in soup.find_all(["script", "style", "noscript"]):
        tag.decompose()

    scope_text = _footer_text(soup)
    in_footer = bool(scope_text)
    if not in_footer:
        scope_text = soup.get_text(separator=" ")
    where = "in footer" if in_footer else "in page body"

    if COPYRIGHT_MARKER.search(scope_text):
        signals.has_copyright = True
        if COPYRIGHT_SYMBOL.search(scope_text):
            signals.details.append(f"Copyright symbol (©) found {where}")
        else:
            signals.details.append(f"Copyright notice found {where}")

    for pattern in ALL_RIGHTS_RESERVED:
        if pattern.search(scope_text):
            signals.has_all_rights_reserved = True
            signals.details.append(f'"All rights reserved" notice found {where}')
            break

    match = COPYRIGHT_YEAR.search(scope_text)
    if match:
        signals.year = match.group(2) or match.group(1)
        signals.details.append(f"Copyright year: {signals.year}")
        if int(signals.year) < datetime.now(timezone.utc).year - 1:
            signals.details.append(f"Copyright year {signals.year} may be outdated")

    if in_footer and signals.has_copyright:
        signals.details.append("Notice located in the site footer")

    return signals


# ---------------------------------------------------------------------------
# Legal links
# ---------------------------------------------------------------------------

def _resolve(href: str, base_url: str) -> str | None:
    """Resolve *href* against the origin of *base_url*, not its path."""
    parsed = urlparse(base_url)
    origin = f"{parsed.scheme}://{parsed.netloc}/"
    absolute = urljoin(origin, href)
    if urlparse(absolute).scheme not in ("http", "https"):
        return None
    return absolute


def find_legal_links(html: str, base_url: str) -> dict[LegalCategory, str]:
    """Map each legal category to the first hyperlink that looks like it.

    Both the link target and its visible text are tested.  Root- and
    document-relative links resolve against the origin of *base_url*.
    """
    links: dict[LegalCategory, str] = {}
    soup = BeautifulSoup(html or "", "html.parser")

    for anchor in soup.find_all("a", href=True):
        href = str(anchor.get("href") or "").strip()
        if not href or href.lower().startswith(SKIPPED_HREF_PREFIXES):
            continue
        decoded_href = unquote(href)
        text = anchor.get_text(separator=" ", strip=True)

        for category, pattern in LEGAL_LINK_PATTERNS.items():
            if category in links:
                continue
            if pattern.search(decoded_href) or pattern.search(text):
                resolved = _resolve(href, base_url)
                if resolved:
                    links[category] = resolved

        if len(links) == len(LEGAL_LINK_PATTERNS):
            break

    return links


def extract_all_signals(html: str, base_url: str) -> PageSignals:
    """Run every extractor over one page."""
    return PageSignals(
        cookies=extract_cookie_signals(html),
        tracking=extract_tracking_signals(html),
        copyright=extract_copyright_signals(html),
        legal_links=find_legal_links(html, base_url),
    )
