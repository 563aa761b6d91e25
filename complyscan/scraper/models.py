"""Data models for the scraper pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Optional

from complyscan.errors import FetchErrorKind


@dataclass
class FetchResult:
    """A usable HTTP response for a single URL fetch."""

    url: str
    final_url: str
    html: str
    status_code: int


@dataclass
class FetchAttempt:
    """Outcome of trying one candidate URL; kept for diagnostics only."""

    url: str
    ok: bool
    status_code: Optional[int] = None
    error_kind: Optional[FetchErrorKind] = None
    detail: str = ""


@dataclass
class ExtractedDocument:
    """Cleaned, bounded text extracted from one fetched page."""

    url: str
    title: str
    text: str
    text_length: int
    raw_length: int
    truncated: bool = False


@dataclass
class CookieSignals:
    has_cookie_banner: bool = False
    has_cookie_consent: bool = False
    cookie_types: List[str] = field(default_factory=list)
    consent_platform: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "hasCookieBanner": self.has_cookie_banner,
            "hasCookieConsent": self.has_cookie_consent,
            "cookieTypes": list(self.cookie_types),
            "consentMechanism": self.consent_platform,
        }


@dataclass
class TrackingSignals:
    analytics: List[str] = field(default_factory=list)
    advertising: List[str] = field(default_factory=list)
    social_media: List[str] = field(default_factory=list)
    data_collection: List[str] = field(default_factory=list)

    def add(self, bucket: List[str], name: str) -> None:
        """Append *name* to *bucket* unless it is already there."""
        if name not in bucket:
            bucket.append(name)

    def to_dict(self) -> dict[str, Any]:
        return {
            "analytics": list(self.analytics),
            "advertising": list(self.advertising),
            "socialMedia": list(self.social_media),
            "dataCollection": list(self.data_collection),
        }


@dataclass
class CopyrightSignals:
    has_copyright: bool = False
    has_all_rights_reserved: bool = False
    year: Optional[str] = None
    details: List[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "hasCopyright": self.has_copyright,
            "hasAllRightsReserved": self.has_all_rights_reserved,
            "copyrightYear": self.year,
            "details": list(self.details),
        }


@dataclass
class PageSignals:
    """All raw-markup signals of one page."""

    cookies: CookieSignals
    tracking: TrackingSignals
    copyright: CopyrightSignals
    legal_links: dict = field(default_factory=dict)
