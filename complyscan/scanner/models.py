"""Scan-level data models: site context flags and the evidence bundle."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any, Mapping, Optional

from complyscan.scanner.legal_pages import LegalPageEntry, empty_legal_pages
from complyscan.scraper.models import (
    CookieSignals,
    CopyrightSignals,
    ExtractedDocument,
    TrackingSignals,
)
from complyscan.scraper.patterns import LegalCategory

# snake_case attribute -> camelCase wire key
_SITE_OPTION_KEYS = {
    "has_payments": "hasPayments",
    "collects_personal_data": "collectsPersonalData",
    "uses_tracking": "usesTracking",
    "has_user_accounts": "hasUserAccounts",
    "targets_eu": "targetsEU",
    "targets_usa": "targetsUSA",
    "has_children_content": "hasChildrenContent",
}


@dataclass
class SiteOptions:
    """Caller-declared facts about the site.

    The pipeline never branches on these; they are forwarded to the analyzer
    to scope which compliance rules apply.
    """

    has_payments: bool = False
    collects_personal_data: bool = True
    uses_tracking: bool = True
    has_user_accounts: bool = False
    targets_eu: bool = True
    targets_usa: bool = True
    has_children_content: bool = False

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "SiteOptions":
        """Merge *data* (camelCase or snake_case keys) over the defaults."""
        options = cls()
        if not data:
            return options
        for f in fields(cls):
            camel = _SITE_OPTION_KEYS[f.name]
            if camel in data:
                setattr(options, f.name, bool(data[camel]))
            elif f.name in data:
                setattr(options, f.name, bool(data[f.name]))
        return options

    def to_dict(self) -> dict[str, bool]:
        return {camel: getattr(self, attr) for attr, camel in _SITE_OPTION_KEYS.items()}


@dataclass
class ScanBundle:
    """Everything collected about one domain, handed to the analyzer."""

    domain: str
    url: str
    document: ExtractedDocument
    cookies: CookieSignals
    tracking: TrackingSignals
    copyright: CopyrightSignals
    legal_pages: dict[LegalCategory, LegalPageEntry] = field(default_factory=empty_legal_pages)
    site_options: SiteOptions = field(default_factory=SiteOptions)
    elapsed: float = 0.0

    @property
    def text(self) -> str:
        return self.document.text

    @property
    def text_length(self) -> int:
        return self.document.text_length

    def to_dict(self, include_legal_text: bool = True) -> dict[str, Any]:
        return {
            "domain": self.domain,
            "url": self.url,
            "text": self.text,
            "textLength": self.text_length,
            "cookieInfo": self.cookies.to_dict(),
            "trackingInfo": self.tracking.to_dict(),
            "copyrightInfo": self.copyright.to_dict(),
            "legalPages": {
                category.value: entry.to_dict(include_text=include_legal_text)
                for category, entry in self.legal_pages.items()
            },
        }
