"""Shared fixtures.

No test touches the network: every HTTP exchange goes through ``respx``.
Settings are pinned per test so a developer's ``.env`` cannot change results.
"""

from __future__ import annotations

import pytest

from complyscan.config import settings
from complyscan.scanner.legal_pages import empty_legal_pages
from complyscan.scanner.models import ScanBundle, SiteOptions
from complyscan.scraper.models import (
    CookieSignals,
    CopyrightSignals,
    ExtractedDocument,
    TrackingSignals,
)


@pytest.fixture(autouse=True)
def pinned_settings(monkeypatch):
    monkeypatch.setattr(settings, "extra_scripts", ("hebrew",))
    monkeypatch.setattr(settings, "max_text_length", 8000)
    monkeypatch.setattr(settings, "max_legal_page_length", 15000)
    monkeypatch.setattr(settings, "homepage_timeout", 5.0)
    monkeypatch.setattr(settings, "legal_page_timeout", 5.0)
    monkeypatch.setattr(settings, "analyzer_provider", "heuristic")
    monkeypatch.setattr(settings, "analyzer_fallback", True)
    monkeypatch.setattr(settings, "groq_api_key", "")
    monkeypatch.setattr(settings, "scan_deadline", 0.0)
    return settings


# ---------------------------------------------------------------------------
# HTML fixtures
# ---------------------------------------------------------------------------

_ABOUT = (
    "Acme Widgets builds sturdy, affordable widgets for homes and small "
    "businesses. Our catalogue covers hinges, brackets and fasteners, each "
    "tested in our own workshop before it ships. Orders placed before noon "
    "leave the warehouse the same day, and every widget carries a two year "
    "guarantee against manufacturing defects."
)

HOMEPAGE_HTML = f"""\
<!DOCTYPE html>
<html lang="en">
<head>
  <title>Acme Widgets</title>
  <meta name="description" content="Quality widgets since 1999">
  <script src="https://www.googletagmanager.com/gtag/js?id=G-TEST"></script>
  <script src="https://cdn.cookielaw.org/onetrust/otSDKStub.js"></script>
</head>
<body>
  <header><nav><a href="/">Home</a><a href="/shop">Shop</a></nav></header>
  <main>
    <h1>Welcome to Acme</h1>
    <p>{_ABOUT}</p>
  </main>
  <div id="cookie-banner">We use cookies. <button>Accept all</button></div>
  <footer>
    <a href="/privacy-policy">Privacy Policy</a>
    <a href="/terms">Terms of Service</a>
    <p>&copy; 2024 Acme Widgets Ltd. All rights reserved.</p>
  </footer>
</body>
</html>
"""

_LEGAL_PARAGRAPH = (
    "This policy explains which personal data we collect when you visit the "
    "site, why we collect it, how long we keep it and which rights you have. "
    "We collect your name, e-mail address and order history only to process "
    "orders and never sell them to third parties. You may ask for a copy or "
    "deletion of your data at any time by writing to our support team."
)


def legal_page_html(title: str) -> str:
    return (
        f"<html><head><title>{title}</title></head><body><main>"
        f"<h1>{title}</h1><p>{_LEGAL_PARAGRAPH}</p><p>{_LEGAL_PARAGRAPH}</p>"
        "</main></body></html>"
    )


@pytest.fixture
def homepage_html() -> str:
    return HOMEPAGE_HTML


@pytest.fixture
def privacy_html() -> str:
    return legal_page_html("Privacy Policy")


@pytest.fixture
def terms_html() -> str:
    return legal_page_html("Terms of Service")


@pytest.fixture
def script_only_html() -> str:
    """A JavaScript shell: plenty of bytes, almost no readable text."""
    return (
        "<html><head><title>App</title></head><body><div id=\"root\"></div>"
        "<script>" + "window.__STATE__ = {};" * 20 + "</script></body></html>"
    )


# ---------------------------------------------------------------------------
# Bundle factory
# ---------------------------------------------------------------------------

@pytest.fixture
def make_bundle():
    def _make(text: str = "Welcome to Acme. Read our privacy policy and cookie notice.",
              domain: str = "example.com") -> ScanBundle:
        document = ExtractedDocument(
            url=f"https://{domain}",
            title="Acme",
            text=text,
            text_length=len(text),
            raw_length=len(text),
        )
        return ScanBundle(
            domain=domain,
            url=f"https://{domain}",
            document=document,
            cookies=CookieSignals(),
            tracking=TrackingSignals(),
            copyright=CopyrightSignals(),
            legal_pages=empty_legal_pages(),
            site_options=SiteOptions(),
        )

    return _make
