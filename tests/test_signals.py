"""Tests for the raw-markup signal extractors."""

from __future__ import annotations

from datetime import datetime, timezone

from complyscan.scraper.patterns import LegalCategory
from complyscan.scraper.signals import (
    extract_all_signals,
    extract_cookie_signals,
    extract_copyright_signals,
    extract_tracking_signals,
    find_legal_links,
)


# ---------------------------------------------------------------------------
# Cookies
# ---------------------------------------------------------------------------

class TestCookieSignals:
    def test_empty_page_defaults(self) -> None:
        signals = extract_cookie_signals("")
        assert signals.has_cookie_banner is False
        assert signals.has_cookie_consent is False
        assert signals.cookie_types == []
        assert signals.consent_platform is None

    def test_banner_and_consent_button(self) -> None:
        html = '<div class="cookie-banner">We use cookies <button>Accept All</button></div>'
        signals = extract_cookie_signals(html)
        assert signals.has_cookie_banner is True
        assert signals.has_cookie_consent is True

    def test_hebrew_consent_phrase(self) -> None:
        html = '<div id="cookie-notice"><button>אני מסכים</button></div>'
        assert extract_cookie_signals(html).has_cookie_consent is True

    def test_consent_platform_follows_catalog_order(self) -> None:
        html = (
            '<script src="https://consent.cookiebot.com/uc.js"></script>'
            '<script src="https://cdn.cookielaw.org/onetrust/otSDKStub.js"></script>'
        )
        assert extract_cookie_signals(html).consent_platform == "OneTrust"

    def test_cookie_types(self) -> None:
        html = "<p>We use strictly necessary cookies and a performance cookie.</p>"
        types = extract_cookie_signals(html).cookie_types
        assert types == ["Essential/Necessary", "Performance"]


# ---------------------------------------------------------------------------
# Trackers
# ---------------------------------------------------------------------------

class TestTrackingSignals:
    def test_google_analytics_reported_once(self) -> None:
        html = (
            '<script src="https://www.googletagmanager.com/gtag/js?id=G-1"></script>'
            '<script src="https://www.google-analytics.com/analytics.js"></script>'
            "<script>gtag('config', 'G-1');</script>"
        )
        analytics = extract_tracking_signals(html).analytics
        assert analytics.count("Google Analytics") == 1
        assert "Google Tag Manager" in analytics

    def test_advertising_and_social(self) -> None:
        html = (
            '<script src="https://pagead2.googlesyndication.com/pagead/js"></script>'
            '<div id="fb-root"></div>'
        )
        signals = extract_tracking_signals(html)
        assert signals.advertising == ["Google Ads"]
        assert signals.social_media == ["Facebook"]

    def test_data_collection_points(self) -> None:
        html = "<form><h2>Subscribe to our newsletter</h2></form><a>Contact us</a>"
        collected = extract_tracking_signals(html).data_collection
        assert collected == ["Newsletter/Email subscription", "Contact forms"]

    def test_plain_page_has_no_trackers(self) -> None:
        signals = extract_tracking_signals("<p>Hello there</p>")
        assert signals.to_dict() == {
            "analytics": [],
            "advertising": [],
            "socialMedia": [],
            "dataCollection": [],
        }


# ---------------------------------------------------------------------------
# Copyright
# ---------------------------------------------------------------------------

class TestCopyrightSignals:
    def test_footer_notice(self) -> None:
        year = datetime.now(timezone.utc).year
        html = f"<main>Content</main><footer>&copy; {year} Acme Ltd. All rights reserved.</footer>"
        signals = extract_copyright_signals(html)
        assert signals.has_copyright is True
        assert signals.has_all_rights_reserved is True
        assert signals.year == str(year)
        assert "Copyright symbol (©) found in footer" in signals.details
        assert "Notice located in the site footer" in signals.details
        assert not any("outdated" in d for d in signals.details)

    def test_footer_by_class_name(self) -> None:
        html = '<div class="site-footer">© 2023 Acme</div>'
        assert extract_copyright_signals(html).has_copyright is True

    def test_hebrew_all_rights_reserved(self) -> None:
        html = "<footer>© 2024 כל הזכויות שמורות לאקמי בע\"מ</footer>"
        signals = extract_copyright_signals(html)
        assert signals.has_copyright is True
        assert signals.has_all_rights_reserved is True

    def test_year_range_reports_latest(self) -> None:
        html = "<footer>Copyright 2010 - 2015 Acme</footer>"
        signals = extract_copyright_signals(html)
        assert signals.year == "2015"
        assert "Copyright year 2015 may be outdated" in signals.details

    def test_body_notice_without_footer(self) -> None:
        html = "<body><p>Copyright 2023 Acme Inc.</p></body>"
        signals = extract_copyright_signals(html)
        assert signals.has_copyright is True
        assert "Copyright notice found in page body" in signals.details
        assert "Notice located in the site footer" not in signals.details

    def test_no_notice(self) -> None:
        signals = extract_copyright_signals("<footer>Contact us</footer>")
        assert signals.has_copyright is False
        assert signals.year is None
        assert signals.details == []


# ---------------------------------------------------------------------------
# Legal links
# ---------------------------------------------------------------------------

class TestFindLegalLinks:
    def test_resolves_against_origin(self) -> None:
        html = '<a href="/privacy-policy">Privacy</a><a href="terms.html">Terms</a>'
        links = find_legal_links(html, "https://shop.example.com/en/home")
        assert links[LegalCategory.PRIVACY] == "https://shop.example.com/privacy-policy"
        assert links[LegalCategory.TERMS] == "https://shop.example.com/terms.html"

    def test_matches_link_text(self) -> None:
        html = '<a href="/p/17">Cookie settings</a>'
        links = find_legal_links(html, "https://example.com")
        assert links == {LegalCategory.COOKIES: "https://example.com/p/17"}

    def test_hebrew_link_text(self) -> None:
        html = '<a href="/page/5">מדיניות פרטיות</a><a href="/page/6">תקנון האתר</a>'
        links = find_legal_links(html, "https://example.co.il")
        assert links[LegalCategory.PRIVACY] == "https://example.co.il/page/5"
        assert links[LegalCategory.TERMS] == "https://example.co.il/page/6"

    def test_skips_non_navigational_hrefs(self) -> None:
        html = (
            '<a href="mailto:privacy@example.com">privacy</a>'
            '<a href="#privacy">Privacy</a>'
            '<a href="javascript:void(0)">Privacy</a>'
        )
        assert find_legal_links(html, "https://example.com") == {}

    def test_first_match_wins(self) -> None:
        html = '<a href="/privacy">Privacy</a><a href="/privacy-v2">Privacy</a>'
        links = find_legal_links(html, "https://example.com")
        assert links[LegalCategory.PRIVACY] == "https://example.com/privacy"

    def test_absolute_links_kept(self) -> None:
        html = '<a href="https://legal.example.org/dmca">DMCA</a>'
        links = find_legal_links(html, "https://example.com")
        assert links[LegalCategory.DMCA] == "https://legal.example.org/dmca"


def test_extract_all_signals(homepage_html) -> None:
    signals = extract_all_signals(homepage_html, "https://example.com/")
    assert signals.cookies.consent_platform == "OneTrust"
    assert signals.cookies.has_cookie_banner is True
    assert "Google Analytics" in signals.tracking.analytics
    assert signals.copyright.has_all_rights_reserved is True
    assert signals.legal_links[LegalCategory.PRIVACY] == "https://example.com/privacy-policy"
    assert signals.legal_links[LegalCategory.TERMS] == "https://example.com/terms"
