"""Tests for the legal page resolver."""

from __future__ import annotations

import httpx
import pytest
import respx

from complyscan.scanner import legal_pages
from complyscan.scanner.legal_pages import (
    DiscoveryMethod,
    LegalPageEntry,
    empty_legal_pages,
    resolve_legal_pages,
)
from complyscan.scraper.patterns import LegalCategory


def _paths(calls) -> list[str]:
    return [c.request.url.path for c in calls]


def test_empty_map_covers_every_category() -> None:
    pages = empty_legal_pages()
    assert list(pages) == list(LegalCategory)
    assert not any(entry.found for entry in pages.values())


def test_entry_serialisation() -> None:
    entry = LegalPageEntry(
        LegalCategory.PRIVACY,
        found=True,
        url="https://example.com/privacy",
        text="We respect your privacy.",
        discovery_method=DiscoveryMethod.HYPERLINK,
    )
    assert entry.to_dict(include_text=False) == {"found": True, "url": "https://example.com/privacy"}
    assert entry.to_dict()["discoveryMethod"] == "hyperlink"


class TestResolveLegalPages:
    async def test_hyperlink_beats_fallback_path(self, homepage_html, privacy_html) -> None:
        with respx.mock(assert_all_called=False) as router:
            router.get("https://example.com/privacy-policy").mock(
                return_value=httpx.Response(200, html=privacy_html)
            )
            router.get("https://example.com/privacy").mock(
                return_value=httpx.Response(200, html=privacy_html)
            )
            router.route().mock(return_value=httpx.Response(404))
            async with httpx.AsyncClient(follow_redirects=True) as client:
                pages = await resolve_legal_pages(client, "https://example.com/", homepage_html)
            calls = list(router.calls)

        privacy = pages[LegalCategory.PRIVACY]
        assert privacy.found is True
        assert privacy.url == "https://example.com/privacy-policy"
        assert privacy.discovery_method is DiscoveryMethod.HYPERLINK
        assert "personal data" in privacy.text
        assert "/privacy" not in _paths(calls)

    async def test_fallback_path_when_link_fails(self, privacy_html) -> None:
        html = '<a href="/legal/privacy-notice">Privacy</a>'
        with respx.mock(assert_all_called=False) as router:
            router.get("https://example.com/legal/privacy-notice").mock(
                return_value=httpx.Response(404)
            )
            router.get("https://example.com/privacy-policy").mock(
                return_value=httpx.Response(200, html=privacy_html)
            )
            router.route().mock(return_value=httpx.Response(404))
            async with httpx.AsyncClient(follow_redirects=True) as client:
                pages = await resolve_legal_pages(client, "https://example.com/", html)
            calls = list(router.calls)

        privacy = pages[LegalCategory.PRIVACY]
        assert privacy.url == "https://example.com/privacy-policy"
        assert privacy.discovery_method is DiscoveryMethod.GUESSED_PATH
        # The first fallback path was tried before the one that succeeded.
        paths = _paths(calls)
        assert paths.index("/privacy") < paths.index("/privacy-policy")

    async def test_no_links_only_guessed_path(self, privacy_html) -> None:
        with respx.mock(assert_all_called=False) as router:
            router.get("https://example.com/privacy").mock(
                return_value=httpx.Response(200, html=privacy_html)
            )
            router.route().mock(return_value=httpx.Response(404))
            async with httpx.AsyncClient(follow_redirects=True) as client:
                pages = await resolve_legal_pages(client, "https://example.com/", "<p>Welcome</p>")

        assert pages[LegalCategory.PRIVACY].found is True
        assert pages[LegalCategory.PRIVACY].url == "https://example.com/privacy"
        assert [c for c, e in pages.items() if e.found] == [LegalCategory.PRIVACY]

    async def test_thin_page_rejected(self) -> None:
        thin = "<html><body><p>Coming soon</p>" + '<div class="spacer"></div>' * 40 + "</body></html>"
        with respx.mock(assert_all_called=False) as router:
            router.get("https://example.com/privacy").mock(return_value=httpx.Response(200, html=thin))
            router.route().mock(return_value=httpx.Response(404))
            async with httpx.AsyncClient(follow_redirects=True) as client:
                pages = await resolve_legal_pages(client, "https://example.com/", "")

        assert pages[LegalCategory.PRIVACY].found is False

    async def test_fallback_paths_use_origin(self, terms_html) -> None:
        with respx.mock(assert_all_called=False) as router:
            router.get("https://www.example.com/terms").mock(
                return_value=httpx.Response(200, html=terms_html)
            )
            router.route().mock(return_value=httpx.Response(404))
            async with httpx.AsyncClient(follow_redirects=True) as client:
                pages = await resolve_legal_pages(client, "https://www.example.com/en/index.html", "")

        assert pages[LegalCategory.TERMS].url == "https://www.example.com/terms"

    async def test_one_category_crashing_does_not_affect_others(
        self, monkeypatch, privacy_html
    ) -> None:
        original = legal_pages._resolve_category

        async def flaky(client, origin, category, link):
            if category is LegalCategory.TERMS:
                raise RuntimeError("boom")
            return await original(client, origin, category, link)

        monkeypatch.setattr(legal_pages, "_resolve_category", flaky)

        with respx.mock(assert_all_called=False) as router:
            router.get("https://example.com/privacy").mock(
                return_value=httpx.Response(200, html=privacy_html)
            )
            router.route().mock(return_value=httpx.Response(404))
            async with httpx.AsyncClient(follow_redirects=True) as client:
                pages = await resolve_legal_pages(client, "https://example.com/", "")

        assert len(pages) == len(LegalCategory)
        assert pages[LegalCategory.TERMS].found is False
        assert pages[LegalCategory.PRIVACY].found is True

    async def test_transport_errors_mean_not_found(self) -> None:
        with respx.mock as router:
            router.route().mock(side_effect=httpx.ConnectError("[Errno 111] Connection refused"))
            async with httpx.AsyncClient(follow_redirects=True) as client:
                pages = await resolve_legal_pages(client, "https://example.com/", "")

        assert not any(entry.found for entry in pages.values())


@pytest.mark.parametrize("category", list(LegalCategory))
def test_every_category_has_fallback_paths(category) -> None:
    assert legal_pages.LEGAL_PAGE_PATHS[category]
