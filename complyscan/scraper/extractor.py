"""HTML normalizer: turns raw markup into bounded, cleaned prose.

``normalize_html`` is total: any string goes in, an
:class:`ExtractedDocument` comes out.  An empty or near-empty ``text`` is the
caller's signal that the page carries no usable content.
"""

from __future__ import annotations

import html as html_lib
import re
from functools import lru_cache
from typing import Iterable, Optional

from bs4 import BeautifulSoup

from complyscan.config import settings
from complyscan.scraper.models import ExtractedDocument
from complyscan.scraper.patterns import CONTENT_SELECTORS, SCRIPT_RANGES

MIN_CONTENT_LENGTH = 200

# Elements that never carry prose on a homepage.
HOMEPAGE_STRIP_TAGS: tuple[str, ...] = (
    "script", "style", "noscript", "iframe", "svg",
    "nav", "footer", "header", "aside", "form",
)
# Legal documents often live inside <aside>/<form>-heavy layouts; strip less.
LEGAL_STRIP_TAGS: tuple[str, ...] = (
    "script", "style", "noscript", "iframe", "svg", "nav", "footer", "header",
)

_HIDDEN_SELECTORS = (".hidden", "[hidden]", '[aria-hidden="true"]')
_HIDDEN_STYLE = re.compile(r"display\s*:\s*none|visibility\s*:\s*hidden", re.IGNORECASE)

_WS_WITH_NEWLINE = re.compile(r"[^\S\n]*\n\s*")
_WS_RUN = re.compile(r"[^\S\n]+")

# Sequences a later HTML parse would turn back into markup or characters.
_ENTITY_LIKE = re.compile(r"&(#?[0-9a-zA-Z]+;?)")
_TAG_OPEN = re.compile(r"<(?=[a-zA-Z/!?])")


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

@lru_cache(maxsize=None)
def _disallowed_chars(extra_scripts: tuple[str, ...]) -> re.Pattern[str]:
    """Return a pattern matching every character outside the allowed set."""
    ranges = []
    for name in extra_scripts:
        if name not in SCRIPT_RANGES:
            raise ValueError(
                f"Unknown script {name!r}; expected one of {sorted(SCRIPT_RANGES)}"
            )
        ranges.append(SCRIPT_RANGES[name])
    return re.compile(r"[^\x20-\x7e\n" + "".join(ranges) + "]")


def _collapse_whitespace(text: str) -> str:
    text = _WS_WITH_NEWLINE.sub("\n", text)
    return _WS_RUN.sub(" ", text)


def _defuse_markup(text: str) -> str:
    """Space out literal ``&name;`` and ``<tag`` so re-parsing leaves them as text."""

    def _space_entity(match: re.Match[str]) -> str:
        ref = match.group(0)
        return "& " + match.group(1) if html_lib.unescape(ref) != ref else ref

    text = _ENTITY_LIKE.sub(_space_entity, text)
    return _TAG_OPEN.sub("< ", text)


def _decompose_all(tags: Iterable) -> None:
    for tag in list(tags):
        if not getattr(tag, "decomposed", False):
            tag.decompose()


def _meta_content(soup: BeautifulSoup, **attrs: str) -> str:
    tag = soup.find("meta", attrs=attrs)
    if tag is None:
        return ""
    content = tag.get("content") or ""
    return content.strip() if isinstance(content, str) else ""


def _select_content(soup: BeautifulSoup, min_content_length: int) -> str:
    """Return the text of the first content region that is long enough.

    Falls back to the whole remaining document body.
    """
    for selector in CONTENT_SELECTORS:
        matches = soup.select(selector)
        if not matches:
            continue
        text = " ".join(m.get_text(separator=" ") for m in matches)
        if len(text.strip()) > min_content_length:
            return text
    container = soup.body or soup
    return container.get_text(separator=" ")


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def clean_text(
    text: str,
    extra_scripts: Optional[Iterable[str]] = None,
    *,
    decode_entities: bool = True,
) -> str:
    """Decode entities, collapse whitespace and drop disallowed characters.

    The result only holds printable ASCII, newlines and characters of the
    configured *extra_scripts*.  Pass ``decode_entities=False`` for text that
    a parser has already decoded.  Literal entity references and tag openers
    left in the result are spaced out (``& lt;``, ``< b``) so that feeding the
    output back through an HTML parser yields the same text.  ``clean_text``
    is idempotent.
    """
    scripts = tuple(settings.extra_scripts if extra_scripts is None else extra_scripts)
    if decode_entities:
        text = html_lib.unescape(text)
    text = _collapse_whitespace(text)
    text = _disallowed_chars(scripts).sub("", text)
    text = _defuse_markup(text)
    # Removing characters can leave adjacent spaces behind.
    return _collapse_whitespace(text).strip()


def normalize_html(
    html: str,
    *,
    max_length: int,
    min_content_length: int = MIN_CONTENT_LENGTH,
    url: str = "",
    strip_tags: tuple[str, ...] = HOMEPAGE_STRIP_TAGS,
    extra_scripts: Optional[Iterable[str]] = None,
) -> ExtractedDocument:
    """Extract a bounded, cleaned text rendition of *html*.

    Steps: strip non-content markup and hidden elements, pick the first
    content region longer than *min_content_length* (else the body), prepend
    title and descriptions, clean the text, truncate to *max_length*.
    """
    soup = BeautifulSoup(html or "", "html.parser")

    title = soup.title.get_text(strip=True) if soup.title else ""
    meta_desc = _meta_content(soup, name="description")
    og_desc = _meta_content(soup, property="og:description")

    _decompose_all(soup.find_all(list(strip_tags)))
    for selector in _HIDDEN_SELECTORS:
        _decompose_all(soup.select(selector))
    _decompose_all(soup.find_all(style=_HIDDEN_STYLE))
    _decompose_all(soup.find_all(["head", "title", "meta", "link"]))

    body_text = _select_content(soup, min_content_length)

    parts = [p for p in (title, meta_desc, og_desc, body_text) if p and p.strip()]
    cleaned = clean_text("\n".join(parts), extra_scripts, decode_entities=False)

    raw_length = len(cleaned)
    truncated = raw_length > max_length
    text = cleaned[:max_length].rstrip() if truncated else cleaned

    return ExtractedDocument(
        url=url,
        title=clean_text(title, extra_scripts, decode_entities=False),
        text=text,
        text_length=len(text),
        raw_length=raw_length,
        truncated=truncated,
    )


def extract_homepage_text(html: str, url: str = "") -> ExtractedDocument:
    """Homepage preset: aggressive stripping, ``settings.max_text_length``."""
    return normalize_html(
        html,
        max_length=settings.max_text_length,
        url=url,
        strip_tags=HOMEPAGE_STRIP_TAGS,
    )


def extract_legal_page_text(html: str, url: str = "") -> ExtractedDocument:
    """Legal-page preset: lighter stripping, ``settings.max_legal_page_length``."""
    return normalize_html(
        html,
        max_length=settings.max_legal_page_length,
        url=url,
        strip_tags=LEGAL_STRIP_TAGS,
    )
