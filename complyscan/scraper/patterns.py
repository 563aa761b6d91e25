"""Static fingerprint tables used by the normalizer and signal extractors.

Everything here is built once at import time and never mutated: tuples for
ordered lists, :class:`types.MappingProxyType` for lookup tables.  Iteration
order of each table is the order in which matches are reported.
"""

from __future__ import annotations

import re
from enum import Enum
from types import MappingProxyType
from typing import Mapping


class LegalCategory(str, Enum):
    PRIVACY = "privacy"
    TERMS = "terms"
    COOKIES = "cookies"
    GDPR = "gdpr"
    DISCLAIMER = "disclaimer"
    REFUND = "refund"
    DMCA = "dmca"


class TrackerKind(str, Enum):
    ANALYTICS = "analytics"
    ADVERTISING = "advertising"
    SOCIAL = "socialMedia"


# ---------------------------------------------------------------------------
# Fetching
# ---------------------------------------------------------------------------

USER_AGENTS: tuple[str, ...] = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/131.0.0.0 Safari/537.36",
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/131.0.0.0 Safari/537.36",
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64; rv:133.0) Gecko/20100101 Firefox/133.0",
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/605.1.15 "
    "(KHTML, like Gecko) Version/18.1 Safari/605.1.15",
    "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/131.0.0.0 Safari/537.36",
)


# ---------------------------------------------------------------------------
# Legal pages
# ---------------------------------------------------------------------------

LEGAL_PAGE_PATHS: Mapping[LegalCategory, tuple[str, ...]] = MappingProxyType({
    LegalCategory.PRIVACY: (
        "/privacy", "/privacy-policy", "/privacypolicy", "/privacy.html",
        "/legal/privacy", "/about/privacy",
    ),
    LegalCategory.TERMS: (
        "/terms", "/terms-of-service", "/tos", "/terms-and-conditions",
        "/termsofservice", "/legal/terms", "/terms.html",
    ),
    LegalCategory.COOKIES: (
        "/cookies", "/cookie-policy", "/cookiepolicy", "/cookies.html",
        "/legal/cookies",
    ),
    LegalCategory.GDPR: ("/gdpr", "/gdpr-compliance", "/data-protection"),
    LegalCategory.DISCLAIMER: ("/disclaimer", "/legal-disclaimer", "/legal/disclaimer"),
    LegalCategory.REFUND: ("/refund", "/refund-policy", "/returns", "/return-policy"),
    LegalCategory.DMCA: ("/dmca", "/copyright", "/dmca-policy"),
})

# Tested against both the (percent-decoded) href and the visible link text.
LEGAL_LINK_PATTERNS: Mapping[LegalCategory, re.Pattern[str]] = MappingProxyType({
    LegalCategory.PRIVACY: re.compile(
        r"privacy|privacidad|confidentialit|datenschutz|פרטיות", re.IGNORECASE
    ),
    LegalCategory.TERMS: re.compile(
        r"terms|\btos\b|conditions|\bagb\b|nutzungsbedingungen|תקנון|תנאי שימוש",
        re.IGNORECASE,
    ),
    LegalCategory.COOKIES: re.compile(r"cookie|עוגיות|קוקיז", re.IGNORECASE),
    LegalCategory.GDPR: re.compile(
        r"gdpr|dsgvo|data-protection|data protection|הגנת מידע", re.IGNORECASE
    ),
    LegalCategory.DISCLAIMER: re.compile(
        r"disclaimer|impressum|legal notice|הסתייגות|כתב ויתור", re.IGNORECASE
    ),
    LegalCategory.REFUND: re.compile(
        r"refund|return-policy|return policy|returns|widerruf|החזרות|החזר כספי|ביטול עסקה",
        re.IGNORECASE,
    ),
    LegalCategory.DMCA: re.compile(
        r"dmca|copyright-policy|copyright policy|זכויות יוצרים", re.IGNORECASE
    ),
})

SKIPPED_HREF_PREFIXES: tuple[str, ...] = ("#", "javascript:", "mailto:", "tel:")


# ---------------------------------------------------------------------------
# Cookies
# ---------------------------------------------------------------------------

COOKIE_BANNER_PATTERNS: tuple[str, ...] = (
    "cookie-banner", "cookie-consent", "cookie-notice", "cookie-popup",
    "gdpr-banner", "consent-banner", "privacy-banner", "cookieconsent",
    "cc-banner", "onetrust", "cookiebot", "trustarc", "quantcast",
)

COOKIE_CONSENT_PHRASES: tuple[str, ...] = (
    "accept all", "accept cookies", "i agree", "allow all",
    "alle akzeptieren", "zustimmen",
    "אישור עוגיות", "אני מסכים", "אני מסכימה", "קבל הכל", "אשר הכל",
)

# Ordered: the first vendor whose fingerprint appears wins.
CONSENT_PLATFORMS: tuple[tuple[str, str], ...] = (
    ("onetrust", "OneTrust"),
    ("cookiebot", "Cookiebot"),
    ("trustarc", "TrustArc"),
    ("quantcast", "Quantcast Choice"),
    ("cookieconsent", "Cookie Consent"),
)

COOKIE_TYPE_PATTERNS: Mapping[str, tuple[str, ...]] = MappingProxyType({
    "Essential/Necessary": ("essential cookie", "necessary cookie", "strictly necessary"),
    "Analytics": ("analytics cookie", "google analytics", "_ga", "analytics"),
    "Marketing/Advertising": ("marketing cookie", "advertising cookie", "ad cookie", "targeting"),
    "Functional": ("functional cookie", "preference cookie", "functionality"),
    "Performance": ("performance cookie",),
})


# ---------------------------------------------------------------------------
# Trackers
# ---------------------------------------------------------------------------

ANALYTICS_PATTERNS: Mapping[str, tuple[str, ...]] = MappingProxyType({
    "Google Analytics": (
        "google-analytics", "googletagmanager", "gtag", "ga.js", "analytics.js", "_ga",
    ),
    "Google Tag Manager": ("googletagmanager", "gtm.js"),
    "Facebook Pixel": ("fbq(", "facebook.com/tr", "connect.facebook.net"),
    "Hotjar": ("hotjar", "hjid"),
    "Mixpanel": ("mixpanel",),
    "Segment": ("segment.com", "segment.io"),
    "Amplitude": ("amplitude",),
    "Heap": ("heap.io", "heapanalytics"),
    "Matomo/Piwik": ("matomo", "piwik"),
    "Plausible": ("plausible.io",),
    "Microsoft Clarity": ("clarity.ms",),
})

ADVERTISING_PATTERNS: Mapping[str, tuple[str, ...]] = MappingProxyType({
    "Google Ads": ("googlesyndication", "googleadservices", "doubleclick"),
    "Facebook Ads": ("facebook.com/tr",),
    "LinkedIn Ads": ("linkedin.com/px", "snap.licdn.com"),
    "Twitter Ads": ("static.ads-twitter.com",),
    "TikTok Ads": ("analytics.tiktok.com",),
    "Criteo": ("criteo.com", "criteo.net"),
    "AdRoll": ("adroll.com",),
    "Taboola": ("taboola.com",),
    "Outbrain": ("outbrain.com",),
})

SOCIAL_PATTERNS: Mapping[str, tuple[str, ...]] = MappingProxyType({
    "Facebook": ("facebook.com/plugins", "fb-root", "facebook-jssdk"),
    "Twitter": ("platform.twitter.com", "twitter-wjs"),
    "LinkedIn": ("platform.linkedin.com",),
    "Pinterest": ("assets.pinterest.com",),
    "Instagram": ("instagram.com/embed",),
})

TRACKER_PATTERNS: Mapping[TrackerKind, Mapping[str, tuple[str, ...]]] = MappingProxyType({
    TrackerKind.ANALYTICS: ANALYTICS_PATTERNS,
    TrackerKind.ADVERTISING: ADVERTISING_PATTERNS,
    TrackerKind.SOCIAL: SOCIAL_PATTERNS,
})

# label -> keywords (English first, then Hebrew).  Each label is reported once.
DATA_COLLECTION_INDICATORS: Mapping[str, tuple[str, ...]] = MappingProxyType({
    "Newsletter/Email subscription": ("newsletter", "subscribe", "ניוזלטר", "הרשמה לעדכונים", "הירשמו"),
    "Contact forms": ("contact form", "contact us", "צור קשר", "צרו קשר", "טופס יצירת קשר"),
    "User registration": ("create account", "sign up", "register", "הרשמה", "פתיחת חשבון", "התחברות"),
    "Payment processing": ("checkout", "payment", "תשלום", "לקופה", "סל קניות"),
    "Live chat/Support widgets": ("chat", "intercom", "zendesk", "crisp", "צ'אט", "צאט"),
})


# ---------------------------------------------------------------------------
# Copyright
# ---------------------------------------------------------------------------

COPYRIGHT_SYMBOL = re.compile(r"©|&copy;|&#169;|&#xa9;", re.IGNORECASE)
COPYRIGHT_MARKER = re.compile(
    r"©|&copy;|&#169;|&#xa9;|\(c\)|\bcopyright\b|זכויות יוצרים", re.IGNORECASE
)
ALL_RIGHTS_RESERVED: tuple[re.Pattern[str], ...] = (
    re.compile(r"all\s+rights\s+reserved", re.IGNORECASE),
    re.compile(r"כל\s+הזכויות\s+(?:שמורות|שמורים)"),
    re.compile(r"זכויות\s+שמורות\s+ל"),
    re.compile(r"tous\s+droits\s+r[ée]serv[ée]s|alle\s+rechte\s+vorbehalten", re.IGNORECASE),
)
# Year directly after (or a short distance from) a marker; ranges keep both ends.
COPYRIGHT_YEAR = re.compile(
    r"(?:©|&copy;|&#169;|&#xa9;|\(c\)|copyright|זכויות יוצרים)"
    r"[^0-9<]{0,20}((?:19|20)\d{2})(?:\s*[-–]\s*((?:19|20)\d{2}))?",
    re.IGNORECASE,
)


# ---------------------------------------------------------------------------
# Text cleaning
# ---------------------------------------------------------------------------

# Character-class fragments added to the ASCII allowlist when enabled.
SCRIPT_RANGES: Mapping[str, str] = MappingProxyType({
    "hebrew": r"\u0590-\u05ff",
    "arabic": r"\u0600-\u06ff",
    "cyrillic": r"\u0400-\u04ff",
    "greek": r"\u0370-\u03ff",
})

CONTENT_SELECTORS: tuple[str, ...] = (
    "main", "article", '[role="main"]', ".content", "#content", ".main-content",
)
