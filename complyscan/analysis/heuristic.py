"""Regex-based fallback analyzer used when no model is available.

The placeholder strings emitted for empty categories are part of the output
contract: front-ends look for them to render a "no issues" state.
"""

from __future__ import annotations

import re
from typing import Any

NO_PERSONAL_DATA = "No obvious personal data exposure detected"
NO_DATA_LEAKS = "No obvious data leaks detected"
LEGAL_NOTICES_OK = "Basic legal notices appear to be in place"

_EMAIL = re.compile(r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}")
_PHONE = re.compile(r"(?:\+?1[-.\s]?)?\(?\d{3}\)?[-.\s]?\d{3}[-.\s]?\d{4}")
_CREDENTIAL = re.compile(
    r"(?:api[_-]?key|apikey|access[_-]?token|auth[_-]?token|secret[_-]?key)"
    r"\s*[=:]\s*['\"]?[a-zA-Z0-9_-]{20,}",
    re.IGNORECASE,
)


def heuristic_analysis(text: str, domain: str) -> dict[str, Any]:
    """Score *text* (cleaned homepage text) with simple pattern counts.

    Risk is ``High`` when a credential-like pattern matched or at least four
    issues were found, ``Medium`` from two issues, else ``Low``.
    """
    personal_data: list[str] = []
    data_leaks: list[str] = []
    legal_issues: list[str] = []

    emails = _EMAIL.findall(text)
    if emails:
        personal_data.append(f"Found {len(emails)} email address(es) exposed on the page")

    phones = _PHONE.findall(text)
    if phones:
        personal_data.append(f"Found {len(phones)} phone number(s) visible on the page")

    if _CREDENTIAL.search(text):
        data_leaks.append("Potential API keys or tokens exposed in page content")

    lower = text.lower()
    if "privacy policy" not in lower and "privacy notice" not in lower:
        legal_issues.append("No visible privacy policy link detected")
    if "cookie" not in lower and "gdpr" not in lower:
        legal_issues.append("No cookie consent or GDPR notice detected")

    total = len(personal_data) + len(data_leaks) + len(legal_issues)
    if data_leaks or total >= 4:
        risk_level = "High"
    elif total >= 2:
        risk_level = "Medium"
    else:
        risk_level = "Low"

    return {
        "risk_level": risk_level,
        "summary": f"Analysis of {domain} found {total} potential issue(s).",
        "personal_data": personal_data or [NO_PERSONAL_DATA],
        "data_leaks": data_leaks or [NO_DATA_LEAKS],
        "legal_issues": legal_issues or [LEGAL_NOTICES_OK],
        "source": "heuristic",
    }
