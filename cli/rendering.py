"""Utilities for rendering scan results in the CLI."""

from __future__ import annotations

from typing import Any, Dict, List

_RISK_ICONS = {"Low": "🟢", "Medium": "🟡", "High": "🔴"}


def _bullet_list(items: List[str], indent: str = "    ") -> List[str]:
    if not items:
        return [f"{indent}- none"]
    return [f"{indent}- {item}" for item in items]


def render_signals(result: Dict[str, Any]) -> str:
    """Render the cookie / tracking / copyright / legal-page sections."""
    lines: List[str] = []

    cookies = result.get("cookieInfo", {})
    lines.append("Cookies:")
    lines.append(f"    banner   : {'yes' if cookies.get('hasCookieBanner') else 'no'}")
    lines.append(f"    consent  : {'yes' if cookies.get('hasCookieConsent') else 'no'}")
    lines.append(f"    platform : {cookies.get('consentMechanism') or 'none detected'}")
    lines.append(f"    types    : {', '.join(cookies.get('cookieTypes', [])) or 'none'}")

    tracking = result.get("trackingInfo", {})
    lines.append("Tracking:")
    for label, key in (
        ("analytics", "analytics"),
        ("advertising", "advertising"),
        ("social", "socialMedia"),
        ("data collection", "dataCollection"),
    ):
        lines.append(f"  {label}:")
        lines.extend(_bullet_list(tracking.get(key, [])))

    copyright_info = result.get("copyrightInfo", {})
    lines.append("Copyright:")
    lines.extend(_bullet_list(copyright_info.get("details", [])))

    legal = result.get("legalPages", {})
    if legal:
        lines.append("Legal pages:")
        for category, entry in legal.items():
            mark = "✅" if entry.get("found") else "❌"
            where = entry.get("url") or ""
            lines.append(f"    {mark} {category:<11} {where}".rstrip())

    return "\n".join(lines)


def render_analysis(analysis: Dict[str, Any]) -> str:
    """Render an analyzer verdict (LLM or heuristic shape)."""
    lines: List[str] = [f"Analysis (source: {analysis.get('source', 'unknown')})"]
    if analysis.get("fallbackReason"):
        lines.append(f"  fallback reason: {analysis['fallbackReason']}")

    if "security" in analysis or "legal" in analysis:
        security = analysis.get("security", {})
        legal = analysis.get("legal", {})
        risk = security.get("risk_level", "?")
        lines.append(f"  security risk : {_RISK_ICONS.get(risk, '')} {risk} ({security.get('score', '?')}/100)")
        lines.append(
            f"  compliance    : {legal.get('compliance_level', '?')} ({legal.get('score', '?')}/100)"
        )
        missing = legal.get("missing_pages", [])
        if missing:
            lines.append("  missing pages:")
            lines.extend(_bullet_list(missing))
        recommendations = list(security.get("recommendations", [])) + list(
            legal.get("recommendations", [])
        )
        if recommendations:
            lines.append("  recommendations:")
            lines.extend(_bullet_list(recommendations))
    else:
        risk = analysis.get("risk_level", "?")
        lines.append(f"  risk level : {_RISK_ICONS.get(risk, '')} {risk}")
        for label, key in (
            ("personal data", "personal_data"),
            ("data leaks", "data_leaks"),
            ("legal issues", "legal_issues"),
        ):
            lines.append(f"  {label}:")
            lines.extend(_bullet_list(analysis.get(key, [])))

    if analysis.get("summary"):
        lines.append(f"  summary: {analysis['summary']}")
    return "\n".join(lines)
