"""Prompt templates for the compliance analyzer."""

from __future__ import annotations

from complyscan.scanner.models import ScanBundle

# Each legal page is truncated to this many characters inside the prompt.
LEGAL_TEXT_PROMPT_LIMIT = 3000

SYSTEM_PROMPT = """\
You are a legal compliance and data privacy expert analyst. Analyze websites for GDPR, CCPA, and general legal compliance.

IMPORTANT: The user will provide "WEBSITE CONTEXT" that describes what features their website has. Use this to adjust your analysis:
- If the site does NOT accept payments (hasPayments: false), do NOT penalize for missing refund/return policies
- If the site does NOT collect personal data (collectsPersonalData: false), be lenient on privacy policy requirements
- If the site does NOT use tracking (usesTracking: false), do NOT penalize for missing cookie consent/policy
- If the site does NOT have user accounts (hasUserAccounts: false), do NOT require account-related policies
- If the site does NOT target EU (targetsEU: false), GDPR compliance is NOT required
- If the site does NOT target USA (targetsUSA: false), CCPA compliance is NOT required
- If children cannot use the site (hasChildrenContent: false), COPPA compliance is NOT required

You must evaluate based on what actually applies:

1. SECURITY ANALYSIS:
   - Personal data exposure (emails, phones, IDs, names, addresses visible on pages)
   - Potential data leaks (API keys, passwords, internal data, debug info)
   - Third-party script risks

2. LEGAL COMPLIANCE ANALYSIS (adjusted based on website context):
   - Presence and completeness of legal pages (Privacy Policy, Terms of Service, Cookie Policy)
   - GDPR compliance (only if targeting EU)
   - CCPA compliance (only if targeting USA)
   - Cookie compliance (only if using tracking/cookies)
   - E-commerce compliance (only if accepting payments)
   - Copyright notice (a (c) symbol, "All rights reserved", or an equivalent phrase in the footer is enough; it does NOT need a separate page)

3. LEGAL PAGE QUALITY CHECK (for each found legal page):
   - Privacy Policy: data collection practices, data sharing, retention periods, user rights, contact info
   - Terms of Service: acceptance terms, user obligations, liability limits, dispute resolution, termination
   - Cookie Policy: types of cookies, purposes, third-party cookies, how to manage cookies

Respond ONLY with valid JSON in this exact format:
{
  "security": {
    "risk_level": "Low|Medium|High",
    "score": 0-100,
    "personal_data_exposure": ["list of issues"],
    "data_leaks": ["list of issues"],
    "third_party_risks": ["list of issues"],
    "recommendations": ["list of security recommendations"]
  },
  "legal": {
    "compliance_level": "Low|Medium|High",
    "score": 0-100,
    "pages_found": {"privacy": true/false, "terms": true/false, "cookies": true/false, "gdpr": true/false},
    "missing_pages": ["list of required but missing pages"],
    "gdpr_issues": ["list of GDPR compliance issues"],
    "ccpa_issues": ["list of CCPA compliance issues"],
    "cookie_compliance": {
      "has_banner": true/false,
      "has_consent": true/false,
      "issues": ["list of cookie compliance issues"]
    },
    "privacy_policy_issues": ["list of missing/problematic elements in privacy policy"],
    "terms_issues": ["list of missing/problematic elements in terms of service"],
    "recommendations": ["list of legal compliance recommendations"]
  },
  "tracking": {
    "analytics_tools": ["list"],
    "advertising_networks": ["list"],
    "data_collection_points": ["list"],
    "concerns": ["privacy concerns about tracking"]
  },
  "summary": "Overall compliance summary"
}"""


def _yes_no(value: bool) -> str:
    return "Yes" if value else "No"


def build_user_prompt(bundle: ScanBundle) -> str:
    """Render the bundle as the user message sent to the model."""
    options = bundle.site_options

    legal_summary = ", ".join(
        f"{category.value}: {'Found' if entry.found else 'Not Found'}"
        for category, entry in bundle.legal_pages.items()
    )

    tracking_items = (
        [f"Analytics: {name}" for name in bundle.tracking.analytics]
        + [f"Advertising: {name}" for name in bundle.tracking.advertising]
        + [f"Social: {name}" for name in bundle.tracking.social_media]
    )
    tracking_summary = ", ".join(tracking_items) or "None detected"

    legal_texts = "\n\n".join(
        f"=== {category.value.upper()} PAGE ===\n{entry.text[:LEGAL_TEXT_PROMPT_LIMIT]}"
        for category, entry in bundle.legal_pages.items()
        if entry.found and entry.text
    )

    copyright_line = (
        "; ".join(bundle.copyright.details) if bundle.copyright.details else "None detected"
    )

    website_context = (
        "WEBSITE CONTEXT (use this to adjust compliance requirements):\n"
        f"- Accepts payments / E-commerce: {_yes_no(options.has_payments)}\n"
        f"- Collects personal data: {_yes_no(options.collects_personal_data)}\n"
        f"- Uses analytics/tracking: {_yes_no(options.uses_tracking)}\n"
        f"- Has user accounts: {_yes_no(options.has_user_accounts)}\n"
        f"- Targets EU visitors (GDPR): {_yes_no(options.targets_eu)}\n"
        f"- Targets US visitors (CCPA): {_yes_no(options.targets_usa)}\n"
        f"- Children may use site (COPPA): {_yes_no(options.has_children_content)}"
    )

    legal_block = (
        f"\nLEGAL PAGE CONTENTS:\n{legal_texts}" if legal_texts else "\nNo legal pages found to analyze."
    )

    return (
        "Analyze this website for legal compliance and security:\n\n"
        f"DOMAIN: {bundle.domain}\n"
        f"{website_context}\n\n"
        f"HOMEPAGE CONTENT:\n{bundle.text}\n\n"
        f"LEGAL PAGES STATUS: {legal_summary}\n\n"
        "COOKIE INFO:\n"
        f"- Cookie Banner: {_yes_no(bundle.cookies.has_cookie_banner)}\n"
        f"- Consent Mechanism: {bundle.cookies.consent_platform or 'None detected'}\n"
        f"- Cookie Types Mentioned: {', '.join(bundle.cookies.cookie_types) or 'None'}\n\n"
        f"TRACKING DETECTED: {tracking_summary}\n"
        f"DATA COLLECTION POINTS: {', '.join(bundle.tracking.data_collection) or 'None detected'}\n"
        f"COPYRIGHT: {copyright_line}\n"
        f"{legal_block}"
    )
