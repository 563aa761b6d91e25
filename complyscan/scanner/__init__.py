"""Scan pipeline — homepage and legal-page resolution, bundle assembly.

The orchestrator lives in :mod:`complyscan.scanner.orchestrator` and is not
re-exported here because it depends on :mod:`complyscan.analysis`, which in
turn imports the bundle models from this package.
"""

from complyscan.scanner.homepage import HomepageResult, candidate_urls, resolve_homepage
from complyscan.scanner.legal_pages import (
    DiscoveryMethod,
    LegalPageEntry,
    resolve_legal_pages,
)
from complyscan.scanner.models import ScanBundle, SiteOptions

__all__ = [
    "candidate_urls",
    "resolve_homepage",
    "resolve_legal_pages",
    "HomepageResult",
    "LegalPageEntry",
    "DiscoveryMethod",
    "ScanBundle",
    "SiteOptions",
]
