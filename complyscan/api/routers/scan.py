"""Scan endpoint.

Routes
------
POST /api/scan    Body: {"domain": "example.com", "siteOptions": {...}}

Failures are returned as ``{"error": <code>, "message": <text>}`` by the
``ScanError`` handler registered in :func:`complyscan.api.app.create_app`.
"""

from __future__ import annotations

from typing import Any, Optional

from fastapi import APIRouter
from pydantic import BaseModel

from complyscan.scanner.orchestrator import scan_domain

router = APIRouter()


# ---------------------------------------------------------------------------
# Schemas
# ---------------------------------------------------------------------------

class SiteOptionsBody(BaseModel):
    hasPayments: Optional[bool] = None
    collectsPersonalData: Optional[bool] = None
    usesTracking: Optional[bool] = None
    hasUserAccounts: Optional[bool] = None
    targetsEU: Optional[bool] = None
    targetsUSA: Optional[bool] = None
    hasChildrenContent: Optional[bool] = None


class ScanRequest(BaseModel):
    # Optional so a missing domain yields our own 400, not a 422.
    domain: Optional[str] = None
    siteOptions: Optional[SiteOptionsBody] = None


# ---------------------------------------------------------------------------
# Endpoint
# ---------------------------------------------------------------------------

@router.post("")
async def scan(body: ScanRequest) -> dict[str, Any]:
    """Scan a domain and return the evidence bundle plus the analyzer verdict."""
    options = body.siteOptions.model_dump(exclude_none=True) if body.siteOptions else None
    return await scan_domain(body.domain, options)
