"""Health endpoint.

Routes
------
GET /api/health
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from fastapi import APIRouter

from complyscan import __version__
from complyscan.analysis.llm import is_configured
from complyscan.config import settings

router = APIRouter()


@router.get("")
def health() -> dict[str, Any]:
    """Report liveness and which analyzer a scan would use."""
    return {
        "status": "ok",
        "message": "Server is running",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "version": __version__,
        "analyzer": {
            "provider": settings.analyzer_provider,
            "configured": settings.analyzer_provider == "heuristic" or is_configured(),
            "fallback": settings.analyzer_fallback,
        },
    }
