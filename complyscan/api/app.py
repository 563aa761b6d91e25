"""FastAPI application factory.

Routers
-------
All endpoint groups are mounted under ``/api``:

    /api/health — liveness and analyzer configuration
    /api/scan   — run a compliance scan for a domain

Errors
------
Every :class:`~complyscan.errors.ScanError` is rendered as
``{"error": <code>, "message": <text>}``; unexpected exceptions become a
generic 500 with no internal detail.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from complyscan import __version__
from complyscan.api.routers import health as health_router
from complyscan.api.routers import scan as scan_router
from complyscan.errors import InputError, ScanError, ScanTimeoutError
from complyscan.logging_setup import configure_logging

logger = logging.getLogger(__name__)


def _status_for(exc: ScanError) -> int:
    if isinstance(exc, InputError):
        return 400
    if isinstance(exc, ScanTimeoutError):
        return 504
    return 500


async def _scan_error_handler(request: Request, exc: ScanError) -> JSONResponse:
    logger.warning("[api] %s %s failed: %s (%s)", request.method, request.url.path, exc.message, exc.code)
    return JSONResponse(status_code=_status_for(exc), content=exc.to_dict())


async def _unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("[api] %s %s crashed", request.method, request.url.path)
    return JSONResponse(
        status_code=500,
        content={
            "error": "scan_failed",
            "message": "An error occurred while scanning the domain",
        },
    )


def create_app() -> FastAPI:
    """Return a fully-configured FastAPI application instance."""
    configure_logging()
    app = FastAPI(
        title="ComplyScan API",
        description=(
            "Fetches a website's homepage and legal pages, extracts cookie, "
            "tracking and copyright signals, and returns a privacy / legal "
            "compliance assessment."
        ),
        version=__version__,
    )

    # Allow browser frontends on any origin (tighten for production).
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(ScanError, _scan_error_handler)
    app.add_exception_handler(Exception, _unexpected_error_handler)

    app.include_router(health_router.router, prefix="/api/health", tags=["health"])
    app.include_router(scan_router.router, prefix="/api/scan", tags=["scan"])

    return app


# Module-level instance used by uvicorn:
#   uvicorn complyscan.api.app:app --reload
app = create_app()
