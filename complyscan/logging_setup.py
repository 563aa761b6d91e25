"""Process-wide logging configuration for the CLI and the API server."""

from __future__ import annotations

import logging
from typing import Optional

from complyscan.config import settings

_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"


def configure_logging(level: Optional[str] = None) -> None:
    """Attach a single stream handler to the ``complyscan`` logger.

    Safe to call more than once; later calls only change the level.
    """
    logger = logging.getLogger("complyscan")
    logger.setLevel((level or settings.log_level).upper())
    if not any(getattr(h, "_complyscan", False) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_FORMAT))
        handler._complyscan = True  # type: ignore[attr-defined]
        logger.addHandler(handler)
    # httpx logs every request at INFO; keep it quiet unless debugging.
    logging.getLogger("httpx").setLevel(
        logging.DEBUG if logger.level <= logging.DEBUG else logging.WARNING
    )
