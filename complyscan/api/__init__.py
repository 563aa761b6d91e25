"""FastAPI HTTP layer package.

Public re-export so callers can write::

    from complyscan.api import app

    uvicorn complyscan.api:app --reload
"""

from complyscan.api.app import app

__all__ = ["app"]
