"""Analyzer package — LLM verdicts with an optional heuristic fallback."""

from __future__ import annotations

import logging
from typing import Any

from complyscan.analysis.heuristic import heuristic_analysis
from complyscan.analysis.llm import analyze_with_llm
from complyscan.config import settings
from complyscan.errors import AnalyzerError
from complyscan.scanner.models import ScanBundle

logger = logging.getLogger(__name__)

__all__ = ["analyze", "analyze_with_llm", "heuristic_analysis"]


async def analyze(bundle: ScanBundle) -> dict[str, Any]:
    """Return a verdict for *bundle* according to the configured policy.

    * provider ``heuristic`` — heuristic only.
    * otherwise the LLM; on :class:`AnalyzerError` the heuristic result is
      returned (tagged with ``fallbackReason``) when
      ``settings.analyzer_fallback`` is on, else the error propagates.
    """
    if settings.analyzer_provider == "heuristic":
        return heuristic_analysis(bundle.text, bundle.domain)

    try:
        return await analyze_with_llm(bundle)
    except AnalyzerError as exc:
        if not settings.analyzer_fallback:
            raise
        logger.warning("[analyzer] Falling back to heuristic analysis: %s", exc.message)
        verdict = heuristic_analysis(bundle.text, bundle.domain)
        verdict["fallbackReason"] = exc.message
        return verdict
