"""LLM-backed analyzer.

The chat model is chosen by ``settings.analyzer_provider`` and built lazily
so that tests and heuristic-only deployments never import a provider SDK.
"""

from __future__ import annotations

import json
import logging
import os
import re
from typing import Any

from complyscan.analysis.prompts import SYSTEM_PROMPT, build_user_prompt
from complyscan.config import settings
from complyscan.errors import AnalyzerError
from complyscan.scanner.models import ScanBundle

logger = logging.getLogger(__name__)

_FENCE = re.compile(r"^```(?:json)?\s*|\s*```$", re.IGNORECASE)
_JSON_OBJECT = re.compile(r"\{[\s\S]*\}")
_PLACEHOLDER_KEYS = ("", "your_groq_api_key_here")


# ---------------------------------------------------------------------------
# LLM helper
# ---------------------------------------------------------------------------

def is_configured() -> bool:
    """Return ``True`` if the configured provider has what it needs to run."""
    provider = settings.analyzer_provider
    if provider == "groq":
        return settings.groq_api_key.strip() not in _PLACEHOLDER_KEYS
    if provider == "openai":
        return bool(os.environ.get("OPENAI_API_KEY"))
    return provider == "ollama"


def get_chat_model() -> Any:
    """Return a configured LangChain chat model based on ``settings``."""
    provider = settings.analyzer_provider
    if provider == "groq":
        from langchain_groq import ChatGroq

        return ChatGroq(
            model=settings.groq_chat_model,
            api_key=settings.groq_api_key,
            temperature=settings.analyzer_temperature,
            max_tokens=settings.analyzer_max_tokens,
        )

    if provider == "openai":
        from langchain_openai import ChatOpenAI

        return ChatOpenAI(
            model=settings.openai_chat_model,
            temperature=settings.analyzer_temperature,
            max_tokens=settings.analyzer_max_tokens,
        )

    if provider == "ollama":
        from langchain_ollama import ChatOllama

        return ChatOllama(
            model=settings.ollama_chat_model,
            base_url=settings.ollama_base_url,
            temperature=settings.analyzer_temperature,
            format="json",
        )

    raise AnalyzerError(f"Unknown analyzer provider {provider!r}")


# ---------------------------------------------------------------------------
# Response parsing
# ---------------------------------------------------------------------------

def parse_verdict(content: str) -> dict[str, Any]:
    """Parse the model's reply into a dict.

    Markdown code fences are stripped first; if the remainder is not valid
    JSON the outermost ``{...}`` block is tried.

    Raises:
        AnalyzerError: empty reply or no JSON object in it.
    """
    text = (content or "").strip()
    if not text:
        raise AnalyzerError("Empty response from AI")
    text = _FENCE.sub("", text).strip()

    try:
        parsed = json.loads(text)
    except json.JSONDecodeError:
        match = _JSON_OBJECT.search(text)
        if not match:
            raise AnalyzerError("AI response did not contain JSON") from None
        try:
            parsed = json.loads(match.group(0))
        except json.JSONDecodeError as exc:
            raise AnalyzerError(f"AI response was not valid JSON: {exc}") from exc

    if not isinstance(parsed, dict):
        raise AnalyzerError("AI response JSON is not an object")
    return parsed


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

async def analyze_with_llm(bundle: ScanBundle) -> dict[str, Any]:
    """Send *bundle* to the configured chat model and return its verdict.

    The verdict is tagged with ``source`` set to the provider name.

    Raises:
        AnalyzerError: provider not configured, call failed, or bad reply.
    """
    if not is_configured():
        raise AnalyzerError(
            f"Analyzer provider {settings.analyzer_provider!r} is not configured "
            "(missing API key)"
        )

    from langchain_core.messages import HumanMessage, SystemMessage

    messages = [
        SystemMessage(content=SYSTEM_PROMPT),
        HumanMessage(content=build_user_prompt(bundle)),
    ]

    llm = get_chat_model()
    logger.info("[analyzer] Sending %s to %s …", bundle.domain, settings.analyzer_provider)
    try:
        response = await llm.ainvoke(messages)
    except Exception as exc:  # noqa: BLE001
        raise AnalyzerError(f"{settings.analyzer_provider} API error: {exc}") from exc

    content = response.content if hasattr(response, "content") else str(response)
    verdict = parse_verdict(content if isinstance(content, str) else str(content))
    verdict["source"] = settings.analyzer_provider
    return verdict
