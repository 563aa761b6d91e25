"""Centralised settings for the ComplyScan pipeline.

All runtime configuration is resolved here in one place.  Values can be
overridden via environment variables or a `.env` file in the project root
(loaded automatically when this module is imported).
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

# Load .env from the project root (one level up from this package)
_env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(_env_path, override=False)


def _env_bool(name: str, default: str) -> bool:
    return os.environ.get(name, default).strip().lower() in ("1", "true", "yes", "on")


def _env_list(name: str, default: str) -> tuple[str, ...]:
    raw = os.environ.get(name, default)
    return tuple(part.strip().lower() for part in raw.split(",") if part.strip())


@dataclass
class Settings:
    # ------------------------------------------------------------------
    # Homepage fetching
    # ------------------------------------------------------------------
    homepage_timeout: float = field(
        default_factory=lambda: float(os.environ.get("HOMEPAGE_TIMEOUT", "20.0"))
    )
    homepage_max_redirects: int = field(
        default_factory=lambda: int(os.environ.get("HOMEPAGE_MAX_REDIRECTS", "10"))
    )

    # ------------------------------------------------------------------
    # Legal page fetching
    # ------------------------------------------------------------------
    legal_page_timeout: float = field(
        default_factory=lambda: float(os.environ.get("LEGAL_PAGE_TIMEOUT", "10.0"))
    )
    legal_page_max_redirects: int = field(
        default_factory=lambda: int(os.environ.get("LEGAL_PAGE_MAX_REDIRECTS", "5"))
    )

    # ------------------------------------------------------------------
    # Text extraction
    # ------------------------------------------------------------------
    max_text_length: int = field(
        default_factory=lambda: int(os.environ.get("MAX_TEXT_LENGTH", "8000"))
    )
    max_legal_page_length: int = field(
        default_factory=lambda: int(os.environ.get("MAX_LEGAL_PAGE_LENGTH", "15000"))
    )
    # Unicode script blocks preserved by the text cleaner on top of ASCII.
    # Names must be keys of ``complyscan.scraper.patterns.SCRIPT_RANGES``.
    extra_scripts: tuple[str, ...] = field(
        default_factory=lambda: _env_list("EXTRA_SCRIPTS", "hebrew")
    )

    # ------------------------------------------------------------------
    # Analyzer
    # ------------------------------------------------------------------
    analyzer_provider: str = field(
        default_factory=lambda: os.environ.get("ANALYZER_PROVIDER", "groq").lower()
    )
    # When True, analyzer failures are replaced by the local heuristic.
    analyzer_fallback: bool = field(
        default_factory=lambda: _env_bool("ANALYZER_FALLBACK", "true")
    )
    groq_api_key: str = field(
        default_factory=lambda: os.environ.get("GROQ_API_KEY", "")
    )
    groq_chat_model: str = field(
        default_factory=lambda: os.environ.get("GROQ_CHAT_MODEL", "llama-3.3-70b-versatile")
    )
    openai_chat_model: str = field(
        default_factory=lambda: os.environ.get("OPENAI_CHAT_MODEL", "gpt-4o-mini")
    )
    ollama_base_url: str = field(
        default_factory=lambda: os.environ.get("OLLAMA_BASE_URL", "http://localhost:11434")
    )
    ollama_chat_model: str = field(
        default_factory=lambda: os.environ.get("OLLAMA_CHAT_MODEL", "llama3.1:8b")
    )
    analyzer_temperature: float = field(
        default_factory=lambda: float(os.environ.get("ANALYZER_TEMPERATURE", "0.3"))
    )
    analyzer_max_tokens: int = field(
        default_factory=lambda: int(os.environ.get("ANALYZER_MAX_TOKENS", "2000"))
    )

    # ------------------------------------------------------------------
    # Scan
    # ------------------------------------------------------------------
    # Overall wall-clock budget for one scan in seconds; 0 disables it.
    scan_deadline: float = field(
        default_factory=lambda: float(os.environ.get("SCAN_DEADLINE", "0"))
    )
    log_level: str = field(
        default_factory=lambda: os.environ.get("LOG_LEVEL", "INFO").upper()
    )


# Module-level singleton; import this everywhere:
#   from complyscan.config import settings
settings = Settings()
