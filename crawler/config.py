"""Centralised settings for the crawler.

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


@dataclass
class Settings:
    # ------------------------------------------------------------------
    # HTTP fetch
    # ------------------------------------------------------------------
    request_timeout: float = field(
        default_factory=lambda: float(os.environ.get("REQUEST_TIMEOUT", "5.0"))
    )
    user_agent: str = field(
        default_factory=lambda: os.environ.get(
            "CRAWLER_USER_AGENT", "Mozilla/5.0 (compatible; crawler/0.1)"
        )
    )

    # ------------------------------------------------------------------
    # CLI
    # ------------------------------------------------------------------
    default_url: str = field(
        default_factory=lambda: os.environ.get("CRAWLER_DEFAULT_URL", "https://example.com")
    )
    preview_chars: int = field(
        default_factory=lambda: int(os.environ.get("PREVIEW_CHARS", "100"))
    )


# Module-level singleton, import this everywhere:
#   from crawler.config import settings
settings = Settings()
