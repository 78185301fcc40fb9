"""
Environment variable loading and validation for Speakmate.

- SPEAKMATE_API_BASE_URL: analysis backend base URL (absent -> stub mode)
- SPEAKMATE_TIMEOUT_MS: default per-call timeout in milliseconds (default: 30000)
- SPEAKMATE_ANALYZE_PATH: endpoint path (default: /analyze)
- Loads .env from project root when available (never overrides real env vars).
"""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

from speakmate.core.exceptions import ConfigurationError

# Project root: config is speakmate/config/, root is 2 levels up
_CONFIG_DIR = Path(__file__).resolve().parent
_PACKAGE_DIR = _CONFIG_DIR.parent
_ROOT = _PACKAGE_DIR.parent
_ENV_PATH = _ROOT / ".env"

BASE_URL_ENV = "SPEAKMATE_API_BASE_URL"
TIMEOUT_ENV = "SPEAKMATE_TIMEOUT_MS"
PATH_ENV = "SPEAKMATE_ANALYZE_PATH"

DEFAULT_TIMEOUT_MS = 30_000
DEFAULT_ANALYZE_PATH = "/analyze"

_env_loaded = False


def load_speakmate_env() -> None:
    """Load .env from project root once."""
    global _env_loaded
    if _env_loaded:
        return
    _env_loaded = True
    if _ENV_PATH.is_file():
        load_dotenv(_ENV_PATH, override=False)


def get_env_base_url() -> str | None:
    """Return SPEAKMATE_API_BASE_URL as set (not normalized), or None when unset/blank."""
    load_speakmate_env()
    raw = os.getenv(BASE_URL_ENV) or ""
    return raw if raw.strip() else None


def get_default_timeout_ms() -> int:
    """
    Return SPEAKMATE_TIMEOUT_MS as a positive int.
    Raises ConfigurationError when set but not a positive integer.
    """
    load_speakmate_env()
    raw = (os.getenv(TIMEOUT_ENV) or "").strip()
    if not raw:
        return DEFAULT_TIMEOUT_MS
    try:
        value = int(raw)
    except ValueError:
        raise ConfigurationError(f"{TIMEOUT_ENV} must be an integer, got {raw!r}") from None
    if value <= 0:
        raise ConfigurationError(f"{TIMEOUT_ENV} must be positive, got {value}")
    return value


def get_analyze_path() -> str:
    """Return SPEAKMATE_ANALYZE_PATH, default /analyze."""
    load_speakmate_env()
    raw = (os.getenv(PATH_ENV) or "").strip()
    return raw or DEFAULT_ANALYZE_PATH
