"""
Endpoint resolution for the analysis API.

Base URL discovery, first non-blank source wins:
  1) explicit override passed for this call
  2) process-wide runtime override (speakmate.config.runtime)
  3) SPEAKMATE_API_BASE_URL from the environment / .env

None means no backend is configured and the caller should use stub mode.
"""

from __future__ import annotations

from speakmate.config.env import get_env_base_url
from speakmate.config.runtime import RuntimeConfig, runtime_config


def trim_trailing_slash(url: str) -> str:
    """Strip exactly one trailing '/'."""
    return url[:-1] if url.endswith("/") else url


def resolve_base_url(
    override: str | None = None,
    config: RuntimeConfig = runtime_config,
) -> str | None:
    for candidate in (override, config.get_base_url(), get_env_base_url()):
        if candidate and candidate.strip():
            return trim_trailing_slash(candidate)
    return None


def build_url(base_url: str, path: str) -> str:
    """Join base URL and endpoint path, adding the leading '/' when missing."""
    return f"{base_url}{path if path.startswith('/') else '/' + path}"
