"""
Pytest fixtures for Speakmate tests. HTTP is faked with httpx.MockTransport;
environment and runtime base URL override are reset for every test.
"""

from __future__ import annotations

import copy
from typing import Any, Callable

import httpx
import pytest

BASE_URL = "http://api.test"

VALID_PAYLOAD: dict[str, Any] = {
    "scores": {
        "vocabulary": 72,
        "filler_control": 64.5,
        "clarity_structure": 80,
        "idea_quality": 55,
        "pacing": 90,
        "overall": 70.25,
    },
    "feedback": {
        "vocabulary": "Varied word choice.",
        "filler": "Several 'um's in the opening.",
        "clarity": "Clear three-part structure.",
        "idea": "Main point lands late.",
        "actions": ["State the thesis first.", "Pause instead of filler words."],
    },
    "assets": {"transcript_key": "uploads/abc.json"},
}


def make_payload(transcript_key: str = "uploads/abc.json", **score_overrides: Any) -> dict[str, Any]:
    """Deep copy of VALID_PAYLOAD with the transcript key and selected scores replaced."""
    payload = copy.deepcopy(VALID_PAYLOAD)
    payload["assets"]["transcript_key"] = transcript_key
    payload["scores"].update(score_overrides)
    return payload


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """No base URL from env, default timeout/path, empty global runtime override."""
    from speakmate.config.runtime import runtime_config

    for name in ("SPEAKMATE_API_BASE_URL", "SPEAKMATE_TIMEOUT_MS", "SPEAKMATE_ANALYZE_PATH"):
        monkeypatch.delenv(name, raising=False)
    runtime_config.clear()
    yield
    runtime_config.clear()


@pytest.fixture
def runtime():
    """Isolated RuntimeConfig (not the process-wide default)."""
    from speakmate.config.runtime import RuntimeConfig

    return RuntimeConfig()


@pytest.fixture
def make_client(runtime) -> Callable[..., Any]:
    """
    Factory: AnalyzeClient whose HTTP goes to ``handler`` (sync or async
    httpx.MockTransport handler). base_url is set as the runtime override.
    """
    from speakmate.api.client import AnalyzeClient
    from speakmate.api.transport import Transport

    def _make(handler, base_url: str | None = BASE_URL):
        if base_url is not None:
            runtime.set_base_url(base_url)
        http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        return AnalyzeClient(transport=Transport(http), config=runtime)

    return _make
