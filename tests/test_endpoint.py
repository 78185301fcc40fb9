"""
Tests for base URL resolution (override > runtime > env) and URL building.
"""

from __future__ import annotations

from speakmate.api.endpoint import build_url, resolve_base_url, trim_trailing_slash
from speakmate.config.runtime import (
    clear_runtime_base_url,
    get_runtime_base_url,
    runtime_config,
    set_runtime_base_url,
)


def test_nothing_configured_returns_none(runtime):
    assert resolve_base_url(None, runtime) is None


def test_explicit_override_wins(runtime, monkeypatch):
    monkeypatch.setenv("SPEAKMATE_API_BASE_URL", "http://env.test")
    runtime.set_base_url("http://runtime.test")
    assert resolve_base_url("http://override.test/", runtime) == "http://override.test"


def test_runtime_override_beats_env(runtime, monkeypatch):
    monkeypatch.setenv("SPEAKMATE_API_BASE_URL", "http://env.test")
    runtime.set_base_url("http://runtime.test/")
    assert resolve_base_url(None, runtime) == "http://runtime.test"


def test_env_used_last(runtime, monkeypatch):
    monkeypatch.setenv("SPEAKMATE_API_BASE_URL", "http://env.test/")
    assert resolve_base_url(None, runtime) == "http://env.test"


def test_blank_values_are_skipped(runtime, monkeypatch):
    monkeypatch.setenv("SPEAKMATE_API_BASE_URL", "   ")
    runtime.set_base_url("")
    assert resolve_base_url("  ", runtime) is None
    monkeypatch.setenv("SPEAKMATE_API_BASE_URL", "http://env.test")
    assert resolve_base_url("  ", runtime) == "http://env.test"


def test_exactly_one_trailing_slash_stripped():
    assert trim_trailing_slash("http://api.test//") == "http://api.test/"
    assert trim_trailing_slash("http://api.test") == "http://api.test"


def test_module_level_setter_and_getter():
    """The administrative entry points act on the process-wide default."""
    assert get_runtime_base_url() is None
    set_runtime_base_url("http://admin.test/")
    assert get_runtime_base_url() == "http://admin.test/"
    assert resolve_base_url() == "http://admin.test"
    clear_runtime_base_url()
    assert runtime_config.get_base_url() is None
    assert resolve_base_url() is None


def test_runtime_configs_are_isolated(runtime):
    runtime.set_base_url("http://isolated.test")
    assert get_runtime_base_url() is None
    assert resolve_base_url(None, runtime) == "http://isolated.test"


def test_build_url_adds_leading_slash():
    assert build_url("http://api.test", "/analyze") == "http://api.test/analyze"
    assert build_url("http://api.test", "v2/analyze") == "http://api.test/v2/analyze"
