"""
Process-wide runtime override for the analysis base URL.

Lets an operator point the client at a backend without restarting or
rebuilding (e.g. from a debug console). The override sits between the
per-call option and the environment in resolution priority.
"""

from __future__ import annotations


class RuntimeConfig:
    """Holds the administrative base URL override; absent until set."""

    def __init__(self) -> None:
        self._base_url: str | None = None

    def set_base_url(self, url: str | None) -> None:
        self._base_url = url

    def get_base_url(self) -> str | None:
        return self._base_url

    def clear(self) -> None:
        self._base_url = None


# Default instance used when callers do not pass their own.
runtime_config = RuntimeConfig()


def set_runtime_base_url(url: str | None, config: RuntimeConfig = runtime_config) -> None:
    """Set (or with None, remove) the runtime base URL override."""
    config.set_base_url(url)


def get_runtime_base_url(config: RuntimeConfig = runtime_config) -> str | None:
    return config.get_base_url()


def clear_runtime_base_url(config: RuntimeConfig = runtime_config) -> None:
    config.clear()
