"""
Configuration management for Speakmate.

Loads settings from environment variables and an optional .env file, and
holds the process-wide runtime base URL override.
"""

from speakmate.config.env import (  # noqa: F401
    get_analyze_path,
    get_default_timeout_ms,
    get_env_base_url,
    load_speakmate_env,
)
from speakmate.config.runtime import (  # noqa: F401
    RuntimeConfig,
    clear_runtime_base_url,
    get_runtime_base_url,
    runtime_config,
    set_runtime_base_url,
)

__all__ = [
    "RuntimeConfig",
    "clear_runtime_base_url",
    "get_analyze_path",
    "get_default_timeout_ms",
    "get_env_base_url",
    "get_runtime_base_url",
    "load_speakmate_env",
    "runtime_config",
    "set_runtime_base_url",
]
