"""
Request-side models for the analysis API.

AnalyzeRequest is the wire payload (pydantic, validated at construction).
AnalyzeOptions are per-call client options; every field is optional.
merge_options() layers them field by field, and resolve_options() fills in
environment defaults for any field no layer set.
"""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from speakmate.api.cancellation import CancellationToken
from speakmate.config.env import get_analyze_path, get_default_timeout_ms
from speakmate.core.exceptions import ConfigurationError


class AnalyzeRequest(BaseModel):
    """POST /analyze body."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    transcript_key: str = Field(..., min_length=1, description="Reference to the uploaded transcript blob or key")
    language: str | None = Field(default=None, description="Optional BCP-47 language hint, e.g. en-US")

    def to_body(self) -> dict[str, Any]:
        """JSON body; language omitted when not set."""
        return self.model_dump(exclude_none=True)


@dataclass(frozen=True)
class AnalyzeOptions:
    """
    Per-call client options. None means "not specified" and never overrides.

    Attributes:
        base_url: Override API base URL (e.g. https://api.example.com).
        path: Endpoint path; default /analyze.
        timeout_ms: Request timeout in milliseconds; default 30000.
        cancellation_signal: External token merged with the internal timeout.
        dry_run: When True, return a stub without resolving or calling the backend.
    """

    base_url: str | None = None
    path: str | None = None
    timeout_ms: int | None = None
    cancellation_signal: CancellationToken | None = None
    dry_run: bool | None = None

    def __post_init__(self) -> None:
        timeout_ms = self.timeout_ms
        if timeout_ms is None:
            return
        if isinstance(timeout_ms, bool) or not isinstance(timeout_ms, int) or timeout_ms <= 0:
            raise ConfigurationError(f"timeout_ms must be a positive integer, got {timeout_ms!r}")


def merge_options(*layers: AnalyzeOptions | None) -> AnalyzeOptions:
    """Layer options left to right; a later non-None field wins."""
    merged: dict[str, Any] = {}
    for layer in layers:
        if layer is None:
            continue
        for f in fields(layer):
            value = getattr(layer, f.name)
            if value is not None:
                merged[f.name] = value
    return AnalyzeOptions(**merged)


def resolve_options(*layers: AnalyzeOptions | None) -> AnalyzeOptions:
    """
    Merge the layers, then fill path, timeout_ms and dry_run from the
    environment only where no layer set them.

    Raises:
        ConfigurationError: SPEAKMATE_TIMEOUT_MS is malformed and no layer
            supplies timeout_ms.
    """
    merged = merge_options(*layers)
    return replace(
        merged,
        path=merged.path if merged.path is not None else get_analyze_path(),
        timeout_ms=merged.timeout_ms if merged.timeout_ms is not None else get_default_timeout_ms(),
        dry_run=bool(merged.dry_run),
    )
