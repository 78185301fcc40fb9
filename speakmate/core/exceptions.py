"""
Application-level exceptions.

- SchemaError: response payload violates the analysis contract (carries field path).
- SchemaValidationFailed: session-level wrapper surfaced to consumers.
- ApiHTTPError: non-2xx response, with status and a short body snippet.
- RequestAborted: the call's cancellation token fired (cancel, supersede, timeout).
- ConfigurationError: malformed environment value or call option.
"""

from __future__ import annotations

from typing import Sequence

TIMEOUT_REASON_PREFIX = "Request timed out after "


class SpeakmateError(Exception):
    """Base class for all speakmate errors."""


class SchemaError(SpeakmateError):
    """Structural contract violation at ``path`` (e.g. ["scores", "pacing"])."""

    def __init__(self, message: str, path: Sequence[str] = ()) -> None:
        self.message = message
        self.path: list[str] = list(path)
        super().__init__(f"{message} @ {'.'.join(self.path)}" if self.path else message)

    @property
    def dotted_path(self) -> str:
        return ".".join(self.path)


class SchemaValidationFailed(SpeakmateError):
    """Raised in place of SchemaError once it reaches the session boundary."""

    def __init__(self, cause: SchemaError) -> None:
        self.path = list(cause.path)
        super().__init__(f"Schema validation failed: {cause}")


class ApiHTTPError(SpeakmateError):
    """Non-success HTTP status from the analysis endpoint."""

    def __init__(self, status: int, status_text: str, snippet: str = "") -> None:
        self.status = status
        self.status_text = status_text
        self.snippet = snippet
        message = f"HTTP {status} {status_text}".rstrip()
        if snippet:
            message = f"{message}: {snippet}"
        super().__init__(message)


class RequestAborted(SpeakmateError):
    """The derived cancellation token fired before the call completed."""

    def __init__(self, reason: str | None) -> None:
        self.reason = reason or "aborted"
        super().__init__(self.reason)

    @property
    def timed_out(self) -> bool:
        return self.reason.startswith(TIMEOUT_REASON_PREFIX)


class ConfigurationError(SpeakmateError, ValueError):
    """Invalid configuration value (environment variable or call option)."""
