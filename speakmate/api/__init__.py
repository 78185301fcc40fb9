"""
Analysis API package.

Stateless pieces of one analysis call: response contract, endpoint
resolution, cancellation, HTTP transport, stub responses, and the client
that sequences them.
"""

from speakmate.api.cancellation import CancellationSource, CancellationToken, compose_cancellation
from speakmate.api.client import AnalyzeClient
from speakmate.api.endpoint import resolve_base_url
from speakmate.api.models import AnalyzeOptions, AnalyzeRequest
from speakmate.api.schema import (
    AnalyzeResponse,
    Assets,
    Feedback,
    Scores,
    make_empty_response,
    parse_response,
    try_validate_response,
    validate_response,
)
from speakmate.api.stub import make_stub
from speakmate.api.transport import Transport

__all__ = [
    "AnalyzeClient",
    "AnalyzeOptions",
    "AnalyzeRequest",
    "AnalyzeResponse",
    "Assets",
    "CancellationSource",
    "CancellationToken",
    "Feedback",
    "Scores",
    "Transport",
    "compose_cancellation",
    "make_empty_response",
    "make_stub",
    "parse_response",
    "resolve_base_url",
    "try_validate_response",
    "validate_response",
]
