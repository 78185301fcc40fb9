"""
Stub responses for unconfigured or dry-run analysis calls.

Keeps the app usable offline: the stub passes the same contract as a live
response and tells the operator how to point the client at a backend.
"""

from __future__ import annotations

from speakmate.api.models import AnalyzeRequest
from speakmate.api.schema import AnalyzeResponse, Assets, Feedback, make_empty_response
from speakmate.config.env import BASE_URL_ENV

STUB_FEEDBACK = Feedback(
    vocabulary="No server configured. This is a stub response.",
    filler="-",
    clarity="-",
    idea="-",
    actions=(
        f"Set {BASE_URL_ENV} to your backend URL.",
        "Call analyze() again to see live results.",
    ),
)


def make_stub(request: AnalyzeRequest | None) -> AnalyzeResponse:
    """Empty response with guidance feedback and the request's transcript key echoed."""
    base = make_empty_response()
    transcript_key = request.transcript_key if request is not None else ""
    return AnalyzeResponse(
        scores=base.scores,
        feedback=STUB_FEEDBACK,
        assets=Assets(transcript_key=transcript_key or ""),
    )
