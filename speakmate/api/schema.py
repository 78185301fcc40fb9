"""
Analysis API contract — the single source of truth for response shapes.

Contract (frozen):
  - scores:   { vocabulary, filler_control, clarity_structure, idea_quality, pacing, overall } 0–100
  - feedback: { vocabulary, filler, clarity, idea, actions[] }
  - assets:   { transcript_key }
  - AnalyzeResponse: { scores, feedback, assets }

The backend is an untrusted boundary, so validation is structural and fails
fast: the first violation is reported with its field path. Models are built
only from validated input, so an AnalyzeResponse is never partially valid.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from typing import Any, Sequence

from pydantic import BaseModel, ConfigDict, Field

from speakmate.core.exceptions import SchemaError
from speakmate.core.result import Err, Ok, Result

SCORE_MIN = 0
SCORE_MAX = 100

# Exact score keys, in validation order (stable API surface).
SCORE_KEYS: tuple[str, ...] = (
    "vocabulary",
    "filler_control",
    "clarity_structure",
    "idea_quality",
    "pacing",
    "overall",
)

FEEDBACK_TEXT_KEYS: tuple[str, ...] = ("vocabulary", "filler", "clarity", "idea")

_CONTRACT_CONFIG = ConfigDict(frozen=True, strict=True, extra="forbid", allow_inf_nan=False)


# -----------------------------------------------------------------------------
# Models
# -----------------------------------------------------------------------------

class Scores(BaseModel):
    """Six sub-scores, each in [0, 100]."""

    model_config = _CONTRACT_CONFIG

    vocabulary: float = Field(..., ge=SCORE_MIN, le=SCORE_MAX)
    filler_control: float = Field(..., ge=SCORE_MIN, le=SCORE_MAX)
    clarity_structure: float = Field(..., ge=SCORE_MIN, le=SCORE_MAX)
    idea_quality: float = Field(..., ge=SCORE_MIN, le=SCORE_MAX)
    pacing: float = Field(..., ge=SCORE_MIN, le=SCORE_MAX)
    overall: float = Field(..., ge=SCORE_MIN, le=SCORE_MAX)


class Feedback(BaseModel):
    model_config = _CONTRACT_CONFIG

    vocabulary: str
    filler: str
    clarity: str
    idea: str
    actions: tuple[str, ...] = Field(default_factory=tuple, description="Suggested next steps, in order")


class Assets(BaseModel):
    model_config = _CONTRACT_CONFIG

    transcript_key: str = Field(..., description="Storage reference to the full transcript")


class AnalyzeResponse(BaseModel):
    """Validated analysis result handed to callers."""

    model_config = _CONTRACT_CONFIG

    scores: Scores
    feedback: Feedback
    assets: Assets


# -----------------------------------------------------------------------------
# Primitive guards
# -----------------------------------------------------------------------------

def _is_record(value: Any) -> bool:
    """Mapping, not a list and not None."""
    return isinstance(value, Mapping)


def _is_score(value: Any) -> bool:
    # bool is an int subclass; JSON true/false are not scores
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    if isinstance(value, float) and not math.isfinite(value):
        return False
    return SCORE_MIN <= value <= SCORE_MAX


def _is_string_list(value: Any) -> bool:
    return isinstance(value, (list, tuple)) and all(isinstance(v, str) for v in value)


# -----------------------------------------------------------------------------
# Validators
# -----------------------------------------------------------------------------

def validate_scores(data: Any, path: Sequence[str] = ("scores",)) -> Result[Scores]:
    """Validate the scores object. Extra keys are ignored."""
    if not _is_record(data):
        return Err(SchemaError("Expected object", path))
    values: dict[str, float] = {}
    for key in SCORE_KEYS:
        value = data.get(key)
        if not _is_score(value):
            return Err(SchemaError("Expected number in [0,100]", [*path, key]))
        values[key] = float(value)
    return Ok(Scores(**values))


def validate_feedback(data: Any, path: Sequence[str] = ("feedback",)) -> Result[Feedback]:
    if not _is_record(data):
        return Err(SchemaError("Expected object", path))
    for key in FEEDBACK_TEXT_KEYS:
        if not isinstance(data.get(key), str):
            return Err(SchemaError("Expected string", [*path, key]))
    actions = data.get("actions")
    if not _is_string_list(actions):
        return Err(SchemaError("Expected string[]", [*path, "actions"]))
    return Ok(
        Feedback(
            vocabulary=data["vocabulary"],
            filler=data["filler"],
            clarity=data["clarity"],
            idea=data["idea"],
            actions=tuple(actions),
        )
    )


def validate_assets(data: Any, path: Sequence[str] = ("assets",)) -> Result[Assets]:
    if not _is_record(data):
        return Err(SchemaError("Expected object", path))
    transcript_key = data.get("transcript_key")
    if not isinstance(transcript_key, str):
        return Err(SchemaError("Expected string", [*path, "transcript_key"]))
    return Ok(Assets(transcript_key=transcript_key))


def validate_response(data: Any) -> Result[AnalyzeResponse]:
    """Validate a full response payload; the first failing section wins."""
    if not _is_record(data):
        return Err(SchemaError("Expected object at root"))

    scores = validate_scores(data.get("scores"))
    if isinstance(scores, Err):
        return scores
    feedback = validate_feedback(data.get("feedback"))
    if isinstance(feedback, Err):
        return feedback
    assets = validate_assets(data.get("assets"))
    if isinstance(assets, Err):
        return assets

    return Ok(AnalyzeResponse(scores=scores.value, feedback=feedback.value, assets=assets.value))


def parse_response(data: Any) -> AnalyzeResponse:
    """Validate and return the response; raises SchemaError on the first violation."""
    return validate_response(data).unwrap()


def try_validate_response(data: Any) -> tuple[AnalyzeResponse | None, SchemaError | None]:
    """Non-raising variant: (response, None) on success, (None, error) otherwise."""
    result = validate_response(data)
    if isinstance(result, Err):
        return None, result.error
    return result.value, None


# -----------------------------------------------------------------------------
# Safe constructors
# -----------------------------------------------------------------------------

def make_empty_response() -> AnalyzeResponse:
    """Empty-but-valid response: zero scores, empty texts and transcript key."""
    return AnalyzeResponse(
        scores=Scores(**{key: 0.0 for key in SCORE_KEYS}),
        feedback=Feedback(vocabulary="", filler="", clarity="", idea="", actions=()),
        assets=Assets(transcript_key=""),
    )
