"""
Core utilities — exceptions and result types shared across speakmate.

Provides the exception hierarchy used by the API and session layers and the
Ok/Err result variants returned by the response validators.
"""

from speakmate.core.exceptions import (
    ApiHTTPError,
    ConfigurationError,
    RequestAborted,
    SchemaError,
    SchemaValidationFailed,
    SpeakmateError,
)
from speakmate.core.result import Err, Ok, Result

__all__ = [
    "ApiHTTPError",
    "ConfigurationError",
    "Err",
    "Ok",
    "RequestAborted",
    "Result",
    "SchemaError",
    "SchemaValidationFailed",
    "SpeakmateError",
]
