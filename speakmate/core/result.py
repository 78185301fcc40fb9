"""
Tagged result variants for value-based error handling.

Validators return Ok(value) or Err(SchemaError) instead of raising, so they can
be composed field by field with first-error-wins ordering.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

from speakmate.core.exceptions import SchemaError

T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T

    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True)
class Err:
    error: SchemaError

    def unwrap(self):
        raise self.error


Result = Union[Ok[T], Err]
