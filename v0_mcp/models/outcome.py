"""Tagged outcomes of a single tool call.

The dispatcher produces exactly one of these per call and the result
formatter turns each of them into an envelope.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Tuple, Union


@dataclass(frozen=True)
class FieldError:
    """One offending argument; ``path`` is dotted for nested fields."""

    path: str
    message: str

    def __str__(self) -> str:
        return f"{self.path}: {self.message}"


@dataclass(frozen=True)
class Success:
    value: Any


@dataclass(frozen=True)
class ValidationFailure:
    errors: Tuple[FieldError, ...]

    @property
    def fields(self) -> Tuple[str, ...]:
        return tuple(e.path for e in self.errors)

    def describe(self) -> str:
        return "; ".join(str(e) for e in self.errors)


@dataclass(frozen=True)
class UpstreamFailure:
    message: str
    status: Optional[int] = None


@dataclass(frozen=True)
class ToolNotFound:
    name: str


Outcome = Union[Success, ValidationFailure, UpstreamFailure, ToolNotFound]
