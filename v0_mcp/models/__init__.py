from .context import CallContext
from .outcome import (
    FieldError,
    Outcome,
    Success,
    ToolNotFound,
    UpstreamFailure,
    ValidationFailure,
)

__all__ = [
    "CallContext",
    "FieldError",
    "Outcome",
    "Success",
    "ToolNotFound",
    "UpstreamFailure",
    "ValidationFailure",
]
