"""Error codes, exceptions and failure reports for taglog.

Formatters and the call-site resolver raise ``TagLogError`` subclasses.
The logger converts them into ``FailureReport`` models and routes those to
the ERROR sink, so nothing raised here reaches application code through a
``log_*`` entry point.
"""

from __future__ import annotations

import traceback
from enum import StrEnum
from io import StringIO
from typing import Annotated, Self

from pydantic import BaseModel, ConfigDict, Field, field_validator

LINE_SEPARATOR = "\n"


class ErrorCode(StrEnum):
    """Machine-readable classification of taglog failures."""
    PARSE_ERROR = "PARSE_ERROR"
    TRANSFORM_ERROR = "TRANSFORM_ERROR"
    RESOLUTION_ERROR = "RESOLUTION_ERROR"
    IO_ERROR = "IO_ERROR"
    UNKNOWN = "UNKNOWN"


class TagLogError(Exception):
    """Base exception carrying an ErrorCode."""

    code: ErrorCode = ErrorCode.UNKNOWN


class ParseError(TagLogError):
    """Malformed JSON, or a value the JSON encoder cannot represent."""

    code = ErrorCode.PARSE_ERROR


class TransformError(TagLogError):
    """Malformed XML or a failure while re-serializing it."""

    code = ErrorCode.TRANSFORM_ERROR


class ResolutionError(TagLogError):
    """The call site could not be derived from the stack."""

    code = ErrorCode.RESOLUTION_ERROR


class ReadError(TagLogError):
    """Reading a payload source (file, key/value store) failed."""

    code = ErrorCode.IO_ERROR


def render_error(exc: BaseException | None) -> str | None:
    """Full traceback text of ``exc``, as ``traceback.print_exception`` prints it.

    Returns None for None. Never raises.
    """
    if exc is None:
        return None
    buf = StringIO()
    traceback.print_exception(type(exc), exc, exc.__traceback__, file=buf)
    return buf.getvalue()


def classify_exception(exc: BaseException) -> ErrorCode:
    """Error code of a TagLogError, UNKNOWN for anything else."""
    return exc.code if isinstance(exc, TagLogError) else ErrorCode.UNKNOWN


class FailureReport(BaseModel):
    """Structured description of a swallowed failure.

    Attributes:
        context: Short phrase naming the failed step (e.g. "parse json error")
        message: The exception message
        code: Classification of the failure
        details: Rendered traceback, if available
    """

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True, validate_default=True)

    context: Annotated[str, Field(min_length=1, description="Failed step, printed first")]
    message: str = Field(default="", description="Exception message")
    code: ErrorCode = Field(default=ErrorCode.UNKNOWN)
    details: str | None = Field(default=None, repr=False)

    @field_validator("message", mode="before")
    @classmethod
    def _ensure_message(cls, v: str | BaseException) -> str:
        """Accept exception objects and extract their message."""
        return str(v) if isinstance(v, BaseException) else v

    @classmethod
    def from_exception(cls, context: str, exc: BaseException) -> Self:
        """Build a report with auto-classification and the full traceback."""
        return cls(context=context, message=exc, code=classify_exception(exc), details=render_error(exc))

    def render(self) -> str:
        """Text emitted at ERROR level: context, then the traceback."""
        body = self.details or self.message
        return f"{self.context}{LINE_SEPARATOR}{body}" if body else self.context

    __str__ = render
