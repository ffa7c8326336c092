"""Unified error handling for taglog.

- ErrorCode: classification of swallowed failures
- TagLogError and subclasses: ParseError, TransformError, ResolutionError, ReadError
- FailureReport: structured report routed to the ERROR sink
- Result/Ok/Err: railway for the never-raising logging paths
"""

from .errors import (
    LINE_SEPARATOR,
    ErrorCode,
    FailureReport,
    ParseError,
    ReadError,
    ResolutionError,
    TagLogError,
    TransformError,
    classify_exception,
    render_error,
)
from .result import Err, Ok, Result, try_fn

__all__ = [
    # Errors
    "ErrorCode", "TagLogError", "ParseError", "TransformError", "ResolutionError", "ReadError",
    "FailureReport", "classify_exception", "render_error", "LINE_SEPARATOR",
    # Result monad
    "Result", "Ok", "Err", "try_fn",
]
