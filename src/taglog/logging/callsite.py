"""Call-site resolution: which line of user code invoked the logger.

Modules that sit between user code and the resolver register their source
file with ``mark_internal(__file__)``. The resolver walks outward from its
caller and returns the first frame whose file is not registered, so adding
internal wrapper layers does not shift the reported location. Code that
wraps the logger from outside the package passes ``stacklevel`` to skip its
own frames on top of that.

Example output prefix:
    views.render\t(views.py:42)\n
"""

from __future__ import annotations

import inspect
import os
from dataclasses import dataclass
from typing import TYPE_CHECKING

from taglog.foundation.errors import LINE_SEPARATOR, Err, FailureReport, Ok, ResolutionError, Result

if TYPE_CHECKING:
    from types import FrameType

LINE_TAB = "\t"

_internal_sources: set[str] = set()


def _normcase(path: str) -> str:
    return os.path.normcase(os.path.abspath(path))


def mark_internal(source_file: str) -> None:
    """Register a module file whose frames are skipped during resolution."""
    _internal_sources.add(_normcase(source_file))


def is_internal(source_file: str) -> bool:
    return _normcase(source_file) in _internal_sources


@dataclass(frozen=True, slots=True)
class CallSite:
    """Location of a logging call.

    Attributes:
        name: File base name up to the first dot; also used as the derived tag
        method: Name of the calling function (``<module>`` at module level)
        file_name: Base name of the source file
        line: Line number of the call
    """

    name: str
    method: str
    file_name: str
    line: int

    @property
    def prefix(self) -> str:
        """Prefix prepended to the message: ``name.method\\t(file:line)\\n``."""
        return f"{self.name}.{self.method}{LINE_TAB}({self.file_name}:{self.line}){LINE_SEPARATOR}"

    @classmethod
    def from_frame(cls, frame: FrameType) -> CallSite:
        """Build from a frame. Raises ResolutionError when the frame has no file name."""
        file_name = os.path.basename(frame.f_code.co_filename or "")
        if not file_name:
            raise ResolutionError(f"frame {frame.f_code.co_name!r} has no source file name")
        dot = file_name.find(".")
        name = file_name[:dot] if dot > 0 else file_name
        return cls(name=name, method=frame.f_code.co_name, file_name=file_name, line=frame.f_lineno)


def find_caller(stacklevel: int = 0) -> CallSite:
    """Locate the first non-internal frame above the caller, then skip ``stacklevel`` more.

    Raises:
        ResolutionError: The stack is exhausted or the frame lacks a file name
    """
    if stacklevel < 0:
        raise ResolutionError(f"stacklevel must be >= 0, got {stacklevel}")
    frame = inspect.currentframe()
    try:
        frame = frame.f_back if frame is not None else None
        while frame is not None and is_internal(frame.f_code.co_filename):
            frame = frame.f_back
        for _ in range(stacklevel):
            if frame is None:
                break
            frame = frame.f_back
        if frame is None:
            raise ResolutionError(f"call stack exhausted before reaching the caller (stacklevel={stacklevel})")
        return CallSite.from_frame(frame)
    finally:
        del frame


def resolve_call_site(stacklevel: int = 0) -> Result[CallSite, FailureReport]:
    """Never-raising form of find_caller used by the logger."""
    try:
        return Ok(find_caller(stacklevel))
    except ResolutionError as exc:
        return Err(FailureReport.from_exception("resolve call site error", exc))


mark_internal(__file__)
