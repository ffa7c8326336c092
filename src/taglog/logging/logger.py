"""Tagging logger: call-site prefixes, enabled switch, structured payloads.

Every entry point is total: failures while resolving the call site or
formatting a payload become ERROR lines on the same sink and never reach
the caller.

Quick Start:
    >>> sink = RecordingSink()
    >>> log = TagLogger(LogCore(sink))
    >>> log.i("hello")            # "<file>.<func>\\t(<file>.py:<line>)\\nhello", tag <file>
    >>> log.i("plain", False)     # "plain", current tag
    >>> log.log_json('{"a":1}')   # pretty-printed at INFO

Tags:
    A logger without a fixed tag derives it from the calling file on every
    call-info call and stores it as the current tag. The current tag lives
    in a ContextVar, so threads and asyncio tasks each see their own.
    ``bind(tag=...)`` returns a logger with a fixed tag that never changes
    the current tag.
"""

from __future__ import annotations

from collections.abc import Mapping
from contextvars import ContextVar
from dataclasses import dataclass, replace
from pathlib import Path
from typing import TYPE_CHECKING, Any, Callable, TypeVar, overload

from taglog.foundation.errors import LINE_SEPARATOR, FailureReport, Result, render_error, try_fn
from taglog.formats import (
    INDENT_SPACES,
    XML_INDENT_SPACES,
    KeyValueStore,
    format_json,
    format_key_value_store,
    format_xml,
    read_text_file,
    store_entries,
)

from .callsite import mark_internal, resolve_call_site
from .levels import Level
from .sinks import LogSink

if TYPE_CHECKING:
    from types import TracebackType

NULL_NOTIFICATION = "----- the content is null -----"
DEFAULT_TAG = "TagLog"

T = TypeVar("T")

# Tag most recently resolved in this context; None until the first call-info call
_current_tag: ContextVar[str | None] = ContextVar("taglog_current_tag", default=None)


@dataclass(slots=True)
class LogCore:
    """Mutable state shared by a logger and everything bound from it."""

    sink: LogSink
    enabled: bool = True
    min_level: Level = Level.VERBOSE
    default_tag: str = DEFAULT_TAG
    json_indent: int = INDENT_SPACES
    xml_indent: int = XML_INDENT_SPACES
    xml_stop_at_blank_line: bool = False

    def allows(self, level: Level) -> bool:
        return self.enabled and level >= self.min_level


@dataclass(frozen=True, slots=True)
class TagLogger:
    """Leveled logger over a LogCore.

    Attributes:
        core: Shared switch, sink and formatting options
        tag: Fixed tag; None derives the tag from the call site
        stacklevel: Extra frames to skip above the first non-internal frame
    """

    core: LogCore
    tag: str | None = None
    stacklevel: int = 0

    def bind(self, tag: str | None = None, *, stacklevel: int | None = None) -> TagLogger:
        """New logger sharing this core, with a fixed tag and/or extra stack skip."""
        return replace(self, tag=tag if tag is not None else self.tag,
                       stacklevel=self.stacklevel if stacklevel is None else stacklevel)

    @property
    def current_tag(self) -> str:
        """Tag used for the next line that bypasses call-site resolution."""
        return self.tag or _current_tag.get() or self.core.default_tag

    # ─────────────────────────────────────────────────────────────────
    # Dispatch
    # ─────────────────────────────────────────────────────────────────

    def _log(self, level: Level, message: object) -> None:
        """Call-info path: prefix with the resolved call site, update the tag."""
        if not self.core.allows(level):
            return
        text = _text(message)
        resolved = resolve_call_site(self.stacklevel)
        if resolved.is_ok():
            site = resolved.unwrap()
            if self.tag is None:
                _current_tag.set(site.name)
            text = site.prefix + text
        else:
            self._log_plain(Level.ERROR, resolved.unwrap_err().render())
        self.core.sink.write(level, self.current_tag, text)

    def _log_plain(self, level: Level, message: object) -> None:
        """No call info: the message goes out verbatim under the current tag."""
        if self.core.allows(level):
            self.core.sink.write(level, self.current_tag, _text(message))

    def _dispatch(self, level: Level, message: str | None, call_info: bool) -> None:
        if call_info:
            self._log(level, message)
        else:
            self._log_plain(level, message)

    def _emit(self, result: Result[str, FailureReport], level: Level = Level.INFO) -> None:
        """Ok goes out at ``level``, Err at ERROR; both through the call-info path."""
        if result.is_ok():
            self._log(level, result.unwrap())
        else:
            self._log(Level.ERROR, result.unwrap_err().render())

    def log(self, level: Level | str | int, message: str | None, call_info: bool = True) -> None:
        """Log at an explicit level."""
        self._dispatch(Level.parse(level), message, call_info)

    # ─────────────────────────────────────────────────────────────────
    # Leveled entry points
    # ─────────────────────────────────────────────────────────────────

    def v(self, message: str | None = None, call_info: bool = True) -> None:
        self._dispatch(Level.VERBOSE, message, call_info)

    def d(self, message: str | None = None, call_info: bool = True) -> None:
        self._dispatch(Level.DEBUG, message, call_info)

    def i(self, message: str | None = None, call_info: bool = True) -> None:
        self._dispatch(Level.INFO, message, call_info)

    def w(self, message: str | None = None, call_info: bool = True) -> None:
        self._dispatch(Level.WARN, message, call_info)

    @overload
    def e(self, message: str | None = ..., call_info: bool = ...) -> None: ...
    @overload
    def e(self, message: str | None, exc: BaseException | None) -> None: ...

    def e(self, message: str | None = None, call_info: bool | BaseException | None = True) -> None:
        """Log at ERROR. A second argument that is an exception appends its traceback."""
        match call_info:
            case bool():
                self._dispatch(Level.ERROR, message, call_info)
            case None:
                self._log(Level.ERROR, message)
            case _ if not self.core.allows(Level.ERROR):
                return
            case BaseException():
                self._log(Level.ERROR, f"{message}{LINE_SEPARATOR}{render_error(call_info)}")
            case _:
                self._log(Level.ERROR, f"{message}{LINE_SEPARATOR}{call_info}")

    # ─────────────────────────────────────────────────────────────────
    # Structured payloads
    # ─────────────────────────────────────────────────────────────────

    def log_json(self, text: str) -> None:
        """Pretty-print a JSON object or array at INFO."""
        if self.core.enabled:
            self._emit(_attempt("parse json error", lambda: format_json(text, self.core.json_indent)))

    def log_xml(self, text: str) -> None:
        """Pretty-print an XML document at INFO."""
        if self.core.enabled:
            self._emit(_attempt("format xml error", lambda: format_xml(text, self.core.xml_indent)))

    def log_xml_file(self, path: str | Path, *, stop_at_blank_line: bool | None = None) -> None:
        """Read an XML file and pretty-print it at INFO.

        ``stop_at_blank_line`` (default from the core) truncates the input at
        the first empty line.
        """
        if not self.core.enabled:
            return
        stop = self.core.xml_stop_at_blank_line if stop_at_blank_line is None else stop_at_blank_line
        content = _attempt("read xml error", lambda: read_text_file(path, stop_at_blank_line=stop))
        self._emit(content.flat_map(
            lambda xml: _attempt("format xml error", lambda: format_xml(xml, self.core.xml_indent))))

    def log_key_value_store(self, store: KeyValueStore | Mapping[str, Any]) -> None:
        """Print every entry of a key/value store as indented JSON at INFO.

        A store that cannot be read logs "parse key-value store error"; an
        entry the JSON encoder rejects logs "parse json error".
        """
        if not self.core.enabled:
            return
        entries = _attempt("parse key-value store error", lambda: store_entries(store))
        self._emit(entries.flat_map(
            lambda data: _attempt("parse json error", lambda: format_key_value_store(data, self.core.json_indent))))


def _attempt(context: str, f: Callable[[], T]) -> Result[T, FailureReport]:
    """Run a formatter; any exception becomes a FailureReport labelled ``context``."""
    return try_fn(f).map_err(lambda exc: FailureReport.from_exception(context, exc))


def _text(message: object) -> str:
    """Message as text; None and "" become the placeholder."""
    if message is None or (isinstance(message, str) and not message):
        return NULL_NOTIFICATION
    return str(message)


def current_tag() -> str | None:
    """Tag most recently resolved in this context, None if none yet."""
    return _current_tag.get()


class tag_context:
    """Context manager setting the current tag for the enclosed block.

    Example:
        >>> with tag_context("Sync"):
        ...     log.i("step", False)  # tag "Sync"
    """

    __slots__ = ("_tag", "_token")

    def __init__(self, tag: str) -> None:
        self._tag = tag
        self._token: object | None = None

    def __enter__(self) -> tag_context:
        self._token = _current_tag.set(self._tag)
        return self

    def __exit__(self, exc_type: type[BaseException] | None, exc_val: BaseException | None,
                 exc_tb: TracebackType | None) -> None:
        if self._token is not None:
            _current_tag.reset(self._token)  # type: ignore[arg-type]
            self._token = None


mark_internal(__file__)
