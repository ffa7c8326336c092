"""Process-wide default logger and the module-level API over it.

The default logger is built from settings on first use; ``configure``
changes it at runtime. Loggers from ``get_logger`` share its switch and sink.
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any, overload

from taglog.foundation.config import get_settings
from taglog.formats import KeyValueStore
from taglog.logging import Level, LogCore, LogSink, TagLogger, build_sink, mark_internal

_default: TagLogger | None = None


def _build_default() -> TagLogger:
    s = get_settings()
    core = LogCore(
        sink=build_sink(s.sink, namespace=s.logger_namespace, colors=s.colors),
        enabled=s.enabled,
        min_level=s.min_level,
        default_tag=s.default_tag,
        json_indent=s.json_indent,
        xml_indent=s.xml_indent,
        xml_stop_at_blank_line=s.xml_stop_at_blank_line,
    )
    return TagLogger(core)


def default_logger() -> TagLogger:
    """Get the default logger, building it from settings if needed."""
    global _default
    if _default is None:
        _default = _build_default()
    return _default


def reset() -> None:
    """Drop the default logger; the next call rebuilds it from settings."""
    global _default
    _default = None


def configure(
    enabled: bool | None = None,
    *,
    sink: LogSink | str | None = None,
    min_level: Level | str | int | None = None,
    default_tag: str | None = None,
) -> TagLogger:
    """Adjust the default logger. Call once at start-up.

    Args:
        enabled: Master switch; False silences every logger sharing the default core
        sink: Sink instance, or "logging" / "console" / "none"
        min_level: Drop lines below this level
        default_tag: Tag used before any call site has been resolved

    Returns:
        The default logger

    Example:
        >>> configure(enabled=False)      # release build: nothing is printed
        >>> configure(sink="console", min_level="D")
    """
    core = default_logger().core
    if enabled is not None:
        core.enabled = enabled
    if isinstance(sink, str):
        s = get_settings()
        core.sink = build_sink(sink, namespace=s.logger_namespace, colors=s.colors)
    elif sink is not None:
        core.sink = sink
    if min_level is not None:
        core.min_level = Level.parse(min_level)
    if default_tag is not None:
        core.default_tag = default_tag
    return default_logger()


def get_logger(tag: str | None = None, *, stacklevel: int = 0) -> TagLogger:
    """Logger sharing the default core. A fixed ``tag`` never changes the current tag."""
    return default_logger().bind(tag, stacklevel=stacklevel)


# ─────────────────────────────────────────────────────────────────────────────
# Module-level API
# ─────────────────────────────────────────────────────────────────────────────


def v(message: str | None = None, call_info: bool = True) -> None:
    default_logger().v(message, call_info)


def d(message: str | None = None, call_info: bool = True) -> None:
    default_logger().d(message, call_info)


def i(message: str | None = None, call_info: bool = True) -> None:
    default_logger().i(message, call_info)


def w(message: str | None = None, call_info: bool = True) -> None:
    default_logger().w(message, call_info)


@overload
def e(message: str | None = ..., call_info: bool = ...) -> None: ...
@overload
def e(message: str | None, exc: BaseException | None) -> None: ...


def e(message: str | None = None, call_info: bool | BaseException | None = True) -> None:
    """ERROR level; pass an exception as the second argument to append its traceback."""
    default_logger().e(message, call_info)


def log_json(text: str) -> None:
    default_logger().log_json(text)


def log_xml(text: str) -> None:
    default_logger().log_xml(text)


def log_xml_file(path: str | Path, *, stop_at_blank_line: bool | None = None) -> None:
    default_logger().log_xml_file(path, stop_at_blank_line=stop_at_blank_line)


def log_key_value_store(store: KeyValueStore | Mapping[str, Any]) -> None:
    default_logger().log_key_value_store(store)


mark_internal(__file__)
