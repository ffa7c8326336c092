"""taglog - call-site tagging logger with structured payload pretty-printing.

Every line is prefixed with the calling file, function and line number, and
tagged with the calling file's name. JSON, XML and key/value stores are
pretty-printed. No entry point ever raises.

Quick Start:
    >>> import taglog
    >>> taglog.configure(enabled=True, sink="console")
    >>> taglog.i("user signed in")
    # 10:30:45.123 I/views: views.login	(views.py:42)
    # 10:30:45.123 I/views: user signed in
    >>> taglog.log_json('{"id": 7, "tags": ["a"]}')
    >>> taglog.e("sync failed", exc)          # message + traceback

Fixed tags:
    >>> net = taglog.get_logger("Net")
    >>> net.d("GET /users", False)             # tag "Net", no prefix

Configuration via environment (see taglog.foundation.config):
    TAGLOG_ENABLED=false
    TAGLOG_SINK=console
    TAGLOG_MIN_LEVEL=INFO
"""

from __future__ import annotations

__version__ = "0.1.0"

from .facade import (
    configure,
    d,
    default_logger,
    e,
    get_logger,
    i,
    log_json,
    log_key_value_store,
    log_xml,
    log_xml_file,
    reset,
    v,
    w,
)
from .formats import KeyValueStore, format_json, format_key_value_store, format_xml
from .foundation.errors import (
    ErrorCode,
    FailureReport,
    ParseError,
    ReadError,
    ResolutionError,
    TagLogError,
    TransformError,
    render_error,
)
from .logging import (
    NULL_NOTIFICATION,
    CallSite,
    ConsoleSink,
    Level,
    LoggingSink,
    LogSink,
    NoOpSink,
    RecordingSink,
    TagLogger,
    current_tag,
    tag_context,
)

__all__ = [
    "__version__",
    # Facade
    "configure", "default_logger", "get_logger", "reset",
    "v", "d", "i", "w", "e",
    "log_json", "log_xml", "log_xml_file", "log_key_value_store",
    # Formatters
    "format_json", "format_xml", "format_key_value_store", "render_error", "KeyValueStore",
    # Logger & sinks
    "TagLogger", "Level", "CallSite", "NULL_NOTIFICATION", "current_tag", "tag_context",
    "LogSink", "LoggingSink", "ConsoleSink", "NoOpSink", "RecordingSink",
    # Errors
    "ErrorCode", "TagLogError", "ParseError", "TransformError", "ResolutionError", "ReadError",
    "FailureReport",
]
