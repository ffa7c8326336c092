"""Tagging logger: levels, call-site resolution, sinks and the logger itself."""

from .callsite import CallSite, find_caller, is_internal, mark_internal, resolve_call_site
from .levels import Level
from .logger import DEFAULT_TAG, NULL_NOTIFICATION, LogCore, TagLogger, current_tag, tag_context
from .sinks import (
    ConsoleSink,
    Emission,
    LoggingSink,
    LogSink,
    NoOpSink,
    RecordingSink,
    build_sink,
)

__all__ = [
    "CallSite",
    "ConsoleSink",
    "DEFAULT_TAG",
    "Emission",
    "Level",
    "LogCore",
    "LogSink",
    "LoggingSink",
    "NULL_NOTIFICATION",
    "NoOpSink",
    "RecordingSink",
    "TagLogger",
    "build_sink",
    "current_tag",
    "find_caller",
    "is_internal",
    "mark_internal",
    "resolve_call_site",
    "tag_context",
]
