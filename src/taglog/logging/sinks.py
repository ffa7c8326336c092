"""Native log sinks: where a (level, tag, message) triple ends up.

- LoggingSink: hands lines to the stdlib logging module (default)
- ConsoleSink: logcat-like colored console output
- NoOpSink: drops everything
- RecordingSink: keeps every line, for tests and inspection
"""

from __future__ import annotations

import logging
import sys
import time
from dataclasses import dataclass, field
from datetime import datetime
from typing import Protocol, TextIO, runtime_checkable

from .levels import Level


@runtime_checkable
class LogSink(Protocol):
    """Protocol for log sinks. Must preserve call ordering."""

    def write(self, level: Level, tag: str, message: str) -> None: ...


@dataclass(slots=True)
class LoggingSink:
    """Bridge to stdlib logging. The tag becomes the logger name.

    Example:
        >>> sink = LoggingSink(namespace="app")
        >>> sink.write(Level.INFO, "views", "rendered")  # logger "app.views", level INFO
    """

    namespace: str = ""

    def logger_for(self, tag: str) -> logging.Logger:
        return logging.getLogger(f"{self.namespace}.{tag}" if self.namespace else tag)

    def write(self, level: Level, tag: str, message: str) -> None:
        self.logger_for(tag).log(level.logging_level, message)


@dataclass(slots=True)
class ConsoleSink:
    """Human-readable console output. Format: ``HH:MM:SS.mmm L/Tag: line``.

    Multi-line messages are written one output line per message line, each
    carrying the full prefix. Colors are auto-detected from the stream.
    """

    output: TextIO = field(default_factory=lambda: sys.stderr)
    colors: bool | None = None  # None = auto-detect
    show_timestamp: bool = True

    def __post_init__(self) -> None:
        if self.colors is None:
            self.colors = getattr(self.output, "isatty", lambda: False)()

    def write(self, level: Level, tag: str, message: str) -> None:
        c = _COLORS if self.colors else _NO_COLORS
        color = _LEVEL_COLORS[level] if self.colors else ""
        stamp = f"{c['dim']}{_ts_human(time.time())}{c['reset']} " if self.show_timestamp else ""
        head = f"{stamp}{color}{level.letter}/{tag}{c['reset']}: "
        for line in message.split("\n"):
            print(f"{head}{line}", file=self.output)


@dataclass(slots=True)
class NoOpSink:
    """Silent sink."""

    def write(self, level: Level, tag: str, message: str) -> None:
        pass


@dataclass(frozen=True, slots=True)
class Emission:
    """One line received by a RecordingSink."""

    level: Level
    tag: str
    message: str


@dataclass(slots=True)
class RecordingSink:
    """Sink spy that keeps every emitted line in order."""

    emissions: list[Emission] = field(default_factory=list)

    def write(self, level: Level, tag: str, message: str) -> None:
        self.emissions.append(Emission(level, tag, message))

    def __len__(self) -> int:
        return len(self.emissions)

    @property
    def last(self) -> Emission:
        return self.emissions[-1]

    def at(self, level: Level) -> list[Emission]:
        """Emissions at exactly ``level``."""
        return [e for e in self.emissions if e.level == level]

    def clear(self) -> None:
        self.emissions.clear()


def build_sink(kind: str, *, namespace: str = "", colors: bool | None = None) -> LogSink:
    """Create a sink by name: "logging", "console" or "none"."""
    match kind:
        case "logging": return LoggingSink(namespace=namespace)
        case "console": return ConsoleSink(colors=colors)
        case "none": return NoOpSink()
        case _: raise ValueError(f"Unknown sink: {kind}. Use 'logging', 'console', or 'none'")


# ─────────────────────────────────────────────────────────────────────────────
# Helpers
# ─────────────────────────────────────────────────────────────────────────────


_COLORS = {"reset": "\033[0m", "bold": "\033[1m", "dim": "\033[2m", "red": "\033[31m",
           "green": "\033[32m", "yellow": "\033[33m", "blue": "\033[34m", "white": "\033[37m"}
_NO_COLORS = {k: "" for k in _COLORS}
_LEVEL_COLORS = {Level.VERBOSE: _COLORS["white"], Level.DEBUG: _COLORS["blue"], Level.INFO: _COLORS["green"],
                 Level.WARN: _COLORS["yellow"], Level.ERROR: _COLORS["red"]}


def _ts_human(ts: float) -> str:
    """Local wall-clock time as HH:MM:SS.mmm."""
    return datetime.fromtimestamp(ts).strftime("%H:%M:%S.%f")[:-3]
