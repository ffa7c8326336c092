"""Log levels and their mapping onto the stdlib logging module."""

from __future__ import annotations

import logging
from enum import IntEnum

VERBOSE_LOGGING_LEVEL = 5


class Level(IntEnum):
    """Severity of a log line. Values follow Android's log priorities."""
    VERBOSE = 2
    DEBUG = 3
    INFO = 4
    WARN = 5
    ERROR = 6

    @property
    def letter(self) -> str:
        """One-letter code used by console output (V, D, I, W, E)."""
        return self.name[0]

    @property
    def logging_level(self) -> int:
        """Equivalent stdlib logging level."""
        return _LOGGING_LEVELS[self]

    @classmethod
    def parse(cls, value: str | int | Level) -> Level:
        """Accept a Level, its name, its letter, or its numeric value."""
        match value:
            case Level():
                return value
            case int():
                return cls(value)
            case str() if value.strip().isdigit():
                return cls(int(value))
            case str() if len(value) == 1 and value.upper() in _BY_LETTER:
                return _BY_LETTER[value.upper()]
            case str():
                name = value.strip().upper()
                name = _ALIASES.get(name, name)
                if name in cls.__members__:
                    return cls[name]
        raise ValueError(f"Unknown level: {value!r}")


_LOGGING_LEVELS = {
    Level.VERBOSE: VERBOSE_LOGGING_LEVEL,
    Level.DEBUG: logging.DEBUG,
    Level.INFO: logging.INFO,
    Level.WARN: logging.WARNING,
    Level.ERROR: logging.ERROR,
}
_BY_LETTER = {lvl.letter: lvl for lvl in Level}
_ALIASES = {"WARNING": "WARN", "TRACE": "VERBOSE"}

logging.addLevelName(VERBOSE_LOGGING_LEVEL, "VERBOSE")
