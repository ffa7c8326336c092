"""Shared fixtures: a recording sink and a clean default logger per test."""

from __future__ import annotations

from collections.abc import Iterator

import pytest

import taglog
from taglog.foundation.config import clear_settings_cache
from taglog.logging import LogCore, RecordingSink, TagLogger
from taglog.logging.logger import _current_tag


@pytest.fixture(autouse=True)
def clean_state() -> Iterator[None]:
    """Reset settings cache, default logger and current tag around each test."""
    clear_settings_cache()
    taglog.reset()
    token = _current_tag.set(None)
    yield
    _current_tag.reset(token)
    taglog.reset()
    clear_settings_cache()


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def log(sink: RecordingSink) -> TagLogger:
    """Enabled logger writing to the recording sink."""
    return TagLogger(LogCore(sink))
