"""Tests for TagLogger: gating, call-info prefixes, tags and structured payloads."""

from __future__ import annotations

import inspect
import json
import re
import threading
from pathlib import Path

import pytest

from taglog.logging import (
    DEFAULT_TAG,
    NULL_NOTIFICATION,
    Level,
    LogCore,
    RecordingSink,
    TagLogger,
    current_tag,
    tag_context,
)

PREFIX = re.compile(r"^test_logger\.(?P<method>[\w<>]+)\t\(test_logger\.py:(?P<line>\d+)\)\n")

LEVEL_METHODS = [("v", Level.VERBOSE), ("d", Level.DEBUG), ("i", Level.INFO), ("w", Level.WARN), ("e", Level.ERROR)]


def _body(message: str) -> str:
    """Message without its call-site prefix."""
    match = PREFIX.match(message)
    assert match, f"missing call-site prefix: {message!r}"
    return message[match.end():]


def _log_from_helper(log: TagLogger) -> None:
    log.i("wrapped")


# ═════════════════════════════════════════════════════════════════════════════
# Gating
# ═════════════════════════════════════════════════════════════════════════════


def test_disabled_logger_never_touches_sink(sink: RecordingSink) -> None:
    log = TagLogger(LogCore(sink, enabled=False))

    for name, _ in LEVEL_METHODS:
        getattr(log, name)("m")
        getattr(log, name)("m", False)
    log.e("m", ValueError("x"))
    log.log_json("not json")
    log.log_xml("<a>")
    log.log_xml_file("/no/such/file.xml")
    log.log_key_value_store({"k": object()})

    assert len(sink) == 0


def test_disabled_logger_skips_formatting_and_resolution(sink: RecordingSink, monkeypatch: pytest.MonkeyPatch) -> None:
    def boom(*_: object, **__: object) -> None:
        raise AssertionError("should not run")

    monkeypatch.setattr("taglog.logging.logger.format_json", boom)
    monkeypatch.setattr("taglog.logging.logger.resolve_call_site", boom)
    monkeypatch.setattr("taglog.logging.logger.render_error", boom)
    log = TagLogger(LogCore(sink, enabled=False))

    log.log_json('{"a": 1}')
    log.i("hello")
    log.e("m", ValueError("x"))

    assert len(sink) == 0


def test_min_level_drops_lower_levels(sink: RecordingSink) -> None:
    log = TagLogger(LogCore(sink, min_level=Level.WARN))

    for name, _ in LEVEL_METHODS:
        getattr(log, name)(name)

    assert [e.level for e in sink.emissions] == [Level.WARN, Level.ERROR]


# ═════════════════════════════════════════════════════════════════════════════
# Messages
# ═════════════════════════════════════════════════════════════════════════════


@pytest.mark.parametrize("name, level", LEVEL_METHODS)
@pytest.mark.parametrize("message", [None, ""])
def test_empty_message_becomes_placeholder(log: TagLogger, sink: RecordingSink, name: str, level: Level,
                                           message: str | None) -> None:
    getattr(log, name)(message)
    getattr(log, name)(message, False)

    with_info, without_info = sink.emissions
    assert _body(with_info.message) == NULL_NOTIFICATION
    assert without_info.message == NULL_NOTIFICATION
    assert with_info.level is level and without_info.level is level


@pytest.mark.parametrize("name, level", LEVEL_METHODS)
def test_call_info_prefix(log: TagLogger, sink: RecordingSink, name: str, level: Level) -> None:
    getattr(log, name)("hello")
    line = inspect.currentframe().f_lineno - 1

    emitted = sink.last
    match = PREFIX.match(emitted.message)
    assert match
    assert match["method"] == "test_call_info_prefix"
    assert int(match["line"]) == line
    assert emitted.message.endswith("\nhello")
    assert emitted.level is level
    assert emitted.tag == "test_logger"


def test_explicit_call_info_true_matches_default(log: TagLogger, sink: RecordingSink) -> None:
    log.d("x", True)
    assert _body(sink.last.message) == "x"


@pytest.mark.parametrize("name, level", LEVEL_METHODS)
def test_without_call_info_message_is_verbatim(log: TagLogger, sink: RecordingSink, name: str,
                                               level: Level) -> None:
    getattr(log, name)("raw\ttext", False)

    assert sink.last.message == "raw\ttext"
    assert sink.last.level is level
    assert sink.last.tag == DEFAULT_TAG


def test_error_with_exception_appends_traceback(log: TagLogger, sink: RecordingSink) -> None:
    try:
        raise ValueError("bad input")
    except ValueError as exc:
        log.e("upload failed", exc)

    body = _body(sink.last.message)
    assert sink.last.level is Level.ERROR
    assert body.startswith("upload failed\nTraceback (most recent call last):")
    assert "ValueError: bad input" in body


def test_error_with_none_exception(log: TagLogger, sink: RecordingSink) -> None:
    log.e("plain", None)
    assert _body(sink.last.message) == "plain"


def test_error_with_non_exception_detail(log: TagLogger, sink: RecordingSink) -> None:
    log.e("x", "oops")  # type: ignore[call-overload]

    assert sink.last.level is Level.ERROR
    assert _body(sink.last.message) == "x\noops"


@pytest.mark.parametrize("message, expected", [(42, "42"), (0, "0"), (["a"], "['a']")])
def test_non_string_messages_are_stringified(log: TagLogger, sink: RecordingSink, message: object,
                                             expected: str) -> None:
    log.i(message)  # type: ignore[arg-type]
    log.w(message, False)  # type: ignore[arg-type]

    with_info, without_info = sink.emissions
    assert _body(with_info.message) == expected
    assert without_info.message == expected


def test_log_with_parsed_level(log: TagLogger, sink: RecordingSink) -> None:
    log.log("warning", "w", False)
    log.log("D", "d", False)

    assert [e.level for e in sink.emissions] == [Level.WARN, Level.DEBUG]


def test_stacklevel_for_external_wrappers(log: TagLogger, sink: RecordingSink) -> None:
    _log_from_helper(log.bind(stacklevel=1))
    line = inspect.currentframe().f_lineno - 1

    match = PREFIX.match(sink.last.message)
    assert match and match["method"] == "test_stacklevel_for_external_wrappers"
    assert int(match["line"]) == line


def test_unresolvable_call_site_logs_error_and_keeps_message(log: TagLogger, sink: RecordingSink) -> None:
    log.bind(stacklevel=10_000).i("still here")

    error, info = sink.emissions
    assert error.level is Level.ERROR
    assert error.message.startswith("resolve call site error\n")
    assert not PREFIX.match(error.message)
    assert info.level is Level.INFO
    assert info.message == "still here"


# ═════════════════════════════════════════════════════════════════════════════
# Tags
# ═════════════════════════════════════════════════════════════════════════════


def test_call_info_updates_current_tag(log: TagLogger, sink: RecordingSink) -> None:
    assert current_tag() is None
    log.i("first")
    log.w("second", False)

    assert current_tag() == "test_logger"
    assert sink.last.tag == "test_logger"


def test_fixed_tag_never_changes_current_tag(log: TagLogger, sink: RecordingSink) -> None:
    net = log.bind("Net")

    net.i("a")
    net.i("b", False)

    assert [e.tag for e in sink.emissions] == ["Net", "Net"]
    assert current_tag() is None
    assert PREFIX.match(sink.emissions[0].message)


def test_bound_logger_shares_switch(log: TagLogger, sink: RecordingSink) -> None:
    net = log.bind("Net")
    log.core.enabled = False

    net.i("dropped")

    assert len(sink) == 0


def test_tag_context_scopes_current_tag(log: TagLogger, sink: RecordingSink) -> None:
    with tag_context("Sync"):
        log.i("inside", False)
    log.i("outside", False)

    assert [e.tag for e in sink.emissions] == ["Sync", DEFAULT_TAG]


def test_current_tag_is_per_thread(log: TagLogger, sink: RecordingSink) -> None:
    def work() -> None:
        log.i("from worker")

    with tag_context("Main"):
        worker = threading.Thread(target=work)
        worker.start()
        worker.join()
        log.i("from main", False)

    assert sink.emissions[0].tag == "test_logger"
    assert sink.emissions[1].tag == "Main"


# ═════════════════════════════════════════════════════════════════════════════
# Structured payloads
# ═════════════════════════════════════════════════════════════════════════════


def test_log_json_pretty_prints_at_info(log: TagLogger, sink: RecordingSink) -> None:
    log.log_json('{"a":1}')

    assert len(sink) == 1
    assert sink.last.level is Level.INFO
    assert _body(sink.last.message) == '{\n    "a": 1\n}'


def test_log_json_failure_becomes_error_line(log: TagLogger, sink: RecordingSink) -> None:
    log.log_json("not json")

    assert len(sink) == 1
    assert sink.last.level is Level.ERROR
    body = _body(sink.last.message)
    assert body.startswith("parse json error\n")
    assert "ParseError" in body


def test_log_json_honours_core_indent(sink: RecordingSink) -> None:
    TagLogger(LogCore(sink, json_indent=2)).log_json("[1]")
    assert _body(sink.last.message) == "[\n  1\n]"


def test_log_key_value_store(log: TagLogger, sink: RecordingSink) -> None:
    log.log_key_value_store({"x": "1", "y": "2"})

    assert len(sink) == 1
    assert sink.last.level is Level.INFO
    assert json.loads(_body(sink.last.message)) == {"x": "1", "y": "2"}


def test_log_key_value_store_unencodable(log: TagLogger, sink: RecordingSink) -> None:
    log.log_key_value_store({"x": object()})

    assert len(sink) == 1
    assert sink.last.level is Level.ERROR
    assert _body(sink.last.message).startswith("parse json error\n")


def test_log_key_value_store_unreadable(log: TagLogger, sink: RecordingSink) -> None:
    class BrokenStore:
        def get_all(self) -> dict[str, object]:
            raise OSError("store locked")

    log.log_key_value_store(BrokenStore())

    assert len(sink) == 1
    assert sink.last.level is Level.ERROR
    body = _body(sink.last.message)
    assert body.startswith("parse key-value store error\n")
    assert "store locked" in body


def test_log_xml(log: TagLogger, sink: RecordingSink) -> None:
    log.log_xml("<a><b/></a>")

    assert sink.last.level is Level.INFO
    assert _body(sink.last.message).splitlines()[1:] == ["<a>", "  <b />", "</a>"]


def test_log_xml_malformed(log: TagLogger, sink: RecordingSink) -> None:
    log.log_xml("<a><b></a>")

    assert sink.last.level is Level.ERROR
    assert _body(sink.last.message).startswith("format xml error\n")


def test_log_xml_file_reads_past_blank_lines(log: TagLogger, sink: RecordingSink, tmp_path: Path) -> None:
    path = tmp_path / "layout.xml"
    path.write_text("<a>\n  <b/>\n\n  <c/>\n</a>\n", encoding="utf-8")

    log.log_xml_file(path)

    assert sink.last.level is Level.INFO
    assert "<c />" in sink.last.message


def test_log_xml_file_blank_line_truncation_opt_in(log: TagLogger, sink: RecordingSink, tmp_path: Path) -> None:
    path = tmp_path / "layout.xml"
    path.write_text("<a>\n  <b/>\n\n  <c/>\n</a>\n", encoding="utf-8")

    log.log_xml_file(path, stop_at_blank_line=True)

    assert len(sink) == 1
    assert sink.last.level is Level.ERROR
    assert _body(sink.last.message).startswith("format xml error\n")


def test_log_xml_file_missing(log: TagLogger, sink: RecordingSink, tmp_path: Path) -> None:
    log.log_xml_file(tmp_path / "missing.xml")

    assert len(sink) == 1
    assert sink.last.level is Level.ERROR
    assert _body(sink.last.message).startswith("read xml error\n")


def test_log_xml_file_invalid_path(log: TagLogger, sink: RecordingSink) -> None:
    log.log_xml_file(None)  # type: ignore[arg-type]

    assert len(sink) == 1
    assert sink.last.level is Level.ERROR
    body = _body(sink.last.message)
    assert body.startswith("read xml error\n")
    assert "TypeError" in body


def test_unexpected_formatter_failure_becomes_error_line(log: TagLogger, sink: RecordingSink,
                                                         monkeypatch: pytest.MonkeyPatch) -> None:
    def broken(*_: object) -> str:
        raise RuntimeError("formatter crashed")

    monkeypatch.setattr("taglog.logging.logger.format_json", broken)

    log.log_json("[1]")

    assert sink.last.level is Level.ERROR
    body = _body(sink.last.message)
    assert body.startswith("parse json error\n")
    assert "RuntimeError: formatter crashed" in body
