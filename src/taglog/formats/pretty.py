"""Pretty-printers for structured payloads: JSON, XML and key/value stores.

All formatters raise a TagLogError subclass on bad input; the logger turns
those into ERROR lines.

Usage:
    >>> format_json('{"a":1}')
    '{\\n    "a": 1\\n}'
"""

from __future__ import annotations

import json
import xml.etree.ElementTree as ET
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

import orjson

from taglog.foundation.errors import ParseError, ReadError, TransformError

INDENT_SPACES = 4
XML_INDENT_SPACES = 2
XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>'


@runtime_checkable
class KeyValueStore(Protocol):
    """Read side of a persisted settings store."""

    def get_all(self) -> Mapping[str, Any]: ...


# ═══════════════════════════════════════════════════════════════════════════════
# JSON
# ═══════════════════════════════════════════════════════════════════════════════


def format_json(text: str, indent: int = INDENT_SPACES) -> str:
    """Re-indent a JSON object or array.

    Raises:
        ParseError: text is not a str starting with ``{`` or ``[``, or is malformed
    """
    if not isinstance(text, str):
        raise ParseError(f"expected JSON text, got {type(text).__name__}")
    if not text.startswith(("{", "[")):
        raise ParseError(f"JSON text must start with '{{' or '[': {text[:40]!r}")
    try:
        value = orjson.loads(text)
    except orjson.JSONDecodeError as exc:
        raise ParseError(str(exc)) from exc
    # orjson only indents by two; the stdlib encoder takes any width
    return json.dumps(value, indent=indent, ensure_ascii=False)


def _encode_default(value: object) -> object:
    """orjson fallback: string-set preferences become sorted lists."""
    if isinstance(value, (set, frozenset)):
        try:
            return sorted(value)
        except TypeError:
            return list(value)
    raise TypeError(f"Type is not JSON serializable: {type(value).__name__}")


def store_entries(store: KeyValueStore | Mapping[str, Any]) -> dict[str, Any]:
    """All entries of a store as a plain dict.

    Raises:
        ReadError: the store could not be read
    """
    try:
        entries = store.get_all() if isinstance(store, KeyValueStore) else store
        return dict(entries.items())
    except Exception as exc:  # store backends raise anything
        raise ReadError(f"cannot read key-value store: {exc}") from exc


def format_key_value_store(store: KeyValueStore | Mapping[str, Any], indent: int = INDENT_SPACES) -> str:
    """Render every store entry as an indented JSON object.

    Raises:
        ReadError: the store could not be read
        ParseError: a value (or key) cannot be represented as JSON
    """
    entries = store_entries(store)
    try:
        encoded = orjson.dumps(entries, default=_encode_default)
    except (orjson.JSONEncodeError, TypeError) as exc:
        raise ParseError(f"cannot encode key-value store: {exc}") from exc
    return format_json(encoded.decode(), indent)


# ═══════════════════════════════════════════════════════════════════════════════
# XML
# ═══════════════════════════════════════════════════════════════════════════════


def format_xml(text: str, indent: int = XML_INDENT_SPACES) -> str:
    """Re-indent an XML document, declaration first, root on its own line.

    Raises:
        TransformError: text is not a str or is not well-formed XML
    """
    if not isinstance(text, str):
        raise TransformError(f"expected XML text, got {type(text).__name__}")
    parser = ET.XMLParser(target=ET.TreeBuilder(insert_comments=True))
    try:
        root = ET.fromstring(text, parser=parser)
    except ET.ParseError as exc:
        raise TransformError(str(exc)) from exc
    ET.indent(root, space=" " * indent)
    body = ET.tostring(root, encoding="unicode")
    return (XML_DECLARATION + body).replace(">", ">\n", 1)


def read_text_file(path: str | Path, *, stop_at_blank_line: bool = False) -> str:
    """Read a text file.

    With ``stop_at_blank_line`` the file is read line by line up to the first
    empty line and the lines are concatenated without separators.

    Raises:
        ReadError: the file cannot be opened or decoded
    """
    try:
        if not stop_at_blank_line:
            return Path(path).read_text(encoding="utf-8")
        parts: list[str] = []
        with open(path, encoding="utf-8") as fh:
            for line in fh:
                line = line.rstrip("\r\n")
                if not line:
                    break
                parts.append(line)
        return "".join(parts)
    except (OSError, UnicodeDecodeError) as exc:
        raise ReadError(f"cannot read {path}: {exc}") from exc
