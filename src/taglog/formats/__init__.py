"""Structured payload formatters."""

from .pretty import (
    INDENT_SPACES,
    XML_DECLARATION,
    XML_INDENT_SPACES,
    KeyValueStore,
    format_json,
    format_key_value_store,
    format_xml,
    read_text_file,
    store_entries,
)

__all__ = [
    "INDENT_SPACES",
    "XML_DECLARATION",
    "XML_INDENT_SPACES",
    "KeyValueStore",
    "format_json",
    "format_key_value_store",
    "format_xml",
    "read_text_file",
    "store_entries",
]
