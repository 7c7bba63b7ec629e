"""Render element trees back to block-style YAML text."""
from __future__ import annotations

import math
import sys
from typing import Any, List, Optional, TextIO

from .element import Element
from .errors import StructureError

INDENT_STEP = 2
QUOTE_TRIGGERS = frozenset("#:[]{},&*!|>'\"%@`")
LEADING_TRIGGERS = frozenset("-?:")
LINE_BREAKS = frozenset("\r\n")


def needs_quotes(text: str) -> bool:
    if not text:
        return True
    if text[0] in LEADING_TRIGGERS:
        return True
    if text != text.strip():
        return True
    return any(char in QUOTE_TRIGGERS for char in text)


def quote(text: str) -> str:
    return "'" + text.replace("'", "''") + "'"


def format_key(key: str) -> str:
    if any(char in LINE_BREAKS for char in key):
        # keys are read one line at a time
        raise StructureError(f"Cannot print a key containing a line break: {key!r}")
    return quote(key) if needs_quotes(key) else key


def _format_double(value: float) -> str:
    if math.isnan(value):
        return ".nan"
    if math.isinf(value):
        return ".inf" if value > 0 else "-.inf"
    return repr(value)


def format_scalar(element: Element) -> str:
    """Inline text for a scalar; ``None`` and the empty string print as ``null``."""

    if element.is_bool():
        return "true" if element.as_bool() else "false"
    if element.is_int():
        return str(element.as_int())
    if element.is_double():
        return _format_double(element.as_double())
    if element.is_string():
        text = element.as_string()
        if not text:
            return "null"
        return quote(text) if needs_quotes(text) else text
    return "null"


def _is_multiline(element: Element) -> bool:
    return element.is_string() and "\n" in element.as_string()


def _is_inline_seq(element: Element) -> bool:
    if not element.is_seq():
        return False
    for item in element.as_seq():
        if item.is_seq():
            if not _is_inline_seq(item):
                return False
        elif item.is_map() or _is_multiline(item):
            return False
    return True


def format_inline_seq(element: Element) -> str:
    parts = []
    for item in element.as_seq():
        parts.append(format_inline_seq(item) if item.is_seq() else format_scalar(item))
    return "[" + ", ".join(parts) + "]"


def _literal_block(text: str, indent: int, lines: List[str]) -> None:
    prefix = " " * indent
    body = text[:-1] if text.endswith("\n") else text
    for part in body.split("\n"):
        lines.append(f"{prefix}{part}" if part else "")


def _dump_value(head: str, value: Element, indent: int, lines: List[str]) -> None:
    """Emit ``head`` (``key:`` or ``-``) followed by ``value``."""

    nested = indent + INDENT_STEP
    if value.is_map():
        lines.append(head)
        if value.as_map():
            _dump(value, nested, lines)
    elif value.is_seq():
        if not value.as_seq():
            lines.append(f"{head} []")
        elif head.endswith("-") and _is_inline_seq(value):
            lines.append(f"{head} {format_inline_seq(value)}")
        else:
            lines.append(head)
            _dump(value, nested, lines)
    elif _is_multiline(value):
        lines.append(f"{head} |")
        _literal_block(value.as_string(), nested, lines)
    else:
        lines.append(f"{head} {format_scalar(value)}")


def _dump(element: Element, indent: int, lines: List[str]) -> None:
    prefix = " " * indent
    if element.is_map():
        for key in sorted(element.as_map()):
            _dump_value(f"{prefix}{format_key(key)}:", element.as_map()[key], indent, lines)
    elif element.is_seq():
        for item in element.as_seq():
            _dump_value(f"{prefix}-", item, indent, lines)
    elif _is_multiline(element):
        _literal_block(element.as_string(), indent, lines)
    else:
        lines.append(f"{prefix}{format_scalar(element)}")


def dumps(value: Any, indent: int = 0) -> str:
    """Serialize an element, a mapping of elements or a sequence of elements."""

    lines: List[str] = []
    _dump(Element.from_python(value), indent, lines)
    if not lines:
        return ""
    return "\n".join(lines) + "\n"


def print_yaml(value: Any, out: Optional[TextIO] = None, indent: int = 0) -> None:
    stream = sys.stdout if out is None else out
    stream.write(dumps(value, indent))


__all__ = ["dumps", "format_scalar", "print_yaml"]
