"""Scalar classification: turn a raw value token into a typed element."""
from __future__ import annotations

import math
import re

from .element import Element
from .errors import ConversionError

INT_RE = re.compile(r"-?[0-9]+")
DOUBLE_RE = re.compile(r"-?(?:[0-9]+\.[0-9]*|\.[0-9]+|[0-9]+)(?:[eE][+-]?[0-9]+)?")

INT_MIN = -(2**63)
INT_MAX = 2**63 - 1

QUOTE_CHARS = ("'", '"')
WHITESPACE = " \t"


def trim(text: str) -> str:
    return text.strip(WHITESPACE)


def is_quoted(token: str) -> bool:
    """``True`` when ``token`` is wrapped in one matching pair of quotes."""

    return len(token) >= 2 and token[0] in QUOTE_CHARS and token[-1] == token[0]


def unquote(token: str) -> str:
    # Only the outer pair goes; no escape processing.
    if is_quoted(token):
        return token[1:-1]
    return token


def _drop_comment_after_quote(token: str) -> str:
    closing = token.find(token[0], 1)
    if closing == -1:
        return token
    rest = trim(token[closing + 1 :])
    if not rest or rest.startswith("#"):
        return token[: closing + 1]
    return token


def clean_token(value: str) -> str:
    """Trim ``value`` and drop its trailing comment.

    Quoted tokens keep ``#`` characters between the quotes; plain tokens end at
    the first ``#``.
    """

    token = trim(value)
    if not token:
        return token
    if token[0] in QUOTE_CHARS:
        return _drop_comment_after_quote(token)
    hash_at = token.find("#")
    if hash_at != -1:
        token = token[:hash_at]
    return trim(token)


def _parse_int(token: str) -> Element:
    try:
        number = int(token)
    except ValueError as exc:
        # int() refuses very long digit strings
        raise ConversionError(token, "integer (value out of range)") from exc
    if number < INT_MIN or number > INT_MAX:
        raise ConversionError(token, "integer (value out of range)")
    return Element.integer(number)


def _parse_double(token: str) -> Element:
    try:
        number = float(token)
    except ValueError as exc:
        raise ConversionError(token, "double (invalid format)") from exc
    if math.isinf(number):
        raise ConversionError(token, "double (value out of range)")
    return Element.double(number)


def classify_scalar(value: str) -> Element:
    """Classify a raw value token as Bool, Int, Double or String.

    Only the exact lowercase spellings ``true``/``false`` are booleans;
    ``True`` or ``TRUE`` stay strings. An empty token yields an empty string.
    """

    token = clean_token(value)
    if token == "true":
        return Element.boolean(True)
    if token == "false":
        return Element.boolean(False)
    if INT_RE.fullmatch(token):
        return _parse_int(token)
    if DOUBLE_RE.fullmatch(token):
        return _parse_double(token)
    return Element.string(unquote(token))


__all__ = ["classify_scalar", "clean_token", "is_quoted", "trim", "unquote"]
