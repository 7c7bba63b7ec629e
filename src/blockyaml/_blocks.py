"""Indentation-driven block parser.

``parse_map`` and ``parse_seq`` are mutually recursive and share one
:class:`~blockyaml._lines.LineCursor`. Every function here leaves the cursor on
the first line it did not consume. The anchor registry is passed explicitly.
"""
from __future__ import annotations

import logging
from typing import Dict, List, Optional, Set, Tuple

from ._lines import LineCursor, indent_of, is_blank, is_insignificant
from .anchors import AnchorRegistry, reference_name
from .element import Element
from .errors import YamlSyntaxError
from .scalars import QUOTE_CHARS, classify_scalar, trim, unquote

LOG = logging.getLogger(__name__)

MERGE_KEY = "<<"
DOCUMENT_MARKER = "---"
BLOCK_INDICATORS = ("|", ">")


# --- keys ---------------------------------------------------------------


def _colon_position(content: str) -> int:
    if content[:1] in QUOTE_CHARS:
        closing = content.find(content[0], 1)
        if closing != -1:
            return content.find(":", closing + 1)
    return content.find(":")


def split_entry(content: str, line: int) -> Tuple[str, str]:
    """Split ``key: value`` on the first colon outside a leading quoted key."""

    colon = _colon_position(content)
    if colon == -1:
        raise YamlSyntaxError(f"Missing ':' in key-value pair: '{content}'", line)
    raw_key = trim(content[:colon])
    if not raw_key:
        raise YamlSyntaxError("Empty key in key-value pair", line)
    return unquote(raw_key), trim(content[colon + 1 :])


def _previous_key(cursor: LineCursor) -> Optional[str]:
    if cursor.pos == 0:
        return None
    previous = trim(cursor.lines[cursor.pos - 1])
    if not previous or previous[0] in "#-":
        return None
    colon = _colon_position(previous)
    if colon == -1:
        return None
    key = trim(previous[:colon])
    return unquote(key) if key else None


# --- inline sequences -----------------------------------------------------


def _scan_flow(text: str, line: int) -> Tuple[List[str], str]:
    """Split the bracketed run opening ``text`` into its top-level pieces.

    Returns the raw pieces and whatever follows the matching ``]``.
    """

    pieces: List[str] = []
    current: List[str] = []
    depth = 0
    quote: Optional[str] = None
    last: Optional[str] = None
    for index, char in enumerate(text):
        if quote is not None:
            current.append(char)
            if char == quote:
                quote = None
                last = char
            continue
        if char in QUOTE_CHARS and last in (None, "[", ","):
            quote = char
            current.append(char)
        elif char == "[":
            depth += 1
            if depth > 1:
                current.append(char)
        elif char == "]":
            depth -= 1
            if depth == 0:
                pieces.append("".join(current))
                return pieces, text[index + 1 :]
            current.append(char)
        elif char == "," and depth == 1:
            pieces.append("".join(current))
            current = []
        else:
            current.append(char)
        if char not in " \t":
            last = char
    raise YamlSyntaxError("Malformed inline sequence: missing closing bracket", line)


def parse_inline_seq(value: str, line: int) -> Element:
    """Parse ``[a, b, [c, d]]``; bracketed pieces recurse, the rest are scalars."""

    pieces, rest = _scan_flow(trim(value), line)
    rest = trim(rest)
    if rest and not rest.startswith("#"):
        raise YamlSyntaxError(
            f"Malformed inline sequence: unexpected text after ']': '{rest}'", line
        )
    tokens = [trim(piece) for piece in pieces]
    if tokens and not tokens[-1]:
        tokens.pop()
    items = []
    for token in tokens:
        if token.startswith("["):
            items.append(parse_inline_seq(token, line))
        else:
            items.append(classify_scalar(token))
    return Element.sequence(items)


# --- block scalars --------------------------------------------------------


def parse_block_scalar(cursor: LineCursor, style: str, line_indent: int) -> Element:
    """Collect the lines indented past ``line_indent`` after a ``|``/``>`` introducer."""

    index = cursor.pos + 1
    kept: List[str] = []
    while index < len(cursor.lines):
        text = cursor.lines[index]
        if is_blank(text):
            following = cursor.next_non_blank(index)
            if following is None or indent_of(cursor.lines[following]) <= line_indent:
                break
            kept.append("")
        elif indent_of(text) <= line_indent:
            break
        else:
            kept.append(trim(text))
        index += 1
    cursor.pos = index

    if style == "|":
        return Element.string("".join(f"{text}\n" for text in kept))

    folded: List[str] = []
    joinable = False
    for text in kept:
        if not text:
            folded.append("\n")
            joinable = False
            continue
        if joinable:
            folded.append(" ")
        folded.append(text)
        joinable = True
    return Element.string("".join(folded))


# --- values ---------------------------------------------------------------


def _nested_block(cursor: LineCursor, line_indent: int, anchors: AnchorRegistry) -> Element:
    following = cursor.next_significant(cursor.pos + 1)
    if following is None or indent_of(cursor.lines[following]) <= line_indent:
        # explicit null
        cursor.advance()
        return Element.string("")
    cursor.pos = following
    text = cursor.current()
    block_indent = indent_of(text)
    if text[block_indent:].startswith("-"):
        return Element.sequence(parse_seq(cursor, block_indent, anchors))
    return Element.mapping(parse_map(cursor, block_indent, anchors))


def _parse_anchor(
    cursor: LineCursor, value: str, line_indent: int, anchors: AnchorRegistry
) -> Element:
    name = reference_name(value, "&", line=cursor.line_number)
    parts = trim(value)[1:].split(None, 1)
    rest = parts[1] if len(parts) > 1 else ""
    element = parse_value(cursor, rest, line_indent, anchors)
    anchors.bind(name, element)
    return element


def parse_value(
    cursor: LineCursor, value: str, line_indent: int, anchors: AnchorRegistry
) -> Element:
    """Resolve the value token of the line under the cursor.

    ``line_indent`` is the column the owning key (or sequence dash) starts at;
    nested blocks and block scalars must be indented strictly past it.
    """

    value = trim(value)
    if not value or value.startswith("#"):
        return _nested_block(cursor, line_indent, anchors)

    first = value[0]
    if first in BLOCK_INDICATORS:
        return parse_block_scalar(cursor, first, line_indent)
    if first == "&":
        return _parse_anchor(cursor, value, line_indent, anchors)
    if first == "*":
        name = reference_name(value, "*", line=cursor.line_number)
        element = anchors.resolve(name)
    elif first == "[":
        element = parse_inline_seq(value, cursor.line_number)
    else:
        element = classify_scalar(value)
    cursor.advance()
    return element


def _merge(
    cursor: LineCursor, value: str, mapping: Dict[str, Element], anchors: AnchorRegistry
) -> None:
    line = cursor.line_number
    if value.startswith("["):
        pieces, _ = _scan_flow(value, line)
        tokens = [trim(piece) for piece in pieces if trim(piece)]
    else:
        tokens = [value]
    for token in tokens:
        if not token.startswith("*"):
            raise YamlSyntaxError(f"merge key '<<' expects aliases, got '{token}'", line)
        anchors.merge_into(reference_name(token, "*", line=line), mapping)
    cursor.advance()


def _bind_entry(
    cursor: LineCursor,
    key: str,
    value: str,
    line_indent: int,
    mapping: Dict[str, Element],
    explicit: Set[str],
    anchors: AnchorRegistry,
) -> None:
    if key in explicit:
        raise YamlSyntaxError(f"Duplicate mapping key: '{key}'", cursor.line_number)
    if key == MERGE_KEY and value[:1] in ("*", "["):
        # merged keys may still be overridden once in this block
        _merge(cursor, value, mapping, anchors)
        return
    mapping[key] = parse_value(cursor, value, line_indent, anchors)
    explicit.add(key)


def _recover_sequence(
    cursor: LineCursor,
    line_indent: int,
    mapping: Dict[str, Element],
    explicit: Set[str],
    anchors: AnchorRegistry,
) -> None:
    key = _previous_key(cursor)
    if key is None or key in mapping:
        LOG.debug("skipping stray sequence line %d", cursor.line_number)
        cursor.advance()
        return
    LOG.debug("attaching stray sequence at line %d to key '%s'", cursor.line_number, key)
    mapping[key] = Element.sequence(parse_seq(cursor, line_indent, anchors))
    explicit.add(key)


# --- blocks ---------------------------------------------------------------


def parse_map(
    cursor: LineCursor,
    indent: int,
    anchors: AnchorRegistry,
    mapping: Optional[Dict[str, Element]] = None,
) -> Dict[str, Element]:
    """Parse mapping entries until a line indented less than ``indent``.

    ``mapping`` lets a caller seed the block with entries it already holds.
    Seeded keys may be rebound once; only keys read in this block count as
    duplicates.
    """

    mapping = {} if mapping is None else mapping
    explicit: Set[str] = set()
    while not cursor.at_end():
        text = cursor.current()
        if is_insignificant(text):
            cursor.advance()
            continue
        line_indent = indent_of(text)
        if line_indent < indent:
            break
        content = text[line_indent:]
        if content.startswith("-"):
            _recover_sequence(cursor, line_indent, mapping, explicit, anchors)
            continue
        key, value = split_entry(content, cursor.line_number)
        _bind_entry(cursor, key, value, line_indent, mapping, explicit, anchors)
    return mapping


def _content_column(content: str, start: int) -> int:
    tail = content[start:]
    return start + len(tail) - len(tail.lstrip(" \t"))


def _item_value(content: str, start: int) -> str:
    value = trim(content[start:])
    return "" if value.startswith("#") else value


def _next_indent(cursor: LineCursor) -> int:
    following = cursor.next_significant(cursor.pos + 1)
    return -1 if following is None else indent_of(cursor.lines[following])


def _item_mapping(
    cursor: LineCursor,
    key_col: int,
    value: str,
    next_indent: int,
    anchors: AnchorRegistry,
) -> Element:
    pair: Dict[str, Element] = {}
    explicit: Set[str] = set()
    block_indent = next_indent
    if value.startswith("-"):
        # A nested block sequence is not supported here; the item stays an empty map.
        LOG.debug("dropping nested sequence item at line %d", cursor.line_number)
        cursor.advance()
    elif value:
        key, rest = split_entry(value, cursor.line_number)
        block_indent = min(key_col, next_indent)
        _bind_entry(cursor, key, rest, key_col, pair, explicit, anchors)
    else:
        cursor.advance()
    mapping = parse_map(cursor, block_indent, anchors, dict(pair))
    # the inline pair wins a collision with a deeper line
    for key in explicit:
        mapping[key] = pair[key]
    return Element.mapping(mapping)


def _item_value_element(
    cursor: LineCursor, line_indent: int, value: str, anchors: AnchorRegistry
) -> Element:
    element = parse_value(cursor, value, line_indent, anchors)
    following = cursor.next_significant()
    if following is not None and indent_of(cursor.lines[following]) > line_indent:
        raise YamlSyntaxError("Unexpected indented content after sequence item", following + 1)
    return element


def _parse_item(
    cursor: LineCursor, line_indent: int, content: str, anchors: AnchorRegistry
) -> Element:
    value_col = _content_column(content, 1)
    value = _item_value(content, value_col)
    if value.startswith("&"):
        name = reference_name(value, "&", line=cursor.line_number)
        rest_col = _content_column(content, value_col + 1 + len(name))
        rest = _item_value(content, rest_col)
        next_indent = _next_indent(cursor)
        if next_indent > line_indent and rest[:1] not in ("", "&", "*", "[", *BLOCK_INDICATORS):
            # `- &name key: value` anchors the mapping the pair opens
            element = _item_mapping(cursor, line_indent + rest_col, rest, next_indent, anchors)
            anchors.bind(name, element)
            return element
        return _item_value_element(cursor, line_indent, value, anchors)
    if value[:1] == "*" or value[:1] in BLOCK_INDICATORS:
        return _item_value_element(cursor, line_indent, value, anchors)

    next_indent = _next_indent(cursor)
    if next_indent > line_indent:
        return _item_mapping(cursor, line_indent + value_col, value, next_indent, anchors)

    if value.startswith("["):
        element = parse_inline_seq(value, cursor.line_number)
    elif value:
        element = classify_scalar(value)
    else:
        element = Element.string("")
    cursor.advance()
    return element


def parse_seq(cursor: LineCursor, indent: int, anchors: AnchorRegistry) -> List[Element]:
    """Parse ``-`` items until a de-indented or non-``-`` line."""

    items: List[Element] = []
    while not cursor.at_end():
        text = cursor.current()
        if is_insignificant(text):
            cursor.advance()
            continue
        line_indent = indent_of(text)
        if line_indent < indent:
            break
        content = text[line_indent:]
        if not content.startswith("-"):
            break
        items.append(_parse_item(cursor, line_indent, content, anchors))
    return items


def parse_document(cursor: LineCursor, anchors: AnchorRegistry) -> Tuple[bool, Element]:
    """Parse a whole buffer; returns ``(is_sequence_root, root)``."""

    first = cursor.next_significant(0)
    if first is not None and _document_marker(cursor.lines[first]) == DOCUMENT_MARKER:
        first = cursor.next_significant(first + 1)
    if first is None:
        cursor.pos = len(cursor.lines)
        LOG.debug("document is empty")
        return False, Element.mapping()

    cursor.pos = first
    if trim(cursor.current()).startswith("-"):
        root = Element.sequence(parse_seq(cursor, 0, anchors))
        trailing = cursor.next_significant()
        if trailing is not None:
            LOG.warning(
                "ignoring content after the root sequence, starting at line %d", trailing + 1
            )
        LOG.debug("parsed sequence root with %d item(s)", len(root.as_seq()))
        return True, root

    root = Element.mapping(parse_map(cursor, 0, anchors))
    LOG.debug("parsed mapping root with %d key(s)", len(root.as_map()))
    return False, root


def _document_marker(text: str) -> str:
    marker = trim(text)
    hash_at = marker.find("#")
    if hash_at != -1:
        marker = trim(marker[:hash_at])
    return marker
