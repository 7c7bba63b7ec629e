"""Line buffer and the single cursor shared by the block parser."""
from __future__ import annotations

from typing import Optional, Sequence, Tuple

INDENT_CHARS = " \t"


def split_lines(text: str) -> Tuple[str, ...]:
    """Split source text into lines, accepting ``\\n`` and ``\\r\\n`` endings."""

    if text.startswith("\ufeff"):
        text = text[1:]
    if not text:
        return ()
    parts = text.split("\n")
    if parts[-1] == "":
        parts.pop()
    return tuple(part[:-1] if part.endswith("\r") else part for part in parts)


def indent_of(line: str) -> int:
    return len(line) - len(line.lstrip(INDENT_CHARS))


def is_blank(line: str) -> bool:
    return not line.strip(INDENT_CHARS)


def is_insignificant(line: str) -> bool:
    """Blank lines and full-line comments never take part in indentation checks."""

    stripped = line.strip(INDENT_CHARS)
    return not stripped or stripped.startswith("#")


class LineCursor:
    """Immutable lines plus one mutable position, passed explicitly to every sub-parser."""

    __slots__ = ("lines", "pos")

    def __init__(self, lines: Sequence[str], pos: int = 0) -> None:
        self.lines: Tuple[str, ...] = tuple(lines)
        self.pos = pos

    def at_end(self) -> bool:
        return self.pos >= len(self.lines)

    def current(self) -> str:
        return self.lines[self.pos]

    def advance(self, count: int = 1) -> None:
        self.pos += count

    @property
    def line_number(self) -> int:
        return self.pos + 1

    def next_significant(self, start: Optional[int] = None) -> Optional[int]:
        """Index of the first non-blank, non-comment line at or after ``start``."""

        index = self.pos if start is None else start
        while index < len(self.lines):
            if not is_insignificant(self.lines[index]):
                return index
            index += 1
        return None

    def next_non_blank(self, start: int) -> Optional[int]:
        index = start
        while index < len(self.lines):
            if not is_blank(self.lines[index]):
                return index
            index += 1
        return None

    def __repr__(self) -> str:
        return f"LineCursor(pos={self.pos}, lines={len(self.lines)})"
