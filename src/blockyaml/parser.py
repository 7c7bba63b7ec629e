"""Public parser facade.

:class:`YamlParser` reads a file (or a string), decides whether the document
root is a mapping or a sequence and keeps the resulting tree until the next
successful parse. A failed parse raises and leaves the previous document in
place.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Mapping, Optional, Tuple, Union

from ._blocks import parse_document
from ._lines import LineCursor, split_lines
from .anchors import AnchorRegistry
from .config import Settings
from .element import Element
from .errors import FileError, StructureError, YamlKeyError

LOG = logging.getLogger(__name__)

PathLike = Union[str, Path]


class YamlParser:
    """Parse block-style YAML documents into :class:`~blockyaml.element.Element` trees."""

    def __init__(self, encoding: Optional[str] = None) -> None:
        self.encoding = encoding or Settings.from_env().encoding
        self._sequence_root = False
        self._root = Element.mapping()

    def parse(self, path: PathLike) -> None:
        """Read and parse ``path``.

        Raises :class:`FileError` when the file cannot be read or decoded,
        :class:`YamlSyntaxError` on structural violations and
        :class:`ConversionError` on numeric overflow.
        """

        source = Path(path)
        try:
            data = source.read_bytes()
        except OSError as exc:
            raise FileError(str(source), exc.strerror or exc.__class__.__name__) from exc
        try:
            text = data.decode(self.encoding)
        except (UnicodeDecodeError, LookupError) as exc:
            raise FileError(str(source), f"cannot decode as {self.encoding}: {exc}") from exc
        LOG.debug("read %d byte(s) from %s", len(data), source)
        self.parse_string(text)

    def parse_string(self, text: str) -> None:
        lines = split_lines(text)
        LOG.debug("parsing %d line(s)", len(lines))
        is_seq, root = parse_document(LineCursor(lines), AnchorRegistry())
        self._sequence_root = is_seq
        self._root = root

    def is_sequence_root(self) -> bool:
        return self._sequence_root

    def root(self) -> Mapping[str, Element]:
        if self._sequence_root:
            raise StructureError("root is a sequence; use sequence_root()")
        return self._root.as_map()

    def sequence_root(self) -> Tuple[Element, ...]:
        if not self._sequence_root:
            raise StructureError("root is a mapping; use root()")
        return self._root.as_seq()

    def document(self) -> Element:
        """The root as a single element, whichever kind it is."""

        return self._root

    def get(self, key: str) -> Element:
        if self._sequence_root:
            raise StructureError(f"Cannot access key '{key}' on sequence root")
        try:
            return self._root.as_map()[key]
        except KeyError:
            raise YamlKeyError(key) from None


def load(path: PathLike, encoding: Optional[str] = None) -> Element:
    parser = YamlParser(encoding)
    parser.parse(path)
    return parser.document()


def loads(text: str) -> Element:
    parser = YamlParser()
    parser.parse_string(text)
    return parser.document()


__all__ = ["YamlParser", "load", "loads"]
