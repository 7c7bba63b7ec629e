"""Parser and printer for a practical, block-style subset of YAML."""
from __future__ import annotations

from .anchors import AnchorRegistry
from .config import Settings
from .element import Element, ElementType, Item
from .errors import (
    ConversionError,
    FileError,
    StructureError,
    YamlError,
    YamlIndexError,
    YamlKeyError,
    YamlSyntaxError,
    YamlTypeError,
)
from .parser import YamlParser, load, loads
from .printer import dumps, print_yaml
from .scalars import classify_scalar
from .validation import load_schema, validate_document

__version__ = "0.1.0"

__all__ = [
    "AnchorRegistry",
    "ConversionError",
    "Element",
    "ElementType",
    "FileError",
    "Item",
    "Settings",
    "StructureError",
    "YamlError",
    "YamlIndexError",
    "YamlKeyError",
    "YamlParser",
    "YamlSyntaxError",
    "YamlTypeError",
    "classify_scalar",
    "dumps",
    "load",
    "load_schema",
    "loads",
    "print_yaml",
    "validate_document",
]
