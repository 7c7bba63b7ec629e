"""Exception taxonomy raised by the blockyaml parser, value model and printer."""
from __future__ import annotations

from typing import Optional


class YamlError(Exception):
    """Base class for every error raised by blockyaml."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class FileError(YamlError):
    """Raised when a YAML source cannot be opened, read or decoded."""

    def __init__(self, path: str, reason: Optional[str] = None) -> None:
        message = f"Cannot open or read file: {path}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)
        self.path = path
        self.reason = reason


class YamlSyntaxError(YamlError, ValueError):
    """Raised on structural violations; ``line`` is 1-based when known."""

    def __init__(self, message: str, line: Optional[int] = None) -> None:
        if line is None:
            text = f"YAML syntax error: {message}"
        else:
            text = f"YAML syntax error at line {line}: {message}"
        super().__init__(text)
        self.detail = message
        self.line = line


class YamlTypeError(YamlError, TypeError):
    """Raised when an element is accessed as the wrong kind."""

    def __init__(self, message: str) -> None:
        super().__init__(f"Type error: {message}")


class YamlKeyError(YamlError, KeyError):
    """Raised for a missing mapping key or an undefined alias."""

    def __init__(self, key: str, message: Optional[str] = None) -> None:
        super().__init__(message or f"Key not found: '{key}'")
        self.key = key


class YamlIndexError(YamlError, IndexError):
    """Raised when a sequence index is out of bounds."""

    def __init__(self, index: int, size: int) -> None:
        super().__init__(f"Index out of bounds: {index} (sequence size: {size})")
        self.index = index
        self.size = size


class ConversionError(YamlError, ValueError):
    """Raised when numeric text cannot be represented (overflow or bad format)."""

    def __init__(self, value: str, target: str) -> None:
        super().__init__(f"Cannot convert '{value}' to {target}")
        self.value = value
        self.target = target


class StructureError(YamlError):
    """Raised when a document does not have the shape an operation needs."""

    def __init__(self, message: str) -> None:
        super().__init__(f"Structure error: {message}")


__all__ = [
    "ConversionError",
    "FileError",
    "StructureError",
    "YamlError",
    "YamlIndexError",
    "YamlKeyError",
    "YamlSyntaxError",
    "YamlTypeError",
]
