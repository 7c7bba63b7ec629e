"""Value model for parsed YAML documents.

An :class:`Element` is a closed variant over the seven kinds a document can
hold (``NONE``, ``STRING``, ``DOUBLE``, ``INT``, ``BOOL``, ``SEQ`` and
``MAP``). Exactly one payload is meaningful per instance and asking for the
wrong one raises :class:`~blockyaml.errors.YamlTypeError`.

Containers exclusively own their children: building a sequence or mapping
copies the elements handed in, and copying an element copies the whole
subtree. Sequence payloads are stored as tuples and mapping payloads as
read-only, key-sorted mappings so a parsed tree cannot be mutated in place.
"""
from __future__ import annotations

import enum
from types import MappingProxyType
from typing import Any, Iterable, Mapping, Sequence, Tuple, Union

from .errors import YamlIndexError, YamlKeyError, YamlTypeError


class ElementType(enum.Enum):
    NONE = "none"
    STRING = "string"
    DOUBLE = "double"
    INT = "int"
    BOOL = "bool"
    SEQ = "seq"
    MAP = "map"


_SCALAR_KINDS = frozenset(
    {ElementType.STRING, ElementType.DOUBLE, ElementType.INT, ElementType.BOOL}
)

_EXPECTED_NAMES = {
    ElementType.STRING: "string",
    ElementType.DOUBLE: "double",
    ElementType.INT: "integer",
    ElementType.BOOL: "boolean",
    ElementType.SEQ: "sequence",
    ElementType.MAP: "mapping",
}

_EMPTY_MAP: Mapping[str, "Element"] = MappingProxyType({})

MappingInput = Union[Mapping[str, "Element"], Iterable[Tuple[str, "Element"]]]


class Element:
    """A single YAML value: scalar, sequence or mapping."""

    __slots__ = ("_kind", "_payload")
    __hash__ = None  # type: ignore[assignment]

    def __init__(self) -> None:
        self._kind = ElementType.NONE
        self._payload: Any = None

    # --- constructors -----------------------------------------------------

    @classmethod
    def _make(cls, kind: ElementType, payload: Any) -> "Element":
        element = cls()
        element._kind = kind
        element._payload = payload
        return element

    @classmethod
    def none(cls) -> "Element":
        return cls()

    @classmethod
    def string(cls, value: str) -> "Element":
        if not isinstance(value, str):
            raise YamlTypeError(f"cannot build a string element from {type(value).__name__}")
        return cls._make(ElementType.STRING, value)

    @classmethod
    def double(cls, value: float) -> "Element":
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise YamlTypeError(f"cannot build a double element from {type(value).__name__}")
        return cls._make(ElementType.DOUBLE, float(value))

    @classmethod
    def integer(cls, value: int) -> "Element":
        if isinstance(value, bool) or not isinstance(value, int):
            raise YamlTypeError(f"cannot build an integer element from {type(value).__name__}")
        return cls._make(ElementType.INT, value)

    @classmethod
    def boolean(cls, value: bool) -> "Element":
        if not isinstance(value, bool):
            raise YamlTypeError(f"cannot build a boolean element from {type(value).__name__}")
        return cls._make(ElementType.BOOL, value)

    @classmethod
    def sequence(cls, items: Iterable["Element"] = ()) -> "Element":
        owned = []
        for item in items:
            if not isinstance(item, Element):
                raise YamlTypeError(f"sequence items must be elements, got {type(item).__name__}")
            owned.append(item.copy())
        return cls._make(ElementType.SEQ, tuple(owned))

    @classmethod
    def mapping(cls, entries: MappingInput = ()) -> "Element":
        pairs = entries.items() if isinstance(entries, Mapping) else entries
        owned = {}
        for key, value in pairs:
            if not isinstance(key, str):
                raise YamlTypeError(f"mapping keys must be strings, got {type(key).__name__}")
            if not isinstance(value, Element):
                raise YamlTypeError(f"mapping values must be elements, got {type(value).__name__}")
            owned[key] = value.copy()
        return cls._make(ElementType.MAP, _freeze_mapping(owned))

    @classmethod
    def from_python(cls, value: Any) -> "Element":
        """Build an element tree from plain Python data (``None``, scalars, lists, dicts)."""

        if value is None:
            return cls()
        if isinstance(value, Element):
            return value.copy()
        if isinstance(value, bool):
            return cls.boolean(value)
        if isinstance(value, int):
            return cls.integer(value)
        if isinstance(value, float):
            return cls.double(value)
        if isinstance(value, str):
            return cls.string(value)
        if isinstance(value, Mapping):
            return cls._make(
                ElementType.MAP,
                _freeze_mapping({str(key): cls.from_python(item) for key, item in value.items()}),
            )
        if isinstance(value, (list, tuple)):
            return cls._make(ElementType.SEQ, tuple(cls.from_python(item) for item in value))
        raise YamlTypeError(f"unsupported value type {type(value).__name__}")

    # --- predicates -------------------------------------------------------

    @property
    def kind(self) -> ElementType:
        return self._kind

    def is_none(self) -> bool:
        return self._kind is ElementType.NONE

    def is_string(self) -> bool:
        return self._kind is ElementType.STRING

    def is_double(self) -> bool:
        return self._kind is ElementType.DOUBLE

    def is_int(self) -> bool:
        return self._kind is ElementType.INT

    def is_bool(self) -> bool:
        return self._kind is ElementType.BOOL

    def is_seq(self) -> bool:
        return self._kind is ElementType.SEQ

    def is_map(self) -> bool:
        return self._kind is ElementType.MAP

    def is_scalar(self) -> bool:
        return self._kind in _SCALAR_KINDS

    # --- accessors --------------------------------------------------------

    def _expect(self, kind: ElementType) -> Any:
        if self._kind is not kind:
            name = _EXPECTED_NAMES[kind]
            raise YamlTypeError(
                f"expected {name}, but element is {self._kind.value}"
            )
        return self._payload

    def as_string(self) -> str:
        return self._expect(ElementType.STRING)

    def as_double(self) -> float:
        return self._expect(ElementType.DOUBLE)

    def as_int(self) -> int:
        return self._expect(ElementType.INT)

    def as_bool(self) -> bool:
        return self._expect(ElementType.BOOL)

    def as_seq(self) -> Tuple["Element", ...]:
        return self._expect(ElementType.SEQ)

    def as_map(self) -> Mapping[str, "Element"]:
        return self._expect(ElementType.MAP)

    @staticmethod
    def at(container: Any, key: Any) -> "Element":
        """Bounds-checked lookup into a sequence (by index) or mapping (by key)."""

        if isinstance(container, Element):
            if container.is_seq():
                container = container.as_seq()
            elif container.is_map():
                container = container.as_map()
            else:
                raise YamlTypeError(
                    f"cannot index into a {container.kind.value} element"
                )
        if isinstance(container, Mapping):
            try:
                return container[key]
            except KeyError:
                raise YamlKeyError(str(key)) from None
        if isinstance(container, Sequence) and not isinstance(container, str):
            if isinstance(key, bool) or not isinstance(key, int):
                raise YamlTypeError(f"sequence index must be an integer, got {type(key).__name__}")
            if key < 0 or key >= len(container):
                raise YamlIndexError(key, len(container))
            return container[key]
        raise YamlTypeError(f"cannot index into {type(container).__name__}")

    def __getitem__(self, key: Any) -> "Element":
        return Element.at(self, key)

    # --- copy / move ------------------------------------------------------

    def copy(self) -> "Element":
        if self._kind is ElementType.SEQ:
            return Element._make(ElementType.SEQ, tuple(item.copy() for item in self._payload))
        if self._kind is ElementType.MAP:
            return Element._make(
                ElementType.MAP,
                _freeze_mapping({key: value.copy() for key, value in self._payload.items()}),
            )
        return Element._make(self._kind, self._payload)

    def __copy__(self) -> "Element":
        return self.copy()

    def __deepcopy__(self, memo: dict) -> "Element":
        return self.copy()

    def take(self) -> "Element":
        """Move the payload into a new element, leaving this one ``NONE``."""

        moved = Element._make(self._kind, self._payload)
        self._kind = ElementType.NONE
        self._payload = None
        return moved

    def swap(self, other: "Element") -> None:
        self._kind, other._kind = other._kind, self._kind
        self._payload, other._payload = other._payload, self._payload

    def assign(self, other: "Element") -> "Element":
        if other is not self:
            replacement = other.copy()
            self.swap(replacement)
        return self

    # --- conversion / comparison -----------------------------------------

    def to_python(self) -> Any:
        if self._kind is ElementType.SEQ:
            return [item.to_python() for item in self._payload]
        if self._kind is ElementType.MAP:
            return {key: value.to_python() for key, value in self._payload.items()}
        return self._payload

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Element):
            return NotImplemented
        if self._kind is not other._kind:
            return False
        if self._kind is ElementType.MAP:
            return dict(self._payload) == dict(other._payload)
        return self._payload == other._payload

    def __repr__(self) -> str:
        if self._kind is ElementType.NONE:
            return "Element(NONE)"
        return f"Element({self._kind.name}, {self._payload!r})"


# Semantically the same entity; kept so callers can name container members.
Item = Element


def _freeze_mapping(entries: dict) -> Mapping[str, Element]:
    if not entries:
        return _EMPTY_MAP
    return MappingProxyType({key: entries[key] for key in sorted(entries)})


__all__ = ["Element", "ElementType", "Item"]
