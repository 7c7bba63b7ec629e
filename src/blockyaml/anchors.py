"""Anchor registry plus alias and merge-key resolution."""
from __future__ import annotations

import logging
from typing import Dict, MutableMapping, Optional

from .element import Element
from .errors import YamlKeyError, YamlSyntaxError, YamlTypeError
from .scalars import trim

LOG = logging.getLogger(__name__)


def reference_name(token: str, sigil: str, *, line: Optional[int] = None) -> str:
    """Return the name after ``sigil`` (``&`` or ``*``), up to the first whitespace."""

    body = trim(token)
    if not body.startswith(sigil):
        raise YamlSyntaxError(f"expected '{sigil}' reference, got '{body}'", line)
    parts = body[1:].split(None, 1)
    if not parts or parts[0].startswith("#"):
        kind = "Anchor" if sigil == "&" else "Alias"
        raise YamlSyntaxError(f"{kind} without a name", line)
    return parts[0]


class AnchorRegistry:
    """Name to value table scoped to a single parse.

    Values are copied on bind and on every lookup so later edits to one use
    site never leak into another.
    """

    def __init__(self) -> None:
        self._bindings: Dict[str, Element] = {}

    def bind(self, name: str, value: Element) -> None:
        if name in self._bindings:
            LOG.debug("anchor '%s' redefined", name)
        self._bindings[name] = value.copy()
        LOG.debug("anchor '%s' bound to %s", name, value.kind.value)

    def resolve(self, name: str) -> Element:
        try:
            bound = self._bindings[name]
        except KeyError:
            raise YamlKeyError(name, f"Key not found: undefined alias '*{name}'") from None
        return bound.copy()

    def merge_into(self, name: str, target: MutableMapping[str, Element]) -> None:
        """Copy the keys of anchor ``name`` that ``target`` does not hold yet."""

        source = self.resolve(name)
        if not source.is_map():
            raise YamlTypeError(
                f"merge key '<<' needs a mapping anchor, but '*{name}' is {source.kind.value}"
            )
        merged = 0
        for key, value in source.as_map().items():
            if key in target:
                continue
            target[key] = value
            merged += 1
        LOG.debug("merged %d key(s) from '*%s'", merged, name)


__all__ = ["AnchorRegistry", "reference_name"]
