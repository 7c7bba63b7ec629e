from __future__ import annotations

import math

from hypothesis import given
from hypothesis import strategies as st

from blockyaml import ConversionError, Element, ElementType, classify_scalar, dumps, loads
from blockyaml.scalars import INT_MAX, INT_MIN

SCALAR_KINDS = {ElementType.BOOL, ElementType.INT, ElementType.DOUBLE, ElementType.STRING}

words = st.from_regex(r"[a-z][a-z0-9_]{0,8}", fullmatch=True).filter(
    lambda word: word not in ("true", "false")
)
scalars = st.one_of(
    words.map(Element.string),
    st.integers(min_value=INT_MIN, max_value=INT_MAX).map(Element.integer),
    st.floats(allow_nan=False, allow_infinity=False).map(Element.double),
    st.booleans().map(Element.boolean),
)
scalar_seqs = st.lists(scalars, min_size=1, max_size=3).map(Element.sequence)


def _mappings(children):
    return st.dictionaries(words, children, min_size=1, max_size=4).map(Element.mapping)


def _extend(children):
    items = st.one_of(scalars, scalar_seqs, _mappings(children))
    return st.one_of(st.lists(items, min_size=1, max_size=4).map(Element.sequence), _mappings(children))


trees = st.recursive(scalars, _extend, max_leaves=12)
documents = _mappings(trees)


def _shape(element: Element):
    if element.is_map():
        return ("map", {key: _shape(value) for key, value in element.as_map().items()})
    if element.is_seq():
        return ("seq", [_shape(item) for item in element.as_seq()])
    return element.kind


@given(st.text())
def test_classifier_is_total_and_deterministic(token: str) -> None:
    try:
        first = classify_scalar(token)
    except ConversionError:
        return
    assert first.kind in SCALAR_KINDS
    assert classify_scalar(token) == first


@given(st.integers(min_value=INT_MIN, max_value=INT_MAX))
def test_integers_classify_as_int(number: int) -> None:
    assert classify_scalar(str(number)).as_int() == number


@given(st.floats(allow_nan=False, allow_infinity=False))
def test_float_repr_classifies_as_double(number: float) -> None:
    element = classify_scalar(repr(number))
    assert element.kind is ElementType.DOUBLE
    assert element.as_double() == number or math.isclose(element.as_double(), number)


@given(documents)
def test_serialize_parse_preserves_kinds_and_keys(document: Element) -> None:
    reparsed = loads(dumps(document))
    assert _shape(reparsed) == _shape(document)


@given(documents)
def test_serialization_is_idempotent(document: Element) -> None:
    text = dumps(document)
    assert dumps(loads(text)) == text
