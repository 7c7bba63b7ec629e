from __future__ import annotations

import io

import pytest

from blockyaml import Element, StructureError, YamlParser, dumps, loads, print_yaml


def test_keys_are_printed_sorted() -> None:
    assert dumps(loads("b: 1\na: x\n")) == "a: x\nb: 1\n"


def test_nested_blocks_indent_by_two() -> None:
    value = Element.from_python({"server": {"host": "h", "ports": [80, 443]}})
    assert dumps(value) == "server:\n  host: h\n  ports:\n    - 80\n    - 443\n"


def test_none_and_empty_string_print_null() -> None:
    assert dumps(Element.from_python({"a": None, "b": ""})) == "a: null\nb: null\n"


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("x: y", "'x: y'"),
        ("-dash", "'-dash'"),
        ("?q", "'?q'"),
        (" pad", "' pad'"),
        ("pad ", "'pad '"),
        ("it's #1", "'it''s #1'"),
        ("[a]", "'[a]'"),
        ("*ref", "'*ref'"),
        ("plain text", "plain text"),
    ],
)
def test_string_quoting(text: str, expected: str) -> None:
    assert dumps(Element.from_python({"k": text})) == f"k: {expected}\n"


def test_empty_and_special_keys_are_quoted() -> None:
    assert dumps(Element.from_python({"": 1, "a:b": 2})) == "'': 1\n'a:b': 2\n"


def test_number_like_strings_print_bare() -> None:
    assert dumps(Element.from_python({"string": "012345"})) == "string: 012345\n"


def test_scalar_formats() -> None:
    value = Element.from_python(
        {
            "e": 1e20,
            "f": False,
            "i": -3,
            "n": float("nan"),
            "x": 30.5,
            "y": float("inf"),
            "z": float("-inf"),
        }
    )
    assert dumps(value) == (
        "e: 1e+20\nf: false\ni: -3\nn: .nan\nx: 30.5\ny: .inf\nz: -.inf\n"
    )


def test_empty_containers() -> None:
    value = Element.from_python({"m": {}, "s": []})
    assert dumps(value) == "m:\ns: []\n"


def test_multiline_string_prints_as_literal_block() -> None:
    value = Element.from_python({"text": "a\nb\n"})
    assert dumps(value) == "text: |\n  a\n  b\n"
    assert loads(dumps(value)) == value


def test_sequence_of_scalar_sequences_prints_inline() -> None:
    value = Element.from_python([[1, 2], ["a", "b c"], []])
    assert dumps(value) == "- [1, 2]\n- [a, b c]\n- []\n"
    assert loads(dumps(value)) == value


def test_sequence_of_mappings() -> None:
    value = Element.from_python([{"a": 1, "b": [2]}])
    assert dumps(value) == "-\n  a: 1\n  b:\n    - 2\n"
    assert loads(dumps(value)) == value


def test_print_yaml_writes_to_sink_with_indent() -> None:
    sink = io.StringIO()
    print_yaml(Element.from_python({"a": 1}), sink, indent=2)
    assert sink.getvalue() == "  a: 1\n"


def test_print_yaml_defaults_to_stdout(capsys: pytest.CaptureFixture[str]) -> None:
    print_yaml(Element.from_python(["x"]))
    assert capsys.readouterr().out == "- x\n"


def test_printer_accepts_parser_root() -> None:
    parser = YamlParser()
    parser.parse_string("b: 2\na: [1]\n")
    assert dumps(parser.root()) == "a:\n  - 1\nb: 2\n"
    assert dumps(()) == ""


@pytest.mark.parametrize("name", ["nested_types.yaml", "anchors_and_merging.yaml"])
def test_fixture_round_trip(fixtures_dir, name: str) -> None:
    parser = YamlParser()
    parser.parse(fixtures_dir / name)
    document = parser.document()
    assert loads(dumps(document)) == document


@pytest.mark.parametrize("key", ["a\nb", "a\rb"])
def test_keys_with_line_breaks_cannot_be_printed(key: str) -> None:
    with pytest.raises(StructureError, match="line break"):
        dumps(Element.from_python({key: 1}))
