from __future__ import annotations

import json
from pathlib import Path

import pytest

from blockyaml import FileError, load_schema, loads, validate_document

SCHEMA = {
    "type": "object",
    "required": ["name", "port"],
    "properties": {
        "name": {"type": "string"},
        "port": {"type": "integer"},
        "tags": {"type": "array", "items": {"type": "string"}},
    },
}


def test_valid_document_has_no_errors() -> None:
    document = loads("name: api\nport: 8080\ntags: [a, b]\n")
    assert validate_document(document, SCHEMA) == []


def test_errors_are_reported_by_path() -> None:
    document = loads("port: x\ntags: [a, 1]\n")
    assert validate_document(document, SCHEMA) == [
        "<root>: 'name' is a required property",
        "port: 'x' is not of type 'integer'",
        "tags.1: 1 is not of type 'string'",
    ]


def test_load_schema(tmp_path: Path) -> None:
    path = tmp_path / "schema.json"
    path.write_text(json.dumps(SCHEMA), encoding="utf-8")
    assert load_schema(path) == SCHEMA


def test_load_schema_missing_file(tmp_path: Path) -> None:
    with pytest.raises(FileError):
        load_schema(tmp_path / "absent.json")


@pytest.mark.parametrize(
    ("content", "reason"),
    [("{not json", "invalid JSON"), ('{"type": 5}', "invalid schema")],
)
def test_load_schema_rejects_bad_content(tmp_path: Path, content: str, reason: str) -> None:
    path = tmp_path / "schema.json"
    path.write_text(content, encoding="utf-8")
    with pytest.raises(FileError, match=reason):
        load_schema(path)
