"""JSON-Schema validation for parsed documents."""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Union

from jsonschema import Draft7Validator, SchemaError

from .element import Element
from .errors import FileError

LOG = logging.getLogger(__name__)

ROOT_PATH = "<root>"


def load_schema(path: Union[str, Path]) -> Dict[str, Any]:
    schema_path = Path(path)
    try:
        raw_text = schema_path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise FileError(str(schema_path), f"not UTF-8: {exc}") from exc
    except OSError as exc:
        raise FileError(str(schema_path), exc.strerror or exc.__class__.__name__) from exc
    try:
        schema = json.loads(raw_text)
    except json.JSONDecodeError as exc:
        raise FileError(str(schema_path), f"invalid JSON: {exc}") from exc
    try:
        Draft7Validator.check_schema(schema)
    except SchemaError as exc:
        raise FileError(str(schema_path), f"invalid schema: {exc.message}") from exc
    return schema


def _format_path(parts: Any) -> str:
    text = ".".join(str(part) for part in parts)
    return text or ROOT_PATH


def validate_document(document: Element, schema: Dict[str, Any]) -> List[str]:
    """Validate ``document`` against ``schema``; returns one message per violation.

    Messages read ``path: message`` and are ordered by path. An empty list
    means the document is valid.
    """

    validator = Draft7Validator(schema)
    instance = document.to_python()
    errors = sorted(
        validator.iter_errors(instance),
        key=lambda error: [str(part) for part in error.absolute_path],
    )
    messages = [f"{_format_path(error.absolute_path)}: {error.message}" for error in errors]
    LOG.debug("schema validation found %d error(s)", len(messages))
    return messages


__all__ = ["load_schema", "validate_document"]
