"""``blockyaml`` command: dump, query and validate YAML files."""
from __future__ import annotations

import argparse
import logging
import sys
import textwrap
from typing import List, Optional

from .config import Settings, configure_logging
from .element import Element
from .errors import YamlError
from .parser import load
from .printer import dumps, format_scalar
from .validation import load_schema, validate_document

LOG = logging.getLogger("blockyaml.cli")

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def build_parser(settings: Settings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="blockyaml",
        description="Parse, query and validate block-style YAML files.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=textwrap.dedent(
            """\
            Examples:
              blockyaml dump config.yaml
              blockyaml get config.yaml server.ports.0
              blockyaml validate config.yaml --schema config.schema.json"""
        ),
    )
    parser.add_argument(
        "--log-level",
        default=settings.log_level,
        type=str.upper,
        choices=LOG_LEVELS,
        help="logging level (default: %(default)s, env BLOCKYAML_LOG_LEVEL)",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    dump_parser = sub.add_parser("dump", help="Print the parsed document in canonical form")
    dump_parser.add_argument("path")

    get_parser = sub.add_parser("get", help="Print the value at a dotted key path")
    get_parser.add_argument("path")
    get_parser.add_argument("key", help="dotted path; numeric segments index sequences")

    validate_parser = sub.add_parser("validate", help="Validate against a JSON schema")
    validate_parser.add_argument("path")
    validate_parser.add_argument(
        "--schema",
        default=settings.schema_path,
        help="JSON schema file (default: env BLOCKYAML_SCHEMA)",
    )
    return parser


def lookup(document: Element, dotted: str) -> Element:
    """Walk ``dotted`` through ``document``; numeric segments index sequences."""

    current = document
    for segment in dotted.split("."):
        if current.is_seq() and segment.isdigit():
            current = Element.at(current, int(segment))
        else:
            current = Element.at(current, segment)
    return current


def render(element: Element) -> str:
    if element.is_string():
        return element.as_string()
    if element.is_scalar() or element.is_none():
        return format_scalar(element)
    return dumps(element).rstrip("\n")


def command_dump(path: str) -> int:
    sys.stdout.write(dumps(load(path)))
    return 0


def command_get(path: str, key: str) -> int:
    print(render(lookup(load(path), key)))
    return 0


def command_validate(path: str, schema_path: str) -> int:
    schema = load_schema(schema_path)
    errors = validate_document(load(path), schema)
    if errors:
        for message in errors:
            print(message)
        LOG.warning("%s failed validation with %d error(s)", path, len(errors))
        return 1
    print(f"OK: {path}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    settings = Settings.from_env()
    parser = build_parser(settings)
    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    try:
        if args.command == "dump":
            return command_dump(args.path)
        if args.command == "get":
            return command_get(args.path, args.key)
        if args.command == "validate":
            if not args.schema:
                parser.error("validate needs --schema or BLOCKYAML_SCHEMA")
            return command_validate(args.path, args.schema)
    except YamlError as exc:
        LOG.error("%s", exc)
        return 1
    parser.error(f"unknown command {args.command}")
    return 2


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
