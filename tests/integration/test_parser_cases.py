from __future__ import annotations

from pathlib import Path

import pytest

from blockyaml import YamlParser


def _parse(path: Path) -> YamlParser:
    parser = YamlParser()
    parser.parse(path)
    return parser


def test_nested_types(fixtures_dir: Path) -> None:
    root = _parse(fixtures_dir / "nested_types.yaml").root()
    config = root["config"].as_map()

    server = config["server"].as_map()
    assert server["host"].as_string() == "localhost"
    assert [port.as_int() for port in server["ports"].as_seq()] == [8080, 8081, 8082]
    assert server["enabled"].as_bool() is True
    assert server["timeout"].as_double() == pytest.approx(30.5)

    databases = config["databases"].as_seq()
    assert len(databases) == 2
    main, replica = (db.as_map() for db in databases)
    assert main["name"].as_string() == "main"
    assert main["type"].as_string() == "postgresql"
    assert main["settings"].to_python() == {
        "max_connections": 100,
        "timeout": 5.0,
        "retry": True,
    }
    assert replica["name"].as_string() == "replica"
    replica_settings = replica["settings"].as_map()
    assert replica_settings["max_connections"].as_int() == 50
    assert replica_settings["timeout"].as_double() == pytest.approx(5.0)
    assert replica_settings["retry"].as_bool() is True

    features = config["features"].as_map()
    logging_section = features["logging"].as_map()
    assert logging_section["level"].as_string() == "INFO"
    assert logging_section["formats"].to_python() == ["json", "text"]
    cache = features["cache"].to_python()
    assert cache == {
        "enabled": True,
        "max_size": 1024,
        "string_items": ["item1", "item2", "item3"],
        "number_items": [42, 55, 67],
    }


def test_anchors_and_merging(fixtures_dir: Path) -> None:
    data = _parse(fixtures_dir / "anchors_and_merging.yaml").document().to_python()

    assert data["defaults"] == {
        "timeout": 30,
        "retries": 3,
        "logging": {"enabled": True, "level": "INFO", "format": "json"},
    }
    assert data["service1"] == {
        "timeout": 30,
        "retries": 3,
        "name": "service1",
        "logging": {"enabled": True, "level": "DEBUG", "format": "json"},
    }
    assert data["service2"] == {
        "timeout": 60,
        "retries": 3,
        "name": "service2",
        "logging": {"enabled": True, "level": "DEBUG", "format": "json"},
    }
    assert data["shared_config"] == {
        "database": {"host": "localhost", "port": 5432},
        "cache": {"enabled": True},
    }
    assert data["development"]["environment"] == "dev"
    assert data["development"]["debug"] is True
    assert data["development"]["database"] == {"host": "localhost", "port": 5432}
    assert data["production"]["debug"] is False
    assert data["production"]["database"] == {"host": "prod-db.example.com"}
    assert data["production"]["cache"] == {"enabled": True}


def test_common_features(fixtures_dir: Path) -> None:
    data = _parse(fixtures_dir / "common_features.yaml").document().to_python()

    assert data["comments"] == {"inline_comment": "value", "after_comment": "value"}

    strings = data["multiline_strings"]
    assert strings["folded"] == (
        "This is a long text that will be folded into a single line, removing the newlines."
    )
    assert strings["literal"] == (
        "This is a long text that will\npreserve its newlines and\n"
        "formatting exactly as written.\n"
    )
    assert strings["indented_block"] == "First line\nIndented line\nMore indented\nBack to start\n"

    sequences = data["sequences"]
    assert sequences["simple"] == ["item1", "item2"]
    assert sequences["nested"] == [{}, {}]
    assert sequences["inline"] == ["item1", "item2", "item3"]

    anchors = data["anchors_and_aliases"]
    assert anchors["service1"] == {"timeout": 30, "retries": 3, "name": "service1"}
    assert anchors["service2"] == {"timeout": 60, "retries": 3, "name": "service2"}
