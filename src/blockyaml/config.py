"""Runtime settings read from the environment, plus logging setup for the CLI."""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Optional, Union

ENV_LOG_LEVEL = "BLOCKYAML_LOG_LEVEL"
ENV_ENCODING = "BLOCKYAML_ENCODING"
ENV_SCHEMA = "BLOCKYAML_SCHEMA"

DEFAULT_LOG_LEVEL = "WARNING"
DEFAULT_ENCODING = "utf-8"
LOG_FORMAT = "%(asctime)s %(levelname)s %(message)s"


@dataclass(frozen=True)
class Settings:
    log_level: str = DEFAULT_LOG_LEVEL
    encoding: str = DEFAULT_ENCODING
    schema_path: Optional[str] = None

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from ``BLOCKYAML_*`` variables; unset or blank ones keep the defaults."""

        level = (os.getenv(ENV_LOG_LEVEL) or "").strip().upper() or DEFAULT_LOG_LEVEL
        encoding = (os.getenv(ENV_ENCODING) or "").strip() or DEFAULT_ENCODING
        schema = (os.getenv(ENV_SCHEMA) or "").strip() or None
        return cls(log_level=level, encoding=encoding, schema_path=schema)


def resolve_level(level: Union[str, int, None]) -> int:
    if level is None:
        return logging.getLevelName(DEFAULT_LOG_LEVEL)
    if isinstance(level, int):
        return level
    value = logging.getLevelName(level.strip().upper())
    if not isinstance(value, int):
        raise ValueError(f"unknown log level: {level!r}")
    return value


def configure_logging(level: Union[str, int, None] = None) -> None:
    logging.basicConfig(level=resolve_level(level), format=LOG_FORMAT)


__all__ = ["Settings", "configure_logging", "resolve_level"]
