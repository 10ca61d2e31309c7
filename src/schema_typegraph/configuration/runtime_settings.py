"""Configuration domain entities."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

SCHEMA_FORMATS = ("xml", "yaml", "json")


@dataclass(frozen=True)
class SchemaSourceConfig:
    """Normalized schema source settings."""

    schema_format: str
    text: str
    source_path: Path | None


@dataclass(frozen=True)
class Configuration:
    """Top-level configuration aggregate."""

    path: Path
    schema: SchemaSourceConfig
    builtin_class_names: tuple[str, ...]
