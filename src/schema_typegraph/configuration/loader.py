"""Configuration loader service."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

import yaml

from schema_typegraph.type_registry.model_registry import DEFAULT_BUILTIN_CLASS_NAMES

from .runtime_settings import SCHEMA_FORMATS, Configuration, SchemaSourceConfig

_FORMATS_BY_SUFFIX = {
    ".xml": "xml",
    ".yaml": "yaml",
    ".yml": "yaml",
    ".json": "json",
}


class ConfigurationError(Exception):
    """Raised when the configuration file is invalid."""


def load_configuration(config_path: Path | str) -> Configuration:
    """Load and validate the configuration file."""
    path = Path(config_path)
    if not path.exists():
        raise ConfigurationError(f"Configuration file not found: {path}")

    text = path.read_text(encoding="utf-8")
    try:
        parsed = yaml.safe_load(text)
    except yaml.YAMLError as exc:  # pragma: no cover - exercised indirectly
        raise ConfigurationError(f"Failed to parse configuration file: {exc}") from exc

    if parsed is None:
        parsed = {}

    if not isinstance(parsed, Mapping):
        raise ConfigurationError("Configuration root must be a mapping.")

    schema = _parse_schema_section(parsed.get("schema"), path.parent)
    builtin_class_names = _parse_builtin_classes(parsed.get("builtin_classes"))
    return Configuration(path=path, schema=schema, builtin_class_names=builtin_class_names)


def load_schema_source(
    schema_path: Path | str, schema_format: str | None = None
) -> SchemaSourceConfig:
    """Read a schema file directly, inferring its format from the suffix when not given."""
    path = Path(schema_path)
    if not path.exists():
        raise ConfigurationError(f"Schema file not found: {path}")
    resolved_format = _resolve_format(schema_format, path)
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        raise ConfigurationError("Schema text cannot be empty.")
    return SchemaSourceConfig(schema_format=resolved_format, text=text, source_path=path)


def infer_schema_format(path: Path) -> str | None:
    return _FORMATS_BY_SUFFIX.get(path.suffix.lower())


def _parse_schema_section(value: Any, base_path: Path) -> SchemaSourceConfig:
    section = _require_mapping(value, "schema")
    inline = section.get("inline")
    path_value = section.get("path")
    declared_format = _optional_string(section.get("format"), "schema.format")
    if inline and path_value:
        raise ConfigurationError("Schema definition must not set both inline and path.")
    if inline:
        if not isinstance(inline, str):
            raise ConfigurationError("Schema inline value must be a string.")
        if declared_format is None:
            raise ConfigurationError("schema.format is required for inline schemas.")
        if not inline.strip():
            raise ConfigurationError("Schema text cannot be empty.")
        return SchemaSourceConfig(
            schema_format=_resolve_format(declared_format, None),
            text=inline,
            source_path=None,
        )
    if path_value:
        if not isinstance(path_value, str):
            raise ConfigurationError("Schema path must be a string.")
        return load_schema_source(_resolve_path(base_path, path_value), declared_format)
    raise ConfigurationError("Schema definition requires either inline or path.")


def _resolve_format(declared_format: str | None, path: Path | None) -> str:
    if declared_format is not None:
        normalized = declared_format.lower()
        if normalized not in SCHEMA_FORMATS:
            supported = ", ".join(SCHEMA_FORMATS)
            raise ConfigurationError(
                f"schema.format must be one of {supported}, got '{declared_format}'."
            )
        return normalized
    inferred = infer_schema_format(path) if path is not None else None
    if inferred is None:
        raise ConfigurationError(f"Cannot infer schema format from '{path}'; set schema.format.")
    return inferred


def _parse_builtin_classes(value: Any) -> tuple[str, ...]:
    if value is None:
        return DEFAULT_BUILTIN_CLASS_NAMES
    if isinstance(value, str) or not isinstance(value, Sequence):
        raise ConfigurationError("builtin_classes must be a list of class names.")
    names = []
    for item in value:
        names.append(_require_non_empty_string(item, "builtin_classes entry"))
    if len(set(names)) != len(names):
        raise ConfigurationError("builtin_classes must not contain duplicates.")
    return tuple(names)


def _resolve_path(base_path: Path, raw_path: str) -> Path:
    candidate = Path(raw_path)
    if not candidate.is_absolute():
        return (base_path / candidate).resolve()
    return candidate


def _require_mapping(value: Any, section_name: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise ConfigurationError(f"Configuration section '{section_name}' is required.")
    return value


def _require_non_empty_string(value: Any, field_name: str) -> str:
    if not isinstance(value, str):
        raise ConfigurationError(f"{field_name} must be a string.")
    stripped = value.strip()
    if not stripped:
        raise ConfigurationError(f"{field_name} must not be empty.")
    return stripped


def _optional_string(value: Any, field_name: str) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ConfigurationError(f"{field_name} must be a string.")
    stripped = value.strip()
    return stripped or None
