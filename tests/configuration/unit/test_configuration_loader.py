"""Configuration loader tests."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from schema_typegraph.configuration.loader import (
    ConfigurationError,
    load_configuration,
    load_schema_source,
)


def _write_file(path: Path, contents: str) -> Path:
    path.write_text(contents, encoding="utf-8")
    return path


def test_loads_yaml_configuration_with_inline_schema_and_defaults(tmp_path: Path) -> None:
    config_path = _write_file(
        tmp_path / "config.yaml",
        """
schema:
  format: yaml
  inline: |
    name: company
    classes:
      Employee:
        attributes: {name: String}
""",
    )

    configuration = load_configuration(config_path)

    assert configuration.path == config_path
    assert configuration.schema.schema_format == "yaml"
    assert configuration.schema.text.startswith("name: company")
    assert configuration.schema.source_path is None
    assert configuration.builtin_class_names == ("Integer", "Long")


def test_loads_json_configuration_with_schema_path(tmp_path: Path) -> None:
    schema_path = _write_file(tmp_path / "model.xml", '<model name="m"/>')
    config_path = _write_file(
        tmp_path / "config.json",
        json.dumps(
            {
                "schema": {"path": schema_path.name},
                "builtin_classes": ["Integer", "ObjectId"],
            }
        ),
    )

    configuration = load_configuration(config_path)

    assert configuration.schema.schema_format == "xml"
    assert configuration.schema.source_path == schema_path
    assert configuration.schema.text == '<model name="m"/>'
    assert configuration.builtin_class_names == ("Integer", "ObjectId")


def test_declared_format_overrides_suffix(tmp_path: Path) -> None:
    schema_path = _write_file(tmp_path / "model.txt", '{"name": "m", "classes": {}}')

    source = load_schema_source(schema_path, "JSON")

    assert source.schema_format == "json"


@pytest.mark.parametrize(
    ("config_text", "message"),
    [
        ("- just\n- a list\n", "root must be a mapping"),
        ("builtin_classes: []\n", "section 'schema' is required"),
        ("schema:\n  inline: 'x'\n", "schema.format is required"),
        ("schema:\n  inline: 'x'\n  path: model.xml\n", "both inline and path"),
        ("schema: {}\n", "either inline or path"),
        ("schema:\n  path: missing.xml\n", "Schema file not found"),
        ("schema:\n  inline: 'x'\n  format: toml\n", "schema.format must be one of"),
        ("schema:\n  inline: 'x'\n  format: xml\nbuiltin_classes: Integer\n", "list of class"),
        (
            "schema:\n  inline: 'x'\n  format: xml\nbuiltin_classes: [Integer, Integer]\n",
            "duplicates",
        ),
    ],
)
def test_invalid_configuration_raises(tmp_path: Path, config_text: str, message: str) -> None:
    config_path = _write_file(tmp_path / "config.yaml", config_text)

    with pytest.raises(ConfigurationError, match=message):
        load_configuration(config_path)


def test_missing_configuration_file_raises(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError, match="Configuration file not found"):
        load_configuration(tmp_path / "absent.yaml")


def test_schema_format_must_be_inferable(tmp_path: Path) -> None:
    schema_path = _write_file(tmp_path / "model.txt", "<model name='m'/>")

    with pytest.raises(ConfigurationError, match="Cannot infer schema format"):
        load_schema_source(schema_path)
