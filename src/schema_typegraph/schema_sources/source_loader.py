"""Schema source loading service."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from schema_typegraph.configuration.runtime_settings import Configuration, SchemaSourceConfig
from schema_typegraph.schema_declarations.declaration_events import DeclarationStream
from schema_typegraph.schema_declarations.schema_builder import SchemaError
from schema_typegraph.type_registry.model_registry import (
    DEFAULT_BUILTIN_CLASS_NAMES,
    Model,
    build_model,
)

from .mapping_model_reader import parse_mapping_document, read_mapping_declarations
from .xml_model_reader import read_xml_declarations

logger = logging.getLogger(__name__)


def read_declarations(source: SchemaSourceConfig) -> DeclarationStream:
    """Parse schema text into a declaration stream according to its format."""
    if source.schema_format == "xml":
        return read_xml_declarations(source.text)
    if source.schema_format in ("yaml", "json"):
        return read_mapping_declarations(parse_mapping_document(source.text, source.schema_format))
    raise SchemaError(f"Unsupported schema format: {source.schema_format}")


def load_model(
    source: SchemaSourceConfig,
    *,
    builtin_class_names: Iterable[str] = DEFAULT_BUILTIN_CLASS_NAMES,
) -> Model:
    """Read and build the model described by ``source``."""
    stream = read_declarations(source)
    logger.debug(
        "read %d declaration events for model %s from %s",
        len(stream.events),
        stream.model_name,
        source.source_path or "inline text",
    )
    return build_model(stream, builtin_class_names=builtin_class_names)


def load_configured_model(configuration: Configuration) -> Model:
    return load_model(configuration.schema, builtin_class_names=configuration.builtin_class_names)
