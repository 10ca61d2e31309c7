"""YAML/JSON model document reader.

Documents look like::

    name: company
    namespace: org.example.company
    classes:
      Employee:
        extends: [Thing]
        attributes: {name: String, age: int}
        references:
          department: {type: Department, reverse: employees}
        collections:
          reports: Employee
"""

from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from typing import Any

import yaml

from schema_typegraph.class_model.field_descriptors import FieldKind
from schema_typegraph.schema_declarations.declaration_events import (
    ClassClose,
    ClassOpen,
    DeclarationEvent,
    DeclarationStream,
    FieldDeclared,
)
from schema_typegraph.schema_declarations.schema_builder import SchemaError

_FIELD_SECTIONS = (
    ("attributes", FieldKind.ATTRIBUTE),
    ("references", FieldKind.REFERENCE),
    ("collections", FieldKind.COLLECTION),
)
_CLASS_KEYS = frozenset({"extends", "interface"} | {section for section, _ in _FIELD_SECTIONS})


def parse_mapping_document(text: str, schema_format: str) -> Any:
    """Parse YAML or JSON model text."""
    if schema_format == "json":
        try:
            return json.loads(text)
        except json.JSONDecodeError as exc:
            raise SchemaError(f"Invalid JSON model document: {exc}") from exc
    try:
        return yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise SchemaError(f"Invalid YAML model document: {exc}") from exc


def read_mapping_declarations(document: Any) -> DeclarationStream:
    """Turn a parsed model document into a declaration stream."""
    if not isinstance(document, Mapping):
        raise SchemaError("Model document root must be a mapping.")
    model_name = _require_string(document.get("name"), "name")
    namespace = document.get("namespace")
    if namespace is not None and not isinstance(namespace, str):
        raise SchemaError("namespace must be a string.")
    classes = document.get("classes")
    if not isinstance(classes, Mapping):
        raise SchemaError("Model document requires a 'classes' mapping.")

    events: list[DeclarationEvent] = []
    for class_name, body in classes.items():
        events.extend(_class_events(_require_string(class_name, "class name"), body or {}))
    return DeclarationStream(
        model_name=model_name,
        namespace=namespace or None,
        events=tuple(events),
    )


def _class_events(class_name: str, body: Any) -> list[DeclarationEvent]:
    if not isinstance(body, Mapping):
        raise SchemaError(f"Class '{class_name}' must be a mapping.")
    unknown_keys = sorted(str(key) for key in body if key not in _CLASS_KEYS)
    if unknown_keys:
        raise SchemaError(f"Class '{class_name}' has unknown keys: {', '.join(unknown_keys)}")

    events: list[DeclarationEvent] = [
        ClassOpen(
            name=class_name,
            parent_names=_parent_names(class_name, body.get("extends")),
            is_interface=_interface_flag(class_name, body.get("interface", False)),
        )
    ]
    for section, kind in _FIELD_SECTIONS:
        entries = body.get(section) or {}
        if not isinstance(entries, Mapping):
            raise SchemaError(f"{class_name}.{section} must be a mapping.")
        for field_name, definition in entries.items():
            events.append(_field_event(class_name, kind, str(field_name), definition))
    events.append(ClassClose())
    return events


def _parent_names(class_name: str, value: Any) -> tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        return tuple(value.split())
    if isinstance(value, Sequence):
        return tuple(_require_string(item, f"{class_name}.extends entry") for item in value)
    raise SchemaError(f"{class_name}.extends must be a string or list of strings.")


def _interface_flag(class_name: str, value: Any) -> bool:
    if not isinstance(value, bool):
        raise SchemaError(f"{class_name}.interface must be true or false.")
    return value


def _field_event(class_name: str, kind: FieldKind, name: str, definition: Any) -> FieldDeclared:
    label = f"{class_name}.{name}"
    if isinstance(definition, str):
        return FieldDeclared(kind=kind, name=name, type_name=_require_string(definition, label))
    if kind == FieldKind.ATTRIBUTE or not isinstance(definition, Mapping):
        raise SchemaError(f"{label} must name its type as a string.")
    reverse = definition.get("reverse")
    if reverse is not None and not isinstance(reverse, str):
        raise SchemaError(f"{label}.reverse must be a string.")
    return FieldDeclared(
        kind=kind,
        name=name,
        type_name=_require_string(definition.get("type"), f"{label}.type"),
        reverse_field_name=reverse or None,
    )


def _require_string(value: Any, label: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise SchemaError(f"{label} must be a non-empty string.")
    return value.strip()
