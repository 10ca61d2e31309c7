"""YAML/JSON model reader tests."""

from __future__ import annotations

import pytest
from schema_typegraph.class_model.field_descriptors import FieldKind
from schema_typegraph.schema_declarations import (
    ClassClose,
    ClassOpen,
    FieldDeclared,
    SchemaError,
)
from schema_typegraph.schema_sources import parse_mapping_document, read_mapping_declarations


def test_reads_yaml_document_into_ordered_events() -> None:
    document = parse_mapping_document(
        """
name: company
namespace: org.example.company
classes:
  Manager:
    extends: Employee Person
    attributes:
      title: String
    references:
      department: {type: Department, reverse: managers}
    collections:
      reports: Employee
  Employee: {}
""",
        "yaml",
    )

    stream = read_mapping_declarations(document)

    assert stream.model_name == "company"
    assert stream.namespace == "org.example.company"
    assert stream.events == (
        ClassOpen(name="Manager", parent_names=("Employee", "Person")),
        FieldDeclared(kind=FieldKind.ATTRIBUTE, name="title", type_name="String"),
        FieldDeclared(
            kind=FieldKind.REFERENCE,
            name="department",
            type_name="Department",
            reverse_field_name="managers",
        ),
        FieldDeclared(kind=FieldKind.COLLECTION, name="reports", type_name="Employee"),
        ClassClose(),
        ClassOpen(name="Employee"),
        ClassClose(),
    )


def test_reads_json_document() -> None:
    document = parse_mapping_document(
        '{"name": "m", "classes": {"A": {"extends": ["B"], "interface": true}}}', "json"
    )

    stream = read_mapping_declarations(document)

    assert stream.namespace is None
    assert stream.events[0] == ClassOpen(name="A", parent_names=("B",), is_interface=True)


@pytest.mark.parametrize(
    ("document", "message"),
    [
        (["not", "a", "mapping"], "root must be a mapping"),
        ({"classes": {}}, "name must be a non-empty string"),
        ({"name": "m"}, "'classes' mapping"),
        ({"name": "m", "classes": {"A": {"methods": {}}}}, "unknown keys: methods"),
        ({"name": "m", "classes": {"A": {"attributes": ["x"]}}}, "A.attributes must be a mapping"),
        ({"name": "m", "classes": {"A": {"attributes": {"x": {"type": "int"}}}}}, "A.x must name"),
        ({"name": "m", "classes": {"A": {"references": {"x": {}}}}}, "A.x.type"),
        ({"name": "m", "classes": {"A": {"extends": 3}}}, "A.extends"),
        ({"name": "m", "classes": {"A": {"interface": "false"}}}, "A.interface must be true"),
    ],
)
def test_malformed_documents_raise_schema_error(document: object, message: str) -> None:
    with pytest.raises(SchemaError, match=message):
        read_mapping_declarations(document)


def test_unparseable_text_raises_schema_error() -> None:
    with pytest.raises(SchemaError, match="Invalid JSON"):
        parse_mapping_document("{not-json}", "json")
    with pytest.raises(SchemaError, match="Invalid YAML"):
        parse_mapping_document("classes: [unclosed", "yaml")
