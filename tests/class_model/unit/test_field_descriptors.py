"""Field descriptor tests."""

from __future__ import annotations

import pytest
from schema_typegraph.class_model.field_descriptors import (
    AttributeField,
    AttributeType,
    CollectionField,
    FieldDescriptor,
    FieldKind,
    ReferenceField,
    create_field,
    resolve_attribute_type,
)


@pytest.mark.parametrize(
    ("declared_type", "expected"),
    [
        ("java.lang.String", AttributeType.STRING),
        ("short", AttributeType.SHORT),
        ("java.lang.Integer", AttributeType.INTEGER),
        ("int", AttributeType.INTEGER),
        ("java.lang.Long", AttributeType.LONG),
        ("double", AttributeType.DOUBLE),
        ("java.lang.Float", AttributeType.FLOAT),
        ("java.lang.Boolean", AttributeType.BOOLEAN),
        ("java.util.Date", AttributeType.DATE),
        ("java.math.BigDecimal", AttributeType.ANY),
        ("org.example.Clob", AttributeType.ANY),
    ],
)
def test_declared_types_map_to_value_types(declared_type: str, expected: AttributeType) -> None:
    assert resolve_attribute_type(declared_type) is expected


def test_field_descriptor_base_is_abstract() -> None:
    with pytest.raises(TypeError):
        FieldDescriptor(name="age", declaring_class_name="Employee")  # type: ignore[abstract]


def test_attribute_exposes_short_type_name() -> None:
    field = AttributeField(
        name="age", declaring_class_name="Employee", declared_type="java.lang.Integer"
    )

    assert field.kind is FieldKind.ATTRIBUTE
    assert field.attribute_type == "Integer"
    assert field.value_type is AttributeType.INTEGER
    assert field.display_name() == "age"


def test_create_field_builds_the_matching_variant() -> None:
    reference = create_field(
        FieldKind.REFERENCE,
        name="department",
        declaring_class_name="Employee",
        type_name="Department",
        reverse_field_name="employees",
    )
    collection = create_field(
        FieldKind.COLLECTION,
        name="reports",
        declaring_class_name="Manager",
        type_name="Employee",
    )

    assert isinstance(reference, ReferenceField)
    assert reference.kind is FieldKind.REFERENCE
    assert reference.referenced_class_name == "Department"
    assert reference.has_reverse_reference
    assert isinstance(collection, CollectionField)
    assert collection.kind is FieldKind.COLLECTION
    assert not collection.has_reverse_reference


def test_field_descriptors_are_immutable() -> None:
    field = AttributeField(name="age", declaring_class_name="Employee", declared_type="int")

    with pytest.raises(AttributeError):
        field.name = "years"  # type: ignore[misc]
