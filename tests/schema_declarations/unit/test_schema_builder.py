"""Schema builder tests."""

from __future__ import annotations

import pytest
from schema_typegraph.class_model.field_descriptors import (
    AttributeField,
    FieldKind,
    ReferenceField,
)
from schema_typegraph.schema_declarations import (
    ClassClose,
    ClassOpen,
    DeclarationStream,
    DuplicateFieldError,
    FieldDeclared,
    SchemaBuilder,
    SchemaError,
    build_schema,
)


def _attribute(name: str, type_name: str = "java.lang.String") -> FieldDeclared:
    return FieldDeclared(kind=FieldKind.ATTRIBUTE, name=name, type_name=type_name)


def test_builds_class_shells_in_declaration_order() -> None:
    stream = DeclarationStream(
        model_name="company",
        namespace="org.example.company",
        events=(
            ClassOpen(name="Employee"),
            _attribute("name"),
            _attribute("age", "int"),
            ClassClose(),
            ClassOpen(name="Manager", parent_names=("Employee",), is_interface=False),
            FieldDeclared(
                kind=FieldKind.REFERENCE,
                name="department",
                type_name="Department",
                reverse_field_name="managers",
            ),
            ClassClose(),
        ),
    )

    schema = build_schema(stream)

    assert schema.model_name == "company"
    assert schema.namespace == "org.example.company"
    assert [descriptor.name for descriptor in schema.classes] == ["Employee", "Manager"]
    employee, manager = schema.classes
    assert [field.name for field in employee.own_fields] == ["name", "age"]
    assert isinstance(employee.own_fields[1], AttributeField)
    assert manager.parent_names == ("Employee",)
    department = manager.own_fields[0]
    assert isinstance(department, ReferenceField)
    assert department.declaring_class_name == "Manager"
    assert department.reverse_field_name == "managers"


def test_class_shell_carries_only_own_fields_before_fix_up() -> None:
    builder = SchemaBuilder("company")
    builder.feed_all(
        [ClassOpen(name="Manager", parent_names=("Employee",)), _attribute("title"), ClassClose()]
    )

    (manager,) = builder.finish().classes

    assert list(manager.all_fields) == ["title"]


def test_field_outside_class_is_rejected() -> None:
    builder = SchemaBuilder("company")

    with pytest.raises(SchemaError, match="outside of any class"):
        builder.feed(_attribute("name"))


def test_duplicate_class_name_is_rejected() -> None:
    builder = SchemaBuilder("company")
    builder.feed_all([ClassOpen(name="Employee"), ClassClose()])

    with pytest.raises(SchemaError, match="Duplicate class name: Employee"):
        builder.feed(ClassOpen(name="Employee"))


def test_close_without_open_is_rejected() -> None:
    builder = SchemaBuilder("company")

    with pytest.raises(SchemaError, match="without a matching class open"):
        builder.feed(ClassClose())


def test_nested_class_open_is_rejected() -> None:
    builder = SchemaBuilder("company")
    builder.feed(ClassOpen(name="Employee"))

    with pytest.raises(SchemaError, match="still open"):
        builder.feed(ClassOpen(name="Manager"))


def test_unclosed_class_is_rejected_at_finish() -> None:
    builder = SchemaBuilder("company")
    builder.feed(ClassOpen(name="Employee"))

    with pytest.raises(SchemaError, match="never closed"):
        builder.finish()


def test_duplicate_field_in_one_class_is_rejected() -> None:
    builder = SchemaBuilder("company")
    builder.feed_all([ClassOpen(name="Employee"), _attribute("name")])

    with pytest.raises(DuplicateFieldError) as exc_info:
        builder.feed(_attribute("name", "int"))

    assert exc_info.value.class_name == "Employee"
    assert exc_info.value.field_name == "name"


@pytest.mark.parametrize("field_name", ["class", "objectId"])
def test_field_names_reserved_for_object_data_are_rejected(field_name: str) -> None:
    builder = SchemaBuilder("company")
    builder.feed(ClassOpen(name="Employee"))

    with pytest.raises(SchemaError, match="reserved for object data"):
        builder.feed(_attribute(field_name))


def test_same_field_name_in_different_classes_is_allowed() -> None:
    schema = build_schema(
        DeclarationStream(
            model_name="company",
            events=(
                ClassOpen(name="Employee"),
                _attribute("name"),
                ClassClose(),
                ClassOpen(name="Department"),
                _attribute("name"),
                ClassClose(),
            ),
        )
    )

    assert len(schema.classes) == 2


def test_field_without_type_is_rejected() -> None:
    builder = SchemaBuilder("company")
    builder.feed(ClassOpen(name="Employee"))

    with pytest.raises(SchemaError, match="no declared type"):
        builder.feed(_attribute("name", ""))
