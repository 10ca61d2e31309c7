"""XML model document reader.

Reads documents of the form::

    <model name="testmodel" package="org.example.model">
      <class name="Employee" extends="Employable HasAddress" is-interface="false">
        <attribute name="age" type="int"/>
        <reference name="department" referenced-type="Department"
                   reverse-reference="employees"/>
        <collection name="reports" referenced-type="Employee"/>
      </class>
    </model>
"""

from __future__ import annotations

from xml.etree import ElementTree

from schema_typegraph.class_model.field_descriptors import FieldKind, short_type_name
from schema_typegraph.schema_declarations.declaration_events import (
    ClassClose,
    ClassOpen,
    DeclarationEvent,
    DeclarationStream,
    FieldDeclared,
)
from schema_typegraph.schema_declarations.schema_builder import SchemaError

_ROOT_PARENT = "java.lang.Object"
_FIELD_KINDS = {
    "attribute": FieldKind.ATTRIBUTE,
    "reference": FieldKind.REFERENCE,
    "collection": FieldKind.COLLECTION,
}


def read_xml_declarations(text: str) -> DeclarationStream:
    """Parse model XML into a declaration stream."""
    try:
        root = ElementTree.fromstring(text)
    except ElementTree.ParseError as exc:
        raise SchemaError(f"Invalid model XML: {exc}") from exc

    if root.tag != "model":
        raise SchemaError(f"Model XML root must be <model>, found <{root.tag}>.")
    model_name = _require_attribute(root, "name")

    events: list[DeclarationEvent] = []
    for class_element in root:
        if class_element.tag != "class":
            raise SchemaError(f"Unexpected element <{class_element.tag}> inside <model>.")
        events.append(
            ClassOpen(
                name=_require_attribute(class_element, "name"),
                parent_names=_parent_names(class_element.get("extends")),
                is_interface=class_element.get("is-interface", "").lower() == "true",
            )
        )
        events.extend(_field_event(field_element) for field_element in class_element)
        events.append(ClassClose())

    return DeclarationStream(
        model_name=model_name,
        namespace=root.get("package") or None,
        events=tuple(events),
    )


def _parent_names(extends: str | None) -> tuple[str, ...]:
    if not extends:
        return ()
    return tuple(
        short_type_name(parent) for parent in extends.split() if parent != _ROOT_PARENT
    )


def _field_event(element: ElementTree.Element) -> FieldDeclared:
    kind = _FIELD_KINDS.get(element.tag)
    if kind is None:
        raise SchemaError(f"Unexpected element <{element.tag}> inside <class>.")
    name = _require_attribute(element, "name")
    if kind == FieldKind.ATTRIBUTE:
        return FieldDeclared(kind=kind, name=name, type_name=_require_attribute(element, "type"))
    return FieldDeclared(
        kind=kind,
        name=name,
        type_name=_require_attribute(element, "referenced-type"),
        reverse_field_name=element.get("reverse-reference") or None,
    )


def _require_attribute(element: ElementTree.Element, attribute: str) -> str:
    value = (element.get(attribute) or "").strip()
    if not value:
        raise SchemaError(f"<{element.tag}> requires a non-empty '{attribute}' attribute.")
    return value
