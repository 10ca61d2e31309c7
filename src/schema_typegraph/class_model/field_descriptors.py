"""Field descriptor entities."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum


class FieldKind(str, Enum):
    """Kinds of field a class may declare."""

    ATTRIBUTE = "attribute"
    REFERENCE = "reference"
    COLLECTION = "collection"


class AttributeType(str, Enum):
    """Scalar value types an attribute may declare."""

    STRING = "string"
    SHORT = "short"
    INTEGER = "integer"
    LONG = "long"
    DOUBLE = "double"
    FLOAT = "float"
    BOOLEAN = "boolean"
    DATE = "date"
    ANY = "any"


_ATTRIBUTE_TYPES_BY_NAME = {
    "string": AttributeType.STRING,
    "short": AttributeType.SHORT,
    "integer": AttributeType.INTEGER,
    "int": AttributeType.INTEGER,
    "long": AttributeType.LONG,
    "double": AttributeType.DOUBLE,
    "float": AttributeType.FLOAT,
    "boolean": AttributeType.BOOLEAN,
    "date": AttributeType.DATE,
}


def short_type_name(declared_type: str) -> str:
    """Strip any package prefix: ``java.lang.String`` -> ``String``."""
    return declared_type.rsplit(".", 1)[-1]


def resolve_attribute_type(declared_type: str) -> AttributeType:
    """Map a declared type to its value type, falling back to ``ANY``."""
    return _ATTRIBUTE_TYPES_BY_NAME.get(short_type_name(declared_type).lower(), AttributeType.ANY)


@dataclass(frozen=True)
class FieldDescriptor(ABC):
    """Common shape of every declared field.

    ``declaring_class_name`` identifies the class that owns the field. Classes
    inheriting the field share this same object in their merged field map.
    """

    name: str
    declaring_class_name: str

    @property
    @abstractmethod
    def kind(self) -> FieldKind: ...

    def display_name(self) -> str:
        return self.name


@dataclass(frozen=True)
class AttributeField(FieldDescriptor):
    """A scalar field."""

    declared_type: str

    @property
    def kind(self) -> FieldKind:
        return FieldKind.ATTRIBUTE

    @property
    def attribute_type(self) -> str:
        return short_type_name(self.declared_type)

    @property
    def value_type(self) -> AttributeType:
        return resolve_attribute_type(self.declared_type)


@dataclass(frozen=True)
class RelationField(FieldDescriptor):
    """A field pointing at instances of another class."""

    referenced_class_name: str
    reverse_field_name: str | None = None

    @property
    def has_reverse_reference(self) -> bool:
        return self.reverse_field_name is not None


@dataclass(frozen=True)
class ReferenceField(RelationField):
    """Holds exactly one related instance."""

    @property
    def kind(self) -> FieldKind:
        return FieldKind.REFERENCE


@dataclass(frozen=True)
class CollectionField(RelationField):
    """Holds an ordered sequence of related instances."""

    @property
    def kind(self) -> FieldKind:
        return FieldKind.COLLECTION


def create_field(
    kind: FieldKind,
    *,
    name: str,
    declaring_class_name: str,
    type_name: str,
    reverse_field_name: str | None = None,
) -> FieldDescriptor:
    """Build the field variant matching ``kind``."""
    if kind == FieldKind.ATTRIBUTE:
        return AttributeField(
            name=name, declaring_class_name=declaring_class_name, declared_type=type_name
        )
    relation_cls: type[RelationField] = (
        ReferenceField if kind == FieldKind.REFERENCE else CollectionField
    )
    return relation_cls(
        name=name,
        declaring_class_name=declaring_class_name,
        referenced_class_name=type_name,
        reverse_field_name=reverse_field_name,
    )
