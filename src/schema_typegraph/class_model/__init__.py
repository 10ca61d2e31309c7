"""Class model exports."""

from .class_descriptors import ClassDescriptor, FieldError, FrozenClassError, UnknownFieldError
from .field_descriptors import (
    AttributeField,
    AttributeType,
    CollectionField,
    FieldDescriptor,
    FieldKind,
    ReferenceField,
    RelationField,
    create_field,
    resolve_attribute_type,
)

__all__ = [
    "AttributeField",
    "AttributeType",
    "ClassDescriptor",
    "CollectionField",
    "FieldDescriptor",
    "FieldError",
    "FieldKind",
    "FrozenClassError",
    "ReferenceField",
    "RelationField",
    "UnknownFieldError",
    "create_field",
    "resolve_attribute_type",
]
