"""Declarative class schemas as a queryable type system."""

import logging

from .class_model import (
    AttributeField,
    AttributeType,
    ClassDescriptor,
    CollectionField,
    FieldDescriptor,
    FieldError,
    FieldKind,
    ReferenceField,
    UnknownFieldError,
)
from .model_errors import ModelError
from .object_construction import CyclicDataError, TypedInstance, TypeMismatchError
from .schema_declarations import (
    ClassClose,
    ClassOpen,
    DeclarationStream,
    DuplicateFieldError,
    FieldDeclared,
    SchemaBuilder,
    SchemaError,
)
from .type_registry import (
    CyclicInheritanceError,
    Model,
    UnknownClassError,
    UnresolvedParentError,
    build_model,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "AttributeField",
    "AttributeType",
    "ClassClose",
    "ClassDescriptor",
    "ClassOpen",
    "CollectionField",
    "CyclicDataError",
    "CyclicInheritanceError",
    "DeclarationStream",
    "DuplicateFieldError",
    "FieldDeclared",
    "FieldDescriptor",
    "FieldError",
    "FieldKind",
    "Model",
    "ModelError",
    "ReferenceField",
    "SchemaBuilder",
    "SchemaError",
    "TypeMismatchError",
    "TypedInstance",
    "UnknownClassError",
    "UnknownFieldError",
    "UnresolvedParentError",
    "build_model",
]
