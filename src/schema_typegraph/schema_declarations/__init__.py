"""Schema declaration exports."""

from .declaration_events import (
    ClassClose,
    ClassOpen,
    DeclarationEvent,
    DeclarationStream,
    FieldDeclared,
)
from .schema_builder import DuplicateFieldError, RawSchema, SchemaBuilder, SchemaError, build_schema

__all__ = [
    "ClassClose",
    "ClassOpen",
    "DeclarationEvent",
    "DeclarationStream",
    "DuplicateFieldError",
    "FieldDeclared",
    "RawSchema",
    "SchemaBuilder",
    "SchemaError",
    "build_schema",
]
