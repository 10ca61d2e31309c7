"""Model registry service.

The ``Model`` owns every class descriptor of a schema. Building one runs the
fix-up passes (parent resolution with cycle detection, then field flattening)
and freezes the result, after which the model is read-only and may be shared
between threads without locking.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from types import MappingProxyType

from schema_typegraph.class_model.class_descriptors import ClassDescriptor
from schema_typegraph.class_model.field_descriptors import FieldDescriptor, RelationField
from schema_typegraph.model_errors import ModelError
from schema_typegraph.object_construction.instance_builder import InstanceBuilder
from schema_typegraph.object_construction.typed_instances import CLASS_KEY, TypedInstance
from schema_typegraph.schema_declarations.declaration_events import DeclarationStream
from schema_typegraph.schema_declarations.schema_builder import RawSchema, SchemaError, build_schema

from .hierarchy_resolution import flatten_fields, resolve_ancestors

logger = logging.getLogger(__name__)

DEFAULT_BUILTIN_CLASS_NAMES: tuple[str, ...] = ("Integer", "Long")


class UnknownClassError(ModelError):
    """Raised when a class name is not present in the model."""

    def __init__(self, class_name: str) -> None:
        super().__init__(f"Class '{class_name}' is not in the model.")
        self.class_name = class_name


ClassRef = str | ClassDescriptor


class Model:
    """Registry of all classes of one schema."""

    def __init__(
        self,
        raw_schema: RawSchema,
        *,
        builtin_class_names: Iterable[str] = DEFAULT_BUILTIN_CLASS_NAMES,
    ) -> None:
        self.name = raw_schema.model_name
        self.namespace = raw_schema.namespace
        classes: dict[str, ClassDescriptor] = {}
        for builtin_name in builtin_class_names:
            classes[builtin_name] = ClassDescriptor(builtin_name, is_builtin=True)
        for descriptor in raw_schema.classes:
            if descriptor.name in classes:
                raise SchemaError(f"Class '{descriptor.name}' collides with a built-in class.")
            classes[descriptor.name] = descriptor
        self._classes: Mapping[str, ClassDescriptor] = MappingProxyType(classes)

        resolve_ancestors(classes.values(), self._lookup)
        for descriptor in classes.values():
            flatten_fields(descriptor)
            descriptor.freeze()
        logger.debug("model %s built with %d classes", self.name, len(raw_schema.classes))

    def __repr__(self) -> str:
        return f"Model(name={self.name!r}, namespace={self.namespace!r})"

    def get_class(self, name: str) -> ClassDescriptor:
        """Return the class called ``name``, short or namespace-qualified."""
        descriptor = self._lookup(name)
        if descriptor is None:
            raise UnknownClassError(name)
        return descriptor

    def has_class(self, name: str) -> bool:
        return self._lookup(name) is not None

    def all_classes(self, *, include_builtins: bool = False) -> frozenset[ClassDescriptor]:
        return frozenset(
            descriptor
            for descriptor in self._classes.values()
            if include_builtins or not descriptor.is_builtin
        )

    def find_classes_declaring_field(self, field_name: str) -> frozenset[ClassDescriptor]:
        """Classes whose own (not inherited) fields include ``field_name``."""
        return frozenset(
            descriptor
            for descriptor in self._classes.values()
            if descriptor.declares_field(field_name)
        )

    def find_class_by_reverse_reference(self, field_name: str) -> ClassDescriptor | None:
        """Return any one class holding a reference whose reverse link is ``field_name``."""
        for descriptor in self._classes.values():
            for reference in descriptor.references():
                if reference.reverse_field_name == field_name:
                    return descriptor
        return None

    def is_subclass_of(self, subclass: ClassRef, superclass: ClassRef) -> bool:
        return self._descriptor(subclass).is_subclass_of(self._descriptor(superclass))

    def referenced_class(self, field: RelationField) -> ClassDescriptor:
        """Resolve the class at the other end of a reference or collection."""
        return self.get_class(field.referenced_class_name)

    def reverse_field(self, field: RelationField) -> FieldDescriptor | None:
        """Return the field on the referenced class that points back, if declared."""
        if field.reverse_field_name is None:
            return None
        return self.referenced_class(field).get_field(field.reverse_field_name)

    def construct(self, class_name: str, data: object) -> TypedInstance:
        """Build a typed instance of ``class_name`` from untyped nested data."""
        return InstanceBuilder(self).construct(class_name, data)

    def make_new(self, data: Mapping[str, object]) -> TypedInstance:
        """Build a typed instance whose class is named by the ``class`` key of ``data``."""
        class_name = data.get(CLASS_KEY)
        if not isinstance(class_name, str) or not class_name:
            raise ModelError(f"make_new requires a '{CLASS_KEY}' key naming the class.")
        return self.construct(class_name, data)

    def _descriptor(self, ref: ClassRef) -> ClassDescriptor:
        return ref if isinstance(ref, ClassDescriptor) else self.get_class(ref)

    def _lookup(self, name: str) -> ClassDescriptor | None:
        descriptor = self._classes.get(name)
        if descriptor is not None or not self.namespace:
            return descriptor
        prefix = f"{self.namespace}."
        if name.startswith(prefix):
            return self._classes.get(name[len(prefix) :])
        return self._classes.get(prefix + name)


def build_model(
    stream: DeclarationStream,
    *,
    builtin_class_names: Iterable[str] = DEFAULT_BUILTIN_CLASS_NAMES,
) -> Model:
    """Build and fix up a model from a declaration stream."""
    return Model(build_schema(stream), builtin_class_names=builtin_class_names)
