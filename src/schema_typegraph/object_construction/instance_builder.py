"""Typed object construction service.

Turns untyped nested data (maps of field name to value, where a value is a
scalar, a nested map or a list of maps) into a tree of ``TypedInstance``
objects guided by the model's class metadata. Construction is depth-first and
eager: every nested reference and collection is built before the enclosing
call returns.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from types import MappingProxyType
from typing import TYPE_CHECKING

from schema_typegraph.class_model.class_descriptors import ClassDescriptor, FieldError
from schema_typegraph.class_model.field_descriptors import (
    AttributeField,
    CollectionField,
    FieldDescriptor,
    RelationField,
)

from .typed_instances import CLASS_KEY, OBJECT_ID_KEY, TypedInstance
from .value_coercion import TypeMismatchError, coerce_attribute_value

if TYPE_CHECKING:
    from schema_typegraph.type_registry.model_registry import Model


class CyclicDataError(FieldError):
    """Raised when input data contains itself on the current construction path."""


class InstanceBuilder:
    """Builds typed instances for one model.

    A builder tracks the containers on its current construction path, so use
    one builder per construction call; the model itself is only read.
    """

    def __init__(self, model: Model) -> None:
        self._model = model
        self._active: set[int] = set()

    def construct(self, class_name: str, data: object) -> TypedInstance:
        """Build an instance of ``class_name`` (or a subclass named by ``data['class']``)."""
        return self._build(self._model.get_class(class_name), data, field_name=None)

    def _build(
        self, declared: ClassDescriptor, data: object, *, field_name: str | None
    ) -> TypedInstance:
        if isinstance(data, TypedInstance):
            if not data.is_instance_of(declared):
                raise TypeMismatchError(
                    class_name=declared.name,
                    field_name=field_name,
                    expected=f"a {declared.name} object",
                    value=data.display_name(),
                )
            return data
        if not isinstance(data, Mapping):
            raise TypeMismatchError(
                class_name=declared.name,
                field_name=field_name,
                expected=f"a {declared.name} field map",
                value=data,
            )

        target = self._select_class(declared, data, field_name=field_name)
        with _PathGuard(self._active, data, class_name=target.name, field_name=field_name):
            values: dict[str, object] = {
                name: _unset_value(field) for name, field in target.all_fields.items()
            }
            supplied: set[str] = set()
            for key, raw_value in data.items():
                if key in (CLASS_KEY, OBJECT_ID_KEY):
                    continue
                field = target.get_field(str(key))
                if raw_value is None:
                    continue
                values[field.name] = self._coerce_field(target, field, raw_value)
                supplied.add(field.name)
            object_id = _object_id(target, data.get(OBJECT_ID_KEY))

        return TypedInstance(
            descriptor=target,
            values=MappingProxyType(values),
            supplied=frozenset(supplied),
            object_id=object_id,
        )

    def _select_class(
        self, declared: ClassDescriptor, data: Mapping[str, object], *, field_name: str | None
    ) -> ClassDescriptor:
        override = data.get(CLASS_KEY)
        if override is None:
            return declared
        if not isinstance(override, str):
            raise TypeMismatchError(
                class_name=declared.name,
                field_name=field_name,
                expected="a class name",
                value=override,
            )
        target = self._model.get_class(override)
        if not target.is_subclass_of(declared):
            raise TypeMismatchError(
                class_name=declared.name,
                field_name=field_name,
                expected=f"{declared.name} or a subclass",
                value=override,
            )
        return target

    def _coerce_field(
        self, owner: ClassDescriptor, field: FieldDescriptor, raw_value: object
    ) -> object:
        if isinstance(field, AttributeField):
            return coerce_attribute_value(field, raw_value, class_name=owner.name)
        if not isinstance(field, RelationField):
            raise TypeError(f"Unsupported field descriptor: {field!r}")

        referenced = self._model.referenced_class(field)
        if isinstance(field, CollectionField):
            return self._build_collection(owner, field, referenced, raw_value)
        if not isinstance(raw_value, Mapping | TypedInstance):
            raise TypeMismatchError(
                class_name=owner.name,
                field_name=field.name,
                expected=f"a {referenced.name} object",
                value=raw_value,
            )
        return self._build(referenced, raw_value, field_name=field.name)

    def _build_collection(
        self,
        owner: ClassDescriptor,
        field: CollectionField,
        referenced: ClassDescriptor,
        raw_value: object,
    ) -> tuple[TypedInstance, ...]:
        if not isinstance(raw_value, Sequence) or isinstance(raw_value, str | bytes):
            raise TypeMismatchError(
                class_name=owner.name,
                field_name=field.name,
                expected=f"a list of {referenced.name} objects",
                value=raw_value,
            )
        with _PathGuard(self._active, raw_value, class_name=owner.name, field_name=field.name):
            items: list[TypedInstance] = []
            for item in raw_value:
                if not isinstance(item, Mapping | TypedInstance):
                    raise TypeMismatchError(
                        class_name=owner.name,
                        field_name=field.name,
                        expected=f"a list of {referenced.name} objects",
                        value=item,
                    )
                items.append(self._build(referenced, item, field_name=field.name))
        return tuple(items)


class _PathGuard:
    """Marks a container as being on the construction path while in scope."""

    def __init__(
        self, active: set[int], container: object, *, class_name: str, field_name: str | None
    ) -> None:
        self._active = active
        self._key = id(container)
        self._class_name = class_name
        self._field_name = field_name

    def __enter__(self) -> None:
        if self._key in self._active:
            raise CyclicDataError(
                f"Input data for '{self._class_name}' refers back to itself.",
                class_name=self._class_name,
                field_name=self._field_name,
            )
        self._active.add(self._key)

    def __exit__(self, *exc_info: object) -> None:
        self._active.discard(self._key)


def _unset_value(field: FieldDescriptor) -> object:
    return () if isinstance(field, CollectionField) else None


def _object_id(descriptor: ClassDescriptor, value: object) -> str | None:
    if value is None:
        return None
    if isinstance(value, str):
        return value
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    raise TypeMismatchError(
        class_name=descriptor.name,
        field_name=OBJECT_ID_KEY,
        expected="a string or integer identifier",
        value=value,
    )
