"""Typed instance entity."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from schema_typegraph.class_model.class_descriptors import ClassDescriptor, UnknownFieldError

CLASS_KEY = "class"
OBJECT_ID_KEY = "objectId"
RESERVED_KEYS = frozenset({CLASS_KEY, OBJECT_ID_KEY})


@dataclass(frozen=True, eq=False)
class TypedInstance:
    """An object of one model class.

    ``values`` holds every field of the class. Fields never supplied are unset:
    ``None`` for attributes and references, an empty tuple for collections.
    Instances compare and hash by identity.
    """

    descriptor: ClassDescriptor
    values: Mapping[str, object]
    supplied: frozenset[str] = field(default_factory=frozenset)
    object_id: str | None = None

    @property
    def class_name(self) -> str:
        return self.descriptor.name

    def display_name(self) -> str:
        if self.object_id is None:
            return self.class_name
        return f"{self.class_name}:{self.object_id}"

    def get(self, name: str) -> object:
        if name not in self.values:
            raise UnknownFieldError(class_name=self.class_name, field_name=name)
        return self.values[name]

    def is_set(self, name: str) -> bool:
        if name not in self.values:
            raise UnknownFieldError(class_name=self.class_name, field_name=name)
        return name in self.supplied

    def is_instance_of(self, descriptor: ClassDescriptor) -> bool:
        return self.descriptor.is_subclass_of(descriptor)

    def as_dict(self) -> dict[str, Any]:
        """Return the supplied fields as plain nested data, tagged with the class name."""
        result: dict[str, Any] = {CLASS_KEY: self.class_name}
        if self.object_id is not None:
            result[OBJECT_ID_KEY] = self.object_id
        for name, value in self.values.items():
            if name in self.supplied:
                result[name] = _plain_value(value)
        return result


def _plain_value(value: object) -> object:
    if isinstance(value, TypedInstance):
        return value.as_dict()
    if isinstance(value, tuple):
        return [_plain_value(item) for item in value]
    return value
