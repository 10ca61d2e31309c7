"""Class descriptor entity.

A ``ClassDescriptor`` starts life as a shell holding its name, declared parent
names and own fields. The model fix-up pass links it to its resolved parents,
records the ancestor chain, merges inherited fields and finally freezes it.
Descriptors never hold a reference to the model that owns them.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

from schema_typegraph.model_errors import ModelError

from .field_descriptors import (
    AttributeField,
    CollectionField,
    FieldDescriptor,
    ReferenceField,
)


class FrozenClassError(ModelError):
    """Raised when a frozen class descriptor would be modified."""


class FieldError(ModelError):
    """Base class for failures tied to one field of one class."""

    def __init__(self, message: str, *, class_name: str, field_name: str | None) -> None:
        super().__init__(message)
        self.class_name = class_name
        self.field_name = field_name


class UnknownFieldError(FieldError):
    """Raised when a class has no field of the requested name."""

    def __init__(self, *, class_name: str, field_name: str) -> None:
        super().__init__(
            f"Class '{class_name}' has no field '{field_name}'.",
            class_name=class_name,
            field_name=field_name,
        )


class ClassDescriptor:
    """Metadata for one class of a model."""

    def __init__(
        self,
        name: str,
        parent_names: tuple[str, ...] = (),
        *,
        is_interface: bool = False,
        is_builtin: bool = False,
    ) -> None:
        self.name = name
        self.parent_names = tuple(parent_names)
        self.is_interface = is_interface
        self.is_builtin = is_builtin
        self._own_fields: list[FieldDescriptor] = []
        self._all_fields: dict[str, FieldDescriptor] = {}
        self._parents: tuple[ClassDescriptor, ...] | None = None
        self._ancestors: tuple[ClassDescriptor, ...] | None = None
        self._frozen = False

    def __repr__(self) -> str:
        return f"ClassDescriptor(name={self.name!r}, parent_names={self.parent_names!r})"

    def display_name(self) -> str:
        return self.name

    @property
    def is_frozen(self) -> bool:
        return self._frozen

    @property
    def own_fields(self) -> tuple[FieldDescriptor, ...]:
        """Fields declared directly on this class, in declaration order."""
        return tuple(self._own_fields)

    @property
    def all_fields(self) -> Mapping[str, FieldDescriptor]:
        """Own and inherited fields by name. Complete only after fix-up."""
        return MappingProxyType(self._all_fields)

    @property
    def parents(self) -> tuple[ClassDescriptor, ...]:
        if self._parents is None:
            raise ModelError(f"Parents of class '{self.name}' have not been resolved yet.")
        return self._parents

    @property
    def ancestors(self) -> tuple[ClassDescriptor, ...]:
        """Self first, then every ancestor depth-first in declared parent order."""
        if self._ancestors is None:
            raise ModelError(f"Ancestors of class '{self.name}' have not been resolved yet.")
        return self._ancestors

    def add_field(self, field: FieldDescriptor, *, own: bool = False) -> bool:
        """Add ``field`` unless a field of that name is already present.

        Returns False when the field was ignored because the name is taken.
        """
        self._ensure_mutable()
        if field.name in self._all_fields:
            return False
        self._all_fields[field.name] = field
        if own:
            self._own_fields.append(field)
        return True

    def declares_field(self, name: str) -> bool:
        return any(field.name == name for field in self._own_fields)

    def has_field(self, name: str) -> bool:
        return name in self._all_fields

    def get_field(self, name: str) -> FieldDescriptor:
        try:
            return self._all_fields[name]
        except KeyError:
            raise UnknownFieldError(class_name=self.name, field_name=name) from None

    def fields(self) -> tuple[FieldDescriptor, ...]:
        return tuple(self._all_fields.values())

    def attributes(self) -> tuple[AttributeField, ...]:
        return tuple(f for f in self._all_fields.values() if isinstance(f, AttributeField))

    def references(self) -> tuple[ReferenceField, ...]:
        return tuple(f for f in self._all_fields.values() if isinstance(f, ReferenceField))

    def collections(self) -> tuple[CollectionField, ...]:
        return tuple(f for f in self._all_fields.values() if isinstance(f, CollectionField))

    def is_subclass_of(self, other: ClassDescriptor) -> bool:
        """True when ``other`` is this class or one of its ancestors."""
        return other is self or other in self.ancestors

    def link(
        self, parents: tuple[ClassDescriptor, ...], ancestors: tuple[ClassDescriptor, ...]
    ) -> None:
        """Record resolved parents and the ancestor chain (fix-up pass only)."""
        self._ensure_mutable()
        self._parents = parents
        self._ancestors = ancestors

    def freeze(self) -> None:
        self._frozen = True

    def _ensure_mutable(self) -> None:
        if self._frozen:
            raise FrozenClassError(f"Class '{self.name}' is frozen and cannot be modified.")
