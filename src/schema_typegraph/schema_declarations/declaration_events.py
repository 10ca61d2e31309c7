"""Schema declaration entities."""

from __future__ import annotations

from dataclasses import dataclass, field

from schema_typegraph.class_model.field_descriptors import FieldKind


@dataclass(frozen=True)
class ClassOpen:
    """Starts the declaration of one class."""

    name: str
    parent_names: tuple[str, ...] = ()
    is_interface: bool = False


@dataclass(frozen=True)
class FieldDeclared:
    """Declares one field on the currently open class.

    ``type_name`` is the declared value type for attributes and the referenced
    class name for references and collections.
    """

    kind: FieldKind
    name: str
    type_name: str
    reverse_field_name: str | None = None


@dataclass(frozen=True)
class ClassClose:
    """Ends the declaration of the currently open class."""


DeclarationEvent = ClassOpen | FieldDeclared | ClassClose


@dataclass(frozen=True)
class DeclarationStream:
    """Model-level metadata plus the ordered declaration events."""

    model_name: str
    namespace: str | None = None
    events: tuple[DeclarationEvent, ...] = field(default_factory=tuple)
