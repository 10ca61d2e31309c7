"""Schema building service.

Consumes the flat declaration sequence produced by a schema source and turns
it into unlinked class descriptor shells.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from schema_typegraph.class_model.class_descriptors import ClassDescriptor
from schema_typegraph.class_model.field_descriptors import create_field
from schema_typegraph.model_errors import ModelError
from schema_typegraph.object_construction.typed_instances import RESERVED_KEYS

from .declaration_events import (
    ClassClose,
    ClassOpen,
    DeclarationEvent,
    DeclarationStream,
    FieldDeclared,
)

logger = logging.getLogger(__name__)


class SchemaError(ModelError):
    """Raised for malformed schema declarations."""


class DuplicateFieldError(SchemaError):
    """Raised when one class declares the same field name twice."""

    def __init__(self, *, class_name: str, field_name: str) -> None:
        super().__init__(f"Class '{class_name}' declares field '{field_name}' more than once.")
        self.class_name = class_name
        self.field_name = field_name


@dataclass(frozen=True)
class RawSchema:
    """Class shells in declaration order, before the model fix-up pass."""

    model_name: str
    namespace: str | None
    classes: tuple[ClassDescriptor, ...]


class SchemaBuilder:
    """Accumulates declaration events into class descriptor shells."""

    def __init__(self, model_name: str, namespace: str | None = None) -> None:
        self._model_name = model_name
        self._namespace = namespace or None
        self._classes: dict[str, ClassDescriptor] = {}
        self._current: ClassDescriptor | None = None

    def feed(self, event: DeclarationEvent) -> None:
        """Apply one declaration event."""
        if isinstance(event, ClassOpen):
            self._open_class(event)
        elif isinstance(event, FieldDeclared):
            self._declare_field(event)
        elif isinstance(event, ClassClose):
            self._close_class()
        else:
            raise SchemaError(f"Unsupported declaration event: {event!r}")

    def feed_all(self, events: Iterable[DeclarationEvent]) -> None:
        for event in events:
            self.feed(event)

    def finish(self) -> RawSchema:
        """Return the collected class shells; every class must be closed."""
        if self._current is not None:
            raise SchemaError(f"Class '{self._current.name}' was never closed.")
        return RawSchema(
            model_name=self._model_name,
            namespace=self._namespace,
            classes=tuple(self._classes.values()),
        )

    def _open_class(self, event: ClassOpen) -> None:
        if self._current is not None:
            raise SchemaError(
                f"Class '{event.name}' opened while class '{self._current.name}' is still open."
            )
        name = event.name.strip() if isinstance(event.name, str) else ""
        if not name:
            raise SchemaError("Class declarations require a non-empty name.")
        if name in self._classes:
            raise SchemaError(f"Duplicate class name: {name}")
        self._current = ClassDescriptor(
            name,
            tuple(event.parent_names),
            is_interface=event.is_interface,
        )

    def _declare_field(self, event: FieldDeclared) -> None:
        current = self._current
        if current is None:
            raise SchemaError(f"Field '{event.name}' declared outside of any class.")
        if not event.name:
            raise SchemaError(f"Class '{current.name}' declares a field without a name.")
        if event.name in RESERVED_KEYS:
            raise SchemaError(
                f"Field '{current.name}.{event.name}' uses a name reserved for object data."
            )
        if not event.type_name:
            raise SchemaError(f"Field '{current.name}.{event.name}' has no declared type.")
        if current.declares_field(event.name):
            raise DuplicateFieldError(class_name=current.name, field_name=event.name)
        current.add_field(
            create_field(
                event.kind,
                name=event.name,
                declaring_class_name=current.name,
                type_name=event.type_name,
                reverse_field_name=event.reverse_field_name or None,
            ),
            own=True,
        )

    def _close_class(self) -> None:
        if self._current is None:
            raise SchemaError("Class close without a matching class open.")
        self._classes[self._current.name] = self._current
        logger.debug("registered class %s", self._current.name)
        self._current = None


def build_schema(stream: DeclarationStream) -> RawSchema:
    """Run every event of ``stream`` through a fresh builder."""
    builder = SchemaBuilder(stream.model_name, stream.namespace)
    builder.feed_all(stream.events)
    return builder.finish()
