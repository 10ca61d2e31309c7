"""Class hierarchy fix-up passes."""

from __future__ import annotations

from collections.abc import Callable, Iterable

from schema_typegraph.class_model.class_descriptors import ClassDescriptor
from schema_typegraph.model_errors import ModelError

ClassLookup = Callable[[str], ClassDescriptor | None]


class UnresolvedParentError(ModelError):
    """Raised when a class extends a class the model does not define."""

    def __init__(self, *, class_name: str, parent_name: str) -> None:
        super().__init__(f"Class '{class_name}' extends unknown class '{parent_name}'.")
        self.class_name = class_name
        self.parent_name = parent_name


class CyclicInheritanceError(ModelError):
    """Raised when a class is (transitively) its own parent."""

    def __init__(self, cycle: tuple[str, ...]) -> None:
        super().__init__(f"Cyclic inheritance detected: {' -> '.join(cycle)}")
        self.cycle = cycle


class _AncestorResolver:
    """Depth-first ancestor chain computation with memoized results."""

    def __init__(self, lookup: ClassLookup) -> None:
        self._lookup = lookup
        self._chains: dict[str, tuple[ClassDescriptor, ...]] = {}
        self._visiting: list[str] = []

    def chain_for(self, descriptor: ClassDescriptor) -> tuple[ClassDescriptor, ...]:
        resolved = self._chains.get(descriptor.name)
        if resolved is not None:
            return resolved
        if descriptor.name in self._visiting:
            start = self._visiting.index(descriptor.name)
            raise CyclicInheritanceError((*self._visiting[start:], descriptor.name))

        self._visiting.append(descriptor.name)
        parents = tuple(self._resolve_parent(descriptor, name) for name in descriptor.parent_names)
        chain: list[ClassDescriptor] = [descriptor]
        seen = {descriptor.name}
        for parent in parents:
            for ancestor in self.chain_for(parent):
                if ancestor.name not in seen:
                    seen.add(ancestor.name)
                    chain.append(ancestor)
        self._visiting.pop()

        resolved = tuple(chain)
        descriptor.link(parents, resolved)
        self._chains[descriptor.name] = resolved
        return resolved

    def _resolve_parent(self, descriptor: ClassDescriptor, parent_name: str) -> ClassDescriptor:
        parent = self._lookup(parent_name)
        if parent is None:
            raise UnresolvedParentError(class_name=descriptor.name, parent_name=parent_name)
        return parent


def resolve_ancestors(classes: Iterable[ClassDescriptor], lookup: ClassLookup) -> None:
    """Link every class to its parents and record its ancestor chain."""
    resolver = _AncestorResolver(lookup)
    for descriptor in classes:
        resolver.chain_for(descriptor)


def flatten_fields(descriptor: ClassDescriptor) -> None:
    """Merge the own fields of every ancestor into ``descriptor``.

    The ancestor chain is walked nearest first, so a name already present is
    never replaced: own fields beat inherited ones, and earlier-visited
    ancestors beat later ones.
    """
    for ancestor in descriptor.ancestors[1:]:
        for field in ancestor.own_fields:
            descriptor.add_field(field)
