"""Typed object construction exports."""

from .instance_builder import CyclicDataError, InstanceBuilder
from .typed_instances import CLASS_KEY, OBJECT_ID_KEY, TypedInstance
from .value_coercion import TypeMismatchError, coerce_attribute_value

__all__ = [
    "CLASS_KEY",
    "CyclicDataError",
    "InstanceBuilder",
    "OBJECT_ID_KEY",
    "TypeMismatchError",
    "TypedInstance",
    "coerce_attribute_value",
]
