"""Model registry exports."""

from .hierarchy_resolution import CyclicInheritanceError, UnresolvedParentError
from .model_registry import DEFAULT_BUILTIN_CLASS_NAMES, Model, UnknownClassError, build_model

__all__ = [
    "CyclicInheritanceError",
    "DEFAULT_BUILTIN_CLASS_NAMES",
    "Model",
    "UnknownClassError",
    "UnresolvedParentError",
    "build_model",
]
