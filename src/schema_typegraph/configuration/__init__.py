"""Configuration domain exports."""

from .loader import ConfigurationError, infer_schema_format, load_configuration, load_schema_source
from .runtime_settings import SCHEMA_FORMATS, Configuration, SchemaSourceConfig

__all__ = [
    "Configuration",
    "ConfigurationError",
    "SCHEMA_FORMATS",
    "SchemaSourceConfig",
    "infer_schema_format",
    "load_configuration",
    "load_schema_source",
]
