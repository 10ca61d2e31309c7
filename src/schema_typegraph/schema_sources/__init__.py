"""Schema source exports."""

from .mapping_model_reader import parse_mapping_document, read_mapping_declarations
from .source_loader import load_configured_model, load_model, read_declarations
from .xml_model_reader import read_xml_declarations

__all__ = [
    "load_configured_model",
    "load_model",
    "parse_mapping_document",
    "read_declarations",
    "read_mapping_declarations",
    "read_xml_declarations",
]
