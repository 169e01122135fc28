"""Configuration text retrieval: endpoint selection and textarea extraction."""

from .core import ExtractionMode, config_request, fetch_config
from .html import extract_textarea

__all__ = [
    "ExtractionMode",
    "config_request",
    "fetch_config",
    "extract_textarea",
]
