"""
Document format adapters.

- TxtAdapter: plain text and markdown, whole document translated
- JsonAdapter: JSON files, only "description" string fields translated
"""
from .format_adapter import FormatAdapter
from .txt_adapter import TxtAdapter
from .json_adapter import JsonAdapter, JsonKind, json_kind

__all__ = ['FormatAdapter', 'TxtAdapter', 'JsonAdapter', 'JsonKind', 'json_kind']
