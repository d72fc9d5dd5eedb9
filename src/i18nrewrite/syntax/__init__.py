"""Source tree access: ast adapter, visitor and docstring annotations.

Python 3.13+. Zero external dependencies.
"""

from .annotations import DocAnnotations, attribute_docstring, parse_docstring
from .tree import (
    Slot,
    clone,
    is_side_effect_free,
    mark_side_effect_free,
    original_name,
    set_original_name,
    span_of,
)
from .visitor import SourceVisitor

__all__ = [
    "DocAnnotations",
    "Slot",
    "SourceVisitor",
    "attribute_docstring",
    "clone",
    "is_side_effect_free",
    "mark_side_effect_free",
    "original_name",
    "parse_docstring",
    "set_original_name",
    "span_of",
]
