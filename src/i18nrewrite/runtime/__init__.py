"""Message bundles and the substitution engine.

Python 3.13+. Babel is needed only for CatalogMessageBundle.
"""

from .bundle import CatalogMessageBundle, MessageBundle, SimpleMessageBundle
from .marker import definition_marker, fallback_marker, marker_fields
from .replacement import build_replacement
from .substitution import (
    SubstitutionEngine,
    complete_messages,
    protect_messages,
    replace_messages,
)

__all__ = [
    "CatalogMessageBundle",
    "MessageBundle",
    "SimpleMessageBundle",
    "SubstitutionEngine",
    "build_replacement",
    "complete_messages",
    "definition_marker",
    "fallback_marker",
    "marker_fields",
    "protect_messages",
    "replace_messages",
]
