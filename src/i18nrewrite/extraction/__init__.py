"""Message definition recognition and validation.

Python 3.13+. Zero external dependencies.
"""

from .declarative import ParsedDefinition, parse_get_msg_call, parse_marker_call
from .definition import FallbackPair, MessageCollector, MessageConsumer, MessageDefinition
from .extractor import MessageExtractor, extract_messages
from .legacy import LegacyFunction, parse_legacy_function, parse_legacy_string

__all__ = [
    "FallbackPair",
    "LegacyFunction",
    "MessageCollector",
    "MessageConsumer",
    "MessageDefinition",
    "MessageExtractor",
    "ParsedDefinition",
    "extract_messages",
    "parse_get_msg_call",
    "parse_legacy_function",
    "parse_legacy_string",
    "parse_marker_call",
]
