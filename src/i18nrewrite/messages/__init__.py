"""Message data model and pure text helpers.

Python 3.13+. Zero external dependencies.
"""

from .escaping import apply_text_options, escape_less_than, unescape_html_entities
from .ids import IdGenerator, default_id_generator, fingerprint
from .model import MessageBuilder, MessageModel, MessagePart
from .naming import (
    is_lower_camel_case_with_numeric_suffixes,
    to_lower_camel_case_with_numeric_suffixes,
)
from .template import TemplateSyntaxError, join_adjacent, parse_template, render_template

__all__ = [
    "IdGenerator",
    "MessageBuilder",
    "MessageModel",
    "MessagePart",
    "TemplateSyntaxError",
    "apply_text_options",
    "default_id_generator",
    "escape_less_than",
    "fingerprint",
    "is_lower_camel_case_with_numeric_suffixes",
    "join_adjacent",
    "parse_template",
    "render_template",
    "to_lower_camel_case_with_numeric_suffixes",
    "unescape_html_entities",
]
