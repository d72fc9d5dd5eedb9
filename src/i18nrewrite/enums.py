"""Enumerations for i18nrewrite type-safe constants.

Uses StrEnum (Python 3.11+) for automatic string conversion.
StrEnum members are strings themselves, eliminating boilerplate __str__ methods.

Python 3.13+.
"""

from enum import StrEnum


class MessageStyle(StrEnum):
    """How strictly message keys and legacy forms are policed.

    StrEnum provides automatic string conversion: str(MessageStyle.CLOSURE) == "closure"
    """

    LEGACY = "legacy"
    """Legacy string and function forms are extracted; MSG_*_HELP names are not messages."""

    RELAX = "relax"
    """Same extraction as LEGACY; legacy forms still draw a warning."""

    CLOSURE = "closure"
    """Only get_msg() definitions are extracted; legacy forms are warned and skipped."""


class ReplacementMode(StrEnum):
    """Run mode of the substitution engine."""

    FULL_REPLACE = "full_replace"
    """get_msg() definitions become final localized expressions in one pass."""

    PROTECT = "protect"
    """get_msg() definitions become side-effect-free marker calls."""

    COMPLETE = "complete"
    """Marker calls become final localized expressions."""


class MessageOption(StrEnum):
    """Boolean flags recognized in the get_msg() options bag."""

    HTML = "html"
    """Escape every '<' in message text as '&lt;'."""

    UNESCAPE_HTML_ENTITIES = "unescapeHtmlEntities"
    """Decode the five named HTML entities in message text."""


class PartKind(StrEnum):
    """Tag of a MessagePart."""

    STRING = "string"
    PLACEHOLDER = "placeholder"


class DefinitionKind(StrEnum):
    """Source shape a message definition was recognized from."""

    DECLARATIVE = "declarative"
    """MSG_X = get_msg(template, placeholders?, options?)"""

    LEGACY_STRING = "legacy_string"
    """MSG_X = 'literal' + 'concatenation'"""

    LEGACY_FUNCTION = "legacy_function"
    """MSG_X = lambda name: 'text ' + name  /  def MSG_X(name): return ..."""

    MARKER = "marker"
    """__define_msg__({...}, {...}) produced by the protect phase"""


class DefinitionState(StrEnum):
    """Lifecycle of one definition across the two-phase route."""

    NOT_VISITED = "not_visited"
    PROTECTED = "protected"
    REPLACED = "replaced"


__all__ = [
    "DefinitionKind",
    "DefinitionState",
    "MessageOption",
    "MessageStyle",
    "PartKind",
    "ReplacementMode",
]
