"""Shared constants for i18nrewrite.

This module provides centralized configuration constants used across the
syntax, extraction and runtime packages. Placing constants here avoids
circular imports and provides a single source of truth.

Constants are grouped by domain:
- Depth limits: Recursion protection for tree traversal
- Naming conventions: Default message key prefixes and call names
- Wire keys: Option-bag keys and marker options-object keys
- Docstring fields: Annotation field names read from attribute docstrings

Python 3.13+. Zero external dependencies.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Depth limits
    "MAX_DEPTH",
    # Naming conventions
    "MESSAGE_PREFIX",
    "EXTERNAL_PREFIX",
    "UNNAMED_PREFIX",
    "HELP_SUFFIX",
    "GET_MSG",
    "GET_MSG_WITH_FALLBACK",
    "DEFINE_MSG_MARKER",
    "MSG_FALLBACK_MARKER",
    # Option-bag keys
    "OPTION_HTML",
    "OPTION_UNESCAPE_HTML_ENTITIES",
    "OPTION_ORIGINAL_CODE",
    "OPTION_EXAMPLE",
    # Marker keys
    "MARKER_KEY",
    "MARKER_ALT_ID",
    "MARKER_MEANING",
    "MARKER_MSG_TEXT",
    "MARKER_ESCAPE_LESS_THAN",
    "MARKER_UNESCAPE_HTML_ENTITIES",
    "MARKER_FLAG_VALUE",
    # Placeholder syntax
    "PLACEHOLDER_OPEN",
    "PLACEHOLDER_CLOSE",
    # Docstring fields
    "FIELD_MEANING",
    "FIELD_ALTERNATE_ID",
    # Fallbacks
    "UNKNOWN_SOURCE",
]

# ============================================================================
# DEPTH LIMITS
# ============================================================================

# Maximum nesting depth for source tree traversal.
# Each visited level costs roughly three Python frames (visit, handler,
# generic_visit), so 200 levels stay well inside the default recursion limit.
# CPython's own parser rejects expressions nested much deeper than this.
MAX_DEPTH: int = 200

# ============================================================================
# NAMING CONVENTIONS
# ============================================================================

MESSAGE_PREFIX: str = "MSG_"
EXTERNAL_PREFIX: str = "MSG_EXTERNAL_"
UNNAMED_PREFIX: str = "MSG_UNNAMED"

# Legacy messages kept their description in a sibling MSG_X_HELP variable.
HELP_SUFFIX: str = "_HELP"

GET_MSG: str = "get_msg"
GET_MSG_WITH_FALLBACK: str = "get_msg_with_fallback"

DEFINE_MSG_MARKER: str = "__define_msg__"
MSG_FALLBACK_MARKER: str = "__msg_fallback__"

# ============================================================================
# OPTION-BAG KEYS (third argument of get_msg)
# ============================================================================

OPTION_HTML: str = "html"
OPTION_UNESCAPE_HTML_ENTITIES: str = "unescapeHtmlEntities"

# Accepted, shape-checked, then dropped. Only message export reads them.
OPTION_ORIGINAL_CODE: str = "original_code"
OPTION_EXAMPLE: str = "example"

# ============================================================================
# MARKER OPTIONS-OBJECT KEYS
# ============================================================================
#
# Serialization order is fixed: key, alt_id, meaning, msg_text, then flags.
# Downstream tooling matches on this exact shape.

MARKER_KEY: str = "key"
MARKER_ALT_ID: str = "alt_id"
MARKER_MEANING: str = "meaning"
MARKER_MSG_TEXT: str = "msg_text"
MARKER_ESCAPE_LESS_THAN: str = "escapeLessThan"
MARKER_UNESCAPE_HTML_ENTITIES: str = "unescapeHtmlEntities"

# Presence of a flag key enables it; the value is conventionally empty.
MARKER_FLAG_VALUE: str = ""

# ============================================================================
# PLACEHOLDER SYNTAX
# ============================================================================

PLACEHOLDER_OPEN: str = "{$"
PLACEHOLDER_CLOSE: str = "}"

# ============================================================================
# DOCSTRING FIELDS
# ============================================================================

# Field-list lines inside an attribute docstring, e.g. ":meaning: verb"
FIELD_MEANING: str = "meaning"
FIELD_ALTERNATE_ID: str = "alternate_message_id"

# ============================================================================
# FALLBACKS
# ============================================================================

# Source name used when the caller does not supply a file name.
UNKNOWN_SOURCE: str = "<unknown>"
