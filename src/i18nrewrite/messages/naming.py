"""Placeholder naming convention helpers.

Placeholder names are lowerCamelCase optionally followed by numeric
suffixes: ``startSpan_1_23`` is valid, ``startSpan_1_23b`` is not.
"""

import re

__all__ = [
    "is_lower_camel_case_with_numeric_suffixes",
    "to_lower_camel_case_with_numeric_suffixes",
]

_LOWER_CAMEL_WITH_SUFFIXES = re.compile(r"[a-z][a-zA-Z0-9]*(?:_\d+)*")
_NUMERIC_SUFFIXES = re.compile(r"(?:_\d+)+$")


def is_lower_camel_case_with_numeric_suffixes(name: str) -> bool:
    """Check a placeholder name against the naming convention."""
    return _LOWER_CAMEL_WITH_SUFFIXES.fullmatch(name) is not None


def to_lower_camel_case_with_numeric_suffixes(name: str) -> str:
    """Convert an UPPER_SNAKE name to lowerCamelCase, keeping numeric suffixes.

    Example:
        >>> to_lower_camel_case_with_numeric_suffixes("START_SPAN_1_23")
        'startSpan_1_23'
    """
    match = _NUMERIC_SUFFIXES.search(name)
    suffix = match.group(0) if match else ""
    stem = name[: len(name) - len(suffix)]
    words = [word for word in stem.split("_") if word]
    if not words:
        return name
    head, *tail = words
    return head.lower() + "".join(word.capitalize() for word in tail) + suffix
