"""Template text parsing and rendering.

Message text marks placeholders as ``{$name}``. Everything else is literal.
There is no escape for a literal ``{$``.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

from i18nrewrite.constants import PLACEHOLDER_CLOSE, PLACEHOLDER_OPEN
from i18nrewrite.enums import PartKind

if TYPE_CHECKING:
    from .model import MessagePart

__all__ = ["TemplateSyntaxError", "join_adjacent", "parse_template", "render_template"]


class TemplateSyntaxError(ValueError):
    """Template text contains an unterminated or empty placeholder."""


def parse_template(text: str) -> list[MessagePart]:
    """Split template text into string and placeholder parts.

    Args:
        text: Template text such as "Hello, {$userName}!"

    Returns:
        Parts in source order. Empty literal runs are omitted.

    Raises:
        TemplateSyntaxError: On '{$' without a closing '}' or on '{$}'.
    """
    from .model import MessagePart  # noqa: PLC0415 - circular

    parts: list[MessagePart] = []
    pos = 0
    while True:
        start = text.find(PLACEHOLDER_OPEN, pos)
        if start < 0:
            break
        end = text.find(PLACEHOLDER_CLOSE, start + len(PLACEHOLDER_OPEN))
        if end < 0:
            msg = f"Unterminated placeholder at offset {start}"
            raise TemplateSyntaxError(msg)
        name = text[start + len(PLACEHOLDER_OPEN) : end]
        if not name:
            msg = f"Empty placeholder name at offset {start}"
            raise TemplateSyntaxError(msg)
        if start > pos:
            parts.append(MessagePart.text(text[pos:start]))
        parts.append(MessagePart.placeholder(name))
        pos = end + len(PLACEHOLDER_CLOSE)
    if pos < len(text):
        parts.append(MessagePart.text(text[pos:]))
    return parts


def render_template(parts: Iterable[MessagePart]) -> str:
    """Render parts back to canonical template text."""
    return "".join(
        f"{PLACEHOLDER_OPEN}{part.value}{PLACEHOLDER_CLOSE}"
        if part.kind is PartKind.PLACEHOLDER
        else part.value
        for part in parts
    )


def join_adjacent(parts: Iterable[MessagePart]) -> list[MessagePart]:
    """Merge runs of adjacent string parts into one."""
    from .model import MessagePart  # noqa: PLC0415 - circular

    joined: list[MessagePart] = []
    for part in parts:
        if joined and not part.is_placeholder and not joined[-1].is_placeholder:
            joined[-1] = MessagePart.text(joined[-1].value + part.value)
        else:
            joined.append(part)
    return joined
