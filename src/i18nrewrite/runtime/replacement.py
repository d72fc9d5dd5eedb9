"""Final localized expression for one definition."""

from __future__ import annotations

import ast
from collections.abc import Collection, Iterable, Mapping

from i18nrewrite.enums import MessageOption
from i18nrewrite.messages import MessagePart, apply_text_options, join_adjacent
from i18nrewrite.syntax import clone
from i18nrewrite.syntax.tree import formatted_string

__all__ = ["build_replacement"]


def build_replacement(
    parts: Iterable[MessagePart],
    placeholder_values: Mapping[str, ast.expr],
    options: Collection[MessageOption],
) -> ast.expr:
    """Build the expression a definition is rewritten to.

    Literal text is escaped according to options; placeholder values are
    cloned, never escaped, so one source expression is never shared by two
    positions in the tree.

    Args:
        parts: Body of the translated (or untranslated) message
        placeholder_values: Value expressions from the definition site
        options: Text options of the definition

    Returns:
        A string constant, or an f-string when any placeholder is present

    Raises:
        KeyError: If a part references a name missing from placeholder_values
    """
    segments: list[str | ast.expr] = []
    for part in join_adjacent(parts):
        if part.is_placeholder:
            segments.append(clone(placeholder_values[part.value]))
        else:
            segments.append(apply_text_options(part.value, options))
    return formatted_string(segments)
