"""Protect-phase marker encoding.

A definition marker carries everything the completion phase needs to
rebuild the message, as string literals in a fixed key order, plus the
placeholder value map unevaluated:

    __define_msg__({"key": "MSG_HI", "msg_text": "Hi {$name}"}, {"name": user})

A fallback marker names both definitions by key next to their values:

    __msg_fallback__("MSG_NEW", MSG_NEW, "MSG_OLD", MSG_OLD)

Both calls are marked side-effect free, so later passes may drop them when
their result is unused.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import ast

from i18nrewrite.constants import (
    MARKER_ALT_ID,
    MARKER_ESCAPE_LESS_THAN,
    MARKER_FLAG_VALUE,
    MARKER_KEY,
    MARKER_MEANING,
    MARKER_MSG_TEXT,
    MARKER_UNESCAPE_HTML_ENTITIES,
)
from i18nrewrite.conventions import MessageConventions
from i18nrewrite.enums import DefinitionKind
from i18nrewrite.extraction import FallbackPair, MessageDefinition
from i18nrewrite.messages import MessageModel
from i18nrewrite.syntax import mark_side_effect_free
from i18nrewrite.syntax.tree import call, dict_literal, string_constant

__all__ = ["definition_marker", "fallback_marker", "marker_fields"]


def marker_fields(model: MessageModel) -> list[tuple[str, str]]:
    """Options-object entries for a model, in wire order.

    Example:
        >>> marker_fields(MessageModel("MSG_A", "X1", (MessagePart.text("a"),)))
        [('key', 'MSG_A'), ('msg_text', 'a')]
    """
    fields = [(MARKER_KEY, model.key)]
    if model.alternate_id:
        fields.append((MARKER_ALT_ID, model.alternate_id))
    if model.meaning:
        fields.append((MARKER_MEANING, model.meaning))
    fields.append((MARKER_MSG_TEXT, model.text))
    if model.html:
        fields.append((MARKER_ESCAPE_LESS_THAN, MARKER_FLAG_VALUE))
    if model.unescape_html_entities:
        fields.append((MARKER_UNESCAPE_HTML_ENTITIES, MARKER_FLAG_VALUE))
    return fields


def _placeholder_argument(definition: MessageDefinition) -> ast.Dict | None:
    match definition.kind:
        case DefinitionKind.LEGACY_FUNCTION:
            # Parameters become the map, even when none is referenced.
            return dict_literal(definition.placeholder_values.items())
        case DefinitionKind.LEGACY_STRING:
            return None
        case _:
            return definition.placeholder_map


def definition_marker(
    definition: MessageDefinition, conventions: MessageConventions
) -> ast.Call:
    """Marker call standing in for one definition.

    The definition's placeholder map node is moved into the marker as is;
    the expression it replaces is discarded.
    """
    options = dict_literal(
        (name, string_constant(value)) for name, value in marker_fields(definition.model)
    )
    args: list[ast.expr] = [options]
    placeholders = _placeholder_argument(definition)
    if placeholders is not None:
        args.append(placeholders)
    marker = call(conventions.define_marker, args)
    mark_side_effect_free(marker)
    return marker


def fallback_marker(pair: FallbackPair, conventions: MessageConventions) -> ast.Call:
    """Marker call standing in for one fallback construct."""
    marker = call(
        conventions.fallback_marker,
        [
            string_constant(pair.primary.key),
            pair.primary_value,
            string_constant(pair.secondary.key),
            pair.secondary_value,
        ],
    )
    mark_side_effect_free(marker)
    return marker
