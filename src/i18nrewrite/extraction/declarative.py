"""Validation of get_msg() calls and definition markers.

Both shapes carry a template, an optional placeholder map and option
flags, and share the same placeholder rules. Every violation raises
MalformedDefinitionError for the one offending definition.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import ast
from collections.abc import Sequence
from dataclasses import dataclass

from i18nrewrite.constants import (
    MARKER_ALT_ID,
    MARKER_ESCAPE_LESS_THAN,
    MARKER_KEY,
    MARKER_MEANING,
    MARKER_MSG_TEXT,
    MARKER_UNESCAPE_HTML_ENTITIES,
    OPTION_EXAMPLE,
    OPTION_HTML,
    OPTION_ORIGINAL_CODE,
    OPTION_UNESCAPE_HTML_ENTITIES,
)
from i18nrewrite.diagnostics import ErrorTemplate, MalformedDefinitionError, SourceSpan
from i18nrewrite.enums import MessageOption
from i18nrewrite.messages import (
    MessagePart,
    TemplateSyntaxError,
    is_lower_camel_case_with_numeric_suffixes,
    parse_template,
)
from i18nrewrite.syntax.tree import fold_string, string_value

__all__ = [
    "ParsedDefinition",
    "check_placeholder_references",
    "parse_get_msg_call",
    "parse_marker_call",
    "read_placeholder_map",
]

_BOOLEAN_OPTIONS: dict[str, MessageOption] = {
    OPTION_HTML: MessageOption.HTML,
    OPTION_UNESCAPE_HTML_ENTITIES: MessageOption.UNESCAPE_HTML_ENTITIES,
}
_EXPORT_OPTIONS = frozenset({OPTION_ORIGINAL_CODE, OPTION_EXAMPLE})

_MARKER_FLAGS: dict[str, MessageOption] = {
    MARKER_ESCAPE_LESS_THAN: MessageOption.HTML,
    MARKER_UNESCAPE_HTML_ENTITIES: MessageOption.UNESCAPE_HTML_ENTITIES,
}
_MARKER_TEXT_FIELDS = frozenset({MARKER_KEY, MARKER_ALT_ID, MARKER_MEANING, MARKER_MSG_TEXT})


@dataclass(frozen=True, slots=True)
class ParsedDefinition:
    """Validated content of a get_msg() call or a definition marker.

    The marker-only fields (key, alternate_id, meaning) are None for
    get_msg() calls, whose annotations come from the docstring instead.
    """

    parts: tuple[MessagePart, ...]
    placeholder_values: dict[str, ast.expr]
    placeholder_map: ast.Dict | None
    options: frozenset[MessageOption]
    key: str | None = None
    alternate_id: str | None = None
    meaning: str | None = None


def _malformed(detail: str, span: SourceSpan | None) -> MalformedDefinitionError:
    return MalformedDefinitionError(ErrorTemplate.malformed_definition(detail, span))


def _template_parts(text: str, span: SourceSpan | None) -> tuple[MessagePart, ...]:
    try:
        return tuple(parse_template(text))
    except TemplateSyntaxError as e:
        raise _malformed(str(e), span) from e


def read_placeholder_map(
    node: ast.expr, span: SourceSpan | None, *, enforce_naming: bool = True
) -> dict[str, ast.expr]:
    """Read a placeholder map display into name -> value expression.

    Raises:
        MalformedDefinitionError: On a non-dict value, a computed or
            non-string key, ** unpacking, a duplicate name, or (with
            enforce_naming) a name that is not lowerCamelCase.
    """
    if not isinstance(node, ast.Dict):
        raise _malformed("Placeholder map must be a dict literal", span)
    values: dict[str, ast.expr] = {}
    for key_node, value in zip(node.keys, node.values, strict=True):
        if key_node is None:
            raise _malformed("Placeholder map must not use ** unpacking", span)
        name = string_value(key_node)
        if name is None:
            raise _malformed("Placeholder names must be string literals", span)
        if name in values:
            raise MalformedDefinitionError(ErrorTemplate.duplicate_placeholder(name, span))
        if enforce_naming and not is_lower_camel_case_with_numeric_suffixes(name):
            raise MalformedDefinitionError(ErrorTemplate.placeholder_not_camel_case(name, span))
        values[name] = value
    return values


def check_placeholder_references(
    parts: Sequence[MessagePart], values: dict[str, ast.expr], span: SourceSpan | None
) -> None:
    """Check that template references and supplied values match one to one.

    Raises:
        MalformedDefinitionError: On a missing map for a templated message,
            a reference without a value, or a value never referenced.
    """
    referenced = list(dict.fromkeys(p.value for p in parts if p.is_placeholder))
    if referenced and not values:
        raise MalformedDefinitionError(ErrorTemplate.empty_placeholder_map(span))
    for name in referenced:
        if name not in values:
            raise MalformedDefinitionError(ErrorTemplate.unrecognized_placeholder(name, span))
    for name in values:
        if name not in referenced:
            raise MalformedDefinitionError(ErrorTemplate.unused_placeholder(name, span))


def _read_template(node: ast.expr, span: SourceSpan | None) -> tuple[MessagePart, ...]:
    text = fold_string(node)
    if text is None:
        if isinstance(node, ast.JoinedStr):
            raise _malformed("Template literals with substitutions are not allowed.", span)
        raise _malformed(
            "Message text must be a string literal or a concatenation of string literals", span
        )
    return _template_parts(text, span)


def _read_export_map(
    option: str, node: ast.expr, placeholders: dict[str, ast.expr], span: SourceSpan | None
) -> None:
    # original_code and example only feed message export; validate, then drop.
    if not isinstance(node, ast.Dict):
        raise _malformed(f"Value of '{option}' must be a dict literal", span)
    seen: set[str] = set()
    for key_node, value in zip(node.keys, node.values, strict=True):
        name = string_value(key_node) if key_node is not None else None
        if name is None:
            raise _malformed(f"Keys of '{option}' must be string literals", span)
        if name in seen:
            raise _malformed(f"Duplicate key in '{option}': {name}", span)
        seen.add(name)
        if name not in placeholders:
            raise _malformed(f"Unknown placeholder in '{option}': {name}", span)
        if string_value(value) is None:
            raise _malformed(f"Values of '{option}' must be string literals", span)


def _read_options(
    node: ast.expr, placeholders: dict[str, ast.expr], span: SourceSpan | None
) -> frozenset[MessageOption]:
    if not isinstance(node, ast.Dict):
        raise _malformed("Message options must be a dict literal", span)
    enabled: set[MessageOption] = set()
    seen: set[str] = set()
    for key_node, value in zip(node.keys, node.values, strict=True):
        name = string_value(key_node) if key_node is not None else None
        if name is None:
            raise _malformed("Message option names must be string literals", span)
        if name in seen:
            raise _malformed(f"Duplicate message option: {name}", span)
        seen.add(name)
        if name in _BOOLEAN_OPTIONS:
            if not (isinstance(value, ast.Constant) and isinstance(value.value, bool)):
                raise _malformed(f"Value of '{name}' must be True or False", span)
            if value.value:
                enabled.add(_BOOLEAN_OPTIONS[name])
        elif name in _EXPORT_OPTIONS:
            _read_export_map(name, value, placeholders, span)
        else:
            raise _malformed(f"Unknown message option: {name}", span)
    return frozenset(enabled)


def parse_get_msg_call(
    node: ast.Call, span: SourceSpan | None, *, function_name: str
) -> ParsedDefinition:
    """Validate ``get_msg(template, placeholders?, options?)``.

    Args:
        node: The call
        span: Location used in diagnostics
        function_name: Name of the definition function, for diagnostics

    Returns:
        The validated template, placeholders and options

    Raises:
        MalformedDefinitionError: On any shape violation
    """
    if node.keywords:
        raise _malformed(f"{function_name}() does not accept keyword arguments", span)
    if not 1 <= len(node.args) <= 3:
        raise _malformed(
            f"{function_name}() takes a template and optional placeholder and option maps", span
        )
    if any(isinstance(arg, ast.Starred) for arg in node.args):
        raise _malformed(f"{function_name}() does not accept * unpacking", span)

    parts = _read_template(node.args[0], span)

    placeholder_map: ast.Dict | None = None
    values: dict[str, ast.expr] = {}
    if len(node.args) > 1 and not _is_none(node.args[1]):
        values = read_placeholder_map(node.args[1], span)
        placeholder_map = node.args[1]  # type: ignore[assignment]  # checked above
    check_placeholder_references(parts, values, span)

    options: frozenset[MessageOption] = frozenset()
    if len(node.args) > 2:
        options = _read_options(node.args[2], values, span)

    return ParsedDefinition(parts, values, placeholder_map, options)


def _is_none(node: ast.expr) -> bool:
    return isinstance(node, ast.Constant) and node.value is None


def parse_marker_call(node: ast.Call, span: SourceSpan | None) -> ParsedDefinition:
    """Validate a definition marker produced by the protect phase.

    Placeholder names are not held to the naming convention here: legacy
    function parameters reach the marker under their original names.

    Raises:
        MalformedDefinitionError: On any deviation from the marker shape
    """
    if node.keywords or not 1 <= len(node.args) <= 2:
        raise _malformed("Marker takes an options dict and an optional placeholder map", span)
    header = node.args[0]
    if not isinstance(header, ast.Dict):
        raise _malformed("Marker options must be a dict literal", span)

    fields: dict[str, str] = {}
    options: set[MessageOption] = set()
    seen: set[str] = set()
    for key_node, value in zip(header.keys, header.values, strict=True):
        name = string_value(key_node) if key_node is not None else None
        text = string_value(value)
        if name is None or text is None:
            raise _malformed("Marker options must map string literals to string literals", span)
        if name in seen:
            raise _malformed(f"Duplicate marker field: {name}", span)
        seen.add(name)
        if name in _MARKER_FLAGS:
            options.add(_MARKER_FLAGS[name])
        elif name in _MARKER_TEXT_FIELDS:
            fields[name] = text
        else:
            raise _malformed(f"Unknown marker field: {name}", span)
    if MARKER_KEY not in fields or MARKER_MSG_TEXT not in fields:
        raise _malformed(f"Marker requires '{MARKER_KEY}' and '{MARKER_MSG_TEXT}'", span)

    parts = _template_parts(fields[MARKER_MSG_TEXT], span)
    placeholder_map: ast.Dict | None = None
    values: dict[str, ast.expr] = {}
    if len(node.args) > 1:
        values = read_placeholder_map(node.args[1], span, enforce_naming=False)
        placeholder_map = node.args[1]  # type: ignore[assignment]  # checked above
    check_placeholder_references(parts, values, span)

    return ParsedDefinition(
        parts,
        values,
        placeholder_map,
        frozenset(options),
        key=fields[MARKER_KEY],
        alternate_id=fields.get(MARKER_ALT_ID),
        meaning=fields.get(MARKER_MEANING),
    )
