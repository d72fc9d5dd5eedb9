"""Legacy message forms.

Before get_msg() existed, messages were plain string expressions or
functions returning one::

    MSG_TITLE = "Inbox"
    MSG_GREETING = lambda user_name: "Hello, " + user_name
    def MSG_COUNT(count):
        return f"{count} new messages"

Both forms are still accepted, always with a warning. Function parameters
referenced in the returned expression become the placeholders. Literal text
must not contain "{$": it would read back as a placeholder once the message
is written out as template text.
"""

from __future__ import annotations

import ast
from dataclasses import dataclass

from i18nrewrite.constants import PLACEHOLDER_OPEN
from i18nrewrite.diagnostics import ErrorTemplate, MalformedDefinitionError, SourceSpan
from i18nrewrite.messages import MessagePart, join_adjacent
from i18nrewrite.syntax import Slot
from i18nrewrite.syntax.tree import fold_string, name_load, string_value

__all__ = ["LegacyFunction", "parse_legacy_function", "parse_legacy_string"]


@dataclass(frozen=True, slots=True)
class LegacyFunction:
    """Validated legacy function message.

    Attributes:
        parts: Message body
        placeholder_values: Referenced parameters, in parameter order
        return_slot: Position of the returned expression
    """

    parts: tuple[MessagePart, ...]
    placeholder_values: dict[str, ast.expr]
    return_slot: Slot


def _malformed(detail: str, span: SourceSpan | None) -> MalformedDefinitionError:
    return MalformedDefinitionError(ErrorTemplate.malformed_definition(detail, span))


def _check_literal_text(parts: tuple[MessagePart, ...], span: SourceSpan | None) -> None:
    for part in join_adjacent(parts):
        if not part.is_placeholder and PLACEHOLDER_OPEN in part.value:
            raise _malformed(f"Legacy message text must not contain '{PLACEHOLDER_OPEN}'", span)


def parse_legacy_string(node: ast.expr, span: SourceSpan | None) -> tuple[MessagePart, ...]:
    """Fold a legacy string expression into a single-part body.

    Raises:
        MalformedDefinitionError: If the expression is not string-literal-equivalent,
            or its text contains "{$"
    """
    text = fold_string(node)
    if text is None:
        raise _malformed("Message text must be a string literal or a concatenation", span)
    parts = (MessagePart.text(text),) if text else ()
    _check_literal_text(parts, span)
    return parts


def _parameter_names(arguments: ast.arguments, span: SourceSpan | None) -> list[str]:
    if arguments.vararg or arguments.kwarg or arguments.kwonlyargs:
        raise _malformed("Message functions take positional parameters only", span)
    return [arg.arg for arg in (*arguments.posonlyargs, *arguments.args)]


def _returned_slot(function: ast.FunctionDef | ast.Lambda, span: SourceSpan | None) -> Slot:
    if isinstance(function, ast.Lambda):
        return Slot(function, "body")
    body = function.body
    if body and ast.get_docstring(function, clean=False) is not None:
        body = body[1:]
    match body:
        case [ast.Return(value=ast.expr())]:
            return Slot(body[0], "value")
        case _:
            raise _malformed("Message function must contain a single return statement", span)


def _collect_parts(
    node: ast.expr, parameters: list[str], parts: list[MessagePart], span: SourceSpan | None
) -> None:
    match node:
        case ast.Constant(value=str() as text):
            if text:
                parts.append(MessagePart.text(text))
        case ast.Name(id=name):
            if name not in parameters:
                raise MalformedDefinitionError(ErrorTemplate.unrecognized_placeholder(name, span))
            parts.append(MessagePart.placeholder(name))
        case ast.BinOp(left=left, op=ast.Add(), right=right):
            _collect_parts(left, parameters, parts, span)
            _collect_parts(right, parameters, parts, span)
        case ast.JoinedStr(values=values):
            for value in values:
                if string_value(value) is not None:
                    _collect_parts(value, parameters, parts, span)
                elif (
                    isinstance(value, ast.FormattedValue)
                    and value.conversion == -1
                    and value.format_spec is None
                    and isinstance(value.value, ast.Name)
                ):
                    _collect_parts(value.value, parameters, parts, span)
                else:
                    raise _malformed("Message function may only format its parameters", span)
        case _:
            raise _malformed("Message function must return a string concatenation", span)


def parse_legacy_function(
    function: ast.FunctionDef | ast.Lambda, span: SourceSpan | None
) -> LegacyFunction:
    """Validate a legacy function message.

    Raises:
        MalformedDefinitionError: On a body other than one returned string
            concatenation of literals and parameters, or on literal text
            containing "{$".
    """
    parameters = _parameter_names(function.args, span)
    return_slot = _returned_slot(function, span)
    parts: list[MessagePart] = []
    _collect_parts(return_slot.get(), parameters, parts, span)  # type: ignore[arg-type]
    _check_literal_text(tuple(parts), span)
    referenced = {p.value for p in parts if p.is_placeholder}
    values: dict[str, ast.expr] = {
        name: name_load(name) for name in parameters if name in referenced
    }
    return LegacyFunction(tuple(parts), values, return_slot)
