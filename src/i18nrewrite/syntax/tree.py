"""Thin adapter over the standard library ``ast`` module.

Everything the extractor and the substitution engine need from the source
tree goes through this module: locating and replacing a node in its parent,
deep-cloning subtrees, reading literal content, building new expressions,
and two node annotations that later passes may inspect.

Annotations are plain attributes on the node object. ``ast.dump`` and
``ast.unparse`` ignore them; ``copy.deepcopy`` carries them along.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import ast
import copy
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import TypeVar

from i18nrewrite.diagnostics import SourceSpan

__all__ = [
    "Slot",
    "call",
    "clone",
    "dict_literal",
    "fold_string",
    "formatted_string",
    "is_side_effect_free",
    "last_name",
    "mark_side_effect_free",
    "name_load",
    "original_name",
    "set_original_name",
    "span_of",
    "string_constant",
    "string_value",
]

_SIDE_EFFECT_FREE_ATTR = "_i18n_side_effect_free"
_ORIGINAL_NAME_ATTR = "_i18n_original_name"

N = TypeVar("N", bound=ast.AST)


@dataclass(frozen=True, slots=True)
class Slot:
    """Position of a node inside its parent.

    Attributes:
        parent: Node holding the child
        field: Name of the parent's field
        index: Position in the field when it is a list, else None

    Example:
        >>> module = ast.parse("x = 1")
        >>> slot = Slot(module.body[0], "value")
        >>> slot.set(ast.Constant(2))
        >>> ast.unparse(module)
        'x = 2'
    """

    parent: ast.AST
    field: str
    index: int | None = None

    def get(self) -> ast.AST:
        """Node currently in this position."""
        value = getattr(self.parent, self.field)
        if self.index is None:
            return value  # type: ignore[no-any-return]
        return value[self.index]  # type: ignore[no-any-return]

    def set(self, node: ast.AST) -> None:
        """Replace the node in this position."""
        if self.index is None:
            setattr(self.parent, self.field, node)
        else:
            getattr(self.parent, self.field)[self.index] = node

    def next_sibling(self) -> ast.AST | None:
        """Following node in the same list field, if any."""
        if self.index is None:
            return None
        siblings = getattr(self.parent, self.field)
        if self.index + 1 < len(siblings):
            return siblings[self.index + 1]  # type: ignore[no-any-return]
        return None


def clone(node: N) -> N:
    """Deep copy of a subtree, annotations included."""
    return copy.deepcopy(node)


# ============================================================================
# ANNOTATIONS
# ============================================================================


def mark_side_effect_free(node: ast.AST) -> None:
    """Record that evaluating the node has no observable side effects."""
    setattr(node, _SIDE_EFFECT_FREE_ATTR, True)


def is_side_effect_free(node: ast.AST) -> bool:
    """Whether mark_side_effect_free() was applied to the node."""
    return bool(getattr(node, _SIDE_EFFECT_FREE_ATTR, False))


def set_original_name(node: ast.AST, name: str) -> None:
    """Record the name a binding had before an earlier pass renamed it."""
    setattr(node, _ORIGINAL_NAME_ATTR, name)


def original_name(node: ast.AST) -> str | None:
    """Name recorded by set_original_name(), if any."""
    return getattr(node, _ORIGINAL_NAME_ATTR, None)


# ============================================================================
# QUERIES
# ============================================================================


def span_of(node: ast.AST, source_name: str) -> SourceSpan | None:
    """Source location of a node (1-indexed), or None for synthesized nodes."""
    line = getattr(node, "lineno", None)
    if line is None or line < 1:
        return None
    return SourceSpan(source_name, line, getattr(node, "col_offset", 0) + 1)


def last_name(node: ast.AST) -> str | None:
    """Final component of a Name or Attribute, preferring a recorded original name."""
    recorded = original_name(node)
    if recorded is not None:
        return recorded
    match node:
        case ast.Name(id=name):
            return name
        case ast.Attribute(attr=attr):
            return attr
        case _:
            return None


def string_value(node: ast.AST) -> str | None:
    """Content of a string constant, else None."""
    if isinstance(node, ast.Constant) and isinstance(node.value, str):
        return node.value
    return None


def fold_string(node: ast.AST) -> str | None:
    """Fold a string-literal-equivalent expression to its text.

    Accepts a string constant, a '+' concatenation of foldable operands,
    and an f-string without replacement fields. Anything else yields None.
    """
    match node:
        case ast.Constant(value=str() as text):
            return text
        case ast.BinOp(left=left, op=ast.Add(), right=right):
            head = fold_string(left)
            if head is None:
                return None
            tail = fold_string(right)
            return head + tail if tail is not None else None
        case ast.JoinedStr(values=values):
            texts = [string_value(value) for value in values]
            if any(text is None for text in texts):
                return None
            return "".join(texts)  # type: ignore[arg-type]
        case _:
            return None


# ============================================================================
# CONSTRUCTORS
# ============================================================================


def string_constant(text: str) -> ast.Constant:
    """New string constant."""
    return ast.Constant(value=text)


def name_load(name: str) -> ast.Name:
    """New Name in load context."""
    return ast.Name(id=name, ctx=ast.Load())


def call(function_name: str, args: Sequence[ast.expr]) -> ast.Call:
    """New call of a bare function name with positional arguments."""
    return ast.Call(func=name_load(function_name), args=list(args), keywords=[])


def dict_literal(items: Iterable[tuple[str, ast.expr]]) -> ast.Dict:
    """New dict display with string keys, in the given order."""
    keys: list[ast.expr | None] = []
    values: list[ast.expr] = []
    for key, value in items:
        keys.append(string_constant(key))
        values.append(value)
    return ast.Dict(keys=keys, values=values)


def formatted_string(segments: Sequence[str | ast.expr]) -> ast.expr:
    """Concatenation of literal text and expressions as a single expression.

    No segments yields '', exactly one literal yields that literal, and
    anything else becomes an f-string whose replacement fields hold the
    given expressions unchanged.
    """
    if not segments:
        return string_constant("")
    if len(segments) == 1 and isinstance(segments[0], str):
        return string_constant(segments[0])
    values: list[ast.expr] = []
    for segment in segments:
        if isinstance(segment, str):
            values.append(string_constant(segment))
        else:
            values.append(ast.FormattedValue(value=segment, conversion=-1, format_spec=None))
    return ast.JoinedStr(values=values)
