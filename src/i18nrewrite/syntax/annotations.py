"""Message annotations read from docstrings.

A message is documented by the string statement that immediately follows
its assignment (the attribute docstring convention), or by the function
docstring for the legacy function form::

    MSG_SAVE = get_msg("Save")
    \"\"\"Label of the save button.

    :meaning: verb
    :alternate_message_id: 1984
    \"\"\"

Field lines carry the meaning and the alternate id. The remaining prose is
the description.
"""

from __future__ import annotations

import ast
import inspect
import re
from dataclasses import dataclass

from i18nrewrite.constants import FIELD_ALTERNATE_ID, FIELD_MEANING

from .tree import Slot, string_value

__all__ = ["DocAnnotations", "attribute_docstring", "parse_docstring"]

_FIELD_LINE = re.compile(r"\s*:(?P<field>[A-Za-z_]+):\s*(?P<value>.*?)\s*")


@dataclass(frozen=True, slots=True)
class DocAnnotations:
    """Description and annotation fields of one message."""

    description: str | None = None
    meaning: str | None = None
    alternate_id: str | None = None


def parse_docstring(docstring: str | None) -> DocAnnotations:
    """Split a docstring into description, meaning and alternate id.

    Unknown field lines stay part of the description. Empty field values are
    treated as absent.
    """
    if docstring is None:
        return DocAnnotations()
    meaning: str | None = None
    alternate_id: str | None = None
    prose: list[str] = []
    for line in inspect.cleandoc(docstring).splitlines():
        match = _FIELD_LINE.fullmatch(line)
        if match and match.group("field") == FIELD_MEANING:
            meaning = match.group("value") or None
        elif match and match.group("field") == FIELD_ALTERNATE_ID:
            alternate_id = match.group("value") or None
        else:
            prose.append(line)
    description = "\n".join(prose).strip() or None
    return DocAnnotations(description, meaning, alternate_id)


def attribute_docstring(statement_slot: Slot | None) -> str | None:
    """Docstring statement directly after the statement in the given slot."""
    if statement_slot is None:
        return None
    sibling = statement_slot.next_sibling()
    if isinstance(sibling, ast.Expr):
        return string_value(sibling.value)
    return None
