"""Tests for marker encoding and replacement expressions."""

from __future__ import annotations

import ast

import pytest

from i18nrewrite.enums import MessageOption
from i18nrewrite.messages import MessageModel, MessagePart
from i18nrewrite.runtime import build_replacement, marker_fields

T = MessagePart.text
P = MessagePart.placeholder


class TestMarkerFields:
    """Options-object entries in wire order."""

    def test_minimal(self) -> None:
        """Only key and msg_text are required."""
        model = MessageModel("MSG_A", "X1", (T("Hi "), P("name")))
        assert marker_fields(model) == [("key", "MSG_A"), ("msg_text", "Hi {$name}")]

    def test_full(self) -> None:
        """Every field present, flags last with empty values."""
        model = MessageModel(
            "MSG_A",
            "verb",
            (T("Open"),),
            meaning="verb",
            alternate_id="1984",
            options=frozenset({MessageOption.HTML, MessageOption.UNESCAPE_HTML_ENTITIES}),
        )
        assert marker_fields(model) == [
            ("key", "MSG_A"),
            ("alt_id", "1984"),
            ("meaning", "verb"),
            ("msg_text", "Open"),
            ("escapeLessThan", ""),
            ("unescapeHtmlEntities", ""),
        ]

    def test_id_and_description_not_written(self) -> None:
        """Both are derived again when completing."""
        model = MessageModel("MSG_A", "X1", (T("a"),), description="Shown on save.")
        names = [name for name, _ in marker_fields(model)]
        assert "id" not in names
        assert "description" not in names


class TestBuildReplacement:
    """Final expressions for one definition."""

    def test_empty_body(self) -> None:
        """An empty message becomes ''."""
        node = build_replacement((), {}, frozenset())
        assert isinstance(node, ast.Constant)
        assert node.value == ""

    def test_adjacent_text_joined(self) -> None:
        """Consecutive text parts become one constant."""
        node = build_replacement((T("a"), T("b")), {}, frozenset())
        assert ast.unparse(node) == "'ab'"

    def test_fstring(self) -> None:
        """Placeholders become replacement fields."""
        values = {"name": ast.Name(id="user", ctx=ast.Load())}
        node = build_replacement((T("Hi "), P("name"), T("!")), values, frozenset())
        assert ast.unparse(node) == "f'Hi {user}!'"
        assert node.values[1].value is not values["name"]  # type: ignore[attr-defined]

    def test_options_applied_to_text(self) -> None:
        """Escaping touches literal text only."""
        values = {"tag": ast.Constant(value="<i>")}
        node = build_replacement(
            (T("<"), P("tag")), values, frozenset({MessageOption.HTML})
        )
        assert isinstance(node, ast.JoinedStr)
        assert node.values[0].value == "&lt;"  # type: ignore[attr-defined]
        assert node.values[1].value.value == "<i>"  # type: ignore[attr-defined]

    def test_missing_value(self) -> None:
        """A reference without a value is a programming error."""
        with pytest.raises(KeyError):
            build_replacement((P("name"),), {}, frozenset())
