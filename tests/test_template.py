"""Tests for template text parsing and rendering."""

from __future__ import annotations

import pytest
from hypothesis import given
from hypothesis import strategies as st

from i18nrewrite.messages import (
    MessagePart,
    TemplateSyntaxError,
    join_adjacent,
    parse_template,
    render_template,
)

# ============================================================================
# STRATEGIES
# ============================================================================

_literal = st.text(alphabet=st.characters(exclude_characters="{$}"), min_size=1)
_name = st.from_regex(r"[a-z][a-zA-Z0-9]{0,8}", fullmatch=True)
_parts = st.lists(
    st.one_of(_literal.map(MessagePart.text), _name.map(MessagePart.placeholder)),
    max_size=8,
)


class TestParseTemplate:
    """Splitting template text into parts."""

    def test_plain_text(self) -> None:
        """Text without placeholders is one string part."""
        assert parse_template("Hello") == [MessagePart.text("Hello")]

    def test_empty_text(self) -> None:
        """Empty text has no parts."""
        assert parse_template("") == []

    def test_placeholders(self) -> None:
        """Placeholders split the text."""
        assert parse_template("Hi {$first} {$last}!") == [
            MessagePart.text("Hi "),
            MessagePart.placeholder("first"),
            MessagePart.text(" "),
            MessagePart.placeholder("last"),
            MessagePart.text("!"),
        ]

    def test_leading_and_adjacent_placeholders(self) -> None:
        """No empty string parts are produced."""
        assert parse_template("{$a}{$b}") == [
            MessagePart.placeholder("a"),
            MessagePart.placeholder("b"),
        ]

    def test_lone_braces_are_literal(self) -> None:
        """Only '{$' opens a placeholder."""
        assert parse_template("{x} $y }") == [MessagePart.text("{x} $y }")]

    def test_unterminated_placeholder(self) -> None:
        """'{$' without '}' is an error."""
        with pytest.raises(TemplateSyntaxError, match="Unterminated"):
            parse_template("Hello {$name")

    def test_empty_placeholder(self) -> None:
        """'{$}' is an error."""
        with pytest.raises(TemplateSyntaxError, match="Empty placeholder"):
            parse_template("Hello {$}")

    @given(_parts)
    def test_render_then_parse_keeps_parts(self, parts: list[MessagePart]) -> None:
        """Parsing rendered text restores the joined parts."""
        assert parse_template(render_template(parts)) == join_adjacent(parts)


class TestJoinAdjacent:
    """Merging neighbouring string parts."""

    def test_merges_string_runs(self) -> None:
        """Consecutive strings collapse; placeholders separate runs."""
        parts = [
            MessagePart.text("a"),
            MessagePart.text("b"),
            MessagePart.placeholder("x"),
            MessagePart.text("c"),
        ]
        assert join_adjacent(parts) == [
            MessagePart.text("ab"),
            MessagePart.placeholder("x"),
            MessagePart.text("c"),
        ]

    def test_placeholders_never_merged(self) -> None:
        """Two placeholders stay two parts."""
        parts = [MessagePart.placeholder("x"), MessagePart.placeholder("x")]
        assert join_adjacent(parts) == parts
