"""Tests for message id generation."""

from __future__ import annotations

import re

import pytest
from hypothesis import given
from hypothesis import strategies as st

from i18nrewrite.messages import default_id_generator, fingerprint
from i18nrewrite.messages.ids import to_base36

_BASE36 = re.compile(r"[0-9A-Z]{1,13}")


class TestToBase36:
    """Integer rendering."""

    @pytest.mark.parametrize(
        ("value", "expected"), [(0, "0"), (9, "9"), (10, "A"), (35, "Z"), (36, "10")]
    )
    def test_known_values(self, value: int, expected: str) -> None:
        """Digits run 0-9 then A-Z."""
        assert to_base36(value) == expected

    def test_negative_rejected(self) -> None:
        """Negative values are not representable."""
        with pytest.raises(ValueError, match="non-negative"):
            to_base36(-1)

    @given(st.integers(min_value=0, max_value=2**64 - 1))
    def test_parses_back(self, value: int) -> None:
        """int(..., 36) inverts the rendering."""
        assert int(to_base36(value), 36) == value


class TestDefaultIdGenerator:
    """Default id derivation."""

    @given(st.text(), st.lists(st.text(min_size=1), max_size=4))
    def test_deterministic(self, text: str, names: list[str]) -> None:
        """Identical inputs give identical ids."""
        assert default_id_generator(text, names) == default_id_generator(text, list(names))

    @given(st.text(), st.lists(st.text(min_size=1), max_size=4))
    def test_shape(self, text: str, names: list[str]) -> None:
        """Ids are short upper-case base 36."""
        assert _BASE36.fullmatch(default_id_generator(text, names))

    def test_placeholder_names_affect_id(self) -> None:
        """The same text with different placeholder names gets a different id."""
        assert default_id_generator("Hi {$a}", ["a"]) != default_id_generator("Hi {$a}", [])

    def test_text_affects_id(self) -> None:
        """Different text gets a different id."""
        assert default_id_generator("Save", []) != default_id_generator("Cancel", [])

    def test_chunks_are_separated(self) -> None:
        """Moving characters between text and names changes the id."""
        assert default_id_generator("ab", ["c"]) != default_id_generator("a", ["bc"])


class TestFingerprint:
    """Fingerprints used to name unnamed messages."""

    def test_stable(self) -> None:
        """Same text, same fingerprint."""
        assert fingerprint("Hello") == fingerprint("Hello")

    def test_differs_by_text(self) -> None:
        """Different text, different fingerprint."""
        assert fingerprint("Hello") != fingerprint("Goodbye")

    def test_matches_generator_without_placeholders(self) -> None:
        """A fingerprint is the id of the text alone."""
        assert fingerprint("Hello") == default_id_generator("Hello", [])
