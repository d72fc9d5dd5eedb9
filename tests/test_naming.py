"""Tests for the placeholder naming convention."""

from __future__ import annotations

import pytest
from hypothesis import given
from hypothesis import strategies as st

from i18nrewrite.messages import (
    is_lower_camel_case_with_numeric_suffixes,
    to_lower_camel_case_with_numeric_suffixes,
)


class TestIsLowerCamelCase:
    """Validation of placeholder names."""

    @pytest.mark.parametrize(
        "name", ["name", "userName", "startSpan_1_23", "a1", "x_0", "htmlURL"]
    )
    def test_valid_names(self, name: str) -> None:
        """lowerCamelCase with optional numeric suffixes is accepted."""
        assert is_lower_camel_case_with_numeric_suffixes(name)

    @pytest.mark.parametrize(
        "name", ["", "UserName", "user_name", "startSpan_1_23b", "1abc", "name_", "_name"]
    )
    def test_invalid_names(self, name: str) -> None:
        """Anything else is rejected."""
        assert not is_lower_camel_case_with_numeric_suffixes(name)


class TestToLowerCamelCase:
    """Conversion from UPPER_SNAKE."""

    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("START_SPAN_1_23", "startSpan_1_23"),
            ("USER_NAME", "userName"),
            ("COUNT", "count"),
            ("user_name", "userName"),
        ],
    )
    def test_conversion(self, name: str, expected: str) -> None:
        """Words are joined, numeric suffixes kept."""
        assert to_lower_camel_case_with_numeric_suffixes(name) == expected

    def test_suffix_only_is_returned_as_is(self) -> None:
        """A name with no word stem cannot be converted."""
        assert to_lower_camel_case_with_numeric_suffixes("_1") == "_1"

    @given(
        st.lists(
            st.text(alphabet="ABCDEFGHIJKLMNOPQRSTUVWXYZ", min_size=1, max_size=6),
            min_size=1,
            max_size=4,
        ),
        st.lists(st.integers(min_value=0, max_value=999), max_size=3),
    )
    def test_converted_names_are_valid(self, words: list[str], suffixes: list[int]) -> None:
        """Converting an UPPER_SNAKE name always yields a valid name."""
        name = "_".join(words) + "".join(f"_{n}" for n in suffixes)
        assert is_lower_camel_case_with_numeric_suffixes(
            to_lower_camel_case_with_numeric_suffixes(name)
        )
