"""Tests for the i18nrewrite package entry point."""

from __future__ import annotations

import subprocess
import sys

import pytest

import i18nrewrite


class TestExports:
    """__all__ integrity."""

    @pytest.mark.parametrize("name", i18nrewrite.__all__)
    def test_exported_name_accessible(self, name: str) -> None:
        """Every exported name resolves."""
        assert getattr(i18nrewrite, name) is not None

    def test_version(self) -> None:
        """__version__ is a non-empty string."""
        assert isinstance(i18nrewrite.__version__, str)
        assert i18nrewrite.__version__

    def test_one_pass_example(self) -> None:
        """The documented one-pass example works."""
        tree = i18nrewrite.replace_messages(
            'MSG_A = get_msg("Hi")\n"Greeting."', i18nrewrite.SimpleMessageBundle()
        )
        assert tree.body[0].value.value == "Hi"  # type: ignore[attr-defined]


class TestImportIsolation:
    """Importing the package never imports Babel."""

    def test_babel_not_imported(self) -> None:
        """Babel stays unloaded until a catalog bundle is built."""
        result = subprocess.run(
            [sys.executable, "-c", "import sys, i18nrewrite; print('babel' in sys.modules)"],
            capture_output=True,
            text=True,
            check=True,
        )
        assert result.stdout.strip() == "False"
