"""Tests for SourceVisitor and DepthGuard."""

from __future__ import annotations

import ast
import sys

import pytest

from i18nrewrite.core import DepthGuard, DepthLimitExceededError
from i18nrewrite.core.depth_guard import depth_clamp
from i18nrewrite.diagnostics import DiagnosticCode
from i18nrewrite.syntax import Slot, SourceVisitor
from i18nrewrite.syntax.tree import string_constant


class _NameRecorder(SourceVisitor):
    def __init__(self, **kwargs: object) -> None:
        super().__init__(**kwargs)  # type: ignore[arg-type]
        self.seen: list[tuple[str, str, int | None, int]] = []

    def visit_Name(self, node: ast.Name) -> None:
        slot = self.current_slot
        assert slot is not None
        self.seen.append((node.id, slot.field, slot.index, len(self.parent_slots)))


class _NameReplacer(SourceVisitor):
    def visit_Name(self, node: ast.Name) -> None:
        slot = self.current_slot
        assert slot is not None
        slot.set(string_constant(node.id.upper()))


# ============================================================================
# DepthGuard
# ============================================================================


class TestDepthGuard:
    """Depth counting and limiting."""

    def test_depth_tracks_nesting(self) -> None:
        """Entering increments, exiting decrements."""
        guard = DepthGuard(max_depth=5)
        with guard:
            with guard:
                assert guard.current_depth == 2
            assert guard.current_depth == 1
        assert guard.current_depth == 0

    def test_limit_raises_with_diagnostic(self) -> None:
        """Exceeding the limit raises without corrupting the counter."""
        guard = DepthGuard(max_depth=1)
        with guard:
            with pytest.raises(DepthLimitExceededError) as exc_info:
                guard.__enter__()
            assert guard.current_depth == 1
        assert exc_info.value.diagnostic.code is DiagnosticCode.TRAVERSAL_DEPTH_EXCEEDED

    def test_clamp_against_recursion_limit(self) -> None:
        """Requests beyond the recursion limit are clamped."""
        limit = sys.getrecursionlimit()
        assert depth_clamp(limit * 10) < limit
        assert depth_clamp(5) == 5


# ============================================================================
# SourceVisitor
# ============================================================================


class TestSourceVisitor:
    """Slot-aware traversal."""

    def test_dispatch_and_slots(self) -> None:
        """Handlers see the slot of the node they handle."""
        visitor = _NameRecorder()
        visitor.visit(ast.parse("f(a, b)"))
        assert visitor.seen == [
            ("f", "func", None, 3),
            ("a", "args", 0, 3),
            ("b", "args", 1, 3),
        ]

    def test_root_has_no_slot(self) -> None:
        """The root node is visited without a slot."""
        slots: list[Slot | None] = []

        class Recorder(SourceVisitor):
            def visit_Module(self, node: ast.Module) -> None:
                slots.append(self.current_slot)
                self.generic_visit(node)

        Recorder().visit(ast.parse("x"))
        assert slots == [None]

    def test_handler_may_replace_node(self) -> None:
        """Replacing through the slot rewrites the tree."""
        module = ast.parse("f(a, b)")
        _NameReplacer().visit(module)
        assert ast.unparse(module) == "'F'('A', 'B')"

    def test_depth_limit_aborts_traversal(self) -> None:
        """A tree nested deeper than max_depth raises."""
        module = ast.parse("x = " + "-" * 40 + "1")
        with pytest.raises(DepthLimitExceededError):
            _NameRecorder(max_depth=10).visit(module)

    def test_shallow_tree_within_limit(self) -> None:
        """A shallow tree traverses under a small limit."""
        visitor = _NameRecorder(max_depth=10)
        visitor.visit(ast.parse("x = y"))
        assert [name for name, *_ in visitor.seen] == ["x", "y"]
