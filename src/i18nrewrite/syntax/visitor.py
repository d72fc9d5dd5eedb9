"""Depth-guarded, slot-aware visitor for Python source trees.

NOTE: This module follows Python stdlib ast.NodeVisitor naming convention.
Methods are named visit_NodeName (PascalCase) rather than visit_node_name (snake_case).
See: https://docs.python.org/3/library/ast.html#ast.NodeVisitor

Unlike ast.NodeVisitor, every visited node is paired with the Slot it
occupies in its parent, so a handler may replace the node in place.

Python 3.13+.
"""

import ast
from collections.abc import Callable
from typing import ClassVar

from i18nrewrite.constants import MAX_DEPTH
from i18nrewrite.core.depth_guard import DepthGuard

from .tree import Slot

__all__ = ["SourceVisitor"]


class SourceVisitor:
    """Base visitor for traversing and rewriting a Python ``ast`` tree.

    Follows stdlib ast.NodeVisitor convention: generic_visit() traverses all
    child nodes. Override visit_NodeType methods to add custom behavior, and
    call self.generic_visit(node) first for post-order handling.

    Uses class-level dispatch table:
    - Dispatch table built once per class definition via __init_subclass__
    - Bound methods cached per instance on first use

    While a handler runs, ``current_slot`` is the position of the node being
    handled (None for the root) and ``parent_slots`` lists the positions of
    its ancestors, innermost last.

    Example:
        >>> class CountCalls(SourceVisitor):
        ...     def __init__(self):
        ...         super().__init__()
        ...         self.count = 0
        ...
        ...     def visit_Call(self, node: ast.Call) -> None:
        ...         self.generic_visit(node)
        ...         self.count += 1
        ...
        >>> visitor = CountCalls()
        >>> visitor.visit(ast.parse("f(g(1))"))
        >>> visitor.count
        2
    """

    __slots__ = ("_depth_guard", "_instance_dispatch_cache", "_slots")

    # Class-level dispatch table (method names only, not bound methods)
    _class_visit_methods: ClassVar[dict[str, str]] = {}

    def __init_subclass__(cls, **kwargs: object) -> None:
        """Build class-level dispatch table when subclass is defined."""
        super().__init_subclass__(**kwargs)
        cls._class_visit_methods = {}
        for name in dir(cls):
            if name.startswith("visit_"):
                cls._class_visit_methods[name[6:]] = name

    def __init__(self, *, max_depth: int | None = None) -> None:
        """Initialize visitor with depth guard and dispatch cache.

        Subclasses MUST call super().__init__().

        Args:
            max_depth: Maximum traversal depth (default: MAX_DEPTH from constants).
        """
        self._depth_guard = DepthGuard(max_depth=max_depth if max_depth is not None else MAX_DEPTH)
        self._instance_dispatch_cache: dict[type[ast.AST], Callable[[ast.AST], None]] = {}
        self._slots: list[Slot | None] = []

    @property
    def current_slot(self) -> Slot | None:
        """Position of the node whose handler is running."""
        return self._slots[-1] if self._slots else None

    @property
    def parent_slots(self) -> list[Slot | None]:
        """Positions of the ancestors of the current node, innermost last."""
        return self._slots[:-1]

    def visit(self, node: ast.AST, slot: Slot | None = None) -> None:
        """Visit a node that sits at the given slot."""
        node_type = type(node)
        method = self._instance_dispatch_cache.get(node_type)
        if method is None:
            method_name = self._class_visit_methods.get(node_type.__name__)
            method = getattr(self, method_name) if method_name else self.generic_visit
            self._instance_dispatch_cache[node_type] = method

        self._slots.append(slot)
        try:
            method(node)
        finally:
            self._slots.pop()

    def generic_visit(self, node: ast.AST) -> None:
        """Visit every child node, with depth protection.

        List fields are walked by index and re-read on every step, so a
        handler may replace the child it is visiting.

        Raises:
            DepthLimitExceededError: If traversal depth exceeds the limit
        """
        with self._depth_guard:
            for field_name, value in ast.iter_fields(node):
                if isinstance(value, ast.AST):
                    self.visit(value, Slot(node, field_name))
                elif isinstance(value, list):
                    index = 0
                    while index < len(value):
                        item = value[index]
                        if isinstance(item, ast.AST):
                            self.visit(item, Slot(node, field_name, index))
                        index += 1
