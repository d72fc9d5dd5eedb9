"""Substitution engine: rewrites message definitions in a source tree.

SubstitutionEngine plugs into MessageExtractor as its consumer and runs in
one of three modes:

- FULL_REPLACE: every definition becomes its localized expression.
- PROTECT: every definition becomes a side-effect-free marker call.
- COMPLETE: every marker call becomes its localized expression.

Running COMPLETE over the output of PROTECT produces the same tree as one
FULL_REPLACE run over the original source.

Lookup tries the message id first, then its alternate id. A miss is a
warning in lenient mode (the untranslated text is substituted) and an error
in strict mode (the definition is left as it was).

Python 3.13+.
"""

from __future__ import annotations

import ast
import logging
from typing import TypeVar

from i18nrewrite.constants import UNKNOWN_SOURCE
from i18nrewrite.conventions import MessageConventions
from i18nrewrite.diagnostics import (
    DiagnosticCollector,
    DiagnosticReporter,
    ErrorTemplate,
    LookupMissError,
    PlaceholderMismatchError,
    emit,
)
from i18nrewrite.enums import DefinitionState, MessageStyle, ReplacementMode
from i18nrewrite.extraction import FallbackPair, MessageDefinition, MessageExtractor
from i18nrewrite.messages import MessageModel
from i18nrewrite.syntax import Slot

from .bundle import MessageBundle
from .marker import definition_marker, fallback_marker
from .replacement import build_replacement

__all__ = [
    "SubstitutionEngine",
    "complete_messages",
    "protect_messages",
    "replace_messages",
]

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=ast.AST)


class SubstitutionEngine:
    """Message rewriting pass over Python source trees.

    Args:
        bundle: Translations; may be None only in PROTECT mode
        mode: Which rewrite to perform
        strict: Report lookup misses as errors and leave the definition alone
        reporter: Receives diagnostics (default: a fresh DiagnosticCollector)
        conventions: Naming conventions (default: RELAX style)
        max_depth: Traversal depth limit

    Raises:
        ValueError: If no bundle is given for a mode that looks messages up

    Example:
        >>> engine = SubstitutionEngine(bundle, strict=True)
        >>> tree = engine.process(ast.parse(source), "views.py")
        >>> engine.reporter.has_errors
        False
    """

    def __init__(
        self,
        bundle: MessageBundle | None = None,
        mode: ReplacementMode = ReplacementMode.FULL_REPLACE,
        *,
        strict: bool = False,
        reporter: DiagnosticReporter | None = None,
        conventions: MessageConventions | None = None,
        max_depth: int | None = None,
    ) -> None:
        mode = ReplacementMode(mode)
        if bundle is None and mode is not ReplacementMode.PROTECT:
            msg = f"Mode {mode} requires a message bundle"
            raise ValueError(msg)
        self.bundle = bundle
        self.mode = mode
        self.strict = strict
        self.reporter: DiagnosticReporter = (
            reporter if reporter is not None else DiagnosticCollector()
        )
        self.conventions = (
            conventions
            if conventions is not None
            else MessageConventions().with_style(MessageStyle.RELAX)
        )
        self.max_depth = max_depth
        self._rewritten = 0

    def process(self, tree: T, source_name: str = UNKNOWN_SOURCE) -> T:
        """Rewrite one tree in place.

        Args:
            tree: Parsed module (or any subtree)
            source_name: File name used in diagnostics

        Returns:
            The same tree, for chaining

        Raises:
            DepthLimitExceededError: If the tree nests deeper than max_depth
        """
        self._rewritten = 0
        extractor = MessageExtractor(
            self,
            reporter=self.reporter,
            conventions=self.conventions,
            id_generator=self.bundle.id_generator() if self.bundle is not None else None,
            recognize_markers=self.mode is ReplacementMode.COMPLETE,
            max_depth=self.max_depth,
        )
        extractor.process(tree, source_name)
        ast.fix_missing_locations(tree)
        logger.info("%s rewrote %d site(s) in %s", self.mode, self._rewritten, source_name)
        return tree

    # ------------------------------------------------------------------
    # MessageConsumer
    # ------------------------------------------------------------------

    def on_message(self, definition: MessageDefinition) -> None:
        """Rewrite one definition according to the mode.

        Raises:
            LookupMissError: In strict mode, when the bundle lacks the message
            PlaceholderMismatchError: When the translation's placeholders
                do not fit the definition
        """
        if self.mode is ReplacementMode.PROTECT:
            self._splice(definition.slot, definition_marker(definition, self.conventions))
            definition.advance(DefinitionState.PROTECTED)
            logger.debug("Protected %s", definition.key)
            return

        translation = self._translation(definition)
        replacement = build_replacement(
            translation.parts, definition.placeholder_values, definition.model.options
        )
        self._splice(definition.slot, replacement)
        definition.advance(DefinitionState.REPLACED)
        logger.debug("Replaced %s with message %s", definition.key, translation.id)

    def on_fallback(self, pair: FallbackPair) -> None:
        """Rewrite one fallback construct according to the mode."""
        if self.mode is ReplacementMode.PROTECT:
            self._splice(pair.slot, fallback_marker(pair, self.conventions))
            logger.debug("Protected fallback %s -> %s", pair.primary.key, pair.secondary.key)
            return

        if self._lookup(pair.primary.model) is not None:
            chosen = pair.primary_value
        elif self._lookup(pair.secondary.model) is not None:
            chosen = pair.secondary_value
        else:
            chosen = pair.primary_value
        self._splice(pair.slot, chosen)
        logger.debug(
            "Resolved fallback %s -> %s to %s",
            pair.primary.key,
            pair.secondary.key,
            pair.primary.key if chosen is pair.primary_value else pair.secondary.key,
        )

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def _lookup(self, model: MessageModel) -> tuple[MessageModel, bool] | None:
        """Translation for a model and whether it came from the alternate id."""
        if self.bundle is None:
            return None
        found = self.bundle.get(model.id)
        if found is not None:
            return found, False
        if model.alternate_id:
            found = self.bundle.get(model.alternate_id)
            if found is not None:
                return found, True
        return None

    def _translation(self, definition: MessageDefinition) -> MessageModel:
        model = definition.model
        found = self._lookup(model)
        if found is None:
            diagnostic = ErrorTemplate.lookup_miss(
                model.key, model.id, definition.span, strict=self.strict
            )
            if self.strict:
                raise LookupMissError(diagnostic)
            emit(self.reporter, diagnostic)
            return model
        translation, via_alternate = found
        self._check_placeholders(definition, translation, via_alternate)
        return translation

    @staticmethod
    def _check_placeholders(
        definition: MessageDefinition, translation: MessageModel, via_alternate: bool
    ) -> None:
        expected = set(definition.model.placeholder_names)
        actual = set(translation.placeholder_names)
        if via_alternate:
            if actual == expected:
                return
            detail = (
                f"Alternate message {translation.id} uses placeholders "
                f"{sorted(actual)}, expected {sorted(expected)}."
            )
        elif actual and not expected:
            detail = "Empty placeholder value map for a translated message with placeholders."
        elif not actual <= expected:
            unknown = ", ".join(sorted(actual - expected))
            detail = f"Unrecognized message placeholder referenced: {unknown}"
        else:
            return
        raise PlaceholderMismatchError(
            ErrorTemplate.placeholder_mismatch(definition.key, detail, definition.span)
        )

    def _splice(self, slot: Slot, node: ast.expr) -> None:
        previous = slot.get()
        if getattr(node, "lineno", None) is None:
            ast.copy_location(node, previous)
        slot.set(node)
        self._rewritten += 1


def _as_tree(source: ast.Module | str, source_name: str) -> ast.Module:
    if isinstance(source, str):
        return ast.parse(source, filename=source_name)
    return source


def replace_messages(
    source: ast.Module | str,
    bundle: MessageBundle,
    *,
    strict: bool = False,
    reporter: DiagnosticReporter | None = None,
    conventions: MessageConventions | None = None,
    source_name: str = UNKNOWN_SOURCE,
) -> ast.Module:
    """Replace every definition with its localized expression in one pass.

    Args:
        source: Module tree (rewritten in place) or source text
        bundle: Translations
        strict: Treat lookup misses as errors
        reporter: Receives diagnostics
        conventions: Naming conventions (default: RELAX style)
        source_name: File name used in diagnostics

    Returns:
        The rewritten module

    Example:
        >>> bundle = SimpleMessageBundle()
        >>> tree = replace_messages('MSG_A = get_msg("Hi")\\n"Greeting."', bundle)
        >>> ast.unparse(tree)
        "MSG_A = 'Hi'\\n'Greeting.'"
    """
    engine = SubstitutionEngine(
        bundle,
        ReplacementMode.FULL_REPLACE,
        strict=strict,
        reporter=reporter,
        conventions=conventions,
    )
    return engine.process(_as_tree(source, source_name), source_name)


def protect_messages(
    source: ast.Module | str,
    *,
    reporter: DiagnosticReporter | None = None,
    conventions: MessageConventions | None = None,
    source_name: str = UNKNOWN_SOURCE,
) -> ast.Module:
    """Rewrite every definition and fallback into its marker call."""
    engine = SubstitutionEngine(
        None, ReplacementMode.PROTECT, reporter=reporter, conventions=conventions
    )
    return engine.process(_as_tree(source, source_name), source_name)


def complete_messages(
    source: ast.Module | str,
    bundle: MessageBundle,
    *,
    strict: bool = False,
    reporter: DiagnosticReporter | None = None,
    conventions: MessageConventions | None = None,
    source_name: str = UNKNOWN_SOURCE,
) -> ast.Module:
    """Resolve every marker call left by protect_messages().

    A tree without markers is returned unchanged.
    """
    engine = SubstitutionEngine(
        bundle,
        ReplacementMode.COMPLETE,
        strict=strict,
        reporter=reporter,
        conventions=conventions,
    )
    return engine.process(_as_tree(source, source_name), source_name)
