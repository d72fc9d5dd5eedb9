"""Message extraction and validation over a Python source tree.

MessageExtractor walks one module, recognizes message definitions and
fallback constructs, validates them, and hands each valid one to a
MessageConsumer. Recognized shapes:

    MSG_HELLO = get_msg("Hello, {$name}!", {"name": user.name})
    MSG_BYE = i18n.get_msg("Bye")                  # qualified callee
    self.MSG_OK = get_msg("OK")                    # attribute target
    LABELS = {"MSG_SAVE": get_msg("Save")}         # dict display entry
    MSG_OLD = "Legacy text"                        # legacy string (warned)
    def MSG_COUNT(count): return f"{count} items"  # legacy function (warned)
    label = get_msg_with_fallback(MSG_NEW, MSG_OLD)

When constructed with ``recognize_markers=True`` the extractor instead
recognizes the marker calls written by the protect phase.

Each traversal gets its own scope: the key table used to resolve fallback
arguments, the locations used for duplicate detection, and the pending
orphan calls never outlive one process() call.

Python 3.13+.
"""

from __future__ import annotations

import ast
import logging
from dataclasses import dataclass, field

from i18nrewrite.constants import UNKNOWN_SOURCE
from i18nrewrite.conventions import MessageConventions
from i18nrewrite.diagnostics import (
    BadFallbackSyntaxError,
    DiagnosticCollector,
    DiagnosticReporter,
    DuplicateKeyError,
    ErrorTemplate,
    FallbackArgError,
    MalformedDefinitionError,
    MessageError,
    MessageHasNoValueError,
    SourceSpan,
    emit,
)
from i18nrewrite.enums import DefinitionKind, MessageStyle
from i18nrewrite.messages import (
    IdGenerator,
    MessageBuilder,
    MessageModel,
    default_id_generator,
    fingerprint,
)
from i18nrewrite.syntax import DocAnnotations, Slot, SourceVisitor, parse_docstring, span_of
from i18nrewrite.syntax.annotations import attribute_docstring
from i18nrewrite.syntax.tree import fold_string, last_name, original_name, string_value

from .declarative import ParsedDefinition, parse_get_msg_call, parse_marker_call
from .definition import FallbackPair, MessageCollector, MessageConsumer, MessageDefinition
from .legacy import parse_legacy_function, parse_legacy_string

__all__ = ["MessageExtractor", "extract_messages"]

logger = logging.getLogger(__name__)


class MessageExtractor:
    """Recognizes and validates message definitions.

    Args:
        consumer: Receives every valid definition and fallback pair
        reporter: Receives diagnostics (default: a fresh DiagnosticCollector)
        conventions: Naming conventions (default: LEGACY style defaults)
        id_generator: Id derivation for messages without an explicit id
        recognize_markers: Recognize protect-phase markers instead of
            get_msg() definitions
        max_depth: Traversal depth limit

    Example:
        >>> collector = MessageCollector()
        >>> extractor = MessageExtractor(collector)
        >>> extractor.process(ast.parse('MSG_A = get_msg("a")\\n"Description."'), "a.py")
        >>> collector.messages[0].text
        'a'
    """

    def __init__(
        self,
        consumer: MessageConsumer,
        *,
        reporter: DiagnosticReporter | None = None,
        conventions: MessageConventions | None = None,
        id_generator: IdGenerator | None = None,
        recognize_markers: bool = False,
        max_depth: int | None = None,
    ) -> None:
        self.consumer = consumer
        self.reporter: DiagnosticReporter = (
            reporter if reporter is not None else DiagnosticCollector()
        )
        self.conventions = conventions if conventions is not None else MessageConventions()
        self.id_generator: IdGenerator = id_generator or default_id_generator
        self.recognize_markers = recognize_markers
        self.max_depth = max_depth

    def process(self, tree: ast.AST, source_name: str = UNKNOWN_SOURCE) -> None:
        """Traverse one tree, reporting diagnostics and feeding the consumer.

        Raises:
            DepthLimitExceededError: If the tree nests deeper than max_depth
        """
        traversal = _ExtractionPass(self, source_name)
        traversal.visit(tree)
        traversal.report_orphans()
        logger.info(
            "Extracted %d message(s) and %d fallback(s) from %s",
            traversal.message_count,
            traversal.fallback_count,
            source_name,
        )


def extract_messages(
    source: ast.Module | str,
    *,
    reporter: DiagnosticReporter | None = None,
    conventions: MessageConventions | None = None,
    id_generator: IdGenerator | None = None,
    source_name: str = UNKNOWN_SOURCE,
) -> list[MessageModel]:
    """Collect the messages defined in one module without rewriting it.

    Args:
        source: Module tree or source text
        reporter: Receives diagnostics
        conventions: Naming conventions (default: LEGACY style)
        id_generator: Id derivation (default: default_id_generator)
        source_name: File name used in diagnostics

    Returns:
        Valid messages in definition order
    """
    tree = ast.parse(source, filename=source_name) if isinstance(source, str) else source
    collector = MessageCollector()
    MessageExtractor(
        collector, reporter=reporter, conventions=conventions, id_generator=id_generator
    ).process(tree, source_name)
    return collector.messages


@dataclass(slots=True)
class _Binding:
    key: str
    value_slot: Slot
    span: SourceSpan | None
    docstring: str | None = None


@dataclass(slots=True)
class _Scope:
    definitions: dict[str, MessageDefinition] = field(default_factory=dict)
    key_locations: dict[str, SourceSpan | None] = field(default_factory=dict)
    pending_calls: dict[int, SourceSpan | None] = field(default_factory=dict)


class _ExtractionPass(SourceVisitor):
    """One traversal of one tree."""

    def __init__(self, extractor: MessageExtractor, source_name: str) -> None:
        super().__init__(max_depth=extractor.max_depth)
        self.extractor = extractor
        self.conventions = extractor.conventions
        self.source_name = source_name
        self.scope = _Scope()
        self.message_count = 0
        self.fallback_count = 0

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _span(self, node: ast.AST) -> SourceSpan | None:
        return span_of(node, self.source_name)

    def _report(self, error: MessageError) -> None:
        emit(self.extractor.reporter, error.diagnostic)

    def _callee(self, node: ast.AST) -> str | None:
        if isinstance(node, ast.Call):
            return last_name(node.func)
        return None

    def _is_message_key(self, name: str | None, value: ast.AST | None) -> bool:
        if name is None:
            return False
        is_new_style = self._callee(value) == self.conventions.get_msg
        return self.conventions.is_message_name(name, is_new_style)

    def _binding_key(self, slot: Slot | None) -> str | None:
        """Message key bound to the value in the given slot, if any."""
        if slot is None:
            return None
        value = slot.get()
        match slot.parent:
            case ast.Assign(targets=targets) if slot.field == "value":
                for target in targets:
                    name = last_name(target)
                    if self._is_message_key(name, value):
                        return name
            case ast.AnnAssign(target=target) if slot.field == "value":
                name = last_name(target)
                if self._is_message_key(name, value):
                    return name
            case ast.Dict(keys=keys) if slot.field == "values" and slot.index is not None:
                key_node = keys[slot.index]
                name = string_value(key_node) if key_node is not None else None
                if self._is_message_key(name, value):
                    return name
        return None

    # ------------------------------------------------------------------
    # Binding sites
    # ------------------------------------------------------------------

    def _bind_statement(self, node: ast.Assign | ast.AnnAssign) -> None:
        value_slot = Slot(node, "value")
        key = self._binding_key(value_slot)
        if key is not None:
            docstring = attribute_docstring(self.current_slot)
            self._bind(_Binding(key, value_slot, self._span(node), docstring))

    def visit_Assign(self, node: ast.Assign) -> None:
        self.generic_visit(node)
        if not self.extractor.recognize_markers:
            self._bind_statement(node)

    def visit_AnnAssign(self, node: ast.AnnAssign) -> None:
        self.generic_visit(node)
        if self.extractor.recognize_markers:
            return
        if node.value is None:
            name = last_name(node.target)
            if self._is_message_key(name, None):
                diagnostic = ErrorTemplate.message_has_no_value(
                    name, self._span(node)  # type: ignore[arg-type]
                )
                self._report(MessageHasNoValueError(diagnostic))
            return
        self._bind_statement(node)

    def visit_Dict(self, node: ast.Dict) -> None:
        self.generic_visit(node)
        if self.extractor.recognize_markers:
            return
        for index, key_node in enumerate(node.keys):
            value_slot = Slot(node, "values", index)
            key = self._binding_key(value_slot)
            if key is not None:
                span = self._span(key_node)  # type: ignore[arg-type]
                self._bind(_Binding(key, value_slot, span))

    def visit_FunctionDef(self, node: ast.FunctionDef) -> None:
        self.generic_visit(node)
        if self.extractor.recognize_markers:
            return
        name = original_name(node) or node.name
        if not self.conventions.is_message_name(name, False):
            return
        span = self._span(node)
        binding = _Binding(name, Slot(node, "body"), span, ast.get_docstring(node, clean=False))
        self._bind_legacy(binding, node)

    # ------------------------------------------------------------------
    # Calls: orphans, fallbacks, markers
    # ------------------------------------------------------------------

    def visit_Call(self, node: ast.Call) -> None:
        self.generic_visit(node)
        callee = self._callee(node)
        slot = self.current_slot
        conventions = self.conventions
        if self.extractor.recognize_markers:
            if callee == conventions.define_marker and slot is not None:
                self._define_from_marker(node, slot)
            elif callee == conventions.fallback_marker and slot is not None:
                self._fallback_from_marker(node, slot)
            return
        if callee == conventions.get_msg:
            self.scope.pending_calls[id(node)] = self._span(node)
        elif callee == conventions.get_msg_with_fallback and slot is not None:
            if self._binding_key(slot) is not None:
                # Bound to a message key: reported as a malformed definition.
                return
            self._fallback(node, slot)

    def report_orphans(self) -> None:
        """Warn about every get_msg() call no binding claimed."""
        for span in self.scope.pending_calls.values():
            emit(
                self.extractor.reporter,
                ErrorTemplate.orphaned(self.conventions.get_msg, span),
            )
        self.scope.pending_calls.clear()

    # ------------------------------------------------------------------
    # Definitions
    # ------------------------------------------------------------------

    def _bind(self, binding: _Binding) -> None:
        value = binding.value_slot.get()
        callee = self._callee(value)
        conventions = self.conventions
        try:
            if callee == conventions.get_msg:
                self.scope.pending_calls.pop(id(value), None)
                parsed = parse_get_msg_call(
                    value,  # type: ignore[arg-type]
                    binding.span,
                    function_name=conventions.get_msg,
                )
                self._define(binding, parsed, DefinitionKind.DECLARATIVE)
            elif callee in (conventions.define_marker, conventions.fallback_marker):
                return
            elif callee is not None:
                raise MalformedDefinitionError(
                    ErrorTemplate.unrecognized_function(binding.key, binding.span)
                )
            elif self._is_alias(value):
                return
            else:
                self._bind_legacy(binding, value)
        except MessageError as error:
            self._report(error)

    def _is_alias(self, value: ast.AST) -> bool:
        if not isinstance(value, (ast.Name, ast.Attribute)):
            return False
        name = last_name(value)
        return name is not None and self.conventions.is_message_name(name, True)

    def _bind_legacy(self, binding: _Binding, value: ast.AST) -> None:
        emit(
            self.extractor.reporter,
            ErrorTemplate.not_initialized_correctly(binding.key, binding.span),
        )
        if self.conventions.style is MessageStyle.CLOSURE:
            return
        try:
            match value:
                case ast.Lambda() | ast.FunctionDef():
                    function = parse_legacy_function(value, binding.span)
                    parsed = ParsedDefinition(
                        function.parts, function.placeholder_values, None, frozenset()
                    )
                    binding.value_slot = function.return_slot
                    self._define(binding, parsed, DefinitionKind.LEGACY_FUNCTION)
                case _ if fold_string(value) is not None:
                    parts = parse_legacy_string(value, binding.span)  # type: ignore[arg-type]
                    parsed = ParsedDefinition(parts, {}, None, frozenset())
                    self._define(binding, parsed, DefinitionKind.LEGACY_STRING)
                case _:
                    raise MalformedDefinitionError(
                        ErrorTemplate.not_initialized_with_get_msg(
                            binding.key, self.conventions.get_msg, binding.span
                        )
                    )
        except MessageError as error:
            self._report(error)

    def _define_from_marker(self, node: ast.Call, slot: Slot) -> None:
        span = self._span(node)
        try:
            parsed = parse_marker_call(node, span)
            key: str = parsed.key  # type: ignore[assignment]  # markers always carry a key
            self._define(_Binding(key, slot, span), parsed, DefinitionKind.MARKER)
        except MessageError as error:
            self._report(error)

    def _define(self, binding: _Binding, parsed: ParsedDefinition, kind: DefinitionKind) -> None:
        """Build the model, run the scope checks and hand over to the consumer.

        Raises:
            MessageError: From the duplicate check or the consumer
        """
        conventions = self.conventions
        is_marker = kind is DefinitionKind.MARKER
        annotations = (
            DocAnnotations(meaning=parsed.meaning, alternate_id=parsed.alternate_id)
            if is_marker
            else parse_docstring(binding.docstring)
        )

        builder = MessageBuilder(binding.key)
        builder.append_parts(parsed.parts)
        for option in parsed.options:
            builder.enable(option)
        builder.description = annotations.description
        builder.meaning = annotations.meaning
        builder.alternate_id = annotations.alternate_id
        if binding.span is not None:
            builder.source_name = f"{binding.span.source_name}:{binding.span.line}"

        is_unnamed = conventions.is_unnamed(binding.key)
        if is_unnamed:
            builder.key = conventions.message_prefix + fingerprint(builder.text)

        external_id = conventions.external_id(binding.key)
        if external_id is not None:
            builder.id = external_id
            builder.is_external = True
        elif builder.meaning:
            builder.id = builder.meaning
        else:
            builder.id = self.extractor.id_generator(builder.text, builder.placeholder_names)
        model = builder.build()

        if not is_marker:
            # Markers were checked when they were written.
            reporter = self.extractor.reporter
            if (
                kind is DefinitionKind.DECLARATIVE
                and not model.is_external
                and not model.description
            ):
                emit(reporter, ErrorTemplate.no_description(model.key, binding.span))
            if model.is_empty:
                emit(reporter, ErrorTemplate.empty_message(model.key, binding.span))
            if not model.is_external and not is_unnamed:
                if model.key in self.scope.key_locations:
                    raise DuplicateKeyError(
                        ErrorTemplate.duplicate_key(
                            model.key, self.scope.key_locations[model.key], binding.span
                        )
                    )
                self.scope.key_locations[model.key] = binding.span

        definition = MessageDefinition(
            model=model,
            slot=binding.value_slot,
            kind=kind,
            placeholder_values=parsed.placeholder_values,
            placeholder_map=parsed.placeholder_map,
            span=binding.span,
        )
        self.scope.definitions[binding.key] = definition
        self.message_count += 1
        logger.debug("Registered message %s (id %s) at %s", model.key, model.id, binding.span)
        self.extractor.consumer.on_message(definition)

    # ------------------------------------------------------------------
    # Fallbacks
    # ------------------------------------------------------------------

    def _resolve(self, name: str, span: SourceSpan | None) -> MessageDefinition:
        definition = self.scope.definitions.get(name)
        if definition is None:
            raise FallbackArgError(ErrorTemplate.fallback_arg_error(name, span))
        return definition

    def _fallback(self, node: ast.Call, slot: Slot) -> None:
        span = self._span(node)
        try:
            if node.keywords or len(node.args) != 2:
                raise BadFallbackSyntaxError(
                    ErrorTemplate.bad_fallback_syntax(
                        "Exactly two message names are required.", span
                    )
                )
            names: list[str] = []
            for arg in node.args:
                name = last_name(arg) if isinstance(arg, (ast.Name, ast.Attribute)) else None
                if name is None or not self.conventions.is_message_name(name, True):
                    raise BadFallbackSyntaxError(
                        ErrorTemplate.bad_fallback_syntax(
                            f"Argument is not a message name: {ast.unparse(arg)}", span
                        )
                    )
                names.append(name)
            primary, secondary = (self._resolve(name, span) for name in names)
            first, second = node.args
            self._hand_over(FallbackPair(primary, secondary, slot, first, second, span))
        except MessageError as error:
            self._report(error)

    def _fallback_from_marker(self, node: ast.Call, slot: Slot) -> None:
        span = self._span(node)
        args = node.args
        try:
            keys = [string_value(args[0]), string_value(args[2])] if len(args) == 4 else []
            if node.keywords or not keys or None in keys:
                raise BadFallbackSyntaxError(
                    ErrorTemplate.bad_fallback_syntax(
                        "Fallback marker takes two (key, value) pairs.", span
                    )
                )
            primary, secondary = (
                self._resolve(key, span) for key in keys  # type: ignore[arg-type]
            )
            self._hand_over(FallbackPair(primary, secondary, slot, args[1], args[3], span))
        except MessageError as error:
            self._report(error)

    def _hand_over(self, pair: FallbackPair) -> None:
        self.fallback_count += 1
        logger.debug("Fallback %s -> %s at %s", pair.primary.key, pair.secondary.key, pair.span)
        self.extractor.consumer.on_fallback(pair)

