"""Tests for MessageExtractor: recognition, validation and diagnostics."""

from __future__ import annotations

import ast
import textwrap

import pytest

from i18nrewrite import (
    DepthLimitExceededError,
    DiagnosticCollector,
    MessageConventions,
    MessageExtractor,
    MessageStyle,
    extract_messages,
)
from i18nrewrite.diagnostics import DiagnosticCode
from i18nrewrite.extraction import MessageCollector
from i18nrewrite.messages import MessageModel, MessagePart, default_id_generator, fingerprint
from i18nrewrite.syntax import set_original_name

C = DiagnosticCode


def _extract(
    source: str, collector: DiagnosticCollector, **kwargs: object
) -> list[MessageModel]:
    return extract_messages(
        textwrap.dedent(source),
        reporter=collector,
        source_name="app.py",
        **kwargs,  # type: ignore[arg-type]
    )


def _collect(
    source: str, collector: DiagnosticCollector, **kwargs: object
) -> MessageCollector:
    messages = MessageCollector()
    extractor = MessageExtractor(messages, reporter=collector, **kwargs)  # type: ignore[arg-type]
    extractor.process(ast.parse(textwrap.dedent(source)), "app.py")
    return messages


# ============================================================================
# Declarative definitions
# ============================================================================


class TestDeclarative:
    """get_msg() bound to message keys."""

    def test_basic_definition(self, collector: DiagnosticCollector) -> None:
        """Template, placeholders, description and id are extracted."""
        (model,) = _extract(
            '''
            MSG_HELLO = get_msg("Hello, {$name}!", {"name": user.name})
            """Greeting on the start page."""
            ''',
            collector,
        )
        assert model.key == "MSG_HELLO"
        assert model.text == "Hello, {$name}!"
        assert model.description == "Greeting on the start page."
        assert model.id == default_id_generator("Hello, {$name}!", ["name"])
        assert model.source_name == "app.py:2"
        assert collector.diagnostics == []

    def test_missing_description_warns(self, collector: DiagnosticCollector) -> None:
        """A definition without docstring is still extracted."""
        models = _extract("MSG_A = get_msg('a')", collector)
        assert len(models) == 1
        assert collector.codes() == [C.NO_DESCRIPTION]
        assert collector.warnings[0].message_key == "MSG_A"

    def test_qualified_callee(self, collector: DiagnosticCollector) -> None:
        """i18n.get_msg is the same function."""
        (model,) = _extract("MSG_A = i18n.get_msg('a')\n'Doc.'", collector)
        assert model.text == "a"

    def test_attribute_target(self, collector: DiagnosticCollector) -> None:
        """Attribute assignments bind the attribute name."""
        (model,) = _extract(
            '''
            class View:
                def setup(self):
                    self.MSG_OK = get_msg("OK")
                    """Confirmation button."""
            ''',
            collector,
        )
        assert model.key == "MSG_OK"
        assert model.description == "Confirmation button."

    def test_annotated_assignment(self, collector: DiagnosticCollector) -> None:
        """An annotated assignment with a value is a definition."""
        (model,) = _extract("MSG_A: str = get_msg('a')\n'Doc.'", collector)
        assert model.key == "MSG_A"

    def test_dict_entry(self, collector: DiagnosticCollector) -> None:
        """String-keyed dict entries are definitions."""
        models = _extract("LABELS = {'MSG_SAVE': get_msg('Save'), 'other': 1}", collector)
        assert [m.key for m in models] == ["MSG_SAVE"]
        assert collector.codes() == [C.NO_DESCRIPTION]

    def test_chained_assignment(self, collector: DiagnosticCollector) -> None:
        """The first message-named target wins."""
        (model,) = _extract("x = MSG_A = MSG_B = get_msg('a')\n'Doc.'", collector)
        assert model.key == "MSG_A"

    def test_meaning_becomes_id(self, collector: DiagnosticCollector) -> None:
        """A meaning replaces the generated id."""
        (model,) = _extract(
            '''
            MSG_OPEN = get_msg("Open")
            """Menu entry.

            :meaning: verb
            :alternate_message_id: 1984
            """
            ''',
            collector,
        )
        assert model.id == "verb"
        assert model.meaning == "verb"
        assert model.alternate_id == "1984"
        assert model.description == "Menu entry."

    def test_options_recorded(self, collector: DiagnosticCollector) -> None:
        """Enabled options reach the model."""
        (model,) = _extract("MSG_A = get_msg('<b>', None, {'html': True})\n'Doc.'", collector)
        assert model.html

    def test_renamed_binding(self, collector: DiagnosticCollector) -> None:
        """A recorded original name identifies the key."""
        tree = ast.parse("a1 = get_msg('x')\n'Doc.'")
        set_original_name(tree.body[0].targets[0], "MSG_X")  # type: ignore[attr-defined]
        (model,) = extract_messages(tree, reporter=collector)
        assert model.key == "MSG_X"

    def test_custom_id_generator(self, collector: DiagnosticCollector) -> None:
        """A supplied generator replaces the default."""
        (model,) = _extract(
            "MSG_A = get_msg('a')\n'Doc.'",
            collector,
            id_generator=lambda text, names: f"id:{text}",
        )
        assert model.id == "id:a"

    def test_custom_function_name(self, collector: DiagnosticCollector) -> None:
        """Conventions rename the definition function."""
        (model,) = _extract(
            "MSG_A = tr('a')\n'Doc.'", collector, conventions=MessageConventions(get_msg="tr")
        )
        assert model.key == "MSG_A"


# ============================================================================
# Reserved key forms
# ============================================================================


class TestReservedKeys:
    """External and unnamed keys."""

    def test_external_id(self, collector: DiagnosticCollector) -> None:
        """The numeral is the id and no description is required."""
        (model,) = _extract("MSG_EXTERNAL_111 = get_msg('a')", collector)
        assert model.id == "111"
        assert model.is_external
        assert collector.diagnostics == []

    def test_external_duplicates_permitted(self, collector: DiagnosticCollector) -> None:
        """External keys may repeat their numeral."""
        models = _extract(
            """
            MSG_EXTERNAL_111 = get_msg('a')
            MSG_EXTERNAL_111__1 = get_msg('a')
            MSG_EXTERNAL_111 = get_msg('a')
            """,
            collector,
        )
        assert [m.id for m in models] == ["111", "111", "111"]
        assert not collector.has_errors

    def test_unnamed_renamed_by_fingerprint(self, collector: DiagnosticCollector) -> None:
        """Unnamed keys become MSG_<fingerprint> and may repeat."""
        models = _extract(
            """
            MSG_UNNAMED_1 = get_msg('Hi')
            'Doc.'
            MSG_UNNAMED_2 = get_msg('Hi')
            'Doc.'
            """,
            collector,
        )
        assert [m.key for m in models] == ["MSG_" + fingerprint("Hi")] * 2
        assert collector.diagnostics == []


# ============================================================================
# Structural diagnostics
# ============================================================================


class TestStructuralDiagnostics:
    """Errors cost one definition; warnings cost nothing."""

    def test_duplicate_key(self, collector: DiagnosticCollector) -> None:
        """The second definition of a key is rejected."""
        models = _extract("MSG_A = get_msg('a')\n'D.'\nMSG_A = get_msg('b')\n'D.'", collector)
        assert [m.text for m in models] == ["a"]
        assert collector.codes() == [C.DUPLICATE_KEY]
        assert "app.py:1:1" in collector.errors[0].message

    def test_scope_is_per_traversal(self, collector: DiagnosticCollector) -> None:
        """Processing two files with the same key is not a duplicate."""
        extractor = MessageExtractor(MessageCollector(), reporter=collector)
        extractor.process(ast.parse("MSG_A = get_msg('a')\n'D.'"), "one.py")
        extractor.process(ast.parse("MSG_A = get_msg('a')\n'D.'"), "two.py")
        assert collector.diagnostics == []

    def test_malformed_does_not_abort(self, collector: DiagnosticCollector) -> None:
        """Definitions after an invalid one are still extracted."""
        models = _extract(
            "MSG_A = get_msg('{$x}')\n'D.'\nMSG_B = get_msg('b')\n'D.'", collector
        )
        assert [m.key for m in models] == ["MSG_B"]
        assert collector.codes() == [C.MALFORMED_DEFINITION]

    def test_empty_message(self, collector: DiagnosticCollector) -> None:
        """An empty template is extracted with a warning."""
        models = _extract("MSG_A = get_msg('')\n'D.'", collector)
        assert len(models) == 1
        assert collector.codes() == [C.EMPTY_MESSAGE]

    def test_message_has_no_value(self, collector: DiagnosticCollector) -> None:
        """A declared but unassigned key is an error."""
        assert _extract("MSG_SILLY: str", collector) == []
        assert collector.codes() == [C.MESSAGE_HAS_NO_VALUE]

    @pytest.mark.parametrize(
        "source", ["print(get_msg('a'))", "x = get_msg('a')", "f(MSG_A=get_msg('a'))"]
    )
    def test_orphaned_calls(self, source: str, collector: DiagnosticCollector) -> None:
        """get_msg() not bound to a message key is only a warning."""
        assert _extract(source, collector) == []
        assert collector.codes() == [C.ORPHANED]

    def test_unrecognized_function(self, collector: DiagnosticCollector) -> None:
        """A message key bound to another call is malformed."""
        assert _extract("MSG_A = translate('a')", collector) == []
        assert collector.codes() == [C.MALFORMED_DEFINITION]
        assert "unrecognized function" in collector.errors[0].message

    @pytest.mark.parametrize(
        "source", ["MSG_B = MSG_A", "MSG_B = strings.MSG_A", "MSG_A, MSG_B = pair"]
    )
    def test_aliases_ignored(self, source: str, collector: DiagnosticCollector) -> None:
        """Aliases and destructuring are neither messages nor errors."""
        assert _extract(source, collector) == []
        assert collector.diagnostics == []


# ============================================================================
# Legacy forms and styles
# ============================================================================


class TestLegacyForms:
    """Legacy string and function forms under each style."""

    @pytest.mark.parametrize("style", [MessageStyle.LEGACY, MessageStyle.RELAX])
    def test_legacy_string_extracted_with_warning(
        self, style: MessageStyle, collector: DiagnosticCollector
    ) -> None:
        """The value is extracted and the form is warned about."""
        (model,) = _extract(
            "MSG_A = 'Hello ' + 'world'",
            collector,
            conventions=MessageConventions(style=style),
        )
        assert model.text == "Hello world"
        assert collector.codes() == [C.NOT_INITIALIZED_CORRECTLY]

    def test_closure_skips_legacy(self, collector: DiagnosticCollector) -> None:
        """CLOSURE warns and extracts nothing."""
        conventions = MessageConventions(style=MessageStyle.CLOSURE)
        assert _extract("MSG_A = 'Hello'", collector, conventions=conventions) == []
        assert collector.codes() == [C.NOT_INITIALIZED_CORRECTLY]

    def test_help_variable(self, collector: DiagnosticCollector) -> None:
        """MSG_X_HELP is a description variable outside CLOSURE."""
        assert _extract("MSG_A_HELP = 'Help text'", collector) == []
        assert collector.diagnostics == []
        conventions = MessageConventions(style=MessageStyle.CLOSURE)
        assert _extract("MSG_A_HELP = 'Help text'", collector, conventions=conventions) == []
        assert collector.codes() == [C.NOT_INITIALIZED_CORRECTLY]

    def test_non_literal_value(self, collector: DiagnosticCollector) -> None:
        """A value that is neither text nor function is malformed."""
        assert _extract("MSG_A = 42", collector) == []
        assert collector.codes() == [C.NOT_INITIALIZED_CORRECTLY, C.MALFORMED_DEFINITION]
        assert "initialized using get_msg function" in collector.errors[0].message

    def test_lambda(self, collector: DiagnosticCollector) -> None:
        """Lambda parameters are placeholders, original names kept."""
        (model,) = _extract("MSG_A = lambda amt_earned: 'Got ' + amt_earned", collector)
        assert model.text == "Got {$amt_earned}"

    def test_function_definition(self, collector: DiagnosticCollector) -> None:
        """A def named like a message is a legacy function with its docstring."""
        (model,) = _extract(
            '''
            def MSG_COUNT(count):
                """Inbox counter."""
                return f"{count} new messages"
            ''',
            collector,
        )
        assert model.key == "MSG_COUNT"
        assert model.parts == (MessagePart.placeholder("count"), MessagePart.text(" new messages"))
        assert model.description == "Inbox counter."
        assert collector.codes() == [C.NOT_INITIALIZED_CORRECTLY]

    def test_malformed_function(self, collector: DiagnosticCollector) -> None:
        """A function body outside the legacy shape is malformed."""
        assert _extract("def MSG_A(x):\n    return x.title()", collector) == []
        assert C.MALFORMED_DEFINITION in collector.codes()


# ============================================================================
# Fallbacks
# ============================================================================


class TestFallbacks:
    """get_msg_with_fallback() constructs."""

    _DEFS = "MSG_A = get_msg('a')\n'D.'\nMSG_B = get_msg('b')\n'D.'\n"

    def test_pair_handed_over(self, collector: DiagnosticCollector) -> None:
        """Both definitions are resolved."""
        messages = _collect(self._DEFS + "x = get_msg_with_fallback(MSG_A, MSG_B)", collector)
        assert messages.fallbacks == [("MSG_A", "MSG_B")]
        assert collector.diagnostics == []

    def test_qualified_arguments(self, collector: DiagnosticCollector) -> None:
        """The last name component identifies the definition."""
        messages = _collect(
            self._DEFS + "x = i18n.get_msg_with_fallback(m.MSG_A, self.MSG_B)", collector
        )
        assert messages.fallbacks == [("MSG_A", "MSG_B")]

    def test_undefined_argument(self, collector: DiagnosticCollector) -> None:
        """Arguments must name earlier definitions."""
        messages = _collect(self._DEFS + "x = get_msg_with_fallback(MSG_A, MSG_C)", collector)
        assert messages.fallbacks == []
        assert collector.codes() == [C.FALLBACK_ARG_ERROR]
        assert collector.errors[0].message == "Message MSG_C undefined"

    @pytest.mark.parametrize(
        "call",
        [
            "get_msg_with_fallback(MSG_A)",
            "get_msg_with_fallback(MSG_A, MSG_B, MSG_A)",
            "get_msg_with_fallback(MSG_A, 'MSG_B')",
            "get_msg_with_fallback(MSG_A, other)",
            "get_msg_with_fallback(MSG_A, secondary=MSG_B)",
        ],
    )
    def test_bad_syntax(self, call: str, collector: DiagnosticCollector) -> None:
        """Exactly two message names are required."""
        messages = _collect(self._DEFS + f"x = {call}", collector)
        assert messages.fallbacks == []
        assert collector.codes() == [C.BAD_FALLBACK_SYNTAX]

    def test_bound_to_message_key(self, collector: DiagnosticCollector) -> None:
        """A fallback is not a message definition."""
        messages = _collect(self._DEFS + "MSG_C = get_msg_with_fallback(MSG_A, MSG_B)", collector)
        assert messages.fallbacks == []
        assert [m.key for m in messages.messages] == ["MSG_A", "MSG_B"]
        assert collector.codes() == [C.MALFORMED_DEFINITION]


# ============================================================================
# Traversal limits
# ============================================================================


class TestDepthLimit:
    """Runaway nesting aborts the traversal."""

    def test_raises(self, collector: DiagnosticCollector) -> None:
        """DepthLimitExceededError propagates."""
        extractor = MessageExtractor(MessageCollector(), reporter=collector, max_depth=10)
        with pytest.raises(DepthLimitExceededError):
            extractor.process(ast.parse("x = " + "-" * 40 + "1"))
