"""Definition sites and the consumer capability.

A MessageDefinition ties a MessageModel to the place in the tree where it
was defined and to the placeholder value expressions supplied there. It
lives for one traversal only.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import ast
from dataclasses import dataclass, field
from typing import Protocol

from i18nrewrite.diagnostics import SourceSpan
from i18nrewrite.enums import DefinitionKind, DefinitionState
from i18nrewrite.messages import MessageModel
from i18nrewrite.syntax import Slot

__all__ = ["FallbackPair", "MessageCollector", "MessageConsumer", "MessageDefinition"]

_TRANSITIONS: dict[DefinitionState, frozenset[DefinitionState]] = {
    DefinitionState.NOT_VISITED: frozenset({DefinitionState.PROTECTED, DefinitionState.REPLACED}),
    DefinitionState.PROTECTED: frozenset({DefinitionState.REPLACED}),
    DefinitionState.REPLACED: frozenset(),
}


@dataclass(slots=True, eq=False)
class MessageDefinition:
    """One message definition site.

    Attributes:
        model: The extracted message
        slot: Position of the defining expression, which a rewrite replaces
        kind: Source shape the definition was recognized from
        placeholder_values: Placeholder name to value expression, in source order
        placeholder_map: The dict display the values came from, if any
        span: Location of the binding
        state: Progress through the protect/replace lifecycle
    """

    model: MessageModel
    slot: Slot
    kind: DefinitionKind
    placeholder_values: dict[str, ast.expr] = field(default_factory=dict)
    placeholder_map: ast.Dict | None = None
    span: SourceSpan | None = None
    state: DefinitionState = field(init=False)

    def __post_init__(self) -> None:
        # A marker only exists once its definition has been protected.
        self.state = (
            DefinitionState.PROTECTED
            if self.kind is DefinitionKind.MARKER
            else DefinitionState.NOT_VISITED
        )

    @property
    def key(self) -> str:
        """Key of the extracted message."""
        return self.model.key

    def advance(self, state: DefinitionState) -> None:
        """Move to the next lifecycle state.

        Raises:
            ValueError: On a transition the lifecycle does not allow, such as
                processing the same definition twice.
        """
        if state not in _TRANSITIONS[self.state]:
            msg = f"Message {self.key} cannot go from {self.state} to {state}"
            raise ValueError(msg)
        self.state = state


@dataclass(frozen=True, slots=True)
class FallbackPair:
    """A fallback construct and the two definitions it names.

    Attributes:
        primary: Definition tried first
        secondary: Definition tried when the primary has no translation
        slot: Position of the fallback call
        primary_value: Argument expression naming the primary message
        secondary_value: Argument expression naming the secondary message
        span: Location of the fallback call
    """

    primary: MessageDefinition
    secondary: MessageDefinition
    slot: Slot
    primary_value: ast.expr
    secondary_value: ast.expr
    span: SourceSpan | None = None


class MessageConsumer(Protocol):
    """Receiver of every structurally valid definition and fallback pair.

    Implementations may raise MessageError subclasses; the extractor reports
    them and leaves that one definition alone.
    """

    def on_message(self, definition: MessageDefinition) -> None:
        """Handle one definition."""
        ...  # pylint: disable=unnecessary-ellipsis

    def on_fallback(self, pair: FallbackPair) -> None:
        """Handle one fallback construct."""
        ...  # pylint: disable=unnecessary-ellipsis


@dataclass(slots=True)
class MessageCollector:
    """Consumer that only records what was extracted.

    Example:
        >>> collector = MessageCollector()
        >>> MessageExtractor(collector).process(ast.parse(source))
        >>> [m.key for m in collector.messages]
        ['MSG_HELLO']
    """

    messages: list[MessageModel] = field(default_factory=list)
    fallbacks: list[tuple[str, str]] = field(default_factory=list)

    def on_message(self, definition: MessageDefinition) -> None:
        self.messages.append(definition.model)

    def on_fallback(self, pair: FallbackPair) -> None:
        self.fallbacks.append((pair.primary.key, pair.secondary.key))
