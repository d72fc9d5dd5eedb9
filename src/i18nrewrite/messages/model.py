"""Immutable message value types.

MessagePart is a tagged union (string text or placeholder reference);
MessageModel is one localizable message. Both are frozen once built.
MessageBuilder is the mutable staging area the extractor fills in.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from i18nrewrite.enums import MessageOption, PartKind

from .template import render_template

__all__ = ["MessageBuilder", "MessageModel", "MessagePart"]


@dataclass(frozen=True, slots=True)
class MessagePart:
    """One element of a message body.

    Attributes:
        kind: STRING or PLACEHOLDER
        value: Literal text for STRING, placeholder name for PLACEHOLDER

    Example:
        >>> MessagePart.text("Hello, ")
        MessagePart(kind=<PartKind.STRING: 'string'>, value='Hello, ')
        >>> MessagePart.placeholder("userName").is_placeholder
        True
    """

    kind: PartKind
    value: str

    @classmethod
    def text(cls, value: str) -> MessagePart:
        """Literal text part."""
        return cls(PartKind.STRING, value)

    @classmethod
    def placeholder(cls, name: str) -> MessagePart:
        """Placeholder reference part."""
        if not name:
            msg = "Placeholder name must not be empty"
            raise ValueError(msg)
        return cls(PartKind.PLACEHOLDER, name)

    @property
    def is_placeholder(self) -> bool:
        """True for placeholder references."""
        return self.kind is PartKind.PLACEHOLDER


@dataclass(frozen=True, slots=True)
class MessageModel:
    """A localizable message.

    Attributes:
        key: Source-level name the message is bound to
        id: Stable identifier used for bundle lookup
        parts: Ordered message body
        description: Translator-facing description
        meaning: Disambiguating meaning; used as id when present
        alternate_id: Secondary id tried when id misses in the bundle
        is_external: True when the key carries an explicit numeric id
        options: Enabled text options
        source_name: Where the message was defined, as "file:line"
    """

    key: str
    id: str
    parts: tuple[MessagePart, ...] = ()
    description: str | None = None
    meaning: str | None = None
    alternate_id: str | None = None
    is_external: bool = False
    options: frozenset[MessageOption] = frozenset()
    source_name: str | None = None

    def __post_init__(self) -> None:
        """Validate model invariants.

        Raises:
            ValueError: If id is empty.
        """
        if not self.id:
            msg = f"Message {self.key} must have a non-empty id"
            raise ValueError(msg)

    @property
    def placeholder_names(self) -> tuple[str, ...]:
        """Distinct placeholder names in order of first reference."""
        return tuple(dict.fromkeys(p.value for p in self.parts if p.is_placeholder))

    @property
    def text(self) -> str:
        """Canonical template text with {$name} placeholders."""
        return render_template(self.parts)

    @property
    def html(self) -> bool:
        """Whether '<' is escaped in literal text."""
        return MessageOption.HTML in self.options

    @property
    def unescape_html_entities(self) -> bool:
        """Whether named HTML entities are decoded in literal text."""
        return MessageOption.UNESCAPE_HTML_ENTITIES in self.options

    @property
    def is_empty(self) -> bool:
        """True when the body folds to the empty string."""
        return all(not p.is_placeholder and not p.value for p in self.parts)


@dataclass(slots=True)
class MessageBuilder:
    """Mutable staging area for a MessageModel.

    Example:
        >>> builder = MessageBuilder("MSG_HELLO").append_string_part("Hello, ")
        >>> builder = builder.append_placeholder_reference("name")
        >>> builder.build().text
        'Hello, {$name}'
    """

    key: str
    id: str | None = None
    description: str | None = None
    meaning: str | None = None
    alternate_id: str | None = None
    is_external: bool = False
    source_name: str | None = None
    parts: list[MessagePart] = field(default_factory=list)
    options: set[MessageOption] = field(default_factory=set)

    def append_string_part(self, text: str) -> MessageBuilder:
        """Append literal text. Empty text is dropped."""
        if text:
            self.parts.append(MessagePart.text(text))
        return self

    def append_placeholder_reference(self, name: str) -> MessageBuilder:
        """Append a placeholder reference."""
        self.parts.append(MessagePart.placeholder(name))
        return self

    def append_parts(self, parts: Iterable[MessagePart]) -> MessageBuilder:
        """Append several parts at once."""
        self.parts.extend(parts)
        return self

    def enable(self, option: MessageOption) -> MessageBuilder:
        """Turn a text option on."""
        self.options.add(option)
        return self

    @property
    def placeholder_names(self) -> tuple[str, ...]:
        """Distinct placeholder names collected so far."""
        return tuple(dict.fromkeys(p.value for p in self.parts if p.is_placeholder))

    @property
    def text(self) -> str:
        """Canonical template text collected so far."""
        return render_template(self.parts)

    def build(self) -> MessageModel:
        """Freeze into a MessageModel. The key doubles as id when none was set."""
        return MessageModel(
            key=self.key,
            id=self.id if self.id is not None else self.key,
            parts=tuple(self.parts),
            description=self.description,
            meaning=self.meaning,
            alternate_id=self.alternate_id,
            is_external=self.is_external,
            options=frozenset(self.options),
            source_name=self.source_name,
        )
