"""Message bundles: the translation lookup table.

The substitution engine only needs three queries from a bundle, captured by
the MessageBundle protocol. SimpleMessageBundle keeps MessageModel objects
in memory; CatalogMessageBundle adapts a Babel message catalog (requires
the optional ``babel`` extra).

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from typing import IO, TYPE_CHECKING, Protocol

from i18nrewrite.core.babel_compat import read_po_catalog, require_babel
from i18nrewrite.messages import (
    IdGenerator,
    MessageModel,
    MessagePart,
    TemplateSyntaxError,
    is_lower_camel_case_with_numeric_suffixes,
    parse_template,
    to_lower_camel_case_with_numeric_suffixes,
)

if TYPE_CHECKING:
    from babel.messages.catalog import Catalog, Message

__all__ = ["CatalogMessageBundle", "MessageBundle", "SimpleMessageBundle"]

logger = logging.getLogger(__name__)


class MessageBundle(Protocol):
    """Read-only lookup of translated messages by id."""

    def get(self, message_id: str) -> MessageModel | None:
        """Translated message for an id, or None when absent."""
        ...  # pylint: disable=unnecessary-ellipsis

    def all_messages(self) -> Sequence[MessageModel]:
        """Every message in the bundle."""
        ...  # pylint: disable=unnecessary-ellipsis

    def id_generator(self) -> IdGenerator | None:
        """Id derivation the bundle was generated with, or None for the default."""
        ...  # pylint: disable=unnecessary-ellipsis


class SimpleMessageBundle:
    """In-memory bundle keyed by message id.

    Adding a message whose id is already present replaces the earlier one.

    Example:
        >>> bundle = SimpleMessageBundle()
        >>> bundle.add(MessageModel("MSG_HI", "1", (MessagePart.text("Hola"),)))
        >>> bundle.get("1").text
        'Hola'
    """

    __slots__ = ("_generator", "_messages")

    def __init__(
        self,
        messages: Iterable[MessageModel] = (),
        *,
        id_generator: IdGenerator | None = None,
    ) -> None:
        self._messages: dict[str, MessageModel] = {}
        self._generator = id_generator
        for message in messages:
            self.add(message)

    def add(self, message: MessageModel) -> None:
        """Add or replace the message stored under message.id."""
        if message.id in self._messages:
            logger.debug("Replacing bundle entry for id %s", message.id)
        self._messages[message.id] = message

    def get(self, message_id: str) -> MessageModel | None:
        return self._messages.get(message_id)

    def all_messages(self) -> Sequence[MessageModel]:
        return tuple(self._messages.values())

    def id_generator(self) -> IdGenerator | None:
        return self._generator

    def __len__(self) -> int:
        return len(self._messages)

    def __contains__(self, message_id: object) -> bool:
        return message_id in self._messages

    def __repr__(self) -> str:
        return f"SimpleMessageBundle(messages={len(self._messages)})"


def _normalize_placeholders(parts: Iterable[MessagePart]) -> tuple[MessagePart, ...]:
    return tuple(
        MessagePart.placeholder(to_lower_camel_case_with_numeric_suffixes(part.value))
        if part.is_placeholder and not is_lower_camel_case_with_numeric_suffixes(part.value)
        else part
        for part in parts
    )


class CatalogMessageBundle(SimpleMessageBundle):
    """Bundle built from a Babel message catalog.

    Each translated singular entry becomes one message: msgid is the message
    id, msgstr the translated template, msgctxt the meaning and the
    extracted comments the description. Fuzzy, plural and untranslated
    entries are left out, as are entries whose msgstr is not a valid
    template.

    Example:
        >>> with open("messages.po", "rb") as f:
        ...     bundle = CatalogMessageBundle.from_po(f, locale="lv")
        >>> bundle.get("3Z7Q5LJ4W0AX").text
        'Sveiki, {$userName}!'
    """

    __slots__ = ("locale",)

    def __init__(
        self, catalog: Catalog, *, id_generator: IdGenerator | None = None
    ) -> None:
        require_babel("CatalogMessageBundle")
        super().__init__(id_generator=id_generator)
        self.locale = str(catalog.locale) if catalog.locale is not None else None
        skipped = 0
        for entry in catalog:
            message = self._convert(entry)
            if message is None:
                skipped += 1
            else:
                self.add(message)
        logger.info(
            "Loaded %d message(s) from catalog (locale %s), skipped %d",
            len(self),
            self.locale,
            skipped,
        )

    @classmethod
    def from_po(
        cls,
        fileobj: IO[str] | IO[bytes],
        *,
        locale: str | None = None,
        id_generator: IdGenerator | None = None,
    ) -> CatalogMessageBundle:
        """Read a gettext PO stream into a bundle.

        Raises:
            BabelImportError: If Babel is not installed
        """
        return cls(read_po_catalog(fileobj, locale=locale), id_generator=id_generator)

    @staticmethod
    def _convert(entry: Message) -> MessageModel | None:
        message_id = entry.id
        translation = entry.string
        if not message_id or not isinstance(message_id, str):
            # Header entry or plural form
            return None
        if not translation or not isinstance(translation, str) or entry.fuzzy:
            return None
        try:
            parts = parse_template(translation)
        except TemplateSyntaxError as e:
            logger.warning("Skipping catalog entry %s: %s", message_id, e)
            return None
        comments = entry.auto_comments or []
        return MessageModel(
            key=message_id,
            id=message_id,
            parts=_normalize_placeholders(parts),
            description="\n".join(comments) or None,
            meaning=entry.context or None,
        )

    def __repr__(self) -> str:
        return f"CatalogMessageBundle(locale={self.locale!r}, messages={len(self)})"
