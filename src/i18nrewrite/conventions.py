"""Naming conventions for message keys, calls and markers.

Provides a single frozen dataclass holding every configurable name the
extractor recognizes. Construct ``MessageConventions()`` for the defaults.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field, replace

from i18nrewrite.constants import (
    DEFINE_MSG_MARKER,
    EXTERNAL_PREFIX,
    GET_MSG,
    GET_MSG_WITH_FALLBACK,
    HELP_SUFFIX,
    MESSAGE_PREFIX,
    MSG_FALLBACK_MARKER,
    UNNAMED_PREFIX,
)
from i18nrewrite.enums import MessageStyle

__all__ = ["MessageConventions"]

_IDENTIFIER = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")


@dataclass(frozen=True, slots=True)
class MessageConventions:
    """Immutable naming configuration for message recognition.

    Attributes:
        message_prefix: Prefix every message key starts with (default: "MSG_").
        external_prefix: Prefix of keys carrying an explicit numeric id
            (default: "MSG_EXTERNAL_").
        unnamed_prefix: Prefix of keys renamed from a text fingerprint
            (default: "MSG_UNNAMED").
        help_suffix: Suffix of legacy description variables, which are not
            messages outside CLOSURE style (default: "_HELP").
        get_msg: Definition function name (default: "get_msg").
        get_msg_with_fallback: Fallback function name
            (default: "get_msg_with_fallback").
        define_marker: Definition marker name (default: "__define_msg__").
        fallback_marker: Fallback marker name (default: "__msg_fallback__").
        style: How legacy definition forms are treated (default: LEGACY).

    Example:
        >>> conventions = MessageConventions(get_msg="tr", style=MessageStyle.CLOSURE)
        >>> conventions.is_message_name("MSG_HELLO", is_new_style=False)
        True
    """

    message_prefix: str = MESSAGE_PREFIX
    external_prefix: str = EXTERNAL_PREFIX
    unnamed_prefix: str = UNNAMED_PREFIX
    help_suffix: str = HELP_SUFFIX
    get_msg: str = GET_MSG
    get_msg_with_fallback: str = GET_MSG_WITH_FALLBACK
    define_marker: str = DEFINE_MSG_MARKER
    fallback_marker: str = MSG_FALLBACK_MARKER
    style: MessageStyle = MessageStyle.LEGACY
    _external_pattern: re.Pattern[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        """Validate names at construction time.

        Raises:
            ValueError: If a prefix is empty, or a call or marker name is not
                a Python identifier.
        """
        if not self.message_prefix:
            msg = "message_prefix must not be empty"
            raise ValueError(msg)
        if not self.external_prefix.startswith(self.message_prefix):
            msg = "external_prefix must start with message_prefix"
            raise ValueError(msg)
        if not self.unnamed_prefix.startswith(self.message_prefix):
            msg = "unnamed_prefix must start with message_prefix"
            raise ValueError(msg)
        names = (self.get_msg, self.get_msg_with_fallback, self.define_marker, self.fallback_marker)
        for name in names:
            if not _IDENTIFIER.fullmatch(name):
                msg = f"'{name}' is not a valid Python identifier"
                raise ValueError(msg)
        object.__setattr__(self, "style", MessageStyle(self.style))
        object.__setattr__(
            self,
            "_external_pattern",
            re.compile(re.escape(self.external_prefix) + r"(\d+)(?:__\d+)?"),
        )

    def with_style(self, style: MessageStyle) -> MessageConventions:
        """Copy of these conventions with a different style."""
        return replace(self, style=style)

    def is_message_name(self, name: str, is_new_style: bool) -> bool:
        """Whether a binding name denotes a message.

        Args:
            name: Variable, attribute or dict-key name
            is_new_style: True when the bound value is a get_msg() call

        Returns:
            True if the name starts with the message prefix and is not a
            legacy ``_HELP`` description variable.
        """
        return name.startswith(self.message_prefix) and (
            self.style is MessageStyle.CLOSURE
            or is_new_style
            or not name.endswith(self.help_suffix)
        )

    def external_id(self, key: str) -> str | None:
        """Numeral of an external key, or None.

        Example:
            >>> MessageConventions().external_id("MSG_EXTERNAL_111__1")
            '111'
        """
        match = self._external_pattern.fullmatch(key)
        return match.group(1) if match else None

    def is_unnamed(self, key: str) -> bool:
        """Whether the key is a placeholder name awaiting a fingerprint."""
        return key.startswith(self.unnamed_prefix)
