"""Message exception hierarchy with structured diagnostics.

All exceptions store Diagnostic objects for rich error information.
Validation helpers raise these; the extractor catches them per definition
and hands the diagnostic to the reporter, so one bad definition is left
untouched while the traversal carries on.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, SourceSpan


class MessageError(Exception):
    """Base exception for all message processing errors.

    Attributes:
        diagnostic: Structured diagnostic information
    """

    def __init__(self, diagnostic: Diagnostic) -> None:
        """Initialize MessageError.

        Args:
            diagnostic: Diagnostic describing the failure
        """
        self.diagnostic = diagnostic
        super().__init__(diagnostic.message)

    @property
    def span(self) -> SourceSpan | None:
        """Source location carried by the diagnostic."""
        return self.diagnostic.span


class MalformedDefinitionError(MessageError):
    """Template, placeholder map, options bag or marker has the wrong shape.

    Structural: always detected before any bundle lookup.
    """


class BadFallbackSyntaxError(MessageError):
    """get_msg_with_fallback() arguments have the wrong shape."""


class FallbackArgError(MessageError):
    """A well-shaped fallback argument names no known message definition."""


class MessageHasNoValueError(MessageError):
    """A message key is declared without being assigned.

    Example:
        MSG_SILLY: str
    """


class DuplicateKeyError(MessageError):
    """Two non-external definitions share a key in one traversal."""


class LookupMissError(MessageError):
    """Neither the message id nor its alternate id is in the bundle.

    Raised only in strict mode; lenient mode reports a warning instead.
    """


class PlaceholderMismatchError(MessageError):
    """A translation references placeholders the definition does not supply.

    Post-lookup: surfaces only when a bundle is consulted, so a definition
    that fails this way is still protected successfully.
    """


__all__ = [
    "BadFallbackSyntaxError",
    "DuplicateKeyError",
    "FallbackArgError",
    "LookupMissError",
    "MalformedDefinitionError",
    "MessageError",
    "MessageHasNoValueError",
    "PlaceholderMismatchError",
]
