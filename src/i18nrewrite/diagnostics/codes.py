"""Diagnostic codes and data structures.

Defines error codes, source spans, and diagnostic messages.
Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Literal

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
    "SourceSpan",
]


class DiagnosticCode(Enum):
    """Diagnostic codes with unique identifiers.

    Organized by category:
        1000-1999: Structural errors, detected before any bundle lookup
        2000-2999: Advisory warnings, never block processing
        3000-3999: Lookup errors, detected after structural validation
        4000-4999: Traversal failures
    """

    # Structural errors (1000-1999) - "pre-lookup"
    MALFORMED_DEFINITION = 1001
    BAD_FALLBACK_SYNTAX = 1002
    FALLBACK_ARG_ERROR = 1003
    MESSAGE_HAS_NO_VALUE = 1004
    DUPLICATE_KEY = 1005

    # Advisory warnings (2000-2999)
    NOT_INITIALIZED_CORRECTLY = 2001
    NO_DESCRIPTION = 2002
    EMPTY_MESSAGE = 2003
    ORPHANED = 2004

    # Lookup errors (3000-3999) - "post-lookup"
    # LOOKUP_MISS is reported as a warning in lenient mode, an error in strict mode.
    LOOKUP_MISS = 3001
    PLACEHOLDER_MISMATCH = 3002

    # Traversal failures (4000-4999)
    TRAVERSAL_DEPTH_EXCEEDED = 4001


@dataclass(frozen=True, slots=True)
class SourceSpan:
    """Source code location for error reporting.

    Attributes:
        source_name: File name or other label of the traversed tree
        line: Line number (1-indexed)
        column: Column number (1-indexed)
    """

    source_name: str
    line: int
    column: int

    def __post_init__(self) -> None:
        """Validate SourceSpan invariants.

        Raises:
            ValueError: If line or column is less than 1 (both are 1-indexed).
        """
        if self.line < 1:
            msg = f"SourceSpan.line must be >= 1 (1-indexed), got {self.line}"
            raise ValueError(msg)
        if self.column < 1:
            msg = f"SourceSpan.column must be >= 1 (1-indexed), got {self.column}"
            raise ValueError(msg)

    def __str__(self) -> str:
        """Return 'name:line:column'."""
        return f"{self.source_name}:{self.line}:{self.column}"


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Structured diagnostic message.

    Inspired by Rust compiler diagnostics. Provides rich error information
    for both humans and tools.

    Attributes:
        code: Unique diagnostic code
        message: Human-readable description
        span: Source location (None when the node carries no position)
        hint: Suggestion for fixing the problem
        severity: Error severity level
        message_key: Message key the diagnostic is about, when known
    """

    code: DiagnosticCode
    message: str
    span: SourceSpan | None = None
    hint: str | None = None
    severity: Literal["error", "warning"] = "error"
    message_key: str | None = None

    def __str__(self) -> str:
        """Return human-readable error description."""
        return self.message

    @property
    def is_error(self) -> bool:
        """True for error severity."""
        return self.severity == "error"

    def format_error(self) -> str:
        """Format diagnostic like Rust compiler.

        Delegates to DiagnosticFormatter for consistent output.

        Example output:
            error[DUPLICATE_KEY]: Message key 'MSG_HELLO' is already defined at app.py:3:1
              --> app.py, line 9, column 1
              = help: Give every message a unique key

        Returns:
            Formatted error message
        """
        from .formatter import DiagnosticFormatter  # noqa: PLC0415 - circular

        return DiagnosticFormatter().format(self)
