"""Diagnostic reporting capability.

The extractor and substitution engine never print or raise for per-definition
problems; they hand each diagnostic to a DiagnosticReporter. Any object with
the two report methods qualifies. DiagnosticCollector is the default: it
keeps every diagnostic for later inspection and mirrors it to the logger.

Python 3.13+.
"""

import logging
from dataclasses import dataclass, field
from typing import Protocol

from .codes import Diagnostic, DiagnosticCode, SourceSpan
from .formatter import DiagnosticFormatter

__all__ = ["DiagnosticCollector", "DiagnosticReporter", "emit"]

logger = logging.getLogger(__name__)


class DiagnosticReporter(Protocol):
    """Receiver of error and warning diagnostics."""

    def report_error(
        self,
        code: DiagnosticCode,
        span: SourceSpan | None,
        detail: str,
        *,
        hint: str | None = None,
        key: str | None = None,
    ) -> None:
        """Record an error."""
        ...  # pylint: disable=unnecessary-ellipsis

    def report_warning(
        self,
        code: DiagnosticCode,
        span: SourceSpan | None,
        detail: str,
        *,
        hint: str | None = None,
        key: str | None = None,
    ) -> None:
        """Record a warning."""
        ...  # pylint: disable=unnecessary-ellipsis


def emit(reporter: DiagnosticReporter, diagnostic: Diagnostic) -> None:
    """Route a prebuilt Diagnostic to the reporter method matching its severity."""
    if diagnostic.is_error:
        reporter.report_error(
            diagnostic.code,
            diagnostic.span,
            diagnostic.message,
            hint=diagnostic.hint,
            key=diagnostic.message_key,
        )
    else:
        reporter.report_warning(
            diagnostic.code,
            diagnostic.span,
            diagnostic.message,
            hint=diagnostic.hint,
            key=diagnostic.message_key,
        )


@dataclass(slots=True)
class DiagnosticCollector:
    """Default reporter: stores diagnostics and logs them.

    Attributes:
        diagnostics: Every reported diagnostic, in report order
        formatter: Formatter used by format()

    Example:
        >>> collector = DiagnosticCollector()
        >>> replace_messages(tree, bundle, reporter=collector)
        >>> if collector.has_errors:
        ...     print(collector.format())
    """

    diagnostics: list[Diagnostic] = field(default_factory=list)
    formatter: DiagnosticFormatter = field(default_factory=DiagnosticFormatter)

    def report_error(
        self,
        code: DiagnosticCode,
        span: SourceSpan | None,
        detail: str,
        *,
        hint: str | None = None,
        key: str | None = None,
    ) -> None:
        """Record an error and log it at ERROR level."""
        self.diagnostics.append(
            Diagnostic(code=code, message=detail, span=span, hint=hint, message_key=key)
        )
        logger.error("%s [%s]: %s", span or "<no location>", code.name, detail)

    def report_warning(
        self,
        code: DiagnosticCode,
        span: SourceSpan | None,
        detail: str,
        *,
        hint: str | None = None,
        key: str | None = None,
    ) -> None:
        """Record a warning and log it at WARNING level."""
        self.diagnostics.append(
            Diagnostic(
                code=code,
                message=detail,
                span=span,
                hint=hint,
                severity="warning",
                message_key=key,
            )
        )
        logger.warning("%s [%s]: %s", span or "<no location>", code.name, detail)

    @property
    def errors(self) -> tuple[Diagnostic, ...]:
        """Diagnostics of error severity."""
        return tuple(d for d in self.diagnostics if d.is_error)

    @property
    def warnings(self) -> tuple[Diagnostic, ...]:
        """Diagnostics of warning severity."""
        return tuple(d for d in self.diagnostics if not d.is_error)

    @property
    def has_errors(self) -> bool:
        """True if at least one error was reported."""
        return any(d.is_error for d in self.diagnostics)

    def codes(self) -> list[DiagnosticCode]:
        """Codes of every diagnostic, in report order."""
        return [d.code for d in self.diagnostics]

    def format(self) -> str:
        """Render every diagnostic with the configured formatter."""
        return self.formatter.format_all(self.diagnostics)

    def clear(self) -> None:
        """Forget all diagnostics."""
        self.diagnostics.clear()
