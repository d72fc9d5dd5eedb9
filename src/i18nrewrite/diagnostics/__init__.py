"""Diagnostic system for message extraction and substitution.

Provides structured diagnostics with codes, spans and hints, the exception
hierarchy raised by validation, and the reporter capability.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode, SourceSpan
from .errors import (
    BadFallbackSyntaxError,
    DuplicateKeyError,
    FallbackArgError,
    LookupMissError,
    MalformedDefinitionError,
    MessageError,
    MessageHasNoValueError,
    PlaceholderMismatchError,
)
from .formatter import DiagnosticFormatter, OutputFormat
from .reporter import DiagnosticCollector, DiagnosticReporter, emit
from .templates import ErrorTemplate

__all__ = [
    "BadFallbackSyntaxError",
    "Diagnostic",
    "DiagnosticCode",
    "DiagnosticCollector",
    "DiagnosticFormatter",
    "DiagnosticReporter",
    "DuplicateKeyError",
    "ErrorTemplate",
    "FallbackArgError",
    "LookupMissError",
    "MalformedDefinitionError",
    "MessageError",
    "MessageHasNoValueError",
    "OutputFormat",
    "PlaceholderMismatchError",
    "SourceSpan",
    "emit",
]
