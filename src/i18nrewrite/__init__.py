"""i18nrewrite - extraction and source rewriting of localizable messages.

Finds messages defined in Python modules through a fixed call convention,
validates their template, placeholders and options, assigns each a stable
id and rewrites the defining expression with its translation. A two-phase
route (protect, then complete) lets other source transformations run in
between.

Public API:
    extract_messages - Collect messages without rewriting
    replace_messages - Substitute translations in one pass
    protect_messages - Rewrite definitions into marker calls
    complete_messages - Resolve marker calls into translations
    SubstitutionEngine - The rewriting pass behind the three functions above
    MessageExtractor - Recognition and validation visitor
    MessageConventions - Naming conventions and style
    SimpleMessageBundle - In-memory translation bundle
    CatalogMessageBundle - Bundle backed by a Babel catalog (optional extra)

Exceptions:
    MessageError - Base exception class, carries a Diagnostic
    DepthLimitExceededError - Source tree nested too deeply

Submodules:
    i18nrewrite.messages - Message model, templates, escaping and ids
    i18nrewrite.syntax - ast adapter and depth-guarded visitor
    i18nrewrite.extraction - Definition recognition and validation
    i18nrewrite.runtime - Bundles, markers and the substitution engine
    i18nrewrite.diagnostics - Codes, templates, formatter and reporters
"""

# Essential Public API - Minimal exports for clean namespace
from .conventions import MessageConventions
from .core import DepthLimitExceededError
from .diagnostics import Diagnostic, DiagnosticCollector, MessageError
from .enums import MessageStyle, ReplacementMode
from .extraction import MessageExtractor, extract_messages
from .messages import MessageModel, MessagePart
from .runtime import (
    CatalogMessageBundle,
    SimpleMessageBundle,
    SubstitutionEngine,
    complete_messages,
    protect_messages,
    replace_messages,
)

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

try:
    __version__ = _get_version("i18nrewrite")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "CatalogMessageBundle",
    "DepthLimitExceededError",
    "Diagnostic",
    "DiagnosticCollector",
    "MessageConventions",
    "MessageError",
    "MessageExtractor",
    "MessageModel",
    "MessagePart",
    "MessageStyle",
    "ReplacementMode",
    "SimpleMessageBundle",
    "SubstitutionEngine",
    "__version__",
    "complete_messages",
    "extract_messages",
    "protect_messages",
    "replace_messages",
]
