"""Babel compatibility layer for optional dependency handling.

Provides centralized, lazy import infrastructure for Babel so that the
extractor and substitution engine never import it. Only the catalog-backed
message bundle needs Babel's message catalog model.

Installation modes:
    - Core: `pip install i18nrewrite` (no external dependencies)
    - Catalogs: `pip install i18nrewrite[babel]` (gettext catalog bundles)

Usage Pattern:
    # At module top-level (for type hints only):
    from typing import TYPE_CHECKING
    if TYPE_CHECKING:
        from babel.messages.catalog import Catalog

    # At function call site (for runtime use):
    from i18nrewrite.core.babel_compat import require_babel

    def load(path: str) -> None:
        require_babel("load")  # Raises ImportError if Babel missing
        from babel.messages.pofile import read_po  # Safe to import Babel now
        ...

Python 3.13+.
"""

from __future__ import annotations

from functools import lru_cache
from typing import IO, TYPE_CHECKING

if TYPE_CHECKING:
    from babel.messages.catalog import Catalog

__all__ = [
    "BabelImportError",
    "read_po_catalog",
    "require_babel",
]


@lru_cache(maxsize=1)
def _check_babel_available() -> bool:
    """Check if Babel is installed (computed once, cached via lru_cache)."""
    try:
        import babel  # noqa: F401, PLC0415  # pylint: disable=unused-import

        return True
    except ImportError:
        return False


class BabelImportError(ImportError):
    """Raised when Babel is required but not installed."""

    def __init__(self, feature: str) -> None:
        """Create error with feature-specific message.

        Args:
            feature: Name of the feature/function requiring Babel
        """
        message = (
            f"{feature} requires Babel for message catalogs. "
            "Install with: pip install i18nrewrite[babel]"
        )
        super().__init__(message)
        self.feature = feature


def require_babel(feature: str) -> None:
    """Assert that Babel is available, raising BabelImportError if not.

    Args:
        feature: Name of the feature requiring Babel (for error message)

    Raises:
        BabelImportError: If Babel is not installed
    """
    if not _check_babel_available():
        raise BabelImportError(feature)


def read_po_catalog(fileobj: IO[str] | IO[bytes], locale: str | None = None) -> Catalog:
    """Parse a gettext PO stream into a Babel Catalog.

    Args:
        fileobj: Open PO file (text or binary)
        locale: Locale of the catalog, if known

    Returns:
        The parsed catalog

    Raises:
        BabelImportError: If Babel is not installed
    """
    require_babel("read_po_catalog")
    from babel.messages.pofile import read_po  # noqa: PLC0415

    return read_po(fileobj, locale=locale)
