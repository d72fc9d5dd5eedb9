"""HTML text transforms applied to literal message text.

Both transforms touch StringPart text only. Placeholder value expressions
are never escaped.

Python 3.13+. Zero external dependencies.
"""

from collections.abc import Collection

from i18nrewrite.enums import MessageOption

__all__ = ["apply_text_options", "escape_less_than", "unescape_html_entities"]

# Fixed decode order. '&amp;' comes last, so '&amp;lt;' yields '&lt;', not '<'.
_NAMED_ENTITIES: tuple[tuple[str, str], ...] = (
    ("&quot;", '"'),
    ("&apos;", "'"),
    ("&lt;", "<"),
    ("&gt;", ">"),
    ("&amp;", "&"),
)


def unescape_html_entities(text: str) -> str:
    """Decode the five named HTML entities.

    Example:
        >>> unescape_html_entities("a &lt; b &amp;&amp; &amp;lt;")
        'a < b && &lt;'
    """
    for entity, char in _NAMED_ENTITIES:
        text = text.replace(entity, char)
    return text


def escape_less_than(text: str) -> str:
    """Replace every '<' with '&lt;'."""
    return text.replace("<", "&lt;")


def apply_text_options(text: str, options: Collection[MessageOption]) -> str:
    """Apply the enabled text transforms to one literal segment.

    Entities are decoded first; a '<' exposed by decoding '&lt;' is then
    escaped again when both options are on.
    """
    if MessageOption.UNESCAPE_HTML_ENTITIES in options:
        text = unescape_html_entities(text)
    if MessageOption.HTML in options:
        text = escape_less_than(text)
    return text
