"""Error message templates.

Centralized diagnostic templates for testable, consistent messages.
Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode, SourceSpan

__all__ = ["ErrorTemplate"]

_MALFORMED_PREFIX = "Message parse tree malformed."


class ErrorTemplate:
    """Centralized diagnostic templates.

    Every diagnostic text is created here. NO f-strings in exception constructors!
    Validation code asks for a Diagnostic and raises the matching
    MessageError subclass around it, which keeps every message:
        - Testable
        - Consistently worded
        - Documented in one place
    """

    # ------------------------------------------------------------------
    # Structural errors
    # ------------------------------------------------------------------

    @staticmethod
    def malformed_definition(
        detail: str, span: SourceSpan | None = None, key: str | None = None
    ) -> Diagnostic:
        """Definition, placeholder map, options bag or marker has the wrong shape.

        Args:
            detail: What exactly is wrong
            span: Location of the offending node
            key: Message key, when already known

        Returns:
            Diagnostic for MALFORMED_DEFINITION
        """
        return Diagnostic(
            code=DiagnosticCode.MALFORMED_DEFINITION,
            message=f"{_MALFORMED_PREFIX} {detail}",
            span=span,
            hint="Define messages as MSG_X = get_msg('text {$name}', {'name': value})",
            message_key=key,
        )

    @staticmethod
    def duplicate_placeholder(name: str, span: SourceSpan | None = None) -> Diagnostic:
        """Placeholder map names the same placeholder twice."""
        return ErrorTemplate.malformed_definition(f"Duplicate placeholder name: {name}", span)

    @staticmethod
    def placeholder_not_camel_case(name: str, span: SourceSpan | None = None) -> Diagnostic:
        """Placeholder name is not lowerCamelCase with optional numeric suffixes."""
        return ErrorTemplate.malformed_definition(
            f"Placeholder name not in lowerCamelCase: {name}", span
        )

    @staticmethod
    def unrecognized_placeholder(name: str, span: SourceSpan | None = None) -> Diagnostic:
        """Template references a placeholder the map does not supply."""
        return ErrorTemplate.malformed_definition(
            f"Unrecognized message placeholder referenced: {name}", span
        )

    @staticmethod
    def unused_placeholder(name: str, span: SourceSpan | None = None) -> Diagnostic:
        """Placeholder map supplies a value the template never references."""
        return ErrorTemplate.malformed_definition(f"Unused message placeholder: {name}", span)

    @staticmethod
    def empty_placeholder_map(span: SourceSpan | None = None) -> Diagnostic:
        """Template has placeholders but no values were supplied."""
        return ErrorTemplate.malformed_definition(
            "Empty placeholder value map for a templated message", span
        )

    @staticmethod
    def not_initialized_with_get_msg(
        key: str, function_name: str, span: SourceSpan | None = None
    ) -> Diagnostic:
        """Message value is neither a literal, a function, nor a get_msg() call."""
        return ErrorTemplate.malformed_definition(
            f"Message must be initialized using {function_name} function", span, key
        )

    @staticmethod
    def unrecognized_function(key: str, span: SourceSpan | None = None) -> Diagnostic:
        """Message value is a call to something other than get_msg()."""
        return ErrorTemplate.malformed_definition(
            "Message initialized using unrecognized function", span, key
        )

    @staticmethod
    def bad_fallback_syntax(detail: str, span: SourceSpan | None = None) -> Diagnostic:
        """get_msg_with_fallback() arguments have the wrong shape.

        Args:
            detail: What exactly is wrong
            span: Location of the fallback call

        Returns:
            Diagnostic for BAD_FALLBACK_SYNTAX
        """
        return Diagnostic(
            code=DiagnosticCode.BAD_FALLBACK_SYNTAX,
            message=f"Bad syntax for message fallback. {detail}",
            span=span,
            hint="Pass exactly two message names: get_msg_with_fallback(MSG_A, MSG_B)",
        )

    @staticmethod
    def fallback_arg_error(name: str, span: SourceSpan | None = None) -> Diagnostic:
        """Fallback argument names no message defined earlier in the file."""
        return Diagnostic(
            code=DiagnosticCode.FALLBACK_ARG_ERROR,
            message=f"Message {name} undefined",
            span=span,
            hint="Fallback arguments must be defined before the fallback call",
            message_key=name,
        )

    @staticmethod
    def message_has_no_value(key: str, span: SourceSpan | None = None) -> Diagnostic:
        """Message key declared without a value."""
        return Diagnostic(
            code=DiagnosticCode.MESSAGE_HAS_NO_VALUE,
            message=f"Message {key} has no value",
            span=span,
            hint="Assign a get_msg() call to the key",
            message_key=key,
        )

    @staticmethod
    def duplicate_key(
        key: str, previous: SourceSpan | None, span: SourceSpan | None = None
    ) -> Diagnostic:
        """Second non-external definition of the same key.

        Args:
            key: The message key defined twice
            previous: Location of the first definition
            span: Location of the second definition

        Returns:
            Diagnostic for DUPLICATE_KEY
        """
        where = f" at {previous}" if previous is not None else ""
        return Diagnostic(
            code=DiagnosticCode.DUPLICATE_KEY,
            message=f"Message key '{key}' is already defined{where}",
            span=span,
            hint="Give every message a unique key",
            message_key=key,
        )

    # ------------------------------------------------------------------
    # Advisory warnings
    # ------------------------------------------------------------------

    @staticmethod
    def not_initialized_correctly(key: str, span: SourceSpan | None = None) -> Diagnostic:
        """Legacy string or function form used instead of get_msg()."""
        return Diagnostic(
            code=DiagnosticCode.NOT_INITIALIZED_CORRECTLY,
            message=f"Message {key} must be initialized using get_msg function",
            span=span,
            severity="warning",
            message_key=key,
        )

    @staticmethod
    def no_description(key: str, span: SourceSpan | None = None) -> Diagnostic:
        """Message has no docstring."""
        return Diagnostic(
            code=DiagnosticCode.NO_DESCRIPTION,
            message=f"Message {key} has no description",
            span=span,
            hint="Add a docstring right after the assignment",
            severity="warning",
            message_key=key,
        )

    @staticmethod
    def empty_message(key: str, span: SourceSpan | None = None) -> Diagnostic:
        """Message text folds to the empty string."""
        return Diagnostic(
            code=DiagnosticCode.EMPTY_MESSAGE,
            message=(
                f"Message value of {key} is just an empty string. Empty messages are forbidden."
            ),
            span=span,
            severity="warning",
            message_key=key,
        )

    @staticmethod
    def orphaned(function_name: str, span: SourceSpan | None = None) -> Diagnostic:
        """get_msg() call whose result is not bound to a message key."""
        return Diagnostic(
            code=DiagnosticCode.ORPHANED,
            message=f"Calls to {function_name} must be assigned to a message key",
            span=span,
            severity="warning",
        )

    # ------------------------------------------------------------------
    # Lookup errors
    # ------------------------------------------------------------------

    @staticmethod
    def lookup_miss(
        key: str, message_id: str, span: SourceSpan | None = None, *, strict: bool = False
    ) -> Diagnostic:
        """Neither the id nor the alternate id is in the bundle.

        Args:
            key: Message key
            message_id: Id that was looked up
            span: Location of the definition
            strict: Strict mode reports an error, lenient mode a warning

        Returns:
            Diagnostic for LOOKUP_MISS
        """
        return Diagnostic(
            code=DiagnosticCode.LOOKUP_MISS,
            message=f"Message {key} with id '{message_id}' not found in bundle",
            span=span,
            hint="Regenerate the translation bundle",
            severity="error" if strict else "warning",
            message_key=key,
        )

    @staticmethod
    def placeholder_mismatch(
        key: str, detail: str, span: SourceSpan | None = None
    ) -> Diagnostic:
        """Translation placeholders disagree with the definition's."""
        return Diagnostic(
            code=DiagnosticCode.PLACEHOLDER_MISMATCH,
            message=f"Translation of {key} does not match its definition. {detail}",
            span=span,
            message_key=key,
        )

    # ------------------------------------------------------------------
    # Traversal failures
    # ------------------------------------------------------------------

    @staticmethod
    def traversal_depth_exceeded(max_depth: int) -> Diagnostic:
        """Source tree nests deeper than the traversal allows.

        Args:
            max_depth: The depth limit that was hit

        Returns:
            Diagnostic for TRAVERSAL_DEPTH_EXCEEDED
        """
        return Diagnostic(
            code=DiagnosticCode.TRAVERSAL_DEPTH_EXCEEDED,
            message=f"Maximum traversal depth ({max_depth}) exceeded",
            hint="Split the deeply nested expression or raise the depth limit",
        )
