"""Error message templates.

Centralized error message templates for testable, consistent error messages.
Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode, SourceSpan


class ErrorTemplate:
    """Centralized error message templates.

    All error messages are created here. NO f-strings in exception constructors!
    This provides:
        - Testable error messages
        - Consistent formatting
        - Documentation of all error cases
    """

    # Formatting errors

    @staticmethod
    def formatting_failed(formatter: str, value: object, reason: str) -> Diagnostic:
        """Built-in or custom formatter rejected a value."""
        msg = f"Formatter '{formatter}' failed for {value!r}: {reason}"
        return Diagnostic(code=DiagnosticCode.FORMATTING_FAILED, message=msg)

    # Lexical errors

    @staticmethod
    def unexpected_eof(position: int) -> Diagnostic:
        """Token cursor read past the end of the token stream."""
        msg = f"Unexpected end of template at position {position}"
        return Diagnostic(code=DiagnosticCode.UNEXPECTED_EOF, message=msg)

    @staticmethod
    def unmatched_closing_brace(span: SourceSpan) -> Diagnostic:
        """A '}' with no open argument or case body."""
        return Diagnostic(
            code=DiagnosticCode.UNMATCHED_CLOSING_BRACE,
            message="Unmatched '}' in message text",
            span=span,
            hint="Quote literal braces as '}' or remove the stray brace",
        )

    @staticmethod
    def unterminated_argument(span: SourceSpan, depth: int) -> Diagnostic:
        """Input ended while an argument or case body was still open.

        Args:
            span: Location of the end of input
            depth: Brace nesting depth at end of input
        """
        msg = f"Template ended inside an argument ({depth} unclosed '{{')"
        return Diagnostic(
            code=DiagnosticCode.UNTERMINATED_ARGUMENT,
            message=msg,
            span=span,
            hint="Close every '{' with a matching '}'",
        )

    @staticmethod
    def unterminated_quote(span: SourceSpan) -> Diagnostic:
        """Input ended inside a quoted literal."""
        return Diagnostic(
            code=DiagnosticCode.UNTERMINATED_QUOTE,
            message="Unterminated quoted literal",
            span=span,
            hint="Close the quoted literal with a single apostrophe",
        )

    # Syntax errors

    @staticmethod
    def expected_argument_name(found: str, span: SourceSpan) -> Diagnostic:
        """Argument did not start with a parameter name."""
        msg = f"Expected argument name, found {found}"
        return Diagnostic(
            code=DiagnosticCode.EXPECTED_ARGUMENT_NAME,
            message=msg,
            span=span,
            hint="Arguments start with a parameter name, e.g. {name}",
        )

    @staticmethod
    def expected_format_kind(found: str, span: SourceSpan) -> Diagnostic:
        """Second argument part is missing."""
        msg = f"Expected formatter kind after ',', found {found}"
        return Diagnostic(
            code=DiagnosticCode.EXPECTED_FORMAT_KIND,
            message=msg,
            span=span,
            hint="Name a formatter such as number, date, plural or select",
        )

    @staticmethod
    def unexpected_token(found: str, expected: str, span: SourceSpan) -> Diagnostic:
        """Generic grammar violation."""
        msg = f"Unexpected {found}, expected {expected}"
        return Diagnostic(code=DiagnosticCode.UNEXPECTED_TOKEN, message=msg, span=span)

    @staticmethod
    def missing_selector(span: SourceSpan) -> Diagnostic:
        """Case body without a selector in front of it."""
        return Diagnostic(
            code=DiagnosticCode.MISSING_SELECTOR,
            message="Expected a case selector before '{'",
            span=span,
            hint="Write a selector such as 'other' or '=0' before each case body",
        )

    @staticmethod
    def invalid_offset(literal: str, span: SourceSpan) -> Diagnostic:
        """Offset literal is not a non-negative integer."""
        msg = f"Invalid plural offset '{literal}'"
        return Diagnostic(
            code=DiagnosticCode.INVALID_OFFSET,
            message=msg,
            span=span,
            hint="Use a non-negative integer, e.g. offset:1",
        )

    @staticmethod
    def invalid_selector(selector: str, span: SourceSpan) -> Diagnostic:
        """Explicit value selector is not an integer."""
        msg = f"Invalid explicit value selector '{selector}'"
        return Diagnostic(
            code=DiagnosticCode.INVALID_SELECTOR,
            message=msg,
            span=span,
            hint="Explicit selectors compare integers, e.g. =0 or =12",
        )

    @staticmethod
    def duplicate_selector(selector: str, span: SourceSpan) -> Diagnostic:
        """Selector appears twice in the same case list."""
        msg = f"Duplicate case selector '{selector}'"
        return Diagnostic(
            code=DiagnosticCode.DUPLICATE_SELECTOR,
            message=msg,
            span=span,
            hint="Each selector may appear once per argument",
        )

    @staticmethod
    def missing_cases(kind: str, span: SourceSpan) -> Diagnostic:
        """Plural, selectordinal or select argument without cases."""
        msg = f"'{kind}' argument requires at least one case"
        return Diagnostic(
            code=DiagnosticCode.MISSING_CASES,
            message=msg,
            span=span,
            hint="Add cases such as: other {...}",
        )

    @staticmethod
    def unexpected_message_start(span: SourceSpan) -> Diagnostic:
        """Case body opened where no case list is allowed."""
        return Diagnostic(
            code=DiagnosticCode.UNEXPECTED_MESSAGE_START,
            message="Unexpected '{' outside of a case list",
            span=span,
            hint="Only plural, selectordinal and select arguments take case bodies",
        )

    @staticmethod
    def nesting_depth_exceeded(max_depth: int, span: SourceSpan) -> Diagnostic:
        """Arguments nested deeper than the configured limit."""
        msg = f"Argument nesting exceeds maximum depth of {max_depth}"
        return Diagnostic(
            code=DiagnosticCode.NESTING_DEPTH_EXCEEDED,
            message=msg,
            span=span,
        )

    @staticmethod
    def invalid_style(kind: str, span: SourceSpan) -> Diagnostic:
        """Style text of a simple formatter contains a case body."""
        msg = f"'{kind}' argument does not accept case bodies"
        return Diagnostic(
            code=DiagnosticCode.INVALID_STYLE,
            message=msg,
            span=span,
            hint="Quote literal braces inside styles",
        )

    # Resource errors

    @staticmethod
    def resource_not_found(locale_tag: str, path: str) -> Diagnostic:
        """No catalog file for the tag."""
        msg = f"No translation catalog for '{locale_tag}'"
        return Diagnostic(
            code=DiagnosticCode.RESOURCE_NOT_FOUND,
            message=msg,
            resource_path=path,
        )

    @staticmethod
    def resource_decode_failed(locale_tag: str, path: str, reason: str) -> Diagnostic:
        """Catalog file is not valid TOML."""
        msg = f"Translation catalog for '{locale_tag}' could not be decoded: {reason}"
        return Diagnostic(
            code=DiagnosticCode.RESOURCE_DECODE_FAILED,
            message=msg,
            resource_path=path,
        )

    @staticmethod
    def resource_invalid_entry(locale_tag: str, path: str, key: str) -> Diagnostic:
        """Catalog entry is not a string template."""
        msg = f"Translation '{key}' in catalog '{locale_tag}' is not a string"
        return Diagnostic(
            code=DiagnosticCode.RESOURCE_INVALID_ENTRY,
            message=msg,
            resource_path=path,
            hint="Catalog values must be message templates (TOML strings)",
        )

    @staticmethod
    def invalid_locale_tag(locale_tag: str, reason: str) -> Diagnostic:
        """Tag cannot be mapped to a catalog file name."""
        msg = f"Invalid locale tag {locale_tag!r}: {reason}"
        return Diagnostic(code=DiagnosticCode.INVALID_LOCALE_TAG, message=msg)
