"""ICU exception hierarchy with structured diagnostics.

All exceptions optionally store Diagnostic objects for rich error information.
Only template compilation and resource loading raise; rendering a compiled
template never does.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic


class ICUError(Exception):
    """Base exception for all ICULexEngine errors.

    Attributes:
        diagnostic: Structured diagnostic information (optional)
    """

    def __init__(self, message: str | Diagnostic) -> None:
        """Initialize ICUError.

        Args:
            message: Error message string OR Diagnostic object
        """
        if isinstance(message, Diagnostic):
            self.diagnostic: Diagnostic | None = message
            super().__init__(message.format_error())
        else:
            self.diagnostic = None
            super().__init__(message)


class ICUSyntaxError(ICUError):
    """Template could not be compiled.

    Rendering never proceeds on a template that raised this error;
    MessageFormatter.format() reports it as an error value instead.
    """


class ICULexError(ICUSyntaxError):
    """Malformed quoting or brace nesting detected by the tokenizer.

    Examples:
        "{name" - unterminated argument
        "a}" - unmatched closing brace
        "'{open" - unterminated quoted literal
    """


class ICUParseError(ICUSyntaxError):
    """Grammar violation detected by the parser.

    Examples:
        "{n, plural, {x}}" - missing case selector
        "{n, plural, offset:x other {#}}" - malformed offset literal
    """


class ICUResourceError(ICUError):
    """Translation catalog could not be loaded.

    Raised by resource loaders for missing, undecodable, or malformed
    catalogs. Translator bundles catch it and degrade to key passthrough.

    Attributes:
        locale_tag: Tag of the catalog that failed to load
    """

    def __init__(self, message: str | Diagnostic, *, locale_tag: str = "") -> None:
        """Initialize ICUResourceError.

        Args:
            message: Error message string OR Diagnostic object
            locale_tag: Tag of the catalog that failed to load
        """
        super().__init__(message)
        self.locale_tag = locale_tag


class ICUFormattingError(ICUError):
    """Raised when a built-in or custom formatter rejects a value.

    Never escapes rendering: the resolver logs it and renders
    fallback_value in place of the argument.

    Attributes:
        fallback_value: String to use in output when formatting fails
    """

    def __init__(self, message: str | Diagnostic, fallback_value: str) -> None:
        """Initialize ICUFormattingError.

        Args:
            message: Error message string OR Diagnostic object
            fallback_value: Value to use in output when formatting fails
        """
        super().__init__(message)
        self.fallback_value = fallback_value
