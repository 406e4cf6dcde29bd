"""Enumerations for ICULexEngine type-safe constants.

Uses StrEnum (Python 3.11+) for automatic string conversion.
StrEnum members are strings themselves, eliminating boilerplate __str__ methods.

Python 3.13+.
"""

from enum import StrEnum


class TokenKind(StrEnum):
    """Category of a lexer token.

    StrEnum provides automatic string conversion: str(TokenKind.HASH) == "hash"
    """

    TEXT = "text"
    """Literal message text: Hello"""

    QUOTED_TEXT = "quoted_text"
    """Content of a quoted span with delimiters stripped: '{foo}' -> {foo}"""

    IDENTIFIER = "identifier"
    """Word inside an argument: name, plural, offset:1, =0"""

    SPACE = "space"
    """Whitespace run inside an argument"""

    DELIMITER = "delimiter"
    """Comma separating argument parts"""

    START_ACTION = "start_action"
    """Opening brace of an argument (odd nesting depth)"""

    END_ACTION = "end_action"
    """Closing brace of an argument"""

    START_MESSAGE = "start_message"
    """Opening brace of a case body (even nesting depth)"""

    END_MESSAGE = "end_message"
    """Closing brace of a case body"""

    HASH = "hash"
    """Number sign inside message text"""

    EOF = "eof"
    """End of input"""

    ERROR = "error"
    """Malformed input; value holds the reason"""


class FormatKind(StrEnum):
    """Formatter kind named by the second part of an argument.

    Anything not listed here is a custom formatter name.
    """

    NUMBER = "number"
    DATE = "date"
    TIME = "time"
    ORDINAL = "ordinal"
    DURATION = "duration"
    SPELLOUT = "spellout"
    PLURAL = "plural"
    SELECTORDINAL = "selectordinal"
    SELECT = "select"


class ValueKind(StrEnum):
    """Tag of a parameter value bound in an evaluation context.

    StrEnum provides automatic string conversion: str(ValueKind.INTEGER) == "integer"
    """

    STRING = "string"
    INTEGER = "integer"
    FLOAT = "float"
    BOOLEAN = "boolean"
    TIMESTAMP = "timestamp"
    OPAQUE = "opaque"
    """Any other Python object; rendered with str()"""


class PluralCategory(StrEnum):
    """CLDR plural categories."""

    ZERO = "zero"
    ONE = "one"
    TWO = "two"
    FEW = "few"
    MANY = "many"
    OTHER = "other"


class VariableContext(StrEnum):
    """Where a parameter reference appears in a message.

    StrEnum provides automatic string conversion: str(VariableContext.SELECTOR) == "selector"
    """

    PLACEHOLDER = "placeholder"
    """Bare argument: Hello {name}"""

    FORMAT = "format"
    """Formatted argument: {price, number, integer}"""

    SELECTOR = "selector"
    """Argument choosing a case: {count, plural, ...}"""


class LoadStatus(StrEnum):
    """Outcome of loading a translation catalog."""

    SUCCESS = "success"
    NOT_FOUND = "not_found"
    ERROR = "error"


__all__ = [
    "FormatKind",
    "LoadStatus",
    "PluralCategory",
    "TokenKind",
    "ValueKind",
    "VariableContext",
]
