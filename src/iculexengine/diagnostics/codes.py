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
    """Error codes with unique identifiers.

    Organized by category:
        2000-2099: Formatting errors (never escape rendering)
        3000-3099: Lexical errors (tokenizer failures)
        3100-3199: Syntax errors (parser failures)
        4000-4999: Resource errors (translation catalog loading)
    """

    # Formatting errors (2000-2099)
    FORMATTING_FAILED = 2001

    # Lexical errors (3000-3099)
    UNEXPECTED_EOF = 3001
    UNMATCHED_CLOSING_BRACE = 3002
    UNTERMINATED_ARGUMENT = 3003
    UNTERMINATED_QUOTE = 3004

    # Syntax errors (3100-3199)
    EXPECTED_ARGUMENT_NAME = 3101
    EXPECTED_FORMAT_KIND = 3102
    UNEXPECTED_TOKEN = 3103
    MISSING_SELECTOR = 3104
    INVALID_OFFSET = 3105
    INVALID_SELECTOR = 3106
    DUPLICATE_SELECTOR = 3107
    MISSING_CASES = 3108
    UNEXPECTED_MESSAGE_START = 3109
    NESTING_DEPTH_EXCEEDED = 3110
    INVALID_STYLE = 3111

    # Resource errors (4000-4999)
    RESOURCE_NOT_FOUND = 4001
    RESOURCE_DECODE_FAILED = 4002
    RESOURCE_INVALID_ENTRY = 4003
    INVALID_LOCALE_TAG = 4004


@dataclass(frozen=True, slots=True)
class SourceSpan:
    """Template location for error reporting.

    Note:
        Python strings measure positions in characters (Unicode code points),
        not bytes.

    Attributes:
        start: Starting character offset (0-indexed)
        end: Ending character offset (exclusive)
        line: Line number (1-indexed)
        column: Column number (1-indexed)
    """

    start: int
    end: int
    line: int
    column: int

    def __post_init__(self) -> None:
        """Validate SourceSpan invariants.

        Raises:
            ValueError: If start is negative, end precedes start, or line/column
                is less than 1 (both are 1-indexed).
        """
        if self.start < 0:
            msg = f"SourceSpan.start must be >= 0, got {self.start}"
            raise ValueError(msg)
        if self.end < self.start:
            msg = f"SourceSpan.end ({self.end}) must be >= start ({self.start})"
            raise ValueError(msg)
        if self.line < 1:
            msg = f"SourceSpan.line must be >= 1 (1-indexed), got {self.line}"
            raise ValueError(msg)
        if self.column < 1:
            msg = f"SourceSpan.column must be >= 1 (1-indexed), got {self.column}"
            raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Structured diagnostic message.

    Inspired by Rust compiler diagnostics. Provides rich error information
    for both humans and tools.

    Attributes:
        code: Unique error code
        message: Human-readable error description
        span: Template location (None for resource errors)
        hint: Suggestion for fixing the error
        resource_path: Catalog file the error belongs to (resource errors)
        severity: Error severity level
    """

    code: DiagnosticCode
    message: str
    span: SourceSpan | None = None
    hint: str | None = None
    resource_path: str | None = None
    severity: Literal["error", "warning"] = "error"

    def __str__(self) -> str:
        """Return human-readable error description."""
        return self.message

    def format_error(self) -> str:
        """Format diagnostic like Rust compiler.

        Example output:
            error[MISSING_SELECTOR]: Expected a case selector before '{'
              --> line 1, column 19
              = help: Write a selector such as 'other' or '=0' before each case body

        Returns:
            Formatted error message
        """
        from .formatter import DiagnosticFormatter  # noqa: PLC0415 - circular

        return DiagnosticFormatter().format(self)
