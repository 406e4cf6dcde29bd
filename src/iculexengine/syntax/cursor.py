"""Immutable cursor infrastructure for type-safe lexing and parsing.

Implements the immutable cursor pattern for zero-`None` scanning.
Python 3.13+. Zero external dependencies.

Design Philosophy:
    - Cursors are immutable (frozen dataclasses)
    - EOF is a state (is_eof), not a return value
    - Every advance() returns NEW cursor (prevents infinite loops)
    - Line:column computed on-demand (O(n) only for errors)

Two cursors are provided:
    Cursor - character cursor over template text, used by the lexer
    TokenCursor - cursor over a materialized token tuple, used by the parser
"""

from dataclasses import dataclass

from iculexengine.diagnostics import ErrorTemplate, SourceSpan
from iculexengine.enums import TokenKind
from iculexengine.syntax.tokens import Token

__all__ = ["Cursor", "ParseResult", "TokenCursor", "compute_span"]


def compute_span(source: str, start: int, end: int) -> SourceSpan:
    """Build a SourceSpan with 1-indexed line and column for an offset range.

    Example:
        >>> compute_span("ab\\ncd", 3, 4)
        SourceSpan(start=3, end=4, line=2, column=1)
    """
    start = min(max(start, 0), len(source))
    end = max(min(end, len(source)), start)
    line, column = Cursor(source, start).compute_line_col()
    return SourceSpan(start=start, end=end, line=line, column=column)


@dataclass(frozen=True, slots=True)
class Cursor:
    """Immutable source position tracker.

    Example:
        >>> cursor = Cursor("hello", 0)
        >>> cursor.current
        'h'
        >>> cursor.advance().current
        'e'
        >>> cursor.current  # Original unchanged (immutability)
        'h'
        >>> Cursor("hi", 2).is_eof
        True
    """

    source: str
    pos: int

    @property
    def is_eof(self) -> bool:
        """Check if at end of input."""
        return self.pos >= len(self.source)

    @property
    def current(self) -> str:
        """Get current character.

        Raises:
            EOFError: If at end of input
        """
        if self.is_eof:
            diagnostic = ErrorTemplate.unexpected_eof(self.pos)
            raise EOFError(diagnostic.message)
        return self.source[self.pos]

    def peek(self, offset: int = 0) -> str | None:
        """Peek at character with offset without advancing.

        Returns:
            Character at position + offset, or None if beyond EOF
        """
        target_pos = self.pos + offset
        if target_pos >= len(self.source):
            return None
        return self.source[target_pos]

    def advance(self, count: int = 1) -> "Cursor":
        """Return new cursor advanced by count positions (clamped to EOF)."""
        new_pos = min(self.pos + count, len(self.source))
        return Cursor(self.source, new_pos)

    def slice_to(self, end_pos: int) -> str:
        """Extract source slice from current position to end_pos."""
        return self.source[self.pos : end_pos]

    def span_to(self, end_pos: int) -> SourceSpan:
        """SourceSpan from current position to end_pos."""
        return compute_span(self.source, self.pos, end_pos)

    def compute_line_col(self) -> tuple[int, int]:
        """Compute line and column for current position.

        Returns:
            (line, column) tuple (1-indexed, like text editors)

        Performance:
            O(n) where n = current position. Only call for error reporting.
        """
        line = self.source.count("\n", 0, self.pos) + 1
        last_newline = self.source.rfind("\n", 0, self.pos)
        col = self.pos - last_newline if last_newline >= 0 else self.pos + 1
        return (line, col)


@dataclass(frozen=True, slots=True)
class TokenCursor:
    """Immutable position in a materialized token sequence.

    The sequence always ends with an EOF or ERROR token; advancing past it
    is clamped, so ``current`` never fails.

    Attributes:
        tokens: Full token sequence produced by the lexer
        index: Position of the current token
        source: Template text the tokens were produced from (for spans)
    """

    tokens: tuple[Token, ...]
    index: int
    source: str

    @property
    def current(self) -> Token:
        """Token at the cursor position."""
        return self.tokens[self.index]

    @property
    def kind(self) -> TokenKind:
        """Kind of the current token."""
        return self.tokens[self.index].kind

    def advance(self) -> "TokenCursor":
        """Return new cursor on the next token."""
        new_index = min(self.index + 1, len(self.tokens) - 1)
        return TokenCursor(self.tokens, new_index, self.source)

    def skip_spaces(self) -> "TokenCursor":
        """Return new cursor past consecutive SPACE tokens."""
        cursor = self
        while cursor.kind is TokenKind.SPACE:
            cursor = cursor.advance()
        return cursor

    def span(self) -> SourceSpan:
        """SourceSpan of the current token."""
        token = self.current
        return compute_span(self.source, token.start, token.end)


@dataclass(frozen=True, slots=True)
class ParseResult[T, C: (Cursor, TokenCursor)]:
    """Parser result containing parsed value and new cursor position.

    Type Parameters:
        T: The type of the parsed value
        C: Cursor kind (Cursor in the lexer, TokenCursor in the parser)

    Example:
        >>> cursor = Cursor("hello", 0)
        >>> result = ParseResult("h", cursor.advance())
        >>> result.value
        'h'
        >>> result.cursor.pos
        1
    """

    value: T
    cursor: C
