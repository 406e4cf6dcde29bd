"""Lexer token type.

Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass

from iculexengine.diagnostics import Diagnostic
from iculexengine.enums import TokenKind

__all__ = ["Token"]


@dataclass(frozen=True, slots=True)
class Token:
    """Single lexical unit of a template.

    Attributes:
        kind: Token category
        value: Literal text of the token (quote delimiters already stripped
            for QUOTED_TEXT, reason text for ERROR)
        start: Character offset of the token in the template
        end: Character offset just past the token
        diagnostic: Structured reason, set only on ERROR tokens
    """

    kind: TokenKind
    value: str
    start: int
    end: int
    diagnostic: Diagnostic | None = None

    @property
    def is_terminal(self) -> bool:
        """True for EOF and ERROR, after which the lexer stops."""
        return self.kind in (TokenKind.EOF, TokenKind.ERROR)

    def describe(self) -> str:
        """Short human-readable form for error messages."""
        match self.kind:
            case TokenKind.EOF:
                return "end of template"
            case TokenKind.SPACE:
                return "whitespace"
            case TokenKind.START_ACTION | TokenKind.START_MESSAGE:
                return "'{'"
            case TokenKind.END_ACTION | TokenKind.END_MESSAGE:
                return "'}'"
            case TokenKind.DELIMITER:
                return "','"
            case _:
                return f"{self.kind} {self.value!r}"
