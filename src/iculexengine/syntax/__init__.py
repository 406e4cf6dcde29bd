"""ICU message syntax package.

Provides tokenizer, parser, AST definitions, and visitor pattern.
Separate from runtime to enable tooling (linters, extractors, editors).

Python 3.13+.
"""

from .ast import (
    ASTNode,
    Case,
    FormatCustom,
    FormatDate,
    FormatDuration,
    FormatNumber,
    FormatOrdinal,
    FormatSpellout,
    FormatTime,
    Hash,
    Message,
    Node,
    Placeholder,
    Plural,
    QuotedText,
    Select,
    SelectOrdinal,
    Text,
)
from .cursor import Cursor, ParseResult, TokenCursor
from .lexer import iter_tokens, tokenize
from .parser import MessageParser
from .tokens import Token
from .visitor import ASTVisitor

__all__ = [
    "ASTNode",
    "ASTVisitor",
    "Case",
    "Cursor",
    "FormatCustom",
    "FormatDate",
    "FormatDuration",
    "FormatNumber",
    "FormatOrdinal",
    "FormatSpellout",
    "FormatTime",
    "Hash",
    "Message",
    "MessageParser",
    "Node",
    "ParseResult",
    "Placeholder",
    "Plural",
    "QuotedText",
    "Select",
    "SelectOrdinal",
    "Text",
    "Token",
    "TokenCursor",
    "iter_tokens",
    "parse",
    "tokenize",
]


def parse(source: str) -> Message:
    """Compile template text into a Message AST with default limits.

    Raises:
        ICULexError: On malformed quoting or brace nesting
        ICUParseError: On grammar violations
    """
    return MessageParser().parse(source)
