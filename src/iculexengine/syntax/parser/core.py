"""Core ICU message parser implementation.

This module provides the MessageParser class that orchestrates compiling
template text into the AST defined in :mod:`iculexengine.syntax.ast`.

Architecture:
    The template is first tokenized into a materialized token tuple by
    :func:`~iculexengine.syntax.lexer.tokenize`. Grammar rules in
    :mod:`~iculexengine.syntax.parser.rules` then walk an immutable
    :class:`~iculexengine.syntax.cursor.TokenCursor` and return
    :class:`~iculexengine.syntax.cursor.ParseResult` values.

Unlike rendering, parsing is allowed to fail: any lexical or grammar
violation raises a subclass of ICUSyntaxError and no AST is produced.

Security:
    Includes configurable input size and nesting depth limits to prevent
    DoS attacks via huge or deeply nested templates.
"""

from iculexengine.constants import MAX_DEPTH, MAX_SOURCE_SIZE
from iculexengine.syntax.ast import Message
from iculexengine.syntax.cursor import TokenCursor
from iculexengine.syntax.lexer import tokenize
from iculexengine.syntax.parser.rules import ParseContext, parse_message

__all__ = ["MessageParser"]


class MessageParser:
    """ICU message template parser.

    Stateless apart from its limits: one instance may be shared by any
    number of threads.

    Attributes:
        max_source_size: Maximum allowed template size in characters (default: 10 MB)
        max_nesting_depth: Maximum allowed argument nesting depth (default: 100)
    """

    __slots__ = ("_max_nesting_depth", "_max_source_size")

    def __init__(
        self,
        *,
        max_source_size: int | None = None,
        max_nesting_depth: int | None = None,
    ) -> None:
        """Initialize parser with optional size and nesting depth limits.

        Args:
            max_source_size: Maximum template size (default: 10 MB).
                            Set to 0 to disable the size limit (not recommended).
            max_nesting_depth: Maximum argument nesting depth (default: 100).
        """
        self._max_source_size = (
            max_source_size if max_source_size is not None else MAX_SOURCE_SIZE
        )
        self._max_nesting_depth = (
            max_nesting_depth if max_nesting_depth is not None else MAX_DEPTH
        )

    @property
    def max_source_size(self) -> int:
        """Maximum allowed template size in characters."""
        return self._max_source_size

    @property
    def max_nesting_depth(self) -> int:
        """Maximum allowed argument nesting depth."""
        return self._max_nesting_depth

    def parse(self, source: str) -> Message:
        """Compile template text into a Message AST.

        Args:
            source: Template text

        Returns:
            Immutable Message, safe to cache and render concurrently

        Raises:
            ValueError: If source exceeds max_source_size (DoS prevention)
            ICULexError: On malformed quoting or brace nesting
            ICUParseError: On grammar violations

        Example:
            >>> parser = MessageParser()
            >>> parser.parse("Hello {name}!").elements[1]
            Placeholder(key='name')
        """
        if self._max_source_size > 0 and len(source) > self._max_source_size:
            msg = (
                f"Template size ({len(source):,} characters) exceeds maximum "
                f"({self._max_source_size:,} characters). "
                "Configure max_source_size in MessageParser constructor to increase limit."
            )
            raise ValueError(msg)

        cursor = TokenCursor(tokenize(source), 0, source)
        context = ParseContext(max_nesting_depth=self._max_nesting_depth)
        return parse_message(cursor, context).value

    def __repr__(self) -> str:
        return (
            f"MessageParser(max_source_size={self._max_source_size}, "
            f"max_nesting_depth={self._max_nesting_depth})"
        )
