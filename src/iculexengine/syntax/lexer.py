"""Template tokenizer.

Converts template text into a finite token sequence. The lexical mode
depends on brace-nesting parity: an odd depth is an argument ("action")
region holding names, formatter kinds, styles and case selectors; an even
depth is message text (the top level or a case body).

Braces:
    '{' increments the depth, then emits START_ACTION at odd depth and
    START_MESSAGE at even depth. '}' decrements the depth, then emits
    END_MESSAGE at odd depth and END_ACTION at even depth.

Quoting (message text only):
    - An apostrophe followed by '{' or '}' opens a quoted span.
    - Three apostrophes open a quoted span whose first character is an
      apostrophe, so ''' renders a single apostrophe.
    - Two apostrophes not followed by a third are an escaped apostrophe.
    - Any other apostrophe is ordinary text (It's, l'eau).
    - Inside a span the first character is always literal; afterwards two
      apostrophes stand for one apostrophe and quoting continues, and a
      single apostrophe closes the span.

Malformed input never blocks or loops: the sequence always ends with
exactly one EOF or ERROR token.

Python 3.13+. Zero external dependencies.
"""

from collections.abc import Iterator

from iculexengine.diagnostics import Diagnostic, ErrorTemplate
from iculexengine.enums import TokenKind
from iculexengine.syntax.cursor import Cursor, ParseResult
from iculexengine.syntax.tokens import Token

__all__ = ["iter_tokens", "tokenize"]

_QUOTE = "'"
_BRACES = frozenset("{}")
_ACTION_STOP = frozenset("{},")


def _error_token(cursor: Cursor, diagnostic: Diagnostic) -> Token:
    return Token(TokenKind.ERROR, diagnostic.message, cursor.pos, cursor.pos, diagnostic)


def _opens_quote(cursor: Cursor) -> bool:
    """Check whether the apostrophe at cursor starts quoting or an escape."""
    following = cursor.peek(1)
    return following is not None and (following in _BRACES or following == _QUOTE)


def _lex_quoted(cursor: Cursor) -> ParseResult[Token, Cursor]:
    """Lex a quoted span or doubled-apostrophe escape starting at an apostrophe.

    Returns an ERROR token when the input ends inside the span.
    """
    start = cursor
    if cursor.peek(1) == _QUOTE and cursor.peek(2) != _QUOTE:
        # '' -> literal apostrophe
        cursor = cursor.advance(2)
        return ParseResult(
            Token(TokenKind.QUOTED_TEXT, _QUOTE, start.pos, cursor.pos), cursor
        )

    # Skip the opening apostrophe; the trigger character is literal
    cursor = cursor.advance()
    chars = [cursor.current]
    cursor = cursor.advance()

    while not cursor.is_eof:
        char = cursor.current
        if char == _QUOTE:
            if cursor.peek(1) == _QUOTE:
                chars.append(_QUOTE)
                cursor = cursor.advance(2)
                continue
            cursor = cursor.advance()
            token = Token(TokenKind.QUOTED_TEXT, "".join(chars), start.pos, cursor.pos)
            return ParseResult(token, cursor)
        chars.append(char)
        cursor = cursor.advance()

    diagnostic = ErrorTemplate.unterminated_quote(start.span_to(cursor.pos))
    return ParseResult(_error_token(start, diagnostic), cursor)


def _lex_text(cursor: Cursor) -> ParseResult[Token, Cursor]:
    """Lex a run of message text up to a brace, '#', or quote trigger."""
    start = cursor
    while not cursor.is_eof:
        char = cursor.current
        if char in _BRACES or char == "#":
            break
        if char == _QUOTE and _opens_quote(cursor):
            break
        cursor = cursor.advance()
    token = Token(TokenKind.TEXT, start.slice_to(cursor.pos), start.pos, cursor.pos)
    return ParseResult(token, cursor)


def _lex_message_element(cursor: Cursor) -> ParseResult[Token, Cursor]:
    char = cursor.current
    if char == "#":
        next_cursor = cursor.advance()
        return ParseResult(Token(TokenKind.HASH, "#", cursor.pos, next_cursor.pos), next_cursor)
    if char == _QUOTE and _opens_quote(cursor):
        return _lex_quoted(cursor)
    return _lex_text(cursor)


def _lex_action_element(cursor: Cursor) -> ParseResult[Token, Cursor]:
    start = cursor
    char = cursor.current
    if char == ",":
        cursor = cursor.advance()
        return ParseResult(Token(TokenKind.DELIMITER, ",", start.pos, cursor.pos), cursor)

    if char.isspace():
        while not cursor.is_eof and cursor.current.isspace():
            cursor = cursor.advance()
        kind = TokenKind.SPACE
    else:
        while not (
            cursor.is_eof or cursor.current in _ACTION_STOP or cursor.current.isspace()
        ):
            cursor = cursor.advance()
        kind = TokenKind.IDENTIFIER

    return ParseResult(Token(kind, start.slice_to(cursor.pos), start.pos, cursor.pos), cursor)


def iter_tokens(source: str) -> Iterator[Token]:
    """Lazily tokenize a template.

    Pull-based: no work happens between next() calls, so abandoning the
    iterator early leaks nothing.

    Args:
        source: Template text

    Yields:
        Tokens in source order; the last one is EOF or ERROR

    Example:
        >>> [str(t.kind) for t in iter_tokens("Hi {name}")]
        ['text', 'start_action', 'identifier', 'end_action', 'eof']
    """
    cursor = Cursor(source, 0)
    depth = 0

    while not cursor.is_eof:
        char = cursor.current

        if char == "{":
            depth += 1
            kind = TokenKind.START_ACTION if depth % 2 else TokenKind.START_MESSAGE
            yield Token(kind, char, cursor.pos, cursor.pos + 1)
            cursor = cursor.advance()
            continue

        if char == "}":
            if depth == 0:
                span = cursor.span_to(cursor.pos + 1)
                yield _error_token(cursor, ErrorTemplate.unmatched_closing_brace(span))
                return
            depth -= 1
            kind = TokenKind.END_MESSAGE if depth % 2 else TokenKind.END_ACTION
            yield Token(kind, char, cursor.pos, cursor.pos + 1)
            cursor = cursor.advance()
            continue

        if depth % 2:
            result = _lex_action_element(cursor)
        else:
            result = _lex_message_element(cursor)

        yield result.value
        if result.value.kind is TokenKind.ERROR:
            return
        cursor = result.cursor

    if depth:
        span = cursor.span_to(cursor.pos)
        yield _error_token(cursor, ErrorTemplate.unterminated_argument(span, depth))
        return
    yield Token(TokenKind.EOF, "", cursor.pos, cursor.pos)


def tokenize(source: str) -> tuple[Token, ...]:
    """Tokenize a template into a fully materialized token tuple.

    The parser consumes this form: it may stop at the first error without
    leaving any lexing work in flight.

    Example:
        >>> tokenize("{a}}")[-1].kind
        <TokenKind.ERROR: 'error'>
    """
    return tuple(iter_tokens(source))
