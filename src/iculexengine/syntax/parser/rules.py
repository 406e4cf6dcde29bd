"""Grammar rules for ICU message templates.

Recursive descent over a materialized token sequence:

    Message      := (Text | QuotedText | Hash | Argument)*
    Argument     := '{' Identifier [',' Identifier [',' FormatTail]] '}'
    FormatTail   := Style | CaseList
    CaseList     := ['offset:' Integer] (Selector '{' Message '}')+
    Selector     := '=' Integer | CategoryName | Literal

The same IDENTIFIER token means different things depending on the rule
consuming it (argument name, formatter kind, style word, offset, selector).
Each rule produces a typed intermediate value (ArgumentHeader, FormatClause,
CaseList) instead of relying on its position on an operand stack.

Whitespace tokens inside arguments are insignificant except within style
text, where they are kept verbatim and only the ends are stripped.

Every rule raises ICUParseError on a grammar violation and ICULexError when
it reaches an ERROR token.

Python 3.13+. Zero external dependencies.
"""

import re
from dataclasses import dataclass
from typing import NoReturn

from iculexengine.constants import MAX_DEPTH
from iculexengine.diagnostics import ErrorTemplate, ICULexError, ICUParseError
from iculexengine.enums import FormatKind, TokenKind
from iculexengine.syntax.ast import (
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
    SimpleFormat,
    Text,
)
from iculexengine.syntax.cursor import ParseResult, TokenCursor

__all__ = [
    "ArgumentHeader",
    "CaseList",
    "FormatClause",
    "ParseContext",
    "parse_argument",
    "parse_argument_header",
    "parse_case",
    "parse_case_list",
    "parse_format_clause",
    "parse_message",
]

OFFSET_PREFIX = "offset:"

_INTEGER = re.compile(r"-?[0-9]+")
_OFFSET = re.compile(r"[0-9]+")

_SIMPLE_FORMATS: dict[str, type[SimpleFormat]] = {
    FormatKind.NUMBER: FormatNumber,
    FormatKind.DATE: FormatDate,
    FormatKind.TIME: FormatTime,
    FormatKind.ORDINAL: FormatOrdinal,
    FormatKind.DURATION: FormatDuration,
    FormatKind.SPELLOUT: FormatSpellout,
}

_CASE_FORMATS = frozenset({FormatKind.PLURAL, FormatKind.SELECTORDINAL, FormatKind.SELECT})


@dataclass(frozen=True, slots=True)
class ParseContext:
    """Explicit context for parsing operations.

    Attributes:
        max_nesting_depth: Maximum allowed argument nesting depth
        current_depth: Current argument nesting depth (0 = top level)
    """

    max_nesting_depth: int = MAX_DEPTH
    current_depth: int = 0

    def is_depth_exceeded(self) -> bool:
        """Check if maximum nesting depth has been exceeded."""
        return self.current_depth > self.max_nesting_depth

    def enter_argument(self) -> "ParseContext":
        """Create new context with incremented depth for entering an argument."""
        return ParseContext(
            max_nesting_depth=self.max_nesting_depth,
            current_depth=self.current_depth + 1,
        )


@dataclass(frozen=True, slots=True)
class ArgumentHeader:
    """Name and optional formatter kind of an argument.

    Attributes:
        key: Parameter name
        kind: Formatter kind, or None for a bare placeholder
        has_tail: True when a third, comma-introduced part follows
    """

    key: str
    kind: str | None
    has_tail: bool


@dataclass(frozen=True, slots=True)
class FormatClause:
    """Free-form tail of a non-case argument.

    Attributes:
        style: Raw tail text with surrounding whitespace stripped
        args: Tail split on commas, each part stripped, empty parts dropped
    """

    style: str
    args: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class CaseList:
    """Offset and cases of a plural, selectordinal or select argument."""

    offset: int
    cases: tuple[Case, ...]


def _raise_for_token(cursor: TokenCursor, expected: str) -> NoReturn:
    """Raise the error matching an unexpected token."""
    token = cursor.current
    if token.kind is TokenKind.ERROR and token.diagnostic is not None:
        raise ICULexError(token.diagnostic)
    if token.kind is TokenKind.START_MESSAGE:
        raise ICUParseError(ErrorTemplate.unexpected_message_start(cursor.span()))
    raise ICUParseError(ErrorTemplate.unexpected_token(token.describe(), expected, cursor.span()))


def _expect(cursor: TokenCursor, kind: TokenKind, expected: str) -> TokenCursor:
    """Consume a token of the given kind or raise."""
    if cursor.kind is not kind:
        _raise_for_token(cursor, expected)
    return cursor.advance()


# =============================================================================
# Message
# =============================================================================


def parse_message(
    cursor: TokenCursor, context: ParseContext, *, nested: bool = False
) -> ParseResult[Message, TokenCursor]:
    """Parse message elements until the end of the enclosing scope.

    Top-level messages run to EOF; case bodies (nested=True) stop in front
    of their END_MESSAGE token, which the caller consumes.

    Args:
        cursor: Position of the first element
        context: Nesting depth tracking
        nested: True when parsing a case body

    Returns:
        ParseResult with the Message and the cursor at EOF/END_MESSAGE
    """
    elements: list[Node] = []
    terminator = TokenKind.END_MESSAGE if nested else TokenKind.EOF

    while cursor.kind is not terminator:
        token = cursor.current
        match token.kind:
            case TokenKind.TEXT:
                elements.append(Text(token.value))
                cursor = cursor.advance()
            case TokenKind.QUOTED_TEXT:
                elements.append(QuotedText(token.value))
                cursor = cursor.advance()
            case TokenKind.HASH:
                elements.append(Hash())
                cursor = cursor.advance()
            case TokenKind.START_ACTION:
                result = parse_argument(cursor, context.enter_argument())
                elements.append(result.value)
                cursor = result.cursor
            case _:
                expected = "'}'" if nested else "end of template"
                _raise_for_token(cursor, f"message text or {expected}")

    return ParseResult(Message(tuple(elements)), cursor)


# =============================================================================
# Arguments
# =============================================================================


def parse_argument_header(cursor: TokenCursor) -> ParseResult[ArgumentHeader, TokenCursor]:
    """Parse '{' name [',' kind] up to the tail or closing brace.

    The returned cursor is on the token following the header: END_ACTION,
    or the first token of the tail when has_tail is True.
    """
    cursor = _expect(cursor, TokenKind.START_ACTION, "'{'").skip_spaces()

    if cursor.kind is not TokenKind.IDENTIFIER:
        if cursor.kind in (TokenKind.ERROR, TokenKind.START_MESSAGE):
            _raise_for_token(cursor, "argument name")
        found = cursor.current.describe()
        raise ICUParseError(ErrorTemplate.expected_argument_name(found, cursor.span()))
    key = cursor.current.value
    cursor = cursor.advance().skip_spaces()

    if cursor.kind is TokenKind.END_ACTION:
        return ParseResult(ArgumentHeader(key, None, has_tail=False), cursor)

    cursor = _expect(cursor, TokenKind.DELIMITER, "',' or '}'").skip_spaces()
    if cursor.kind is not TokenKind.IDENTIFIER:
        if cursor.kind in (TokenKind.ERROR, TokenKind.START_MESSAGE):
            _raise_for_token(cursor, "formatter kind")
        found = cursor.current.describe()
        raise ICUParseError(ErrorTemplate.expected_format_kind(found, cursor.span()))
    kind = cursor.current.value
    cursor = cursor.advance().skip_spaces()

    if cursor.kind is TokenKind.END_ACTION:
        return ParseResult(ArgumentHeader(key, kind, has_tail=False), cursor)

    cursor = _expect(cursor, TokenKind.DELIMITER, "',' or '}'")
    return ParseResult(ArgumentHeader(key, kind, has_tail=True), cursor)


def parse_argument(cursor: TokenCursor, context: ParseContext) -> ParseResult[Node, TokenCursor]:
    """Parse a complete argument: header, optional tail, closing brace.

    Args:
        cursor: Position of the START_ACTION token
        context: Depth context already entered for this argument

    Returns:
        ParseResult with the argument node, cursor past END_ACTION
    """
    if context.is_depth_exceeded():
        raise ICUParseError(
            ErrorTemplate.nesting_depth_exceeded(context.max_nesting_depth, cursor.span())
        )

    header_start = cursor
    header_result = parse_argument_header(cursor)
    header = header_result.value
    cursor = header_result.cursor

    node: Node
    if header.kind is None:
        node = Placeholder(header.key)
    elif header.kind in _CASE_FORMATS:
        if not header.has_tail:
            raise ICUParseError(ErrorTemplate.missing_cases(header.kind, header_start.span()))
        case_result = parse_case_list(cursor, context, kind=header.kind)
        cursor = case_result.cursor
        node = _build_case_node(header, case_result.value)
    else:
        clause = FormatClause("", ())
        if header.has_tail:
            clause_result = parse_format_clause(cursor, header.kind)
            clause = clause_result.value
            cursor = clause_result.cursor
        node = _build_format_node(header, header.kind, clause)

    cursor = _expect(cursor, TokenKind.END_ACTION, "'}'")
    return ParseResult(node, cursor)


def parse_format_clause(
    cursor: TokenCursor, kind: str
) -> ParseResult[FormatClause, TokenCursor]:
    """Collect the free-form tail of a simple or custom argument.

    Stops in front of END_ACTION. A case body inside a style is an error:
    literal braces in styles must be quoted.
    """
    pieces: list[str] = []
    args: list[str] = []
    current_arg: list[str] = []

    while cursor.kind is not TokenKind.END_ACTION:
        token = cursor.current
        match token.kind:
            case TokenKind.IDENTIFIER | TokenKind.SPACE:
                pieces.append(token.value)
                current_arg.append(token.value)
            case TokenKind.DELIMITER:
                pieces.append(token.value)
                args.append("".join(current_arg))
                current_arg = []
            case TokenKind.START_MESSAGE:
                raise ICUParseError(ErrorTemplate.invalid_style(kind, cursor.span()))
            case _:
                _raise_for_token(cursor, "'}'")
        cursor = cursor.advance()

    args.append("".join(current_arg))
    clause = FormatClause(
        style="".join(pieces).strip(),
        args=tuple(arg.strip() for arg in args if arg.strip()),
    )
    return ParseResult(clause, cursor)


def _build_format_node(header: ArgumentHeader, kind: str, clause: FormatClause) -> Node:
    format_type = _SIMPLE_FORMATS.get(kind)
    if format_type is not None:
        return format_type(header.key, clause.style)
    return FormatCustom(header.key, kind, clause.args)


def _build_case_node(header: ArgumentHeader, case_list: CaseList) -> Node:
    match header.kind:
        case FormatKind.PLURAL:
            return Plural(header.key, case_list.offset, case_list.cases)
        case FormatKind.SELECTORDINAL:
            return SelectOrdinal(header.key, case_list.offset, case_list.cases)
        case _:
            return Select(header.key, case_list.cases)


# =============================================================================
# Case lists
# =============================================================================


def _parse_offset(cursor: TokenCursor) -> ParseResult[int, TokenCursor]:
    """Parse 'offset:N' or 'offset: N' (cursor on the offset identifier)."""
    start = cursor
    literal = cursor.current.value.removeprefix(OFFSET_PREFIX)
    cursor = cursor.advance()
    if not literal:
        cursor = cursor.skip_spaces()
        if cursor.kind is TokenKind.IDENTIFIER:
            literal = cursor.current.value
            start = cursor
            cursor = cursor.advance()
    if not _OFFSET.fullmatch(literal):
        raise ICUParseError(ErrorTemplate.invalid_offset(literal, start.span()))
    return ParseResult(int(literal), cursor)


def _normalize_selector(selector: str, cursor: TokenCursor, *, numeric: bool) -> str:
    """Normalize explicit value selectors of plural kinds to '=<int>'."""
    if not numeric or not selector.startswith("="):
        return selector
    literal = selector[1:]
    if not _INTEGER.fullmatch(literal):
        raise ICUParseError(ErrorTemplate.invalid_selector(selector, cursor.span()))
    return f"={int(literal)}"


def parse_case(
    cursor: TokenCursor, context: ParseContext, *, numeric: bool
) -> ParseResult[Case, TokenCursor]:
    """Parse one `selector { message }` group (cursor on the selector)."""
    if cursor.kind is TokenKind.START_MESSAGE:
        raise ICUParseError(ErrorTemplate.missing_selector(cursor.span()))
    if cursor.kind is not TokenKind.IDENTIFIER:
        _raise_for_token(cursor, "case selector")

    selector = _normalize_selector(cursor.current.value, cursor, numeric=numeric)
    cursor = cursor.advance().skip_spaces()

    if cursor.kind is not TokenKind.START_MESSAGE:
        _raise_for_token(cursor, "'{' after case selector")
    body = parse_message(cursor.advance(), context, nested=True)
    cursor = _expect(body.cursor, TokenKind.END_MESSAGE, "'}'")
    return ParseResult(Case(selector, body.value), cursor)


def parse_case_list(
    cursor: TokenCursor, context: ParseContext, *, kind: str
) -> ParseResult[CaseList, TokenCursor]:
    """Parse optional offset and one or more cases, stopping in front of '}'.

    Args:
        cursor: First token after the comma following the kind
        context: Depth context of the enclosing argument
        kind: plural, selectordinal or select

    Returns:
        ParseResult with the CaseList, cursor on END_ACTION
    """
    numeric = kind != FormatKind.SELECT
    start = cursor
    cursor = cursor.skip_spaces()

    offset = 0
    if (
        numeric
        and cursor.kind is TokenKind.IDENTIFIER
        and cursor.current.value.startswith(OFFSET_PREFIX)
    ):
        offset_result = _parse_offset(cursor)
        offset = offset_result.value
        cursor = offset_result.cursor.skip_spaces()

    cases: list[Case] = []
    seen: set[str] = set()
    while cursor.kind is not TokenKind.END_ACTION:
        case_start = cursor
        case_result = parse_case(cursor, context, numeric=numeric)
        case = case_result.value
        if case.selector in seen:
            raise ICUParseError(ErrorTemplate.duplicate_selector(case.selector, case_start.span()))
        seen.add(case.selector)
        cases.append(case)
        cursor = case_result.cursor.skip_spaces()

    if not cases:
        raise ICUParseError(ErrorTemplate.missing_cases(kind, start.span()))
    return ParseResult(CaseList(offset, tuple(cases)), cursor)
