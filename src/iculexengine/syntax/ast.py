"""ICU message AST (Abstract Syntax Tree) node definitions.

One immutable node type per template construct. A compiled template is a
Message: an ordered tuple of nodes, safe to share between threads and to
render any number of times.

Includes type guards as static methods (eliminates circular imports).

Python 3.13+. Zero external dependencies.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TypeIs

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Message structure
    "Message",
    "Case",
    # Literal elements
    "Text",
    "QuotedText",
    "Hash",
    # Arguments
    "Placeholder",
    "FormatNumber",
    "FormatDate",
    "FormatTime",
    "FormatOrdinal",
    "FormatDuration",
    "FormatSpellout",
    "FormatCustom",
    "Plural",
    "SelectOrdinal",
    "Select",
    # Type aliases
    "SimpleFormat",
    "Node",
    "ASTNode",
]

# ============================================================================
# LITERAL ELEMENTS
# ============================================================================


@dataclass(frozen=True, slots=True)
class Text:
    """Literal message text."""

    value: str

    @staticmethod
    def guard(node: object) -> TypeIs["Text"]:
        """Type guard for Text."""
        return isinstance(node, Text)


@dataclass(frozen=True, slots=True)
class QuotedText:
    """Content of a quoted span, never re-interpreted as syntax.

    Example:
        'Use '{foo}' literally' contains QuotedText("{foo}")
    """

    value: str


@dataclass(frozen=True, slots=True)
class Hash:
    """Number sign standing for the single bound value (usually a count)."""


# ============================================================================
# ARGUMENTS
# ============================================================================


@dataclass(frozen=True, slots=True)
class Placeholder:
    """Bare argument: {name}"""

    key: str

    @staticmethod
    def guard(node: object) -> TypeIs["Placeholder"]:
        """Type guard for Placeholder."""
        return isinstance(node, Placeholder)


@dataclass(frozen=True, slots=True)
class FormatNumber:
    """Number argument: {price, number, #,##0.00}"""

    key: str
    style: str = ""


@dataclass(frozen=True, slots=True)
class FormatDate:
    """Date argument: {when, date} or {when, date, long}"""

    key: str
    style: str = ""


@dataclass(frozen=True, slots=True)
class FormatTime:
    """Time argument: {when, time, short}"""

    key: str
    style: str = ""


@dataclass(frozen=True, slots=True)
class FormatOrdinal:
    """Ordinal argument: {rank, ordinal}"""

    key: str
    style: str = ""


@dataclass(frozen=True, slots=True)
class FormatDuration:
    """Duration argument: {elapsed, duration}"""

    key: str
    style: str = ""


@dataclass(frozen=True, slots=True)
class FormatSpellout:
    """Spellout argument: {amount, spellout}"""

    key: str
    style: str = ""


@dataclass(frozen=True, slots=True)
class FormatCustom:
    """Argument with an application-defined formatter.

    Example:
        {price, currency, EUR, compact} -> FormatCustom("price", "currency", ("EUR", "compact"))
    """

    key: str
    name: str
    args: tuple[str, ...] = ()

    @staticmethod
    def guard(node: object) -> TypeIs["FormatCustom"]:
        """Type guard for FormatCustom."""
        return isinstance(node, FormatCustom)


# ============================================================================
# CASE LISTS
# ============================================================================


@dataclass(frozen=True, slots=True)
class Case:
    """Selector and the message rendered when it matches.

    Plural and selectordinal selectors are either explicit values
    normalized to ``=<int>`` or CLDR category names; select selectors are
    arbitrary strings.
    """

    selector: str
    message: "Message"


def _index_cases(cases: tuple[Case, ...]) -> Mapping[str, "Message"]:
    return MappingProxyType({case.selector: case.message for case in cases})


@dataclass(frozen=True, slots=True)
class Plural:
    """Cardinal plural argument.

    Example:
        {count, plural, offset:1 =0 {none} one {# item} other {# items}}

    Attributes:
        key: Parameter holding the count
        offset: Subtracted from the count before category lookup
        cases: Cases in declaration order
        index: Read-only selector -> message lookup (derived from cases)
    """

    key: str
    offset: int
    cases: tuple[Case, ...]
    index: Mapping[str, "Message"] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "index", _index_cases(self.cases))

    @staticmethod
    def guard(node: object) -> TypeIs["Plural"]:
        """Type guard for Plural."""
        return isinstance(node, Plural)


@dataclass(frozen=True, slots=True)
class SelectOrdinal:
    """Ordinal plural argument.

    Example:
        {place, selectordinal, one {#st} two {#nd} few {#rd} other {#th}}
    """

    key: str
    offset: int
    cases: tuple[Case, ...]
    index: Mapping[str, "Message"] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "index", _index_cases(self.cases))


@dataclass(frozen=True, slots=True)
class Select:
    """Exact-match selection on the string form of a value.

    Example:
        {gender, select, female {she} male {he} other {they}}
    """

    key: str
    cases: tuple[Case, ...]
    index: Mapping[str, "Message"] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "index", _index_cases(self.cases))

    @staticmethod
    def guard(node: object) -> TypeIs["Select"]:
        """Type guard for Select."""
        return isinstance(node, Select)


# ============================================================================
# MESSAGE
# ============================================================================


@dataclass(frozen=True, slots=True)
class Message:
    """Compiled template or case body.

    An empty element tuple is valid and renders to "".
    """

    elements: tuple["Node", ...] = ()

    @staticmethod
    def guard(node: object) -> TypeIs["Message"]:
        """Type guard for Message."""
        return isinstance(node, Message)


# ============================================================================
# TYPE ALIASES
# ============================================================================

type SimpleFormat = (
    FormatNumber | FormatDate | FormatTime | FormatOrdinal | FormatDuration | FormatSpellout
)

type Node = (
    Text
    | QuotedText
    | Hash
    | Placeholder
    | SimpleFormat
    | FormatCustom
    | Plural
    | SelectOrdinal
    | Select
)

type ASTNode = Message | Case | Node
