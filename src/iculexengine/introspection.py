"""Parameter and formatter introspection for ICU message templates.

Answers "what does this template need?" without rendering it: which
parameters it reads, which formatters it calls, and whether it selects
cases.

Python 3.13+.
"""

from dataclasses import dataclass

from .enums import FormatKind, VariableContext
from .syntax import parse
from .syntax.ast import (
    FormatCustom,
    FormatDate,
    FormatDuration,
    FormatNumber,
    FormatOrdinal,
    FormatSpellout,
    FormatTime,
    Hash,
    Message,
    Placeholder,
    Plural,
    Select,
    SelectOrdinal,
)
from .syntax.visitor import ASTVisitor

__all__ = [
    "FormatterCallInfo",
    "IntrospectionVisitor",
    "MessageIntrospection",
    "VariableInfo",
    "extract_variables",
    "introspect_message",
]


# ==============================================================================
# INTROSPECTION METADATA
# ==============================================================================


@dataclass(frozen=True, slots=True)
class VariableInfo:
    """Immutable metadata about a parameter reference."""

    name: str
    """Parameter name."""

    context: VariableContext
    """Kind of argument the parameter appears in."""


@dataclass(frozen=True, slots=True)
class FormatterCallInfo:
    """Immutable metadata about a formatted argument."""

    name: str
    """Formatter kind or custom formatter name (e.g., 'number', 'currency')."""

    key: str
    """Parameter passed to the formatter."""

    args: tuple[str, ...]
    """Style (built-in kinds) or comma-separated arguments (custom formatters)."""


@dataclass(frozen=True, slots=True)
class MessageIntrospection:
    """Complete introspection result for a template."""

    variables: frozenset[VariableInfo]
    """All parameter references, case bodies included."""

    formatters: frozenset[FormatterCallInfo]
    """All formatted arguments."""

    has_plurals: bool
    """Whether the template uses plural or selectordinal."""

    has_selects: bool
    """Whether the template uses select."""

    uses_hash: bool
    """Whether the template contains a '#' placeholder."""

    @property
    def has_selectors(self) -> bool:
        """Whether the template selects cases at all."""
        return self.has_plurals or self.has_selects

    def get_variable_names(self) -> frozenset[str]:
        """Get set of parameter names."""
        return frozenset(var.name for var in self.variables)

    def requires_variable(self, name: str) -> bool:
        """Check if the template reads a specific parameter."""
        return any(var.name == name for var in self.variables)

    def get_formatter_names(self) -> frozenset[str]:
        """Get set of formatter names used in the template."""
        return frozenset(call.name for call in self.formatters)


# ==============================================================================
# AST VISITOR
# ==============================================================================


class IntrospectionVisitor(ASTVisitor):
    """AST visitor collecting parameters, formatter calls, and selectors.

    Case bodies are reached through generic_visit(), so references nested
    at any depth are collected.
    """

    __slots__ = ("formatters", "has_plurals", "has_selects", "uses_hash", "variables")

    def __init__(self) -> None:
        """Initialize visitor with empty result sets."""
        super().__init__()
        self.variables: set[VariableInfo] = set()
        self.formatters: set[FormatterCallInfo] = set()
        self.has_plurals = False
        self.has_selects = False
        self.uses_hash = False

    def _add_format(self, name: str, key: str, args: tuple[str, ...]) -> None:
        self.variables.add(VariableInfo(key, VariableContext.FORMAT))
        self.formatters.add(FormatterCallInfo(name, key, args))

    def visit_Hash(self, node: Hash) -> Hash:
        self.uses_hash = True
        return node

    def visit_Placeholder(self, node: Placeholder) -> Placeholder:
        self.variables.add(VariableInfo(node.key, VariableContext.PLACEHOLDER))
        return node

    def visit_FormatNumber(self, node: FormatNumber) -> FormatNumber:
        self._add_format(FormatKind.NUMBER, node.key, (node.style,) if node.style else ())
        return node

    def visit_FormatDate(self, node: FormatDate) -> FormatDate:
        self._add_format(FormatKind.DATE, node.key, (node.style,) if node.style else ())
        return node

    def visit_FormatTime(self, node: FormatTime) -> FormatTime:
        self._add_format(FormatKind.TIME, node.key, (node.style,) if node.style else ())
        return node

    def visit_FormatOrdinal(self, node: FormatOrdinal) -> FormatOrdinal:
        self._add_format(FormatKind.ORDINAL, node.key, (node.style,) if node.style else ())
        return node

    def visit_FormatDuration(self, node: FormatDuration) -> FormatDuration:
        self._add_format(FormatKind.DURATION, node.key, (node.style,) if node.style else ())
        return node

    def visit_FormatSpellout(self, node: FormatSpellout) -> FormatSpellout:
        self._add_format(FormatKind.SPELLOUT, node.key, (node.style,) if node.style else ())
        return node

    def visit_FormatCustom(self, node: FormatCustom) -> FormatCustom:
        self._add_format(node.name, node.key, node.args)
        return node

    def visit_Plural(self, node: Plural) -> Plural:
        self.has_plurals = True
        self.variables.add(VariableInfo(node.key, VariableContext.SELECTOR))
        return self.generic_visit(node)  # type: ignore[return-value]

    def visit_SelectOrdinal(self, node: SelectOrdinal) -> SelectOrdinal:
        self.has_plurals = True
        self.variables.add(VariableInfo(node.key, VariableContext.SELECTOR))
        return self.generic_visit(node)  # type: ignore[return-value]

    def visit_Select(self, node: Select) -> Select:
        self.has_selects = True
        self.variables.add(VariableInfo(node.key, VariableContext.SELECTOR))
        return self.generic_visit(node)  # type: ignore[return-value]


# ==============================================================================
# PUBLIC API
# ==============================================================================


def introspect_message(template: str | Message) -> MessageIntrospection:
    """Introspect a template or compiled message.

    Args:
        template: Template text or Message AST

    Returns:
        Immutable introspection result

    Raises:
        ICULexError: If template text is malformed
        ICUParseError: If template text violates the grammar

    Example:
        >>> info = introspect_message("{n, plural, one {# by {who}} other {#}}")
        >>> sorted(info.get_variable_names())
        ['n', 'who']
        >>> info.has_plurals, info.uses_hash
        (True, True)
    """
    message = parse(template) if isinstance(template, str) else template
    visitor = IntrospectionVisitor()
    visitor.visit(message)
    return MessageIntrospection(
        variables=frozenset(visitor.variables),
        formatters=frozenset(visitor.formatters),
        has_plurals=visitor.has_plurals,
        has_selects=visitor.has_selects,
        uses_hash=visitor.uses_hash,
    )


def extract_variables(template: str | Message) -> frozenset[str]:
    """Names of all parameters a template reads.

    Example:
        >>> sorted(extract_variables("Hi {name}, you owe {amount, number, integer}"))
        ['amount', 'name']
    """
    return introspect_message(template).get_variable_names()
