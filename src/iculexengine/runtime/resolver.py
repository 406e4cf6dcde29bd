"""ICU message resolver - converts AST to formatted strings.

Renders a compiled Message against an EvaluationContext by walking its
nodes in order. Rendering never raises: a missing or mistyped value
renders as an empty argument, and formatter failures render their
fallback value.

Python 3.13+. Indirect dependency: Babel (via functions and plural_rules).

Thread Safety:
    The resolver holds only registries, which are read during rendering.
    Per-render state lives in the EvaluationContext passed to resolve(),
    so one resolver may render concurrently from several threads.
"""

import logging

from iculexengine.constants import DATE_FORMAT_PARAMETER, FALLBACK_HASH
from iculexengine.diagnostics import ICUFormattingError
from iculexengine.enums import FormatKind, ValueKind
from iculexengine.runtime.evaluation_context import EvaluationContext
from iculexengine.runtime.formatter_registry import FormatterRegistry
from iculexengine.runtime.functions import date_format, number_format
from iculexengine.runtime.plural_rules import PluralRuleRegistry, create_default_plural_rules
from iculexengine.runtime.value_types import MessageValue
from iculexengine.syntax import (
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

__all__ = ["MessageResolver"]

logger = logging.getLogger(__name__)

OTHER = "other"


class MessageResolver:
    """Resolves ICU messages to strings.

    Lookup rules:
        - Placeholders and '#' render the default string form of a value
        - number and date arguments use the Babel-backed built-ins
        - Registered formatters override built-in kinds by name
        - plural/selectordinal: explicit =n case, then CLDR category,
          then 'other', then ""
        - select: exact case, then 'other', then ""

    Example:
        >>> from iculexengine.syntax import parse
        >>> resolver = MessageResolver()
        >>> ctx = EvaluationContext.create("en", {"n": 2})
        >>> resolver.resolve(parse("{n, plural, one {# item} other {# items}}"), ctx)
        '2 items'
    """

    __slots__ = ("formatters", "plural_rules")

    def __init__(
        self,
        *,
        plural_rules: PluralRuleRegistry | None = None,
        formatters: FormatterRegistry | None = None,
    ) -> None:
        """Initialize resolver.

        Args:
            plural_rules: Category rules (default: built-in table with CLDR fallback)
            formatters: Application-defined formatters (default: none)
        """
        self.plural_rules = (
            plural_rules if plural_rules is not None else create_default_plural_rules()
        )
        self.formatters = formatters if formatters is not None else FormatterRegistry()

    def resolve(self, message: Message, context: EvaluationContext) -> str:
        """Render message against context."""
        return "".join(self._resolve_node(node, context) for node in message.elements)

    def _resolve_node(self, node: Node, context: EvaluationContext) -> str:  # noqa: PLR0911
        """Render a single node.

        Note: PLR0911 (too many returns) is acceptable here - each case
        represents a distinct node type of the message AST.
        """
        match node:
            case Text(value=value) | QuotedText(value=value):
                return value
            case Hash():
                single = context.single_value()
                return single.display() if single is not None else FALLBACK_HASH
            case Placeholder(key=key):
                value = context.lookup(key)
                return value.display() if value is not None else ""
            case FormatNumber():
                return self._resolve_number(node, context)
            case FormatDate():
                return self._resolve_date(node, context)
            case FormatTime() | FormatOrdinal() | FormatDuration() | FormatSpellout():
                return self._resolve_simple(node, context)
            case FormatCustom():
                return self._resolve_custom(node, context)
            case Plural():
                return self._resolve_plural(node, context, ordinal=False)
            case SelectOrdinal():
                return self._resolve_plural(node, context, ordinal=True)
            case Select():
                return self._resolve_select(node, context)
            case _:
                logger.debug("Skipping unknown node %s", type(node).__name__)
                return ""

    # ------------------------------------------------------------------
    # Simple formatters
    # ------------------------------------------------------------------

    def _call_formatter(
        self, name: str, value: MessageValue, context: EvaluationContext, args: tuple[str, ...]
    ) -> str:
        try:
            return self.formatters.call(name, value.raw, context.locale_code, args)
        except ICUFormattingError as e:
            logger.debug("%s", e)
            return e.fallback_value

    def _override(
        self, kind: FormatKind, style: str, value: MessageValue, context: EvaluationContext
    ) -> str | None:
        """Registered formatter for a built-in kind, or None when not overridden."""
        if kind not in self.formatters:
            return None
        args = (style,) if style else ()
        return self._call_formatter(kind, value, context, args)

    def _resolve_number(self, node: FormatNumber, context: EvaluationContext) -> str:
        value = context.lookup(node.key)
        if value is None:
            return ""
        overridden = self._override(FormatKind.NUMBER, node.style, value, context)
        if overridden is not None:
            return overridden
        number = value.numeric_value()
        if number is None:
            logger.debug("Argument '%s' is not numeric (%s)", node.key, value.kind)
            return ""
        try:
            return number_format(number, context.locale_code, node.style)
        except ICUFormattingError as e:
            logger.debug("%s", e)
            return e.fallback_value

    def _resolve_date(self, node: FormatDate, context: EvaluationContext) -> str:
        value = context.lookup(node.key)
        if value is None:
            return ""
        overridden = self._override(FormatKind.DATE, node.style, value, context)
        if overridden is not None:
            return overridden
        timestamp = value.timestamp_value()
        if timestamp is None:
            logger.debug("Argument '%s' is not a timestamp (%s)", node.key, value.kind)
            return ""

        pattern = None
        meta = context.lookup(DATE_FORMAT_PARAMETER)
        if meta is not None and meta.kind is ValueKind.STRING:
            pattern = str(meta.raw)

        try:
            return date_format(timestamp, context.locale_code, node.style, pattern=pattern)
        except ICUFormattingError as e:
            logger.debug("%s", e)
            return e.fallback_value

    def _resolve_simple(
        self,
        node: FormatTime | FormatOrdinal | FormatDuration | FormatSpellout,
        context: EvaluationContext,
    ) -> str:
        value = context.lookup(node.key)
        if value is None:
            return ""
        kind = _SIMPLE_KINDS[type(node)]
        overridden = self._override(kind, node.style, value, context)
        if overridden is not None:
            return overridden
        return value.display()

    def _resolve_custom(self, node: FormatCustom, context: EvaluationContext) -> str:
        value = context.lookup(node.key)
        if value is None:
            return ""
        if node.name not in self.formatters:
            return f"{node.name}({value.display()},[{' '.join(node.args)}])"
        return self._call_formatter(node.name, value, context, node.args)

    # ------------------------------------------------------------------
    # Case selection
    # ------------------------------------------------------------------

    def _resolve_plural(
        self, node: Plural | SelectOrdinal, context: EvaluationContext, *, ordinal: bool
    ) -> str:
        value = context.lookup(node.key)
        if value is None:
            return ""
        n = value.integer_value()
        if n is None:
            logger.debug("Plural argument '%s' is not an integer (%r)", node.key, value.raw)
            return ""

        shifted = n - node.offset
        selected = node.index.get(f"={n}")
        if selected is None:
            if ordinal:
                category = self.plural_rules.ordinal_category(context.language, shifted)
            else:
                category = self.plural_rules.cardinal_category(context.language, shifted)
            selected = node.index.get(category) if category else None
        if selected is None:
            selected = node.index.get(OTHER)
        if selected is None:
            return ""

        context.rebind(node.key, MessageValue.of(shifted))
        return self.resolve(selected, context)

    def _resolve_select(self, node: Select, context: EvaluationContext) -> str:
        value = context.lookup(node.key)
        if value is None:
            return ""
        selected = node.index.get(value.display())
        if selected is None:
            selected = node.index.get(OTHER)
        if selected is None:
            return ""
        return self.resolve(selected, context)


_SIMPLE_KINDS: dict[type, FormatKind] = {
    FormatTime: FormatKind.TIME,
    FormatOrdinal: FormatKind.ORDINAL,
    FormatDuration: FormatKind.DURATION,
    FormatSpellout: FormatKind.SPELLOUT,
}
