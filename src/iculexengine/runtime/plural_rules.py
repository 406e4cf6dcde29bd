"""Plural and ordinal category rules.

Provides a replaceable strategy mapping (language, integer) to a CLDR plural
category: a registry of per-language rule functions seeded with a small
table, backed by Babel's CLDR data for languages the table does not cover.

Categories are one of "zero", "one", "two", "few", "many", "other", or ""
meaning "no rule; fall through to the other case".

Python 3.13+. Depends on Babel for CLDR data.

Reference: https://www.unicode.org/cldr/charts/47/supplemental/language_plural_rules.html
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from dataclasses import dataclass

from babel.core import UnknownLocaleError

from iculexengine.enums import PluralCategory
from iculexengine.locale_utils import base_language, get_babel_locale

__all__ = [
    "PluralRule",
    "PluralRuleRegistry",
    "cardinal_category",
    "create_default_plural_rules",
    "ordinal_category",
]

logger = logging.getLogger(__name__)

type PluralRule = Callable[[int], str]


# ============================================================================
# BUILT-IN RULES
# ============================================================================


def one_other(n: int) -> str:
    """'one' for exactly one, else 'other' (English, German, Spanish, ...)."""
    return PluralCategory.ONE if n == 1 else PluralCategory.OTHER


def always_other(n: int) -> str:  # noqa: ARG001 - rule signature
    """Languages without grammatical number (Chinese cardinals, most ordinals)."""
    return PluralCategory.OTHER


def english_ordinal(n: int) -> str:
    """1st, 2nd, 3rd, 4th; 11th, 12th, 13th; 21st, 22nd, 23rd, ...

    Negative values (a count shifted below zero by an offset) are 'other'.
    """
    if n < 0:
        return PluralCategory.OTHER
    last, last_two = n % 10, n % 100
    if last == 1 and last_two != 11:
        return PluralCategory.ONE
    if last == 2 and last_two != 12:
        return PluralCategory.TWO
    if last == 3 and last_two != 13:
        return PluralCategory.FEW
    return PluralCategory.OTHER


def italian_ordinal(n: int) -> str:
    """'many' for 8, 11, 80, 800 (l'8°, l'11°), else 'other'."""
    return PluralCategory.MANY if n in (8, 11, 80, 800) else PluralCategory.OTHER


_DEFAULT_CARDINAL: dict[str, PluralRule] = {
    "bg": one_other,
    "de": one_other,
    "en": one_other,
    "es": one_other,
    "it": one_other,
    "pt": one_other,
    "zh": always_other,
}

_DEFAULT_ORDINAL: dict[str, PluralRule] = {
    "bg": always_other,
    "de": always_other,
    "en": english_ordinal,
    "es": always_other,
    "it": italian_ordinal,
    "pt": always_other,
    "zh": always_other,
}


# ============================================================================
# REGISTRY
# ============================================================================


@dataclass(frozen=True, slots=True)
class _RuleSet:
    cardinal: PluralRule | None
    ordinal: PluralRule | None


class PluralRuleRegistry:
    """Per-language cardinal and ordinal rules.

    Lookup order for a language:
        1. Rule registered for the base language subtag
        2. Babel CLDR rule (when cldr_fallback is enabled)
        3. "" (no category)

    Supports dict-like introspection over registered languages:
        - __iter__, __len__, __contains__

    Example:
        >>> rules = create_default_plural_rules()
        >>> rules.cardinal_category("en-US", 1)
        'one'
        >>> rules.ordinal_category("en", 23)
        'few'
        >>> rules.register("fr", cardinal=lambda n: "one" if n in (0, 1) else "other")
        >>> rules.cardinal_category("fr", 0)
        'one'
    """

    __slots__ = ("_cldr_fallback", "_rules")

    def __init__(self, *, cldr_fallback: bool = True) -> None:
        """Initialize an empty registry.

        Args:
            cldr_fallback: Use Babel's CLDR data for unregistered languages
        """
        self._rules: dict[str, _RuleSet] = {}
        self._cldr_fallback = cldr_fallback

    @property
    def cldr_fallback(self) -> bool:
        """Whether unregistered languages fall back to Babel CLDR rules."""
        return self._cldr_fallback

    def register(
        self,
        language: str,
        *,
        cardinal: PluralRule | None = None,
        ordinal: PluralRule | None = None,
    ) -> None:
        """Register rules for a language, keeping any rule not supplied.

        Args:
            language: Locale tag; only the base language subtag is used
            cardinal: Rule for plural arguments
            ordinal: Rule for selectordinal arguments
        """
        key = base_language(language)
        existing = self._rules.get(key, _RuleSet(None, None))
        self._rules[key] = _RuleSet(
            cardinal=cardinal if cardinal is not None else existing.cardinal,
            ordinal=ordinal if ordinal is not None else existing.ordinal,
        )

    def cardinal_category(self, locale: str, n: int) -> str:
        """CLDR cardinal category of n in locale, or "" if unknown."""
        language = base_language(locale)
        rules = self._rules.get(language)
        if rules is not None and rules.cardinal is not None:
            return self._apply(rules.cardinal, language, n)
        return self._cldr_category(language, n, ordinal=False)

    def ordinal_category(self, locale: str, n: int) -> str:
        """CLDR ordinal category of n in locale, or "" if unknown."""
        language = base_language(locale)
        rules = self._rules.get(language)
        if rules is not None and rules.ordinal is not None:
            return self._apply(rules.ordinal, language, n)
        return self._cldr_category(language, n, ordinal=True)

    @staticmethod
    def _apply(rule: PluralRule, language: str, n: int) -> str:
        try:
            return str(rule(n))
        except (TypeError, ValueError, ArithmeticError):
            logger.warning("Plural rule for '%s' failed on %d", language, n, exc_info=True)
            return ""

    def _cldr_category(self, language: str, n: int, *, ordinal: bool) -> str:
        if not self._cldr_fallback or not language:
            return ""
        try:
            locale_obj = get_babel_locale(language)
        except (UnknownLocaleError, ValueError):
            logger.debug("No CLDR plural data for '%s'", language)
            return ""
        rule = locale_obj.ordinal_form if ordinal else locale_obj.plural_form
        return str(rule(n))

    def copy(self) -> PluralRuleRegistry:
        """Create an independent copy of this registry."""
        new_registry = PluralRuleRegistry(cldr_fallback=self._cldr_fallback)
        new_registry._rules = self._rules.copy()
        return new_registry

    def __iter__(self) -> Iterator[str]:
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    def __contains__(self, language: str) -> bool:
        return base_language(language) in self._rules

    def __repr__(self) -> str:
        return f"PluralRuleRegistry(languages={len(self._rules)})"


def create_default_plural_rules(*, cldr_fallback: bool = True) -> PluralRuleRegistry:
    """Create a new registry seeded with the built-in rule table.

    Each call returns a fresh instance; registering on it does not affect
    other formatters.
    """
    registry = PluralRuleRegistry(cldr_fallback=cldr_fallback)
    for language in sorted(_DEFAULT_CARDINAL.keys() | _DEFAULT_ORDINAL.keys()):
        registry.register(
            language,
            cardinal=_DEFAULT_CARDINAL.get(language),
            ordinal=_DEFAULT_ORDINAL.get(language),
        )
    return registry


_DEFAULT_RULES = create_default_plural_rules()


def cardinal_category(locale: str, n: int) -> str:
    """Cardinal category from the built-in table (CLDR fallback for other languages).

    Examples:
        >>> cardinal_category("de", 1)
        'one'
        >>> cardinal_category("zh", 1)
        'other'
        >>> cardinal_category("xx", 1)
        ''
    """
    return _DEFAULT_RULES.cardinal_category(locale, n)


def ordinal_category(locale: str, n: int) -> str:
    """Ordinal category from the built-in table (CLDR fallback for other languages).

    Examples:
        >>> ordinal_category("en", 2)
        'two'
        >>> ordinal_category("it", 11)
        'many'
    """
    return _DEFAULT_RULES.ordinal_category(locale, n)
