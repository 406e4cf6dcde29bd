"""MessageFormatter - Main API for ICU message formatting.

Python 3.13+. External dependency: Babel (CLDR locale data).
"""

import logging
from collections.abc import Mapping

from iculexengine.constants import DEFAULT_LOCALE
from iculexengine.diagnostics import ICUSyntaxError
from iculexengine.runtime.cache import TemplateCache
from iculexengine.runtime.cache_config import CacheConfig
from iculexengine.runtime.evaluation_context import EvaluationContext
from iculexengine.runtime.formatter_registry import CustomFormatter, FormatterRegistry
from iculexengine.runtime.plural_rules import (
    PluralRule,
    PluralRuleRegistry,
    create_default_plural_rules,
)
from iculexengine.runtime.resolver import MessageResolver
from iculexengine.syntax import Message
from iculexengine.syntax.parser import MessageParser

__all__ = ["MessageFormatter", "format_message", "parse_template"]

logger = logging.getLogger(__name__)

# Debug messages are high-volume; keep template excerpts short.
_LOG_TRUNCATE_DEBUG: int = 50


def _detached(error: ICUSyntaxError) -> ICUSyntaxError:
    """Fresh copy of a syntax error with no traceback attached.

    Cached errors are never raised themselves; each cache hit raises a new
    copy so tracebacks do not accumulate on a shared object.
    """
    if error.diagnostic is not None:
        return type(error)(error.diagnostic)
    return type(error)(str(error))


class MessageFormatter:
    """Compiles and renders ICU message templates.

    Aligned with the (result, errors) convention: format() never raises for
    a malformed template; it returns "" together with the syntax error.

    Thread Safety:
        Compiled templates are immutable and the template cache is locked,
        so format() may be called concurrently. Registering formatters or
        plural rules while other threads render is not synchronized.

    Example:
        >>> formatter = MessageFormatter("en")
        >>> formatter.format("{count, plural, one {# file} other {# files}}", {"count": 3})
        ('3 files', ())
        >>> text, errors = formatter.format("{oops")
        >>> text, type(errors[0]).__name__
        ('', 'ICULexError')
    """

    __slots__ = ("_cache", "_cache_errors", "_locale", "_parser", "_resolver")

    def __init__(
        self,
        locale: str = DEFAULT_LOCALE,
        *,
        cache: CacheConfig | None = CacheConfig(),  # noqa: B008 - frozen dataclass
        max_source_size: int | None = None,
        max_nesting_depth: int | None = None,
        plural_rules: PluralRuleRegistry | None = None,
        formatters: FormatterRegistry | None = None,
    ) -> None:
        """Initialize formatter.

        Args:
            locale: Default locale for renders that do not name one
            cache: Template cache configuration; None disables caching
            max_source_size: Maximum template size in characters (default: 10 MB)
            max_nesting_depth: Maximum argument nesting depth (default: 100)
            plural_rules: Category rules (default: fresh built-in table)
            formatters: Custom formatters (default: empty registry)

        Raises:
            ValueError: If locale is empty
        """
        if not locale or not locale.strip():
            msg = "locale must be a non-empty tag"
            raise ValueError(msg)

        self._locale = locale
        self._parser = MessageParser(
            max_source_size=max_source_size, max_nesting_depth=max_nesting_depth
        )
        self._resolver = MessageResolver(
            plural_rules=(
                plural_rules if plural_rules is not None else create_default_plural_rules()
            ),
            formatters=formatters.copy() if formatters is not None else FormatterRegistry(),
        )
        self._cache: TemplateCache | None = None
        self._cache_errors = False
        if cache is not None:
            self._cache = TemplateCache(maxsize=cache.size)
            self._cache_errors = cache.cache_errors

        logger.debug(
            "MessageFormatter initialized for locale: %s (cache=%s)",
            locale,
            "on" if self._cache is not None else "off",
        )

    @property
    def locale(self) -> str:
        """Default locale of this formatter."""
        return self._locale

    @property
    def cache_enabled(self) -> bool:
        """Whether compiled templates are cached."""
        return self._cache is not None

    @property
    def plural_rules(self) -> PluralRuleRegistry:
        """Category rules used for plural and selectordinal arguments."""
        return self._resolver.plural_rules

    @property
    def formatters(self) -> FormatterRegistry:
        """Registry of custom formatters."""
        return self._resolver.formatters

    def __repr__(self) -> str:
        """Return string representation for debugging.

        Example:
            >>> MessageFormatter("de")
            MessageFormatter(locale='de', formatters=0)
        """
        return f"MessageFormatter(locale={self._locale!r}, formatters={len(self.formatters)})"

    def parse(self, template: str) -> Message:
        """Compile a template, consulting the cache.

        Raises:
            ICULexError: On malformed quoting or brace nesting
            ICUParseError: On grammar violations
            ValueError: If the template exceeds max_source_size
        """
        if self._cache is not None:
            cached = self._cache.get(template)
            if isinstance(cached, ICUSyntaxError):
                raise _detached(cached)
            if cached is not None:
                return cached

        try:
            message = self._parser.parse(template)
        except ICUSyntaxError as e:
            if self._cache is not None and self._cache_errors:
                self._cache.put(template, _detached(e))
            raise

        if self._cache is not None:
            self._cache.put(template, message)
        return message

    def format(
        self,
        template: str,
        params: Mapping[str, object] | None = None,
        *,
        locale: str | None = None,
    ) -> tuple[str, tuple[ICUSyntaxError, ...]]:
        """Render a template.

        Args:
            template: Template text
            params: Parameter values (None values count as unbound)
            locale: Locale of this render (default: the formatter's locale)

        Returns:
            Tuple of (formatted_string, errors). A malformed template yields
            ("", (error,)); rendering a well-formed template never fails.
        """
        try:
            message = self.parse(template)
        except ICUSyntaxError as e:
            logger.warning("Malformed template %r: %s", template[:_LOG_TRUNCATE_DEBUG], e)
            return ("", (e,))

        return (self.render(message, params, locale=locale), ())

    def render(
        self,
        message: Message,
        params: Mapping[str, object] | None = None,
        *,
        locale: str | None = None,
    ) -> str:
        """Render an already compiled template."""
        context = EvaluationContext.create(locale or self._locale, params)
        result = self._resolver.resolve(message, context)
        logger.debug("Rendered message for %s: %s", context.locale_code, result[:_LOG_TRUNCATE_DEBUG])
        return result

    def add_formatter(self, name: str, func: CustomFormatter) -> None:
        """Register a custom formatter under the name used in templates.

        Example:
            >>> formatter = MessageFormatter("en")
            >>> formatter.add_formatter("upper", lambda value, locale, args: str(value).upper())
            >>> formatter.format("{name, upper}", {"name": "ada"})[0]
            'ADA'
        """
        self.formatters.register(func, name=name)
        logger.debug("Added custom formatter: %s", name)

    def register_plural_rule(
        self,
        language: str,
        *,
        cardinal: PluralRule | None = None,
        ordinal: PluralRule | None = None,
    ) -> None:
        """Register plural rules for a language on this formatter only."""
        self.plural_rules.register(language, cardinal=cardinal, ordinal=ordinal)
        logger.debug("Registered plural rules for: %s", language)

    def clear_cache(self) -> None:
        """Drop all compiled templates."""
        if self._cache is not None:
            self._cache.clear()
            logger.debug("Template cache manually cleared")

    def get_cache_stats(self) -> dict[str, int | float] | None:
        """Template cache statistics, or None when caching is disabled."""
        if self._cache is None:
            return None
        return self._cache.get_stats()


def parse_template(template: str) -> Message:
    """Compile a template with default limits and no caching.

    Raises:
        ICULexError: On malformed quoting or brace nesting
        ICUParseError: On grammar violations
    """
    return MessageParser().parse(template)


def format_message(
    template: str,
    params: Mapping[str, object] | None = None,
    locale: str = DEFAULT_LOCALE,
) -> tuple[str, tuple[ICUSyntaxError, ...]]:
    """Render a template once with the built-in rules and no custom formatters.

    Example:
        >>> format_message("Hello {name}!", {"name": "Bob"})
        ('Hello Bob!', ())
    """
    return MessageFormatter(locale, cache=None).format(template, params)
