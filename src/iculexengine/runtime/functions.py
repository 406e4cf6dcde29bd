"""Built-in argument formatting with locale-aware CLDR data.

Implements the number and date argument kinds:

    {n, number}              -> default string form
    {n, number, integer}     -> grouped integer (1,235)
    {n, number, percent}     -> locale percent (50%)
    {n, number, currency}    -> locale currency ($5.00)
    {n, number, %.2f}        -> printf-style conversion
    {n, number, #,##0.00}    -> CLDR number pattern
    {n, number, other}       -> default string form (no digit placeholders)

    {d, date}                -> RFC 3339 layout (naive datetimes as UTC)
    {d, date, short}         -> CLDR date style (short, medium, long, full)
    {d, date, yyyy-MM-dd}    -> CLDR date pattern
    $date-format parameter   -> pattern for every date argument of the render
                                (strftime when it contains '%', CLDR otherwise)

Failures raise ICUFormattingError carrying the value's default string form
as fallback; the resolver renders the fallback.

Python 3.13+. Uses Babel for i18n.
"""

import logging
from datetime import date, datetime, timedelta
from decimal import Decimal

from babel import Locale
from babel import dates as babel_dates
from babel import numbers as babel_numbers
from babel.core import UnknownLocaleError, get_global, parse_locale

from iculexengine.constants import DEFAULT_LOCALE
from iculexengine.diagnostics import ErrorTemplate, ICUFormattingError
from iculexengine.locale_utils import base_language, get_babel_locale

__all__ = [
    "date_format",
    "default_currency",
    "number_format",
    "resolve_babel_locale",
    "rfc3339",
]

logger = logging.getLogger(__name__)

DATE_STYLES = frozenset({"short", "medium", "long", "full"})

INTEGER_PATTERN = "#,##0"

# A CLDR number pattern needs at least one of these to place the number.
PATTERN_DIGITS = frozenset("0123456789#@")


def resolve_babel_locale(locale_code: str) -> Locale:
    """Babel Locale for a render, degrading to the base language, then the default.

    Example:
        >>> str(resolve_babel_locale("de-CH"))
        'de_CH'
        >>> str(resolve_babel_locale("xx-YY"))
        'en'
    """
    for candidate in (locale_code, base_language(locale_code), DEFAULT_LOCALE):
        if not candidate:
            continue
        try:
            return get_babel_locale(candidate)
        except (UnknownLocaleError, ValueError):
            logger.debug("Unknown locale '%s' for formatting", candidate)
    return get_babel_locale(DEFAULT_LOCALE)


def default_currency(locale: Locale) -> str | None:
    """Currency in use in the locale's territory, or None if it has none.

    Language-only locales use the territory of their likely subtags (en -> US).

    Example:
        >>> default_currency(get_babel_locale("de_CH")), default_currency(get_babel_locale("en"))
        ('CHF', 'USD')
    """
    territory = locale.territory
    if territory is None:
        likely = get_global("likely_subtags").get(locale.language)
        if likely is None:
            return None
        territory = parse_locale(likely)[1]
    if territory is None:
        return None
    currencies = babel_numbers.get_territory_currencies(territory)
    return currencies[0] if currencies else None


def rfc3339(value: datetime) -> str:
    """RFC 3339 layout with second precision; naive datetimes are taken as UTC.

    Example:
        >>> rfc3339(datetime(2025, 10, 27, 14, 30))
        '2025-10-27T14:30:00Z'
    """
    if value.tzinfo is None or value.utcoffset() == timedelta(0):
        return value.replace(tzinfo=None).isoformat(timespec="seconds") + "Z"
    return value.isoformat(timespec="seconds")


def number_format(value: int | float | Decimal, locale_code: str, style: str = "") -> str:
    """Format a number argument.

    Args:
        value: Number to format
        locale_code: Locale of the render (BCP-47 or POSIX)
        style: Style text of the argument

    Returns:
        Formatted number string

    Raises:
        ICUFormattingError: If the style cannot be applied to the value

    Examples:
        >>> number_format(5.5, "en", "%.0f")
        '6'
        >>> number_format(1234.5, "en", "#,##0.00")
        '1,234.50'
        >>> number_format(1234.5, "de", "#,##0.00")
        '1.234,50'
        >>> number_format(0.25, "en", "percent")
        '25%'
    """
    if not style:
        return str(value)

    try:
        if "%" in style and style != "percent":
            return style % value

        locale = resolve_babel_locale(locale_code)
        match style:
            case "integer":
                return str(babel_numbers.format_decimal(value, format=INTEGER_PATTERN, locale=locale))
            case "percent":
                return str(babel_numbers.format_percent(value, locale=locale))
            case "currency":
                currency = default_currency(locale)
                if currency is None:
                    logger.debug("No default currency for '%s'", locale)
                    return str(value)
                return str(babel_numbers.format_currency(value, currency, locale=locale))
            case _ if not PATTERN_DIGITS.intersection(style):
                logger.debug("Number style '%s' has no digit placeholders", style)
                return str(value)
            case _:
                return str(babel_numbers.format_decimal(value, format=style, locale=locale))
    except (TypeError, ValueError, ArithmeticError) as e:
        diagnostic = ErrorTemplate.formatting_failed("number", value, str(e))
        raise ICUFormattingError(diagnostic, fallback_value=str(value)) from e


def date_format(
    value: datetime | date,
    locale_code: str,
    style: str = "",
    *,
    pattern: str | None = None,
) -> str:
    """Format a date argument.

    Args:
        value: Date or datetime to format
        locale_code: Locale of the render (BCP-47 or POSIX)
        style: Style text of the argument
        pattern: Render-wide pattern from the date-format meta parameter;
            takes precedence over style

    Returns:
        Formatted date string

    Raises:
        ICUFormattingError: If the pattern or style cannot be applied

    Examples:
        >>> date_format(datetime(2025, 10, 27, 14, 30), "en")
        '2025-10-27T14:30:00Z'
        >>> date_format(date(2025, 10, 27), "en", "short")
        '10/27/25'
        >>> date_format(date(2025, 10, 27), "en", pattern="%d.%m.%Y")
        '27.10.2025'
    """
    try:
        if pattern:
            if "%" in pattern:
                return value.strftime(pattern)
            locale = resolve_babel_locale(locale_code)
            return str(babel_dates.format_datetime(value, format=pattern, locale=locale))

        if not style:
            if isinstance(value, datetime):
                return rfc3339(value)
            return value.isoformat()

        locale = resolve_babel_locale(locale_code)
        if style in DATE_STYLES:
            return str(babel_dates.format_date(value, format=style, locale=locale))
        return str(babel_dates.format_datetime(value, format=style, locale=locale))
    except (TypeError, ValueError, OverflowError, KeyError, AttributeError) as e:
        diagnostic = ErrorTemplate.formatting_failed("date", value, str(e))
        raise ICUFormattingError(diagnostic, fallback_value=value.isoformat()) from e
