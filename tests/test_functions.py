"""Tests for the Babel-backed number and date formatting of arguments."""

from datetime import UTC, date, datetime, timedelta, timezone
from decimal import Decimal

import pytest

from iculexengine.diagnostics import ICUFormattingError
from iculexengine.runtime import date_format, number_format
from iculexengine.runtime.functions import resolve_babel_locale


class TestResolveBabelLocale:
    """Locale degradation for formatting."""

    def test_full_locale(self) -> None:
        """Known regional locales are used as given."""
        assert str(resolve_babel_locale("de-CH")) == "de_CH"

    def test_unknown_region_degrades_to_language(self) -> None:
        """An unknown region falls back to the base language."""
        assert str(resolve_babel_locale("de-XX")) == "de"

    def test_unknown_language_degrades_to_default(self) -> None:
        """An unknown language falls back to the default locale."""
        assert str(resolve_babel_locale("xx-YY")) == "en"


class TestNumberFormat:
    """number argument styles."""

    def test_no_style(self) -> None:
        """No style renders str(value)."""
        assert number_format(42, "en") == "42"
        assert number_format(Decimal("1.50"), "en") == "1.50"

    @pytest.mark.parametrize(
        ("value", "style", "expected"),
        [
            (5.4, "%.0f", "5"),
            (5.5, "%.0f", "6"),
            (3, "%d", "3"),
            (2.5, "%.2f", "2.50"),
            (7, "%05d", "00007"),
        ],
    )
    def test_printf_styles(self, value: float, style: str, expected: str) -> None:
        """Styles containing '%' are printf conversions."""
        assert number_format(value, "en", style) == expected

    def test_integer_style(self) -> None:
        """integer groups digits per locale."""
        assert number_format(1234567, "en", "integer") == "1,234,567"

    def test_percent_style(self) -> None:
        """percent uses the locale percent format."""
        assert number_format(0.25, "en", "percent") == "25%"

    def test_cldr_pattern(self) -> None:
        """Other styles are CLDR decimal patterns."""
        assert number_format(1234.5, "en", "#,##0.00") == "1,234.50"
        assert number_format(1234.5, "de", "#,##0.00") == "1.234,50"

    def test_currency_style(self) -> None:
        """currency uses the territory's currency, via likely subtags for bare languages."""
        assert number_format(5, "en", "currency") == "$5.00"
        assert number_format(Decimal("1234.5"), "en-US", "currency") == "$1,234.50"

    @pytest.mark.parametrize("style", ["compact", "scientific", "spellout"])
    def test_style_without_digits_keeps_value(self, style: str) -> None:
        """Styles with no digit placeholders fall back to the default form."""
        assert number_format(5, "en", style) == "5"

    def test_bad_printf_raises_with_fallback(self) -> None:
        """A failing conversion carries the default form as fallback."""
        with pytest.raises(ICUFormattingError) as exc_info:
            number_format(5, "en", "%s %s")
        assert exc_info.value.fallback_value == "5"


class TestDateFormat:
    """date argument styles and patterns."""

    def test_no_style_date(self) -> None:
        """Dates render as ISO 8601."""
        assert date_format(date(2025, 10, 27), "en") == "2025-10-27"

    def test_no_style_datetime(self) -> None:
        """Naive datetimes render as RFC 3339 UTC to the second."""
        assert date_format(datetime(2025, 10, 27, 14, 30, 5, 123), "en") == "2025-10-27T14:30:05Z"

    def test_no_style_aware_datetime(self) -> None:
        """Aware datetimes keep their offset; UTC is written as Z."""
        assert date_format(datetime(2025, 10, 27, 14, 30, tzinfo=UTC), "en") == (
            "2025-10-27T14:30:00Z"
        )
        plus_two = timezone(timedelta(hours=2))
        assert date_format(datetime(2025, 10, 27, 14, 30, tzinfo=plus_two), "en") == (
            "2025-10-27T14:30:00+02:00"
        )

    def test_named_style(self) -> None:
        """short/medium/long/full use CLDR date formats."""
        assert date_format(date(2025, 10, 27), "en", "short") == "10/27/25"
        assert "2025" in date_format(date(2025, 10, 27), "en", "long")

    def test_cldr_pattern_style(self) -> None:
        """Other styles are CLDR datetime patterns."""
        assert date_format(datetime(2025, 10, 27, 9, 5), "en", "yyyy-MM-dd HH:mm") == (
            "2025-10-27 09:05"
        )

    def test_strftime_pattern_wins(self) -> None:
        """A pattern with '%' is an strftime format and overrides the style."""
        assert date_format(date(2025, 10, 27), "en", "short", pattern="%d.%m.%Y") == "27.10.2025"

    def test_cldr_meta_pattern(self) -> None:
        """A pattern without '%' is a CLDR pattern."""
        assert date_format(datetime(2025, 1, 2), "en", pattern="dd/MM/yyyy") == "02/01/2025"
