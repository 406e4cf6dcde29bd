"""Tests for MessageFormatter, format_message and parse_template."""

import logging
import threading
import traceback
from datetime import date

import pytest

from iculexengine import (
    CacheConfig,
    ICULexError,
    ICUParseError,
    MessageFormatter,
    format_message,
    parse_template,
)
from iculexengine.runtime import FormatterRegistry, create_default_plural_rules
from iculexengine.syntax import Placeholder, Text


class TestConstruction:
    """Constructor validation and properties."""

    def test_defaults(self) -> None:
        """A default formatter renders English with caching on."""
        formatter = MessageFormatter()
        assert formatter.locale == "en"
        assert formatter.cache_enabled
        assert len(formatter.formatters) == 0

    @pytest.mark.parametrize("locale", ["", "   "])
    def test_empty_locale_rejected(self, locale: str) -> None:
        """An empty locale is a configuration error."""
        with pytest.raises(ValueError, match="locale"):
            MessageFormatter(locale)

    def test_repr(self) -> None:
        """repr shows locale and formatter count."""
        assert repr(MessageFormatter("de")) == "MessageFormatter(locale='de', formatters=0)"

    def test_formatters_are_copied(self) -> None:
        """Registering on the caller's registry later has no effect."""
        registry = FormatterRegistry()
        formatter = MessageFormatter(formatters=registry)
        registry.register(lambda v, loc, args: "x", name="late")
        assert "late" not in formatter.formatters

    def test_invalid_cache_size(self) -> None:
        """CacheConfig rejects non-positive sizes."""
        with pytest.raises(ValueError, match="size must be positive"):
            CacheConfig(size=0)


class TestFormat:
    """format() returns (text, errors) and never raises on bad templates."""

    def test_success(self) -> None:
        """Well-formed templates render with no errors."""
        formatter = MessageFormatter("en")
        assert formatter.format("Hello {name}!", {"name": "Bob"}) == ("Hello Bob!", ())

    def test_lex_error(self) -> None:
        """Malformed braces yield ('', (ICULexError,))."""
        text, errors = MessageFormatter().format("Hello {name")
        assert text == ""
        assert len(errors) == 1
        assert isinstance(errors[0], ICULexError)

    def test_parse_error(self) -> None:
        """Grammar violations yield ('', (ICUParseError,))."""
        text, errors = MessageFormatter().format("{n, plural, one {a} one {b}}")
        assert text == ""
        assert isinstance(errors[0], ICUParseError)

    def test_error_is_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        """Malformed templates are logged as warnings."""
        with caplog.at_level(logging.WARNING, logger="iculexengine.runtime.formatter"):
            MessageFormatter().format("oops}")
        assert any("Malformed template" in record.message for record in caplog.records)

    def test_locale_override(self) -> None:
        """locale= changes plural rules for one render."""
        formatter = MessageFormatter("en")
        template = "{n, plural, one {one} other {other}}"
        assert formatter.format(template, {"n": 1})[0] == "one"
        assert formatter.format(template, {"n": 1}, locale="zh")[0] == "other"

    def test_size_limit_propagates(self) -> None:
        """Exceeding max_source_size is a caller error, not a template error."""
        formatter = MessageFormatter(max_source_size=5)
        with pytest.raises(ValueError, match="exceeds maximum"):
            formatter.format("too long template")

    def test_render_compiled(self) -> None:
        """render() reuses a compiled message."""
        formatter = MessageFormatter("en")
        message = formatter.parse("{d, date}")
        assert formatter.render(message, {"d": date(2024, 2, 29)}) == "2024-02-29"
        assert formatter.render(message) == ""


class TestExtension:
    """Custom formatters and plural rules per formatter."""

    def test_add_formatter(self) -> None:
        """add_formatter() makes a name available to templates."""
        formatter = MessageFormatter("en")
        formatter.add_formatter("upper", lambda value, locale, args: str(value).upper())
        assert formatter.format("{name, upper}", {"name": "ada"}) == ("ADA", ())

    def test_register_plural_rule(self) -> None:
        """Plural rules registered on one formatter stay local to it."""
        formatter = MessageFormatter("en")
        formatter.register_plural_rule("en", cardinal=lambda n: "few")
        template = "{n, plural, few {few} other {other}}"
        assert formatter.format(template, {"n": 1})[0] == "few"
        assert MessageFormatter("en").format(template, {"n": 1})[0] == "other"

    def test_shared_plural_rules(self) -> None:
        """A supplied registry is used as-is."""
        rules = create_default_plural_rules()
        formatter = MessageFormatter("en", plural_rules=rules)
        assert formatter.plural_rules is rules


class TestCaching:
    """Compiled template cache."""

    def test_hits_and_misses(self) -> None:
        """Repeated templates are served from the cache."""
        formatter = MessageFormatter("en")
        formatter.format("Hi {name}", {"name": "a"})
        formatter.format("Hi {name}", {"name": "b"})
        stats = formatter.get_cache_stats()
        assert stats is not None
        assert stats["hits"] == 1
        assert stats["misses"] == 1
        assert stats["size"] == 1
        assert stats["hit_rate"] == 50.0

    def test_parse_returns_same_object(self) -> None:
        """Cached ASTs are shared."""
        formatter = MessageFormatter("en")
        assert formatter.parse("{a}") is formatter.parse("{a}")

    def test_errors_cached(self) -> None:
        """Syntax errors are cached by default."""
        formatter = MessageFormatter("en")
        first = formatter.format("{oops")[1][0]
        second = formatter.format("{oops")[1][0]
        assert type(first) is type(second)
        assert str(first) == str(second)
        assert first.diagnostic == second.diagnostic
        stats = formatter.get_cache_stats()
        assert stats is not None
        assert stats["hits"] == 1

    def test_cached_error_is_fresh_per_call(self) -> None:
        """Each cache hit raises a new error whose traceback does not grow."""
        formatter = MessageFormatter("en")
        formatter.format("{oops")
        errors = [formatter.format("{oops")[1][0] for _ in range(50)]
        assert len({id(error) for error in errors}) == len(errors)
        depths = {len(traceback.extract_tb(error.__traceback__)) for error in errors}
        assert len(depths) == 1
        assert depths.pop() <= 3

    def test_concurrent_formats_share_compiled_message(self) -> None:
        """Threads rendering one cached template keep their own offsets."""
        formatter = MessageFormatter("en")
        template = "{n, plural, offset:1 other {# more}} ({n})"
        failures: list[tuple[int, str]] = []

        def worker(n: int) -> None:
            for _ in range(100):
                text, _ = formatter.format(template, {"n": n})
                if text != f"{n - 1} more ({n - 1})":
                    failures.append((n, text))

        threads = [threading.Thread(target=worker, args=(n,)) for n in range(1, 9)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert failures == []
        stats = formatter.get_cache_stats()
        assert stats is not None
        assert stats["size"] == 1

    def test_errors_not_cached(self) -> None:
        """cache_errors=False re-parses malformed templates."""
        formatter = MessageFormatter("en", cache=CacheConfig(cache_errors=False))
        formatter.format("{oops")
        formatter.format("{oops")
        stats = formatter.get_cache_stats()
        assert stats is not None
        assert stats["size"] == 0
        assert stats["hits"] == 0

    def test_cache_disabled(self) -> None:
        """cache=None disables caching."""
        formatter = MessageFormatter("en", cache=None)
        assert not formatter.cache_enabled
        assert formatter.get_cache_stats() is None
        assert formatter.parse("{a}") is not formatter.parse("{a}")
        formatter.clear_cache()

    def test_lru_eviction(self) -> None:
        """The least recently used template is evicted first."""
        formatter = MessageFormatter("en", cache=CacheConfig(size=2))
        formatter.parse("a")
        formatter.parse("b")
        formatter.parse("a")
        formatter.parse("c")
        stats = formatter.get_cache_stats()
        assert stats is not None
        assert stats["size"] == 2
        formatter.parse("a")
        assert formatter.get_cache_stats()["hits"] == 2  # type: ignore[index]

    def test_clear_cache(self) -> None:
        """clear_cache() drops entries and resets statistics."""
        formatter = MessageFormatter("en")
        formatter.parse("x")
        formatter.clear_cache()
        assert formatter.get_cache_stats() == {
            "size": 0,
            "maxsize": 1000,
            "hits": 0,
            "misses": 0,
            "hit_rate": 0.0,
        }


class TestModuleFunctions:
    """One-shot helpers."""

    def test_format_message(self) -> None:
        """format_message() renders once."""
        assert format_message("Hello {name}!", {"name": "Bob"}) == ("Hello Bob!", ())

    def test_format_message_locale(self) -> None:
        """format_message() honors the locale argument."""
        assert format_message("{n, number, integer}", {"n": 1234}, "de") == ("1.234", ())
        assert format_message("{n, number, integer}", {"n": 1234}) == ("1,234", ())

    def test_format_message_error(self) -> None:
        """format_message() reports syntax errors."""
        text, errors = format_message("{")
        assert text == ""
        assert isinstance(errors[0], ICULexError)

    def test_parse_template(self) -> None:
        """parse_template() compiles and raises on errors."""
        assert parse_template("Hi {x}").elements == (Text("Hi "), Placeholder("x"))
        with pytest.raises(ICUParseError):
            parse_template("{x, plural}")
