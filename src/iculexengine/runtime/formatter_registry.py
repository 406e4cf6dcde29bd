"""Registry of application-defined argument formatters.

Custom formatters are the extension point for argument kinds the engine
does not format itself:

    {price, currency, EUR}      -> registry["currency"](value, locale, ("EUR",))
    {elapsed, duration}         -> registry["duration"](value, locale, ())

Registering a built-in kind name (number, date, time, ordinal, duration,
spellout) overrides the built-in formatting for that kind; the style text,
if any, is passed as the single argument.

Architecture:
    - FormatterRegistry: Manages formatter registration and calling
    - FormatterSignature: Immutable formatter metadata
    - Formatter failures surface as ICUFormattingError, which the resolver
      turns into an empty argument

Python 3.13+. Zero external dependencies.
"""

from collections.abc import Callable, Iterator
from dataclasses import dataclass
from typing import Protocol

from iculexengine.diagnostics import ErrorTemplate, ICUFormattingError

__all__ = ["CustomFormatter", "FormatterRegistry", "FormatterSignature"]


class CustomFormatter(Protocol):
    """Protocol for argument formatters.

    Formatters receive:
    - value: The bound parameter value (positional)
    - locale_code: The POSIX locale code of the render (positional)
    - args: Comma-separated argument parts after the formatter name

    And return the rendered text.
    """

    def __call__(
        self,
        value: object,
        locale_code: str,
        args: tuple[str, ...],
        /,
    ) -> str:
        ...  # pragma: no cover  # Protocol stub - not executable


@dataclass(frozen=True, slots=True)
class FormatterSignature:
    """Formatter metadata.

    Attributes:
        name: Formatter name as written in templates
        python_name: Name of the Python callable
        callable: The formatter itself
    """

    name: str
    python_name: str
    callable: CustomFormatter


class FormatterRegistry:
    """Manages application-defined formatters keyed by template name.

    Supports dict-like introspection:
        - list_formatters(): List all registered formatter names
        - get_formatter_info(name): Get formatter metadata
        - __iter__, __len__, __contains__

    Example:
        >>> registry = FormatterRegistry()
        >>> registry.register(lambda v, loc, args: f"{v} {args[0]}", name="currency")
        >>> "currency" in registry
        True
        >>> registry.call("currency", 5, "en", ("EUR",))
        '5 EUR'
    """

    __slots__ = ("_formatters",)

    def __init__(self) -> None:
        """Initialize empty formatter registry."""
        self._formatters: dict[str, FormatterSignature] = {}

    def register(self, func: CustomFormatter, *, name: str | None = None) -> None:
        """Register a formatter.

        Args:
            func: Formatter callable
            name: Name used in templates (default: func.__name__ lowercased)

        Raises:
            ValueError: If name is empty or contains syntax characters
        """
        python_name = getattr(func, "__name__", "unknown")
        if name is None:
            name = python_name.lower()
        if not name or any(ch in name for ch in "{},") or name != name.strip():
            msg = f"Invalid formatter name: {name!r}"
            raise ValueError(msg)

        self._formatters[name] = FormatterSignature(
            name=name,
            python_name=python_name,
            callable=func,
        )

    def call(self, name: str, value: object, locale_code: str, args: tuple[str, ...]) -> str:
        """Call a registered formatter.

        Only TypeError, ValueError and ArithmeticError are converted: they
        indicate a value the formatter cannot handle. Other exceptions are
        bugs in the formatter and propagate.

        Returns:
            Rendered text (non-str results are converted with str())

        Raises:
            KeyError: If no formatter is registered under name
            ICUFormattingError: If the formatter rejects the value
        """
        func_sig = self._formatters[name]
        try:
            return str(func_sig.callable(value, locale_code, args))
        except (TypeError, ValueError, ArithmeticError) as e:
            diagnostic = ErrorTemplate.formatting_failed(name, value, str(e))
            raise ICUFormattingError(diagnostic, fallback_value="") from e

    def list_formatters(self) -> list[str]:
        """List all registered formatter names."""
        return list(self._formatters.keys())

    def get_formatter_info(self, name: str) -> FormatterSignature | None:
        """Get formatter metadata by name, or None if not registered."""
        return self._formatters.get(name)

    def get_callable(self, name: str) -> Callable[..., str] | None:
        """Get the underlying callable for a registered formatter."""
        sig = self._formatters.get(name)
        return sig.callable if sig else None

    def __iter__(self) -> Iterator[str]:
        return iter(self._formatters)

    def __len__(self) -> int:
        return len(self._formatters)

    def __contains__(self, name: object) -> bool:
        return name in self._formatters

    def __repr__(self) -> str:
        """Return string representation for debugging.

        Example:
            >>> repr(FormatterRegistry())
            'FormatterRegistry(formatters=0)'
        """
        return f"FormatterRegistry(formatters={len(self._formatters)})"

    def copy(self) -> "FormatterRegistry":
        """Create a shallow copy of this registry.

        The FormatterSignature objects are shared, but registering on the
        copy does not affect the original.
        """
        new_registry = FormatterRegistry()
        new_registry._formatters = self._formatters.copy()
        return new_registry
