"""Core value types for the message runtime.

Defines the tagged value variant bound in evaluation contexts:
    - MessageArgument: Python values accepted as template parameters
    - MessageValue: Immutable (kind, raw) pair that formatters match on

Formatters never assume a Python type: they match on ValueKind and treat
any mismatch as "nothing to render".

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Final

from iculexengine.enums import ValueKind

__all__ = [
    "MessageArgument",
    "MessageValue",
]

# Type alias for values callers pass as template parameters.
# Any other object is accepted as well and tagged OPAQUE.
type MessageArgument = str | int | float | bool | Decimal | datetime | date | None

_NUMERIC_KINDS: Final = frozenset({ValueKind.INTEGER, ValueKind.FLOAT})


def _classify(value: object) -> ValueKind:
    """Tag a Python value. bool is checked before int (bool subclasses int)."""
    match value:
        case bool():
            return ValueKind.BOOLEAN
        case int():
            return ValueKind.INTEGER
        case float() | Decimal():
            return ValueKind.FLOAT
        case str():
            return ValueKind.STRING
        case date():
            return ValueKind.TIMESTAMP
        case _:
            return ValueKind.OPAQUE


@dataclass(frozen=True, slots=True)
class MessageValue:
    """Parameter value tagged with its kind.

    Attributes:
        kind: Value tag
        raw: Original Python value

    Example:
        >>> MessageValue.of(True).display()
        'true'
        >>> MessageValue.of(3).kind
        <ValueKind.INTEGER: 'integer'>
        >>> MessageValue.of(2.0).integer_value()
        2
    """

    kind: ValueKind
    raw: object

    @classmethod
    def of(cls, value: object) -> MessageValue:
        """Wrap a Python value, tagging it by type."""
        if isinstance(value, MessageValue):
            return value
        return cls(_classify(value), value)

    @property
    def is_numeric(self) -> bool:
        """True for INTEGER and FLOAT values."""
        return self.kind in _NUMERIC_KINDS

    def display(self) -> str:
        """Default string form used by placeholders, '#', and select.

        Booleans render lowercase (true/false), timestamps as ISO 8601.
        """
        match self.kind:
            case ValueKind.STRING:
                return str(self.raw)
            case ValueKind.BOOLEAN:
                return "true" if self.raw else "false"
            case ValueKind.TIMESTAMP:
                return self.raw.isoformat()  # type: ignore[attr-defined]
            case _:
                return str(self.raw)

    def numeric_value(self) -> int | float | Decimal | None:
        """Numeric payload, or None for non-numeric kinds."""
        if self.is_numeric:
            return self.raw  # type: ignore[return-value]
        return None

    def integer_value(self) -> int | None:
        """Integer payload for plural selection.

        Integral floats and Decimals are accepted (2.0 -> 2); anything else,
        including non-finite floats, yields None.
        """
        match self.raw:
            case bool():
                return None
            case int():
                return self.raw
            case float() if math.isfinite(self.raw) and self.raw.is_integer():
                return int(self.raw)
            case Decimal() if self.raw.is_finite() and self.raw == self.raw.to_integral_value():
                return int(self.raw)
            case _:
                return None

    def timestamp_value(self) -> datetime | date | None:
        """datetime/date payload, or None for other kinds."""
        if self.kind is ValueKind.TIMESTAMP:
            return self.raw  # type: ignore[return-value]
        return None
