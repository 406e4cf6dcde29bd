"""Evaluation context for rendering one message.

Binds a locale and typed parameter values for a single top-level render.
The only mutation allowed during rendering is the offset rebinding done by
plural and selectordinal arguments: once a case is chosen, the argument is
bound to n - offset for the remainder of the render.

Thread Safety:
    EvaluationContext is created per render call for full isolation and is
    never shared between threads. The compiled AST it is rendered against
    is shared freely.

Python 3.13+.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field

from iculexengine.constants import META_PREFIX
from iculexengine.locale_utils import base_language, normalize_locale
from iculexengine.runtime.value_types import MessageValue

__all__ = ["EvaluationContext", "is_meta_parameter"]


def is_meta_parameter(name: str) -> bool:
    """Check whether a parameter name is reserved for engine configuration."""
    return name.startswith(META_PREFIX)


@dataclass(slots=True)
class EvaluationContext:
    """Explicit per-render state.

    Instance Lifecycle:
        Each render creates a fresh EvaluationContext via create(); the
        values dict is private to it.

    Attributes:
        language: Base language subtag used for plural rules (en for en-US)
        locale_code: Full POSIX locale code used for Babel formatting (en_US)
        values: Parameter name -> tagged value (unbound names are absent)
    """

    language: str
    locale_code: str
    values: dict[str, MessageValue] = field(default_factory=dict)

    @classmethod
    def create(
        cls, locale: str, params: Mapping[str, object] | None = None
    ) -> EvaluationContext:
        """Create a context for one render.

        None parameter values are treated as unbound.

        Example:
            >>> ctx = EvaluationContext.create("en-US", {"n": 3, "gone": None})
            >>> ctx.language, sorted(ctx.values)
            ('en', ['n'])
        """
        values = {
            name: MessageValue.of(value)
            for name, value in (params or {}).items()
            if value is not None
        }
        return cls(
            language=base_language(locale),
            locale_code=normalize_locale(locale),
            values=values,
        )

    def lookup(self, key: str) -> MessageValue | None:
        """Bound value for key, or None when unbound."""
        return self.values.get(key)

    def single_value(self) -> MessageValue | None:
        """The only bound non-meta value, or None if there are zero or several."""
        found: MessageValue | None = None
        for name, value in self.values.items():
            if is_meta_parameter(name):
                continue
            if found is not None:
                return None
            found = value
        return found

    def rebind(self, key: str, value: MessageValue) -> None:
        """Bind key to value for the rest of this render."""
        self.values[key] = value
