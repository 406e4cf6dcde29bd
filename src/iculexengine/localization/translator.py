"""Translators: key -> rendered text.

A translator is the capability applications consume: give it a key and
parameters, get back text. Translators never raise and never return
nothing; the raw key is the answer of last resort.

Components:
    Translator - Protocol (structural typing)
    FunctionTranslator - Adapts a plain callable
    NullTranslator - Returns the key unchanged
    HierarchicalTranslator - Catalog for one tag chained to a base translator

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Protocol

from iculexengine.localization.types import LocaleTag, TemplateSource, TranslationKey
from iculexengine.runtime import MessageFormatter

__all__ = [
    "NULL_TRANSLATOR",
    "FunctionTranslator",
    "HierarchicalTranslator",
    "NullTranslator",
    "Translator",
]

logger = logging.getLogger(__name__)


class Translator(Protocol):
    """Protocol for anything that turns a key and parameters into text.

    Example:
        >>> class Shouting:
        ...     def translate(self, key, params=None):
        ...         return key.upper()
        ...
        >>> Shouting().translate("hello")
        'HELLO'
    """

    def translate(self, key: TranslationKey, params: Mapping[str, object] | None = None) -> str:
        """Render the translation for key, or return key itself."""
        ...  # pragma: no cover  # Protocol stub - not executable


@dataclass(frozen=True, slots=True)
class FunctionTranslator:
    """Translator backed by a callable ``func(key, params) -> str``.

    Example:
        >>> FunctionTranslator(lambda key, params: f"<{key}>").translate("title")
        '<title>'
    """

    func: Callable[[TranslationKey, Mapping[str, object] | None], str]

    def translate(self, key: TranslationKey, params: Mapping[str, object] | None = None) -> str:
        """Delegate to the wrapped callable."""
        return self.func(key, params)


class NullTranslator:
    """Translator that returns every key unchanged."""

    __slots__ = ()

    def translate(self, key: TranslationKey, params: Mapping[str, object] | None = None) -> str:  # noqa: ARG002
        """Return key."""
        return key

    def __repr__(self) -> str:
        return "NullTranslator()"


NULL_TRANSLATOR = NullTranslator()


class HierarchicalTranslator:
    """Catalog of templates for one locale tag, chained to a base translator.

    translate() renders the template stored under the key with the tag as
    locale. If the key is missing, or its template is malformed, the base
    translator is asked instead; without a base the key itself is returned.

    Example:
        >>> en = HierarchicalTranslator("en", {"hi": "Hello {name}", "bye": "Bye"})
        >>> en_gb = HierarchicalTranslator("en-GB", {"hi": "Hiya {name}"}, base=en)
        >>> en_gb.translate("hi", {"name": "Ann"})
        'Hiya Ann'
        >>> en_gb.translate("bye")
        'Bye'
        >>> en_gb.translate("missing")
        'missing'
    """

    __slots__ = ("_base", "_formatter", "_tag", "_translations")

    def __init__(
        self,
        tag: LocaleTag,
        translations: Mapping[TranslationKey, TemplateSource],
        base: Translator | None = None,
        *,
        formatter: MessageFormatter | None = None,
    ) -> None:
        """Initialize translator.

        Args:
            tag: Locale tag used for rendering this catalog's templates
            translations: Key -> template mapping (copied)
            base: Translator consulted for keys this catalog cannot render
            formatter: Formatter used to compile and render templates
                (default: a new formatter for tag)
        """
        self._tag = tag
        self._translations = MappingProxyType(dict(translations))
        self._base = base
        self._formatter = formatter if formatter is not None else MessageFormatter(tag)

    @property
    def tag(self) -> LocaleTag:
        """Locale tag of this catalog."""
        return self._tag

    @property
    def base(self) -> Translator | None:
        """Next translator toward the root, if any."""
        return self._base

    @property
    def is_root(self) -> bool:
        """True when no base translator is chained."""
        return self._base is None

    @property
    def translations(self) -> Mapping[TranslationKey, TemplateSource]:
        """Read-only view of this catalog's templates."""
        return self._translations

    def translate(self, key: TranslationKey, params: Mapping[str, object] | None = None) -> str:
        """Render key from this catalog or the first base that can."""
        template = self._translations.get(key)
        if template is not None:
            text, errors = self._formatter.format(template, params, locale=self._tag)
            if not errors:
                return text
            logger.warning(
                "Translation '%s' for '%s' is malformed: %s", key, self._tag, errors[0]
            )
        if self._base is not None:
            return self._base.translate(key, params)
        return key

    def __repr__(self) -> str:
        return (
            f"HierarchicalTranslator(tag={self._tag!r}, "
            f"translations={len(self._translations)}, root={self.is_root})"
        )
