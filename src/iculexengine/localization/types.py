"""Type aliases for the localization domain.

Python 3.13+. Zero external dependencies.
"""

__all__ = [
    "LocaleTag",
    "TemplateSource",
    "TranslationKey",
]

type TranslationKey = str
"""Key of a translation in a catalog (e.g., 'greeting', 'cart.items')."""

type LocaleTag = str
"""BCP-47 locale tag, also the catalog file stem (e.g., 'en', 'de-CH')."""

type TemplateSource = str
"""Raw ICU message template text."""
