"""Translator collaborators: catalogs, fallback chains, and negotiation.

Python 3.13+.
"""

from iculexengine.enums import LoadStatus

from .loading import PathResourceLoader, ResourceLoader, ResourceLoadResult, TranslatorBundle
from .negotiation import LanguageRange, parse_accept_language, preferred_tag
from .translator import (
    NULL_TRANSLATOR,
    FunctionTranslator,
    HierarchicalTranslator,
    NullTranslator,
    Translator,
)
from .types import LocaleTag, TemplateSource, TranslationKey

__all__ = [
    "NULL_TRANSLATOR",
    "FunctionTranslator",
    "HierarchicalTranslator",
    "LanguageRange",
    "LoadStatus",
    "LocaleTag",
    "NullTranslator",
    "PathResourceLoader",
    "ResourceLoadResult",
    "ResourceLoader",
    "TemplateSource",
    "TranslationKey",
    "Translator",
    "TranslatorBundle",
    "parse_accept_language",
    "preferred_tag",
]
