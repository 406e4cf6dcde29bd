"""ICULexEngine - ICU MessageFormat templates with CLDR-aware plural rules.

Compiles parameterized message templates (placeholders, typed formatters,
plural/selectordinal/select case lists) into immutable ASTs and renders
them with locale-aware formatting.

Public API:
    MessageFormatter - Cached compile + render with (result, errors) tuples
    format_message - One-shot render
    parse_template - Compile template text to a Message AST
    tokenize - Template text to a token tuple
    introspect_message / extract_variables - Parameter introspection
    TranslatorBundle, PathResourceLoader - TOML catalogs per locale tag
    parse_accept_language - Accept-Language negotiation

Exceptions:
    ICUError - Base exception class
    ICUSyntaxError - Template could not be compiled (ICULexError, ICUParseError)
    ICUResourceError - Translation catalog could not be loaded

Submodules:
    iculexengine.syntax.ast - AST node types (Message, Plural, Select, etc.)
    iculexengine.runtime - Resolver, plural rules, formatter registry
    iculexengine.diagnostics - Error types, codes and formatting
    iculexengine.localization - Translators, catalogs and negotiation
"""

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

from .diagnostics import (
    ICUError,
    ICULexError,
    ICUParseError,
    ICUResourceError,
    ICUSyntaxError,
)
from .introspection import extract_variables, introspect_message
from .localization import (
    FunctionTranslator,
    HierarchicalTranslator,
    NullTranslator,
    PathResourceLoader,
    Translator,
    TranslatorBundle,
    parse_accept_language,
)
from .runtime import CacheConfig, MessageFormatter, format_message, parse_template
from .syntax import tokenize

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
try:
    __version__ = _get_version("iculexengine")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "CacheConfig",
    "FunctionTranslator",
    "HierarchicalTranslator",
    "ICUError",
    "ICULexError",
    "ICUParseError",
    "ICUResourceError",
    "ICUSyntaxError",
    "MessageFormatter",
    "NullTranslator",
    "PathResourceLoader",
    "Translator",
    "TranslatorBundle",
    "__version__",
    "extract_variables",
    "format_message",
    "introspect_message",
    "parse_accept_language",
    "parse_template",
    "tokenize",
]
