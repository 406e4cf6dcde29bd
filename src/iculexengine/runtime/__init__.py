"""ICU message runtime package.

Provides message resolution, built-in formatting, plural rules, and the
MessageFormatter API. Depends on syntax package for parsing.

Python 3.13+.
"""

from .cache import TemplateCache
from .cache_config import CacheConfig
from .evaluation_context import EvaluationContext
from .formatter import MessageFormatter, format_message, parse_template
from .formatter_registry import CustomFormatter, FormatterRegistry, FormatterSignature
from .functions import date_format, number_format
from .plural_rules import (
    PluralRule,
    PluralRuleRegistry,
    cardinal_category,
    create_default_plural_rules,
    ordinal_category,
)
from .resolver import MessageResolver
from .value_types import MessageArgument, MessageValue

__all__ = [
    "CacheConfig",
    "CustomFormatter",
    "EvaluationContext",
    "FormatterRegistry",
    "FormatterSignature",
    "MessageArgument",
    "MessageFormatter",
    "MessageResolver",
    "MessageValue",
    "PluralRule",
    "PluralRuleRegistry",
    "TemplateCache",
    "cardinal_category",
    "create_default_plural_rules",
    "date_format",
    "format_message",
    "number_format",
    "ordinal_category",
    "parse_template",
]
