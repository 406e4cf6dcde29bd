"""Shared constants for ICULexEngine.

This module provides centralized configuration constants used across
syntax, runtime, and localization packages. Placing constants here avoids
circular imports and provides a single source of truth.

Constants are grouped by domain:
- Depth limits: Recursion protection for parsing and rendering
- Cache limits: Memory bounds for caching subsystems
- Input limits: DoS prevention via size constraints
- Parameter conventions: Reserved names in evaluation contexts

Python 3.13+. Zero external dependencies.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Depth limits
    "MAX_DEPTH",
    # Cache limits
    "DEFAULT_CACHE_SIZE",
    "MAX_LOCALE_CACHE_SIZE",
    # Input limits
    "MAX_SOURCE_SIZE",
    # Parameter conventions
    "META_PREFIX",
    "DATE_FORMAT_PARAMETER",
    # Locale defaults
    "DEFAULT_LOCALE",
    # Fallback strings
    "FALLBACK_HASH",
]

# ============================================================================
# DEPTH LIMITS
# ============================================================================

# Unified maximum depth for recursion protection.
# Used by: parser (argument nesting) and resolver (case body rendering).
# Every nested plural/select case body adds two brace levels; 100 levels of
# argument nesting is malformed input for any real translation catalog.
MAX_DEPTH: int = 100

# ============================================================================
# CACHE LIMITS
# ============================================================================

# Default maximum cached parse outcomes per MessageFormatter.
# 1000 entries is sufficient for most applications (typical UI has <500 messages).
DEFAULT_CACHE_SIZE: int = 1000

# Maximum cached Babel Locale instances.
MAX_LOCALE_CACHE_SIZE: int = 128

# ============================================================================
# INPUT LIMITS
# ============================================================================

# Default maximum template size in characters (10 MB).
MAX_SOURCE_SIZE: int = 10 * 1024 * 1024

# ============================================================================
# PARAMETER CONVENTIONS
# ============================================================================

# Parameters whose name starts with this prefix configure the engine
# instead of carrying message data. They never count towards the
# single-value rule of '#'.
META_PREFIX: str = "$"

# Meta-parameter holding the date pattern used by {x, date} arguments.
DATE_FORMAT_PARAMETER: str = "$date-format"

# ============================================================================
# LOCALE DEFAULTS
# ============================================================================

DEFAULT_LOCALE: str = "en"

# ============================================================================
# FALLBACK STRINGS
# ============================================================================

# Rendered by '#' when it cannot be attributed to exactly one value.
FALLBACK_HASH: str = "#"
