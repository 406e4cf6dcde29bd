"""Cache configuration for MessageFormatter.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from dataclasses import dataclass

from iculexengine.constants import DEFAULT_CACHE_SIZE

__all__ = ["CacheConfig"]


@dataclass(frozen=True, slots=True)
class CacheConfig:
    """Immutable configuration for compiled-template caching.

    Constructing ``CacheConfig()`` with no arguments produces a usable
    configuration. Pass ``cache=None`` to MessageFormatter to disable
    caching entirely.

    Attributes:
        size: Maximum number of distinct template texts kept (default: 1000).
        cache_errors: Also cache syntax errors, so a malformed template is
            reported without re-parsing it (default: True).

    Example:
        >>> from iculexengine import MessageFormatter
        >>> formatter = MessageFormatter(cache=CacheConfig(size=500))
        >>> formatter.get_cache_stats()["maxsize"]
        500
    """

    size: int = DEFAULT_CACHE_SIZE
    cache_errors: bool = True

    def __post_init__(self) -> None:
        """Validate configuration values at construction time.

        Raises:
            ValueError: If size is not positive.
        """
        if self.size <= 0:
            msg = "size must be positive"
            raise ValueError(msg)
