"""Thread-safe LRU cache for compiled templates.

Compiling a template is the expensive part of a render; the cache maps
template text to its parse outcome so repeated renders skip tokenizing
and parsing.

Architecture:
    - Thread-safe using threading.RLock (reentrant lock)
    - LRU eviction via OrderedDict
    - Keyed by the template text alone (ASTs do not depend on locale or
      parameters)
    - Stores either the compiled Message or the ICUSyntaxError it raised

Thread Safety:
    All operations protected by RLock. Cached Message objects are
    immutable and shared between renders.

Python 3.13+.
"""

from collections import OrderedDict
from threading import RLock

from iculexengine.diagnostics import ICUSyntaxError
from iculexengine.syntax import Message

__all__ = ["TemplateCache"]

# Internal type alias for cache values (prefixed with _ per naming convention)
type _CacheValue = Message | ICUSyntaxError


class TemplateCache:
    """Thread-safe LRU cache of template text -> parse outcome.

    Transparent to caller - returns None on cache miss.

    Attributes:
        maxsize: Maximum number of cache entries
        hits: Number of cache hits (for metrics)
        misses: Number of cache misses (for metrics)

    Example:
        >>> cache = TemplateCache(maxsize=2)
        >>> cache.get("Hi {name}") is None
        True
        >>> cache.put("Hi {name}", Message())
        >>> cache.get("Hi {name}")
        Message(elements=())
    """

    __slots__ = ("_cache", "_hits", "_lock", "_maxsize", "_misses")

    def __init__(self, maxsize: int = 1000) -> None:
        """Initialize template cache.

        Args:
            maxsize: Maximum number of entries (default: 1000)
        """
        if maxsize <= 0:
            msg = "maxsize must be positive"
            raise ValueError(msg)

        self._cache: OrderedDict[str, _CacheValue] = OrderedDict()
        self._maxsize = maxsize
        self._lock = RLock()
        self._hits = 0
        self._misses = 0

    def get(self, template: str) -> _CacheValue | None:
        """Get the cached parse outcome for template, or None on a miss."""
        with self._lock:
            if template in self._cache:
                self._cache.move_to_end(template)
                self._hits += 1
                return self._cache[template]

            self._misses += 1
            return None

    def put(self, template: str, outcome: _CacheValue) -> None:
        """Store a parse outcome. Evicts the LRU entry if the cache is full."""
        with self._lock:
            if template in self._cache:
                self._cache.move_to_end(template)
            elif len(self._cache) >= self._maxsize:
                self._cache.popitem(last=False)

            self._cache[template] = outcome

    def clear(self) -> None:
        """Clear all cached entries and reset metrics."""
        with self._lock:
            self._cache.clear()
            self._hits = 0
            self._misses = 0

    def get_stats(self) -> dict[str, int | float]:
        """Get cache statistics.

        Returns:
            Dict with keys:
            - size (int): Current number of cached entries
            - maxsize (int): Maximum cache capacity
            - hits (int): Number of cache hits
            - misses (int): Number of cache misses
            - hit_rate (float): Hit rate as percentage (0.0-100.0)
        """
        with self._lock:
            total = self._hits + self._misses
            hit_rate = (self._hits / total * 100) if total > 0 else 0.0

            return {
                "size": len(self._cache),
                "maxsize": self._maxsize,
                "hits": self._hits,
                "misses": self._misses,
                "hit_rate": round(hit_rate, 2),
            }

    def __len__(self) -> int:
        with self._lock:
            return len(self._cache)

    @property
    def maxsize(self) -> int:
        """Maximum cache size."""
        return self._maxsize

    @property
    def hits(self) -> int:
        """Number of cache hits."""
        with self._lock:
            return self._hits

    @property
    def misses(self) -> int:
        """Number of cache misses."""
        with self._lock:
            return self._misses
