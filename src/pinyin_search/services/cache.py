"""Search result caching for PinyinIndex.

Launcher-style search boxes re-issue the same prefixes on every
keystroke, so recent result lists are kept in an in-process LRU cache.
The index clears the cache whenever its entries change.
"""

from __future__ import annotations

import logging
import threading
import time
from collections import OrderedDict
from typing import Any

logger = logging.getLogger("pinyin_search.cache")


class MemoryCache:
    """In-process LRU cache with TTL expiration.

    Items are evicted when:
    - The cache exceeds max_size (least recently used item is evicted).
    - An item's TTL has expired (checked on access).

    A lock guards the ordering updates so concurrent searches may share
    one instance.
    """

    def __init__(self, max_size: int = 128, ttl_seconds: int = 300):
        self._max_size = max_size
        self._ttl = ttl_seconds
        self._cache: OrderedDict[Any, tuple[float, Any]] = OrderedDict()
        self._lock = threading.Lock()

    def get(self, key: Any) -> Any | None:
        with self._lock:
            if key not in self._cache:
                return None

            timestamp, value = self._cache[key]
            if time.monotonic() - timestamp > self._ttl:
                del self._cache[key]
                return None

            self._cache.move_to_end(key)
            return value

    def put(self, key: Any, value: Any) -> None:
        with self._lock:
            if key in self._cache:
                self._cache.move_to_end(key)
            self._cache[key] = (time.monotonic(), value)

            while len(self._cache) > self._max_size:
                self._cache.popitem(last=False)

    def clear(self) -> None:
        with self._lock:
            self._cache.clear()

    def size(self) -> int:
        return len(self._cache)


class SearchCache:
    """Caches ranked result lists by normalised query and limit."""

    def __init__(self, max_size: int = 128, ttl_seconds: int = 300, enabled: bool = True):
        self.enabled = enabled
        self._results = MemoryCache(max_size=max_size, ttl_seconds=ttl_seconds)

    @staticmethod
    def _make_key(words: tuple[str, ...], limit: int | None) -> tuple:
        return (words, limit)

    def get(self, words: tuple[str, ...], limit: int | None = None) -> list | None:
        """Get cached search results."""
        if not self.enabled:
            return None
        result = self._results.get(self._make_key(words, limit))
        if result is not None:
            logger.debug("Cache hit for query: %s", " ".join(words)[:50])
            return list(result)
        return None

    def put(self, words: tuple[str, ...], limit: int | None, value: list) -> None:
        """Cache search results."""
        if not self.enabled:
            return
        self._results.put(self._make_key(words, limit), tuple(value))

    def clear(self) -> None:
        """Drop every cached result. Call after the index changes."""
        self._results.clear()
        logger.debug("Search cache cleared")

    @property
    def stats(self) -> dict:
        """Return cache statistics."""
        return {
            "enabled": self.enabled,
            "result_cache_size": self._results.size(),
        }
