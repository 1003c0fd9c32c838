"""A small in-memory cache with per-entry expiry."""

from __future__ import annotations

from typing import Any, Hashable

from cachetools import TTLCache


class CacheService:
    """Stores values for a limited time."""

    def __init__(self, maxsize: int = 1024, ttl: float = 600.0) -> None:
        self._cache: TTLCache = TTLCache(maxsize=maxsize, ttl=ttl)

    def store(self, key: Hashable, value: Any) -> None:
        self._cache[key] = value

    def get(self, key: Hashable) -> Any:
        """Return the cached value, or None when absent or expired."""
        return self._cache.get(key)