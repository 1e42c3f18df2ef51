"""In-memory cache backend implementation."""

import math
import time
from collections.abc import Callable
from datetime import timedelta

from cachetools import TLRUCache  # type: ignore[import-untyped]

from cinecache.core.entities.cache_entry import CacheEntry


def _entry_expiry(_key: str, entry: CacheEntry, _now: float) -> float:
    expires_at = entry.expires_at
    return math.inf if expires_at is None else expires_at


class InMemoryCacheBackend:
    """In-memory cache backend using LRU with per-entry TTL.

    Suitable for single-process deployments. Uses cachetools'
    TLRUCache so every entry expires on its own TTL; expired entries
    read as a miss and are evicted on the next read or write.
    """

    def __init__(
        self,
        maxsize: int = 1000,
        default_ttl: float = 3600.0,
        timer: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize the in-memory cache backend.

        Args:
            maxsize: Maximum number of items in the cache.
            default_ttl: Default TTL in seconds for items stored without one.
            timer: Clock returning seconds; injectable for tests.
        """
        self._maxsize = maxsize
        self._default_ttl = timedelta(seconds=default_ttl)
        self._timer = timer
        self._cache: TLRUCache[str, CacheEntry] = TLRUCache(
            maxsize=maxsize,
            ttu=_entry_expiry,
            timer=timer,
        )

    async def get(self, key: str) -> bytes | None:
        """Retrieve cached value by key.

        Args:
            key: The cache key to retrieve.

        Returns:
            The cached value as bytes, or None if not found or expired.
        """
        entry = self._cache.get(key)
        if entry is None or entry.is_expired(self._timer()):
            return None
        return entry.value

    async def set(
        self,
        key: str,
        value: bytes,
        ttl: timedelta | None = None,
    ) -> None:
        """Store value with optional TTL.

        Args:
            key: The cache key.
            value: The value to store as bytes.
            ttl: Optional time-to-live. If None, uses default.
        """
        entry = CacheEntry.create(
            key=key,
            value=value,
            now=self._timer(),
            ttl=ttl or self._default_ttl,
        )
        self._cache[key] = entry

    async def exists(self, key: str) -> bool:
        """Check if key exists in cache.

        Args:
            key: The cache key to check.

        Returns:
            True if the key exists, False otherwise.
        """
        return await self.get(key) is not None

    async def clear(self) -> None:
        """Clear all cached values."""
        self._cache.clear()

    def __len__(self) -> int:
        """Return the number of items in the cache."""
        return len(self._cache)

    @property
    def maxsize(self) -> int:
        """Return the maximum size of the cache."""
        return self._maxsize
