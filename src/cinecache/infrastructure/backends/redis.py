"""Redis cache backend implementation."""

from datetime import timedelta

import redis.asyncio as redis
from redis.exceptions import RedisError

from cinecache.core.exceptions import CacheBackendError


class RedisCacheBackend:
    """Redis cache backend for distributed deployments.

    Every entry is written with SETEX so Redis expires it on its own
    TTL. Connection and command errors are raised as CacheBackendError.
    """

    def __init__(
        self,
        redis_url: str = "redis://localhost:6379",
        key_prefix: str = "cinecache",
        default_ttl: int = 3600,
        client: redis.Redis | None = None,
    ) -> None:
        """Initialize the Redis cache backend.

        Args:
            redis_url: Redis connection URL.
            key_prefix: Prefix for all cache keys.
            default_ttl: Default TTL in seconds.
            client: Optional pre-built Redis client; overrides redis_url.
        """
        self._redis: redis.Redis = client or redis.from_url(redis_url)  # type: ignore
        self._key_prefix = key_prefix
        self._default_ttl = default_ttl

    async def get(self, key: str) -> bytes | None:
        """Retrieve cached value by key.

        Args:
            key: The cache key to retrieve.

        Returns:
            The cached value as bytes, or None if not found or expired.

        Raises:
            CacheBackendError: If Redis is unavailable.
        """
        try:
            return await self._redis.get(self._prefixed_key(key))
        except RedisError as e:
            raise CacheBackendError(f"Redis GET failed for {key!r}: {e}") from e

    async def set(
        self,
        key: str,
        value: bytes,
        ttl: timedelta | None = None,
    ) -> None:
        """Store value with TTL.

        Args:
            key: The cache key.
            value: The value to store as bytes.
            ttl: Optional time-to-live. If None, uses default.

        Raises:
            CacheBackendError: If Redis is unavailable.
        """
        seconds = int(ttl.total_seconds()) if ttl is not None else self._default_ttl
        try:
            await self._redis.setex(self._prefixed_key(key), max(seconds, 1), value)
        except RedisError as e:
            raise CacheBackendError(f"Redis SETEX failed for {key!r}: {e}") from e

    async def exists(self, key: str) -> bool:
        """Check if key exists in cache.

        Args:
            key: The cache key to check.

        Returns:
            True if the key exists, False otherwise.
        """
        try:
            result = await self._redis.exists(self._prefixed_key(key))
        except RedisError as e:
            raise CacheBackendError(f"Redis EXISTS failed for {key!r}: {e}") from e
        return result > 0

    async def clear(self) -> None:
        """Clear all cached values with our prefix.

        Note: This only clears keys with our prefix, not the entire Redis DB.
        """
        pattern = f"{self._key_prefix}:*"
        try:
            await self._delete_by_pattern(pattern)
        except RedisError as e:
            raise CacheBackendError(f"Redis clear failed: {e}") from e

    async def _delete_by_pattern(self, pattern: str) -> int:
        """Delete keys matching a pattern using SCAN.

        Uses SCAN instead of KEYS for production safety.

        Args:
            pattern: Redis glob pattern.

        Returns:
            Number of keys deleted.
        """
        count = 0
        cursor = 0

        while True:
            cursor, keys = await self._redis.scan(cursor, match=pattern, count=100)

            if keys:
                count += await self._redis.delete(*keys)

            if cursor == 0:
                break

        return count

    def _prefixed_key(self, key: str) -> str:
        """Add prefix to key if not already present."""
        if key.startswith(f"{self._key_prefix}:"):
            return key
        return f"{self._key_prefix}:{key}"

    async def close(self) -> None:
        """Close the Redis connection."""
        await self._redis.aclose()

    async def __aenter__(self) -> "RedisCacheBackend":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type: type, exc_val: Exception, exc_tb: object) -> None:
        """Async context manager exit."""
        await self.close()
