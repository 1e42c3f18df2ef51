"""Cache service - cache-aside orchestrator for upstream fetches."""

import logging
from collections.abc import Mapping
from datetime import timedelta
from typing import Any

from cinecache.core.entities.cache_config import CacheConfig
from cinecache.core.entities.fetch_result import FetchResult, UpstreamResponse
from cinecache.core.exceptions import CacheBackendError, CineCacheError
from cinecache.core.interfaces.cache_backend import ICacheBackend
from cinecache.core.interfaces.key_builder import IKeyBuilder
from cinecache.core.interfaces.serializer import ISerializer
from cinecache.core.interfaces.upstream import IUpstreamClient

logger = logging.getLogger(__name__)


class CacheService:
    """Domain service that serves upstream responses cache-aside.

    This is the single entry point every catalog operation fetches
    through, composing backend, key builder, serializer and upstream
    client. Cache-layer failures are absorbed here: an unavailable
    backend degrades to "miss" on read and "not cached" on write.
    """

    def __init__(
        self,
        backend: ICacheBackend,
        key_builder: IKeyBuilder,
        serializer: ISerializer,
        upstream: IUpstreamClient,
        config: CacheConfig | None = None,
    ) -> None:
        """Initialize the cache service.

        Args:
            backend: The cache backend to use for storage.
            key_builder: The key builder for generating cache keys.
            serializer: The serializer for encoding/decoding values.
            upstream: The client for the upstream catalog API.
            config: Optional cache configuration. Uses defaults if not provided.
        """
        self._backend = backend
        self._key_builder = key_builder
        self._serializer = serializer
        self._upstream = upstream
        self._config = config or CacheConfig()

        # Statistics
        self._hits = 0
        self._misses = 0

    @property
    def config(self) -> CacheConfig:
        """Get the cache configuration."""
        return self._config

    @property
    def stats(self) -> dict[str, int]:
        """Get cache statistics.

        Returns:
            Dictionary with hits, misses, and total requests.
        """
        return {
            "hits": self._hits,
            "misses": self._misses,
            "total": self._hits + self._misses,
        }

    def build_key(self, endpoint: str, params: Mapping[str, Any] | None) -> str:
        """Build the cache key for a request, scoped to the upstream credentials.

        Args:
            endpoint: The endpoint path.
            params: Query parameters, without credentials.

        Returns:
            The cache key.
        """
        scoped = {**(params or {}), **self._upstream.credentials}
        return self._key_builder.build(endpoint, scoped)

    async def fetch(
        self, endpoint: str, params: Mapping[str, Any] | None = None
    ) -> FetchResult:
        """Fetch a response, serving it from cache when possible.

        The cache read completes before any upstream call. Only a
        successful, non-empty response is written back; failures are
        returned as-is and never cached.

        Args:
            endpoint: The endpoint path.
            params: Query parameters, without credentials.

        Returns:
            A successful FetchResult (possibly served from cache), or the
            upstream client's classified failure.
        """
        if not self._config.enabled:
            return await self._upstream.fetch(endpoint, params)

        key = self.build_key(endpoint, params)

        cached = await self.get_cached_response(key)
        if cached is not None:
            logger.debug("Serving %s from cache", endpoint)
            return FetchResult.success(cached)

        result = await self._upstream.fetch(endpoint, params)
        if result.ok and result.response is not None and not result.response.is_empty:
            await self.cache_response(key, result.response)
        elif not result.ok:
            logger.debug("Not caching failed fetch of %s", endpoint)

        return result

    async def get_cached_response(self, key: str) -> UpstreamResponse | None:
        """Try to get a cached response.

        Args:
            key: The cache key.

        Returns:
            The cached response, or None on a miss, an unreadable entry or
            an unavailable backend.
        """
        try:
            cached_data = await self._backend.get(key)
        except CacheBackendError as e:
            logger.warning("Cache read failed, treating as miss: %s", e)
            cached_data = None

        if cached_data is None:
            self._misses += 1
            return None

        try:
            data = self._serializer.deserialize(cached_data)
        except CineCacheError as e:
            logger.warning("Discarding unreadable cache entry %s: %s", key, e)
            data = None

        if not isinstance(data, dict):
            self._misses += 1
            return None

        self._hits += 1
        return UpstreamResponse.from_dict(data, from_cache=True)

    async def cache_response(
        self,
        key: str,
        response: UpstreamResponse,
        ttl: timedelta | None = None,
    ) -> bool:
        """Cache an upstream response.

        Args:
            key: The cache key.
            response: The response to cache.
            ttl: Optional TTL. Uses config default if not provided.

        Returns:
            True if the response was stored, False if the backend or the
            serializer failed.
        """
        effective_ttl = ttl or self._config.default_ttl

        try:
            serialized = self._serializer.serialize(response.to_dict())
            await self._backend.set(key, serialized, effective_ttl)
        except CineCacheError as e:
            logger.warning("Cache write failed, response not cached: %s", e)
            return False

        return True

    async def clear(self) -> None:
        """Clear all cached entries and reset statistics."""
        try:
            await self._backend.clear()
        except CacheBackendError as e:
            logger.warning("Cache clear failed: %s", e)
        self._hits = 0
        self._misses = 0
