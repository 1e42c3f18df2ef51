"""Default key builder implementation."""

from collections.abc import Mapping
from typing import Any

from cinecache.core.entities.cache_key import CacheKey
from cinecache.utils.hashing import hash_params


class DefaultKeyBuilder:
    """Default key builder using a hash of the request parameters.

    Keys have the form ``{prefix}:{endpoint}:p:{hash}``. The endpoint
    stays readable so keys of different endpoints never collide, while
    parameters (credentials included) are hashed with sorted keys.
    """

    def __init__(self, prefix: str = "cinecache") -> None:
        """Initialize the key builder.

        Args:
            prefix: Prefix for all cache keys.
        """
        self._prefix = prefix

    def build(self, endpoint: str, params: Mapping[str, Any] | None) -> str:
        """Build unique cache key for an upstream request.

        Args:
            endpoint: The endpoint path.
            params: Query parameters, including credentials.

        Returns:
            A unique string key for caching the response.
        """
        key = CacheKey.from_components(
            prefix=self._prefix,
            endpoint=endpoint.strip("/") or "/",
            params=params,
            hash_func=hash_params,
        )
        return str(key)
