"""Cache key value object."""

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class CacheKey:
    """Immutable cache key value object.

    Encapsulates the components of a cache key (prefix, endpoint and
    a hash of the request parameters) before they are joined.
    """

    prefix: str
    endpoint: str
    params_hash: str | None = None

    def __str__(self) -> str:
        """Return the full cache key string.

        Returns:
            The complete cache key as a string.
        """
        parts = [self.prefix, self.endpoint]
        if self.params_hash:
            parts.append(f"p:{self.params_hash}")
        return ":".join(parts)

    @classmethod
    def from_components(
        cls,
        prefix: str,
        endpoint: str,
        params: Mapping[str, Any] | None,
        hash_func: Callable[[Any], str] | None = None,
    ) -> "CacheKey":
        """Create a CacheKey from raw components.

        Args:
            prefix: Cache key prefix.
            endpoint: Upstream endpoint path.
            params: Query parameters of the request.
            hash_func: Optional custom hash function.

        Returns:
            A new CacheKey instance.
        """
        from cinecache.utils.hashing import hash_params

        hasher = hash_func or hash_params

        return cls(
            prefix=prefix,
            endpoint=endpoint,
            params_hash=hasher(dict(params)) if params else None,
        )
