"""Cache configuration entity."""

from dataclasses import dataclass
from datetime import timedelta


@dataclass
class CacheConfig:
    """Cache configuration.

    Provides configuration options for the caching layer: the fixed TTL
    applied to every successful upstream response, the size bound of the
    in-memory store and the prefix for all cache keys.
    """

    enabled: bool = True
    default_ttl: timedelta | None = None
    max_size: int = 1000
    key_prefix: str = "cinecache"

    def __post_init__(self) -> None:
        """Set default TTL if not provided."""
        if self.default_ttl is None:
            self.default_ttl = timedelta(hours=1)
