"""Cache backend implementations."""

from cinecache.infrastructure.backends.memory import InMemoryCacheBackend
from cinecache.infrastructure.backends.redis import RedisCacheBackend

__all__ = ["InMemoryCacheBackend", "RedisCacheBackend"]
