"""Infrastructure layer implementations for cinecache."""

from cinecache.infrastructure.backends import InMemoryCacheBackend, RedisCacheBackend
from cinecache.infrastructure.http import SimklClient
from cinecache.infrastructure.key_builders import DefaultKeyBuilder
from cinecache.infrastructure.serializers import JsonSerializer

__all__ = [
    "InMemoryCacheBackend",
    "RedisCacheBackend",
    "DefaultKeyBuilder",
    "JsonSerializer",
    "SimklClient",
]
