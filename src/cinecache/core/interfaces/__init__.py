"""Core interfaces (Protocol classes) for cinecache."""

from cinecache.core.interfaces.cache_backend import ICacheBackend
from cinecache.core.interfaces.key_builder import IKeyBuilder
from cinecache.core.interfaces.serializer import ISerializer
from cinecache.core.interfaces.upstream import IUpstreamClient

__all__ = [
    "ICacheBackend",
    "IKeyBuilder",
    "ISerializer",
    "IUpstreamClient",
]
