"""Core domain layer for cinecache."""

from cinecache.core.entities import CacheConfig, CacheEntry, CacheKey, CatalogConfig
from cinecache.core.exceptions import (
    CacheBackendError,
    CineCacheError,
    ConfigurationError,
    MappingError,
)
from cinecache.core.interfaces import (
    ICacheBackend,
    IKeyBuilder,
    ISerializer,
    IUpstreamClient,
)
from cinecache.core.services import CacheService, CatalogService, SearchEnricher

__all__ = [
    # Entities
    "CacheConfig",
    "CacheEntry",
    "CacheKey",
    "CatalogConfig",
    # Errors
    "CineCacheError",
    "CacheBackendError",
    "ConfigurationError",
    "MappingError",
    # Interfaces
    "ICacheBackend",
    "IKeyBuilder",
    "ISerializer",
    "IUpstreamClient",
    # Services
    "CacheService",
    "CatalogService",
    "SearchEnricher",
]
