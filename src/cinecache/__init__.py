"""cinecache - Cached, failure-tolerant data access for the Simkl catalog.

Turns UI-level requests (trending movies, search, details by id) into
cache-aside calls against the Simkl API and normalizes the loosely typed
upstream items into stable Movie and MovieDetails entities. Upstream
failures never reach the caller: they surface as empty results.

Example:
    from cinecache import CatalogClient, CatalogConfig

    config = CatalogConfig(client_id="your-simkl-client-id")

    async with CatalogClient.from_config(config) as catalog:
        hero = await catalog.trending_today()
        rows = await catalog.content_rows()
        page = await catalog.search("Inception", page=1)
        details = await catalog.get_details(page.results[0].external_id)

Wiring the layers by hand:
    from cinecache import (
        CacheService,
        CatalogService,
        DefaultKeyBuilder,
        InMemoryCacheBackend,
        JsonSerializer,
        SearchEnricher,
        SimklClient,
    )

    cache_service = CacheService(
        backend=InMemoryCacheBackend(maxsize=500, default_ttl=900),
        key_builder=DefaultKeyBuilder(),
        serializer=JsonSerializer(),
        upstream=SimklClient(client_id="your-simkl-client-id"),
    )
    catalog = CatalogService(cache_service)
    search = SearchEnricher(catalog, head_size=10, timeout=5.0)
"""

from cinecache.client import CatalogClient
from cinecache.core.entities import (
    CacheConfig,
    CacheEntry,
    CacheKey,
    CastMember,
    CatalogConfig,
    ContentRows,
    FailureReason,
    FetchResult,
    Genre,
    ImageSet,
    Movie,
    MovieDetails,
    SearchPage,
    UpstreamResponse,
)
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
from cinecache.core.services import (
    GENRES,
    CacheService,
    CatalogService,
    SearchEnricher,
    map_movie,
    map_movie_details,
    map_movies,
)
from cinecache.infrastructure import (
    DefaultKeyBuilder,
    InMemoryCacheBackend,
    JsonSerializer,
    RedisCacheBackend,
    SimklClient,
)

__version__ = "0.1.0"

__all__ = [
    # Version
    "__version__",
    # Facade
    "CatalogClient",
    # Configuration
    "CacheConfig",
    "CatalogConfig",
    # Cache entities
    "CacheEntry",
    "CacheKey",
    "FailureReason",
    "FetchResult",
    "UpstreamResponse",
    # Catalog entities
    "CastMember",
    "ContentRows",
    "Genre",
    "ImageSet",
    "Movie",
    "MovieDetails",
    "SearchPage",
    # Errors
    "CineCacheError",
    "CacheBackendError",
    "ConfigurationError",
    "MappingError",
    # Core interfaces
    "ICacheBackend",
    "IKeyBuilder",
    "ISerializer",
    "IUpstreamClient",
    # Core services
    "CacheService",
    "CatalogService",
    "SearchEnricher",
    "GENRES",
    "map_movie",
    "map_movie_details",
    "map_movies",
    # Infrastructure implementations
    "InMemoryCacheBackend",
    "RedisCacheBackend",
    "DefaultKeyBuilder",
    "JsonSerializer",
    "SimklClient",
]
