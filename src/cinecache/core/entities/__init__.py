"""Domain entities for cinecache."""

from cinecache.core.entities.cache_config import CacheConfig
from cinecache.core.entities.cache_entry import CacheEntry
from cinecache.core.entities.cache_key import CacheKey
from cinecache.core.entities.catalog_config import CatalogConfig
from cinecache.core.entities.fetch_result import (
    FailureReason,
    FetchResult,
    UpstreamResponse,
)
from cinecache.core.entities.movie import (
    CastMember,
    ContentRows,
    Genre,
    ImageSet,
    Movie,
    MovieDetails,
    SearchPage,
)

__all__ = [
    "CacheEntry",
    "CacheKey",
    "CacheConfig",
    "CatalogConfig",
    # Fetch results
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
]
