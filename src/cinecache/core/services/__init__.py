"""Domain services for cinecache."""

from cinecache.core.services.cache_service import CacheService
from cinecache.core.services.catalog_service import GENRES, CatalogService
from cinecache.core.services.entity_mapper import (
    map_movie,
    map_movie_details,
    map_movies,
)
from cinecache.core.services.search_enrichment import SearchEnricher

__all__ = [
    "CacheService",
    "CatalogService",
    "GENRES",
    "SearchEnricher",
    # Entity mapping
    "map_movie",
    "map_movie_details",
    "map_movies",
]
