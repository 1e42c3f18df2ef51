"""Application-scoped catalog client.

CatalogClient wires one cache backend, one upstream client and the
services built on them. The cache lives as long as the client instance;
there is no module-level cache state.
"""

import logging
from collections.abc import Mapping
from typing import Any

import httpx

from cinecache.core.entities.catalog_config import CatalogConfig
from cinecache.core.entities.movie import ContentRows, Movie, MovieDetails, SearchPage
from cinecache.core.interfaces.cache_backend import ICacheBackend
from cinecache.core.services.cache_service import CacheService
from cinecache.core.services.catalog_service import CatalogService
from cinecache.core.services.search_enrichment import SearchEnricher
from cinecache.infrastructure.backends.memory import InMemoryCacheBackend
from cinecache.infrastructure.backends.redis import RedisCacheBackend
from cinecache.infrastructure.http.simkl_client import SimklClient
from cinecache.infrastructure.key_builders.default import DefaultKeyBuilder
from cinecache.infrastructure.serializers.json import JsonSerializer
from cinecache.utils.images import ImageResolver

logger = logging.getLogger(__name__)


class CatalogClient:
    """Facade over the catalog operations and the search pipeline.

    Example:
        config = CatalogConfig.from_env()
        async with CatalogClient.from_config(config) as catalog:
            hero = await catalog.trending_today()
            page = await catalog.search("Inception")
    """

    def __init__(
        self,
        cache_service: CacheService,
        catalog: CatalogService,
        search_enricher: SearchEnricher,
        upstream: SimklClient | None = None,
        backend: ICacheBackend | None = None,
        owns_backend: bool = False,
    ) -> None:
        self._cache_service = cache_service
        self._catalog = catalog
        self._search = search_enricher
        self._upstream = upstream
        self._backend = backend
        self._owns_backend = owns_backend

    @classmethod
    def from_config(
        cls,
        config: CatalogConfig,
        backend: ICacheBackend | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> "CatalogClient":
        """Build a client and its collaborators from configuration.

        Args:
            config: Catalog configuration.
            backend: Optional cache backend. Defaults to Redis when
                ``config.redis_url`` is set, in-memory otherwise. An
                injected backend is not closed by ``close()``.
            http_client: Optional httpx client for the upstream API. It is
                not closed by ``close()``.

        Returns:
            A new CatalogClient.
        """
        cache_config = config.cache
        owns_backend = backend is None
        ttl_seconds = (
            cache_config.default_ttl.total_seconds() if cache_config.default_ttl else 3600.0
        )

        if backend is None:
            if config.redis_url:
                logger.info("Using Redis cache backend")
                backend = RedisCacheBackend(
                    redis_url=config.redis_url,
                    key_prefix=cache_config.key_prefix,
                    default_ttl=int(ttl_seconds),
                )
            else:
                backend = InMemoryCacheBackend(
                    maxsize=cache_config.max_size, default_ttl=ttl_seconds
                )

        upstream = SimklClient(
            client_id=config.client_id,
            base_url=config.base_url,
            timeout=config.request_timeout,
            http_client=http_client,
        )
        cache_service = CacheService(
            backend=backend,
            key_builder=DefaultKeyBuilder(prefix=cache_config.key_prefix),
            serializer=JsonSerializer(),
            upstream=upstream,
            config=cache_config,
        )
        catalog = CatalogService(
            cache_service,
            images=ImageResolver(base_url=config.image_base),
            search_page_size=config.search_page_size,
        )
        search_enricher = SearchEnricher(
            catalog,
            head_size=config.enrichment_limit,
            timeout=config.enrichment_timeout,
        )
        return cls(
            cache_service,
            catalog,
            search_enricher,
            upstream,
            backend,
            owns_backend=owns_backend,
        )

    @property
    def cache_service(self) -> CacheService:
        return self._cache_service

    @property
    def catalog(self) -> CatalogService:
        return self._catalog

    async def trending_today(self) -> list[Movie]:
        return await self._catalog.trending_today()

    async def top_rated(self) -> list[Movie]:
        return await self._catalog.top_rated()

    async def new_releases(self) -> list[Movie]:
        return await self._catalog.new_releases()

    async def content_rows(self) -> ContentRows:
        return await self._catalog.content_rows()

    async def get_details(self, external_id: str) -> MovieDetails | None:
        return await self._catalog.get_details(external_id)

    async def search(self, query: str, page: int = 1) -> SearchPage:
        """Search with enrichment of the leading results."""
        return await self._search.search(query, page)

    async def browse_by_genre(self, genre: str, page: int = 1) -> list[Movie]:
        return await self._catalog.browse_by_genre(genre, page)

    async def from_path(
        self, path: str, params: Mapping[str, Any] | None = None
    ) -> list[Movie]:
        return await self._catalog.from_path(path, params)

    def genres(self) -> list[str]:
        return self._catalog.genres()

    async def close(self) -> None:
        """Close the resources this client created.

        An injected ``http_client`` or ``backend`` is left open for its owner.
        """
        if self._upstream is not None:
            await self._upstream.close()
        if self._owns_backend and isinstance(self._backend, RedisCacheBackend):
            await self._backend.close()

    async def __aenter__(self) -> "CatalogClient":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type: type, exc_val: Exception, exc_tb: object) -> None:
        """Async context manager exit."""
        await self.close()
