"""Catalog operations - named queries against the Simkl catalog."""

import asyncio
import logging
from collections.abc import Callable, Mapping
from typing import Any

from cinecache.core.entities.fetch_result import FetchResult
from cinecache.core.entities.movie import ContentRows, Movie, MovieDetails, SearchPage
from cinecache.core.exceptions import MappingError
from cinecache.core.services.cache_service import CacheService
from cinecache.core.services.entity_mapper import map_movie_details, map_movies
from cinecache.utils.hashing import slugify
from cinecache.utils.images import ImageResolver

logger = logging.getLogger(__name__)

TRENDING_ENDPOINT = "/movies/trending"
SEARCH_ENDPOINT = "/search/movie"
DETAIL_ENDPOINT = "/movies/{id}"
GENRE_ENDPOINT = "/movies/genres/{genre}/all-types/all-countries/all-years/rank"

LIST_EXTENDED = "overview,metadata,tmdb,genres,poster,fanart"
HERO_EXTENDED = "overview,metadata,tmdb,genres,trailer"
SEARCH_EXTENDED = "overview,metadata,genres,poster,tmdb"

HERO_LIMIT = 5
ROW_LIMIT = 10
FEED_LIMIT = 20
GENRE_PAGE_SIZE = 50

GENRES = (
    "Action",
    "Adventure",
    "Animation",
    "Comedy",
    "Crime",
    "Documentary",
    "Drama",
    "Family",
    "Fantasy",
    "Horror",
    "Music",
    "Mystery",
    "Romance",
    "Science Fiction",
    "Thriller",
    "War",
    "Western",
)


class CatalogService:
    """Named catalog queries built on the cache-aside fetcher.

    Every operation fetches through CacheService, maps the payload with
    the entity mapper and caps the result size. A failed fetch collapses
    here to an empty result (``[]``, or ``None`` for a detail lookup):
    callers never see upstream errors.
    """

    def __init__(
        self,
        fetcher: CacheService,
        images: ImageResolver | None = None,
        search_page_size: int = 20,
    ) -> None:
        """Initialize the catalog service.

        Args:
            fetcher: The cache-aside fetcher.
            images: Resolver for image URLs.
            search_page_size: Results requested per search page.
        """
        self._fetcher = fetcher
        self._images = images or ImageResolver()
        self._search_page_size = search_page_size

    async def trending_today(self) -> list[Movie]:
        """Movies trending today; candidates for the hero banner."""
        return await self._fetch_movies(
            TRENDING_ENDPOINT,
            {"wltime": "today", "extended": HERO_EXTENDED},
            HERO_LIMIT,
        )

    async def top_rated(self) -> list[Movie]:
        """Trending movies sorted by rank."""
        return await self._fetch_movies(
            TRENDING_ENDPOINT,
            {"sort": "rank", "extended": LIST_EXTENDED},
            ROW_LIMIT,
        )

    async def new_releases(self) -> list[Movie]:
        """Movies trending this week."""
        return await self._fetch_movies(
            TRENDING_ENDPOINT,
            {"wltime": "week", "extended": LIST_EXTENDED},
            ROW_LIMIT,
        )

    async def content_rows(self) -> ContentRows:
        """Fetch the home feed rows concurrently."""
        top_rated, new_releases = await asyncio.gather(
            self.top_rated(), self.new_releases()
        )
        return ContentRows(top_rated=top_rated, new_releases=new_releases)

    async def get_details(self, external_id: str) -> MovieDetails | None:
        """Fetch the detail entity for an item.

        Args:
            external_id: The item's ``external_id``.

        Returns:
            The mapped MovieDetails, or None when no data is available or
            the upstream item is malformed.
        """
        result = await self._fetcher.fetch(
            DETAIL_ENDPOINT.format(id=external_id), {"extended": "full"}
        )
        payload = self._payload(result, dict, f"details for {external_id}")
        if payload is None:
            return None
        try:
            return map_movie_details(payload, self._images)
        except MappingError as e:
            logger.warning("Dropping details for %s: %s", external_id, e)
            return None

    async def search_page(self, query: str, page: int = 1) -> SearchPage:
        """Fetch one page of search results without enrichment.

        Args:
            query: Free-text query.
            page: 1-based page number.

        Returns:
            The mapped results and the upstream page count (1 on failure).
        """
        result = await self._fetcher.fetch(
            SEARCH_ENDPOINT,
            {
                "q": query,
                "page": page,
                "limit": self._search_page_size,
                "extended": SEARCH_EXTENDED,
            },
        )
        total_pages = result.response.page_count if result.response else 1
        payload = self._payload(result, list, f"search {query!r}")
        if payload is None:
            return SearchPage(results=[], total_pages=total_pages)
        return SearchPage(
            results=map_movies(payload, self._images), total_pages=total_pages
        )

    async def browse_by_genre(self, genre: str, page: int = 1) -> list[Movie]:
        """Ranked movies of a genre, skipping items without a poster.

        Args:
            genre: Genre name, e.g. ``"Science Fiction"``.
            page: 1-based page number.

        Returns:
            Up to 20 movies.
        """
        slug = slugify(genre)
        return await self._fetch_movies(
            GENRE_ENDPOINT.format(genre=slug),
            {"limit": GENRE_PAGE_SIZE, "page": page, "extended": LIST_EXTENDED},
            FEED_LIMIT,
            keep=lambda item: isinstance(item, Mapping) and bool(item.get("poster")),
        )

    async def from_path(
        self, path: str, params: Mapping[str, Any] | None = None
    ) -> list[Movie]:
        """Fetch a feed category by endpoint path.

        Args:
            path: Endpoint path of the category.
            params: Extra query parameters; they override the defaults.

        Returns:
            Up to 20 movies, or an empty list when ``path`` is an absolute URL.
        """
        if "://" in path:
            logger.warning("Refusing absolute URL as catalog path: %r", path)
            return []
        return await self._fetch_movies(
            path, {"extended": LIST_EXTENDED, **(params or {})}, FEED_LIMIT
        )

    def genres(self) -> list[str]:
        """Genres offered for browsing."""
        return list(GENRES)

    async def _fetch_movies(
        self,
        endpoint: str,
        params: Mapping[str, Any],
        limit: int,
        keep: Callable[[Any], bool] | None = None,
    ) -> list[Movie]:
        result = await self._fetcher.fetch(endpoint, params)
        payload = self._payload(result, list, endpoint)
        if payload is None:
            return []
        if keep is not None:
            payload = [item for item in payload if keep(item)]
        return map_movies(payload, self._images)[:limit]

    def _payload(self, result: FetchResult, expected: type, what: str) -> Any:
        """Collapse a fetch result into its payload, or None for "no data"."""
        if not result.ok:
            logger.info(
                "No data for %s (%s)",
                what,
                result.failure.value if result.failure else "unknown",
            )
            return None
        payload = result.payload
        if payload is None:
            return None
        if not isinstance(payload, expected):
            logger.warning(
                "Unexpected payload for %s: %s", what, type(payload).__name__
            )
            return None
        return payload
