"""Search enrichment pipeline.

A search runs in three stages:

1. Issue the search through the catalog (cache-aside) and read the
   upstream page count.
2. Partition the mapped results into a head (the first ``head_size``
   items) and an untouched tail.
3. Fetch details for every head item concurrently. A successful fetch
   replaces the summary with the detail entity; a failure, an empty
   result or a timeout keeps the summary. All fetches are joined before
   the results are merged, and the original ranking order is kept.
"""

import asyncio
import logging

from cinecache.core.entities.movie import Movie, SearchPage
from cinecache.core.services.catalog_service import CatalogService

logger = logging.getLogger(__name__)


class SearchEnricher:
    """Runs searches and enriches the top results with detail entities."""

    def __init__(
        self,
        catalog: CatalogService,
        head_size: int = 10,
        timeout: float | None = 8.0,
    ) -> None:
        """Initialize the pipeline.

        Args:
            catalog: Catalog operations used for search and detail lookups.
            head_size: Number of leading results to enrich.
            timeout: Per-item enrichment timeout in seconds; None disables it.
        """
        self._catalog = catalog
        self._head_size = head_size
        self._timeout = timeout

    async def search(self, query: str, page: int = 1) -> SearchPage:
        """Search the catalog and enrich the leading results.

        Args:
            query: Free-text query.
            page: 1-based page number.

        Returns:
            The merged page: enriched-or-original head items followed by
            the tail, in upstream ranking order, with the page count.
        """
        first_pass = await self._catalog.search_page(query, page)
        if not first_pass.results:
            return first_pass

        head, tail = self.partition(first_pass.results)
        enriched = await self.enrich(head)

        return SearchPage(results=enriched + tail, total_pages=first_pass.total_pages)

    def partition(self, movies: list[Movie]) -> tuple[list[Movie], list[Movie]]:
        """Split results into the enrichment head and the tail."""
        return movies[: self._head_size], movies[self._head_size :]

    async def enrich(self, movies: list[Movie]) -> list[Movie]:
        """Replace each movie with its detail entity where possible.

        Args:
            movies: Summary entities, in ranking order.

        Returns:
            A list of the same length and order, holding the detail entity
            for each successful lookup and the original summary otherwise.
        """
        outcomes = await asyncio.gather(
            *(self._enrich_one(movie) for movie in movies),
            return_exceptions=True,
        )

        merged: list[Movie] = []
        for movie, outcome in zip(movies, outcomes):
            if isinstance(outcome, Movie):
                merged.append(outcome)
            else:
                if isinstance(outcome, BaseException):
                    logger.warning(
                        "Failed to enrich %r (%s): %r",
                        movie.title,
                        movie.external_id,
                        outcome,
                    )
                merged.append(movie)
        return merged

    async def _enrich_one(self, movie: Movie) -> Movie | None:
        if movie.generated_id:
            return None
        lookup = self._catalog.get_details(movie.external_id)
        if self._timeout is None:
            return await lookup
        return await asyncio.wait_for(lookup, timeout=self._timeout)
