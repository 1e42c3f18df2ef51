"""Tests for CatalogService."""

import httpx
import pytest
import pytest_asyncio

from cinecache import (
    CacheService,
    CatalogService,
    DefaultKeyBuilder,
    FailureReason,
    FetchResult,
    JsonSerializer,
    MovieDetails,
    SimklClient,
)

TRENDING = "/movies/trending"
SEARCH = "/search/movie"


def _items(make_item, count: int) -> list[dict]:
    return [make_item(i, f"Movie {i}") for i in range(1, count + 1)]


class TestCatalogOperations:
    """Tests for the named catalog queries."""

    @pytest.mark.asyncio
    async def test_trending_today_caps_at_five(
        self, catalog: CatalogService, upstream, make_item
    ) -> None:
        """Test hero candidates are capped and use today's window."""
        upstream.respond(TRENDING, _items(make_item, 8))

        movies = await catalog.trending_today()

        assert [m.external_id for m in movies] == ["1", "2", "3", "4", "5"]
        _, params = upstream.calls[0]
        assert params["wltime"] == "today"
        assert "trailer" in params["extended"]

    @pytest.mark.asyncio
    async def test_top_rated_and_new_releases(
        self, catalog: CatalogService, upstream, make_item
    ) -> None:
        """Test row queries are capped at ten with their own params."""
        upstream.respond(TRENDING, _items(make_item, 15))

        top_rated = await catalog.top_rated()
        new_releases = await catalog.new_releases()

        assert len(top_rated) == 10
        assert len(new_releases) == 10
        assert upstream.calls[0][1]["sort"] == "rank"
        assert upstream.calls[1][1]["wltime"] == "week"

    @pytest.mark.asyncio
    async def test_content_rows(self, catalog: CatalogService, upstream, make_item) -> None:
        """Test both rows are fetched together."""
        upstream.respond(TRENDING, _items(make_item, 3))

        rows = await catalog.content_rows()

        assert len(rows.top_rated) == 3
        assert len(rows.new_releases) == 3
        assert upstream.calls_to(TRENDING) == 2

    @pytest.mark.asyncio
    async def test_get_details(self, catalog: CatalogService, upstream, make_item) -> None:
        """Test detail lookup maps to a MovieDetails."""
        upstream.respond("/movies/53536", make_item(53536, "Inception", tagline="Dream"))

        details = await catalog.get_details("53536")

        assert isinstance(details, MovieDetails)
        assert details.tagline == "Dream"
        assert upstream.calls[0][1] == {"extended": "full"}

    @pytest.mark.asyncio
    async def test_get_details_malformed(self, catalog: CatalogService, upstream) -> None:
        """Test a malformed detail payload yields None."""
        upstream.respond("/movies/1", {"year": 2010})

        assert await catalog.get_details("1") is None

    @pytest.mark.asyncio
    async def test_search_page(self, catalog: CatalogService, upstream, make_item) -> None:
        """Test a search page carries results and the page count."""
        upstream.respond(
            SEARCH, _items(make_item, 3), headers={"x-pagination-page-count": "5"}
        )

        page = await catalog.search_page("movie", page=2)

        assert len(page.results) == 3
        assert page.total_pages == 5
        _, params = upstream.calls[0]
        assert params["q"] == "movie"
        assert params["page"] == 2
        assert params["limit"] == 20

    @pytest.mark.asyncio
    async def test_browse_by_genre(self, catalog: CatalogService, upstream, make_item) -> None:
        """Test genre browse slugs the genre and skips poster-less items."""
        endpoint = "/movies/genres/science-fiction/all-types/all-countries/all-years/rank"
        items = _items(make_item, 25)
        items[0]["poster"] = ""
        del items[1]["poster"]
        upstream.respond(endpoint, items)

        movies = await catalog.browse_by_genre("Science Fiction", page=3)

        assert len(movies) == 20
        assert movies[0].external_id == "3"
        _, params = upstream.calls[0]
        assert params["page"] == 3
        assert params["limit"] == 50

    @pytest.mark.asyncio
    async def test_from_path_merges_params(
        self, catalog: CatalogService, upstream, make_item
    ) -> None:
        """Test caller params override the defaults on a generic path."""
        upstream.respond("/anime/trending", _items(make_item, 30))

        movies = await catalog.from_path("/anime/trending", {"extended": "full", "interval": "week"})

        assert len(movies) == 20
        assert upstream.calls[0][1] == {"extended": "full", "interval": "week"}

    @pytest.mark.asyncio
    async def test_from_path_rejects_absolute_url(
        self, catalog: CatalogService, upstream
    ) -> None:
        """Test an absolute URL is never sent upstream."""
        movies = await catalog.from_path("https://elsewhere.example/movies/trending")

        assert movies == []
        assert upstream.calls == []

    @pytest.mark.asyncio
    async def test_unexpected_payload_shape(self, catalog: CatalogService, upstream) -> None:
        """Test an object where a list is expected yields an empty result."""
        upstream.respond(TRENDING, {"error": "unexpected"})

        assert await catalog.top_rated() == []

    def test_genres(self, catalog: CatalogService) -> None:
        """Test the fixed genre list."""
        genres = catalog.genres()

        assert "Science Fiction" in genres
        assert len(genres) == 17


class TestFailureAbsorption:
    """Tests that every operation collapses failures to empty results."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "reason",
        [
            FailureReason.UNAUTHORIZED,
            FailureReason.RATE_LIMITED,
            FailureReason.HTTP_ERROR,
            FailureReason.NETWORK_ERROR,
            FailureReason.MALFORMED_PAYLOAD,
        ],
    )
    async def test_all_operations_return_empty(
        self, catalog: CatalogService, upstream, reason: FailureReason
    ) -> None:
        """Test no operation raises when the upstream fails."""
        upstream.default = FetchResult.failed(reason)

        assert await catalog.trending_today() == []
        assert await catalog.top_rated() == []
        assert await catalog.new_releases() == []
        assert await catalog.browse_by_genre("Drama") == []
        assert await catalog.from_path("/movies/trending") == []
        assert await catalog.get_details("1") is None

        rows = await catalog.content_rows()
        assert rows.top_rated == [] and rows.new_releases == []

        page = await catalog.search_page("Inception")
        assert page.results == []
        assert page.total_pages == 1


class TestInvalidRequests:
    """Tests that unbuildable requests collapse to empty results."""

    @pytest_asyncio.fixture
    async def http_catalog(self, backend):
        """Create a catalog over a real client and a mocked transport."""
        http_client = httpx.AsyncClient(
            transport=httpx.MockTransport(lambda r: httpx.Response(200, json=[])),
            base_url="https://api.simkl.com",
        )
        service = CacheService(
            backend=backend,
            key_builder=DefaultKeyBuilder(),
            serializer=JsonSerializer(),
            upstream=SimklClient(client_id="abc", http_client=http_client),
        )
        yield CatalogService(service)
        await http_client.aclose()

    @pytest.mark.asyncio
    async def test_get_details_with_invalid_id(self, http_catalog: CatalogService) -> None:
        """Test an id that cannot form a URL yields None."""
        assert await http_catalog.get_details("12\x0034") is None

    @pytest.mark.asyncio
    async def test_from_path_with_invalid_path(self, http_catalog: CatalogService) -> None:
        """Test a path that cannot form a URL yields an empty list."""
        assert await http_catalog.from_path("/anime/\x00trending") == []
        assert await http_catalog.from_path("http://[::1") == []
