"""Tests for SimklClient."""

import httpx
import pytest

from cinecache.core.entities import FailureReason
from cinecache.infrastructure.http.simkl_client import SimklClient

BASE_URL = "https://api.simkl.com"


def _client(handler) -> SimklClient:
    http_client = httpx.AsyncClient(
        transport=httpx.MockTransport(handler), base_url=BASE_URL
    )
    return SimklClient(client_id="test-client", http_client=http_client)


class TestSimklClient:
    """Tests for request building and response classification."""

    @pytest.mark.asyncio
    async def test_success_injects_credentials(self) -> None:
        """Test the client id is added to every request."""
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=[{"title": "Inception"}])

        async with _client(handler) as client:
            result = await client.fetch("/movies/trending", {"wltime": "today"})

        assert result.ok
        assert result.payload == [{"title": "Inception"}]
        assert result.status_code is None
        assert seen[0].url.path == "/movies/trending"
        assert seen[0].url.params["client_id"] == "test-client"
        assert seen[0].url.params["wltime"] == "today"

    @pytest.mark.asyncio
    async def test_forwards_pagination_headers(self) -> None:
        """Test pagination headers are kept and others dropped."""

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                200,
                json=[],
                headers={
                    "X-Pagination-Page-Count": "4",
                    "X-Pagination-Item-Count": "80",
                    "X-Request-Id": "abc",
                },
            )

        async with _client(handler) as client:
            result = await client.fetch("/search/movie", {"q": "x"})

        assert result.response.headers == {
            "x-pagination-page-count": "4",
            "x-pagination-item-count": "80",
        }
        assert result.response.page_count == 4

    @pytest.mark.asyncio
    async def test_empty_body(self) -> None:
        """Test an empty body succeeds with no payload."""

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200)

        async with _client(handler) as client:
            result = await client.fetch("/movies/1")

        assert result.ok
        assert result.payload is None
        assert result.response.is_empty

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("status", "reason"),
        [
            (401, FailureReason.UNAUTHORIZED),
            (429, FailureReason.RATE_LIMITED),
            (404, FailureReason.HTTP_ERROR),
            (500, FailureReason.HTTP_ERROR),
            (503, FailureReason.HTTP_ERROR),
        ],
    )
    async def test_status_classification(
        self, status: int, reason: FailureReason
    ) -> None:
        """Test error statuses map to distinct failure reasons."""

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(status, json={"error": "nope"})

        async with _client(handler) as client:
            result = await client.fetch("/movies/trending")

        assert not result.ok
        assert result.failure is reason
        assert result.status_code == status

    @pytest.mark.asyncio
    async def test_unauthorized_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        """Test an unauthorized response is logged as an error."""

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(401)

        async with _client(handler) as client:
            await client.fetch("/movies/trending")

        assert any(
            r.levelname == "ERROR" and "401" in r.getMessage() for r in caplog.records
        )

    @pytest.mark.asyncio
    async def test_rate_limit_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        """Test a rate-limited response is logged as a warning."""

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(429)

        async with _client(handler) as client:
            await client.fetch("/movies/trending")

        assert any(
            r.levelname == "WARNING" and "429" in r.getMessage() for r in caplog.records
        )

    @pytest.mark.asyncio
    async def test_network_error(self) -> None:
        """Test transport failures become NETWORK_ERROR."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        async with _client(handler) as client:
            result = await client.fetch("/movies/trending")

        assert result.failure is FailureReason.NETWORK_ERROR
        assert result.status_code is None

    @pytest.mark.asyncio
    async def test_timeout(self) -> None:
        """Test timeouts become NETWORK_ERROR."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        async with _client(handler) as client:
            result = await client.fetch("/movies/trending")

        assert result.failure is FailureReason.NETWORK_ERROR

    @pytest.mark.asyncio
    async def test_malformed_json(self) -> None:
        """Test an unparseable body becomes MALFORMED_PAYLOAD."""

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, content=b"<html>oops</html>")

        async with _client(handler) as client:
            result = await client.fetch("/movies/trending")

        assert result.failure is FailureReason.MALFORMED_PAYLOAD

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "endpoint", ["/movies/12\x0034", "http://[::1"]
    )
    async def test_invalid_url(self, endpoint: str) -> None:
        """Test an unbuildable request URL fails without raising."""
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=[])

        async with _client(handler) as client:
            result = await client.fetch(endpoint)

        assert result.failure is FailureReason.HTTP_ERROR
        assert result.status_code is None
        assert seen == []

    def test_credentials(self) -> None:
        """Test credentials expose the client id."""
        client = SimklClient(
            client_id="abc",
            http_client=httpx.AsyncClient(
                transport=httpx.MockTransport(lambda r: httpx.Response(200)),
                base_url=BASE_URL,
            ),
        )

        assert dict(client.credentials) == {"client_id": "abc"}




class TestSimklClientOwnership:
    """Tests for closing the underlying HTTP client."""

    @pytest.mark.asyncio
    async def test_injected_client_left_open(self) -> None:
        """Test close leaves a caller-supplied httpx client open."""
        http_client = httpx.AsyncClient(
            transport=httpx.MockTransport(lambda r: httpx.Response(200)),
            base_url=BASE_URL,
        )

        await SimklClient(client_id="abc", http_client=http_client).close()

        assert not http_client.is_closed
        await http_client.aclose()

    @pytest.mark.asyncio
    async def test_own_client_closed(self) -> None:
        """Test close releases a client the instance created."""
        client = SimklClient(client_id="abc")

        await client.close()

        assert client._client.is_closed
