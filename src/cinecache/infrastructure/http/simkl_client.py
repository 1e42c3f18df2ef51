"""HTTP client for the Simkl catalog API."""

import logging
from collections.abc import Mapping
from typing import Any

import httpx

from cinecache.core.entities.fetch_result import (
    ITEM_COUNT_HEADER,
    PAGE_COUNT_HEADER,
    FailureReason,
    FetchResult,
    UpstreamResponse,
)

logger = logging.getLogger(__name__)

FORWARDED_HEADERS = (PAGE_COUNT_HEADER, ITEM_COUNT_HEADER)


class SimklClient:
    """Thin async client for the Simkl API.

    Injects the ``client_id`` credential into every request and
    classifies the outcome into a FetchResult. Unauthorized and
    rate-limited responses are logged distinctly; none of the failure
    cases raise.
    """

    def __init__(
        self,
        client_id: str,
        base_url: str = "https://api.simkl.com",
        timeout: float = 10.0,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            client_id: Simkl client id.
            base_url: Base URL of the API.
            timeout: Per-request timeout in seconds.
            http_client: Optional pre-built httpx client (e.g. with a
                mock transport). Its base URL is used as-is and the
                caller stays responsible for closing it.
        """
        self._client_id = client_id
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout,
            headers={"Content-Type": "application/json"},
        )

    @property
    def credentials(self) -> Mapping[str, str]:
        """Query parameters identifying the caller."""
        return {"client_id": self._client_id}

    async def fetch(
        self, endpoint: str, params: Mapping[str, Any] | None = None
    ) -> FetchResult:
        """Perform a GET request and classify the result.

        Args:
            endpoint: The endpoint path.
            params: Query parameters, without credentials.

        Returns:
            The classified FetchResult.
        """
        query = {**(params or {}), **self.credentials}

        try:
            response = await self._client.get(endpoint, params=query)
        except httpx.TimeoutException as e:
            logger.error("Simkl request to %s timed out: %s", endpoint, e)
            return FetchResult.failed(FailureReason.NETWORK_ERROR)
        except httpx.HTTPError as e:
            logger.error("Simkl network error on %s: %s", endpoint, e)
            return FetchResult.failed(FailureReason.NETWORK_ERROR)
        except httpx.InvalidURL as e:
            logger.error("Invalid Simkl request URL for %r: %s", endpoint, e)
            return FetchResult.failed(FailureReason.HTTP_ERROR)

        status = response.status_code
        if status == 401:
            logger.error(
                "Simkl API unauthorized (401) on %s; check SIMKL_CLIENT_ID", endpoint
            )
            return FetchResult.failed(FailureReason.UNAUTHORIZED, status)
        if status == 429:
            logger.warning("Simkl API rate limit reached (429) on %s", endpoint)
            return FetchResult.failed(FailureReason.RATE_LIMITED, status)
        if response.is_error:
            logger.error("Simkl API error (%d) on %s", status, endpoint)
            return FetchResult.failed(FailureReason.HTTP_ERROR, status)

        payload: Any = None
        if response.content:
            try:
                payload = response.json()
            except ValueError as e:
                logger.error("Simkl returned malformed JSON on %s: %s", endpoint, e)
                return FetchResult.failed(FailureReason.MALFORMED_PAYLOAD, status)

        headers = {
            name: response.headers[name]
            for name in FORWARDED_HEADERS
            if name in response.headers
        }
        return FetchResult.success(UpstreamResponse(payload=payload, headers=headers))

    async def close(self) -> None:
        """Close the underlying HTTP client if this instance created it."""
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "SimklClient":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type: type, exc_val: Exception, exc_tb: object) -> None:
        """Async context manager exit."""
        await self.close()
