"""Upstream response and fetch result entities."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

PAGE_COUNT_HEADER = "x-pagination-page-count"
ITEM_COUNT_HEADER = "x-pagination-item-count"


class FailureReason(Enum):
    """Classified reason for a failed upstream fetch.

    UNAUTHORIZED: The client id was rejected (HTTP 401).
    RATE_LIMITED: The API asked the caller to back off (HTTP 429).
    HTTP_ERROR: Any other non-success status.
    NETWORK_ERROR: The request never produced a response.
    MALFORMED_PAYLOAD: The response body could not be decoded.
    """

    UNAUTHORIZED = "unauthorized"
    RATE_LIMITED = "rate_limited"
    HTTP_ERROR = "http_error"
    NETWORK_ERROR = "network_error"
    MALFORMED_PAYLOAD = "malformed_payload"


@dataclass(frozen=True)
class UpstreamResponse:
    """Decoded upstream response; the unit stored in the cache.

    Only the headers the catalog layer reads are kept, so a response
    served from cache carries the same pagination metadata as a fresh one.
    """

    payload: Any
    headers: dict[str, str] = field(default_factory=dict)
    from_cache: bool = False

    @property
    def is_empty(self) -> bool:
        """Check whether the payload carries no data."""
        return self.payload is None or self.payload == [] or self.payload == {}

    @property
    def page_count(self) -> int:
        """Total number of result pages, defaulting to 1.

        Returns:
            The parsed ``x-pagination-page-count`` header, or 1 when it is
            absent, unparseable or not positive.
        """
        raw = self.headers.get(PAGE_COUNT_HEADER)
        if raw is None:
            return 1
        try:
            count = int(str(raw).strip())
        except ValueError:
            return 1
        return count if count > 0 else 1

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-serializable dict for caching."""
        return {"payload": self.payload, "headers": dict(self.headers)}

    @classmethod
    def from_dict(
        cls, data: dict[str, Any], from_cache: bool = False
    ) -> "UpstreamResponse":
        """Rebuild a response from its cached dict form.

        Args:
            data: Dict produced by ``to_dict``.
            from_cache: Whether the response is being served from cache.

        Returns:
            A new UpstreamResponse instance.
        """
        return cls(
            payload=data.get("payload"),
            headers=dict(data.get("headers") or {}),
            from_cache=from_cache,
        )


@dataclass(frozen=True)
class FetchResult:
    """Outcome of a fetch: either a response or a classified failure."""

    response: UpstreamResponse | None = None
    failure: FailureReason | None = None
    status_code: int | None = None

    @property
    def ok(self) -> bool:
        """Check if the fetch succeeded."""
        return self.failure is None and self.response is not None

    @property
    def payload(self) -> Any:
        """Payload of a successful fetch, or None on failure."""
        return self.response.payload if self.response is not None else None

    @classmethod
    def success(cls, response: UpstreamResponse) -> "FetchResult":
        """Create a successful result."""
        return cls(response=response)

    @classmethod
    def failed(
        cls, reason: FailureReason, status_code: int | None = None
    ) -> "FetchResult":
        """Create a failed result.

        Args:
            reason: The classified failure reason.
            status_code: HTTP status code, when a response was received.

        Returns:
            A new failed FetchResult.
        """
        return cls(failure=reason, status_code=status_code)
