"""Upstream client interface."""

from collections.abc import Mapping
from typing import Any, Protocol

from cinecache.core.entities.fetch_result import FetchResult


class IUpstreamClient(Protocol):
    """Contract for clients of the upstream catalog API.

    Implementations inject their credentials into every request and
    classify failures into a FetchResult instead of raising.
    """

    @property
    def credentials(self) -> Mapping[str, str]:
        """Query parameters identifying the caller."""
        ...

    async def fetch(
        self, endpoint: str, params: Mapping[str, Any] | None = None
    ) -> FetchResult:
        """Perform a GET request against the catalog API.

        Args:
            endpoint: The endpoint path.
            params: Query parameters, without credentials.

        Returns:
            A successful FetchResult with the decoded response, or a
            failed one carrying the classified reason.
        """
        ...
