"""Key builder interface."""

from collections.abc import Mapping
from typing import Any, Protocol


class IKeyBuilder(Protocol):
    """Contract for building cache keys from upstream requests.

    Key builders must be pure: the same endpoint and parameter set
    give the same key regardless of parameter order, and any change
    to the endpoint or a parameter value gives a different key.
    """

    def build(self, endpoint: str, params: Mapping[str, Any] | None) -> str:
        """Build unique cache key for an upstream request.

        Args:
            endpoint: The endpoint path, e.g. ``/movies/trending``.
            params: Query parameters, including credentials.

        Returns:
            A unique string key for caching the response.
        """
        ...
