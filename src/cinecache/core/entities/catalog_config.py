"""Catalog client configuration entity."""

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import timedelta

from cinecache.core.entities.cache_config import CacheConfig
from cinecache.core.exceptions import ConfigurationError

DEFAULT_API_URL = "https://api.simkl.com"
DEFAULT_IMAGE_URL = "https://simkl.in"


@dataclass
class CatalogConfig:
    """Configuration for the catalog data-access layer.

    Attributes:
        client_id: Simkl client id sent as the ``client_id`` query parameter.
        base_url: Base URL of the catalog API.
        image_base: Host serving poster and fanart images.
        request_timeout: Timeout in seconds for a single upstream request.
        search_page_size: Number of results requested per search page.
        enrichment_limit: How many leading search results get enriched.
        enrichment_timeout: Timeout in seconds for one enrichment fetch.
        redis_url: Use a Redis cache backend when set.
        cache: Cache configuration.
    """

    client_id: str
    base_url: str = DEFAULT_API_URL
    image_base: str = DEFAULT_IMAGE_URL
    request_timeout: float = 10.0
    search_page_size: int = 20
    enrichment_limit: int = 10
    enrichment_timeout: float = 8.0
    redis_url: str | None = None
    cache: CacheConfig = field(default_factory=CacheConfig)

    def __post_init__(self) -> None:
        """Validate required values."""
        if not self.client_id:
            raise ConfigurationError("A Simkl client id is required")
        if self.enrichment_limit < 0:
            raise ConfigurationError("enrichment_limit must not be negative")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "CatalogConfig":
        """Build configuration from environment variables.

        Reads ``SIMKL_CLIENT_ID`` (required), ``SIMKL_API_URL``,
        ``SIMKL_IMAGE_URL``, ``CINECACHE_CACHE_TTL`` (seconds),
        ``CINECACHE_REQUEST_TIMEOUT`` (seconds) and ``CINECACHE_REDIS_URL``.

        Args:
            environ: Mapping to read from. Defaults to ``os.environ``.

        Returns:
            A new CatalogConfig instance.

        Raises:
            ConfigurationError: If the client id is missing or a numeric
                value cannot be parsed.
        """
        env = os.environ if environ is None else environ

        client_id = env.get("SIMKL_CLIENT_ID", "")
        if not client_id:
            raise ConfigurationError("SIMKL_CLIENT_ID is not set")

        cache = CacheConfig()
        ttl = env.get("CINECACHE_CACHE_TTL")
        if ttl:
            cache.default_ttl = timedelta(seconds=_parse_float("CINECACHE_CACHE_TTL", ttl))

        timeout = env.get("CINECACHE_REQUEST_TIMEOUT")

        return cls(
            client_id=client_id,
            base_url=env.get("SIMKL_API_URL") or DEFAULT_API_URL,
            image_base=env.get("SIMKL_IMAGE_URL") or DEFAULT_IMAGE_URL,
            request_timeout=(
                _parse_float("CINECACHE_REQUEST_TIMEOUT", timeout) if timeout else 10.0
            ),
            redis_url=env.get("CINECACHE_REDIS_URL") or None,
            cache=cache,
        )


def _parse_float(name: str, raw: str) -> float:
    try:
        value = float(raw)
    except ValueError as e:
        raise ConfigurationError(f"{name} must be a number, got {raw!r}") from e
    if value <= 0:
        raise ConfigurationError(f"{name} must be positive, got {raw!r}")
    return value
