"""Pytest configuration for cinecache tests."""

import asyncio
from collections.abc import Callable, Mapping
from datetime import timedelta
from typing import Any

import pytest

from cinecache.core.entities.cache_config import CacheConfig
from cinecache.core.entities.fetch_result import (
    FailureReason,
    FetchResult,
    UpstreamResponse,
)
from cinecache.core.services.cache_service import CacheService
from cinecache.core.services.catalog_service import CatalogService
from cinecache.infrastructure.backends.memory import InMemoryCacheBackend
from cinecache.infrastructure.key_builders.default import DefaultKeyBuilder
from cinecache.infrastructure.serializers.json import JsonSerializer


class FakeClock:
    """Manually advanced clock for TTL tests."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class StubUpstream:
    """In-memory upstream client recording every call.

    Routes map an endpoint to a FetchResult, an exception to raise, and
    an optional delay applied before answering. Unknown endpoints fail
    with a 404 HTTP_ERROR.
    """

    def __init__(self, client_id: str = "test-client") -> None:
        self.client_id = client_id
        self.routes: dict[str, FetchResult] = {}
        self.errors: dict[str, Exception] = {}
        self.delays: dict[str, float] = {}
        self.default = FetchResult.failed(FailureReason.HTTP_ERROR, 404)
        self.calls: list[tuple[str, dict[str, Any]]] = []
        self.completed: list[str] = []

    @property
    def credentials(self) -> Mapping[str, str]:
        return {"client_id": self.client_id}

    def respond(
        self,
        endpoint: str,
        payload: Any,
        headers: dict[str, str] | None = None,
        delay: float = 0.0,
    ) -> None:
        self.routes[endpoint] = FetchResult.success(
            UpstreamResponse(payload=payload, headers=headers or {})
        )
        if delay:
            self.delays[endpoint] = delay

    def fail(
        self, endpoint: str, reason: FailureReason, status_code: int | None = None
    ) -> None:
        self.routes[endpoint] = FetchResult.failed(reason, status_code)

    def calls_to(self, endpoint: str) -> int:
        return sum(1 for called, _ in self.calls if called == endpoint)

    async def fetch(
        self, endpoint: str, params: Mapping[str, Any] | None = None
    ) -> FetchResult:
        self.calls.append((endpoint, dict(params or {})))
        delay = self.delays.get(endpoint)
        if delay:
            await asyncio.sleep(delay)
        self.completed.append(endpoint)
        if endpoint in self.errors:
            raise self.errors[endpoint]
        return self.routes.get(endpoint, self.default)


def simkl_item(simkl_id: int | None, title: str, **extra: Any) -> dict[str, Any]:
    """Build an upstream item shaped like a Simkl list entry."""
    item: dict[str, Any] = {
        "title": title,
        "year": 2010,
        "ids": {"simkl_id": simkl_id, "slug": title.lower().replace(" ", "-")},
        "poster": f"{simkl_id}/poster",
        "fanart": f"{simkl_id}/fanart",
        "genres": ["Action"],
    }
    if simkl_id is None:
        del item["ids"]["simkl_id"]
    item.update(extra)
    return item


@pytest.fixture
def make_item() -> Callable[..., dict[str, Any]]:
    """Factory for upstream items."""
    return simkl_item


@pytest.fixture
def clock() -> FakeClock:
    """Create a fake clock."""
    return FakeClock()


@pytest.fixture
def backend(clock: FakeClock) -> InMemoryCacheBackend:
    """Create an in-memory backend driven by the fake clock."""
    return InMemoryCacheBackend(maxsize=100, default_ttl=300.0, timer=clock)


@pytest.fixture
def upstream() -> StubUpstream:
    """Create a stub upstream client."""
    return StubUpstream()


@pytest.fixture
def cache_service(backend: InMemoryCacheBackend, upstream: StubUpstream) -> CacheService:
    """Create a cache service over the stub upstream."""
    return CacheService(
        backend=backend,
        key_builder=DefaultKeyBuilder(prefix="test"),
        serializer=JsonSerializer(),
        upstream=upstream,
        config=CacheConfig(default_ttl=timedelta(minutes=5)),
    )


@pytest.fixture
def catalog(cache_service: CacheService) -> CatalogService:
    """Create a catalog service over the cache service."""
    return CatalogService(cache_service)
