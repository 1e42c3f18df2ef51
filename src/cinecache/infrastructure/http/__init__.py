"""HTTP clients for upstream catalog APIs."""

from cinecache.infrastructure.http.simkl_client import SimklClient

__all__ = ["SimklClient"]
