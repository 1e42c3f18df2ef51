"""Cache entry entity."""

from dataclasses import dataclass
from datetime import timedelta


@dataclass(frozen=True)
class CacheEntry:
    """Immutable cache entry value object.

    Represents a stored value together with the time it was written
    (in seconds on the owning store's clock) and its time-to-live.
    Entries are only ever replaced whole.
    """

    key: str
    value: bytes
    stored_at: float
    ttl: timedelta | None = None

    @property
    def expires_at(self) -> float | None:
        """Calculate expiration time.

        Returns:
            The clock value at which this entry expires, or None if no TTL.
        """
        if self.ttl is None:
            return None
        return self.stored_at + self.ttl.total_seconds()

    def is_expired(self, now: float) -> bool:
        """Check if entry has expired.

        An entry is valid while ``now < stored_at + ttl``.

        Args:
            now: Current clock value.

        Returns:
            True if the entry has expired, False otherwise.
        """
        if self.expires_at is None:
            return False
        return now >= self.expires_at

    @classmethod
    def create(
        cls,
        key: str,
        value: bytes,
        now: float,
        ttl: timedelta | None = None,
    ) -> "CacheEntry":
        """Factory method to create a new cache entry.

        Args:
            key: The cache key.
            value: The value to cache.
            now: Current clock value, recorded as the store time.
            ttl: Optional time-to-live.

        Returns:
            A new CacheEntry instance.
        """
        return cls(key=key, value=value, stored_at=now, ttl=ttl)
