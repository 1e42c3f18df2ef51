"""Exception hierarchy for cinecache."""


class CineCacheError(Exception):
    """Base class for all cinecache errors."""

    pass


class ConfigurationError(CineCacheError):
    """Raised when required configuration is missing or invalid."""

    pass


class CacheBackendError(CineCacheError):
    """Raised by cache backends when the underlying storage is unavailable.

    CacheService absorbs this error: a failed read is treated as a miss
    and a failed write as "not cached".
    """

    pass


class MappingError(CineCacheError):
    """Raised when an upstream item cannot be mapped to an entity."""

    pass
