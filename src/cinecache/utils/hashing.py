"""Hashing utilities for cache key generation."""

import hashlib
import json
from collections.abc import Mapping
from typing import Any


def hash_params(params: Mapping[str, Any] | None) -> str:
    """Create a deterministic hash of request parameters.

    Keys are sorted before serializing, so two mappings holding the
    same pairs in a different insertion order hash identically.

    Args:
        params: Query parameters with primitive values.

    Returns:
        A hexadecimal hash string (first 16 chars of SHA-256).
    """
    if not params:
        return "none"

    normalized = json.dumps(dict(params), sort_keys=True, default=str)
    return hashlib.sha256(normalized.encode()).hexdigest()[:16]


def slugify(value: str) -> str:
    """Lowercase a value and replace whitespace runs with dashes.

    Args:
        value: Free-text value, e.g. a genre name.

    Returns:
        The slug, e.g. ``"science-fiction"``.
    """
    return "-".join(value.lower().split())
