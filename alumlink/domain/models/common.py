"""Defines common Value Objects used across the client.

These objects represent simple values like endpoints, cache keys and auth
tokens, plus the per-call retry policy handed to the resilience layer.
"""

from dataclasses import dataclass
from typing import Any, Dict, NewType, Optional, TypedDict

# === Core Value Objects ===

# Using NewType for semantic clarity, although they are strings at runtime.
Endpoint = NewType("Endpoint", str)            # Path below /api, e.g. '/alumni'
AuthToken = NewType("AuthToken", str)          # Bearer token or dev-user blob
CacheKey = NewType("CacheKey", str)            # Unique key for a cache entry
QueryParams = NewType("QueryParams", Dict[str, Any])  # Flat key/value query mapping

# === Defaults ===
DEFAULT_RETRY_COUNT = 2
DEFAULT_RETRY_DELAY_MS = 1000
DEFAULT_CACHE_TTL_MS = 5 * 60 * 1000  # 5 minutes


@dataclass(frozen=True)
class RetryPolicy:
    """Value Object describing how one call should be retried and cached."""
    retry_count: int = DEFAULT_RETRY_COUNT
    retry_delay_ms: int = DEFAULT_RETRY_DELAY_MS
    fallback_to_substitute: bool = True
    cache_key: Optional[CacheKey] = None
    cache_ttl_ms: int = DEFAULT_CACHE_TTL_MS

    def __post_init__(self) -> None:
        if self.retry_count < 0:
            raise ValueError(f"retry_count must be >= 0, got {self.retry_count}")
        if self.retry_delay_ms < 0:
            raise ValueError(f"retry_delay_ms must be >= 0, got {self.retry_delay_ms}")

    @property
    def max_attempts(self) -> int:
        """Upper bound on invocations, including the one post-fallback replay."""
        return self.retry_count + 2 if self.fallback_to_substitute else self.retry_count + 1


# --- Structured Data ---
class Pagination(TypedDict):
    """Pagination block returned alongside list responses."""
    page: int
    limit: int
    total: int
    totalPages: int


class PaginatedResponse(TypedDict):
    """List response shape produced by the substitute backend."""
    data: list
    pagination: Pagination
    success: bool
