"""In-memory response cache with per-entry TTL.

Staleness is checked lazily on read: an expired entry is deleted the first
time someone asks for it. There is no background sweep. An optional item
bound evicts the least recently used entry.
"""

import logging
import time
from collections import OrderedDict
from dataclasses import dataclass
from typing import Any, Callable, Optional

from alumlink.domain.interfaces.cache import CacheService
from alumlink.domain.models.common import CacheKey, DEFAULT_CACHE_TTL_MS

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CacheEntry:
    """Internal representation of a cached value."""
    data: Any
    timestamp: float  # seconds, from the cache's clock
    ttl_ms: int

    def is_expired(self, now: float) -> bool:
        return (now - self.timestamp) * 1000 > self.ttl_ms


class ResponseCache(CacheService):
    """TTL keyed store of previously fetched results."""

    def __init__(
        self,
        default_ttl_ms: int = DEFAULT_CACHE_TTL_MS,
        max_items: Optional[int] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        """Initializes the cache.

        Args:
            default_ttl_ms: TTL used when set() is called without one.
            max_items: Optional bound; None means unbounded.
            clock: Monotonic time source in seconds (tests inject a fake).
        """
        if max_items is not None and max_items < 1:
            raise ValueError(f"max_items must be >= 1, got {max_items}")
        self._entries: "OrderedDict[CacheKey, CacheEntry]" = OrderedDict()
        self.default_ttl_ms = default_ttl_ms
        self.max_items = max_items
        self._clock = clock
        logger.info(f"ResponseCache initialized (default_ttl={default_ttl_ms}ms, max_items={max_items or 'unbounded'})")

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    async def get(self, key: CacheKey, default: Any = None) -> Optional[Any]:
        entry = self._entries.get(key)
        if entry is None:
            logger.debug(f"Cache miss for key: {key}")
            return default

        if entry.is_expired(self._clock()):
            del self._entries[key]
            logger.debug(f"Cache entry expired for key: {key}. Removed.")
            return default

        if self.max_items is not None:
            self._entries.move_to_end(key)
        logger.debug(f"Cache hit for key: {key}")
        return entry.data

    async def set(self, key: CacheKey, value: Any, ttl_ms: Optional[int] = None) -> None:
        ttl = self.default_ttl_ms if ttl_ms is None else ttl_ms
        self._entries[key] = CacheEntry(data=value, timestamp=self._clock(), ttl_ms=ttl)
        self._entries.move_to_end(key)
        self._enforce_bound()
        logger.debug(f"Stored item in cache: key={key}, ttl={ttl}ms")

    async def delete(self, key: CacheKey) -> None:
        if self._entries.pop(key, None) is not None:
            logger.debug(f"Deleted item from cache: key={key}")

    async def clear(self) -> None:
        self._entries.clear()
        logger.info("Cleared response cache.")

    def _enforce_bound(self) -> None:
        if self.max_items is None:
            return
        while len(self._entries) > self.max_items:
            oldest_key, _ = self._entries.popitem(last=False)
            logger.debug(f"Evicted least recently used cache entry: {oldest_key}")
