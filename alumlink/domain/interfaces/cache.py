"""Interface for response caching.

Defines the contract for storing, retrieving and invalidating previously
fetched results under a caller-supplied key with a time-to-live.
"""

import abc
from typing import Any, Optional

from ..models.common import CacheKey

# Returned by get() on a miss when passed as the default, so a cached None
# can be told apart from an absent key.
MISSING = object()


class CacheService(abc.ABC):
    """Abstract Base Class for caching operations."""

    @abc.abstractmethod
    async def get(self, key: CacheKey, default: Any = None) -> Optional[Any]:
        """Retrieves an item from the cache asynchronously.

        Args:
            key: The cache key to retrieve.
            default: Value returned when the key is absent or stale.

        Returns:
            The cached item if present and fresh, otherwise default. Stale
            entries are removed as a side effect.
        """
        pass

    @abc.abstractmethod
    async def set(self, key: CacheKey, value: Any, ttl_ms: Optional[int] = None) -> None:
        """Stores (or overwrites) an item asynchronously.

        Args:
            key: The cache key to store the item under.
            value: The item to store.
            ttl_ms: Time-to-live in milliseconds (uses the default if None).
        """
        pass

    @abc.abstractmethod
    async def delete(self, key: CacheKey) -> None:
        """Deletes an item if present."""
        pass

    @abc.abstractmethod
    async def clear(self) -> None:
        """Removes every item."""
        pass
