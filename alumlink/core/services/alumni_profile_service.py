"""Application service for alumni profile operations.

Runs every alumni call through the resilience controller with a policy
suited to the operation, and smooths over the differences between the
real backend's and the substitute's response shapes.
"""

import json
import logging
from typing import Any, Dict, Optional

from alumlink.core.api_facade import ApiFacade
from alumlink.domain.models.common import CacheKey, RetryPolicy
from alumlink.domain.models.errors import VALIDATION_ERROR, ApiError
from alumlink.infrastructure.resilience.api_retry import ResilienceController

logger = logging.getLogger(__name__)

PROFILE_TTL_MS = 5 * 60 * 1000
LIST_TTL_MS = 2 * 60 * 1000
SEARCH_TTL_MS = 60 * 1000
STATS_TTL_MS = 10 * 60 * 1000
WRITE_RETRY_COUNT = 1


def _as_data(response: Any) -> Dict[str, Any]:
    if isinstance(response, dict) and "data" in response:
        return response
    return {"data": response}


def _write_policy() -> RetryPolicy:
    return RetryPolicy(retry_count=WRITE_RETRY_COUNT)


class AlumniProfileService:
    """Alumni profile reads and writes with caching, retry and fallback."""

    def __init__(self, facade: ApiFacade, controller: ResilienceController):
        self.facade = facade
        self.controller = controller

    @staticmethod
    def validate_profile_id(profile_id: Any) -> bool:
        return isinstance(profile_id, str) and profile_id.strip() != ""

    def _require_valid_id(self, profile_id: Any) -> None:
        if not self.validate_profile_id(profile_id):
            raise ApiError(f"Invalid profile id: {profile_id!r}", status_code=400, code=VALIDATION_ERROR)

    async def get_alumni_by_id(self, profile_id: str) -> Dict[str, Any]:
        self._require_valid_id(profile_id)
        policy = RetryPolicy(cache_key=CacheKey(f"alumni-profile-{profile_id}"), cache_ttl_ms=PROFILE_TTL_MS)
        response = await self.controller.execute(lambda: self.facade.alumni.get_alumni_by_id(profile_id), policy)
        return _as_data(response)

    async def get_alumni(self, filters: Optional[Dict[str, Any]] = None, page: int = 1, limit: int = 10) -> Dict[str, Any]:
        filters = filters or {}
        key = json.dumps({**filters, "page": page, "limit": limit}, sort_keys=True, default=str)
        policy = RetryPolicy(cache_key=CacheKey(f"alumni-list-{key}"), cache_ttl_ms=LIST_TTL_MS)
        response = await self.controller.execute(
            lambda: self.facade.alumni.get_alumni(filters, page=page, limit=limit), policy
        )
        if isinstance(response, dict) and "data" not in response and "alumni" in response:
            return {**response, "data": response["alumni"]}
        return _as_data(response)

    async def search_alumni(self, query: str) -> Dict[str, Any]:
        policy = RetryPolicy(cache_key=CacheKey(f"alumni-search-{query}"), cache_ttl_ms=SEARCH_TTL_MS)
        response = await self.controller.execute(lambda: self.facade.alumni.search_alumni(query), policy)
        return _as_data(response)

    async def get_alumni_stats(self) -> Any:
        policy = RetryPolicy(cache_key=CacheKey("alumni-stats"), cache_ttl_ms=STATS_TTL_MS)
        return await self.controller.execute(lambda: self.facade.alumni.get_alumni_stats(), policy)

    async def create_alumni(self, data: Dict[str, Any]) -> Dict[str, Any]:
        response = await self.controller.execute(lambda: self.facade.alumni.create_alumni(data), _write_policy())
        return _as_data(response)

    async def update_alumni(self, profile_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
        self._require_valid_id(profile_id)
        response = await self.controller.execute(
            lambda: self.facade.alumni.update_alumni(profile_id, data), _write_policy()
        )
        # Drop the cached copy so the next read sees the update.
        await self.controller.cache_service.delete(CacheKey(f"alumni-profile-{profile_id}"))
        return _as_data(response)

    async def delete_alumni(self, profile_id: str) -> Dict[str, Any]:
        self._require_valid_id(profile_id)
        result = await self.controller.execute(lambda: self.facade.alumni.delete_alumni(profile_id), _write_policy())
        await self.controller.cache_service.delete(CacheKey(f"alumni-profile-{profile_id}"))
        if isinstance(result, dict) and "message" in result:
            return result
        logger.debug(f"Delete of {profile_id} returned no message; using default")
        return {"message": "Alumni profile deleted successfully"}
