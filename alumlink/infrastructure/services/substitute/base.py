"""Shared behaviour for the in-memory substitute services.

Simulated latency and error injection, list helpers (text filtering,
sorting, pagination) and the response envelopes the substitute returns.
Envelopes carry copies, so callers never hold the in-memory store.
"""

import asyncio
import copy
import logging
import random
import time
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional, Sequence

from alumlink.domain.models.common import PaginatedResponse
from alumlink.domain.models.errors import NETWORK_ERROR, SubstituteError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SubstituteConfig:
    """Latency and failure simulation settings.

    Attributes:
        min_delay_ms: Lower bound of the simulated latency.
        max_delay_ms: Upper bound of the simulated latency.
        error_rate: Probability in [0, 1] that a read fails with NETWORK_ERROR.
    """
    min_delay_ms: int = 200
    max_delay_ms: int = 800
    error_rate: float = 0.0

    def __post_init__(self) -> None:
        if self.min_delay_ms < 0 or self.max_delay_ms < self.min_delay_ms:
            raise ValueError(f"Invalid delay range: {self.min_delay_ms}-{self.max_delay_ms}ms")
        if not 0.0 <= self.error_rate <= 1.0:
            raise ValueError(f"error_rate must be within [0, 1], got {self.error_rate}")


NO_LATENCY = SubstituteConfig(min_delay_ms=0, max_delay_ms=0, error_rate=0.0)


class SubstituteService:
    """Base class providing simulation and response helpers."""

    def __init__(self, config: SubstituteConfig = NO_LATENCY, rng: Optional[random.Random] = None):
        self.config = config
        self._rng = rng or random.Random()

    async def _simulate(self, operation: str) -> None:
        """Sleeps for the configured latency and maybe raises a simulated failure."""
        logger.debug(f"[Substitute] {type(self).__name__}.{operation}")
        if self.config.max_delay_ms > 0:
            delay_ms = self._rng.uniform(self.config.min_delay_ms, self.config.max_delay_ms)
            await asyncio.sleep(delay_ms / 1000)
        if self.config.error_rate and self._rng.random() < self.config.error_rate:
            raise SubstituteError(
                "Network connection failed. Please check your internet connection.",
                NETWORK_ERROR,
            )


def now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def generate_id() -> str:
    return f"{int(time.time() * 1000):x}{uuid.uuid4().hex[:8]}"


def success_response(data: Any, message: Optional[str] = None) -> Dict[str, Any]:
    response: Dict[str, Any] = {"data": copy.deepcopy(data), "success": True}
    if message:
        response["message"] = message
    return response


def paginate(items: Sequence[Any], page: int = 1, limit: int = 10) -> PaginatedResponse:
    page = max(page, 1)
    limit = max(limit, 1)
    start = (page - 1) * limit
    return PaginatedResponse(
        data=copy.deepcopy(list(items[start:start + limit])),
        pagination={
            "page": page,
            "limit": limit,
            "total": len(items),
            "totalPages": -(-len(items) // limit),
        },
        success=True,
    )


def filter_by_text(items: Iterable[Dict[str, Any]], search: Optional[str], fields: Sequence[str]) -> List[Dict[str, Any]]:
    """Keeps items where any field contains search, case-insensitively.

    List-valued fields match when any element contains the term.
    """
    items = list(items)
    if not search:
        return items
    needle = search.lower()

    def matches(value: Any) -> bool:
        if isinstance(value, (list, tuple)):
            return any(matches(v) for v in value)
        return value is not None and needle in str(value).lower()

    return [item for item in items if any(matches(item.get(field)) for field in fields)]


def sort_by_field(items: Iterable[Dict[str, Any]], field: str, direction: str = "asc") -> List[Dict[str, Any]]:
    """Sorts by field; items missing the field go last regardless of direction."""
    items = list(items)
    present = [item for item in items if item.get(field) is not None]
    missing = [item for item in items if item.get(field) is None]
    present.sort(key=lambda item: item[field], reverse=direction == "desc")
    return present + missing


def count_by(items: Iterable[Dict[str, Any]], field: str) -> Dict[str, int]:
    counts: Dict[str, int] = {}
    for item in items:
        value = item.get(field)
        values = value if isinstance(value, (list, tuple)) else [value]
        for v in values:
            if v is None:
                continue
            key = str(v)
            counts[key] = counts.get(key, 0) + 1
    return counts


def top_counts(counts: Dict[str, int], label: str, limit: int) -> List[Dict[str, Any]]:
    ranked = sorted(counts.items(), key=lambda kv: kv[1], reverse=True)[:limit]
    return [{label: name, "count": count} for name, count in ranked]
