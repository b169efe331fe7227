import pytest

from alumlink.domain.interfaces.cache import MISSING
from alumlink.domain.models.common import CacheKey
from alumlink.infrastructure.cache.caching_service import ResponseCache

KEY = CacheKey("alumni-profile-1")


@pytest.mark.asyncio
async def test_get_returns_fresh_entry(cache: ResponseCache, clock):
    await cache.set(KEY, {"id": "1"}, ttl_ms=1000)
    clock.advance_ms(1000)  # exactly at the TTL is still fresh
    assert await cache.get(KEY) == {"id": "1"}


@pytest.mark.asyncio
async def test_expired_entry_returns_none_and_is_removed(cache: ResponseCache, clock):
    await cache.set(KEY, {"id": "1"}, ttl_ms=1000)
    clock.advance_ms(1001)

    assert await cache.get(KEY) is None
    assert KEY not in cache
    assert len(cache) == 0


@pytest.mark.asyncio
async def test_missing_key_returns_none(cache: ResponseCache):
    assert await cache.get(CacheKey("nope")) is None


@pytest.mark.asyncio
async def test_set_without_ttl_uses_default(clock):
    cache = ResponseCache(default_ttl_ms=500, clock=clock)
    await cache.set(KEY, "value")
    clock.advance_ms(501)
    assert await cache.get(KEY) is None


@pytest.mark.asyncio
async def test_set_replaces_entry_and_restarts_ttl(cache: ResponseCache, clock):
    await cache.set(KEY, "old", ttl_ms=1000)
    clock.advance_ms(800)
    await cache.set(KEY, "new", ttl_ms=1000)
    clock.advance_ms(800)
    assert await cache.get(KEY) == "new"


@pytest.mark.asyncio
async def test_falsy_values_are_cached(cache: ResponseCache):
    await cache.set(KEY, [])
    assert await cache.get(KEY) == []


@pytest.mark.asyncio
async def test_delete_and_clear(cache: ResponseCache):
    await cache.set(CacheKey("a"), 1)
    await cache.set(CacheKey("b"), 2)

    await cache.delete(CacheKey("a"))
    await cache.delete(CacheKey("missing"))
    assert await cache.get(CacheKey("a")) is None
    assert await cache.get(CacheKey("b")) == 2

    await cache.clear()
    assert len(cache) == 0


@pytest.mark.asyncio
async def test_bounded_cache_evicts_least_recently_used(clock):
    cache = ResponseCache(max_items=2, clock=clock)
    await cache.set(CacheKey("a"), 1)
    await cache.set(CacheKey("b"), 2)
    await cache.get(CacheKey("a"))  # 'b' is now least recently used
    await cache.set(CacheKey("c"), 3)

    assert CacheKey("b") not in cache
    assert await cache.get(CacheKey("a")) == 1
    assert await cache.get(CacheKey("c")) == 3


def test_invalid_bound_rejected():
    with pytest.raises(ValueError):
        ResponseCache(max_items=0)


@pytest.mark.asyncio
async def test_cached_none_is_distinguishable_from_miss(cache):
    await cache.set(KEY, None)

    assert await cache.get(KEY, default=MISSING) is None
    assert await cache.get(CacheKey("nope"), default=MISSING) is MISSING
