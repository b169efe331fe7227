"""Service for executing API calls with caching, retries and fallback.

Wraps a unit of work (a zero-argument coroutine factory) with:
  1. a cache lookup when the policy names a cache key,
  2. up to retry_count + 1 attempts with linear backoff,
  3. a one-time degrade to the substitute backend on exhaustion, after
     which the same call is replayed once and is routed by the facade.

This is the only place in the client that recovers from failures.
"""

import asyncio
import logging
from typing import Any, Awaitable, Callable, Optional, TypeVar

from alumlink.domain.events.api_events import (
    ApiCallFailed,
    EventListener,
    RetryScheduled,
    SubstituteFallbackTriggered,
    dispatch_event,
)
from alumlink.domain.interfaces.cache import MISSING, CacheService
from alumlink.domain.interfaces.mode import ModeController
from alumlink.domain.models.common import RetryPolicy

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_POLICY = RetryPolicy()


class ResilienceController:
    """Handles call execution with cache consultation, retries, and fallback."""

    def __init__(
        self,
        cache_service: CacheService,
        mode_controller: ModeController,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
        event_listener: Optional[EventListener] = None,
    ):
        """Initializes the controller.

        Args:
            cache_service: Cache consulted before and filled after a call.
            mode_controller: Owner of the routing mode (the API facade).
            sleep: Awaitable sleep used between attempts (tests pass a fake).
            event_listener: Optional receiver for domain events.
        """
        self.cache_service = cache_service
        self.mode_controller = mode_controller
        self._sleep = sleep
        self._event_listener = event_listener
        logger.info("ResilienceController initialized.")

    async def execute(self, call: Callable[[], Awaitable[T]], policy: Optional[RetryPolicy] = None) -> T:
        """Executes call under policy.

        Args:
            call: Zero-argument callable returning a fresh awaitable per invocation.
                It should resolve the facade accessor inside, so a replay after
                fallback reaches the substitute backend.
            policy: Retry/cache policy; defaults to RetryPolicy().

        Returns:
            The call's result, possibly served from cache.

        Raises:
            Exception: The first failure if the post-fallback replay also fails,
                otherwise the last failure once retries are exhausted.
        """
        policy = policy or DEFAULT_POLICY
        cache_key = policy.cache_key

        if cache_key:
            cached = await self.cache_service.get(cache_key, default=MISSING)
            if cached is not MISSING:
                logger.debug(f"Serving cached result for key: {cache_key}")
                return cached

        first_error: Optional[Exception] = None
        last_error: Optional[Exception] = None
        total_attempts = policy.retry_count + 1

        for attempt in range(total_attempts):
            try:
                result = await call()
            except Exception as e:
                last_error = e
                if first_error is None:
                    first_error = e
                logger.error(f"API call failed (attempt {attempt + 1}/{total_attempts}): {e}")
                self._dispatch(ApiCallFailed(
                    attempt_number=attempt + 1,
                    error_code=getattr(e, "code", type(e).__name__),
                    error_message=str(e),
                    status_code=getattr(e, "status_code", 0),
                    cache_key=cache_key,
                ))

                is_last_attempt = attempt == policy.retry_count
                if is_last_attempt and policy.fallback_to_substitute and self.mode_controller.is_using_real_api:
                    return await self._fall_back(call, policy, first_error, attempts=total_attempts)

                if not is_last_attempt:
                    delay_s = policy.retry_delay_ms * (attempt + 1) / 1000
                    logger.warning(f"Retrying in {delay_s:.2f}s (attempt {attempt + 2}/{total_attempts})...")
                    self._dispatch(RetryScheduled(attempt_number=attempt + 1, delay_seconds=delay_s, cache_key=cache_key))
                    await self._sleep(delay_s)
                continue

            if cache_key:
                await self.cache_service.set(cache_key, result, policy.cache_ttl_ms)
            return result

        logger.error(f"All {total_attempts} attempts failed. Last error: {last_error}")
        raise last_error

    async def _fall_back(self, call: Callable[[], Awaitable[T]], policy: RetryPolicy, first_error: Exception, attempts: int) -> T:
        logger.warning("Falling back to substitute services due to API error")
        self.mode_controller.fall_back_to_substitute(reason=str(first_error))
        self._dispatch(SubstituteFallbackTriggered(reason=str(first_error), attempts=attempts, cache_key=policy.cache_key))
        try:
            result = await call()
        except Exception as substitute_error:
            logger.error(f"Substitute backend also failed: {substitute_error}")
            raise first_error from substitute_error

        if policy.cache_key:
            await self.cache_service.set(policy.cache_key, result, policy.cache_ttl_ms)
        return result

    def _dispatch(self, event: Any) -> None:
        dispatch_event(event, self._event_listener)

