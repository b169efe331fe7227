"""Command Handler: Orchestrates CLI command execution.

Receives commands from the main entry point (main.py) and delegates the
work to the API facade, the alumni profile service and the resilience
controller. Every failure is reported through the UserInterface; nothing
propagates back to Typer.
"""

import logging
from typing import Any, Awaitable, Callable, Dict, Optional

from alumlink.core.api_facade import ApiFacade
from alumlink.core.services.alumni_profile_service import AlumniProfileService
from alumlink.domain.interfaces.auth import SessionStorage
from alumlink.domain.interfaces.cache import CacheService
from alumlink.domain.interfaces.user_interface import UserInterface
from alumlink.domain.models.common import RetryPolicy
from alumlink.domain.models.errors import ApiError
from alumlink.infrastructure.auth.session_storage import save_mode_preference
from alumlink.infrastructure.resilience.api_retry import ResilienceController

logger = logging.getLogger(__name__)

# Raw requests have no substitute to fall back to.
RAW_REQUEST_POLICY = RetryPolicy(fallback_to_substitute=False)


class CommandHandler:
    """Handles incoming commands and delegates to appropriate services."""

    def __init__(
        self,
        facade: ApiFacade,
        controller: ResilienceController,
        profile_service: AlumniProfileService,
        cache_service: CacheService,
        ui: UserInterface,
        session_storage: Optional[SessionStorage] = None,
    ):
        """Initializes the CommandHandler with required services."""
        self.facade = facade
        self.controller = controller
        self.profile_service = profile_service
        self.cache_service = cache_service
        self.ui = ui
        self.session_storage = session_storage
        self._initialized = False

    async def _ensure_initialized(self) -> None:
        if not self._initialized:
            await self.facade.initialize()
            self._initialized = True

    async def _run(self, description: str, work: Callable[[], Awaitable[None]]) -> bool:
        """Runs work after initialization and reports failures. Returns success."""
        try:
            await self._ensure_initialized()
            await work()
            return True
        except ApiError as e:
            logger.error(f"{description} failed: [{e.code}] {e.message}")
            self.ui.display_error(f"{description} failed: {e.message}")
        except Exception as e:
            logger.error(f"{description} failed unexpectedly: {e}", exc_info=True)
            self.ui.display_error(f"{description} failed: {e}")
        return False

    def _save_mode(self, use_real: bool) -> None:
        if self.session_storage is not None:
            save_mode_preference(self.session_storage, use_real)

    async def handle_status(self) -> None:
        logger.info("Handling 'status' command")

        async def work() -> None:
            self.ui.display_status(self.facade.status())

        await self._run("Status", work)

    async def handle_health(self) -> None:
        """Probes the backend regardless of the current mode."""
        logger.info("Handling 'health' command")

        async def work() -> None:
            healthy = await self.facade.api_client.check_backend_health()
            if healthy:
                self.ui.display_info(f"Backend at {self.facade.api_client.base_url} is healthy.")
            else:
                self.ui.display_warning(f"Backend at {self.facade.api_client.base_url} is not reachable.")

        await self._run("Health check", work)

    async def handle_use_real(self) -> None:
        logger.info("Handling 'use-real' command")

        async def work() -> None:
            if await self.facade.switch_to_real_api():
                self._save_mode(True)
                self.ui.display_info("Switched to the real API.")
            else:
                self.ui.display_warning("Backend health check failed; staying on the substitute backend.")
            self.ui.display_status(self.facade.status())

        await self._run("Switch to real API", work)

    async def handle_use_mock(self) -> None:
        logger.info("Handling 'use-mock' command")

        async def work() -> None:
            self.facade.switch_to_mock_api()
            self._save_mode(False)
            self.ui.display_info("Switched to the substitute backend.")
            self.ui.display_status(self.facade.status())

        await self._run("Switch to substitute backend", work)

    async def handle_get(self, endpoint: str, params: Optional[Dict[str, Any]] = None) -> None:
        """Issues a raw GET against the real backend with retries."""
        logger.info(f"Handling 'get' command for endpoint: {endpoint}")
        if not endpoint.startswith('/'):
            endpoint = f"/{endpoint}"

        async def work() -> None:
            result = await self.controller.execute(
                lambda: self.facade.api_client.get(endpoint, params), RAW_REQUEST_POLICY
            )
            self.ui.display_output(result, title=f"GET /api{endpoint}")

        await self._run(f"GET {endpoint}", work)

    async def handle_alumni(self, search: Optional[str] = None, limit: int = 10) -> None:
        logger.info(f"Handling 'alumni' command (search={search!r}, limit={limit})")

        async def work() -> None:
            if search:
                result = await self.profile_service.search_alumni(search)
            else:
                result = await self.profile_service.get_alumni(limit=limit)
            self.ui.display_output(result, title=f"Alumni ({self.facade.mode.effective.value})")

        await self._run("Alumni lookup", work)

    async def handle_profile(self, profile_id: str) -> None:
        logger.info(f"Handling 'profile' command for id: {profile_id}")

        async def work() -> None:
            result = await self.profile_service.get_alumni_by_id(profile_id)
            self.ui.display_output(result, title=f"Alumni profile {profile_id}")

        await self._run("Profile lookup", work)

    async def handle_clear_cache(self) -> None:
        logger.info("Handling 'clear-cache' command")
        try:
            await self.cache_service.clear()
            self.ui.display_info("Response cache cleared.")
        except Exception as e:
            logger.error(f"Failed to clear cache: {e}", exc_info=True)
            self.ui.display_error(f"Failed to clear cache: {e}")
