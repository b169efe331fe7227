"""ApiFacade: single entry point that routes domain calls by mode.

Owns the shared ClientMode. Callers ask the facade for a domain service on
every call and get either the network-backed implementation or the
in-memory substitute, depending on operator intent and the last observed
backend health.
"""

import logging
from typing import Any, Dict, Optional, Union

from alumlink.domain.events.api_events import (
    ApiModeChanged,
    BackendHealthChecked,
    EventListener,
    dispatch_event,
)
from alumlink.domain.interfaces.mode import ModeController
from alumlink.domain.interfaces.services import (
    AlumniService,
    AuthService,
    DonationsService,
    EventsService,
)
from alumlink.domain.models.mode import ClientMode, EffectiveMode
from alumlink.infrastructure.http.api_client import ApiClient
from alumlink.infrastructure.services.http_services import RealBackend
from alumlink.infrastructure.services.substitute import SubstituteBackend

logger = logging.getLogger(__name__)


class ApiFacade(ModeController):
    """Routes domain operations to the real backend or the substitute."""

    def __init__(
        self,
        mode: ClientMode,
        api_client: ApiClient,
        real: RealBackend,
        substitute: SubstituteBackend,
        configured_use_real: bool = False,
        event_listener: Optional[EventListener] = None,
    ):
        """Initializes the facade.

        Args:
            mode: Shared routing state. The facade is its only writer.
            api_client: Executor used for health probes.
            real: Network-backed services.
            substitute: In-memory services.
            configured_use_real: Startup intent read from configuration.
            event_listener: Optional receiver for mode and health events.
        """
        self.mode = mode
        self.api_client = api_client
        self.real = real
        self.substitute = substitute
        self.configured_use_real = configured_use_real
        self.event_listener = event_listener

    # --- Mode ---

    @property
    def is_using_real_api(self) -> bool:
        return self.mode.is_using_real_api

    @property
    def is_using_mock_api(self) -> bool:
        return not self.mode.is_using_real_api

    def _set_use_real(self, use_real: bool, source: str) -> None:
        previous = self.mode.effective
        self.mode.use_real = use_real
        current = self.mode.effective
        if previous != current:
            logger.info(f"API mode changed: {previous.value} -> {current.value} ({source})")
        dispatch_event(ApiModeChanged(previous.value, current.value, source), self.event_listener)

    def set_api_mode(self, use_real: bool) -> None:
        """Operator override of the routing intent. Does not re-probe."""
        self._set_use_real(use_real, "operator")

    def fall_back_to_substitute(self, reason: str = "") -> None:
        if not self.mode.use_real:
            return
        logger.warning(f"Falling back to substitute backend: {reason or 'real API unavailable'}")
        self._set_use_real(False, "fallback")

    async def _probe(self) -> bool:
        try:
            return await self.api_client.check_backend_health()
        except Exception as e:
            logger.error(f"Backend health probe raised unexpectedly: {e}", exc_info=True)
            return False

    async def check_backend_health(self) -> bool:
        """Probes the backend and records the result.

        Returns True without probing when the real API is not requested.
        Never raises.
        """
        if not self.mode.use_real:
            return True
        healthy = await self._probe()
        self.mode.backend_available = healthy
        dispatch_event(BackendHealthChecked(healthy), self.event_listener)
        if not healthy:
            logger.warning("Backend health check failed; requests will use the substitute backend")
        return healthy

    async def initialize(self) -> EffectiveMode:
        """Applies the configured mode, degrading to the substitute on a failed probe."""
        if self.configured_use_real:
            self.mode.use_real = True
            if not await self.check_backend_health():
                logger.warning("Real API requested but backend is unreachable; using substitute backend")
                self._set_use_real(False, "initialize")
        logger.info(f"API client initialized in {self.mode.effective.value} mode")
        return self.mode.effective

    async def switch_to_real_api(self) -> bool:
        """Switches to the real API only if the backend answers the health probe."""
        healthy = await self._probe()
        self.mode.backend_available = healthy
        dispatch_event(BackendHealthChecked(healthy), self.event_listener)
        if not healthy:
            logger.warning("Cannot switch to real API: backend health check failed")
            return False
        self._set_use_real(True, "operator")
        return True

    def switch_to_mock_api(self) -> None:
        self._set_use_real(False, "operator")

    def status(self) -> Dict[str, Any]:
        return {
            "mode": self.mode.effective.value,
            "use_real_api": self.mode.use_real,
            "backend_available": self.mode.backend_available,
            "api_url": self.api_client.base_url,
        }

    # --- Domain accessors ---

    @property
    def alumni(self) -> AlumniService:
        return self.real.alumni if self.is_using_real_api else self.substitute.alumni

    @property
    def events(self) -> EventsService:
        return self.real.events if self.is_using_real_api else self.substitute.events

    @property
    def donations(self) -> DonationsService:
        return self.real.donations if self.is_using_real_api else self.substitute.donations

    @property
    def auth(self) -> Union[AuthService, AlumniService]:
        """Auth service. In substitute mode this is the alumni substitute.

        There is no auth substitute; auth operations called in substitute
        mode fail with AttributeError.
        """
        if self.is_using_real_api:
            return self.real.auth
        logger.warning("No substitute auth service; returning the alumni substitute")
        return self.substitute.alumni
