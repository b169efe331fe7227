"""Domain Events related to API calls, mode switches and resilience.

Emitted by the resilience controller and the API facade. Listeners are
optional; by default events are only logged at DEBUG level.
"""

from dataclasses import dataclass, field
import logging
import time
from typing import Callable, Optional

logger = logging.getLogger(__name__)


@dataclass
class DomainEvent:
    """Base class for domain events."""
    pass


EventListener = Callable[[DomainEvent], None]

# --- Specific API Events ---

@dataclass
class ApiCallFailed(DomainEvent):
    """Event triggered when one attempt of a call fails."""
    attempt_number: int
    error_code: str
    error_message: str
    status_code: int = 0
    cache_key: Optional[str] = None
    timestamp: float = field(default_factory=time.time)

@dataclass
class RetryScheduled(DomainEvent):
    """Event triggered when a retry is scheduled for a failed call."""
    attempt_number: int
    delay_seconds: float
    cache_key: Optional[str] = None
    timestamp: float = field(default_factory=time.time)

@dataclass
class SubstituteFallbackTriggered(DomainEvent):
    """Event triggered when repeated failure degrades the client to substitute mode."""
    reason: str
    attempts: int
    cache_key: Optional[str] = None
    timestamp: float = field(default_factory=time.time)

@dataclass
class ApiModeChanged(DomainEvent):
    """Event triggered whenever the effective routing mode changes."""
    previous_mode: str
    new_mode: str
    source: str  # 'operator', 'fallback', 'health_check', 'initialize'
    timestamp: float = field(default_factory=time.time)

@dataclass
class BackendHealthChecked(DomainEvent):
    """Event triggered after a health probe against the real backend."""
    healthy: bool
    timestamp: float = field(default_factory=time.time)


def dispatch_event(event: DomainEvent, listener: Optional[EventListener] = None) -> None:
    """Logs the event and forwards it to the listener, if any.

    Listener failures are logged and never interrupt the caller.
    """
    logger.debug(f"EVENT: {event}")
    if listener is None:
        return
    try:
        listener(event)
    except Exception as e:
        logger.error(f"Event listener failed for {type(event).__name__}: {e}", exc_info=True)
