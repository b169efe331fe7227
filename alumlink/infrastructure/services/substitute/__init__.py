"""In-memory substitute backend.

Same-interface stand-ins for the network services, used when the real
backend is disabled or unhealthy.
"""

from dataclasses import dataclass, field

from alumlink.infrastructure.services.substitute.alumni import SubstituteAlumniService
from alumlink.infrastructure.services.substitute.base import NO_LATENCY, SubstituteConfig
from alumlink.infrastructure.services.substitute.donations import SubstituteDonationsService
from alumlink.infrastructure.services.substitute.events import SubstituteEventsService


@dataclass
class SubstituteBackend:
    """Bundle of substitute services. There is no auth substitute."""
    alumni: SubstituteAlumniService = field(default_factory=SubstituteAlumniService)
    events: SubstituteEventsService = field(default_factory=SubstituteEventsService)
    donations: SubstituteDonationsService = field(default_factory=SubstituteDonationsService)

    @classmethod
    def create(cls, config: SubstituteConfig = NO_LATENCY) -> "SubstituteBackend":
        return cls(
            alumni=SubstituteAlumniService(config),
            events=SubstituteEventsService(config),
            donations=SubstituteDonationsService(config),
        )
