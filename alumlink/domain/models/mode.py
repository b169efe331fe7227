"""Process-wide routing state shared by the facade and the resilience layer."""

from dataclasses import dataclass
from enum import Enum


class EffectiveMode(str, Enum):
    REAL = "REAL"
    SUBSTITUTE = "SUBSTITUTE"


@dataclass
class ClientMode:
    """Operator intent plus last observed backend health.

    Only ApiFacade writes these fields; everything else holds a reference
    and reads them.
    """
    use_real: bool = False
    backend_available: bool = False

    @property
    def is_using_real_api(self) -> bool:
        return self.use_real and self.backend_available

    @property
    def effective(self) -> EffectiveMode:
        return EffectiveMode.REAL if self.is_using_real_api else EffectiveMode.SUBSTITUTE
