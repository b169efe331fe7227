"""Interface for the component that owns the client's routing mode."""

import abc


class ModeController(abc.ABC):
    """Reports the effective mode and performs the REAL -> SUBSTITUTE degrade."""

    @property
    @abc.abstractmethod
    def is_using_real_api(self) -> bool:
        pass

    @abc.abstractmethod
    def fall_back_to_substitute(self, reason: str = "") -> None:
        """Switches routing to the substitute backend. Never switches back."""
        pass
