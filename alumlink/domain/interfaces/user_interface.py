"""Interface for reporting to the operator.

Defines the contract for displaying results, errors, warnings and the
current client status, allowing different front ends (console, tests).
"""

import abc
from typing import Any


class UserInterface(abc.ABC):
    """Abstract Base Class for operator-facing output."""

    @abc.abstractmethod
    def display_output(self, output: Any, **kwargs: Any) -> None:
        """Displays a decoded API payload to the user.

        Args:
            output: The payload (usually a dict or list) to display.
            **kwargs: Additional arguments for formatting (e.g., title).
        """
        pass

    @abc.abstractmethod
    def display_error(self, error_message: str, **kwargs: Any) -> None:
        """Displays an error message to the user.

        Args:
            error_message: The error message string.
            **kwargs: Additional arguments for formatting.
        """
        pass

    @abc.abstractmethod
    def display_warning(self, warning_message: str, **kwargs: Any) -> None:
        """Displays a warning message to the user."""
        pass

    @abc.abstractmethod
    def display_info(self, info_message: str, **kwargs: Any) -> None:
        """Displays an informational message to the user."""
        pass

    def display_status(self, status: dict, **kwargs: Any) -> None:
        """Displays the client's routing status (mode, health, base URL).

        Args:
            status: Mapping of status field names to values.
        """
        pass
