"""Interfaces for credential sources.

The client runtime exposes two places a credential can come from: a local
key/value session store (the dev-user blob) and the identity provider's
session object. The token provider consults them; neither is required.
"""

import abc
from typing import Optional

from ..models.common import AuthToken


class SessionStorage(abc.ABC):
    """Locally persisted session items."""

    @abc.abstractmethod
    def get_item(self, key: str) -> Optional[str]:
        """Returns the raw stored string for key, or None when absent.

        Raises:
            OSError, ValueError: When the underlying store cannot be read.
        """
        pass

    @abc.abstractmethod
    def set_item(self, key: str, value: str) -> None:
        """Stores value under key, keeping other items.

        Raises:
            OSError, ValueError: When the underlying store cannot be written.
        """
        pass


class IdentitySession(abc.ABC):
    """A live session held by the identity provider's client library."""

    @abc.abstractmethod
    async def get_token(self) -> Optional[str]:
        """Returns a fresh session token, or None."""
        pass


class TokenProvider(abc.ABC):
    """Produces a credential for outgoing requests."""

    @property
    @abc.abstractmethod
    def is_local_identity_mode(self) -> bool:
        """True when the dev-user blob is used instead of a provider session."""
        pass

    @abc.abstractmethod
    async def get_auth_token(self) -> Optional[AuthToken]:
        """Returns a token or None. Never raises."""
        pass
