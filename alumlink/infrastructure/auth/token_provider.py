"""Token provider selecting between the dev-user blob and the identity provider.

Token acquisition never fails loudly: every problem is logged and turned
into "no token", letting the server answer with a normal 401.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from alumlink.domain.interfaces.auth import IdentitySession, SessionStorage, TokenProvider
from alumlink.domain.models.common import AuthToken

logger = logging.getLogger(__name__)

DEV_USER_KEY = "dev-user"


@dataclass
class ClientRuntime:
    """What the hosting client process exposes for credentials.

    Attributes:
        storage: Local persisted session items.
        identity_session: The identity provider's live session, if loaded.
    """
    storage: Optional[SessionStorage] = None
    identity_session: Optional[IdentitySession] = None


class AuthTokenProvider(TokenProvider):
    """Produces bearer credentials from the client runtime."""

    def __init__(self, runtime: Optional[ClientRuntime], local_identity_mode: bool = False):
        """Initializes the provider.

        Args:
            runtime: The client runtime; None means a non-client context.
            local_identity_mode: Use the stored dev-user blob instead of the
                identity provider session.
        """
        self.runtime = runtime
        self._local_identity_mode = local_identity_mode
        logger.debug(f"AuthTokenProvider initialized: runtime={'yes' if runtime else 'no'}, local_identity_mode={local_identity_mode}")

    @property
    def is_local_identity_mode(self) -> bool:
        return self._local_identity_mode

    async def get_auth_token(self) -> Optional[AuthToken]:
        if self.runtime is None:
            return None

        if self._local_identity_mode:
            return self._read_dev_user()

        session = self.runtime.identity_session
        if session is None:
            logger.debug("No identity provider session available; proceeding without token.")
            return None
        try:
            token = await session.get_token()
        except Exception as e:
            logger.warning(f"Could not get identity provider token: {e}")
            return None
        return AuthToken(token) if token else None

    def _read_dev_user(self) -> Optional[AuthToken]:
        storage = self.runtime.storage
        if storage is None:
            return None
        try:
            dev_user = storage.get_item(DEV_USER_KEY)
        except Exception as e:
            logger.warning(f"Could not get dev user: {e}")
            return None
        return AuthToken(dev_user) if dev_user else None


SESSION_TOKEN_KEY = "session-token"


class StoredSessionToken(IdentitySession):
    """Identity session backed by a token saved in session storage.

    Used by the CLI, where no interactive identity provider is loaded.
    """

    def __init__(self, storage: SessionStorage):
        self.storage = storage

    async def get_token(self) -> Optional[str]:
        return self.storage.get_item(SESSION_TOKEN_KEY)
