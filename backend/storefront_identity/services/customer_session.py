"""Customer Session — explicit per-request view of the session's access token.

Invariants:
    - Holds at most one customerAccessToken; absence means anonymous
    - Authenticated iff a token is present (the storage drops expired cookies on read)
    - commit() is called at most once per response; a second call raises
    - Never logs the token value

Design Decisions:
    - Threaded through handlers as an argument over ambient/global session access
"""

import logging

from storefront_identity.core.boundary_protocols import SessionStorage
from storefront_identity.core.domain_types import SESSION_TOKEN_KEY
from storefront_identity.core.results import AccessToken

logger = logging.getLogger(__name__)


class CustomerSession:
    """Access-token facade over an injected SessionStorage."""

    def __init__(self, storage: SessionStorage):
        self.storage = storage
        self._dirty = False
        self._committed = False

    @property
    def access_token(self) -> str | None:
        token = self.storage.get(SESSION_TOKEN_KEY)
        return token or None

    @property
    def is_authenticated(self) -> bool:
        return self.access_token is not None

    @property
    def is_dirty(self) -> bool:
        return self._dirty

    def set_access_token(self, token: AccessToken) -> None:
        """Replace any previous token with `token` and bound the cookie by its expiry."""
        self.storage.set(SESSION_TOKEN_KEY, token.access_token)
        self.storage.expire_at(token.expires_at)
        self._dirty = True
        logger.info("Customer session authenticated")

    def clear(self) -> None:
        self.storage.unset(SESSION_TOKEN_KEY)
        self.storage.expire_at(None)
        self._dirty = True
        logger.info("Customer session cleared")

    def commit(self) -> str:
        """Serialize the session into one Set-Cookie header value."""
        if self._committed:
            raise RuntimeError("Session already committed for this response")
        self._committed = True
        return self.storage.commit()
