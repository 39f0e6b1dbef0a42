import logging
from typing import Optional

from pydantic import ValidationError as SchemaError

from fullservice.client.store import LocalStore
from fullservice.schemas.user import IdentityRead

logger = logging.getLogger(__name__)

AUTH_USER_KEY = "auth_user"
AUTH_TOKEN_KEY = "auth_token"


class SessionContext:
    """
    Client-held snapshot of the signed-in identity.

    ``set_identity`` is the only writer: it swaps the in-memory snapshot and
    persists identity and token in a single store write. The snapshot can go
    stale against the server; profile edits overwrite it with the server's
    answer.
    """

    def __init__(self, store: LocalStore):
        self.store = store
        self._identity: Optional[IdentityRead] = None
        self._token: Optional[str] = None
        self._restore()

    def _restore(self) -> None:
        raw = self.store.get(AUTH_USER_KEY)
        token = self.store.get(AUTH_TOKEN_KEY)
        if raw is None or token is None:
            return
        try:
            self._identity = IdentityRead.model_validate(raw)
        except SchemaError:
            logger.warning("Discarding unreadable session snapshot")
            return
        self._token = token

    @property
    def token(self) -> Optional[str]:
        return self._token

    @property
    def is_authenticated(self) -> bool:
        return self._identity is not None

    def current_identity(self) -> Optional[IdentityRead]:
        return self._identity

    def set_identity(self, identity: IdentityRead, token: Optional[str] = None) -> None:
        token = token if token is not None else self._token
        self.store.update({
            AUTH_USER_KEY: identity.model_dump(mode="json"),
            AUTH_TOKEN_KEY: token,
        })
        self._identity = identity
        self._token = token

    def clear(self) -> None:
        self.store.delete(AUTH_USER_KEY, AUTH_TOKEN_KEY)
        self._identity = None
        self._token = None
