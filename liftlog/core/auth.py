"""Auth collaborator: current owner identifier and sign-out.

Authentication itself happens elsewhere; this only carries its result.
"""

from __future__ import annotations

import logging

from liftlog.core.exceptions import NotAuthenticatedError

logger = logging.getLogger(__name__)


class AuthContext:
    """Holds the authenticated owner id for the running client."""

    def __init__(self, owner_id: str | None = None):
        self._owner_id = owner_id or None

    @property
    def owner_id(self) -> str | None:
        return self._owner_id

    @property
    def is_authenticated(self) -> bool:
        return self._owner_id is not None

    def require_owner(self) -> str:
        """Return the owner id or raise NotAuthenticatedError."""
        if not self._owner_id:
            raise NotAuthenticatedError()
        return self._owner_id

    def sign_in(self, owner_id: str) -> None:
        if not owner_id:
            raise NotAuthenticatedError("Empty owner identifier.")
        self._owner_id = owner_id

    def sign_out(self) -> None:
        logger.info("Signing out owner %s", self._owner_id)
        self._owner_id = None


def require_owner_id(owner_id: str | None) -> str:
    """Reject a missing owner before any repository or session work starts."""
    if not owner_id or not str(owner_id).strip():
        raise NotAuthenticatedError()
    return str(owner_id)
