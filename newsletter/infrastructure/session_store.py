"""Cookie Session Store — SessionStore implementation over Starlette's signed-cookie session.

Invariants:
    - Only the user id and a single pending flash message are ever stored
    - pop_flash() returns the message at most once (one-time notice)
    - renew() drops everything else in the session before a privilege change

Design Decisions:
    - Starlette SessionMiddleware (itsdangerous-signed cookie) over a server-side store:
      the session holds one UUID, no shared cache needed
    - get_user_id() treats an unparseable stored value as "not logged in"
"""

import logging
from uuid import UUID

from fastapi import Request

logger = logging.getLogger(__name__)

USER_ID_KEY = "user_id"
FLASH_KEY = "_flash"


class CookieSessionStore:
    """Typed view over request.session."""

    def __init__(self, session: dict):
        self._session = session

    def get_user_id(self) -> UUID | None:
        raw = self._session.get(USER_ID_KEY)
        if raw is None:
            return None
        try:
            return UUID(raw)
        except (TypeError, ValueError):
            logger.warning("Discarding malformed user id stored in session")
            self._session.pop(USER_ID_KEY, None)
            return None

    def insert_user_id(self, user_id: UUID) -> None:
        self._session[USER_ID_KEY] = str(user_id)

    def renew(self) -> None:
        self._session.clear()

    def push_flash(self, message: str) -> None:
        self._session[FLASH_KEY] = message

    def pop_flash(self) -> str | None:
        return self._session.pop(FLASH_KEY, None)


def get_session_store(request: Request) -> CookieSessionStore:
    """FastAPI dependency for the current request's session."""
    return CookieSessionStore(request.session)
