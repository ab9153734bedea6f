"""Session resolution: cookie value to caller identity."""

from collections.abc import Callable
from datetime import datetime

import structlog

from gumboard.core.auth.repository import AuthRepository
from gumboard.core.auth.tokens import hash_token, is_expired, utc_now
from gumboard.core.auth.types import ANONYMOUS, Authenticated, Identity, Session

logger = structlog.get_logger()


class SessionResolver:
    """Resolves a session token to an Identity.

    Read-only: sessions are never extended or cleaned up here. An expired
    session is simply treated as absent.
    """

    def __init__(
        self,
        repo: AuthRepository,
        secret: str,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._repo = repo
        self._secret = secret
        self._clock = clock

    async def get_session(self, session_token: str | None) -> Session | None:
        """Return the live session for a token, or None."""
        if not session_token:
            return None

        session = await self._repo.get_session(hash_token(session_token, self._secret))
        if session is None:
            return None

        if is_expired(session.expires_at, now=self._clock()):
            logger.debug("session_expired", session_id=str(session.id))
            return None

        return session

    async def resolve(self, session_token: str | None) -> Identity:
        """Resolve a session token to ``Authenticated`` or ``Anonymous``."""
        session = await self.get_session(session_token)
        if session is None:
            return ANONYMOUS
        return Authenticated(user_id=session.user_id)
