"""Auth service for magic-link sign-in and session management."""

from collections.abc import Callable
from datetime import datetime
from urllib.parse import urlencode, urlsplit

import structlog

from gumboard.core.auth.delivery import MagicLinkMessage, MagicLinkSender
from gumboard.core.auth.repository import AuthRepository
from gumboard.core.auth.tokens import (
    SESSION_EXPIRY_DAYS,
    VERIFICATION_TOKEN_EXPIRY_HOURS,
    generate_token,
    get_session_expiry,
    get_token_expiry,
    hash_token,
    is_expired,
    normalize_email,
    utc_now,
)
from gumboard.core.auth.types import IssuedSession
from gumboard.core.exceptions import ExpiredTokenError, InvalidTokenError, TransportFailure

logger = structlog.get_logger()

CALLBACK_PATH = "/api/auth/callback/email"


class AuthService:
    """Service for passwordless authentication operations."""

    def __init__(
        self,
        repo: AuthRepository,
        sender: MagicLinkSender,
        secret: str,
        from_email: str,
        token_max_age_hours: int = VERIFICATION_TOKEN_EXPIRY_HOURS,
        session_max_age_days: int = SESSION_EXPIRY_DAYS,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        """Initialize with auth repository and delivery adapter.

        Args:
            repo: Auth repository for database operations.
            sender: Transport used to deliver magic links.
            secret: Server secret mixed into stored token hashes.
            from_email: Sender address for magic-link emails.
            token_max_age_hours: Lifetime of a magic link.
            session_max_age_days: Lifetime of a session.
            clock: Source of the current UTC time.
        """
        self._repo = repo
        self._sender = sender
        self._secret = secret
        self._from_email = from_email
        self._token_max_age_hours = token_max_age_hours
        self._session_max_age_days = session_max_age_days
        self._clock = clock

    async def issue_magic_link(
        self,
        email: str,
        base_url: str,
        callback_url: str | None = None,
    ) -> None:
        """Create a single-use token and send it to ``email``.

        Behaves identically whether or not the address has an account, and
        never raises on delivery problems. Every call creates an independent
        token.

        Args:
            email: Address to sign in.
            base_url: Public origin used to build the link.
            callback_url: Where the user wanted to go before signing in.
        """
        identifier = normalize_email(email)
        token = generate_token()

        await self._repo.create_verification_token(
            identifier=identifier,
            token_hash=hash_token(token, self._secret),
            expires_at=get_token_expiry(self._token_max_age_hours, now=self._clock()),
        )

        params = {"token": token, "identifier": identifier}
        if callback_url:
            params["callbackUrl"] = callback_url
        base_url = base_url.rstrip("/")
        link = f"{base_url}{CALLBACK_PATH}?{urlencode(params)}"
        host = urlsplit(base_url).netloc or base_url

        message = MagicLinkMessage(
            to=identifier,
            from_email=self._from_email,
            subject=f"Sign in to {host}",
            link=link,
            host=host,
        )
        try:
            delivered = await self._sender.send_magic_link(message)
        except TransportFailure as e:
            logger.error("magic_link_delivery_failed", email=identifier, error=str(e))
            return
        except Exception:
            # Any sender bug still looks like "check your email" to the caller
            logger.exception("magic_link_delivery_failed", email=identifier)
            return

        if delivered:
            logger.info("magic_link_issued", email=identifier)
        else:
            logger.error("magic_link_delivery_failed", email=identifier)
            # Don't raise - the response must not reveal delivery status

    async def verify(self, token: str, email: str) -> IssuedSession:
        """Consume a magic-link token and open a session.

        The token row is deleted by the same statement that reads it, so
        only one of several concurrent calls can get past this point.

        Args:
            token: Plaintext token from the link.
            email: Identifier from the link.

        Returns:
            The new session, its user, and the plaintext session token.

        Raises:
            InvalidTokenError: Token unknown or already used.
            ExpiredTokenError: Token found but past its expiry.
        """
        identifier = normalize_email(email)
        record = await self._repo.consume_verification_token(
            identifier=identifier,
            token_hash=hash_token(token, self._secret),
        )
        if record is None:
            logger.warning("verification_failed", reason="invalid_token")
            raise InvalidTokenError("Invalid verification token")

        now = self._clock()
        if is_expired(record.expires_at, now=now):
            logger.warning("verification_failed", reason="expired_token")
            raise ExpiredTokenError("Verification token has expired")

        user = await self._repo.get_or_create_user(identifier)
        if user.email_verified is None:
            user = await self._repo.mark_email_verified(user.id, now) or user

        session_token = generate_token()
        session = await self._repo.create_session(
            user_id=user.id,
            session_token_hash=hash_token(session_token, self._secret),
            expires_at=get_session_expiry(self._session_max_age_days, now=now),
        )

        logger.info("session_created", user_id=str(user.id), session_id=str(session.id))

        return IssuedSession(session=session, user=user, session_token=session_token)

    async def sign_out(self, session_token: str | None) -> None:
        """Delete the session behind a cookie, if any."""
        if not session_token:
            return
        removed = await self._repo.delete_session(hash_token(session_token, self._secret))
        if removed:
            logger.info("session_deleted")
