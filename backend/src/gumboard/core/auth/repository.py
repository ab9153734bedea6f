"""Auth repository protocol for database operations."""

from datetime import datetime
from typing import Protocol, runtime_checkable
from uuid import UUID

from gumboard.core.auth.types import Session, User, VerificationToken


@runtime_checkable
class AuthRepository(Protocol):
    """Protocol for auth database operations.

    Implementations provide actual database access (PostgreSQL, etc).
    ``consume_verification_token`` and ``get_or_create_user`` must each be a
    single atomic statement; concurrent verification relies on it.
    """

    # User operations
    async def get_user_by_id(self, user_id: UUID) -> User | None:
        """Get user by ID."""
        ...

    async def get_or_create_user(self, email: str) -> User:
        """Return the user for an email, creating it if absent."""
        ...

    async def mark_email_verified(self, user_id: UUID, verified_at: datetime) -> User | None:
        """Stamp the user's email as verified."""
        ...

    # Verification token operations
    async def create_verification_token(
        self,
        identifier: str,
        token_hash: str,
        expires_at: datetime,
    ) -> VerificationToken:
        """Persist a new magic-link token."""
        ...

    async def consume_verification_token(
        self,
        identifier: str,
        token_hash: str,
    ) -> VerificationToken | None:
        """Delete and return a token in one step. None if absent or already used."""
        ...

    # Session operations
    async def create_session(
        self,
        user_id: UUID,
        session_token_hash: str,
        expires_at: datetime,
    ) -> Session:
        """Create a new session."""
        ...

    async def get_session(self, session_token_hash: str) -> Session | None:
        """Get a session by token hash, expired or not."""
        ...

    async def delete_session(self, session_token_hash: str) -> bool:
        """Delete a session. Returns True if a row was removed."""
        ...
