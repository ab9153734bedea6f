"""PostgreSQL implementation of AuthRepository."""

from datetime import datetime
from typing import Any
from uuid import UUID

from gumboard.adapters.db.app_db import AppDatabase
from gumboard.core.auth.types import Session, User, VerificationToken


class PostgresAuthRepository:
    """PostgreSQL implementation of auth repository.

    Also serves the authorization gate's ownership lookups, since those read
    the same user rows plus board/note ownership.
    """

    def __init__(self, db: AppDatabase) -> None:
        """Initialize with database connection.

        Args:
            db: Application database instance.
        """
        self._db = db

    def _row_to_user(self, row: dict[str, Any]) -> User:
        """Convert database row to User model."""
        return User(
            id=row["id"],
            email=row["email"],
            name=row.get("name"),
            image=row.get("image"),
            email_verified=row.get("email_verified"),
            organization_id=row.get("organization_id"),
            created_at=row["created_at"],
        )

    def _row_to_session(self, row: dict[str, Any]) -> Session:
        """Convert database row to Session model."""
        return Session(
            id=row["id"],
            user_id=row["user_id"],
            expires_at=row["expires_at"],
        )

    def _row_to_token(self, row: dict[str, Any]) -> VerificationToken:
        """Convert database row to VerificationToken model."""
        return VerificationToken(
            identifier=row["identifier"],
            token_hash=row["token_hash"],
            expires_at=row["expires_at"],
        )

    # User operations
    async def get_user_by_id(self, user_id: UUID) -> User | None:
        """Get user by ID."""
        row = await self._db.fetch_one(
            "SELECT * FROM users WHERE id = $1",
            user_id,
        )
        return self._row_to_user(row) if row else None

    async def get_or_create_user(self, email: str) -> User:
        """Return the user for an email, creating it if absent.

        A single upsert, so two first-time verifications for the same
        address cannot both insert.
        """
        row = await self._db.fetch_one(
            """
            INSERT INTO users (email)
            VALUES ($1)
            ON CONFLICT (email) DO UPDATE SET email = EXCLUDED.email
            RETURNING *
            """,
            email,
        )
        assert row is not None, "INSERT RETURNING should always return a row"
        return self._row_to_user(row)

    async def mark_email_verified(self, user_id: UUID, verified_at: datetime) -> User | None:
        """Stamp the user's email as verified."""
        row = await self._db.fetch_one(
            """
            UPDATE users SET email_verified = $1, updated_at = $1
            WHERE id = $2
            RETURNING *
            """,
            verified_at,
            user_id,
        )
        return self._row_to_user(row) if row else None

    # Verification token operations
    async def create_verification_token(
        self,
        identifier: str,
        token_hash: str,
        expires_at: datetime,
    ) -> VerificationToken:
        """Persist a new magic-link token."""
        row = await self._db.fetch_one(
            """
            INSERT INTO verification_tokens (identifier, token_hash, expires_at)
            VALUES ($1, $2, $3)
            RETURNING *
            """,
            identifier,
            token_hash,
            expires_at,
        )
        assert row is not None, "INSERT RETURNING should always return a row"
        return self._row_to_token(row)

    async def consume_verification_token(
        self,
        identifier: str,
        token_hash: str,
    ) -> VerificationToken | None:
        """Delete and return a token in one statement.

        Postgres row locking guarantees only one concurrent DELETE returns
        the row; every other caller gets None.
        """
        row = await self._db.fetch_one(
            """
            DELETE FROM verification_tokens
            WHERE identifier = $1 AND token_hash = $2
            RETURNING *
            """,
            identifier,
            token_hash,
        )
        return self._row_to_token(row) if row else None

    # Session operations
    async def create_session(
        self,
        user_id: UUID,
        session_token_hash: str,
        expires_at: datetime,
    ) -> Session:
        """Create a new session."""
        row = await self._db.fetch_one(
            """
            INSERT INTO sessions (user_id, session_token_hash, expires_at)
            VALUES ($1, $2, $3)
            RETURNING *
            """,
            user_id,
            session_token_hash,
            expires_at,
        )
        assert row is not None, "INSERT RETURNING should always return a row"
        return self._row_to_session(row)

    async def get_session(self, session_token_hash: str) -> Session | None:
        """Get a session by token hash, expired or not."""
        row = await self._db.fetch_one(
            "SELECT * FROM sessions WHERE session_token_hash = $1",
            session_token_hash,
        )
        return self._row_to_session(row) if row else None

    async def delete_session(self, session_token_hash: str) -> bool:
        """Delete a session."""
        result = await self._db.execute(
            "DELETE FROM sessions WHERE session_token_hash = $1",
            session_token_hash,
        )
        return result == "DELETE 1"

    # Ownership lookups for the authorization gate
    async def get_board_organization_id(self, board_id: UUID) -> UUID | None:
        """Owning organization of a board, ignoring soft-state."""
        return await self._db.get_board_organization_id(board_id)

    async def get_note_organization_id(self, note_id: UUID) -> UUID | None:
        """Owning organization of a note via its board, ignoring soft-state."""
        return await self._db.get_note_organization_id(note_id)
