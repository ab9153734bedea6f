"""Tests for PostgreSQL auth repository."""

from datetime import UTC, datetime, timedelta
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest

from gumboard.adapters.auth.postgres import PostgresAuthRepository
from gumboard.core.auth import AuthRepository

NOW = datetime(2024, 1, 15, 12, 0, tzinfo=UTC)


class TestPostgresAuthRepository:
    """Test PostgresAuthRepository implementation."""

    @pytest.fixture
    def mock_db(self) -> MagicMock:
        """Create mock database."""
        return MagicMock()

    @pytest.fixture
    def repo(self, mock_db: MagicMock) -> PostgresAuthRepository:
        """Create repository with mock database."""
        return PostgresAuthRepository(mock_db)

    def test_implements_protocol(self, repo: PostgresAuthRepository) -> None:
        """Repository should implement AuthRepository protocol."""
        assert isinstance(repo, AuthRepository)

    async def test_get_user_by_id(
        self, repo: PostgresAuthRepository, mock_db: MagicMock
    ) -> None:
        """Should return user when found by id."""
        user_id = uuid4()
        mock_db.fetch_one = AsyncMock(
            return_value={
                "id": user_id,
                "email": "test@example.com",
                "name": "Test User",
                "image": None,
                "email_verified": None,
                "organization_id": None,
                "created_at": NOW,
            }
        )

        result = await repo.get_user_by_id(user_id)

        assert result is not None
        assert result.email == "test@example.com"
        assert result.id == user_id

    async def test_get_user_by_id_not_found(
        self, repo: PostgresAuthRepository, mock_db: MagicMock
    ) -> None:
        """Should return None when user not found."""
        mock_db.fetch_one = AsyncMock(return_value=None)

        result = await repo.get_user_by_id(uuid4())

        assert result is None

    async def test_get_or_create_user_upserts(
        self, repo: PostgresAuthRepository, mock_db: MagicMock
    ) -> None:
        """Should create users with a single conflict-safe statement."""
        mock_db.fetch_one = AsyncMock(
            return_value={"id": uuid4(), "email": "new@example.com", "created_at": NOW}
        )

        user = await repo.get_or_create_user("new@example.com")

        assert user.email == "new@example.com"
        query = mock_db.fetch_one.call_args[0][0]
        assert "ON CONFLICT (email)" in query
        assert "RETURNING" in query

    async def test_consume_deletes_and_returns(
        self, repo: PostgresAuthRepository, mock_db: MagicMock
    ) -> None:
        """Consumption is one DELETE ... RETURNING statement."""
        mock_db.fetch_one = AsyncMock(
            return_value={
                "identifier": "a@example.com",
                "token_hash": "h",
                "expires_at": NOW + timedelta(hours=24),
            }
        )

        token = await repo.consume_verification_token("a@example.com", "h")

        assert token is not None
        assert token.identifier == "a@example.com"
        query = mock_db.fetch_one.call_args[0][0]
        assert "DELETE FROM verification_tokens" in query
        assert "RETURNING" in query
        assert mock_db.fetch_one.call_args[0][1:] == ("a@example.com", "h")

    async def test_consume_missing_returns_none(
        self, repo: PostgresAuthRepository, mock_db: MagicMock
    ) -> None:
        """Lost races and unknown tokens both return None."""
        mock_db.fetch_one = AsyncMock(return_value=None)

        assert await repo.consume_verification_token("a@example.com", "h") is None

    async def test_create_session(
        self, repo: PostgresAuthRepository, mock_db: MagicMock
    ) -> None:
        """Should store the token hash."""
        user_id = uuid4()
        mock_db.fetch_one = AsyncMock(
            return_value={"id": uuid4(), "user_id": user_id, "expires_at": NOW}
        )

        session = await repo.create_session(user_id, "hash", NOW)

        assert session.user_id == user_id
        assert mock_db.fetch_one.call_args[0][1:] == (user_id, "hash", NOW)

    async def test_delete_session(self, repo: PostgresAuthRepository, mock_db: MagicMock) -> None:
        """Should report whether a row was removed."""
        mock_db.execute = AsyncMock(return_value="DELETE 1")
        assert await repo.delete_session("hash") is True

        mock_db.execute = AsyncMock(return_value="DELETE 0")
        assert await repo.delete_session("hash") is False

    async def test_ownership_lookups_delegate(
        self, repo: PostgresAuthRepository, mock_db: MagicMock
    ) -> None:
        """Board and note ownership come from the app database."""
        org_id = uuid4()
        mock_db.get_board_organization_id = AsyncMock(return_value=org_id)
        mock_db.get_note_organization_id = AsyncMock(return_value=None)

        assert await repo.get_board_organization_id(uuid4()) == org_id
        assert await repo.get_note_organization_id(uuid4()) is None
