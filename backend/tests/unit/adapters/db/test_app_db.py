"""Unit tests for AppDatabase."""

from __future__ import annotations

from contextlib import asynccontextmanager
from unittest.mock import AsyncMock, MagicMock, patch
from uuid import uuid4

import pytest

from gumboard.adapters.db.app_db import AppDatabase
from gumboard.core.exceptions import ConflictError


class TestAppDatabase:
    """Tests for AppDatabase."""

    @pytest.fixture
    def db(self) -> AppDatabase:
        """Return an AppDatabase instance."""
        return AppDatabase(dsn="postgresql://localhost/test")

    @pytest.fixture
    def mock_conn(self) -> AsyncMock:
        """Return a mock connection."""
        conn = AsyncMock()

        @asynccontextmanager
        async def mock_transaction():
            yield

        conn.transaction = mock_transaction
        return conn

    @pytest.fixture
    def db_with_pool(self, mock_conn: AsyncMock) -> AppDatabase:
        """Return an AppDatabase instance with a mocked pool."""
        db = AppDatabase(dsn="postgresql://localhost/test")

        # Create a mock pool that works with async context managers
        mock_pool = MagicMock()

        @asynccontextmanager
        async def mock_acquire():
            yield mock_conn

        mock_pool.acquire = mock_acquire
        mock_pool.close = AsyncMock()
        db.pool = mock_pool
        return db

    def test_init(self, db: AppDatabase) -> None:
        """Test database initialization."""
        assert db.dsn == "postgresql://localhost/test"
        assert db.pool is None

    async def test_connect_creates_pool(self, db: AppDatabase) -> None:
        """Test that connect creates a connection pool."""
        mock_pool = MagicMock()

        async def mock_create_pool(*args, **kwargs):
            return mock_pool

        with patch("gumboard.adapters.db.app_db.asyncpg.create_pool", side_effect=mock_create_pool):
            await db.connect()

            assert db.pool == mock_pool

    async def test_close_noop_when_no_pool(self, db: AppDatabase) -> None:
        """Test that close is a no-op when pool doesn't exist."""
        await db.close()  # Should not raise

    async def test_acquire_without_pool_raises(self, db: AppDatabase) -> None:
        """Using the database before connect fails loudly."""
        with pytest.raises(RuntimeError):
            await db.fetch_one("SELECT 1")

    async def test_apply_schema_runs_all_statements(
        self, db_with_pool: AppDatabase, mock_conn: AsyncMock
    ) -> None:
        """Every compiled DDL statement is executed."""
        await db_with_pool.apply_schema()

        executed = [c[0][0] for c in mock_conn.execute.call_args_list]
        assert any("CREATE TABLE IF NOT EXISTS users" in s for s in executed)
        assert any("CREATE TABLE IF NOT EXISTS checklist_items" in s for s in executed)

    async def test_create_organization_moves_user(
        self, db_with_pool: AppDatabase, mock_conn: AsyncMock
    ) -> None:
        """The creator joins the new organization in the same transaction."""
        org_id, user_id = uuid4(), uuid4()
        mock_conn.fetchrow.return_value = {"id": org_id, "name": "Acme"}
        mock_conn.execute.return_value = "UPDATE 1"

        org = await db_with_pool.create_organization_for_user(user_id, "Acme")

        assert org == {"id": org_id, "name": "Acme"}
        query, *args = mock_conn.execute.call_args[0]
        assert "organization_id IS NULL" in query
        assert args == [org_id, user_id]

    async def test_create_organization_when_already_member(
        self, db_with_pool: AppDatabase, mock_conn: AsyncMock
    ) -> None:
        """A user who joined an organization concurrently is not moved."""
        mock_conn.fetchrow.return_value = {"id": uuid4(), "name": "Acme"}
        mock_conn.execute.return_value = "UPDATE 0"

        with pytest.raises(ConflictError):
            await db_with_pool.create_organization_for_user(uuid4(), "Acme")


class TestArchivedNotes:
    """Tests for the organization archive query."""

    @pytest.fixture
    def db(self) -> AppDatabase:
        """Return an AppDatabase with stubbed query helpers."""
        db = AppDatabase(dsn="postgresql://localhost/test")
        db.fetch_all = AsyncMock(return_value=[])  # type: ignore[method-assign]
        return db

    async def test_filters_and_ordering(self, db: AppDatabase) -> None:
        """Only archived, undeleted notes of the organization, newest first."""
        org_id = uuid4()

        await db.list_archived_notes(org_id)

        query, param = db.fetch_all.call_args[0]
        normalized = " ".join(query.split())
        assert "b.organization_id = $1" in normalized
        assert "n.deleted_at IS NULL" in normalized
        assert "n.archived_at IS NOT NULL" in normalized
        assert normalized.endswith("ORDER BY n.updated_at DESC")
        assert param == org_id

    async def test_attaches_checklist_items(self, db: AppDatabase) -> None:
        """Checklist items are fetched in one query and grouped per note."""
        note_a, note_b = uuid4(), uuid4()
        item = {"id": uuid4(), "note_id": note_a, "content": "x", "checked": False, "order": 0}
        db.fetch_all = AsyncMock(  # type: ignore[method-assign]
            side_effect=[[{"id": note_a}, {"id": note_b}], [item]]
        )

        notes = await db.list_archived_notes(uuid4())

        assert notes[0]["checklist_items"] == [item]
        assert notes[1]["checklist_items"] == []
        items_query, ids = db.fetch_all.call_args_list[1][0]
        assert "ANY($1::uuid[])" in items_query
        assert ids == [note_a, note_b]

    async def test_empty_archive_skips_item_query(self, db: AppDatabase) -> None:
        """No notes means no checklist query."""
        assert await db.list_archived_notes(uuid4()) == []
        assert db.fetch_all.await_count == 1


class TestTenantScoping:
    """Every board and note query is filtered by organization."""

    @pytest.fixture
    def db(self) -> AppDatabase:
        """Return an AppDatabase with stubbed query helpers."""
        db = AppDatabase(dsn="postgresql://localhost/test")
        db.fetch_all = AsyncMock(return_value=[])  # type: ignore[method-assign]
        db.fetch_one = AsyncMock(return_value=None)  # type: ignore[method-assign]
        db.execute = AsyncMock(return_value="UPDATE 0")  # type: ignore[method-assign]
        return db

    async def test_active_notes_scoped(self, db: AppDatabase) -> None:
        """Board notes exclude archived and deleted, within the organization."""
        board_id, org_id = uuid4(), uuid4()

        await db.list_active_notes(board_id, org_id)

        query, *params = db.fetch_all.call_args[0]
        assert "b.organization_id = $2" in query
        assert "n.archived_at IS NULL" in query
        assert "n.deleted_at IS NULL" in query
        assert params == [board_id, org_id]

    async def test_get_board_scoped(self, db: AppDatabase) -> None:
        """Boards are looked up within the organization."""
        board_id, org_id = uuid4(), uuid4()

        assert await db.get_board(board_id, org_id) is None
        assert db.fetch_one.call_args[0][1:] == (board_id, org_id)

    async def test_archive_reports_no_match(self, db: AppDatabase) -> None:
        """Archiving a note outside the organization changes nothing."""
        assert await db.set_note_archived(uuid4(), uuid4(), archived=True) is False
        query = db.execute.call_args[0][0]
        assert "archived_at = NOW()" in query
        assert "b.organization_id = $2" in query

    async def test_restore_clears_archive(self, db: AppDatabase) -> None:
        """Restoring nulls the archive mark."""
        db.execute = AsyncMock(return_value="UPDATE 1")  # type: ignore[method-assign]

        assert await db.set_note_archived(uuid4(), uuid4(), archived=False) is True
        assert "archived_at = NULL" in db.execute.call_args[0][0]

    async def test_soft_delete(self, db: AppDatabase) -> None:
        """Delete only stamps deleted_at."""
        db.execute = AsyncMock(return_value="UPDATE 1")  # type: ignore[method-assign]

        assert await db.soft_delete_note(uuid4(), uuid4()) is True
        query = db.execute.call_args[0][0]
        assert "SET deleted_at = NOW()" in query
        assert "DELETE FROM" not in query
