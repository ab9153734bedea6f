"""Application database adapter using asyncpg."""

from __future__ import annotations

from collections.abc import AsyncIterator, Sequence
from contextlib import asynccontextmanager
from typing import Any
from uuid import UUID

import asyncpg
import structlog

from gumboard.core.exceptions import ConflictError
from gumboard.models import schema_statements

logger = structlog.get_logger()

# Columns returned for every note listing
_NOTE_COLUMNS = """
    n.id, n.color, n.board_id, n.created_by, n.created_at, n.updated_at,
    n.archived_at, n.deleted_at,
    u.id AS user_id, u.name AS user_name, u.email AS user_email, u.image AS user_image,
    b.name AS board_name
"""


class AppDatabase:
    """Application database for organizations, boards and notes.

    Every board/note query takes the caller's organization ID and filters on
    it, so a guessed ID from another tenant never matches a row.
    """

    def __init__(self, dsn: str):
        """Initialize the app database adapter."""
        self.dsn = dsn
        self.pool: asyncpg.Pool[asyncpg.Connection[asyncpg.Record]] | None = None

    async def connect(self) -> None:
        """Create connection pool."""
        self.pool = await asyncpg.create_pool(
            self.dsn,
            min_size=2,
            max_size=10,
            command_timeout=60,
        )
        logger.info("app_database_connected", dsn=self.dsn.split("@")[-1])

    async def close(self) -> None:
        """Close connection pool."""
        if self.pool:
            await self.pool.close()
            logger.info("app_database_disconnected")

    @asynccontextmanager
    async def acquire(self) -> AsyncIterator[asyncpg.Connection[asyncpg.Record]]:
        """Acquire a connection from the pool."""
        if self.pool is None:
            raise RuntimeError("Database pool not initialized")
        async with self.pool.acquire() as conn:
            yield conn

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[asyncpg.Connection[asyncpg.Record]]:
        """Acquire a connection and run the block inside a transaction."""
        async with self.acquire() as conn, conn.transaction():
            yield conn

    async def fetch_one(self, query: str, *args: Any) -> dict[str, Any] | None:
        """Fetch a single row."""
        async with self.acquire() as conn:
            row = await conn.fetchrow(query, *args)
            if row:
                return dict(row)
            return None

    async def fetch_all(self, query: str, *args: Any) -> list[dict[str, Any]]:
        """Fetch all rows."""
        async with self.acquire() as conn:
            rows = await conn.fetch(query, *args)
            return [dict(row) for row in rows]

    async def execute(self, query: str, *args: Any) -> str:
        """Execute a query and return status."""
        async with self.acquire() as conn:
            result: str = await conn.execute(query, *args)
            return result

    async def execute_returning(self, query: str, *args: Any) -> dict[str, Any] | None:
        """Execute a query with RETURNING clause."""
        async with self.acquire() as conn:
            row = await conn.fetchrow(query, *args)
            if row:
                return dict(row)
            return None

    async def apply_schema(self) -> None:
        """Create missing tables and indexes from the SQLAlchemy models."""
        async with self.transaction() as conn:
            for statement in schema_statements():
                await conn.execute(statement)
        logger.info("app_database_schema_applied")

    # Organization operations
    async def get_organization(self, org_id: UUID) -> dict[str, Any] | None:
        """Get organization by ID."""
        return await self.fetch_one(
            "SELECT * FROM organizations WHERE id = $1",
            org_id,
        )

    async def create_organization_for_user(self, user_id: UUID, name: str) -> dict[str, Any]:
        """Create an organization and move the user into it, atomically.

        Raises:
            ConflictError: The user already belongs to an organization. The
                new organization is rolled back.
        """
        async with self.transaction() as conn:
            org = await conn.fetchrow(
                "INSERT INTO organizations (name) VALUES ($1) RETURNING *",
                name,
            )
            if org is None:
                raise RuntimeError("Failed to create organization")
            result = await conn.execute(
                """
                UPDATE users SET organization_id = $1, updated_at = NOW()
                WHERE id = $2 AND organization_id IS NULL
                """,
                org["id"],
                user_id,
            )
            if result != "UPDATE 1":
                raise ConflictError("Already a member of an organization")
            return dict(org)

    async def set_user_organization(self, user_id: UUID, org_id: UUID | None) -> bool:
        """Join (or with None, leave) an organization."""
        result = await self.execute(
            "UPDATE users SET organization_id = $1, updated_at = NOW() WHERE id = $2",
            org_id,
            user_id,
        )
        return result == "UPDATE 1"

    # Ownership lookups (no soft-state filtering)
    async def get_board_organization_id(self, board_id: UUID) -> UUID | None:
        """Owning organization of a board."""
        row = await self.fetch_one(
            "SELECT organization_id FROM boards WHERE id = $1",
            board_id,
        )
        return row["organization_id"] if row else None

    async def get_note_organization_id(self, note_id: UUID) -> UUID | None:
        """Owning organization of a note, through its board."""
        row = await self.fetch_one(
            """SELECT b.organization_id
               FROM notes n
               JOIN boards b ON b.id = n.board_id
               WHERE n.id = $1""",
            note_id,
        )
        return row["organization_id"] if row else None

    # Board operations
    async def list_boards(self, org_id: UUID) -> list[dict[str, Any]]:
        """List all boards of an organization."""
        return await self.fetch_all(
            """SELECT id, name, description, created_by, created_at, updated_at
               FROM boards
               WHERE organization_id = $1
               ORDER BY created_at DESC""",
            org_id,
        )

    async def get_board(self, board_id: UUID, org_id: UUID) -> dict[str, Any] | None:
        """Get a board by ID within an organization."""
        return await self.fetch_one(
            "SELECT * FROM boards WHERE id = $1 AND organization_id = $2",
            board_id,
            org_id,
        )

    async def create_board(
        self,
        org_id: UUID,
        name: str,
        created_by: UUID,
        description: str | None = None,
    ) -> dict[str, Any]:
        """Create a new board."""
        result = await self.execute_returning(
            """INSERT INTO boards (organization_id, name, description, created_by)
               VALUES ($1, $2, $3, $4)
               RETURNING *""",
            org_id,
            name,
            description,
            created_by,
        )
        if result is None:
            raise RuntimeError("Failed to create board")
        return result

    # Note operations
    async def list_active_notes(self, board_id: UUID, org_id: UUID) -> list[dict[str, Any]]:
        """Notes on a board that are neither archived nor deleted."""
        rows = await self.fetch_all(
            f"""SELECT {_NOTE_COLUMNS}
               FROM notes n
               JOIN boards b ON b.id = n.board_id
               JOIN users u ON u.id = n.created_by
               WHERE n.board_id = $1
                 AND b.organization_id = $2
                 AND n.deleted_at IS NULL
                 AND n.archived_at IS NULL
               ORDER BY n.created_at DESC""",
            board_id,
            org_id,
        )
        return await self._with_checklist_items(rows)

    async def list_archived_notes(self, org_id: UUID) -> list[dict[str, Any]]:
        """Archived, undeleted notes across the organization's boards.

        Ordered by ``updated_at`` descending, which puts the most recently
        archived first.
        """
        rows = await self.fetch_all(
            f"""SELECT {_NOTE_COLUMNS}
               FROM notes n
               JOIN boards b ON b.id = n.board_id
               JOIN users u ON u.id = n.created_by
               WHERE b.organization_id = $1
                 AND n.deleted_at IS NULL
                 AND n.archived_at IS NOT NULL
               ORDER BY n.updated_at DESC""",
            org_id,
        )
        return await self._with_checklist_items(rows)

    async def get_note(self, note_id: UUID, org_id: UUID) -> dict[str, Any] | None:
        """Get an undeleted note within an organization."""
        row = await self.fetch_one(
            f"""SELECT {_NOTE_COLUMNS}
               FROM notes n
               JOIN boards b ON b.id = n.board_id
               JOIN users u ON u.id = n.created_by
               WHERE n.id = $1
                 AND b.organization_id = $2
                 AND n.deleted_at IS NULL""",
            note_id,
            org_id,
        )
        if row is None:
            return None
        notes = await self._with_checklist_items([row])
        return notes[0]

    async def create_note(
        self,
        board_id: UUID,
        created_by: UUID,
        color: str,
        checklist_items: Sequence[tuple[str, bool]] = (),
    ) -> UUID:
        """Create a note and its checklist items in one transaction.

        Returns:
            ID of the new note.
        """
        async with self.transaction() as conn:
            note = await conn.fetchrow(
                """INSERT INTO notes (board_id, created_by, color)
                   VALUES ($1, $2, $3)
                   RETURNING id""",
                board_id,
                created_by,
                color,
            )
            if note is None:
                raise RuntimeError("Failed to create note")
            if checklist_items:
                await conn.executemany(
                    """INSERT INTO checklist_items (note_id, content, checked, "order")
                       VALUES ($1, $2, $3, $4)""",
                    [
                        (note["id"], content, checked, position)
                        for position, (content, checked) in enumerate(checklist_items)
                    ],
                )
            note_id: UUID = note["id"]
            return note_id

    async def set_note_archived(self, note_id: UUID, org_id: UUID, archived: bool) -> bool:
        """Archive or restore an undeleted note. Returns False if nothing matched."""
        result = await self.execute(
            f"""UPDATE notes n
               SET archived_at = {"NOW()" if archived else "NULL"}, updated_at = NOW()
               FROM boards b
               WHERE n.board_id = b.id
                 AND n.id = $1
                 AND b.organization_id = $2
                 AND n.deleted_at IS NULL""",
            note_id,
            org_id,
        )
        return result == "UPDATE 1"

    async def soft_delete_note(self, note_id: UUID, org_id: UUID) -> bool:
        """Mark a note deleted. Returns False if nothing matched."""
        result = await self.execute(
            """UPDATE notes n
               SET deleted_at = NOW(), updated_at = NOW()
               FROM boards b
               WHERE n.board_id = b.id
                 AND n.id = $1
                 AND b.organization_id = $2
                 AND n.deleted_at IS NULL""",
            note_id,
            org_id,
        )
        return result == "UPDATE 1"

    async def _with_checklist_items(self, rows: list[dict[str, Any]]) -> list[dict[str, Any]]:
        """Attach ordered checklist items to each note row."""
        if not rows:
            return rows
        items = await self.fetch_all(
            """SELECT id, note_id, content, checked, "order"
               FROM checklist_items
               WHERE note_id = ANY($1::uuid[])
               ORDER BY "order", created_at""",
            [row["id"] for row in rows],
        )
        by_note: dict[UUID, list[dict[str, Any]]] = {}
        for item in items:
            by_note.setdefault(item["note_id"], []).append(item)
        return [{**row, "checklist_items": by_note.get(row["id"], [])} for row in rows]
