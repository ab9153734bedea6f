"""Board routes, including board notes and the organization archive."""

from __future__ import annotations

from datetime import datetime
from typing import Annotated, Any
from uuid import UUID

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from gumboard.adapters.db.app_db import AppDatabase
from gumboard.core.authz.gate import AuthorizationGate
from gumboard.core.authz.types import Action, ResourceRef
from gumboard.core.exceptions import NotFoundError
from gumboard.entrypoints.api.deps import get_app_db, get_authorization_gate
from gumboard.entrypoints.api.middleware.session_auth import IdentityDep, RequireMember
from gumboard.entrypoints.api.routes.notes import (
    CreateNoteRequest,
    NoteListResponse,
    NoteResponse,
    note_from_row,
)

router = APIRouter(prefix="/boards", tags=["boards"])

# Annotated types for dependency injection
AppDbDep = Annotated[AppDatabase, Depends(get_app_db)]
GateDep = Annotated[AuthorizationGate, Depends(get_authorization_gate)]


class BoardResponse(BaseModel):
    """Response for a board."""

    id: UUID
    name: str
    description: str | None = None
    created_by: UUID
    created_at: datetime
    updated_at: datetime


class BoardListResponse(BaseModel):
    """Response for listing boards."""

    boards: list[BoardResponse]
    total: int


class CreateBoardRequest(BaseModel):
    """Request to create a board."""

    name: str = Field(..., min_length=1, max_length=100)
    description: str | None = Field(None, max_length=1000)


def _board_from_row(row: dict[str, Any]) -> BoardResponse:
    return BoardResponse(
        id=row["id"],
        name=row["name"],
        description=row.get("description"),
        created_by=row["created_by"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


@router.get("", response_model=BoardListResponse)
async def list_boards(
    member: RequireMember,
    app_db: AppDbDep,
) -> BoardListResponse:
    """List all boards of the caller's organization."""
    rows = await app_db.list_boards(member.organization_id)
    boards = [_board_from_row(row) for row in rows]
    return BoardListResponse(boards=boards, total=len(boards))


@router.post("", response_model=BoardResponse, status_code=201)
async def create_board(
    body: CreateBoardRequest,
    member: RequireMember,
    app_db: AppDbDep,
) -> BoardResponse:
    """Create a board in the caller's organization."""
    row = await app_db.create_board(
        org_id=member.organization_id,
        name=body.name.strip(),
        created_by=member.user_id,
        description=body.description,
    )
    return _board_from_row(row)


# Declared before /{board_id} so "archive" is not parsed as an ID
@router.get("/archive/notes", response_model=NoteListResponse)
async def list_archived_notes(
    member: RequireMember,
    app_db: AppDbDep,
) -> NoteListResponse:
    """List archived notes across the caller's organization.

    Deleted notes are excluded. The most recently archived come first.
    """
    rows = await app_db.list_archived_notes(member.organization_id)
    return NoteListResponse(notes=[note_from_row(row) for row in rows])


@router.get("/{board_id}", response_model=BoardResponse)
async def get_board(
    board_id: UUID,
    identity: IdentityDep,
    gate: GateDep,
    app_db: AppDbDep,
) -> BoardResponse:
    """Get a board."""
    allow = await gate.require(identity, Action.READ, ResourceRef.board(board_id))
    row = await app_db.get_board(board_id, allow.organization_id)
    if row is None:
        raise NotFoundError()
    return _board_from_row(row)


@router.get("/{board_id}/notes", response_model=NoteListResponse)
async def list_board_notes(
    board_id: UUID,
    identity: IdentityDep,
    gate: GateDep,
    app_db: AppDbDep,
) -> NoteListResponse:
    """List the active notes on a board."""
    allow = await gate.require(identity, Action.READ, ResourceRef.board(board_id))
    rows = await app_db.list_active_notes(board_id, allow.organization_id)
    return NoteListResponse(notes=[note_from_row(row) for row in rows])


@router.post("/{board_id}/notes", response_model=NoteResponse, status_code=201)
async def create_note(
    board_id: UUID,
    body: CreateNoteRequest,
    identity: IdentityDep,
    gate: GateDep,
    app_db: AppDbDep,
) -> NoteResponse:
    """Create a note on a board.

    Args:
        board_id: Target board.
        body: Color and checklist items.
        identity: Resolved caller.
        gate: Authorization gate.
        app_db: Application database.

    Returns:
        The created note with author and board.
    """
    allow = await gate.require(identity, Action.WRITE, ResourceRef.board(board_id))
    note_id = await app_db.create_note(
        board_id=board_id,
        created_by=allow.user_id,
        color=body.color,
        checklist_items=[(item.content, item.checked) for item in body.checklist_items],
    )
    row = await app_db.get_note(note_id, allow.organization_id)
    if row is None:
        raise NotFoundError()
    return note_from_row(row)
