"""Note routes: archive, restore and soft delete."""

from __future__ import annotations

from datetime import datetime
from typing import Annotated, Any
from uuid import UUID

from fastapi import APIRouter, Depends, Response
from pydantic import BaseModel, Field

from gumboard.adapters.db.app_db import AppDatabase
from gumboard.core.authz.gate import AuthorizationGate
from gumboard.core.authz.types import Action, ResourceRef
from gumboard.core.exceptions import NotFoundError
from gumboard.entrypoints.api.deps import get_app_db, get_authorization_gate
from gumboard.entrypoints.api.middleware.session_auth import IdentityDep
from gumboard.models.note import DEFAULT_COLOR

router = APIRouter(prefix="/notes", tags=["notes"])

# Annotated types for dependency injection
AppDbDep = Annotated[AppDatabase, Depends(get_app_db)]
GateDep = Annotated[AuthorizationGate, Depends(get_authorization_gate)]

HEX_COLOR_PATTERN = r"^#[0-9a-fA-F]{6}$"


class NoteAuthor(BaseModel):
    """Author of a note."""

    id: UUID
    name: str | None = None
    email: str
    image: str | None = None


class NoteBoard(BaseModel):
    """Board a note belongs to."""

    id: UUID
    name: str


class ChecklistItemResponse(BaseModel):
    """Checklist item of a note."""

    id: UUID
    content: str
    checked: bool
    order: int


class NoteResponse(BaseModel):
    """Response for a note."""

    id: UUID
    color: str
    archived_at: datetime | None = None
    created_at: datetime
    updated_at: datetime
    user: NoteAuthor
    board: NoteBoard
    checklist_items: list[ChecklistItemResponse]


class NoteListResponse(BaseModel):
    """Response for listing notes."""

    notes: list[NoteResponse]


class ChecklistItemInput(BaseModel):
    """Checklist item in a create request."""

    content: str = Field("", max_length=10000)
    checked: bool = False


class CreateNoteRequest(BaseModel):
    """Request to create a note."""

    color: str = Field(DEFAULT_COLOR, pattern=HEX_COLOR_PATTERN)
    checklist_items: list[ChecklistItemInput] = Field(default_factory=list)


def note_from_row(row: dict[str, Any]) -> NoteResponse:
    """Build a NoteResponse from a joined note row."""
    return NoteResponse(
        id=row["id"],
        color=row["color"],
        archived_at=row["archived_at"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
        user=NoteAuthor(
            id=row["user_id"],
            name=row["user_name"],
            email=row["user_email"],
            image=row["user_image"],
        ),
        board=NoteBoard(id=row["board_id"], name=row["board_name"]),
        checklist_items=[
            ChecklistItemResponse(
                id=item["id"],
                content=item["content"],
                checked=item["checked"],
                order=item["order"],
            )
            for item in row["checklist_items"]
        ],
    )


async def _set_archived(
    note_id: UUID,
    archived: bool,
    identity: IdentityDep,
    gate: GateDep,
    app_db: AppDbDep,
) -> NoteResponse:
    allow = await gate.require(identity, Action.WRITE, ResourceRef.note(note_id))
    if not await app_db.set_note_archived(note_id, allow.organization_id, archived):
        raise NotFoundError()
    row = await app_db.get_note(note_id, allow.organization_id)
    if row is None:
        raise NotFoundError()
    return note_from_row(row)


@router.post("/{note_id}/archive", response_model=NoteResponse)
async def archive_note(
    note_id: UUID,
    identity: IdentityDep,
    gate: GateDep,
    app_db: AppDbDep,
) -> NoteResponse:
    """Move a note to the archive."""
    return await _set_archived(note_id, True, identity, gate, app_db)


@router.post("/{note_id}/restore", response_model=NoteResponse)
async def restore_note(
    note_id: UUID,
    identity: IdentityDep,
    gate: GateDep,
    app_db: AppDbDep,
) -> NoteResponse:
    """Bring an archived note back onto its board."""
    return await _set_archived(note_id, False, identity, gate, app_db)


@router.delete("/{note_id}", status_code=204)
async def delete_note(
    note_id: UUID,
    identity: IdentityDep,
    gate: GateDep,
    app_db: AppDbDep,
) -> Response:
    """Soft-delete a note.

    Args:
        note_id: Note to delete.
        identity: Resolved caller.
        gate: Authorization gate.
        app_db: Application database.

    Returns:
        Empty 204 response.

    Raises:
        NotFoundError: Note missing, already deleted, or in another organization.
    """
    allow = await gate.require(identity, Action.WRITE, ResourceRef.note(note_id))
    if not await app_db.soft_delete_note(note_id, allow.organization_id):
        raise NotFoundError()
    return Response(status_code=204)
