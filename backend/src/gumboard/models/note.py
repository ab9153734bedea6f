"""Note and checklist item models."""

from datetime import datetime
from typing import TYPE_CHECKING
from uuid import UUID

from sqlalchemy import Boolean, ForeignKey, Integer, String, Text, false
from sqlalchemy.orm import Mapped, mapped_column, relationship

from gumboard.models.base import BaseModel

if TYPE_CHECKING:
    from gumboard.models.board import Board
    from gumboard.models.user import User

DEFAULT_COLOR = "#fef3c7"


class Note(BaseModel):
    """A sticky note on a board.

    ``archived_at`` separates active from archived views; ``deleted_at``
    hides the note from every listing. Neither removes the row.
    """

    __tablename__ = "notes"

    board_id: Mapped[UUID] = mapped_column(
        ForeignKey("boards.id", ondelete="CASCADE"), nullable=False, index=True
    )
    created_by: Mapped[UUID] = mapped_column(ForeignKey("users.id"), nullable=False)
    color: Mapped[str] = mapped_column(String(20), nullable=False, server_default=DEFAULT_COLOR)
    archived_at: Mapped[datetime | None] = mapped_column(nullable=True)
    deleted_at: Mapped[datetime | None] = mapped_column(nullable=True)

    # Relationships
    board: Mapped["Board"] = relationship("Board", back_populates="notes")
    user: Mapped["User"] = relationship("User")
    checklist_items: Mapped[list["ChecklistItem"]] = relationship(
        "ChecklistItem",
        back_populates="note",
        cascade="all, delete-orphan",
        order_by="ChecklistItem.order",
    )


class ChecklistItem(BaseModel):
    """One line of a note's checklist."""

    __tablename__ = "checklist_items"

    note_id: Mapped[UUID] = mapped_column(
        ForeignKey("notes.id", ondelete="CASCADE"), nullable=False, index=True
    )
    content: Mapped[str] = mapped_column(Text, nullable=False, server_default="")
    checked: Mapped[bool] = mapped_column(Boolean, nullable=False, server_default=false())
    order: Mapped[int] = mapped_column(Integer, nullable=False, server_default="0")

    # Relationships
    note: Mapped["Note"] = relationship("Note", back_populates="checklist_items")
