"""Board model."""

from typing import TYPE_CHECKING
from uuid import UUID

from sqlalchemy import ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from gumboard.models.base import BaseModel

if TYPE_CHECKING:
    from gumboard.models.note import Note
    from gumboard.models.organization import Organization


class Board(BaseModel):
    """A board of sticky notes, owned by an organization."""

    __tablename__ = "boards"

    organization_id: Mapped[UUID] = mapped_column(
        ForeignKey("organizations.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_by: Mapped[UUID] = mapped_column(ForeignKey("users.id"), nullable=False)

    # Relationships
    organization: Mapped["Organization"] = relationship("Organization", back_populates="boards")
    notes: Mapped[list["Note"]] = relationship(
        "Note", back_populates="board", cascade="all, delete-orphan"
    )
