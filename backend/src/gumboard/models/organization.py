"""Organization model for multi-tenancy."""

from typing import TYPE_CHECKING

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from gumboard.models.base import BaseModel

if TYPE_CHECKING:
    from gumboard.models.board import Board
    from gumboard.models.user import User


class Organization(BaseModel):
    """A tenant. Every board and note belongs to exactly one."""

    __tablename__ = "organizations"

    name: Mapped[str] = mapped_column(String(100), nullable=False)

    # Relationships
    users: Mapped[list["User"]] = relationship("User", back_populates="organization")
    boards: Mapped[list["Board"]] = relationship(
        "Board", back_populates="organization", cascade="all, delete-orphan"
    )
