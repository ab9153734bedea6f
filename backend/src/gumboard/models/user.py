"""User model."""

from datetime import datetime
from typing import TYPE_CHECKING
from uuid import UUID

from sqlalchemy import ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from gumboard.models.base import BaseModel

if TYPE_CHECKING:
    from gumboard.models.organization import Organization
    from gumboard.models.session import Session


class User(BaseModel):
    """A user. Created on first successful magic-link verification."""

    __tablename__ = "users"

    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    image: Mapped[str | None] = mapped_column(String, nullable=True)
    email_verified: Mapped[datetime | None] = mapped_column(nullable=True)
    organization_id: Mapped[UUID | None] = mapped_column(
        ForeignKey("organizations.id", ondelete="SET NULL"), nullable=True, index=True
    )

    # Relationships
    organization: Mapped["Organization | None"] = relationship(
        "Organization", back_populates="users"
    )
    sessions: Mapped[list["Session"]] = relationship(
        "Session", back_populates="user", cascade="all, delete-orphan"
    )
