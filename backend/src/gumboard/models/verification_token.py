"""Magic-link verification token model."""

from datetime import datetime

from sqlalchemy import String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from gumboard.models.base import BaseModel


class VerificationToken(BaseModel):
    """Single-use sign-in token. Only the SHA-256 hash is stored."""

    __tablename__ = "verification_tokens"

    identifier: Mapped[str] = mapped_column(String(255), nullable=False)
    token_hash: Mapped[str] = mapped_column(String(64), nullable=False)  # SHA-256 hash
    expires_at: Mapped[datetime] = mapped_column(nullable=False)

    __table_args__ = (UniqueConstraint("identifier", "token_hash"),)
