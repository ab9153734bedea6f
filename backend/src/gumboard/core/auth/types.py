"""Auth domain types."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, EmailStr


class User(BaseModel):
    """User domain model."""

    id: UUID
    email: EmailStr
    name: str | None = None
    image: str | None = None
    email_verified: datetime | None = None
    organization_id: UUID | None = None
    created_at: datetime


class Organization(BaseModel):
    """Organization (tenant) domain model."""

    id: UUID
    name: str
    created_at: datetime


class VerificationToken(BaseModel):
    """Stored magic-link token. Only the hash of the token is persisted."""

    identifier: str  # email address the link was sent to
    token_hash: str
    expires_at: datetime


class Session(BaseModel):
    """Database session bound to a cookie."""

    id: UUID
    user_id: UUID
    expires_at: datetime


@dataclass(frozen=True)
class IssuedSession:
    """A freshly created session plus the plaintext token for the cookie."""

    session: Session
    user: User
    session_token: str


@dataclass(frozen=True)
class Anonymous:
    """No authenticated caller."""


@dataclass(frozen=True)
class Authenticated:
    """Caller resolved from a live session."""

    user_id: UUID


Identity = Anonymous | Authenticated

ANONYMOUS = Anonymous()
