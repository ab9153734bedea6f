"""Authorization types."""

from dataclasses import dataclass
from enum import Enum
from uuid import UUID

from gumboard.core.exceptions import (
    AccessDeniedError,
    ForbiddenError,
    NoOrganizationError,
    NotFoundError,
    UnauthorizedError,
)


class Action(str, Enum):
    """What the caller wants to do with a resource."""

    READ = "read"
    WRITE = "write"


class ResourceKind(str, Enum):
    """Organization-scoped entity types."""

    BOARD = "board"
    NOTE = "note"


class DenyReason(str, Enum):
    """Why an authorization check failed."""

    UNAUTHORIZED = "unauthorized"
    NO_ORGANIZATION = "no_organization"
    FORBIDDEN = "forbidden"
    NOT_FOUND = "not_found"


_ERRORS: dict[DenyReason, type[AccessDeniedError]] = {
    DenyReason.UNAUTHORIZED: UnauthorizedError,
    DenyReason.NO_ORGANIZATION: NoOrganizationError,
    DenyReason.FORBIDDEN: ForbiddenError,
    DenyReason.NOT_FOUND: NotFoundError,
}


@dataclass(frozen=True)
class ResourceRef:
    """Reference to a board or note by ID."""

    kind: ResourceKind
    id: UUID

    @classmethod
    def board(cls, board_id: UUID) -> "ResourceRef":
        return cls(ResourceKind.BOARD, board_id)

    @classmethod
    def note(cls, note_id: UUID) -> "ResourceRef":
        return cls(ResourceKind.NOTE, note_id)


@dataclass(frozen=True)
class Allow:
    """Access granted within ``organization_id``."""

    user_id: UUID
    organization_id: UUID


@dataclass(frozen=True)
class Deny:
    """Access refused."""

    reason: DenyReason

    def to_error(self) -> AccessDeniedError:
        """Exception the API boundary maps to an HTTP status."""
        return _ERRORS[self.reason]()


Decision = Allow | Deny
