"""Organization-scoped authorization.

Every read and write on boards and notes goes through this gate. There is
no per-resource shortcut: the caller's organization must match the
resource's organization, resolved through the parent board for notes.
"""

from typing import Protocol, runtime_checkable
from uuid import UUID

import structlog

from gumboard.core.auth.types import Authenticated, Identity, User
from gumboard.core.authz.types import (
    Action,
    Allow,
    Decision,
    Deny,
    DenyReason,
    ResourceKind,
    ResourceRef,
)

logger = structlog.get_logger()


@runtime_checkable
class OwnershipRepository(Protocol):
    """Lookups the gate needs from the store."""

    async def get_user_by_id(self, user_id: UUID) -> User | None:
        """Get user by ID."""
        ...

    async def get_board_organization_id(self, board_id: UUID) -> UUID | None:
        """Owning organization of a board, ignoring soft-state. None if absent."""
        ...

    async def get_note_organization_id(self, note_id: UUID) -> UUID | None:
        """Owning organization of a note via its board, ignoring soft-state."""
        ...


def decide(
    identity: Identity,
    user: User | None,
    resource_org_id: UUID | None,
) -> Decision:
    """Pure authorization decision.

    Checks run in a fixed order: anonymous caller, missing user row, user
    without organization, missing resource, foreign organization.

    Args:
        identity: The resolved caller.
        user: The caller's user row, None if it no longer exists.
        resource_org_id: Organization owning the resource, None if absent.

    Returns:
        Allow, or Deny with the first failing reason.
    """
    if not isinstance(identity, Authenticated) or user is None:
        return Deny(DenyReason.UNAUTHORIZED)
    if user.organization_id is None:
        return Deny(DenyReason.NO_ORGANIZATION)
    if resource_org_id is None:
        return Deny(DenyReason.NOT_FOUND)
    if resource_org_id != user.organization_id:
        return Deny(DenyReason.FORBIDDEN)
    return Allow(user_id=user.id, organization_id=resource_org_id)


class AuthorizationGate:
    """Loads ownership data and applies ``decide``."""

    def __init__(self, repo: OwnershipRepository) -> None:
        """Initialize with an ownership repository.

        Args:
            repo: Store lookups for users, boards and notes.
        """
        self._repo = repo

    async def _load_user(self, identity: Identity) -> User | None:
        if not isinstance(identity, Authenticated):
            return None
        return await self._repo.get_user_by_id(identity.user_id)

    async def _resource_org_id(self, resource: ResourceRef) -> UUID | None:
        if resource.kind is ResourceKind.BOARD:
            return await self._repo.get_board_organization_id(resource.id)
        return await self._repo.get_note_organization_id(resource.id)

    async def authorize(
        self,
        identity: Identity,
        action: Action,
        resource: ResourceRef,
    ) -> Decision:
        """Decide whether ``identity`` may perform ``action`` on ``resource``."""
        user = await self._load_user(identity)
        if user is None or user.organization_id is None:
            decision = decide(identity, user, None)
        else:
            decision = decide(identity, user, await self._resource_org_id(resource))

        if isinstance(decision, Deny):
            logger.info(
                "authorization_denied",
                reason=decision.reason.value,
                action=action.value,
                resource_kind=resource.kind.value,
                resource_id=str(resource.id),
            )
        return decision

    async def require(
        self,
        identity: Identity,
        action: Action,
        resource: ResourceRef,
    ) -> Allow:
        """Like ``authorize`` but raises the matching AccessDeniedError on Deny."""
        decision = await self.authorize(identity, action, resource)
        if isinstance(decision, Deny):
            raise decision.to_error()
        return decision

    async def require_member(self, identity: Identity) -> Allow:
        """Check the caller is signed in and belongs to an organization.

        Used by list and create endpoints, which then filter every query by
        the returned organization ID.
        """
        user = await self._load_user(identity)
        if user is None:
            raise Deny(DenyReason.UNAUTHORIZED).to_error()
        if user.organization_id is None:
            logger.info("authorization_denied", reason=DenyReason.NO_ORGANIZATION.value)
            raise Deny(DenyReason.NO_ORGANIZATION).to_error()
        return Allow(user_id=user.id, organization_id=user.organization_id)
