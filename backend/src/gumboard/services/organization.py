"""Organization membership service."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

import structlog

from gumboard.adapters.db.app_db import AppDatabase
from gumboard.core.exceptions import ConflictError, NoOrganizationError, NotFoundError

logger = structlog.get_logger()


@dataclass
class OrganizationInfo:
    """Organization information."""

    id: UUID
    name: str
    created_at: datetime


class OrganizationService:
    """Service for creating, reading and leaving organizations."""

    def __init__(self, db: AppDatabase):
        self.db = db

    async def get_current(self, organization_id: UUID | None) -> OrganizationInfo:
        """Get the caller's organization.

        Raises:
            NoOrganizationError: Caller belongs to no organization.
            NotFoundError: The referenced organization row is gone.
        """
        if organization_id is None:
            raise NoOrganizationError()
        result = await self.db.get_organization(organization_id)
        if not result:
            raise NotFoundError()
        return OrganizationInfo(
            id=result["id"],
            name=result["name"],
            created_at=result["created_at"],
        )

    async def create_for_user(
        self,
        user_id: UUID,
        current_organization_id: UUID | None,
        name: str,
    ) -> OrganizationInfo:
        """Create an organization and make the user its first member.

        Raises:
            ConflictError: User already belongs to an organization.
        """
        if current_organization_id is not None:
            raise ConflictError("Already a member of an organization")

        result = await self.db.create_organization_for_user(user_id, name.strip())

        logger.info(
            "organization_created",
            organization_id=str(result["id"]),
            user_id=str(user_id),
        )

        return OrganizationInfo(
            id=result["id"],
            name=result["name"],
            created_at=result["created_at"],
        )

    async def leave(self, user_id: UUID, organization_id: UUID | None) -> None:
        """Remove the user from their organization.

        Raises:
            NoOrganizationError: User has no organization to leave.
        """
        if organization_id is None:
            raise NoOrganizationError()
        await self.db.set_user_organization(user_id, None)
        logger.info(
            "organization_left",
            organization_id=str(organization_id),
            user_id=str(user_id),
        )
