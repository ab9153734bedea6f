"""Organization membership routes."""

from __future__ import annotations

from datetime import datetime
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from gumboard.entrypoints.api.deps import get_organization_service
from gumboard.entrypoints.api.middleware.session_auth import CurrentUser
from gumboard.services.organization import OrganizationInfo, OrganizationService

router = APIRouter(prefix="/organizations", tags=["organizations"])

OrgServiceDep = Annotated[OrganizationService, Depends(get_organization_service)]


class OrganizationResponse(BaseModel):
    """Response for an organization."""

    id: UUID
    name: str
    created_at: datetime


class CreateOrganizationRequest(BaseModel):
    """Request to create an organization."""

    name: str = Field(..., min_length=1, max_length=100)


class LeaveOrganizationResponse(BaseModel):
    """Response after leaving an organization."""

    message: str


def _to_response(org: OrganizationInfo) -> OrganizationResponse:
    return OrganizationResponse(id=org.id, name=org.name, created_at=org.created_at)


@router.get("/current", response_model=OrganizationResponse)
async def get_current_organization(
    user: CurrentUser,
    service: OrgServiceDep,
) -> OrganizationResponse:
    """Get the caller's organization."""
    org = await service.get_current(user.organization_id)
    return _to_response(org)


@router.post("", response_model=OrganizationResponse, status_code=201)
async def create_organization(
    body: CreateOrganizationRequest,
    user: CurrentUser,
    service: OrgServiceDep,
) -> OrganizationResponse:
    """Create an organization and join it.

    Args:
        body: Organization name.
        user: Signed-in caller, who must not already have an organization.
        service: Organization service.

    Returns:
        The new organization.
    """
    org = await service.create_for_user(user.id, user.organization_id, body.name)
    return _to_response(org)


@router.post("/leave", response_model=LeaveOrganizationResponse)
async def leave_organization(
    user: CurrentUser,
    service: OrgServiceDep,
) -> LeaveOrganizationResponse:
    """Leave the caller's organization."""
    await service.leave(user.id, user.organization_id)
    return LeaveOrganizationResponse(message="Left organization")
