"""Application services."""

from .organization import OrganizationInfo, OrganizationService

__all__ = ["OrganizationInfo", "OrganizationService"]
