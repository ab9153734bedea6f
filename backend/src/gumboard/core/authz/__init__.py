"""Organization-scoped authorization."""

from gumboard.core.authz.gate import AuthorizationGate, OwnershipRepository, decide
from gumboard.core.authz.types import (
    Action,
    Allow,
    Decision,
    Deny,
    DenyReason,
    ResourceKind,
    ResourceRef,
)

__all__ = [
    "Action",
    "Allow",
    "AuthorizationGate",
    "Decision",
    "Deny",
    "DenyReason",
    "OwnershipRepository",
    "ResourceKind",
    "ResourceRef",
    "decide",
]
