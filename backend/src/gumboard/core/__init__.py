"""Core domain - auth, authorization and error types."""

from .exceptions import (
    AccessDeniedError,
    AuthenticationError,
    ConflictError,
    ExpiredTokenError,
    ForbiddenError,
    GumboardError,
    InvalidTokenError,
    NoOrganizationError,
    NotFoundError,
    TransportFailure,
    UnauthorizedError,
)

__all__ = [
    "GumboardError",
    "AuthenticationError",
    "InvalidTokenError",
    "ExpiredTokenError",
    "TransportFailure",
    "AccessDeniedError",
    "UnauthorizedError",
    "NoOrganizationError",
    "ForbiddenError",
    "NotFoundError",
    "ConflictError",
]
