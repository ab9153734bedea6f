"""Domain-specific exceptions.

All exceptions in the gumboard system inherit from GumboardError,
making it easy to catch all system errors while still being able
to handle specific error types.
"""

from __future__ import annotations


class GumboardError(Exception):
    """Base exception for all gumboard errors."""

    pass


class AuthenticationError(GumboardError):
    """A magic link could not be turned into a session.

    Callers must not reveal which subclass was raised to the end user.
    Both cases are reported as "link invalid or expired".
    """

    pass


class InvalidTokenError(AuthenticationError):
    """Verification token is unknown or has already been used."""

    pass


class ExpiredTokenError(AuthenticationError):
    """Verification token existed but is past its expiry."""

    pass


class TransportFailure(GumboardError):
    """Email delivery of a magic link failed.

    Logged server-side by the issuer, never surfaced to the client.
    """

    pass


class AccessDeniedError(GumboardError):
    """Request was rejected before touching organization-scoped data.

    Attributes:
        status_code: HTTP status the API boundary responds with.
    """

    status_code: int = 403
    default_message: str = "Forbidden"

    def __init__(self, message: str | None = None) -> None:
        """Initialize AccessDeniedError.

        Args:
            message: Client-safe error description.
        """
        super().__init__(message or self.default_message)
        self.message = message or self.default_message


class UnauthorizedError(AccessDeniedError):
    """No valid session."""

    status_code = 401
    default_message = "Unauthorized"


class NoOrganizationError(AccessDeniedError):
    """Valid session, but the user belongs to no organization."""

    status_code = 403
    default_message = "No organization found"


class ForbiddenError(AccessDeniedError):
    """Resource belongs to a different organization.

    Reported exactly like NotFoundError so a caller from another tenant
    cannot tell a foreign resource from a missing one.
    """

    status_code = 404
    default_message = "Not found"


class NotFoundError(AccessDeniedError):
    """Resource does not exist."""

    status_code = 404
    default_message = "Not found"


class ConflictError(AccessDeniedError):
    """Request conflicts with the caller's current state."""

    status_code = 409
    default_message = "Conflict"
