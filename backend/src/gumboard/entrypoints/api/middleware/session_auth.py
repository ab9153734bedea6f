"""Session cookie authentication middleware."""

from dataclasses import dataclass
from typing import Annotated
from uuid import UUID

import structlog
from fastapi import Depends, Request, Security
from fastapi.security import APIKeyCookie

from gumboard.adapters.auth.postgres import PostgresAuthRepository
from gumboard.core.auth.session import SessionResolver
from gumboard.core.auth.types import Authenticated, Identity, User
from gumboard.core.authz.gate import AuthorizationGate
from gumboard.core.exceptions import UnauthorizedError
from gumboard.entrypoints.api.deps import (
    get_auth_repository,
    get_authorization_gate,
    get_session_resolver,
)

logger = structlog.get_logger()

SESSION_COOKIE_NAME = "authjs.session-token"

# Session token travels in an HttpOnly cookie
cookie_scheme = APIKeyCookie(name=SESSION_COOKIE_NAME, auto_error=False)


@dataclass
class MemberContext:
    """Caller who is signed in and belongs to an organization."""

    user_id: UUID
    organization_id: UUID


async def resolve_identity(
    request: Request,
    resolver: Annotated[SessionResolver, Depends(get_session_resolver)],
    session_token: str | None = Security(cookie_scheme),  # noqa: B008
) -> Identity:
    """Resolve the session cookie to an Identity.

    Never raises for a missing or expired session; those resolve to
    ``Anonymous``.

    Args:
        request: The current request.
        resolver: Session resolver.
        session_token: Raw cookie value, if present.

    Returns:
        ``Authenticated`` or ``Anonymous``.
    """
    identity = await resolver.resolve(session_token)

    # Store in request state for downstream use
    request.state.identity = identity
    return identity


async def require_identity(
    identity: Annotated[Identity, Depends(resolve_identity)],
) -> Authenticated:
    """Require a live session.

    Raises:
        UnauthorizedError: No cookie, unknown session, or expired session.
    """
    if not isinstance(identity, Authenticated):
        raise UnauthorizedError()
    return identity


async def require_user(
    identity: Annotated[Authenticated, Depends(require_identity)],
    repo: Annotated[PostgresAuthRepository, Depends(get_auth_repository)],
) -> User:
    """Require a live session whose user row still exists."""
    user = await repo.get_user_by_id(identity.user_id)
    if user is None:
        logger.warning("session_user_missing", user_id=str(identity.user_id))
        raise UnauthorizedError()
    return user


async def require_member(
    identity: Annotated[Identity, Depends(resolve_identity)],
    gate: Annotated[AuthorizationGate, Depends(get_authorization_gate)],
) -> MemberContext:
    """Require a signed-in caller with an organization.

    Raises:
        UnauthorizedError: No valid session.
        NoOrganizationError: User belongs to no organization.
    """
    allow = await gate.require_member(identity)
    return MemberContext(user_id=allow.user_id, organization_id=allow.organization_id)


# Common dependencies for convenience
IdentityDep = Annotated[Identity, Depends(resolve_identity)]
CurrentUser = Annotated[User, Depends(require_user)]
RequireMember = Annotated[MemberContext, Depends(require_member)]
