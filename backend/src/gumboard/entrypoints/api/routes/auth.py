"""Auth API routes for magic-link sign-in and sessions."""

from datetime import datetime
from typing import Annotated, Any
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Security
from fastapi.responses import JSONResponse, RedirectResponse
from pydantic import BaseModel, EmailStr, Field

from gumboard.adapters.auth.postgres import PostgresAuthRepository
from gumboard.core.auth.redirect import resolve_redirect
from gumboard.core.auth.service import AuthService
from gumboard.core.auth.session import SessionResolver
from gumboard.core.exceptions import AuthenticationError
from gumboard.entrypoints.api.deps import (
    Settings,
    get_auth_repository,
    get_auth_service,
    get_base_url,
    get_session_resolver,
    get_settings,
)
from gumboard.entrypoints.api.middleware.session_auth import SESSION_COOKIE_NAME, cookie_scheme

router = APIRouter(prefix="/auth", tags=["auth"])

VERIFY_REQUEST_PATH = "/auth/verify-request"
VERIFICATION_ERROR_PATH = "/auth/error?error=Verification"

BaseUrlDep = Annotated[str, Depends(get_base_url)]


# Request/Response models
class SignInRequest(BaseModel):
    """Magic-link sign-in request body."""

    email: EmailStr
    callback_url: str | None = Field(None, max_length=2048)


class SignInResponse(BaseModel):
    """Response after a sign-in request. Identical for every address."""

    message: str
    url: str


class SessionUser(BaseModel):
    """User as exposed to the browser."""

    id: UUID
    email: str
    name: str | None = None
    image: str | None = None
    organization_id: UUID | None = None


class SessionResponse(BaseModel):
    """Current session."""

    user: SessionUser
    expires: datetime


async def _request_magic_link(
    service: AuthService,
    base_url: str,
    email: str,
    callback_url: str | None,
) -> SignInResponse:
    await service.issue_magic_link(email=email, base_url=base_url, callback_url=callback_url)
    return SignInResponse(
        message="Check your email",
        url=f"{base_url}{VERIFY_REQUEST_PATH}",
    )


@router.post("/signin/email", response_model=SignInResponse)
async def sign_in_with_email(
    body: SignInRequest,
    service: Annotated[AuthService, Depends(get_auth_service)],
    base_url: BaseUrlDep,
) -> SignInResponse:
    """Request a magic link.

    Always returns the same response so callers cannot tell whether the
    address has an account or whether delivery succeeded.

    Args:
        body: Email address and optional post-sign-in destination.
        service: Auth service.
        base_url: Public base URL.

    Returns:
        Generic "check your email" response.
    """
    return await _request_magic_link(service, base_url, body.email, body.callback_url)


@router.get("/signin/email", response_model=SignInResponse)
async def sign_in_with_email_query(
    service: Annotated[AuthService, Depends(get_auth_service)],
    base_url: BaseUrlDep,
    email: Annotated[EmailStr, Query()],
    callback_url: Annotated[str | None, Query(alias="callbackUrl", max_length=2048)] = None,
) -> SignInResponse:
    """Request a magic link with query parameters. Same response as the POST form."""
    return await _request_magic_link(service, base_url, email, callback_url)


@router.get("/callback/email")
async def email_callback(
    service: Annotated[AuthService, Depends(get_auth_service)],
    config: Annotated[Settings, Depends(get_settings)],
    base_url: BaseUrlDep,
    token: str | None = None,
    identifier: str | None = None,
    email: str | None = None,
    callback_url: Annotated[str | None, Query(alias="callbackUrl")] = None,
) -> RedirectResponse:
    """Consume a magic link, set the session cookie and redirect.

    The address is read from ``identifier``, or from ``email`` for links
    that carry it under that name. Invalid, used and expired links all land
    on the same error page.
    """
    identifier = identifier or email
    if not token or not identifier:
        return RedirectResponse(f"{base_url}{VERIFICATION_ERROR_PATH}", status_code=302)

    try:
        issued = await service.verify(token=token, email=identifier)
    except AuthenticationError:
        return RedirectResponse(f"{base_url}{VERIFICATION_ERROR_PATH}", status_code=302)

    response = RedirectResponse(
        resolve_redirect(callback_url or "/", base_url),
        status_code=302,
    )
    response.set_cookie(
        key=SESSION_COOKIE_NAME,
        value=issued.session_token,
        max_age=config.session_max_age_days * 24 * 60 * 60,
        path="/",
        httponly=True,
        samesite="lax",
        secure=config.secure_cookies,
    )
    return response


@router.get("/session", response_model=None)
async def get_session(
    resolver: Annotated[SessionResolver, Depends(get_session_resolver)],
    repo: Annotated[PostgresAuthRepository, Depends(get_auth_repository)],
    session_token: str | None = Security(cookie_scheme),  # noqa: B008
) -> SessionResponse | dict[str, Any]:
    """Return the current session, or an empty object when signed out."""
    session = await resolver.get_session(session_token)
    if session is None:
        return {}

    user = await repo.get_user_by_id(session.user_id)
    if user is None:
        return {}

    return SessionResponse(
        user=SessionUser(
            id=user.id,
            email=user.email,
            name=user.name,
            image=user.image,
            organization_id=user.organization_id,
        ),
        expires=session.expires_at,
    )


@router.post("/signout")
async def sign_out(
    service: Annotated[AuthService, Depends(get_auth_service)],
    config: Annotated[Settings, Depends(get_settings)],
    session_token: str | None = Security(cookie_scheme),  # noqa: B008
) -> JSONResponse:
    """Delete the current session and clear the cookie."""
    await service.sign_out(session_token)
    response = JSONResponse({"message": "Signed out"})
    response.delete_cookie(
        key=SESSION_COOKIE_NAME,
        path="/",
        httponly=True,
        samesite="lax",
        secure=config.secure_cookies,
    )
    return response
