"""Request authentication dependencies."""

from .session_auth import (
    SESSION_COOKIE_NAME,
    CurrentUser,
    IdentityDep,
    MemberContext,
    RequireMember,
    require_identity,
    require_member,
    require_user,
    resolve_identity,
)

__all__ = [
    "SESSION_COOKIE_NAME",
    "CurrentUser",
    "IdentityDep",
    "MemberContext",
    "RequireMember",
    "require_identity",
    "require_member",
    "require_user",
    "resolve_identity",
]
