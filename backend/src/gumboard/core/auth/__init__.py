"""Auth domain types and utilities."""

from gumboard.core.auth.delivery import MagicLinkMessage, MagicLinkSender
from gumboard.core.auth.redirect import resolve_redirect
from gumboard.core.auth.repository import AuthRepository
from gumboard.core.auth.service import AuthService
from gumboard.core.auth.session import SessionResolver
from gumboard.core.auth.tokens import generate_token, hash_token, normalize_email
from gumboard.core.auth.types import (
    ANONYMOUS,
    Anonymous,
    Authenticated,
    Identity,
    IssuedSession,
    Organization,
    Session,
    User,
    VerificationToken,
)

__all__ = [
    "User",
    "Organization",
    "Session",
    "VerificationToken",
    "IssuedSession",
    "Identity",
    "Anonymous",
    "Authenticated",
    "ANONYMOUS",
    "AuthRepository",
    "AuthService",
    "SessionResolver",
    "MagicLinkMessage",
    "MagicLinkSender",
    "resolve_redirect",
    "generate_token",
    "hash_token",
    "normalize_email",
]
