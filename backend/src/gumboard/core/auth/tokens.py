"""Secure token generation for magic links and sessions."""

import hashlib
import secrets
from datetime import UTC, datetime, timedelta

# Token configuration
TOKEN_BYTES = 32  # 256 bits of entropy
VERIFICATION_TOKEN_EXPIRY_HOURS = 24
SESSION_EXPIRY_DAYS = 30


def generate_token() -> str:
    """Generate a cryptographically secure single-use token.

    Returns:
        URL-safe base64 encoded token string.
    """
    return secrets.token_urlsafe(TOKEN_BYTES)


def hash_token(token: str, secret: str = "") -> str:
    """Hash a token for secure storage.

    The server secret is appended before hashing so a leaked table cannot be
    replayed against another deployment.

    Args:
        token: The plaintext token to hash.
        secret: Server-side secret mixed into the digest.

    Returns:
        Hex-encoded SHA-256 hash of the token.
    """
    return hashlib.sha256(f"{token}{secret}".encode()).hexdigest()


def normalize_email(email: str) -> str:
    """Canonical form used as the verification identifier and user key."""
    return email.strip().lower()


def utc_now() -> datetime:
    return datetime.now(UTC)


def get_token_expiry(
    hours: int = VERIFICATION_TOKEN_EXPIRY_HOURS,
    now: datetime | None = None,
) -> datetime:
    """Calculate verification token expiry timestamp.

    Args:
        hours: Number of hours until expiry.
        now: Reference time, defaults to the current UTC time.

    Returns:
        UTC datetime when the token expires.
    """
    return (now or utc_now()) + timedelta(hours=hours)


def get_session_expiry(
    days: int = SESSION_EXPIRY_DAYS,
    now: datetime | None = None,
) -> datetime:
    """Calculate session expiry timestamp."""
    return (now or utc_now()) + timedelta(days=days)


def is_expired(expires_at: datetime, now: datetime | None = None) -> bool:
    """Check if a token or session has expired.

    Args:
        expires_at: The expiry timestamp.
        now: Reference time, defaults to the current UTC time.

    Returns:
        True once ``now`` is past ``expires_at``.
    """
    now = now or utc_now()
    # Handle timezone-naive datetimes
    if expires_at.tzinfo is None:
        expires_at = expires_at.replace(tzinfo=UTC)
    if now.tzinfo is None:
        now = now.replace(tzinfo=UTC)
    return now > expires_at
