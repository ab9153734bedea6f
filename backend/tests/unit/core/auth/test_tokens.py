"""Tests for token utilities."""

from datetime import UTC, datetime, timedelta

from gumboard.core.auth.tokens import (
    generate_token,
    get_session_expiry,
    get_token_expiry,
    hash_token,
    is_expired,
    normalize_email,
)

NOW = datetime(2024, 1, 15, 12, 0, tzinfo=UTC)


class TestGenerateToken:
    """Test token generation."""

    def test_tokens_are_unique(self) -> None:
        """Should not repeat across calls."""
        tokens = {generate_token() for _ in range(100)}
        assert len(tokens) == 100

    def test_token_is_url_safe(self) -> None:
        """Should only contain URL-safe characters."""
        token = generate_token()
        assert len(token) >= 43
        assert all(c.isalnum() or c in "-_" for c in token)


class TestHashToken:
    """Test token hashing."""

    def test_hash_is_deterministic(self) -> None:
        """Same token and secret give the same hash."""
        assert hash_token("abc", "s") == hash_token("abc", "s")

    def test_hash_depends_on_secret(self) -> None:
        """Different secrets give different hashes."""
        assert hash_token("abc", "one") != hash_token("abc", "two")

    def test_hash_is_hex_sha256(self) -> None:
        """Should be 64 hex characters."""
        digest = hash_token("abc")
        assert len(digest) == 64
        int(digest, 16)


class TestExpiry:
    """Test expiry helpers."""

    def test_token_expiry_is_24_hours(self) -> None:
        """Default magic link lifetime."""
        assert get_token_expiry(now=NOW) == NOW + timedelta(hours=24)

    def test_session_expiry_is_30_days(self) -> None:
        """Default session lifetime."""
        assert get_session_expiry(now=NOW) == NOW + timedelta(days=30)

    def test_not_expired_at_exact_expiry(self) -> None:
        """Expiry is strict: equal timestamps are still valid."""
        assert is_expired(NOW, now=NOW) is False

    def test_expired_after_expiry(self) -> None:
        """One microsecond later is expired."""
        assert is_expired(NOW, now=NOW + timedelta(microseconds=1)) is True

    def test_naive_expiry_treated_as_utc(self) -> None:
        """Naive timestamps from the store compare as UTC."""
        naive = datetime(2024, 1, 15, 11, 0)
        assert is_expired(naive, now=NOW) is True


def test_normalize_email() -> None:
    """Should strip whitespace and lowercase."""
    assert normalize_email("  Alice@Example.COM ") == "alice@example.com"
