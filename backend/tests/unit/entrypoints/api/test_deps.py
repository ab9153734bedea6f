"""Tests for dependency wiring."""

import pytest

from gumboard.adapters.auth.magic_link_console import ConsoleMagicLinkSender
from gumboard.adapters.notifications.email import EmailNotifier
from gumboard.adapters.notifications.resend import ResendNotifier
from gumboard.entrypoints.api.deps import Settings, build_magic_link_sender


@pytest.fixture
def config(monkeypatch: pytest.MonkeyPatch) -> Settings:
    """Settings with no transport configured."""
    for name in ("AUTH_RESEND_KEY", "SMTP_HOST", "MAGIC_LINK_DELIVERY", "AUTH_URL"):
        monkeypatch.delenv(name, raising=False)
    return Settings()


class TestBuildMagicLinkSender:
    """Test transport selection."""

    def test_auto_defaults_to_console(self, config: Settings) -> None:
        """Nothing configured prints links."""
        assert isinstance(build_magic_link_sender(config), ConsoleMagicLinkSender)

    def test_auto_prefers_resend(self, config: Settings) -> None:
        """A Resend key wins over SMTP."""
        config.resend_api_key = "re_test"
        config.smtp_host = "smtp.example.com"

        sender = build_magic_link_sender(config)

        assert isinstance(sender, ResendNotifier)
        assert sender.config.api_key == "re_test"

    def test_auto_uses_smtp(self, config: Settings) -> None:
        """SMTP host without a Resend key picks SMTP."""
        config.smtp_host = "smtp.example.com"

        sender = build_magic_link_sender(config)

        assert isinstance(sender, EmailNotifier)
        assert sender.config.smtp_host == "smtp.example.com"

    def test_explicit_console(self, config: Settings) -> None:
        """Explicit mode overrides auto-detection."""
        config.resend_api_key = "re_test"
        config.magic_link_delivery = "console"

        assert isinstance(build_magic_link_sender(config), ConsoleMagicLinkSender)

    def test_unknown_mode(self, config: Settings) -> None:
        """Typos fail at startup."""
        config.magic_link_delivery = "carrier-pigeon"

        with pytest.raises(ValueError):
            build_magic_link_sender(config)


def test_secure_cookies_follow_scheme(config: Settings) -> None:
    """Secure flag only on https deployments."""
    assert config.secure_cookies is False
    config.auth_url = "https://app.example"
    assert config.secure_cookies is True
