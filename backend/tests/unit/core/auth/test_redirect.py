"""Tests for the post-sign-in redirect policy."""

import pytest

from gumboard.core.auth.redirect import resolve_redirect

BASE = "https://app.example"
DASHBOARD = "https://app.example/dashboard"


class TestResolveRedirect:
    """Test resolve_redirect."""

    def test_relative_invite_is_prefixed(self) -> None:
        """Relative invitation links keep their path and query."""
        assert (
            resolve_redirect("/invite/accept?x=1", BASE) == "https://app.example/invite/accept?x=1"
        )

    def test_foreign_origin_goes_to_dashboard(self) -> None:
        """Other origins are never honoured."""
        assert resolve_redirect("https://evil.example/phish", BASE) == DASHBOARD

    def test_relative_non_invite_goes_to_dashboard(self) -> None:
        """Relative paths other than invitations fall back."""
        assert resolve_redirect("/settings", BASE) == DASHBOARD

    def test_same_origin_is_honoured(self) -> None:
        """Absolute URLs on our origin are returned unchanged."""
        assert (
            resolve_redirect("https://app.example/boards/5", BASE) == "https://app.example/boards/5"
        )

    def test_same_origin_absolute_invite_is_honoured(self) -> None:
        """Absolute invitation links on our origin are kept."""
        target = "https://app.example/invite/accept?token=t"
        assert resolve_redirect(target, BASE) == target

    def test_foreign_absolute_invite_goes_to_dashboard(self) -> None:
        """An invitation path on another host is not an escape hatch."""
        assert resolve_redirect("https://evil.example/invite/accept", BASE) == DASHBOARD

    def test_trailing_slash_on_base(self) -> None:
        """Base URL with a trailing slash does not double the slash."""
        assert resolve_redirect("/", BASE + "/") == DASHBOARD

    def test_origin_comparison_ignores_case(self) -> None:
        """Scheme and host compare case-insensitively."""
        assert resolve_redirect("HTTPS://APP.EXAMPLE/x", BASE) == "HTTPS://APP.EXAMPLE/x"

    def test_different_port_is_foreign(self) -> None:
        """Port is part of the origin."""
        assert resolve_redirect("https://app.example:8443/x", BASE) == DASHBOARD

    @pytest.mark.parametrize("target", ["", "javascript:alert(1)", "http://[::1", "boards/5"])
    def test_unusable_targets_go_to_dashboard(self, target: str) -> None:
        """Empty, schemeless and unparseable targets fall back."""
        assert resolve_redirect(target, BASE) == DASHBOARD
