"""Email transports for magic-link delivery."""

from .email import EmailConfig, EmailNotifier, render_magic_link_email
from .resend import ResendConfig, ResendNotifier

__all__ = [
    "EmailConfig",
    "EmailNotifier",
    "ResendConfig",
    "ResendNotifier",
    "render_magic_link_email",
]
