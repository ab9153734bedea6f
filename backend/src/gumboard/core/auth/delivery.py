"""Magic-link delivery protocol and types.

The issuer never talks to a mail provider directly. Deployments choose a
sender:
- Resend HTTP API
- SMTP relay
- Console output (local development)
"""

from dataclasses import dataclass
from typing import Protocol, runtime_checkable


@dataclass(frozen=True)
class MagicLinkMessage:
    """Everything a transport needs to deliver one sign-in link."""

    to: str
    from_email: str
    subject: str
    link: str
    host: str
    """Host name shown in the email body, e.g. ``app.example``."""


@runtime_checkable
class MagicLinkSender(Protocol):
    """Protocol for magic-link delivery strategies.

    Implementations return False (or raise TransportFailure) when delivery
    fails. The issuer logs the failure and keeps the response unchanged, so
    senders must not try to report anything to the end user themselves.
    """

    async def send_magic_link(self, message: MagicLinkMessage) -> bool:
        """Deliver the sign-in link.

        Args:
            message: Recipient, sender, subject and link.

        Returns:
            True if the transport accepted the message.
        """
        ...
