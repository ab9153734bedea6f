"""Resend email adapter."""

from dataclasses import dataclass

import httpx
import structlog

from gumboard.adapters.notifications.email import render_magic_link_email
from gumboard.core.auth.delivery import MagicLinkMessage
from gumboard.core.exceptions import TransportFailure

logger = structlog.get_logger()

RESEND_API_URL = "https://api.resend.com/emails"


@dataclass
class ResendConfig:
    """Resend configuration."""

    api_key: str
    from_email: str
    api_url: str = RESEND_API_URL
    timeout_seconds: int = 30


class ResendNotifier:
    """Delivers emails through the Resend HTTP API."""

    def __init__(self, config: ResendConfig):
        self.config = config

    async def send(
        self,
        to_emails: list[str],
        subject: str,
        body_html: str,
        body_text: str | None = None,
    ) -> bool:
        """Send email.

        Returns True if Resend accepted the message.
        """
        payload = {
            "from": self.config.from_email,
            "to": to_emails,
            "subject": subject,
            "html": body_html,
        }
        if body_text:
            payload["text"] = body_text

        try:
            async with httpx.AsyncClient() as client:
                response = await client.post(
                    self.config.api_url,
                    json=payload,
                    headers={"Authorization": f"Bearer {self.config.api_key}"},
                    timeout=self.config.timeout_seconds,
                )

                success = response.status_code == 200

                if success:
                    logger.info("email_sent", to=to_emails, subject=subject, transport="resend")
                else:
                    logger.error(
                        "email_error",
                        to=to_emails,
                        subject=subject,
                        transport="resend",
                        status_code=response.status_code,
                    )

                return success

        except httpx.TimeoutException:
            logger.warning("resend_timeout", to=to_emails, subject=subject)
            return False

        except httpx.RequestError as e:
            logger.error("resend_error", to=to_emails, subject=subject, error=str(e))
            return False

    async def send_magic_link(self, message: MagicLinkMessage) -> bool:
        """Send a sign-in link.

        Raises:
            TransportFailure: The message could not be built or handed off.
        """
        try:
            body_html, body_text = render_magic_link_email(message.link, message.host)
            return await self.send([message.to], message.subject, body_html, body_text)
        except Exception as e:
            raise TransportFailure(str(e)) from e
