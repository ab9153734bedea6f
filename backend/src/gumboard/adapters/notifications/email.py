"""Email notification adapter."""

import asyncio
import html
import smtplib
from dataclasses import dataclass
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText

import structlog

from gumboard.core.auth.delivery import MagicLinkMessage
from gumboard.core.exceptions import TransportFailure

logger = structlog.get_logger()


@dataclass
class EmailConfig:
    """Email configuration."""

    smtp_host: str
    smtp_port: int = 587
    smtp_user: str | None = None
    smtp_password: str | None = None
    from_email: str = "noreply@gumboard.local"
    from_name: str = "Gumboard"
    use_tls: bool = True


def render_magic_link_email(link: str, host: str) -> tuple[str, str]:
    """Build the HTML and plain-text bodies of a sign-in email.

    Returns:
        Tuple of (html, text).
    """
    safe_link = html.escape(link, quote=True)
    safe_host = html.escape(host)

    body_html = f"""
    <html>
    <body style="font-family: Arial, sans-serif; line-height: 1.6; color: #333;">
        <h2>Sign in to <strong>{safe_host}</strong></h2>

        <p style="margin: 30px 0;">
            <a href="{safe_link}"
               style="background: #346df1; color: #fff; padding: 10px 20px;
                      text-decoration: none; border-radius: 5px; font-weight: bold;">
                Sign in
            </a>
        </p>

        <p>This link expires in 24 hours and can only be used once.</p>

        <hr style="border: none; border-top: 1px solid #ddd; margin: 30px 0;">
        <p style="color: #666; font-size: 12px;">
            If you did not request this email you can safely ignore it.
        </p>
    </body>
    </html>
    """

    body_text = f"""
Sign in to {host}

{link}

This link expires in 24 hours and can only be used once.
If you did not request this email you can safely ignore it.
"""

    return body_html, body_text


class EmailNotifier:
    """Delivers emails via SMTP."""

    def __init__(self, config: EmailConfig):
        """Initialize the email notifier.

        Args:
            config: Email configuration settings.
        """
        self.config = config

    def send(
        self,
        to_emails: list[str],
        subject: str,
        body_html: str,
        body_text: str | None = None,
    ) -> bool:
        """Send email.

        Returns True if the email was sent successfully.
        Note: This is synchronous - use in a thread pool for async contexts.
        """
        try:
            # Create message
            msg = MIMEMultipart("alternative")
            msg["Subject"] = subject
            msg["From"] = f"{self.config.from_name} <{self.config.from_email}>"
            msg["To"] = ", ".join(to_emails)

            # Add plain text version
            if body_text:
                msg.attach(MIMEText(body_text, "plain"))

            # Add HTML version
            msg.attach(MIMEText(body_html, "html"))

            # Connect and send
            with smtplib.SMTP(self.config.smtp_host, self.config.smtp_port) as server:
                if self.config.use_tls:
                    server.starttls()

                if self.config.smtp_user and self.config.smtp_password:
                    server.login(self.config.smtp_user, self.config.smtp_password)

                # Non-ASCII mailboxes need the server to speak SMTPUTF8
                mail_options = [] if all(addr.isascii() for addr in to_emails) else ["SMTPUTF8"]
                server.sendmail(
                    self.config.from_email,
                    to_emails,
                    msg.as_string(),
                    mail_options=mail_options,
                )

            logger.info(
                "email_sent",
                to=to_emails,
                subject=subject,
            )

            return True

        except (smtplib.SMTPException, OSError, UnicodeError) as e:
            logger.error(
                "email_error",
                to=to_emails,
                subject=subject,
                error=str(e),
            )
            return False

    async def send_magic_link(self, message: MagicLinkMessage) -> bool:
        """Send a sign-in link. Runs the SMTP exchange in a worker thread.

        Raises:
            TransportFailure: The message could not be built or handed off.
        """
        try:
            body_html, body_text = render_magic_link_email(message.link, message.host)
            return await asyncio.to_thread(
                self.send,
                [message.to],
                message.subject,
                body_html,
                body_text,
            )
        except Exception as e:
            raise TransportFailure(str(e)) from e
