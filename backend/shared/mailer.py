"""
Outgoing mail transport.

Sends plain SMTP mail for account flows (password reset). The SMTP call is
blocking, so it runs in a worker thread.
"""

import asyncio
import logging
import smtplib
from email.message import EmailMessage
from typing import Optional

from .config import Settings, get_settings
from .exceptions import ExternalServiceError

logger = logging.getLogger(__name__)


class Mailer:
    """SMTP mailer configured from Settings."""

    def __init__(self, settings: Optional[Settings] = None):
        self._settings = settings or get_settings()

    async def send(self, to: str, subject: str, html: str) -> None:
        """
        Send an HTML email.

        Raises:
            ExternalServiceError: If SMTP is not configured or delivery fails
        """
        if not self._settings.smtp_configured:
            raise ExternalServiceError(
                "Mail transport is not configured",
                service="smtp",
                code="MAIL_NOT_CONFIGURED",
            )

        message = EmailMessage()
        message["From"] = self._settings.smtp_from
        message["To"] = to
        message["Subject"] = subject
        message.set_content("This message requires an HTML capable mail client.")
        message.add_alternative(html, subtype="html")

        try:
            await asyncio.to_thread(self._deliver, message)
        except (smtplib.SMTPException, OSError) as e:
            logger.error(f"Mail delivery to {to} failed: {e}")
            raise ExternalServiceError(
                "Failed to send email",
                service="smtp",
                code="MAIL_DELIVERY_FAILED",
            ) from e

    def _deliver(self, message: EmailMessage) -> None:
        settings = self._settings
        with smtplib.SMTP(settings.smtp_host, settings.smtp_port, timeout=30) as smtp:
            smtp.starttls()
            if settings.smtp_user:
                smtp.login(settings.smtp_user, settings.smtp_password)
            smtp.send_message(message)


def password_reset_email(reset_url: str, username: str, ttl_minutes: int = 60) -> tuple[str, str]:
    """Build (subject, html) for a password reset mail."""
    subject = "Reset Your Password - Notta"
    html = f"""
    <div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">
      <h2>Reset Your Password</h2>
      <p>Hi {username},</p>
      <p>You requested to reset your password. Use the link below to set a new one:</p>
      <p><a href="{reset_url}">Reset Password</a></p>
      <p style="word-break: break-all; color: #666;">{reset_url}</p>
      <p>This link will expire in {ttl_minutes} minutes. If you didn't request a password reset, ignore this email.</p>
    </div>
    """
    return subject, html
