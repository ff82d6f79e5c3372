"""Outbound email over SMTP."""
import logging
import smtplib
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from typing import Optional

from catalog.config import Settings, settings as default_settings

logger = logging.getLogger(__name__)

RESET_SUBJECT = "Password reset"


class EmailService:
    """Send transactional email.

    Without SMTP credentials the service runs in development mode: messages are
    logged instead of sent.
    """

    def __init__(self, config: Optional[Settings] = None):
        config = config or default_settings
        self.smtp_host = config.SMTP_HOST
        self.smtp_port = config.SMTP_PORT
        self.smtp_username = config.SMTP_USERNAME
        self.smtp_password = config.SMTP_PASSWORD
        self.smtp_use_tls = config.SMTP_USE_TLS
        self.smtp_timeout = config.SMTP_TIMEOUT_SECONDS
        self.from_email = config.SMTP_FROM_EMAIL
        self.from_name = config.SMTP_FROM_NAME
        self.ttl_minutes = config.PASSWORD_RESET_TOKEN_TTL_MINUTES
        self.enabled = config.smtp_enabled

    def send_email(self, to_email: str, subject: str, html_content: str, text_content: str) -> None:
        """Send one message. SMTP errors propagate to the caller."""
        msg = MIMEMultipart("alternative")
        msg["Subject"] = subject
        msg["From"] = f"{self.from_name} <{self.from_email}>"
        msg["To"] = to_email
        msg.attach(MIMEText(text_content, "plain"))
        msg.attach(MIMEText(html_content, "html"))

        with smtplib.SMTP(self.smtp_host, self.smtp_port, timeout=self.smtp_timeout) as server:
            if self.smtp_use_tls:
                server.starttls()
            server.login(self.smtp_username, self.smtp_password)
            server.send_message(msg)
        logger.info(f"Email '{subject}' sent to {to_email}")

    def send_password_reset_email(self, to_email: str, reset_url: str) -> None:
        if not self.enabled:
            logger.info(f"SMTP not configured; password reset link for {to_email}: {reset_url}")
            return

        text_content = (
            "You requested a password reset.\n\n"
            f"Open this link to choose a new password: {reset_url}\n\n"
            f"The link expires in {self.ttl_minutes} minutes. "
            "If you did not request a reset, ignore this email."
        )
        html_content = f"""
        <html>
          <body>
            <h2>Password reset</h2>
            <p>You requested a password reset.</p>
            <p><a href="{reset_url}">Choose a new password</a></p>
            <p>The link expires in {self.ttl_minutes} minutes.
               If you did not request a reset, ignore this email.</p>
          </body>
        </html>
        """
        self.send_email(to_email, RESET_SUBJECT, html_content, text_content)
