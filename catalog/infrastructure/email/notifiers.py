"""PasswordResetNotifier implementations."""
import logging

logger = logging.getLogger(__name__)


class CeleryPasswordResetNotifier:
    """Queue reset emails on the Celery broker so SMTP never runs inside a request."""

    def send_reset_link(self, email: str, reset_url: str) -> None:
        # Imported lazily so the API process only needs the broker when a reset is requested
        from catalog.tasks.email_tasks import send_password_reset_email

        send_password_reset_email.delay(email, reset_url)
        logger.debug(f"Queued password reset email for {email}")
