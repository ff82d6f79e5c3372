"""Email delivery tasks."""
import logging

from catalog.celery_app import celery_app
from catalog.infrastructure.email.email_service import EmailService

logger = logging.getLogger(__name__)


@celery_app.task(name="catalog.tasks.email_tasks.send_password_reset_email")
def send_password_reset_email(email: str, reset_url: str):
    """Deliver a password reset link.

    Args:
        email: Recipient address
        reset_url: Link embedding the raw reset token

    Returns:
        Dict with the delivery status
    """
    try:
        EmailService().send_password_reset_email(email, reset_url)
        return {"status": "sent", "email": email}
    except Exception as e:
        logger.error(f"Error sending password reset email to {email}: {e}")
        return {"status": "error", "error": str(e)}
