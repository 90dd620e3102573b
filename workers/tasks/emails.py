"""Email sending tasks."""

import logging
from typing import List, Optional

from celery import Task

from core.config import settings
from core.integrations.email import EmailDeliveryError, EmailService
from workers.celery_app import celery_app

logger = logging.getLogger(__name__)


@celery_app.task(name="workers.tasks.emails.send_email", bind=True)
def send_email(
    self: Task,
    to: str | List[str],
    subject: str,
    body: str,
    html: bool = True,
    reply_to: Optional[str] = None,
) -> dict:
    """Send email via configured email service.

    Args:
        to: Recipient email address(es)
        subject: Email subject
        body: Email body
        html: Whether body is HTML
        reply_to: Reply-to address (optional)

    Returns:
        Dictionary with send status
    """
    try:
        EmailService(settings.mail).send_email(
            to_email=to,
            subject=subject,
            body=body,
            html=html,
            reply_to=reply_to,
        )
    except EmailDeliveryError as e:
        logger.warning(f"Retrying email '{subject}' (attempt {self.request.retries + 1}): {e}")
        raise self.retry(exc=e, countdown=120, max_retries=5)

    return {"status": "sent", "to": to, "subject": subject}
