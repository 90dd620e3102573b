"""Hand transactional emails to the Celery queue from async request handlers."""

import logging

from celery.result import AsyncResult
from kombu.exceptions import KombuError
from starlette.concurrency import run_in_threadpool

from core.exceptions import MailDispatchError
from core.integrations.email import EmailTemplates

logger = logging.getLogger(__name__)


class MailDispatcher:
    """Enqueue email tasks and return their result handle."""

    async def dispatch(self, to: str, subject: str, body: str, html: bool = True) -> AsyncResult:
        """
        Enqueue a single email.

        Args:
            to: Recipient address
            subject: Email subject
            body: Email body
            html: Whether body is HTML

        Returns:
            AsyncResult the caller may await or ignore

        Raises:
            MailDispatchError: If the broker refuses the task
        """
        # Imported lazily so the API process does not configure Celery until mail is sent
        from workers.tasks.emails import send_email

        try:
            result = await run_in_threadpool(
                send_email.apply_async,
                kwargs={"to": to, "subject": subject, "body": body, "html": html},
            )
        except (KombuError, OSError) as e:
            logger.error(f"Failed to enqueue email '{subject}' to {to}: {e}")
            raise MailDispatchError() from e

        logger.info(f"Queued email '{subject}' as task {result.id}")
        return result

    async def send_otp(self, to: str, otp: str, valid_minutes: int) -> AsyncResult:
        template = EmailTemplates.verification_otp(otp, valid_minutes)
        return await self.dispatch(to, template["subject"], template["body"], template["html"])

    async def send_password_reset(self, to: str, token: str, valid_minutes: int) -> AsyncResult:
        template = EmailTemplates.password_reset(token, valid_minutes)
        return await self.dispatch(to, template["subject"], template["body"], template["html"])
