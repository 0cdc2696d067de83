"""Candidate email notifications for application status changes."""

from typing import Callable, Dict, Optional, Tuple

import structlog

from app.config import settings as default_settings
from app.models.job import Job
from app.models.user import User
from app.services.mail_sender import MailMessage, MailSender
from app.utils.constants import ApplicationStatus
from app.utils.email_templates import (
    application_accepted_email,
    application_rejected_email,
    application_shortlisted_email,
)

logger = structlog.get_logger(__name__)

# status -> (subject, template)
TEMPLATES: Dict[ApplicationStatus, Tuple[str, Callable[..., str]]] = {
    ApplicationStatus.ACCEPTED: ("Application Accepted", application_accepted_email),
    ApplicationStatus.REJECTED: ("Application Update", application_rejected_email),
    ApplicationStatus.SHORTLISTED: ("Application Shortlisted", application_shortlisted_email),
}


class NotificationDispatcher:
    """
    Compose and send the candidate email for a status change.

    Best-effort: every failure is logged and absorbed, so a status change
    that has already been committed is never affected.
    """

    def __init__(self, mail_sender: MailSender, settings=None):
        self.mail_sender = mail_sender
        self.settings = settings or default_settings

    def compose(
        self,
        status: ApplicationStatus,
        candidate: Optional[User],
        job: Optional[Job],
        employer: Optional[User],
    ) -> Optional[MailMessage]:
        """Build the message, or None when the status has no template or no recipient."""
        template = TEMPLATES.get(ApplicationStatus(status))
        if template is None:
            return None

        candidate_email = getattr(candidate, "email", None)
        if not candidate_email:
            logger.warning("notification_skipped_no_candidate_email", status=getattr(status, "value", status))
            return None

        subject, render = template
        candidate_name = getattr(candidate, "name", None) or "Candidate"
        job_title = getattr(job, "title", None) or "Job"
        company_name = getattr(job, "company", None) or getattr(employer, "company", None) or "Company"
        employer_name = getattr(employer, "name", None) or "Hiring Team"
        sender_email = getattr(employer, "email", None) or self.settings.EMAIL_FROM

        return MailMessage(
            from_address=f'"{employer_name} from {company_name}" <{sender_email}>',
            to=candidate_email,
            reply_to=sender_email,
            subject=subject,
            html_body=render(
                candidate_name,
                job_title,
                company_name,
                employer_name,
                self.settings.FRONTEND_BASE_URL.rstrip("/"),
            ),
        )

    async def dispatch(
        self,
        status: ApplicationStatus,
        candidate: Optional[User],
        job: Optional[Job],
        employer: Optional[User],
    ) -> None:
        try:
            message = self.compose(status, candidate, job, employer)
            if message is None:
                return

            delivery_id = await self.mail_sender.send(message)
            logger.info(
                "status_notification_sent",
                status=ApplicationStatus(status).value,
                to=message.to,
                delivery_id=delivery_id,
            )
        except Exception as e:
            logger.error(
                "status_notification_failed",
                status=getattr(status, "value", status),
                candidate_id=str(getattr(candidate, "id", None)),
                error=str(e),
            )
