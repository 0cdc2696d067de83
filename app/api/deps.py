"""
API Dependencies
Common dependencies for API endpoints (database, services, authentication)
"""

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.core.security import get_current_user, require_candidate, require_employer  # noqa: F401
from app.db.session import get_db
from app.services.application_service import ApplicationService
from app.services.job_service import JobService
from app.services.mail_sender import MailSender, build_mail_sender
from app.services.notification_service import NotificationDispatcher


def get_mail_sender(request: Request) -> MailSender:
    """
    Mail sender built at startup (``app.state.mail_sender``).

    Falls back to building one from settings when the lifespan has not run.
    """
    sender = getattr(request.app.state, "mail_sender", None)
    if sender is None:
        sender = build_mail_sender(settings)
        request.app.state.mail_sender = sender
    return sender


def get_notification_dispatcher(
    mail_sender: MailSender = Depends(get_mail_sender),
) -> NotificationDispatcher:
    return NotificationDispatcher(mail_sender, settings)


def get_application_service(
    db: AsyncSession = Depends(get_db),
    notifier: NotificationDispatcher = Depends(get_notification_dispatcher),
) -> ApplicationService:
    return ApplicationService(db, notifier=notifier)


def get_job_service(db: AsyncSession = Depends(get_db)) -> JobService:
    return JobService(db)
