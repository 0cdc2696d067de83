"""Outbound mail transports."""

import asyncio
import smtplib
from dataclasses import dataclass
from email.message import EmailMessage
from email.utils import make_msgid
from typing import Optional, Protocol

import structlog

from app.config import Settings
from app.core.exceptions import NotificationDeliveryError

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class MailMessage:
    from_address: str
    to: str
    reply_to: str
    subject: str
    html_body: str


class MailSender(Protocol):
    async def send(self, message: MailMessage) -> Optional[str]:
        """Deliver ``message``; return a delivery id or raise NotificationDeliveryError."""
        ...


class DisabledMailSender:
    """Used when SMTP is not configured. Accepts every message and sends nothing."""

    enabled = False

    async def send(self, message: MailMessage) -> Optional[str]:
        logger.debug("mail_skipped_disabled", to=message.to, subject=message.subject)
        return None


class SMTPMailSender:
    """
    SMTP transport.

    ``smtplib`` is blocking, so each delivery runs in a worker thread. One
    connection per message; no retries.
    """

    enabled = True

    def __init__(
        self,
        host: str,
        port: int = 587,
        username: str = "",
        password: str = "",
        use_tls: bool = True,
        timeout: int = 10,
    ):
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.use_tls = use_tls
        self.timeout = timeout

    def _build(self, message: MailMessage) -> EmailMessage:
        email = EmailMessage()
        email["From"] = message.from_address
        email["To"] = message.to
        email["Reply-To"] = message.reply_to
        email["Subject"] = message.subject
        email["Message-ID"] = make_msgid(domain=self.host or None)
        email.set_content("This message requires an HTML-capable mail client.")
        email.add_alternative(message.html_body, subtype="html")
        return email

    def _deliver(self, email: EmailMessage) -> None:
        with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as server:
            if self.use_tls:
                server.starttls()
            if self.username:
                server.login(self.username, self.password)
            server.send_message(email)

    async def send(self, message: MailMessage) -> Optional[str]:
        email = self._build(message)
        try:
            await asyncio.to_thread(self._deliver, email)
        except (smtplib.SMTPException, OSError) as e:
            logger.error("mail_delivery_failed", to=message.to, subject=message.subject, error=str(e))
            raise NotificationDeliveryError(f"Failed to send email to {message.to}: {e}") from e

        message_id = email["Message-ID"]
        logger.info("mail_sent", to=message.to, subject=message.subject, message_id=message_id)
        return message_id


def build_mail_sender(settings: Settings) -> MailSender:
    """Pick the SMTP transport when configured, otherwise the disabled one."""
    if settings.smtp_configured:
        logger.info("smtp_mail_sender_initialized", host=settings.SMTP_HOST, port=settings.SMTP_PORT)
        return SMTPMailSender(
            host=settings.SMTP_HOST,
            port=settings.SMTP_PORT,
            username=settings.SMTP_USER,
            password=settings.SMTP_PASSWORD,
            use_tls=settings.SMTP_USE_TLS,
            timeout=settings.SMTP_TIMEOUT,
        )

    if settings.SMTP_ENABLED:
        logger.warning("smtp_enabled_without_host")
    else:
        logger.info("mail_sender_disabled")
    return DisabledMailSender()
