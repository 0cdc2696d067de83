"""Notification dispatcher, email templates and mail transports."""

import smtplib
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest

from app.config import Settings
from app.core.exceptions import NotificationDeliveryError
from app.services.mail_sender import (
    DisabledMailSender,
    MailMessage,
    SMTPMailSender,
    build_mail_sender,
)
from app.services.notification_service import NotificationDispatcher
from app.utils.constants import ApplicationStatus
from app.utils.email_templates import application_accepted_email


@pytest.fixture
def people():
    candidate = SimpleNamespace(id="c-1", name="Ada <Lovelace>", email="ada@example.com")
    employer = SimpleNamespace(id="e-1", name="Grace", email="grace@acme.test", company="Acme Profile Co")
    job = SimpleNamespace(title="Compiler Engineer", company="Acme Corp")
    return candidate, job, employer


def message(**overrides) -> MailMessage:
    fields = {
        "from_address": '"Grace from Acme" <grace@acme.test>',
        "to": "ada@example.com",
        "reply_to": "grace@acme.test",
        "subject": "Application Accepted",
        "html_body": "<p>hello</p>",
    }
    fields.update(overrides)
    return MailMessage(**fields)


class TestCompose:
    def test_builds_message_from_employer(self, people):
        candidate, job, employer = people
        dispatcher = NotificationDispatcher(AsyncMock(), Settings(FRONTEND_BASE_URL="https://jobs.example.com/"))

        msg = dispatcher.compose(ApplicationStatus.ACCEPTED, candidate, job, employer)

        assert msg.to == "ada@example.com"
        assert msg.subject == "Application Accepted"
        assert msg.from_address == '"Grace from Acme Corp" <grace@acme.test>'
        assert msg.reply_to == "grace@acme.test"
        assert "https://jobs.example.com/applications" in msg.html_body
        # Names are HTML-escaped
        assert "Ada &lt;Lovelace&gt;" in msg.html_body

    def test_falls_back_to_defaults(self):
        dispatcher = NotificationDispatcher(AsyncMock(), Settings(EMAIL_FROM="noreply@board.test"))
        candidate = SimpleNamespace(email="someone@example.com", name=None)

        msg = dispatcher.compose(ApplicationStatus.REJECTED, candidate, None, None)

        assert msg.subject == "Application Update"
        assert msg.from_address == '"Hiring Team from Company" <noreply@board.test>'
        assert msg.reply_to == "noreply@board.test"
        assert "Dear Candidate" in msg.html_body

    def test_company_falls_back_to_employer_profile(self, people):
        candidate, _, employer = people
        dispatcher = NotificationDispatcher(AsyncMock())

        msg = dispatcher.compose(ApplicationStatus.SHORTLISTED, candidate, SimpleNamespace(title="X", company=None), employer)

        assert "Acme Profile Co" in msg.from_address

    @pytest.mark.parametrize("status", [ApplicationStatus.PENDING, ApplicationStatus.REVIEWING])
    def test_no_template_no_message(self, people, status):
        candidate, job, employer = people
        dispatcher = NotificationDispatcher(AsyncMock())

        assert dispatcher.compose(status, candidate, job, employer) is None

    def test_no_candidate_email_no_message(self, people):
        _, job, employer = people
        dispatcher = NotificationDispatcher(AsyncMock())

        assert dispatcher.compose(ApplicationStatus.ACCEPTED, SimpleNamespace(email=None), job, employer) is None


class TestDispatch:
    async def test_sends_composed_message(self, people):
        sender = AsyncMock()
        dispatcher = NotificationDispatcher(sender)

        await dispatcher.dispatch(ApplicationStatus.SHORTLISTED, *people)

        sender.send.assert_awaited_once()
        assert sender.send.await_args.args[0].subject == "Application Shortlisted"

    async def test_absorbs_delivery_errors(self, people):
        sender = AsyncMock()
        sender.send.side_effect = NotificationDeliveryError("smtp down")
        dispatcher = NotificationDispatcher(sender)

        assert await dispatcher.dispatch(ApplicationStatus.ACCEPTED, *people) is None

    async def test_nothing_sent_without_template(self, people):
        sender = AsyncMock()

        await NotificationDispatcher(sender).dispatch(ApplicationStatus.REVIEWING, *people)

        sender.send.assert_not_awaited()


class TestTemplates:
    def test_accepted_template_mentions_job_and_company(self):
        html = application_accepted_email("Ada", "Compiler Engineer", "Acme", "Grace", "https://jobs.test")

        assert "Compiler Engineer" in html
        assert "ACCEPTED" in html
        assert 'href="https://jobs.test/applications"' in html


class TestMailSenders:
    def test_factory_disabled_by_default(self):
        sender = build_mail_sender(Settings(SMTP_ENABLED=False, SMTP_HOST="smtp.test"))

        assert isinstance(sender, DisabledMailSender)

    def test_factory_needs_a_host(self):
        assert isinstance(build_mail_sender(Settings(SMTP_ENABLED=True, SMTP_HOST="")), DisabledMailSender)

    def test_factory_builds_smtp_sender(self):
        sender = build_mail_sender(
            Settings(SMTP_ENABLED=True, SMTP_HOST="smtp.test", SMTP_PORT=2525, SMTP_USER="bot", SMTP_USE_TLS=False)
        )

        assert isinstance(sender, SMTPMailSender)
        assert (sender.host, sender.port, sender.username, sender.use_tls) == ("smtp.test", 2525, "bot", False)

    async def test_disabled_sender_returns_none(self):
        assert await DisabledMailSender().send(message()) is None

    async def test_smtp_sender_delivers_and_returns_message_id(self, monkeypatch):
        server = MagicMock()
        smtp_class = MagicMock()
        smtp_class.return_value.__enter__.return_value = server
        monkeypatch.setattr(smtplib, "SMTP", smtp_class)

        sender = SMTPMailSender("smtp.test", 587, username="bot", password="secret", use_tls=True)
        message_id = await sender.send(message())

        smtp_class.assert_called_once_with("smtp.test", 587, timeout=10)
        server.starttls.assert_called_once()
        server.login.assert_called_once_with("bot", "secret")
        sent = server.send_message.call_args.args[0]
        assert sent["To"] == "ada@example.com"
        assert sent["Reply-To"] == "grace@acme.test"
        assert message_id == sent["Message-ID"]

    async def test_smtp_failure_raises_delivery_error(self, monkeypatch):
        smtp_class = MagicMock(side_effect=smtplib.SMTPConnectError(421, b"busy"))
        monkeypatch.setattr(smtplib, "SMTP", smtp_class)

        with pytest.raises(NotificationDeliveryError):
            await SMTPMailSender("smtp.test").send(message())
