"""Startup validation checks."""

from app.core import startup_checks
from app.core.startup_checks import DEFAULT_SECRET_KEY, check_mail, check_security


def test_default_secret_key_fails_only_in_production(monkeypatch):
    monkeypatch.setattr(startup_checks.settings, "SECRET_KEY", DEFAULT_SECRET_KEY)

    monkeypatch.setattr(startup_checks.settings, "ENVIRONMENT", "development")
    assert check_security() is True

    monkeypatch.setattr(startup_checks.settings, "ENVIRONMENT", "production")
    assert check_security() is False


def test_mail_check(monkeypatch):
    monkeypatch.setattr(startup_checks.settings, "SMTP_ENABLED", False)
    assert check_mail() is True

    monkeypatch.setattr(startup_checks.settings, "SMTP_ENABLED", True)
    monkeypatch.setattr(startup_checks.settings, "SMTP_HOST", "")
    assert check_mail() is False

    monkeypatch.setattr(startup_checks.settings, "SMTP_HOST", "smtp.test")
    assert check_mail() is True


async def test_run_all_reports_database_failure(monkeypatch):
    async def unreachable():
        return False

    monkeypatch.setattr(startup_checks, "check_connection", unreachable)
    monkeypatch.setattr(startup_checks.settings, "SMTP_ENABLED", False)

    assert await startup_checks.run_all_startup_checks() is False
