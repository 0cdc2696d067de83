"""Startup validation checks for the application."""

import asyncio
import sys

import structlog

from app.config import settings
from app.db.session import check_connection

logger = structlog.get_logger(__name__)

DEFAULT_SECRET_KEY = "change-this-secret-key-in-production"


async def check_database() -> bool:
    """
    Check if database connection is working.

    Returns:
        bool: True if database is ready, False otherwise
    """
    logger.info("startup_check_database")
    return await check_connection()


def check_security() -> bool:
    """Warn when the development secret key is used outside development."""
    if settings.SECRET_KEY == DEFAULT_SECRET_KEY and settings.ENVIRONMENT == "production":
        logger.warning("default_secret_key_in_production")
        return False
    return True


def check_mail() -> bool:
    """
    Check mail delivery configuration.

    Disabled mail is a valid setup (notifications are only logged); enabled
    mail without a host is not.
    """
    if not settings.SMTP_ENABLED:
        logger.info("mail_delivery_disabled")
        return True
    if not settings.SMTP_HOST:
        logger.warning("smtp_enabled_without_host")
        return False
    logger.info("mail_delivery_configured", host=settings.SMTP_HOST, port=settings.SMTP_PORT)
    return True


async def run_all_startup_checks() -> bool:
    """
    Run all startup validation checks.

    Failures are logged; they never stop the application from starting.

    Returns:
        bool: True if all checks pass, False otherwise
    """
    results = {
        "database": await check_database(),
        "security": check_security(),
        "mail": check_mail(),
    }
    all_passed = all(results.values())

    if all_passed:
        logger.info("startup_checks_passed", checks=results)
    else:
        logger.warning("startup_checks_failed", checks=results)

    return all_passed


if __name__ == "__main__":
    from app.core.logging import setup_logging

    setup_logging()
    success = asyncio.run(run_all_startup_checks())
    sys.exit(0 if success else 1)
