"""Main FastAPI application."""

from contextlib import asynccontextmanager

import sentry_sdk
import structlog
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sentry_sdk.integrations.fastapi import FastApiIntegration
from sentry_sdk.integrations.logging import LoggingIntegration

from app.api.v1 import api_router
from app.config import settings
from app.core.exceptions import (
    CandidateNotFoundError,
    DomainException,
    DuplicateApplicationError,
    JobNotFoundOrInactiveError,
    ValidationFailure,
)
from app.core.logging import setup_logging
from app.core.startup_checks import run_all_startup_checks
from app.db.session import engine, init_db
from app.services.mail_sender import build_mail_sender

# Setup logging
setup_logging()
logger = structlog.get_logger(__name__)

# Initialize Sentry for error tracking (only if DSN is properly configured)
if settings.SENTRY_DSN and settings.SENTRY_DSN.startswith("https://"):
    sentry_sdk.init(
        dsn=settings.SENTRY_DSN,
        environment=settings.SENTRY_ENVIRONMENT,
        traces_sample_rate=settings.SENTRY_TRACES_SAMPLE_RATE,
        integrations=[
            FastApiIntegration(),
            LoggingIntegration(
                level=None,  # Capture all logs
                event_level="ERROR",  # Only send ERROR and above as events
            ),
        ],
        release=settings.APP_VERSION,
        attach_stacktrace=True,
        send_default_pii=False,  # Candidate emails and phone numbers stay out of Sentry
    )
else:
    logger.info("sentry_disabled")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    # Startup
    await init_db()
    await run_all_startup_checks()
    app.state.mail_sender = build_mail_sender(settings)
    yield
    # Shutdown
    await engine.dispose()


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Job board API: job postings, applications and hiring workflow",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    swagger_ui_parameters={
        "persistAuthorization": True,  # Persist authorization after page refresh
    },
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API router
app.include_router(api_router, prefix="/api/v1")


# Domain exception -> HTTP status
STATUS_CODES = {
    JobNotFoundOrInactiveError: status.HTTP_404_NOT_FOUND,
    CandidateNotFoundError: status.HTTP_404_NOT_FOUND,
    DuplicateApplicationError: status.HTTP_409_CONFLICT,
    ValidationFailure: status.HTTP_400_BAD_REQUEST,
}


def status_code_for(exc: DomainException) -> int:
    for exc_type in type(exc).__mro__:
        if exc_type in STATUS_CODES:
            return STATUS_CODES[exc_type]
    return status.HTTP_500_INTERNAL_SERVER_ERROR


@app.exception_handler(DomainException)
async def domain_exception_handler(request: Request, exc: DomainException):
    code = status_code_for(exc)
    content = {"detail": exc.message}
    if isinstance(exc, ValidationFailure):
        content["errors"] = exc.errors

    log = logger.error if code >= 500 else logger.info
    log("domain_error", error=type(exc).__name__, status_code=code, path=request.url.path)
    return JSONResponse(status_code=code, content=content)


@app.get("/", tags=["Health"])
async def root():
    """Root endpoint."""
    return {
        "message": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "status": "operational",
    }


@app.get("/health", tags=["Health"])
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "environment": settings.ENVIRONMENT,
        "mail": "smtp" if settings.smtp_configured else "disabled",
    }


@app.exception_handler(Exception)
async def global_exception_handler(request, exc):
    """Global exception handler."""
    logger.exception("unhandled_error", path=request.url.path)
    return JSONResponse(
        status_code=500,
        content={
            "detail": "Internal server error",
            "message": str(exc) if settings.DEBUG else "An error occurred",
        },
    )
