"""
Pytest configuration and shared fixtures.

Fixtures:
    - db_session: AsyncSession on a fresh in-memory SQLite database per test
    - make_user / make_job: insert users and job postings
    - mail_sender: AsyncMock standing in for the SMTP transport
    - notifier: NotificationDispatcher wired to ``mail_sender``
    - client: httpx AsyncClient against the FastAPI app, sharing ``db_session``
"""

import os

# Must be set before anything imports app.config
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("SMTP_ENABLED", "false")
os.environ.setdefault("LOG_FORMAT", "console")
os.environ.setdefault("LOG_LEVEL", "WARNING")
os.environ.setdefault("DEBUG", "false")

from unittest.mock import AsyncMock
from uuid import uuid4

import httpx
import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app.config import settings
from app.core.security import create_user_token
from app.db.base import Base
from app.models import Application, Job, User  # noqa: F401
from app.services.application_service import ApplicationService
from app.services.job_service import JobService
from app.services.notification_service import NotificationDispatcher
from app.utils.constants import ExperienceLevel, JobStatus, JobType, UserRole


# ============================================================================
# DATABASE
# ============================================================================


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(engine):
    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)
    async with session_factory() as session:
        yield session


# ============================================================================
# FACTORIES
# ============================================================================


@pytest.fixture
def make_user(db_session):
    async def _make_user(role: UserRole = UserRole.CANDIDATE, **overrides) -> User:
        suffix = uuid4().hex[:8]
        fields = {
            "name": f"{role.value.title()} {suffix}",
            "email": f"{role.value.lower()}-{suffix}@example.com",
            "role": role.value,
        }
        fields.update(overrides)
        user = User(**fields)
        db_session.add(user)
        await db_session.commit()
        return user

    return _make_user


@pytest.fixture
def make_job(db_session):
    async def _make_job(employer: User, **overrides) -> Job:
        fields = {
            "title": "Backend Engineer",
            "description": "Build and run the hiring platform APIs.",
            "requirements": ["3+ years Python"],
            "responsibilities": ["Own the applications service"],
            "company": employer.company or "Acme Corp",
            "location": "Berlin",
            "type": JobType.FULL_TIME.value,
            "experience": ExperienceLevel.MID.value,
            "salary_min": 60000,
            "salary_max": 80000,
            "salary_currency": "EUR",
            "skills": ["Python", "FastAPI"],
            "benefits": [],
            "remote": False,
            "employer_id": employer.id,
            "status": JobStatus.ACTIVE.value,
            "application_count": 0,
        }
        fields.update(overrides)
        job = Job(**fields)
        db_session.add(job)
        await db_session.commit()
        return job

    return _make_job


@pytest_asyncio.fixture
async def employer(make_user):
    return await make_user(UserRole.EMPLOYER, name="Erin Employer", company="Acme Corp")


@pytest_asyncio.fixture
async def candidate(make_user):
    return await make_user(UserRole.CANDIDATE, name="Casey Candidate", mobile="+49 151 0000000", location="Hamburg")


@pytest_asyncio.fixture
async def job(make_job, employer):
    return await make_job(employer)


# ============================================================================
# SERVICES
# ============================================================================


@pytest.fixture
def mail_sender():
    sender = AsyncMock()
    sender.send.return_value = "<message-id@example.com>"
    return sender


@pytest.fixture
def notifier(mail_sender):
    return NotificationDispatcher(mail_sender, settings)


@pytest.fixture
def application_service(db_session, notifier):
    return ApplicationService(db_session, notifier=notifier, strict_transitions=True)


@pytest.fixture
def job_service(db_session):
    return JobService(db_session)


@pytest.fixture
def application_payload(job):
    def _payload(**overrides) -> dict:
        payload = {
            "job_id": str(job.id),
            "cover_letter": "I would love to work on your platform.",
            "resume": "https://cdn.example.com/resumes/casey.pdf",
            "expected_salary": 70000,
            "expected_salary_currency": "EUR",
            "availability": "1_MONTH",
        }
        payload.update(overrides)
        return payload

    return _payload


# ============================================================================
# API
# ============================================================================


@pytest.fixture
def auth_headers():
    def _headers(user: User) -> dict:
        return {"Authorization": f"Bearer {create_user_token(user)}"}

    return _headers


@pytest_asyncio.fixture
async def client(db_session, mail_sender):
    from app.api.deps import get_mail_sender
    from app.db.session import get_db
    from app.main import app

    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_mail_sender] = lambda: mail_sender

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
