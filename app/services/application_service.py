"""
Application lifecycle service.

Creation, status transitions, withdrawal and the role-scoped reads for job
applications. Ownership is always checked inside the lookup itself, so a
record that exists but belongs to someone else is reported exactly like a
missing one (``None`` / ``False``).
"""

from typing import List, Optional, Tuple, Union
from uuid import UUID

import structlog
from sqlalchemy import case, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings as default_settings
from app.core.exceptions import (
    CandidateNotFoundError,
    DuplicateApplicationError,
    InvalidStatusTransitionError,
    JobNotFoundOrInactiveError,
    ValidationFailure,
)
from app.models.application import Application
from app.models.job import Job
from app.models.user import User
from app.schemas.application import ApplicationCreate
from app.services.application_query import ApplicationQuery, with_relations
from app.services.notification_service import NotificationDispatcher
from app.utils.constants import (
    ALLOWED_STATUS_TRANSITIONS,
    NOTIFIABLE_STATUSES,
    ApplicationStatus,
    JobStatus,
    UserRole,
)
from app.utils.helpers import utcnow
from app.utils.validators import parse_optional_uuid, parse_status, parse_uuid, validate_pagination

logger = structlog.get_logger(__name__)

IdLike = Union[str, UUID]


class ApplicationService:
    """
    Lifecycle manager and query layer for job applications.

    Features:
    - One application per (job, candidate), backed by a unique constraint
    - Employer id copied from the job at creation time
    - Status changes by the owning employer, with optional workflow checks
    - Candidate email on SHORTLISTED / ACCEPTED / REJECTED (best-effort)
    - Withdrawal by the owning candidate while PENDING
    - Paginated candidate/employer listings and per-status statistics
    """

    def __init__(
        self,
        db: AsyncSession,
        notifier: Optional[NotificationDispatcher] = None,
        strict_transitions: Optional[bool] = None,
    ):
        self.db = db
        self.notifier = notifier
        if strict_transitions is None:
            strict_transitions = default_settings.STRICT_STATUS_TRANSITIONS
        self.strict_transitions = strict_transitions

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def create_application(self, candidate_id: IdLike, data: ApplicationCreate) -> Application:
        """
        Submit an application for an ACTIVE job.

        Raises:
            JobNotFoundOrInactiveError: job missing or not ACTIVE
            DuplicateApplicationError: candidate already applied (checked
                up front and again by the unique constraint on insert)
            CandidateNotFoundError: candidate user record missing
        """
        candidate_uuid = parse_uuid(candidate_id, "candidate_id")
        job_uuid = parse_uuid(data.job_id, "job_id")

        job = await self.db.get(Job, job_uuid)
        if job is None or job.status != JobStatus.ACTIVE.value:
            raise JobNotFoundOrInactiveError(str(job_uuid))

        if await self._has_applied(job_uuid, candidate_uuid):
            raise DuplicateApplicationError(str(job_uuid), str(candidate_uuid))

        candidate = await self.db.get(User, candidate_uuid)
        if candidate is None:
            raise CandidateNotFoundError(str(candidate_uuid))

        application = Application(
            job_id=job.id,
            candidate_id=candidate.id,
            employer_id=job.employer_id,
            status=ApplicationStatus.PENDING.value,
            cover_letter=data.cover_letter,
            resume=data.resume,
            # Profile contact details take precedence over the request
            mobile_number=candidate.mobile or candidate.phone or data.mobile_number,
            location=candidate.location or data.location,
            # A zero or missing amount means no expectation was given
            expected_salary_amount=data.expected_salary or None,
            expected_salary_currency=data.expected_salary_currency if data.expected_salary else None,
            availability=data.availability.value,
            notes=data.notes,
            applied_at=utcnow(),
        )
        self.db.add(application)
        job.application_count = (job.application_count or 0) + 1

        try:
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            if _is_unique_violation(e):
                raise DuplicateApplicationError(str(job_uuid), str(candidate_uuid)) from e
            raise

        logger.info(
            "application_created",
            application_id=str(application.id),
            job_id=str(job_uuid),
            candidate_id=str(candidate_uuid),
            employer_id=str(application.employer_id),
        )
        return await self._reload(application.id)

    async def update_application_status(
        self,
        application_id: IdLike,
        employer_id: IdLike,
        status: Union[ApplicationStatus, str],
        employer_notes: Optional[str] = None,
    ) -> Optional[Application]:
        """
        Change status as the owning employer.

        Returns None when the application is missing or owned by another
        employer. reviewed_at is refreshed on every non-PENDING update. The
        candidate email is attempted after the change is committed and can
        never fail this call.
        """
        application_uuid = parse_uuid(application_id, "application_id")
        employer_uuid = parse_uuid(employer_id, "employer_id")
        new_status = parse_status(status)
        if new_status is None:
            raise ValidationFailure("Status is required", errors=[{"field": "status", "message": "required"}])

        result = await self.db.execute(
            with_relations(
                select(Application).where(
                    Application.id == application_uuid,
                    Application.employer_id == employer_uuid,
                )
            )
        )
        application = result.scalar_one_or_none()
        if application is None:
            return None

        current_status = ApplicationStatus(application.status)
        self._check_transition(current_status, new_status)

        application.status = new_status.value
        if employer_notes:
            application.employer_notes = employer_notes
        if new_status != ApplicationStatus.PENDING:
            application.reviewed_at = utcnow()

        await self.db.commit()
        logger.info(
            "application_status_updated",
            application_id=str(application_uuid),
            employer_id=str(employer_uuid),
            previous_status=current_status.value,
            status=new_status.value,
        )

        updated = await self._reload(application_uuid)

        if new_status in NOTIFIABLE_STATUSES and self.notifier is not None:
            try:
                await self.notifier.dispatch(new_status, updated.candidate, updated.job, updated.employer)
            except Exception as e:
                logger.error(
                    "status_notification_error",
                    application_id=str(application_uuid),
                    status=new_status.value,
                    error=str(e),
                )

        return updated

    async def withdraw_application(self, application_id: IdLike, candidate_id: IdLike) -> bool:
        """
        Withdraw a PENDING application as its candidate.

        False when the application is missing, owned by someone else, or no
        longer PENDING. The job's application count and the application row
        change in the same commit.
        """
        application_uuid = parse_uuid(application_id, "application_id")
        candidate_uuid = parse_uuid(candidate_id, "candidate_id")

        result = await self.db.execute(
            select(Application).where(
                Application.id == application_uuid,
                Application.candidate_id == candidate_uuid,
                Application.status == ApplicationStatus.PENDING.value,
            )
        )
        application = result.scalar_one_or_none()
        if application is None:
            return False

        job = await self.db.get(Job, application.job_id)
        if job is not None:
            job.application_count = max((job.application_count or 0) - 1, 0)

        await self.db.delete(application)
        await self.db.commit()

        logger.info(
            "application_withdrawn",
            application_id=str(application_uuid),
            candidate_id=str(candidate_uuid),
            job_id=str(application.job_id),
        )
        return True

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    async def get_application_by_id(
        self,
        application_id: IdLike,
        requester_id: IdLike,
        requester_role: Union[UserRole, str],
    ) -> Optional[Application]:
        """Fetch one application; None when missing or not visible to the requester."""
        application_uuid = parse_uuid(application_id, "application_id")
        requester_uuid = parse_uuid(requester_id, "requester_id")
        role = UserRole(requester_role)

        application = await self._reload(application_uuid)
        if application is None:
            return None

        if role == UserRole.CANDIDATE and application.candidate_id != requester_uuid:
            return None
        if role == UserRole.EMPLOYER and application.employer_id != requester_uuid:
            return None

        return application

    async def get_applications_by_candidate(
        self,
        candidate_id: IdLike,
        status: Optional[Union[ApplicationStatus, str]] = None,
        job_id: Optional[IdLike] = None,
        page: int = 1,
        limit: int = 10,
    ) -> Tuple[List[Application], int]:
        candidate_uuid = parse_uuid(candidate_id, "candidate_id")
        validate_pagination(page, limit)

        query = ApplicationQuery.for_candidate(
            candidate_uuid,
            status=parse_status(status),
            job_id=parse_optional_uuid(job_id, "job_id"),
            page=page,
            limit=limit,
        )
        applications, total = await self._run(query)

        # Re-check ownership of every fetched row
        validated = [app for app in applications if app.candidate_id == candidate_uuid]
        discarded = len(applications) - len(validated)
        if discarded:
            logger.warning(
                "candidate_filter_mismatch",
                candidate_id=str(candidate_uuid),
                fetched=len(applications),
                validated=len(validated),
            )
            total = max(total - discarded, len(validated))

        return validated, total

    async def get_applications_by_employer(
        self,
        employer_id: IdLike,
        status: Optional[Union[ApplicationStatus, str]] = None,
        job_id: Optional[IdLike] = None,
        candidate_id: Optional[IdLike] = None,
        page: int = 1,
        limit: int = 10,
    ) -> Tuple[List[Application], int]:
        employer_uuid = parse_uuid(employer_id, "employer_id")
        validate_pagination(page, limit)

        query = ApplicationQuery.for_employer(
            employer_uuid,
            status=parse_status(status),
            job_id=parse_optional_uuid(job_id, "job_id"),
            candidate_id=parse_optional_uuid(candidate_id, "candidate_id"),
            page=page,
            limit=limit,
        )
        return await self._run(query)

    async def get_application_stats(self, employer_id: IdLike) -> dict:
        """Counts per status for an employer, from a single aggregate query."""
        employer_uuid = parse_uuid(employer_id, "employer_id")

        def count_status(status: ApplicationStatus):
            return func.coalesce(
                func.sum(case((Application.status == status.value, 1), else_=0)), 0
            )

        result = await self.db.execute(
            select(
                func.count(Application.id),
                count_status(ApplicationStatus.PENDING),
                count_status(ApplicationStatus.REVIEWING),
                count_status(ApplicationStatus.SHORTLISTED),
                count_status(ApplicationStatus.REJECTED),
                count_status(ApplicationStatus.ACCEPTED),
            ).where(Application.employer_id == employer_uuid)
        )
        total, pending, reviewing, shortlisted, rejected, accepted = result.one()

        return {
            "total": int(total or 0),
            "pending": int(pending),
            "reviewing": int(reviewing),
            "shortlisted": int(shortlisted),
            "rejected": int(rejected),
            "accepted": int(accepted),
        }

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _check_transition(self, current: ApplicationStatus, new: ApplicationStatus) -> None:
        if not self.strict_transitions or current == new:
            return
        if new not in ALLOWED_STATUS_TRANSITIONS[current]:
            raise InvalidStatusTransitionError(current.value, new.value)

    async def _has_applied(self, job_id: UUID, candidate_id: UUID) -> bool:
        result = await self.db.execute(
            select(Application.id).where(
                Application.job_id == job_id,
                Application.candidate_id == candidate_id,
            )
        )
        return result.scalar_one_or_none() is not None

    async def _run(self, query: ApplicationQuery) -> Tuple[List[Application], int]:
        rows = await self.db.execute(query.page_statement())
        applications = list(rows.scalars().all())
        total = (await self.db.execute(query.count_statement())).scalar_one()
        return applications, total

    async def _reload(self, application_id: UUID) -> Optional[Application]:
        result = await self.db.execute(
            with_relations(select(Application).where(Application.id == application_id)).execution_options(
                populate_existing=True
            )
        )
        return result.scalar_one_or_none()


def _is_unique_violation(error: IntegrityError) -> bool:
    """Best-effort detection of a unique-constraint failure across drivers."""
    message = str(getattr(error, "orig", error)).lower()
    return "unique" in message or "duplicate" in message
