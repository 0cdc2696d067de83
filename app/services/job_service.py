"""Job posting service: ownership-scoped CRUD, close/reopen, search and stats."""

from typing import List, Optional, Tuple, Union
from uuid import UUID

import structlog
from sqlalchemy import String, and_, case, cast, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import InvalidJobDataError
from app.models.application import Application
from app.models.job import Job
from app.schemas.job import JobCreate, JobUpdate
from app.utils.constants import ExperienceLevel, JobStatus, JobType
from app.utils.helpers import like_pattern, search_terms
from app.utils.validators import parse_uuid, validate_pagination

logger = structlog.get_logger(__name__)

IdLike = Union[str, UUID]


class JobService:
    """
    Service for job postings.

    Every mutating operation looks the job up by (job id, employer id) in one
    query; a job owned by another employer behaves as if it did not exist.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create_job(self, employer_id: IdLike, data: JobCreate) -> Job:
        """Post a new job. Jobs are published ACTIVE straight away."""
        employer_uuid = parse_uuid(employer_id, "employer_id")

        job = Job(
            **data.model_dump(exclude={"type", "experience"}),
            type=data.type.value,
            experience=data.experience.value,
            employer_id=employer_uuid,
            status=JobStatus.ACTIVE.value,
            application_count=0,
        )
        self.db.add(job)
        await self.db.commit()
        await self.db.refresh(job)

        logger.info("job_created", job_id=str(job.id), employer_id=str(employer_uuid))
        return job

    async def update_job(self, job_id: IdLike, employer_id: IdLike, data: JobUpdate) -> Optional[Job]:
        """Apply a partial update. None when the job is missing or not owned."""
        job = await self._get_owned(job_id, employer_id)
        if job is None:
            return None

        changes = data.model_dump(exclude_unset=True)

        # Merge the salary range with the stored values before checking it
        salary_min = changes.get("salary_min", job.salary_min)
        salary_max = changes.get("salary_max", job.salary_max)
        if salary_min is None or salary_max is None:
            raise InvalidJobDataError(
                "Salary range cannot be cleared",
                errors=[{"field": "salary_min" if salary_min is None else "salary_max", "message": "must not be null"}],
            )
        if salary_min > salary_max:
            raise InvalidJobDataError(
                "salary_min must not exceed salary_max",
                errors=[{"field": "salary_min", "message": "must not exceed salary_max"}],
            )

        for field, value in changes.items():
            if value is None and field not in {"deadline"}:
                continue
            if isinstance(value, (JobType, ExperienceLevel, JobStatus)):
                value = value.value
            setattr(job, field, value)

        await self.db.commit()
        await self.db.refresh(job)

        logger.info("job_updated", job_id=str(job.id), fields=sorted(changes))
        return job

    async def delete_job(self, job_id: IdLike, employer_id: IdLike) -> bool:
        """Delete a job and its applications."""
        job = await self._get_owned(job_id, employer_id)
        if job is None:
            return False

        await self.db.delete(job)
        await self.db.commit()

        logger.info("job_deleted", job_id=str(job.id), employer_id=str(job.employer_id))
        return True

    async def close_job(self, job_id: IdLike, employer_id: IdLike) -> bool:
        return await self._set_status(job_id, employer_id, JobStatus.CLOSED)

    async def reopen_job(self, job_id: IdLike, employer_id: IdLike) -> bool:
        return await self._set_status(job_id, employer_id, JobStatus.ACTIVE)

    async def get_job_by_id(self, job_id: IdLike) -> Optional[Job]:
        return await self.db.get(Job, parse_uuid(job_id, "job_id"))

    async def get_jobs_by_employer(
        self, employer_id: IdLike, page: int = 1, limit: int = 10
    ) -> Tuple[List[Job], int]:
        employer_uuid = parse_uuid(employer_id, "employer_id")
        validate_pagination(page, limit)
        return await self._paginate([Job.employer_id == employer_uuid], page, limit)

    async def search_jobs(
        self,
        search: Optional[str] = None,
        location: Optional[str] = None,
        type: Optional[JobType] = None,
        experience: Optional[ExperienceLevel] = None,
        remote: Optional[bool] = None,
        page: int = 1,
        limit: int = 10,
    ) -> Tuple[List[Job], int]:
        """
        Search ACTIVE jobs.

        - ``search``: any term matching title, description or skills (case-insensitive)
        - ``location``: case-insensitive partial match
        - ``type`` / ``experience`` / ``remote``: exact match
        """
        validate_pagination(page, limit)

        filters = [Job.status == JobStatus.ACTIVE.value]

        if search and search.strip():
            term_filters = []
            for term in search_terms(search):
                pattern = like_pattern(term)
                term_filters.extend([
                    Job.title.ilike(pattern, escape="\\"),
                    Job.description.ilike(pattern, escape="\\"),
                    cast(Job.skills, String).ilike(pattern, escape="\\"),
                ])
            filters.append(or_(*term_filters))

        if location and location.strip():
            filters.append(Job.location.ilike(like_pattern(location.strip()), escape="\\"))

        if type:
            filters.append(Job.type == JobType(type).value)

        if experience:
            filters.append(Job.experience == ExperienceLevel(experience).value)

        if remote is not None:
            filters.append(Job.remote.is_(remote))

        return await self._paginate(filters, page, limit)

    async def get_job_stats(self, employer_id: IdLike) -> dict:
        employer_uuid = parse_uuid(employer_id, "employer_id")

        job_counts = await self.db.execute(
            select(
                func.count(Job.id),
                func.coalesce(func.sum(case((Job.status == JobStatus.ACTIVE.value, 1), else_=0)), 0),
                func.coalesce(func.sum(case((Job.status == JobStatus.CLOSED.value, 1), else_=0)), 0),
            ).where(Job.employer_id == employer_uuid)
        )
        total, active, closed = job_counts.one()

        applications = await self.db.execute(
            select(func.count(Application.id)).where(Application.employer_id == employer_uuid)
        )

        return {
            "total": int(total or 0),
            "active": int(active),
            "closed": int(closed),
            "applications": int(applications.scalar_one()),
        }

    async def _get_owned(self, job_id: IdLike, employer_id: IdLike) -> Optional[Job]:
        result = await self.db.execute(
            select(Job).where(
                and_(
                    Job.id == parse_uuid(job_id, "job_id"),
                    Job.employer_id == parse_uuid(employer_id, "employer_id"),
                )
            )
        )
        return result.scalar_one_or_none()

    async def _set_status(self, job_id: IdLike, employer_id: IdLike, status: JobStatus) -> bool:
        job = await self._get_owned(job_id, employer_id)
        if job is None:
            return False

        previous = job.status
        job.status = status.value
        await self.db.commit()

        logger.info("job_status_changed", job_id=str(job.id), previous_status=previous, status=status.value)
        return True

    async def _paginate(self, filters: list, page: int, limit: int) -> Tuple[List[Job], int]:
        result = await self.db.execute(
            select(Job)
            .where(*filters)
            .order_by(Job.created_at.desc())
            .offset((page - 1) * limit)
            .limit(limit)
        )
        jobs = list(result.scalars().all())

        total = (await self.db.execute(select(func.count(Job.id)).where(*filters))).scalar_one()
        return jobs, total
