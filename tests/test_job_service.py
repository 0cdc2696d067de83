"""Job posting service tests."""

from uuid import uuid4

import pytest

from app.core.exceptions import InvalidIdentifierError, InvalidJobDataError, InvalidPaginationError
from app.models.application import Application
from app.schemas.application import ApplicationCreate
from app.schemas.job import JobCreate, JobUpdate
from app.utils.constants import ExperienceLevel, JobStatus, JobType, UserRole


def job_create(**overrides) -> JobCreate:
    data = {
        "title": "Data Engineer",
        "description": "Own the ingestion pipelines.",
        "requirements": ["SQL", "Airflow"],
        "company": "Acme Corp",
        "location": "Remote - EU",
        "type": "CONTRACT",
        "experience": "SENIOR",
        "salary_min": 500,
        "salary_max": 700,
        "skills": ["Python", "Spark"],
        "remote": True,
    }
    data.update(overrides)
    return JobCreate.model_validate(data)


class TestCreateJob:
    async def test_new_jobs_are_active(self, job_service, employer):
        job = await job_service.create_job(employer.id, job_create())

        assert job.status == JobStatus.ACTIVE.value
        assert job.application_count == 0
        assert job.employer_id == employer.id
        assert job.type == "CONTRACT"
        assert job.salary == {"min": 500, "max": 700, "currency": "USD"}
        assert job.requirements == ["SQL", "Airflow"]

    async def test_salary_range_validated_by_schema(self):
        with pytest.raises(ValueError):
            job_create(salary_min=900, salary_max=700)


class TestUpdateJob:
    async def test_partial_update(self, job_service, job, employer):
        updated = await job_service.update_job(job.id, employer.id, JobUpdate(title="Staff Engineer", remote=True))

        assert updated.title == "Staff Engineer"
        assert updated.remote is True
        assert updated.location == "Berlin"

    async def test_salary_merged_with_stored_range(self, job_service, job, employer):
        updated = await job_service.update_job(job.id, employer.id, JobUpdate(salary_max=95000))

        assert updated.salary_min == 60000
        assert updated.salary_max == 95000

    async def test_merged_salary_range_must_be_ordered(self, job_service, job, employer):
        with pytest.raises(InvalidJobDataError):
            await job_service.update_job(job.id, employer.id, JobUpdate(salary_min=90000))

    async def test_can_move_to_draft(self, job_service, job, employer):
        updated = await job_service.update_job(job.id, employer.id, JobUpdate(status=JobStatus.DRAFT))

        assert updated.status == JobStatus.DRAFT.value

    async def test_other_employer_gets_none(self, job_service, job, make_user):
        rival = await make_user(UserRole.EMPLOYER)

        assert await job_service.update_job(job.id, rival.id, JobUpdate(title="Hijacked")) is None


class TestDeleteJob:
    async def test_deletes_job_and_applications(
        self, job_service, application_service, db_session, job, employer, candidate, application_payload
    ):
        application = await application_service.create_application(
            candidate.id, ApplicationCreate.model_validate(application_payload())
        )

        assert await job_service.delete_job(job.id, employer.id) is True

        assert await job_service.get_job_by_id(job.id) is None
        assert await db_session.get(Application, application.id) is None

    async def test_other_employer_cannot_delete(self, job_service, job, make_user):
        rival = await make_user(UserRole.EMPLOYER)

        assert await job_service.delete_job(job.id, rival.id) is False
        assert await job_service.get_job_by_id(job.id) is not None


class TestCloseAndReopen:
    async def test_close_then_reopen(self, job_service, job, employer):
        assert await job_service.close_job(job.id, employer.id) is True
        assert (await job_service.get_job_by_id(job.id)).status == JobStatus.CLOSED.value

        assert await job_service.reopen_job(job.id, employer.id) is True
        assert (await job_service.get_job_by_id(job.id)).status == JobStatus.ACTIVE.value

    async def test_closing_twice_still_succeeds(self, job_service, job, employer):
        await job_service.close_job(job.id, employer.id)

        assert await job_service.close_job(job.id, employer.id) is True

    async def test_false_when_not_owned_or_missing(self, job_service, job, make_user, employer):
        rival = await make_user(UserRole.EMPLOYER)

        assert await job_service.close_job(job.id, rival.id) is False
        assert await job_service.reopen_job(uuid4(), employer.id) is False


class TestReads:
    async def test_get_job_by_id_rejects_malformed_id(self, job_service):
        with pytest.raises(InvalidIdentifierError):
            await job_service.get_job_by_id("12345")

    async def test_jobs_by_employer(self, job_service, employer, make_job, make_user):
        rival = await make_user(UserRole.EMPLOYER)
        for _ in range(3):
            await make_job(employer)
        await make_job(rival)

        jobs, total = await job_service.get_jobs_by_employer(employer.id, page=1, limit=2)

        assert total == 3
        assert len(jobs) == 2
        assert all(j.employer_id == employer.id for j in jobs)

    async def test_job_stats(self, job_service, application_service, employer, make_job, candidate):
        active = await make_job(employer)
        await make_job(employer, status=JobStatus.CLOSED.value)
        await make_job(employer, status=JobStatus.DRAFT.value)
        await application_service.create_application(
            candidate.id, ApplicationCreate(job_id=active.id, cover_letter="Hi", resume="https://cv.test/c.pdf")
        )

        stats = await job_service.get_job_stats(employer.id)

        assert stats == {"total": 3, "active": 1, "closed": 1, "applications": 1}


class TestSearchJobs:
    @pytest.fixture
    async def catalogue(self, make_job, employer):
        return {
            "python": await make_job(employer, title="Python Developer", skills=["Django"], location="Berlin"),
            "golang": await make_job(
                employer,
                title="Go Engineer",
                description="Services in Go",
                skills=["Kubernetes"],
                location="Munich",
                remote=True,
                type=JobType.CONTRACT.value,
            ),
            "closed": await make_job(
                employer, title="Python Lead", status=JobStatus.CLOSED.value, experience=ExperienceLevel.LEAD.value
            ),
        }

    async def test_only_active_jobs(self, job_service, catalogue):
        jobs, total = await job_service.search_jobs()

        assert total == 2
        assert catalogue["closed"].id not in {j.id for j in jobs}

    async def test_any_term_matches_title_description_or_skills(self, job_service, catalogue):
        jobs, _ = await job_service.search_jobs(search="kubernetes PYTHON")

        assert {j.id for j in jobs} == {catalogue["python"].id, catalogue["golang"].id}

    async def test_location_is_case_insensitive_substring(self, job_service, catalogue):
        jobs, total = await job_service.search_jobs(location="muni")

        assert total == 1 and jobs[0].id == catalogue["golang"].id

    async def test_exact_filters(self, job_service, catalogue):
        remote_jobs, _ = await job_service.search_jobs(remote=True)
        contract_jobs, _ = await job_service.search_jobs(type=JobType.CONTRACT)
        lead_jobs, lead_total = await job_service.search_jobs(experience="LEAD")

        assert [j.id for j in remote_jobs] == [catalogue["golang"].id]
        assert [j.id for j in contract_jobs] == [catalogue["golang"].id]
        assert lead_jobs == [] and lead_total == 0

    async def test_rejects_bad_pagination(self, job_service):
        with pytest.raises(InvalidPaginationError):
            await job_service.search_jobs(page=0)

    async def test_wildcards_in_input_match_literally(self, job_service, catalogue, make_job, employer):
        literal = await make_job(employer, title="SRE 100% remote", location="Remote_EU", skills=["on_call"])

        underscore, underscore_total = await job_service.search_jobs(search="_")
        percent, _ = await job_service.search_jobs(search="100%")
        by_location, _ = await job_service.search_jobs(location="_")

        assert underscore_total == 1 and underscore[0].id == literal.id
        assert [j.id for j in percent] == [literal.id]
        assert [j.id for j in by_location] == [literal.id]
