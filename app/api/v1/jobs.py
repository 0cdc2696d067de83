"""Job endpoints - Public search plus employer job management."""

from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, HTTPException, Query, status

from app.api.deps import get_job_service, require_employer
from app.config import settings
from app.core.exceptions import ValidationFailure
from app.models.user import User
from app.schemas.common import ApiResponse, PaginatedResponse, Pagination
from app.schemas.job import JobResponse, JobStats
from app.services.job_service import JobService
from app.utils.constants import ExperienceLevel, JobType
from app.utils.validators import validate_job_input, validate_job_update_input

router = APIRouter()

NOT_FOUND_OR_DENIED = "Job not found or access denied"


# ==================== Public ====================

@router.get("/search", response_model=PaginatedResponse[JobResponse])
async def search_jobs(
    search: Optional[str] = Query(None, description="Free text matched against title, description and skills"),
    location: Optional[str] = Query(None, description="Case-insensitive partial match"),
    type: Optional[JobType] = Query(None, description="FULL_TIME, PART_TIME, CONTRACT, INTERNSHIP"),
    experience: Optional[ExperienceLevel] = Query(None, description="ENTRY, JUNIOR, MID, SENIOR, LEAD"),
    remote: Optional[bool] = Query(None),
    page: int = Query(1),
    limit: int = Query(settings.DEFAULT_PAGE_SIZE),
    service: JobService = Depends(get_job_service),
):
    """
    Search ACTIVE jobs, newest first

    **Examples:**
    ```
    GET /api/v1/jobs/search?search=python django&remote=true
    GET /api/v1/jobs/search?location=berlin&type=FULL_TIME&page=2&limit=20
    ```
    """
    jobs, total = await service.search_jobs(
        search=search,
        location=location,
        type=type,
        experience=experience,
        remote=remote,
        page=page,
        limit=limit,
    )
    return PaginatedResponse(
        message="Jobs retrieved successfully",
        data=[JobResponse.model_validate(job) for job in jobs],
        pagination=Pagination.build(page, limit, total),
    )


# ==================== Employer ====================

@router.get("/employer/jobs", response_model=PaginatedResponse[JobResponse])
async def list_employer_jobs(
    page: int = Query(1),
    limit: int = Query(settings.DEFAULT_PAGE_SIZE),
    current_user: User = Depends(require_employer),
    service: JobService = Depends(get_job_service),
):
    jobs, total = await service.get_jobs_by_employer(current_user.id, page=page, limit=limit)
    return PaginatedResponse(
        message="Jobs retrieved successfully",
        data=[JobResponse.model_validate(job) for job in jobs],
        pagination=Pagination.build(page, limit, total),
    )


@router.get("/employer/stats", response_model=ApiResponse[JobStats])
async def get_employer_job_stats(
    current_user: User = Depends(require_employer),
    service: JobService = Depends(get_job_service),
):
    stats = await service.get_job_stats(current_user.id)
    return ApiResponse(message="Job statistics retrieved successfully", data=JobStats(**stats))


@router.post("", response_model=ApiResponse[JobResponse], status_code=status.HTTP_201_CREATED)
async def create_job(
    payload: Dict[str, Any] = Body(...),
    current_user: User = Depends(require_employer),
    service: JobService = Depends(get_job_service),
):
    """
    Post a job

    **Auth**: Employer (JWT required)

    The job is published as ACTIVE.
    """
    data, errors = validate_job_input(payload)
    if errors:
        raise ValidationFailure("Validation failed", errors=errors)

    job = await service.create_job(current_user.id, data)
    return ApiResponse(message="Job created successfully", data=JobResponse.model_validate(job))


@router.put("/{job_id}", response_model=ApiResponse[JobResponse])
async def update_job(
    job_id: str,
    payload: Dict[str, Any] = Body(...),
    current_user: User = Depends(require_employer),
    service: JobService = Depends(get_job_service),
):
    data, errors = validate_job_update_input(payload)
    if errors:
        raise ValidationFailure("Validation failed", errors=errors)

    job = await service.update_job(job_id, current_user.id, data)
    if job is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND_OR_DENIED)
    return ApiResponse(message="Job updated successfully", data=JobResponse.model_validate(job))


@router.delete("/{job_id}", response_model=ApiResponse[None])
async def delete_job(
    job_id: str,
    current_user: User = Depends(require_employer),
    service: JobService = Depends(get_job_service),
):
    """Delete a job together with its applications."""
    if not await service.delete_job(job_id, current_user.id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND_OR_DENIED)
    return ApiResponse(message="Job deleted successfully")


@router.patch("/{job_id}/close", response_model=ApiResponse[None])
async def close_job(
    job_id: str,
    current_user: User = Depends(require_employer),
    service: JobService = Depends(get_job_service),
):
    if not await service.close_job(job_id, current_user.id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND_OR_DENIED)
    return ApiResponse(message="Job closed successfully")


@router.patch("/{job_id}/reopen", response_model=ApiResponse[None])
async def reopen_job(
    job_id: str,
    current_user: User = Depends(require_employer),
    service: JobService = Depends(get_job_service),
):
    if not await service.reopen_job(job_id, current_user.id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND_OR_DENIED)
    return ApiResponse(message="Job reopened successfully")


# Registered last so the literal paths above take precedence
@router.get("/{job_id}", response_model=ApiResponse[JobResponse])
async def get_job(job_id: str, service: JobService = Depends(get_job_service)):
    """Get job details by ID (public)."""
    job = await service.get_job_by_id(job_id)
    if job is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Job not found")
    return ApiResponse(message="Job retrieved successfully", data=JobResponse.model_validate(job))
