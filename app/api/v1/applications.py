"""
Applications API
Candidates apply and withdraw; employers review, change status and see stats.
"""

from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, HTTPException, Query, status

from app.api.deps import get_application_service, get_current_user, require_candidate, require_employer
from app.config import settings
from app.core.exceptions import ValidationFailure
from app.models.user import User
from app.schemas.application import ApplicationResponse, ApplicationStats
from app.schemas.common import ApiResponse, PaginatedResponse, Pagination
from app.services.application_service import ApplicationService
from app.utils.validators import validate_application_input, validate_status_update_input

router = APIRouter()

NOT_FOUND_OR_DENIED = "Application not found or access denied"


@router.post(
    "",
    response_model=ApiResponse[ApplicationResponse],
    status_code=status.HTTP_201_CREATED,
)
async def create_application(
    payload: Dict[str, Any] = Body(...),
    current_user: User = Depends(require_candidate),
    service: ApplicationService = Depends(get_application_service),
):
    """
    Apply for a job

    **Auth**: Candidate (JWT required)

    Returns 404 if the job is missing or not ACTIVE, 409 on a repeat application.
    """
    data, errors = validate_application_input(payload)
    if errors:
        raise ValidationFailure("Validation failed", errors=errors)

    application = await service.create_application(current_user.id, data)
    return ApiResponse(
        message="Application submitted successfully",
        data=ApplicationResponse.model_validate(application),
    )


@router.get("/candidate", response_model=PaginatedResponse[ApplicationResponse])
async def list_candidate_applications(
    status_filter: Optional[str] = Query(None, alias="status", description="Filter by status"),
    job_id: Optional[str] = Query(None, description="Filter by job"),
    page: int = Query(1),
    limit: int = Query(settings.DEFAULT_PAGE_SIZE),
    current_user: User = Depends(require_candidate),
    service: ApplicationService = Depends(get_application_service),
):
    """Applications submitted by the current candidate, newest first."""
    applications, total = await service.get_applications_by_candidate(
        current_user.id, status=status_filter, job_id=job_id, page=page, limit=limit
    )
    return PaginatedResponse(
        message="Applications retrieved successfully",
        data=[ApplicationResponse.model_validate(a) for a in applications],
        pagination=Pagination.build(page, limit, total),
    )


@router.delete("/{application_id}/withdraw", response_model=ApiResponse[None])
async def withdraw_application(
    application_id: str,
    current_user: User = Depends(require_candidate),
    service: ApplicationService = Depends(get_application_service),
):
    """
    Withdraw a PENDING application

    **Auth**: Candidate (JWT required)
    """
    withdrawn = await service.withdraw_application(application_id, current_user.id)
    if not withdrawn:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Application not found, access denied, or can no longer be withdrawn",
        )
    return ApiResponse(message="Application withdrawn successfully")


@router.get("/employer", response_model=PaginatedResponse[ApplicationResponse])
async def list_employer_applications(
    status_filter: Optional[str] = Query(None, alias="status", description="Filter by status"),
    job_id: Optional[str] = Query(None, description="Filter by job"),
    candidate_id: Optional[str] = Query(None, description="Filter by candidate"),
    page: int = Query(1),
    limit: int = Query(settings.DEFAULT_PAGE_SIZE),
    current_user: User = Depends(require_employer),
    service: ApplicationService = Depends(get_application_service),
):
    """Applications received for the current employer's jobs, newest first."""
    applications, total = await service.get_applications_by_employer(
        current_user.id,
        status=status_filter,
        job_id=job_id,
        candidate_id=candidate_id,
        page=page,
        limit=limit,
    )
    return PaginatedResponse(
        message="Applications retrieved successfully",
        data=[ApplicationResponse.model_validate(a) for a in applications],
        pagination=Pagination.build(page, limit, total),
    )


@router.get("/employer/stats", response_model=ApiResponse[ApplicationStats])
async def get_employer_application_stats(
    current_user: User = Depends(require_employer),
    service: ApplicationService = Depends(get_application_service),
):
    stats = await service.get_application_stats(current_user.id)
    return ApiResponse(message="Application statistics retrieved successfully", data=ApplicationStats(**stats))


@router.patch("/{application_id}/status", response_model=ApiResponse[ApplicationResponse])
async def update_application_status(
    application_id: str,
    payload: Dict[str, Any] = Body(...),
    current_user: User = Depends(require_employer),
    service: ApplicationService = Depends(get_application_service),
):
    """
    Change an application's status

    **Auth**: Employer owning the application (JWT required)

    SHORTLISTED, ACCEPTED and REJECTED also email the candidate; a mail
    failure does not affect the response.
    """
    data, errors = validate_status_update_input(payload)
    if errors:
        raise ValidationFailure("Validation failed", errors=errors)

    application = await service.update_application_status(
        application_id, current_user.id, data.status, data.employer_notes
    )
    if application is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND_OR_DENIED)

    return ApiResponse(
        message="Application status updated successfully",
        data=ApplicationResponse.model_validate(application),
    )


@router.get("/{application_id}", response_model=ApiResponse[ApplicationResponse])
async def get_application(
    application_id: str,
    current_user: User = Depends(get_current_user),
    service: ApplicationService = Depends(get_application_service),
):
    """Single application, visible to its candidate, its employer and admins."""
    application = await service.get_application_by_id(application_id, current_user.id, current_user.role)
    if application is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND_OR_DENIED)

    return ApiResponse(
        message="Application retrieved successfully",
        data=ApplicationResponse.model_validate(application),
    )
