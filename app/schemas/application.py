"""Application schemas."""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.schemas.job import JobBrief
from app.schemas.user import UserBrief
from app.utils.constants import DEFAULT_CURRENCY, ApplicationStatus, Availability


class ApplicationCreate(BaseModel):
    """Payload a candidate submits when applying to a job."""

    job_id: UUID
    cover_letter: str = Field(..., min_length=1)
    resume: str = Field(..., min_length=1, max_length=1000)
    mobile_number: Optional[str] = Field(None, max_length=30)
    location: Optional[str] = Field(None, max_length=255)
    expected_salary: Optional[float] = Field(None, ge=0)
    expected_salary_currency: str = DEFAULT_CURRENCY
    availability: Availability = Availability.NEGOTIABLE
    notes: Optional[str] = None

    @field_validator("cover_letter", "resume")
    @classmethod
    def not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be blank")
        return v


class ApplicationStatusUpdate(BaseModel):
    status: ApplicationStatus
    employer_notes: Optional[str] = None


class ExpectedSalary(BaseModel):
    amount: float
    currency: str = DEFAULT_CURRENCY


class ApplicationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    job_id: UUID
    candidate_id: UUID
    employer_id: UUID
    status: ApplicationStatus
    cover_letter: str
    resume: str
    mobile_number: Optional[str] = None
    location: Optional[str] = None
    expected_salary: Optional[ExpectedSalary] = None
    availability: Availability
    notes: Optional[str] = None
    employer_notes: Optional[str] = None
    applied_at: datetime
    reviewed_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    job: Optional[JobBrief] = None
    candidate: Optional[UserBrief] = None
    employer: Optional[UserBrief] = None


class ApplicationStats(BaseModel):
    total: int = 0
    pending: int = 0
    reviewing: int = 0
    shortlisted: int = 0
    rejected: int = 0
    accepted: int = 0
