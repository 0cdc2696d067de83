"""Job schemas."""

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from app.utils.constants import DEFAULT_CURRENCY, ExperienceLevel, JobStatus, JobType


class SalaryRange(BaseModel):
    min: float
    max: float
    currency: str = DEFAULT_CURRENCY


class JobCreate(BaseModel):
    """Payload for posting a job."""

    title: str = Field(..., min_length=1, max_length=500)
    description: str = Field(..., min_length=1)
    requirements: List[str] = Field(default_factory=list)
    responsibilities: List[str] = Field(default_factory=list)
    company: str = Field(..., min_length=1, max_length=255)
    location: str = Field(..., min_length=1, max_length=255)
    type: JobType
    experience: ExperienceLevel
    salary_min: float = Field(..., ge=0)
    salary_max: float = Field(..., ge=0)
    salary_currency: str = DEFAULT_CURRENCY
    skills: List[str] = Field(default_factory=list)
    benefits: List[str] = Field(default_factory=list)
    remote: bool = False
    deadline: Optional[datetime] = None

    @field_validator("title", "company", "location")
    @classmethod
    def strip_text(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be blank")
        return v

    @model_validator(mode="after")
    def check_salary_range(self):
        if self.salary_min > self.salary_max:
            raise ValueError("salary_min must not exceed salary_max")
        return self


class JobUpdate(BaseModel):
    """Partial job update. Only fields that are set are applied."""

    title: Optional[str] = Field(None, min_length=1, max_length=500)
    description: Optional[str] = Field(None, min_length=1)
    requirements: Optional[List[str]] = None
    responsibilities: Optional[List[str]] = None
    company: Optional[str] = Field(None, min_length=1, max_length=255)
    location: Optional[str] = Field(None, min_length=1, max_length=255)
    type: Optional[JobType] = None
    experience: Optional[ExperienceLevel] = None
    salary_min: Optional[float] = Field(None, ge=0)
    salary_max: Optional[float] = Field(None, ge=0)
    salary_currency: Optional[str] = None
    skills: Optional[List[str]] = None
    benefits: Optional[List[str]] = None
    remote: Optional[bool] = None
    deadline: Optional[datetime] = None
    status: Optional[JobStatus] = None


class JobResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    title: str
    description: str
    requirements: List[str] = Field(default_factory=list)
    responsibilities: List[str] = Field(default_factory=list)
    company: str
    location: str
    type: JobType
    experience: ExperienceLevel
    salary: SalaryRange
    skills: List[str] = Field(default_factory=list)
    benefits: List[str] = Field(default_factory=list)
    remote: bool = False
    deadline: Optional[datetime] = None
    employer_id: UUID
    status: JobStatus
    application_count: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class JobBrief(BaseModel):
    """Job fields embedded in application responses."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    title: str
    company: str
    location: str
    type: JobType
    experience: ExperienceLevel


class JobStats(BaseModel):
    total: int
    active: int
    closed: int
    applications: int
