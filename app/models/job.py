"""Job model."""

from sqlalchemy import Boolean, Column, DateTime, Float, ForeignKey, Index, Integer, String, Text, Uuid
from sqlalchemy.orm import relationship

from app.db.base import Base, JSONType


class Job(Base):
    """Job posting model."""

    __tablename__ = "jobs"
    __table_args__ = (
        Index("ix_jobs_status_employer", "status", "employer_id"),
    )

    title = Column(String(500), nullable=False, index=True)
    description = Column(Text, nullable=False)
    requirements = Column(JSONType, default=list)  # ordered
    responsibilities = Column(JSONType, default=list)  # ordered
    company = Column(String(255), nullable=False)
    location = Column(String(255), nullable=False)

    # Job details
    type = Column(String(20), nullable=False)  # FULL_TIME, PART_TIME, CONTRACT, INTERNSHIP
    experience = Column(String(20), nullable=False)  # ENTRY, JUNIOR, MID, SENIOR, LEAD
    salary_min = Column(Float, nullable=False)
    salary_max = Column(Float, nullable=False)
    salary_currency = Column(String(10), default="USD", nullable=False)
    skills = Column(JSONType, default=list)
    benefits = Column(JSONType, default=list)
    remote = Column(Boolean, default=False, nullable=False)
    deadline = Column(DateTime, nullable=True)

    # Ownership & status
    employer_id = Column(Uuid(as_uuid=True), ForeignKey("users.id"), nullable=False, index=True)
    status = Column(String(20), default="DRAFT", nullable=False)  # ACTIVE, CLOSED, DRAFT

    # Stats
    application_count = Column(Integer, default=0, nullable=False)

    # Relationships
    employer = relationship("User", back_populates="jobs")
    applications = relationship("Application", back_populates="job", cascade="all, delete-orphan")

    @property
    def salary(self) -> dict:
        return {"min": self.salary_min, "max": self.salary_max, "currency": self.salary_currency}

    def __repr__(self):
        return f"<Job {self.title} ({self.status})>"
