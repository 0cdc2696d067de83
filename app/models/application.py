"""Application model."""

from sqlalchemy import Column, DateTime, Float, ForeignKey, Index, String, Text, UniqueConstraint, Uuid
from sqlalchemy.orm import relationship

from app.db.base import Base
from app.utils.helpers import utcnow


class Application(Base):
    """Job application model."""

    __tablename__ = "applications"
    __table_args__ = (
        UniqueConstraint("job_id", "candidate_id", name="unique_job_candidate_application"),
        Index("ix_applications_candidate_status", "candidate_id", "status"),
        Index("ix_applications_employer_status", "employer_id", "status"),
    )

    job_id = Column(Uuid(as_uuid=True), ForeignKey("jobs.id"), nullable=False, index=True)
    candidate_id = Column(Uuid(as_uuid=True), ForeignKey("users.id"), nullable=False, index=True)
    # Copied from the job at creation time, never updated
    employer_id = Column(Uuid(as_uuid=True), ForeignKey("users.id"), nullable=False, index=True)

    # Status tracking
    status = Column(String(20), default="PENDING", nullable=False)  # PENDING, REVIEWING, SHORTLISTED, REJECTED, ACCEPTED

    # Submission
    cover_letter = Column(Text, nullable=False)
    resume = Column(String(1000), nullable=False)
    mobile_number = Column(String(30))
    location = Column(String(255))
    expected_salary_amount = Column(Float)
    expected_salary_currency = Column(String(10))
    availability = Column(String(20), default="NEGOTIABLE", nullable=False)
    notes = Column(Text)
    employer_notes = Column(Text)

    # Timeline
    applied_at = Column(DateTime, default=utcnow, nullable=False, index=True)
    reviewed_at = Column(DateTime, nullable=True)

    # Relationships
    job = relationship("Job", back_populates="applications")
    candidate = relationship("User", foreign_keys=[candidate_id])
    employer = relationship("User", foreign_keys=[employer_id])

    @property
    def expected_salary(self):
        if self.expected_salary_amount is None:
            return None
        return {"amount": self.expected_salary_amount, "currency": self.expected_salary_currency}

    def __repr__(self):
        return f"<Application {self.candidate_id} -> {self.job_id} ({self.status})>"
