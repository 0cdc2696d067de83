"""
Ownership-scoped query objects for applications.

Each public read operation builds one of these instead of passing caller
filters through, so the owner predicate is always present.
"""

from dataclasses import dataclass
from typing import Optional
from uuid import UUID

from sqlalchemy import Select, func, select
from sqlalchemy.orm import selectinload

from app.models.application import Application
from app.utils.constants import ApplicationStatus


def with_relations(query: Select) -> Select:
    """Eager-load job, candidate and employer for response serialization."""
    return query.options(
        selectinload(Application.job),
        selectinload(Application.candidate),
        selectinload(Application.employer),
    )


@dataclass(frozen=True)
class ApplicationQuery:
    """Owner predicate + optional narrowing + sort by applied_at desc + skip/limit."""

    candidate_id: Optional[UUID] = None
    employer_id: Optional[UUID] = None
    status: Optional[ApplicationStatus] = None
    job_id: Optional[UUID] = None
    page: int = 1
    limit: int = 10

    def __post_init__(self):
        if self.candidate_id is None and self.employer_id is None:
            raise ValueError("ApplicationQuery requires an owner (candidate_id or employer_id)")

    @classmethod
    def for_candidate(cls, candidate_id: UUID, *, status=None, job_id=None, page=1, limit=10):
        return cls(candidate_id=candidate_id, status=status, job_id=job_id, page=page, limit=limit)

    @classmethod
    def for_employer(
        cls, employer_id: UUID, *, status=None, job_id=None, candidate_id=None, page=1, limit=10
    ):
        return cls(
            employer_id=employer_id,
            candidate_id=candidate_id,
            status=status,
            job_id=job_id,
            page=page,
            limit=limit,
        )

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    def predicates(self) -> list:
        clauses = []
        if self.candidate_id is not None:
            clauses.append(Application.candidate_id == self.candidate_id)
        if self.employer_id is not None:
            clauses.append(Application.employer_id == self.employer_id)
        if self.status is not None:
            clauses.append(Application.status == ApplicationStatus(self.status).value)
        if self.job_id is not None:
            clauses.append(Application.job_id == self.job_id)
        return clauses

    def page_statement(self) -> Select:
        return with_relations(
            select(Application)
            .where(*self.predicates())
            .order_by(Application.applied_at.desc(), Application.created_at.desc())
            .offset(self.offset)
            .limit(self.limit)
        )

    def count_statement(self) -> Select:
        return select(func.count(Application.id)).where(*self.predicates())
