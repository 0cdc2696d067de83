"""
Domain exceptions.

Services raise these; the API layer maps them to HTTP responses in
``app.main``. Ownership mismatches are not exceptions: services return
``None``/``False`` so that a missing record and a record owned by someone
else look the same to the caller.
"""

from typing import Dict, List, Optional


class DomainException(Exception):
    """Base exception for all domain errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    def __str__(self) -> str:
        return f"{self.__class__.__name__}: {self.message}"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message={self.message!r})"


class JobNotFoundOrInactiveError(DomainException):
    """Raised when applying to a job that does not exist or is not ACTIVE."""

    def __init__(self, job_id: Optional[str] = None) -> None:
        self.job_id = job_id
        super().__init__("Job not found or not active")


class DuplicateApplicationError(DomainException):
    """Raised when the candidate already applied for the job."""

    def __init__(self, job_id: Optional[str] = None, candidate_id: Optional[str] = None) -> None:
        self.job_id = job_id
        self.candidate_id = candidate_id
        super().__init__("You have already applied for this job")


class CandidateNotFoundError(DomainException):
    """Raised when the applying candidate's user record cannot be loaded."""

    def __init__(self, candidate_id: Optional[str] = None) -> None:
        self.candidate_id = candidate_id
        super().__init__("Candidate not found")


class ValidationFailure(DomainException):
    """
    Caller-correctable input error.

    Carries an optional list of ``{"field": ..., "message": ...}`` entries.
    """

    def __init__(self, message: str, errors: Optional[List[Dict[str, str]]] = None) -> None:
        self.errors = errors or []
        super().__init__(message)


class InvalidIdentifierError(ValidationFailure):
    """Raised when an id is not a well-formed UUID."""

    def __init__(self, field: str, value: object) -> None:
        self.field = field
        self.value = value
        super().__init__(
            f"Invalid {field.replace('_', ' ')}",
            errors=[{"field": field, "message": "must be a valid UUID"}],
        )


class InvalidPaginationError(ValidationFailure):
    """Raised when page or limit is out of range."""


class InvalidStatusTransitionError(ValidationFailure):
    """Raised when an application status change goes against the workflow."""

    def __init__(self, current: str, requested: str) -> None:
        self.current = current
        self.requested = requested
        super().__init__(
            f"Cannot change application status from {current} to {requested}",
            errors=[{"field": "status", "message": f"transition {current} -> {requested} is not allowed"}],
        )


class InvalidJobDataError(ValidationFailure):
    """Raised when job data breaks a cross-field rule (e.g. salary range)."""


class NotificationDeliveryError(DomainException):
    """Raised by mail senders. Always absorbed by the notification dispatcher."""
