"""Common constants and enumerations."""

from enum import Enum


class UserRole(str, Enum):
    """User roles."""

    CANDIDATE = "CANDIDATE"
    EMPLOYER = "EMPLOYER"
    ADMIN = "ADMIN"


class JobStatus(str, Enum):
    """Job posting status. DRAFT is the column default; new jobs are created ACTIVE."""

    ACTIVE = "ACTIVE"
    CLOSED = "CLOSED"
    DRAFT = "DRAFT"


class JobType(str, Enum):
    FULL_TIME = "FULL_TIME"
    PART_TIME = "PART_TIME"
    CONTRACT = "CONTRACT"
    INTERNSHIP = "INTERNSHIP"


class ExperienceLevel(str, Enum):
    ENTRY = "ENTRY"
    JUNIOR = "JUNIOR"
    MID = "MID"
    SENIOR = "SENIOR"
    LEAD = "LEAD"


class ApplicationStatus(str, Enum):
    """Application workflow status, declared in workflow order."""

    PENDING = "PENDING"
    REVIEWING = "REVIEWING"
    SHORTLISTED = "SHORTLISTED"
    REJECTED = "REJECTED"
    ACCEPTED = "ACCEPTED"


class Availability(str, Enum):
    IMMEDIATE = "IMMEDIATE"
    TWO_WEEKS = "2_WEEKS"
    ONE_MONTH = "1_MONTH"
    THREE_MONTHS = "3_MONTHS"
    NEGOTIABLE = "NEGOTIABLE"


# Statuses that trigger a candidate email
NOTIFIABLE_STATUSES = frozenset(
    {ApplicationStatus.ACCEPTED, ApplicationStatus.REJECTED, ApplicationStatus.SHORTLISTED}
)

TERMINAL_STATUSES = frozenset({ApplicationStatus.ACCEPTED, ApplicationStatus.REJECTED})

# Forward moves allowed when strict transitions are enabled.
# Re-applying the current status is always allowed.
ALLOWED_STATUS_TRANSITIONS = {
    ApplicationStatus.PENDING: {
        ApplicationStatus.REVIEWING,
        ApplicationStatus.SHORTLISTED,
        ApplicationStatus.REJECTED,
        ApplicationStatus.ACCEPTED,
    },
    ApplicationStatus.REVIEWING: {
        ApplicationStatus.SHORTLISTED,
        ApplicationStatus.REJECTED,
        ApplicationStatus.ACCEPTED,
    },
    ApplicationStatus.SHORTLISTED: {
        ApplicationStatus.REJECTED,
        ApplicationStatus.ACCEPTED,
    },
    **{status: set() for status in TERMINAL_STATUSES},
}

DEFAULT_CURRENCY = "USD"
