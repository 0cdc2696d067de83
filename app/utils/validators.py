"""Validators."""

from typing import Any, Dict, List, Optional, Tuple, Type, TypeVar, Union
from uuid import UUID

from pydantic import BaseModel, ValidationError

from app.config import settings
from app.core.exceptions import InvalidIdentifierError, InvalidPaginationError, ValidationFailure
from app.schemas.application import ApplicationCreate, ApplicationStatusUpdate
from app.schemas.job import JobCreate, JobUpdate
from app.utils.constants import ApplicationStatus

SchemaT = TypeVar("SchemaT", bound=BaseModel)


def field_errors(exc: ValidationError) -> List[Dict[str, str]]:
    """Flatten a pydantic ValidationError into ``{field, message}`` entries."""
    errors = []
    for error in exc.errors():
        field = ".".join(str(part) for part in error["loc"]) or "__root__"
        errors.append({"field": field, "message": error["msg"]})
    return errors


def validate_payload(
    schema: Type[SchemaT], data: Dict[str, Any]
) -> Tuple[Optional[SchemaT], List[Dict[str, str]]]:
    """
    Validate a plain dict against a schema.

    Returns ``(value, [])`` on success and ``(None, errors)`` otherwise.
    """
    try:
        return schema.model_validate(data), []
    except ValidationError as exc:
        return None, field_errors(exc)


def validate_application_input(data: Dict[str, Any]):
    return validate_payload(ApplicationCreate, data)


def validate_status_update_input(data: Dict[str, Any]):
    return validate_payload(ApplicationStatusUpdate, data)


def validate_job_input(data: Dict[str, Any]):
    return validate_payload(JobCreate, data)


def validate_job_update_input(data: Dict[str, Any]):
    return validate_payload(JobUpdate, data)


def parse_uuid(value: Union[str, UUID, None], field: str) -> UUID:
    """Parse an id, raising InvalidIdentifierError when it is malformed."""
    if isinstance(value, UUID):
        return value
    try:
        return UUID(str(value))
    except (TypeError, ValueError):
        raise InvalidIdentifierError(field, value)


def parse_optional_uuid(value: Union[str, UUID, None], field: str) -> Optional[UUID]:
    if value is None or value == "":
        return None
    return parse_uuid(value, field)


def validate_pagination(page: int, limit: int, max_limit: Optional[int] = None) -> Tuple[int, int]:
    """Check page >= 1 and 1 <= limit <= max_limit."""
    max_limit = max_limit or settings.MAX_PAGE_SIZE
    errors = []
    if page < 1:
        errors.append({"field": "page", "message": "must be at least 1"})
    if limit < 1 or limit > max_limit:
        errors.append({"field": "limit", "message": f"must be between 1 and {max_limit}"})
    if errors:
        raise InvalidPaginationError("Invalid pagination parameters", errors=errors)
    return page, limit


def parse_status(value, field: str = "status"):
    """Parse an application status, raising ValidationFailure for unknown values."""
    if value is None or value == "":
        return None
    try:
        return ApplicationStatus(value)
    except ValueError:
        allowed = ", ".join(s.value for s in ApplicationStatus)
        raise ValidationFailure(
            f"Invalid {field}",
            errors=[{"field": field, "message": f"must be one of: {allowed}"}],
        )
