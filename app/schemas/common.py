"""Shared response envelopes."""

from typing import Generic, List, Optional, TypeVar

from pydantic import BaseModel

from app.utils.helpers import page_count

T = TypeVar("T")


class Pagination(BaseModel):
    page: int
    limit: int
    total: int
    pages: int

    @classmethod
    def build(cls, page: int, limit: int, total: int) -> "Pagination":
        return cls(page=page, limit=limit, total=total, pages=page_count(total, limit))


class ApiResponse(BaseModel, Generic[T]):
    """Standard ``{"message": ..., "data": ...}`` envelope."""
    message: str
    data: Optional[T] = None


class PaginatedResponse(BaseModel, Generic[T]):
    """Envelope for list endpoints."""
    message: str
    data: List[T]
    pagination: Pagination


class FieldError(BaseModel):
    field: str
    message: str
