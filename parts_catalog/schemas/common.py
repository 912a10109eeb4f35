"""
Common schemas used across the API
"""
import math
from typing import Generic, List, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


T = TypeVar("T")


class CamelModel(BaseModel):
    """Base schema serialised with camelCase keys, accepting either case on input"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PaginationParams(BaseModel):
    """Page-based pagination parameters"""
    page: int = Field(default=1, ge=1, description="1-based page number")
    limit: int = Field(default=20, ge=1, description="Items per page")

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


class PaginationMeta(CamelModel):
    """Pagination block returned with every list response"""
    page: int
    limit: int
    total: int
    total_pages: int
    has_next: bool
    has_prev: bool

    @classmethod
    def build(cls, page: int, limit: int, total: int) -> "PaginationMeta":
        total_pages = math.ceil(total / limit) if limit else 0
        return cls(
            page=page,
            limit=limit,
            total=total,
            total_pages=total_pages,
            has_next=page < total_pages,
            has_prev=page > 1,
        )


class PaginatedResponse(CamelModel, Generic[T]):
    """Generic paginated response"""
    data: List[T]
    pagination: PaginationMeta


class HealthCheckResponse(BaseModel):
    """Health check response"""
    status: str = "ok"
    timestamp: str
    version: str
    database: str = "unknown"
    uptime: float = Field(0.0, description="Seconds since the application started")
