"""
Manufacturer API schemas
"""
from enum import Enum
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, Field

from .common import CamelModel, PaginatedResponse


class ManufacturerStatus(str, Enum):
    """Status filter for listings"""
    ACTIVE = "active"
    INACTIVE = "inactive"
    ALL = "all"


class ManufacturerSortField(str, Enum):
    NAME = "name"
    CREATED_AT = "created_at"
    MODEL_COUNT = "model_count"


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


class ManufacturerCreate(CamelModel):
    """Schema for creating a manufacturer"""
    name: str = Field(..., min_length=1, max_length=100, examples=["Tesla"])
    display_name: str = Field(..., min_length=1, max_length=100, examples=["Tesla, Inc."])
    logo_image_id: Optional[UUID] = Field(None, description="Public ID of the logo image file")
    country_code: Optional[str] = Field(None, description="2-letter ISO country code, any case")
    description: Optional[str] = None
    is_active: Optional[bool] = None
    is_verified: Optional[bool] = Field(None, description="Whether the manufacturer is verified (admin only)")


class ManufacturerUpdate(CamelModel):
    """Schema for updating a manufacturer - all fields optional"""
    display_name: Optional[str] = Field(None, min_length=1, max_length=100)
    logo_image_id: Optional[UUID] = Field(None, description="Public ID of the logo image file")
    country_code: Optional[str] = None
    description: Optional[str] = None
    is_active: Optional[bool] = None
    is_verified: Optional[bool] = None


class ManufacturerStatusUpdate(CamelModel):
    """Schema for toggling the active flag"""
    is_active: bool


class ManufacturerBatchStatusUpdate(CamelModel):
    """Schema for toggling the active flag of several manufacturers"""
    ids: List[str] = Field(..., min_length=1, description="Manufacturer public IDs")
    is_active: bool


class ManufacturerRead(CamelModel):
    """Schema for reading a manufacturer"""
    id: UUID
    name: str
    display_name: str
    slug: str
    logo_image_id: Optional[str] = None
    country_code: Optional[str] = None
    description: Optional[str] = None
    is_active: bool
    is_verified: bool
    model_count: int = 0
    created_at: str
    updated_at: str


class ManufacturerDetailRead(ManufacturerRead):
    """Schema for reading a manufacturer with audit fields"""
    created_by: Optional[str] = None
    updated_by: Optional[str] = None


ManufacturerListResponse = PaginatedResponse[ManufacturerRead]


class ManufacturerListQuery(BaseModel):
    """Raw listing parameters as received from the client"""
    search: Optional[str] = None
    status: Optional[ManufacturerStatus] = None
    verified: Optional[bool] = None
    is_active: Optional[bool] = None
    country: Optional[str] = None
    sort: Optional[str] = None
    order: Optional[str] = None
    page: Optional[int] = None
    limit: Optional[int] = None


class ManufacturerFilters(BaseModel):
    """Filters applied conjunctively by the repository"""
    search: Optional[str] = None
    status: ManufacturerStatus = ManufacturerStatus.ALL
    verified: Optional[bool] = None
    is_active: Optional[bool] = None
    country: Optional[str] = None


class ManufacturerSort(BaseModel):
    """Sort key and direction; unknown keys fall back to name"""
    sort: str = ManufacturerSortField.NAME.value
    order: str = SortOrder.ASC.value


class ManufacturerDeleteResult(BaseModel):
    """Outcome of the delete policy"""
    deleted: bool
    soft: bool
    reason: Optional[str] = None


class BatchStatusResult(BaseModel):
    """Per-id outcome of a batch status update"""
    success: List[str] = Field(default_factory=list)
    failed: List[str] = Field(default_factory=list)
