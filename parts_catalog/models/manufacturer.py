"""
Manufacturer model
"""

from datetime import datetime
from typing import TYPE_CHECKING, List, Optional
from uuid import UUID, uuid4

from sqlmodel import Field, Relationship, SQLModel

from .base import timestamp_field

if TYPE_CHECKING:
    from .vehicle_model import VehicleModel


class Manufacturer(SQLModel, table=True):
    """Manufacturer database model"""

    __tablename__ = "manufacturer"

    # Internal key, never exposed over the API
    id: Optional[int] = Field(default=None, primary_key=True)
    public_id: UUID = Field(default_factory=uuid4, unique=True, index=True)

    name: str = Field(max_length=100, unique=True)
    display_name: str = Field(max_length=100)
    slug: str = Field(max_length=100, unique=True, index=True)

    logo_image_id: Optional[int] = Field(default=None, foreign_key="file.id")
    country_code: Optional[str] = Field(default=None, min_length=2, max_length=2)
    description: Optional[str] = None

    is_active: bool = Field(default=True)
    is_verified: bool = Field(default=False)

    created_at: datetime = timestamp_field()
    updated_at: datetime = timestamp_field()
    created_by: Optional[UUID] = None
    updated_by: Optional[UUID] = None

    # Relationships
    models: List["VehicleModel"] = Relationship(back_populates="manufacturer")
