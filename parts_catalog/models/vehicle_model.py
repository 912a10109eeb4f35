"""
Vehicle model (the "model" table)
"""

from datetime import datetime
from typing import TYPE_CHECKING, Optional
from uuid import UUID, uuid4

from sqlmodel import Field, Relationship, SQLModel

from .base import timestamp_field

if TYPE_CHECKING:
    from .manufacturer import Manufacturer


class VehicleModel(SQLModel, table=True):
    """A model line produced by a manufacturer"""

    __tablename__ = "model"

    id: Optional[int] = Field(default=None, primary_key=True)
    public_id: UUID = Field(default_factory=uuid4, unique=True, index=True)
    manufacturer_id: int = Field(foreign_key="manufacturer.id", ondelete="CASCADE", index=True)

    name: str = Field(max_length=100)
    code: Optional[str] = Field(default=None, max_length=50)
    generation: Optional[str] = Field(default=None, max_length=50)
    production_start: Optional[int] = None
    production_end: Optional[int] = None
    description: Optional[str] = None

    created_at: datetime = timestamp_field()
    updated_at: datetime = timestamp_field()
    created_by: Optional[UUID] = None
    updated_by: Optional[UUID] = None

    manufacturer: Optional["Manufacturer"] = Relationship(back_populates="models")
