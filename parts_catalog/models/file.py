"""
Uploaded file metadata model
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Field, SQLModel

from .base import timestamp_field


class File(SQLModel, table=True):
    """Metadata for a file held by a storage provider"""

    __tablename__ = "file"

    id: Optional[int] = Field(default=None, primary_key=True)
    public_id: UUID = Field(default_factory=uuid4, unique=True, index=True)
    file_name: str = Field(max_length=255)
    original_name: str = Field(max_length=255)
    mime_type: str = Field(max_length=100)
    file_size: int
    file_path: str = Field(max_length=500)
    bucket: str = Field(max_length=100)
    provider: str = Field(max_length=50)
    uploaded_by: Optional[int] = Field(default=None, foreign_key="user.id")
    created_at: datetime = timestamp_field()
    updated_at: datetime = timestamp_field()
