"""
User model
"""

from datetime import datetime
from typing import Optional

from sqlmodel import Field, SQLModel

from .base import timestamp_field


class User(SQLModel, table=True):
    """Application user database model"""

    __tablename__ = "user"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(max_length=255)
    email: str = Field(max_length=255, unique=True)
    password: str = Field(max_length=255)
    reset_token: Optional[str] = Field(default=None, max_length=255)
    created_at: datetime = timestamp_field()
    updated_at: datetime = timestamp_field()
