"""
Shared helpers for table models
"""

from datetime import datetime, timezone

from sqlalchemy import DateTime
from sqlmodel import Field


def utcnow() -> datetime:
    """Return current UTC time (timezone-aware)"""
    return datetime.now(timezone.utc)


def timestamp_field():
    """Timezone-aware timestamp column defaulting to now"""
    return Field(default_factory=utcnow, sa_type=DateTime(timezone=True))
