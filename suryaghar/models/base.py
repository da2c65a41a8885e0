"""
Shared SQLModel base classes and mixins.
"""
import uuid
from datetime import datetime, timezone

from sqlmodel import Field, SQLModel


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SQLModelBase(SQLModel):
    """
    Base config for every schema class.
    """
    model_config = {
        "from_attributes": True,
        "populate_by_name": True,
        "str_strip_whitespace": True,
    }


class CreatedAtMixin(SQLModel):
    created_at: datetime = Field(
        default_factory=utcnow,
        nullable=False,
        index=True,
        description="Creation time"
    )


class TimestampMixin(CreatedAtMixin):
    """created_at + updated_at for table models."""
    updated_at: datetime = Field(
        default_factory=utcnow,
        nullable=False,
        description="Last update time"
    )


class IDMixin(SQLModel):
    id: str = Field(
        default_factory=lambda: str(uuid.uuid4()),
        primary_key=True,
        description="Primary key"
    )


class RecordResponse(SQLModelBase):
    """Response base for rows that carry an id and created_at."""
    id: str
    created_at: datetime
