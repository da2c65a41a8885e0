"""
Job posting model - public job portal.
"""
from datetime import datetime
from typing import Optional

from sqlmodel import Field

from .base import IDMixin, RecordResponse, SQLModelBase, TimestampMixin
from .constants import JobStatus
from .fields import JobCategoryName, JobStatusName, JobTypeName, MobileStr, OptionalEmailStr, RequiredStr


# ==================== Table ====================

class Job(TimestampMixin, IDMixin, table=True):
    __tablename__ = "jobs"

    title: str = Field(..., max_length=200, index=True)
    category: str = Field(..., max_length=40, index=True)
    job_type: str = Field(..., max_length=20)
    location: str = Field(..., max_length=120)
    salary: Optional[str] = Field(None, max_length=120)
    description: str
    requirements: Optional[str] = None
    organization_name: str = Field(..., max_length=200)
    contact_person: str = Field(..., max_length=120)
    mobile: str = Field(..., max_length=10)
    whatsapp: str = Field(..., max_length=10)
    email: Optional[str] = Field(None, max_length=255)
    status: str = Field(default=JobStatus.PENDING.value, index=True)
    is_featured: bool = Field(default=False, index=True)
    views_count: int = Field(default=0, ge=0)
    published_at: Optional[datetime] = None

    def __repr__(self) -> str:
        return f"<Job(id={self.id}, title={self.title}, status={self.status})>"


# ==================== Request schemas ====================

class JobCreate(SQLModelBase):
    """Public "post a job" form."""
    title: RequiredStr
    category: JobCategoryName
    job_type: JobTypeName
    location: RequiredStr
    salary: Optional[str] = None
    description: RequiredStr
    requirements: Optional[str] = None
    organization_name: RequiredStr
    contact_person: RequiredStr
    mobile: MobileStr
    whatsapp: MobileStr
    email: OptionalEmailStr = None


class JobUpdate(SQLModelBase):
    """Admin edit; every field optional."""
    title: Optional[RequiredStr] = None
    category: Optional[JobCategoryName] = None
    job_type: Optional[JobTypeName] = None
    location: Optional[RequiredStr] = None
    salary: Optional[str] = None
    description: Optional[RequiredStr] = None
    requirements: Optional[str] = None
    organization_name: Optional[RequiredStr] = None
    contact_person: Optional[RequiredStr] = None
    mobile: Optional[MobileStr] = None
    whatsapp: Optional[MobileStr] = None
    email: OptionalEmailStr = None


class JobStatusUpdate(SQLModelBase):
    status: JobStatusName


class JobBulkAction(SQLModelBase):
    ids: list[str] = Field(..., min_length=1)


# ==================== Response schemas ====================

class JobResponse(RecordResponse):
    title: str
    category: str
    job_type: str
    location: str
    salary: Optional[str]
    description: str
    requirements: Optional[str]
    organization_name: str
    contact_person: str
    mobile: str
    whatsapp: str
    email: Optional[str]
    status: str
    is_featured: bool
    views_count: int
    published_at: Optional[datetime]
    updated_at: datetime
