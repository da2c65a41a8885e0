"""
Job application model - candidates applying to a posted job.
"""
from typing import Optional

from sqlmodel import Field

from .base import IDMixin, RecordResponse, SQLModelBase, TimestampMixin
from .constants import JobApplicationStatus
from .fields import EmailStr, JobApplicationStatusName, LettersName, MobileStr, Rating, RequiredStr


# ==================== Table ====================

class JobApplication(TimestampMixin, IDMixin, table=True):
    __tablename__ = "job_applications"

    job_id: str = Field(..., foreign_key="jobs.id", index=True, ondelete="CASCADE")
    full_name: str = Field(..., max_length=120)
    mobile: str = Field(..., max_length=10)
    whatsapp: str = Field(..., max_length=10)
    email: str = Field(..., max_length=255)
    city: str = Field(..., max_length=120)
    message: Optional[str] = None
    resume_url: Optional[str] = None
    status: str = Field(default=JobApplicationStatus.APPLIED.value, index=True)
    rating: Optional[int] = Field(None, ge=1, le=5)
    notes: Optional[str] = None


# ==================== Request schemas ====================

class JobApplicationCreate(SQLModelBase):
    full_name: LettersName
    mobile: MobileStr
    whatsapp: MobileStr
    email: EmailStr
    city: RequiredStr
    message: Optional[str] = None


class JobApplicationUpdate(SQLModelBase):
    status: Optional[JobApplicationStatusName] = None
    rating: Optional[Rating] = None
    notes: Optional[str] = None


class JobApplicationBulkUpdate(SQLModelBase):
    ids: list[str] = Field(..., min_length=1)
    status: JobApplicationStatusName


# ==================== Response schemas ====================

class JobApplicationResponse(RecordResponse):
    job_id: str
    full_name: str
    mobile: str
    whatsapp: str
    email: str
    city: str
    message: Optional[str]
    resume_url: Optional[str]
    status: str
    rating: Optional[int]
    notes: Optional[str]
    job_title: Optional[str] = None
