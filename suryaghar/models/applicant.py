"""
Applicant model - recruitment applications from the public form.
"""
from datetime import date
from typing import Optional

from sqlmodel import Field

from .base import CreatedAtMixin, IDMixin, RecordResponse, SQLModelBase
from .constants import ApplicantStatus
from .fields import (
    ApplicantStatusName,
    EmailStr,
    Experience,
    MobileStr,
    PersonName,
    PositionName,
    StateName,
)


# ==================== Table ====================

class Applicant(CreatedAtMixin, IDMixin, table=True):
    __tablename__ = "applicants"

    full_name: str = Field(..., max_length=120, index=True)
    state: str = Field(..., max_length=40, index=True)
    district: str = Field(..., max_length=80)
    position: str = Field(..., max_length=60, index=True)
    qualification: str = Field(..., max_length=120)
    experience: float = Field(0, ge=0)
    mobile: str = Field(..., max_length=10)
    email: str = Field(..., max_length=255)
    resume_url: str
    aadhaar_url: str
    photo_url: str
    status: str = Field(default=ApplicantStatus.PENDING.value, index=True)

    def __repr__(self) -> str:
        return f"<Applicant(id={self.id}, name={self.full_name})>"


# ==================== Request schemas ====================

class ApplicantCreate(SQLModelBase):
    """Text fields of the application form; attachments arrive separately."""
    full_name: PersonName
    state: StateName
    district: str = Field(..., min_length=2)
    position: PositionName
    qualification: str = Field(..., min_length=2)
    experience: Experience
    mobile: MobileStr
    email: EmailStr


class ApplicantStatusUpdate(SQLModelBase):
    status: ApplicantStatusName


class ApplicantBulkStatusUpdate(SQLModelBase):
    ids: list[str] = Field(..., min_length=1)
    status: ApplicantStatusName


# ==================== Response schemas ====================

class ApplicantResponse(RecordResponse):
    full_name: str
    state: str
    district: str
    position: str
    qualification: str
    experience: float
    mobile: str
    email: str
    resume_url: str
    aadhaar_url: str
    photo_url: str
    status: str


class ApplicantFilter(SQLModelBase):
    """Admin list filters."""
    search: Optional[str] = None
    state: Optional[str] = None
    position: Optional[str] = None
    status: Optional[str] = None
    qualification: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
