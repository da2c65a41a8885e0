"""
Curated site content: legal documents, gallery, testimonials, state
managers and videos.
"""
from datetime import datetime
from typing import Optional

from sqlmodel import Field

from .base import IDMixin, RecordResponse, SQLModelBase, TimestampMixin, CreatedAtMixin, utcnow
from .fields import (
    EmailStr,
    GalleryCategoryName,
    LegalDocumentName,
    MobileStr,
    Rating,
    RequiredStr,
    StateName,
)


# ==================== Legal documents ====================

class LegalDocument(IDMixin, table=True):
    """One current file per document type; re-upload overwrites."""
    __tablename__ = "legal_documents"

    name: str = Field(..., max_length=40, unique=True, index=True)
    file_url: str
    uploaded_by: Optional[str] = None
    uploaded_at: datetime = Field(default_factory=utcnow, nullable=False, index=True)


class LegalDocumentResponse(SQLModelBase):
    id: str
    name: str
    file_url: str
    uploaded_by: Optional[str]
    uploaded_at: datetime


# ==================== Gallery ====================

class GalleryImage(IDMixin, table=True):
    __tablename__ = "gallery_images"

    title: str = Field(..., max_length=200)
    category: str = Field(..., max_length=20, index=True)
    image_url: str
    is_active: bool = Field(default=True, index=True)
    uploaded_by: Optional[str] = None
    uploaded_at: datetime = Field(default_factory=utcnow, nullable=False, index=True)


class GalleryImageCreate(SQLModelBase):
    title: RequiredStr
    category: GalleryCategoryName


class GalleryImageUpdate(SQLModelBase):
    title: Optional[RequiredStr] = None
    category: Optional[GalleryCategoryName] = None
    is_active: Optional[bool] = None


class GalleryImageResponse(SQLModelBase):
    id: str
    title: str
    category: str
    image_url: str
    is_active: bool
    uploaded_by: Optional[str]
    uploaded_at: datetime


# ==================== Testimonials ====================

class Testimonial(TimestampMixin, IDMixin, table=True):
    __tablename__ = "testimonials"

    name: str = Field(..., max_length=120)
    state: str = Field(..., max_length=60)
    position: str = Field(..., max_length=80)
    image_url: Optional[str] = None
    review: str
    rating: int = Field(default=5, ge=1, le=5)
    is_active: bool = Field(default=True, index=True)
    display_order: int = Field(default=0, index=True)


class TestimonialCreate(SQLModelBase):
    name: RequiredStr
    state: RequiredStr
    position: RequiredStr
    image_url: Optional[str] = None
    review: RequiredStr
    rating: Rating = 5
    is_active: bool = True


class TestimonialUpdate(SQLModelBase):
    name: Optional[RequiredStr] = None
    state: Optional[RequiredStr] = None
    position: Optional[RequiredStr] = None
    image_url: Optional[str] = None
    review: Optional[RequiredStr] = None
    rating: Optional[Rating] = None
    is_active: Optional[bool] = None


class TestimonialResponse(RecordResponse):
    name: str
    state: str
    position: str
    image_url: Optional[str]
    review: str
    rating: int
    is_active: bool
    display_order: int


# ==================== State project managers ====================

class StateManager(TimestampMixin, IDMixin, table=True):
    __tablename__ = "state_project_managers"

    state: str = Field(..., max_length=40, unique=True, index=True)
    name: str = Field(..., max_length=120)
    mobile: str = Field(..., max_length=10)
    email: str = Field(..., max_length=255)
    photo_url: str
    is_active: bool = Field(default=True, index=True)
    uploaded_by: Optional[str] = None


class StateManagerCreate(SQLModelBase):
    state: StateName
    name: RequiredStr
    mobile: MobileStr
    email: EmailStr
    is_active: bool = True


class StateManagerUpdate(SQLModelBase):
    state: Optional[StateName] = None
    name: Optional[RequiredStr] = None
    mobile: Optional[MobileStr] = None
    email: Optional[EmailStr] = None
    is_active: Optional[bool] = None


class StateManagerResponse(RecordResponse):
    state: str
    name: str
    mobile: str
    email: str
    photo_url: str
    is_active: bool
    whatsapp_link: Optional[str] = None


# ==================== Videos ====================

class Video(CreatedAtMixin, IDMixin, table=True):
    __tablename__ = "videos"

    title: str = Field(..., max_length=200)
    youtube_url: str
    video_id: str = Field(..., max_length=20)
    display_order: int = Field(default=0, index=True)


class VideoCreate(SQLModelBase):
    title: RequiredStr
    youtube_url: RequiredStr


class VideoUpdate(SQLModelBase):
    title: Optional[RequiredStr] = None
    youtube_url: Optional[RequiredStr] = None


class VideoResponse(RecordResponse):
    title: str
    youtube_url: str
    video_id: str
    display_order: int
    embed_url: Optional[str] = None
