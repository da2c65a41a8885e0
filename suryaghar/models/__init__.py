"""
SQLModel models

Each module combines the table model with its request and response schemas.
"""
from .base import SQLModelBase, TimestampMixin, IDMixin, RecordResponse
from .applicant import (
    Applicant, ApplicantCreate, ApplicantStatusUpdate, ApplicantBulkStatusUpdate,
    ApplicantResponse, ApplicantFilter,
)
from .job import Job, JobCreate, JobUpdate, JobStatusUpdate, JobBulkAction, JobResponse
from .job_application import (
    JobApplication, JobApplicationCreate, JobApplicationUpdate,
    JobApplicationBulkUpdate, JobApplicationResponse,
)
from .content import (
    LegalDocument, LegalDocumentResponse,
    GalleryImage, GalleryImageCreate, GalleryImageUpdate, GalleryImageResponse,
    Testimonial, TestimonialCreate, TestimonialUpdate, TestimonialResponse,
    StateManager, StateManagerCreate, StateManagerUpdate, StateManagerResponse,
    Video, VideoCreate, VideoUpdate, VideoResponse,
)
from .admin import (
    AdminUser, AuthSession, AuditLog, JobView, JobSave,
    LoginRequest, SendOtpRequest, RegisterRequest, ProfileUpdate, SaveJobRequest,
    AdminUserResponse, AuditLogResponse,
)

__all__ = [
    # Base
    "SQLModelBase",
    "TimestampMixin",
    "IDMixin",
    "RecordResponse",
    # Applicant
    "Applicant",
    "ApplicantCreate",
    "ApplicantStatusUpdate",
    "ApplicantBulkStatusUpdate",
    "ApplicantResponse",
    "ApplicantFilter",
    # Job
    "Job",
    "JobCreate",
    "JobUpdate",
    "JobStatusUpdate",
    "JobBulkAction",
    "JobResponse",
    # Job application
    "JobApplication",
    "JobApplicationCreate",
    "JobApplicationUpdate",
    "JobApplicationBulkUpdate",
    "JobApplicationResponse",
    # Content
    "LegalDocument",
    "LegalDocumentResponse",
    "GalleryImage",
    "GalleryImageCreate",
    "GalleryImageUpdate",
    "GalleryImageResponse",
    "Testimonial",
    "TestimonialCreate",
    "TestimonialUpdate",
    "TestimonialResponse",
    "StateManager",
    "StateManagerCreate",
    "StateManagerUpdate",
    "StateManagerResponse",
    "Video",
    "VideoCreate",
    "VideoUpdate",
    "VideoResponse",
    # Admin
    "AdminUser",
    "AuthSession",
    "AuditLog",
    "JobView",
    "JobSave",
    "LoginRequest",
    "SendOtpRequest",
    "RegisterRequest",
    "ProfileUpdate",
    "SaveJobRequest",
    "AdminUserResponse",
    "AuditLogResponse",
]
