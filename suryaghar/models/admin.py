"""
Admin identity, sessions and moderation trail.
"""
from datetime import datetime
from typing import Any, Optional

from pydantic import ValidationInfo, field_validator
from sqlmodel import JSON, Column, Field, SQLModel, UniqueConstraint

from .base import CreatedAtMixin, IDMixin, SQLModelBase, utcnow
from .fields import EmailStr, OtpCode, Password, Username


# ==================== Tables ====================

class AdminUser(CreatedAtMixin, IDMixin, table=True):
    __tablename__ = "admin_users"

    email: str = Field(..., max_length=255, unique=True, index=True)
    username: Optional[str] = Field(None, max_length=80)
    avatar_url: Optional[str] = None
    password_hash: Optional[str] = None
    otp_hash: Optional[str] = None
    otp_expires_at: Optional[datetime] = None
    otp_attempts: int = Field(default=0, nullable=False)
    last_login_at: Optional[datetime] = None


class AuthSession(SQLModel, table=True):
    __tablename__ = "auth_sessions"

    token: str = Field(..., primary_key=True, max_length=128)
    user_id: str = Field(..., foreign_key="admin_users.id", index=True, ondelete="CASCADE")
    created_at: datetime = Field(default_factory=utcnow, nullable=False)
    expires_at: datetime = Field(..., nullable=False)


class AuditLog(CreatedAtMixin, IDMixin, table=True):
    __tablename__ = "audit_logs"

    admin_id: Optional[str] = Field(None, index=True)
    action: str = Field(..., max_length=40, index=True)
    entity_type: str = Field(..., max_length=40)
    entity_id: Optional[str] = None
    changes: dict[str, Any] = Field(default_factory=dict, sa_column=Column(JSON))


class JobView(IDMixin, table=True):
    __tablename__ = "job_views"

    job_id: str = Field(..., foreign_key="jobs.id", index=True, ondelete="CASCADE")
    user_agent: Optional[str] = None
    referrer: Optional[str] = None
    viewed_at: datetime = Field(default_factory=utcnow, nullable=False, index=True)


class JobSave(CreatedAtMixin, IDMixin, table=True):
    __tablename__ = "job_saves"
    __table_args__ = (UniqueConstraint("job_id", "user_email", name="uq_job_saves_job_user"),)

    job_id: str = Field(..., foreign_key="jobs.id", index=True, ondelete="CASCADE")
    user_email: str = Field(..., max_length=255, index=True)


# ==================== Auth request schemas ====================

class LoginRequest(SQLModelBase):
    email: EmailStr
    password: Password


class SendOtpRequest(SQLModelBase):
    email: EmailStr


class RegisterRequest(SQLModelBase):
    email: EmailStr
    code: OtpCode
    username: Username
    password: Password
    confirm_password: str

    @field_validator("confirm_password")
    @classmethod
    def passwords_match(cls, v: str, info: ValidationInfo) -> str:
        if v != info.data.get("password"):
            raise ValueError("Passwords do not match")
        return v


class ProfileUpdate(SQLModelBase):
    username: Optional[Username] = None
    avatar_url: Optional[str] = None
    password: Optional[Password] = None


class SaveJobRequest(SQLModelBase):
    email: EmailStr


# ==================== Responses ====================

class AdminUserResponse(SQLModelBase):
    id: str
    email: str
    username: Optional[str]
    avatar_url: Optional[str]


class AuditLogResponse(SQLModelBase):
    id: str
    admin_id: Optional[str]
    action: str
    entity_type: str
    entity_id: Optional[str]
    changes: dict[str, Any]
    created_at: datetime
