"""
Application configuration.

Values are read from environment variables and the ``.env`` file.
A missing ``DATABASE_URL`` or ``STORAGE_DIR`` is not an error: the app
starts with a null backend, public sections render empty and every
write is refused.
"""
from functools import lru_cache
from pathlib import Path
from typing import List, Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


BASE_DIR = Path(__file__).resolve().parent.parent.parent


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ========== Application ==========
    app_name: str = "PM Surya Ghar Recruitment"
    app_version: str = "1.0.0"
    app_env: str = "development"
    debug: bool = True
    api_prefix: str = "/api"

    # ========== Server ==========
    host: str = "0.0.0.0"
    port: int = 8000

    # ========== Backend ==========
    # Either of these left unset means "backend not configured".
    database_url: Optional[str] = None
    storage_dir: Optional[str] = None
    public_base_url: str = "http://localhost:8000"

    # ========== CORS ==========
    cors_origins: List[str] = ["http://localhost:5173", "http://localhost:3000"]

    # ========== Auth ==========
    session_ttl_hours: int = 24
    otp_ttl_minutes: int = 10
    # Wrong guesses allowed before the code is discarded.
    otp_max_attempts: int = 5
    # Empty list means every signed-in user is an admin.
    admin_allowed_emails: List[str] = []

    # ========== Job portal ==========
    job_fetch_limit: int = 500
    job_page_size: int = 12

    # ========== Uploads ==========
    max_upload_mb: int = 5
    max_legal_doc_mb: int = 10

    # ========== Contact ==========
    whatsapp_number: str = "917073741421"
    portal_url: str = "https://pmsuryaghar.gov.in"

    @field_validator("database_url", "storage_dir", mode="before")
    @classmethod
    def blank_is_unset(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("admin_allowed_emails")
    @classmethod
    def lower_emails(cls, v: List[str]) -> List[str]:
        return [e.strip().lower() for e in v if e.strip()]

    @property
    def backend_configured(self) -> bool:
        return bool(self.database_url and self.storage_dir)

    @property
    def is_development(self) -> bool:
        return self.app_env == "development"

    @property
    def max_upload_bytes(self) -> int:
        return self.max_upload_mb * 1024 * 1024

    @property
    def max_legal_doc_bytes(self) -> int:
        return self.max_legal_doc_mb * 1024 * 1024


@lru_cache()
def get_settings() -> Settings:
    """Cached settings instance."""
    return Settings()


settings = get_settings()
