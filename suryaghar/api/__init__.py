"""
API routes
"""
from fastapi import APIRouter

from .admin import admin_router
from .v1 import applicants, auth, content, jobs, validate

api_router = APIRouter()

api_router.include_router(
    content.router,
    prefix="/content",
    tags=["Site content"]
)
api_router.include_router(
    applicants.router,
    prefix="/applications",
    tags=["Recruitment applications"]
)
api_router.include_router(
    jobs.router,
    prefix="/jobs",
    tags=["Job portal"]
)
api_router.include_router(
    auth.router,
    prefix="/auth",
    tags=["Admin auth"]
)
api_router.include_router(
    validate.router,
    prefix="/validate",
    tags=["Form validation"]
)
api_router.include_router(
    admin_router,
    prefix="/admin"
)
