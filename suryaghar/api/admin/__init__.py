"""
Admin back office API

Every route here requires a signed-in admin.
"""
from fastapi import APIRouter, Depends

from suryaghar.api.deps import require_admin

from . import applicants, content, jobs, overview

admin_router = APIRouter(dependencies=[Depends(require_admin)])

admin_router.include_router(overview.router, tags=["Admin dashboard"])
admin_router.include_router(applicants.router, prefix="/applicants", tags=["Admin applicants"])
admin_router.include_router(jobs.router, prefix="/jobs", tags=["Admin jobs"])
admin_router.include_router(jobs.applications_router, prefix="/job-applications", tags=["Admin job applications"])
admin_router.include_router(content.legal_router, prefix="/legal-documents", tags=["Admin legal documents"])
admin_router.include_router(content.gallery_router, prefix="/gallery", tags=["Admin gallery"])
admin_router.include_router(content.testimonials_router, prefix="/testimonials", tags=["Admin testimonials"])
admin_router.include_router(content.managers_router, prefix="/state-managers", tags=["Admin state managers"])
admin_router.include_router(content.videos_router, prefix="/videos", tags=["Admin videos"])

__all__ = ["admin_router"]
