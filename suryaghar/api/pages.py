"""
Page routes.

Each page answers with the payload a client needs to render it: the shell
chrome plus the page's own data. ``/admin`` sends anonymous visitors to
``/login`` before anything is fetched.
"""
from fastapi import APIRouter, Depends
from fastapi.responses import RedirectResponse

from suryaghar import content
from suryaghar.api.deps import get_app_settings, get_backend, get_client, get_session_context
from suryaghar.core.backend import Backend, DataClient, decode, decode_all
from suryaghar.core.config import Settings
from suryaghar.core.response import DictResponse, success_response
from suryaghar.core.session import SessionContext
from suryaghar.models import JobResponse
from suryaghar.models.constants import ALL_CATEGORIES, ALL_TYPES, JobCategory, JobType, values
from suryaghar.services import jobs as job_service
from suryaghar.services import sections
from suryaghar.services.analytics import dashboard_overview
from suryaghar.services.job_search import JobListing, load_approved_jobs

router = APIRouter()

ADMIN_PANELS = [
    {"key": "overview", "label": "Overview", "endpoint": "/api/v1/admin/overview"},
    {"key": "applicants", "label": "Applicants", "endpoint": "/api/v1/admin/applicants"},
    {"key": "jobs", "label": "Job Postings", "endpoint": "/api/v1/admin/jobs"},
    {"key": "job_applications", "label": "Job Applications", "endpoint": "/api/v1/admin/job-applications"},
    {"key": "legal_documents", "label": "Legal Documents", "endpoint": "/api/v1/admin/legal-documents"},
    {"key": "gallery", "label": "Gallery", "endpoint": "/api/v1/admin/gallery"},
    {"key": "testimonials", "label": "Testimonials", "endpoint": "/api/v1/admin/testimonials"},
    {"key": "state_managers", "label": "State Managers", "endpoint": "/api/v1/admin/state-managers"},
    {"key": "videos", "label": "Videos", "endpoint": "/api/v1/admin/videos"},
]


@router.get("/", summary="Home page", response_model=DictResponse)
async def home(
    client: DataClient = Depends(get_client),
    settings: Settings = Depends(get_app_settings),
):
    return success_response(data={
        "shell": content.shell(settings),
        **content.home_static(settings),
        "sections": await sections.load_home_sections(client),
    })


@router.get("/jobs", summary="Job portal page", response_model=DictResponse)
async def jobs_page(
    client: DataClient = Depends(get_client),
    settings: Settings = Depends(get_app_settings),
):
    """First page of the approved listing with the default filters."""
    listing = JobListing(await load_approved_jobs(client, settings.job_fetch_limit), page_size=settings.job_page_size)
    current = listing.current()
    return success_response(data={
        "shell": content.shell(settings),
        "listing": {"items": decode_all(JobResponse, current.items), **current.meta()},
        "featured": decode_all(JobResponse, await job_service.featured_jobs(client)),
        "categories": [ALL_CATEGORIES, *values(JobCategory)],
        "job_types": [ALL_TYPES, *values(JobType)],
    })


@router.get("/jobs/{job_id}", summary="Job detail page", response_model=DictResponse)
async def job_page(
    job_id: str,
    client: DataClient = Depends(get_client),
    settings: Settings = Depends(get_app_settings),
):
    job = await job_service.get_approved_job(client, job_id)
    return success_response(data={
        "shell": content.shell(settings),
        "job": decode(JobResponse, job).model_dump(mode="json"),
        "apply": {
            "endpoint": f"/api/v1/jobs/{job.id}/apply",
            "fields": ["full_name", "mobile", "whatsapp", "email", "city", "message", "resume"],
        },
    })


@router.get("/login", summary="Admin sign-in page", response_model=DictResponse)
async def login_page(
    context: SessionContext = Depends(get_session_context),
    settings: Settings = Depends(get_app_settings),
):
    if context.is_authenticated:
        return RedirectResponse("/admin", status_code=303)
    return success_response(data={
        "shell": content.shell(settings),
        "login_endpoint": "/api/v1/auth/login",
        "register_endpoints": {
            "send_otp": "/api/v1/auth/register/send-otp",
            "verify": "/api/v1/auth/register/verify",
        },
    })


@router.get("/admin", summary="Admin dashboard", response_model=DictResponse)
async def admin_page(
    context: SessionContext = Depends(get_session_context),
    backend: Backend = Depends(get_backend),
):
    if not context.is_authenticated:
        return RedirectResponse("/login", status_code=303)
    async with backend.client() as client:
        overview = await dashboard_overview(client)
    return success_response(data={
        "user": context.user.to_dict(),
        "panels": ADMIN_PANELS,
        "overview": overview,
    })
