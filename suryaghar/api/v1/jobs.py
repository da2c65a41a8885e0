"""
Public job portal API.
"""
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, Query, Request, UploadFile

from suryaghar.api.deps import form_values, get_app_settings, get_client, get_storage
from suryaghar.core.backend import DataClient, decode, decode_all
from suryaghar.core.config import Settings
from suryaghar.core.response import DictResponse, ListResponse, success_response
from suryaghar.core.storage import ObjectStorage
from suryaghar.models import JobApplicationResponse, JobCreate, JobResponse, SaveJobRequest
from suryaghar.models.constants import ALL_CATEGORIES, ALL_TYPES, JobCategory, JobType, values
from suryaghar.services import jobs as job_service
from suryaghar.services.job_search import JobListing, JobQuery, SortOrder, load_approved_jobs
from suryaghar.services.uploads import read_upload

router = APIRouter()


@router.get("", summary="Search approved jobs", response_model=DictResponse)
async def list_jobs(
    keyword: str = Query("", description="Matches title, organization or description"),
    location: str = Query("", description="Location substring"),
    category: str = Query(ALL_CATEGORIES, description="Category, or 'All Jobs'"),
    job_type: str = Query(ALL_TYPES, description="Job type, or 'All'"),
    sort: SortOrder = Query(SortOrder.RECENT, description="recent / title / location"),
    page: int = Query(1, description="Page number; clamped to the available range"),
    client: DataClient = Depends(get_client),
    settings: Settings = Depends(get_app_settings),
):
    """
    Approved jobs are fetched once and filtered in memory. The page is
    clamped to ``[1, pages]``; ``has_prev``/``has_next`` mark the bounds.
    """
    jobs = await load_approved_jobs(client, settings.job_fetch_limit)
    listing = JobListing(jobs, page_size=settings.job_page_size)
    listing.set_query(JobQuery(keyword, location, category, job_type, sort))
    listing.go_to(page)
    current = listing.current()
    return success_response(data={
        "items": decode_all(JobResponse, current.items),
        **current.meta(),
        "filters": {
            "keyword": listing.query.keyword,
            "location": listing.query.location,
            "category": listing.query.category,
            "job_type": listing.query.job_type,
            "sort": listing.query.sort.value,
        },
    })


@router.get("/options", summary="Job filter options", response_model=DictResponse)
async def get_options():
    return success_response(data={
        "categories": [ALL_CATEGORIES, *values(JobCategory)],
        "job_types": [ALL_TYPES, *values(JobType)],
        "sorts": values(SortOrder),
    })


@router.get("/featured", summary="Featured jobs", response_model=ListResponse)
async def get_featured(client: DataClient = Depends(get_client)):
    return success_response(data=decode_all(JobResponse, await job_service.featured_jobs(client)))


@router.get("/trending", summary="Most viewed jobs", response_model=ListResponse)
async def get_trending(client: DataClient = Depends(get_client)):
    return success_response(data=decode_all(JobResponse, await job_service.trending_jobs(client)))


@router.get("/saved", summary="Jobs saved by an email", response_model=ListResponse)
async def get_saved(
    email: str = Query(..., description="Email used when saving"),
    client: DataClient = Depends(get_client),
):
    return success_response(data=decode_all(JobResponse, await job_service.saved_jobs(client, email.lower())))


@router.post("", summary="Post a job", response_model=DictResponse, status_code=201)
async def post_job(data: JobCreate, client: DataClient = Depends(get_client)):
    """New postings wait for admin approval before they are listed."""
    job = await job_service.post_job(client, data)
    return success_response(
        data=decode(JobResponse, job).model_dump(mode="json"),
        message="Job posted successfully! It will be visible after admin approval.",
        code=201,
    )


@router.get("/{job_id}", summary="Job detail", response_model=DictResponse)
async def get_job(job_id: str, request: Request, client: DataClient = Depends(get_client)):
    job = await job_service.get_approved_job(client, job_id)
    job = await job_service.record_view(
        client, job,
        user_agent=request.headers.get("user-agent"),
        referrer=request.headers.get("referer"),
    )
    return success_response(data=decode(JobResponse, job).model_dump(mode="json"))


@router.post("/{job_id}/apply", summary="Apply to a job", response_model=DictResponse, status_code=201)
async def apply(
    job_id: str,
    full_name: Optional[str] = Form(None),
    mobile: Optional[str] = Form(None),
    whatsapp: Optional[str] = Form(None),
    email: Optional[str] = Form(None),
    city: Optional[str] = Form(None),
    message: Optional[str] = Form(None),
    resume: Optional[UploadFile] = File(None),
    client: DataClient = Depends(get_client),
    storage: ObjectStorage = Depends(get_storage),
    settings: Settings = Depends(get_app_settings),
):
    form = form_values(
        full_name=full_name, mobile=mobile, whatsapp=whatsapp, email=email, city=city, message=message,
    )
    application = await job_service.apply_to_job(
        client, storage, job_id, form, await read_upload(resume), max_bytes=settings.max_upload_bytes
    )
    return success_response(
        data=decode(JobApplicationResponse, application).model_dump(mode="json"),
        message="Application submitted successfully!",
        code=201,
    )


@router.post("/{job_id}/save", summary="Save a job", response_model=DictResponse, status_code=201)
async def save(job_id: str, data: SaveJobRequest, client: DataClient = Depends(get_client)):
    await job_service.save_job(client, job_id, data.email.lower())
    return success_response(message="Job saved", code=201)


@router.delete("/{job_id}/save", summary="Remove a saved job", response_model=DictResponse)
async def unsave(
    job_id: str,
    email: str = Query(..., description="Email used when saving"),
    client: DataClient = Depends(get_client),
):
    removed = await job_service.unsave_job(client, job_id, email.lower())
    return success_response(data={"removed": removed}, message="Job removed from saved list")
