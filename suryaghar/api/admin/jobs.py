"""
Admin job moderation and job applications.
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response

from suryaghar.api.deps import get_client, get_storage, require_admin, require_confirmation
from suryaghar.core.backend import DataClient, decode, decode_all
from suryaghar.core.exceptions import BadRequestException
from suryaghar.core.response import DictResponse, MessageResponse, success_response
from suryaghar.core.storage import ObjectStorage
from suryaghar.models import (
    JobApplicationBulkUpdate,
    JobApplicationResponse,
    JobApplicationUpdate,
    JobBulkAction,
    JobResponse,
    JobStatusUpdate,
    JobUpdate,
)
from suryaghar.models.constants import JobApplicationStatus, JobStatus, values
from suryaghar.services import jobs as job_service
from suryaghar.services.auth import Identity
from suryaghar.services.export import export_filename, job_applications_csv

router = APIRouter()
applications_router = APIRouter()


# ==================== Jobs ====================

@router.get("", summary="List jobs for moderation", response_model=DictResponse)
async def list_jobs(
    status: Optional[str] = Query(None, description="pending / approved / rejected / closed"),
    category: Optional[str] = Query(None),
    search: Optional[str] = Query(None, description="Title or organization"),
    client: DataClient = Depends(get_client),
):
    jobs = await job_service.list_for_moderation(client, status, category, search)
    return success_response(data={
        "items": decode_all(JobResponse, jobs),
        "total": len(jobs),
        "statuses": values(JobStatus),
    })


@router.post("/bulk/{action}", summary="Approve or reject several jobs", response_model=DictResponse)
async def bulk_action(
    action: str,
    data: JobBulkAction,
    client: DataClient = Depends(get_client),
    admin: Identity = Depends(require_admin),
):
    status = {"approve": JobStatus.APPROVED.value, "reject": JobStatus.REJECTED.value}.get(action)
    if status is None:
        raise BadRequestException("Bulk action must be 'approve' or 'reject'")
    updated = await job_service.bulk_set_status(client, data.ids, status, admin_id=admin.id)
    return success_response(data={"updated": updated}, message=f"{updated} job(s) {status}")


@router.patch("/{job_id}/status", summary="Approve, reject or close a job", response_model=DictResponse)
async def set_status(
    job_id: str,
    data: JobStatusUpdate,
    client: DataClient = Depends(get_client),
    admin: Identity = Depends(require_admin),
):
    job = await job_service.set_job_status(client, job_id, data.status, admin_id=admin.id)
    return success_response(
        data=decode(JobResponse, job).model_dump(mode="json"),
        message=f"Job {data.status}",
    )


@router.post("/{job_id}/feature", summary="Toggle featured", response_model=DictResponse)
async def toggle_featured(
    job_id: str,
    client: DataClient = Depends(get_client),
    admin: Identity = Depends(require_admin),
):
    job = await job_service.toggle_featured(client, job_id, admin_id=admin.id)
    return success_response(data=decode(JobResponse, job).model_dump(mode="json"))


@router.patch("/{job_id}", summary="Edit a job", response_model=DictResponse)
async def update_job(job_id: str, data: JobUpdate, client: DataClient = Depends(get_client)):
    job = await job_service.update_job(client, job_id, data.model_dump(exclude_unset=True))
    return success_response(data=decode(JobResponse, job).model_dump(mode="json"), message="Job updated")


@router.delete(
    "/{job_id}",
    summary="Delete a job and its applications",
    response_model=MessageResponse,
    dependencies=[Depends(require_confirmation)],
)
async def delete_job(
    job_id: str,
    client: DataClient = Depends(get_client),
    storage: ObjectStorage = Depends(get_storage),
    admin: Identity = Depends(require_admin),
):
    await job_service.delete_job(client, storage, job_id, admin_id=admin.id)
    return success_response(message="Job deleted")


# ==================== Job applications ====================

def _with_title(pair: tuple) -> dict:
    application, title = pair
    data = decode(JobApplicationResponse, application).model_dump(mode="json")
    data["job_title"] = title
    return data


@applications_router.get("", summary="List job applications", response_model=DictResponse)
async def list_applications(
    job_id: Optional[str] = Query(None),
    status: Optional[str] = Query(None),
    client: DataClient = Depends(get_client),
):
    pairs = await job_service.list_job_applications(client, job_id=job_id, status=status)
    return success_response(data={
        "items": [_with_title(p) for p in pairs],
        "total": len(pairs),
        "statuses": values(JobApplicationStatus),
    })


@applications_router.get("/export", summary="Export job applications as CSV")
async def export_applications(
    job_id: Optional[str] = Query(None, description="Only this job's applications"),
    status: Optional[str] = Query(None),
    client: DataClient = Depends(get_client),
):
    pairs = await job_service.list_job_applications(client, job_id=job_id, status=status)
    filename = export_filename("job_applications")
    return Response(
        content=job_applications_csv(app for app, _ in pairs),
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@applications_router.post("/bulk-status", summary="Set status on several applications", response_model=DictResponse)
async def bulk_status(data: JobApplicationBulkUpdate, client: DataClient = Depends(get_client)):
    updated = await job_service.bulk_update_job_applications(client, data.ids, data.status)
    return success_response(data={"updated": updated}, message=f"{updated} application(s) updated")


@applications_router.patch("/{application_id}", summary="Update status, rating or notes", response_model=DictResponse)
async def update_application(
    application_id: str,
    data: JobApplicationUpdate,
    client: DataClient = Depends(get_client),
):
    application = await job_service.update_job_application(
        client, application_id, data.model_dump(exclude_unset=True)
    )
    return success_response(data=decode(JobApplicationResponse, application).model_dump(mode="json"))


@applications_router.delete(
    "/{application_id}",
    summary="Delete a job application",
    response_model=MessageResponse,
    dependencies=[Depends(require_confirmation)],
)
async def delete_application(
    application_id: str,
    client: DataClient = Depends(get_client),
    storage: ObjectStorage = Depends(get_storage),
):
    await job_service.delete_job_application(client, storage, application_id)
    return success_response(message="Application deleted")
