"""
Job portal: postings, applications, views, bookmarks and moderation.
"""
from typing import Dict, List, Mapping, Optional

from loguru import logger
from pydantic import ValidationError
from sqlalchemy import func, or_

from suryaghar.core.backend import DataClient
from suryaghar.core.exceptions import ConflictException, NotFoundException
from suryaghar.core.storage import ObjectStorage
from suryaghar.models import (
    Job,
    JobApplication,
    JobApplicationCreate,
    JobCreate,
    JobSave,
    JobView,
)
from suryaghar.models.base import utcnow
from suryaghar.models.constants import AuditAction, JobApplicationStatus, JobStatus
from suryaghar.services.audit import log_audit
from suryaghar.services.uploads import FilePayload, FileRule, UploadBatch, check_files, remove_stored
from suryaghar.services.validation import error_map

RESUME_BUCKET = "applicant-documents"
HIGHLIGHT_LIMIT = 6

APPROVED = Job.status == JobStatus.APPROVED.value


# ==================== Public ====================

async def post_job(client: DataClient, data: JobCreate) -> Job:
    job = await client.insert(Job, {**data.model_dump(), "status": JobStatus.PENDING.value})
    await client.commit()
    logger.info(f"Job submitted for review: {job.title} ({job.organization_name})")
    return job


async def get_approved_job(client: DataClient, id: str) -> Job:
    job = await client.get(Job, id)
    if job is None or job.status != JobStatus.APPROVED.value:
        raise NotFoundException("Job not found")
    return job


async def record_view(
    client: DataClient, job: Job, *, user_agent: Optional[str] = None, referrer: Optional[str] = None
) -> Job:
    await client.insert(JobView, {"job_id": job.id, "user_agent": user_agent, "referrer": referrer})
    job = await client.update(Job, job.id, {"views_count": (job.views_count or 0) + 1})
    await client.commit()
    return job


async def featured_jobs(client: DataClient, limit: int = HIGHLIGHT_LIMIT) -> List[Job]:
    return await client.select(
        Job, APPROVED, Job.is_featured == True,  # noqa: E712
        order_by=Job.created_at.desc(), limit=limit,
    )


async def trending_jobs(client: DataClient, limit: int = HIGHLIGHT_LIMIT) -> List[Job]:
    return await client.select(
        Job, APPROVED, order_by=(Job.views_count.desc(), Job.created_at.desc()), limit=limit,
    )


def resume_rule(max_bytes: int) -> Dict[str, FileRule]:
    return {"resume": FileRule(max_bytes=max_bytes, required=False, extensions=("pdf",), label="Resume")}


async def apply_to_job(
    client: DataClient,
    storage: ObjectStorage,
    job_id: str,
    form: Mapping[str, object],
    resume: Optional[FilePayload],
    *,
    max_bytes: int,
) -> JobApplication:
    errors: Dict[str, str] = {}
    data: Optional[JobApplicationCreate] = None
    try:
        data = JobApplicationCreate.model_validate(dict(form))
    except ValidationError as e:
        errors = error_map(e)
    check_files({"resume": resume}, resume_rule(max_bytes), errors)

    job = await get_approved_job(client, job_id)

    async with UploadBatch(storage) as batch:
        resume_url = await batch.put(RESUME_BUCKET, "job-resumes", resume) if resume else None
        application = await client.insert(JobApplication, {
            **data.model_dump(),
            "job_id": job.id,
            "resume_url": resume_url,
            "status": JobApplicationStatus.APPLIED.value,
        })
        await client.commit()

    logger.info(f"Application for job {job.id} from {application.full_name}")
    return application


async def save_job(client: DataClient, job_id: str, email: str) -> JobSave:
    await get_approved_job(client, job_id)
    existing = await client.select(JobSave, JobSave.job_id == job_id, JobSave.user_email == email, limit=1)
    if existing:
        raise ConflictException("Job already saved")
    saved = await client.insert(JobSave, {"job_id": job_id, "user_email": email})
    await client.commit()
    return saved


async def unsave_job(client: DataClient, job_id: str, email: str) -> bool:
    removed = await client.delete_where(JobSave, JobSave.job_id == job_id, JobSave.user_email == email)
    await client.commit()
    return removed > 0


async def saved_jobs(client: DataClient, email: str) -> List[Job]:
    saves = await client.select(JobSave, JobSave.user_email == email, order_by=JobSave.created_at.desc())
    jobs = []
    for save in saves:
        job = await client.get(Job, save.job_id)
        if job is not None and job.status == JobStatus.APPROVED.value:
            jobs.append(job)
    return jobs


# ==================== Moderation ====================

def moderation_filters(
    status: Optional[str] = None, category: Optional[str] = None, search: Optional[str] = None
) -> list:
    where = []
    if status:
        where.append(Job.status == status)
    if category:
        where.append(Job.category == category)
    if search:
        term = f"%{search.lower()}%"
        where.append(or_(
            func.lower(Job.title).like(term),
            func.lower(Job.organization_name).like(term),
        ))
    return where


async def list_for_moderation(
    client: DataClient, status: Optional[str] = None, category: Optional[str] = None, search: Optional[str] = None
) -> List[Job]:
    return await client.select(
        Job, *moderation_filters(status, category, search), order_by=Job.created_at.desc()
    )


async def _get(client: DataClient, id: str) -> Job:
    job = await client.get(Job, id)
    if job is None:
        raise NotFoundException(f"Job not found: {id}")
    return job


async def set_job_status(client: DataClient, id: str, status: str, *, admin_id: Optional[str]) -> Job:
    job = await _get(client, id)
    previous = job.status
    values = {"status": status}
    if status == JobStatus.APPROVED.value:
        values["published_at"] = utcnow()
    job = await client.update(Job, id, values)

    action = {
        JobStatus.APPROVED.value: AuditAction.APPROVE_JOB,
        JobStatus.REJECTED.value: AuditAction.REJECT_JOB,
        JobStatus.CLOSED.value: AuditAction.CLOSE_JOB,
    }.get(status)
    if action:
        await log_audit(
            client, admin_id=admin_id, action=action, entity_type="job", entity_id=id,
            changes={"status": {"from": previous, "to": status}},
        )
    await client.commit()
    return job


async def toggle_featured(client: DataClient, id: str, *, admin_id: Optional[str]) -> Job:
    job = await _get(client, id)
    featured = not job.is_featured
    job = await client.update(Job, id, {"is_featured": featured})
    await log_audit(
        client, admin_id=admin_id,
        action=AuditAction.FEATURE_JOB if featured else AuditAction.UNFEATURE_JOB,
        entity_type="job", entity_id=id, changes={"is_featured": featured},
    )
    await client.commit()
    return job


async def bulk_set_status(client: DataClient, ids: List[str], status: str, *, admin_id: Optional[str]) -> int:
    values = {"status": status}
    if status == JobStatus.APPROVED.value:
        values["published_at"] = utcnow()
    updated = await client.update_in(Job, ids, values)
    action = AuditAction.BULK_APPROVE_JOB if status == JobStatus.APPROVED.value else AuditAction.BULK_REJECT_JOB
    await log_audit(
        client, admin_id=admin_id, action=action, entity_type="job", changes={"ids": list(ids)},
    )
    await client.commit()
    return updated


async def update_job(client: DataClient, id: str, values: dict) -> Job:
    await _get(client, id)
    job = await client.update(Job, id, values)
    await client.commit()
    return job


async def delete_job(client: DataClient, storage: ObjectStorage, id: str, *, admin_id: Optional[str]) -> None:
    """Delete a job together with its applications, views and saves."""
    job = await _get(client, id)
    applications = await client.select(JobApplication, JobApplication.job_id == id)
    resume_urls = [a.resume_url for a in applications]

    await client.delete_where(JobApplication, JobApplication.job_id == id)
    await client.delete_where(JobView, JobView.job_id == id)
    await client.delete_where(JobSave, JobSave.job_id == id)
    await client.delete(Job, id)
    await log_audit(
        client, admin_id=admin_id, action=AuditAction.DELETE_JOB, entity_type="job", entity_id=id,
        changes={"title": job.title, "applications_removed": len(applications)},
    )
    await client.commit()
    await remove_stored(storage, RESUME_BUCKET, resume_urls)


# ==================== Job applications (admin) ====================

async def list_job_applications(
    client: DataClient, *, job_id: Optional[str] = None, status: Optional[str] = None
) -> List[tuple]:
    """(application, job title) pairs, newest first."""
    where = []
    if job_id:
        where.append(JobApplication.job_id == job_id)
    if status:
        where.append(JobApplication.status == status)
    applications = await client.select(JobApplication, *where, order_by=JobApplication.created_at.desc())

    titles: Dict[str, Optional[str]] = {}
    for app in applications:
        if app.job_id not in titles:
            job = await client.get(Job, app.job_id)
            titles[app.job_id] = job.title if job else None
    return [(app, titles[app.job_id]) for app in applications]


async def update_job_application(client: DataClient, id: str, values: dict) -> JobApplication:
    application = await client.update(JobApplication, id, values)
    if application is None:
        raise NotFoundException(f"Application not found: {id}")
    await client.commit()
    return application


async def bulk_update_job_applications(client: DataClient, ids: List[str], status: str) -> int:
    updated = await client.update_in(JobApplication, ids, {"status": status})
    await client.commit()
    return updated


async def delete_job_application(client: DataClient, storage: ObjectStorage, id: str) -> None:
    application = await client.get(JobApplication, id)
    if application is None:
        raise NotFoundException(f"Application not found: {id}")
    await client.delete(JobApplication, id)
    await client.commit()
    await remove_stored(storage, RESUME_BUCKET, [application.resume_url])
