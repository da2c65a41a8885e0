"""
Recruitment applications: public submission and admin review.
"""
from datetime import datetime, time, timedelta
from typing import Dict, List, Mapping, Optional

from loguru import logger
from pydantic import ValidationError
from sqlalchemy import func, or_

from suryaghar.core.backend import DataClient
from suryaghar.core.exceptions import NotFoundException
from suryaghar.core.storage import ObjectStorage
from suryaghar.models import Applicant, ApplicantCreate, ApplicantFilter
from suryaghar.models.constants import ApplicantStatus, Position, State, values
from suryaghar.services.uploads import FilePayload, FileRule, UploadBatch, check_files, remove_stored
from suryaghar.services.validation import error_map

BUCKET = "applicant-documents"


def attachment_rules(max_bytes: int) -> Dict[str, FileRule]:
    return {
        "resume": FileRule(max_bytes=max_bytes, label="Resume"),
        "aadhaar": FileRule(max_bytes=max_bytes, label="Aadhaar card"),
        "photo": FileRule(max_bytes=max_bytes, image_only=True, label="Photo"),
    }


async def submit_application(
    client: DataClient,
    storage: ObjectStorage,
    form: Mapping[str, object],
    files: Dict[str, Optional[FilePayload]],
    *,
    max_bytes: int,
) -> Applicant:
    """
    Validate the whole form, store the three attachments, then write the
    applicant as Pending. Nothing is uploaded unless every field passes.
    """
    errors: Dict[str, str] = {}
    data: Optional[ApplicantCreate] = None
    try:
        data = ApplicantCreate.model_validate(dict(form))
    except ValidationError as e:
        errors = error_map(e)
    check_files(files, attachment_rules(max_bytes), errors)

    async with UploadBatch(storage) as batch:
        resume_url = await batch.put(BUCKET, "resumes", files["resume"])
        aadhaar_url = await batch.put(BUCKET, "aadhaar", files["aadhaar"])
        photo_url = await batch.put(BUCKET, "photos", files["photo"])

        applicant = await client.insert(Applicant, {
            **data.model_dump(),
            "resume_url": resume_url,
            "aadhaar_url": aadhaar_url,
            "photo_url": photo_url,
            "status": ApplicantStatus.PENDING.value,
        })
        await client.commit()

    logger.info(f"New application: {applicant.full_name} ({applicant.position}, {applicant.state})")
    return applicant


def build_filters(f: ApplicantFilter) -> list:
    where = []
    if f.search:
        term = f"%{f.search.lower()}%"
        where.append(or_(
            func.lower(Applicant.full_name).like(term),
            func.lower(Applicant.email).like(term),
            Applicant.mobile.like(term),
        ))
    if f.state:
        where.append(Applicant.state == f.state)
    if f.position:
        where.append(Applicant.position == f.position)
    if f.status:
        where.append(Applicant.status == f.status)
    if f.qualification:
        where.append(Applicant.qualification == f.qualification)
    if f.start_date:
        where.append(Applicant.created_at >= datetime.combine(f.start_date, time.min))
    if f.end_date:
        where.append(Applicant.created_at < datetime.combine(f.end_date + timedelta(days=1), time.min))
    return where


async def list_applicants(client: DataClient, f: ApplicantFilter) -> List[Applicant]:
    return await client.select(Applicant, *build_filters(f), order_by=Applicant.created_at.desc())


async def filter_options(client: DataClient) -> dict:
    applicants = await client.select(Applicant)
    return {
        "states": values(State),
        "positions": values(Position),
        "statuses": values(ApplicantStatus),
        "qualifications": sorted({a.qualification for a in applicants if a.qualification}),
    }


async def set_status(client: DataClient, id: str, status: str) -> Applicant:
    applicant = await client.update(Applicant, id, {"status": status})
    if applicant is None:
        raise NotFoundException(f"Applicant not found: {id}")
    await client.commit()
    return applicant


async def bulk_set_status(client: DataClient, ids: List[str], status: str) -> int:
    updated = await client.update_in(Applicant, ids, {"status": status})
    await client.commit()
    logger.info(f"Bulk status update: {updated} applicant(s) -> {status}")
    return updated


async def delete_applicant(client: DataClient, storage: ObjectStorage, id: str) -> None:
    applicant = await client.get(Applicant, id)
    if applicant is None:
        raise NotFoundException(f"Applicant not found: {id}")
    urls = [applicant.resume_url, applicant.aadhaar_url, applicant.photo_url]
    await client.delete(Applicant, id)
    await client.commit()
    await remove_stored(storage, BUCKET, urls)
