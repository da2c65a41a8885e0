"""
Admin applicants panel.
"""
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response

from suryaghar.api.deps import get_client, get_storage, require_confirmation
from suryaghar.core.backend import DataClient, decode, decode_all
from suryaghar.core.response import DictResponse, MessageResponse, success_response
from suryaghar.core.storage import ObjectStorage
from suryaghar.models import (
    ApplicantBulkStatusUpdate,
    ApplicantFilter,
    ApplicantResponse,
    ApplicantStatusUpdate,
)
from suryaghar.services import applicants as applicant_service
from suryaghar.services.export import applicants_csv, export_filename

router = APIRouter()


def applicant_filter(
    search: Optional[str] = Query(None, description="Name, email or mobile"),
    state: Optional[str] = Query(None),
    position: Optional[str] = Query(None),
    status: Optional[str] = Query(None),
    qualification: Optional[str] = Query(None),
    start_date: Optional[date] = Query(None, description="Applied on or after"),
    end_date: Optional[date] = Query(None, description="Applied on or before"),
) -> ApplicantFilter:
    return ApplicantFilter(
        search=search, state=state, position=position, status=status,
        qualification=qualification, start_date=start_date, end_date=end_date,
    )


@router.get("", summary="List applicants", response_model=DictResponse)
async def list_applicants(
    f: ApplicantFilter = Depends(applicant_filter),
    client: DataClient = Depends(get_client),
):
    applicants = await applicant_service.list_applicants(client, f)
    return success_response(data={
        "items": decode_all(ApplicantResponse, applicants),
        "total": len(applicants),
    })


@router.get("/options", summary="Applicant filter options", response_model=DictResponse)
async def get_options(client: DataClient = Depends(get_client)):
    return success_response(data=await applicant_service.filter_options(client))


@router.get("/export", summary="Export applicants as CSV")
async def export_applicants(
    f: ApplicantFilter = Depends(applicant_filter),
    client: DataClient = Depends(get_client),
):
    """Exports exactly the filtered list."""
    applicants = await applicant_service.list_applicants(client, f)
    filename = export_filename("applicants")
    return Response(
        content=applicants_csv(applicants),
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.post("/bulk-status", summary="Set status on several applicants", response_model=DictResponse)
async def bulk_status(data: ApplicantBulkStatusUpdate, client: DataClient = Depends(get_client)):
    updated = await applicant_service.bulk_set_status(client, data.ids, data.status)
    return success_response(data={"updated": updated}, message=f"{updated} applicant(s) updated")


@router.patch("/{applicant_id}/status", summary="Set applicant status", response_model=DictResponse)
async def set_status(
    applicant_id: str,
    data: ApplicantStatusUpdate,
    client: DataClient = Depends(get_client),
):
    applicant = await applicant_service.set_status(client, applicant_id, data.status)
    return success_response(
        data=decode(ApplicantResponse, applicant).model_dump(mode="json"),
        message=f"Status updated to {data.status}",
    )


@router.delete(
    "/{applicant_id}",
    summary="Delete an applicant",
    response_model=MessageResponse,
    dependencies=[Depends(require_confirmation)],
)
async def delete_applicant(
    applicant_id: str,
    client: DataClient = Depends(get_client),
    storage: ObjectStorage = Depends(get_storage),
):
    await applicant_service.delete_applicant(client, storage, applicant_id)
    return success_response(message="Applicant deleted")
