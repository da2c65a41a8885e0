"""
Public recruitment application API.
"""
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile

from suryaghar.api.deps import form_values, get_app_settings, get_client, get_storage
from suryaghar.core.backend import DataClient, decode
from suryaghar.core.config import Settings
from suryaghar.core.response import DictResponse, success_response
from suryaghar.core.storage import ObjectStorage
from suryaghar.models import ApplicantResponse
from suryaghar.models.constants import Position, State, values
from suryaghar.services import applicants as applicant_service
from suryaghar.services.uploads import read_upload

router = APIRouter()


@router.get("/options", summary="Application form options", response_model=DictResponse)
async def get_options():
    return success_response(data={"states": values(State), "positions": values(Position)})


@router.post("", summary="Submit an application", response_model=DictResponse, status_code=201)
async def submit_application(
    full_name: Optional[str] = Form(None),
    state: Optional[str] = Form(None),
    district: Optional[str] = Form(None),
    position: Optional[str] = Form(None),
    qualification: Optional[str] = Form(None),
    experience: Optional[str] = Form(None),
    mobile: Optional[str] = Form(None),
    email: Optional[str] = Form(None),
    resume: Optional[UploadFile] = File(None),
    aadhaar: Optional[UploadFile] = File(None),
    photo: Optional[UploadFile] = File(None),
    client: DataClient = Depends(get_client),
    storage: ObjectStorage = Depends(get_storage),
    settings: Settings = Depends(get_app_settings),
):
    """
    Multipart form with three attachments (resume, Aadhaar card, photo).
    The whole form is validated first; files are stored only after that.
    """
    form = form_values(
        full_name=full_name, state=state, district=district, position=position,
        qualification=qualification, experience=experience, mobile=mobile, email=email,
    )
    files = {
        "resume": await read_upload(resume),
        "aadhaar": await read_upload(aadhaar),
        "photo": await read_upload(photo),
    }
    applicant = await applicant_service.submit_application(
        client, storage, form, files, max_bytes=settings.max_upload_bytes
    )
    return success_response(
        data=decode(ApplicantResponse, applicant).model_dump(mode="json"),
        message="Application submitted successfully! We will contact you soon.",
        code=201,
    )
