"""
Admin curation panels: legal documents, gallery, testimonials, state
project managers and videos.

Lists here include inactive rows; the public sections do not.
"""
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile

from suryaghar.api.deps import (
    form_values,
    get_app_settings,
    get_client,
    get_storage,
    require_admin,
    require_confirmation,
)
from suryaghar.content import whatsapp_link
from suryaghar.core.backend import DataClient, decode, decode_all
from suryaghar.core.config import Settings
from suryaghar.core.response import DictResponse, MessageResponse, success_response
from suryaghar.core.storage import ObjectStorage
from suryaghar.models import (
    GalleryImage,
    GalleryImageResponse,
    GalleryImageUpdate,
    LegalDocument,
    LegalDocumentResponse,
    StateManager,
    StateManagerResponse,
    StateManagerUpdate,
    Testimonial,
    TestimonialCreate,
    TestimonialResponse,
    TestimonialUpdate,
    Video,
    VideoCreate,
    VideoResponse,
    VideoUpdate,
)
from suryaghar.models.constants import GalleryCategory, LegalDocumentType, State, values
from suryaghar.services import curation
from suryaghar.services.auth import Identity
from suryaghar.services.ordering import move, ordered, parse_direction
from suryaghar.services.sections import fetch_videos
from suryaghar.services.uploads import read_upload
from suryaghar.services.validation import validate_form

legal_router = APIRouter()
gallery_router = APIRouter()
testimonials_router = APIRouter()
managers_router = APIRouter()
videos_router = APIRouter()

confirmed = [Depends(require_confirmation)]


def _dump(schema, row) -> dict:
    return decode(schema, row).model_dump(mode="json")


# ==================== Legal documents ====================

@legal_router.get("", summary="Legal documents", response_model=DictResponse)
async def list_legal_documents(client: DataClient = Depends(get_client)):
    rows = await client.select(LegalDocument, order_by=LegalDocument.uploaded_at.desc())
    uploaded = {row.name for row in rows}
    return success_response(data={
        "items": decode_all(LegalDocumentResponse, rows),
        "types": values(LegalDocumentType),
        "missing": [t for t in values(LegalDocumentType) if t not in uploaded],
    })


@legal_router.post("", summary="Upload or replace a legal document", response_model=DictResponse, status_code=201)
async def upload_legal_document(
    name: Optional[str] = Form(None),
    file: Optional[UploadFile] = File(None),
    client: DataClient = Depends(get_client),
    storage: ObjectStorage = Depends(get_storage),
    settings: Settings = Depends(get_app_settings),
    admin: Identity = Depends(require_admin),
):
    """One file per document type; uploading again overwrites it."""
    document = await curation.upload_legal_document(
        client, storage, name or "", await read_upload(file),
        uploaded_by=admin.email, max_bytes=settings.max_legal_doc_bytes,
    )
    return success_response(
        data=_dump(LegalDocumentResponse, document),
        message=f"{document.name} uploaded successfully",
        code=201,
    )


@legal_router.delete("/{document_id}", summary="Delete a legal document",
                     response_model=MessageResponse, dependencies=confirmed)
async def delete_legal_document(
    document_id: str,
    client: DataClient = Depends(get_client),
    storage: ObjectStorage = Depends(get_storage),
):
    await curation.delete_legal_document(client, storage, document_id)
    return success_response(message="Document deleted")


# ==================== Gallery ====================

@gallery_router.get("", summary="Gallery images", response_model=DictResponse)
async def list_gallery(client: DataClient = Depends(get_client)):
    rows = await client.select(GalleryImage, order_by=GalleryImage.uploaded_at.desc())
    return success_response(data={
        "items": decode_all(GalleryImageResponse, rows),
        "categories": values(GalleryCategory),
    })


@gallery_router.post("", summary="Upload a gallery image", response_model=DictResponse, status_code=201)
async def upload_gallery_image(
    title: Optional[str] = Form(None),
    category: Optional[str] = Form(None),
    image: Optional[UploadFile] = File(None),
    client: DataClient = Depends(get_client),
    storage: ObjectStorage = Depends(get_storage),
    settings: Settings = Depends(get_app_settings),
    admin: Identity = Depends(require_admin),
):
    row = await curation.upload_gallery_image(
        client, storage, form_values(title=title, category=category), await read_upload(image),
        uploaded_by=admin.email, max_bytes=settings.max_upload_bytes,
    )
    return success_response(data=_dump(GalleryImageResponse, row), message="Image uploaded", code=201)


@gallery_router.patch("/{image_id}", summary="Edit a gallery image", response_model=DictResponse)
async def update_gallery_image(
    image_id: str,
    data: GalleryImageUpdate,
    client: DataClient = Depends(get_client),
):
    row = await curation.update_fields(
        client, GalleryImage, image_id, data.model_dump(exclude_unset=True), "Image"
    )
    return success_response(data=_dump(GalleryImageResponse, row))


@gallery_router.post("/{image_id}/toggle", summary="Activate or deactivate", response_model=DictResponse)
async def toggle_gallery_image(image_id: str, client: DataClient = Depends(get_client)):
    row = await curation.toggle_active(client, GalleryImage, image_id, "Image")
    return success_response(data=_dump(GalleryImageResponse, row))


@gallery_router.delete("/{image_id}", summary="Delete a gallery image",
                       response_model=MessageResponse, dependencies=confirmed)
async def delete_gallery_image(
    image_id: str,
    client: DataClient = Depends(get_client),
    storage: ObjectStorage = Depends(get_storage),
):
    await curation.delete_gallery_image(client, storage, image_id)
    return success_response(message="Image deleted")


# ==================== Testimonials ====================

@testimonials_router.get("", summary="Testimonials in display order", response_model=DictResponse)
async def list_testimonials(client: DataClient = Depends(get_client)):
    rows = await ordered(client, Testimonial)
    return success_response(data={"items": decode_all(TestimonialResponse, rows)})


@testimonials_router.post("", summary="Add a testimonial", response_model=DictResponse, status_code=201)
async def create_testimonial(data: TestimonialCreate, client: DataClient = Depends(get_client)):
    row = await curation.create_testimonial(client, data)
    return success_response(data=_dump(TestimonialResponse, row), message="Testimonial added", code=201)


@testimonials_router.patch("/{testimonial_id}", summary="Edit a testimonial", response_model=DictResponse)
async def update_testimonial(
    testimonial_id: str,
    data: TestimonialUpdate,
    client: DataClient = Depends(get_client),
):
    row = await curation.update_fields(
        client, Testimonial, testimonial_id, data.model_dump(exclude_unset=True), "Testimonial"
    )
    return success_response(data=_dump(TestimonialResponse, row))


@testimonials_router.post("/{testimonial_id}/toggle", summary="Activate or deactivate", response_model=DictResponse)
async def toggle_testimonial(testimonial_id: str, client: DataClient = Depends(get_client)):
    row = await curation.toggle_active(client, Testimonial, testimonial_id, "Testimonial")
    return success_response(data=_dump(TestimonialResponse, row))


@testimonials_router.post("/{testimonial_id}/move/{direction}", summary="Move up or down", response_model=DictResponse)
async def move_testimonial(testimonial_id: str, direction: str, client: DataClient = Depends(get_client)):
    moved = await move(client, Testimonial, testimonial_id, parse_direction(direction))
    return success_response(data={"moved": moved})


@testimonials_router.delete("/{testimonial_id}", summary="Delete a testimonial",
                            response_model=MessageResponse, dependencies=confirmed)
async def delete_testimonial(testimonial_id: str, client: DataClient = Depends(get_client)):
    await curation.delete_row(client, Testimonial, testimonial_id, "Testimonial")
    return success_response(message="Testimonial deleted")


# ==================== State managers ====================

def _manager(row) -> dict:
    data = _dump(StateManagerResponse, row)
    data["whatsapp_link"] = whatsapp_link(row.mobile)
    return data


@managers_router.get("", summary="State project managers", response_model=DictResponse)
async def list_managers(client: DataClient = Depends(get_client)):
    rows = await client.select(StateManager, order_by=StateManager.state.asc())
    assigned = {row.state for row in rows}
    return success_response(data={
        "items": [_manager(row) for row in rows],
        "available_states": [s for s in values(State) if s not in assigned],
    })


@managers_router.post("", summary="Add a state project manager", response_model=DictResponse, status_code=201)
async def create_manager(
    state: Optional[str] = Form(None),
    name: Optional[str] = Form(None),
    mobile: Optional[str] = Form(None),
    email: Optional[str] = Form(None),
    is_active: bool = Form(True),
    photo: Optional[UploadFile] = File(None),
    client: DataClient = Depends(get_client),
    storage: ObjectStorage = Depends(get_storage),
    settings: Settings = Depends(get_app_settings),
    admin: Identity = Depends(require_admin),
):
    """One manager per state; a second one for the same state is a 409."""
    form = {**form_values(state=state, name=name, mobile=mobile, email=email), "is_active": is_active}
    row = await curation.create_state_manager(
        client, storage, form, await read_upload(photo),
        uploaded_by=admin.email, max_bytes=settings.max_upload_bytes,
    )
    return success_response(data=_manager(row), message="State manager added", code=201)


@managers_router.patch("/{manager_id}", summary="Edit a state project manager", response_model=DictResponse)
async def update_manager(
    manager_id: str,
    state: Optional[str] = Form(None),
    name: Optional[str] = Form(None),
    mobile: Optional[str] = Form(None),
    email: Optional[str] = Form(None),
    is_active: Optional[bool] = Form(None),
    photo: Optional[UploadFile] = File(None),
    client: DataClient = Depends(get_client),
    storage: ObjectStorage = Depends(get_storage),
    settings: Settings = Depends(get_app_settings),
):
    form = form_values(state=state, name=name, mobile=mobile, email=email)
    if is_active is not None:
        form["is_active"] = is_active
    data = validate_form(StateManagerUpdate, form)
    row = await curation.update_state_manager(
        client, storage, manager_id, data.model_dump(exclude_unset=True), await read_upload(photo),
        max_bytes=settings.max_upload_bytes,
    )
    return success_response(data=_manager(row), message="State manager updated")


@managers_router.post("/{manager_id}/toggle", summary="Activate or deactivate", response_model=DictResponse)
async def toggle_manager(manager_id: str, client: DataClient = Depends(get_client)):
    row = await curation.toggle_active(client, StateManager, manager_id, "State manager")
    return success_response(data=_manager(row))


@managers_router.delete("/{manager_id}", summary="Delete a state project manager",
                        response_model=MessageResponse, dependencies=confirmed)
async def delete_manager(
    manager_id: str,
    client: DataClient = Depends(get_client),
    storage: ObjectStorage = Depends(get_storage),
):
    await curation.delete_state_manager(client, storage, manager_id)
    return success_response(message="State manager deleted")


# ==================== Videos ====================

@videos_router.get("", summary="Videos in display order", response_model=DictResponse)
async def list_videos(client: DataClient = Depends(get_client)):
    return success_response(data={"items": await fetch_videos(client)})


@videos_router.post("", summary="Add a video", response_model=DictResponse, status_code=201)
async def create_video(data: VideoCreate, client: DataClient = Depends(get_client)):
    row = await curation.create_video(client, data)
    return success_response(data=_dump(VideoResponse, row), message="Video added", code=201)


@videos_router.patch("/{video_id}", summary="Edit a video", response_model=DictResponse)
async def update_video(video_id: str, data: VideoUpdate, client: DataClient = Depends(get_client)):
    row = await curation.update_video(client, video_id, data.model_dump(exclude_unset=True))
    return success_response(data=_dump(VideoResponse, row))


@videos_router.post("/{video_id}/move/{direction}", summary="Move up or down", response_model=DictResponse)
async def move_video(video_id: str, direction: str, client: DataClient = Depends(get_client)):
    moved = await move(client, Video, video_id, parse_direction(direction))
    return success_response(data={"moved": moved})


@videos_router.delete("/{video_id}", summary="Delete a video",
                      response_model=MessageResponse, dependencies=confirmed)
async def delete_video(video_id: str, client: DataClient = Depends(get_client)):
    await curation.delete_row(client, Video, video_id, "Video")
    return success_response(message="Video deleted")
