"""
Admin curation of site content: legal documents, gallery, testimonials,
state project managers and videos.
"""
from typing import Dict, Optional, Type

from loguru import logger
from pydantic import ValidationError
from sqlmodel import SQLModel

from suryaghar.core.backend import DataClient
from suryaghar.core.exceptions import ConflictException, FormValidationException, NotFoundException
from suryaghar.core.storage import ObjectStorage
from suryaghar.models import (
    GalleryImage,
    GalleryImageCreate,
    LegalDocument,
    StateManager,
    StateManagerCreate,
    Testimonial,
    TestimonialCreate,
    Video,
    VideoCreate,
)
from suryaghar.models.base import utcnow
from suryaghar.models.constants import LegalDocumentType, values
from suryaghar.services.ordering import next_display_order
from suryaghar.services.uploads import FilePayload, FileRule, UploadBatch, check_files, remove_stored
from suryaghar.services.validation import error_map
from suryaghar.services.videos import extract_video_id

LEGAL_BUCKET = "legal-documents"
GALLERY_BUCKET = "gallery-images"
MANAGER_BUCKET = "manager-photos"


async def _require(client: DataClient, model: Type[SQLModel], id: str, label: str):
    row = await client.get(model, id)
    if row is None:
        raise NotFoundException(f"{label} not found: {id}")
    return row


async def toggle_active(client: DataClient, model: Type[SQLModel], id: str, label: str):
    row = await _require(client, model, id, label)
    row = await client.update(model, id, {"is_active": not row.is_active})
    await client.commit()
    return row


async def update_fields(client: DataClient, model: Type[SQLModel], id: str, values: dict, label: str):
    await _require(client, model, id, label)
    row = await client.update(model, id, values)
    await client.commit()
    return row


# ==================== Legal documents ====================

async def upload_legal_document(
    client: DataClient,
    storage: ObjectStorage,
    name: str,
    file: Optional[FilePayload],
    *,
    uploaded_by: Optional[str],
    max_bytes: int,
) -> LegalDocument:
    """Store the file and upsert the row for this document type."""
    errors = {}
    if name not in values(LegalDocumentType):
        errors["name"] = "Please select a document type"
    check_files({"file": file}, {"file": FileRule(max_bytes=max_bytes, label="Document")}, errors)

    existing = await client.select(LegalDocument, LegalDocument.name == name, limit=1)
    old_url = existing[0].file_url if existing else None

    async with UploadBatch(storage) as batch:
        file_url = await batch.put(LEGAL_BUCKET, "documents", file)
        row_values = {"file_url": file_url, "uploaded_by": uploaded_by, "uploaded_at": utcnow()}
        if existing:
            document = await client.update(LegalDocument, existing[0].id, row_values)
        else:
            document = await client.insert(LegalDocument, {"name": name, **row_values})
        await client.commit()

    if old_url:
        await remove_stored(storage, LEGAL_BUCKET, [old_url])
    logger.info(f"Legal document {'replaced' if existing else 'uploaded'}: {name}")
    return document


async def delete_legal_document(client: DataClient, storage: ObjectStorage, id: str) -> None:
    document = await _require(client, LegalDocument, id, "Document")
    await client.delete(LegalDocument, id)
    await client.commit()
    await remove_stored(storage, LEGAL_BUCKET, [document.file_url])


# ==================== Gallery ====================

async def upload_gallery_image(
    client: DataClient,
    storage: ObjectStorage,
    form: Dict[str, object],
    image: Optional[FilePayload],
    *,
    uploaded_by: Optional[str],
    max_bytes: int,
) -> GalleryImage:
    errors, data = {}, None
    try:
        data = GalleryImageCreate.model_validate(form)
    except ValidationError as e:
        errors = error_map(e)
    check_files({"image": image}, {"image": FileRule(max_bytes=max_bytes, image_only=True, label="Image")}, errors)

    async with UploadBatch(storage) as batch:
        image_url = await batch.put(GALLERY_BUCKET, data.category.lower(), image)
        row = await client.insert(GalleryImage, {
            **data.model_dump(), "image_url": image_url, "uploaded_by": uploaded_by, "is_active": True,
        })
        await client.commit()
    return row


async def delete_gallery_image(client: DataClient, storage: ObjectStorage, id: str) -> None:
    image = await _require(client, GalleryImage, id, "Image")
    await client.delete(GalleryImage, id)
    await client.commit()
    await remove_stored(storage, GALLERY_BUCKET, [image.image_url])


# ==================== Testimonials ====================

async def create_testimonial(client: DataClient, data: TestimonialCreate) -> Testimonial:
    row = await client.insert(Testimonial, {
        **data.model_dump(), "display_order": await next_display_order(client, Testimonial),
    })
    await client.commit()
    return row


async def delete_row(client: DataClient, model: Type[SQLModel], id: str, label: str) -> None:
    await _require(client, model, id, label)
    await client.delete(model, id)
    await client.commit()


# ==================== State managers ====================

def _duplicate_state(state: str) -> ConflictException:
    return ConflictException(f"Manager for {state} already exists")


async def _check_state_free(client: DataClient, state: str, exclude_id: Optional[str] = None) -> None:
    where = [StateManager.state == state]
    if exclude_id:
        where.append(StateManager.id != exclude_id)
    if await client.count(StateManager, *where):
        raise _duplicate_state(state)


async def create_state_manager(
    client: DataClient,
    storage: ObjectStorage,
    form: Dict[str, object],
    photo: Optional[FilePayload],
    *,
    uploaded_by: Optional[str],
    max_bytes: int,
) -> StateManager:
    errors, data = {}, None
    try:
        data = StateManagerCreate.model_validate(form)
    except ValidationError as e:
        errors = error_map(e)
    check_files({"photo": photo}, {"photo": FileRule(max_bytes=max_bytes, image_only=True, label="Photo")}, errors)

    await _check_state_free(client, data.state)
    async with UploadBatch(storage) as batch:
        photo_url = await batch.put(MANAGER_BUCKET, "managers", photo)
        try:
            row = await client.insert(StateManager, {
                **data.model_dump(), "photo_url": photo_url, "uploaded_by": uploaded_by,
            })
        except ConflictException:
            raise _duplicate_state(data.state) from None
        await client.commit()

    logger.info(f"State manager added for {row.state}: {row.name}")
    return row


async def update_state_manager(
    client: DataClient,
    storage: ObjectStorage,
    id: str,
    values: dict,
    photo: Optional[FilePayload],
    *,
    max_bytes: int,
) -> StateManager:
    current = await _require(client, StateManager, id, "State manager")
    if photo is not None:
        check_files({"photo": photo}, {"photo": FileRule(max_bytes=max_bytes, image_only=True, label="Photo")})
    if values.get("state") and values["state"] != current.state:
        await _check_state_free(client, values["state"], exclude_id=id)

    old_photo = current.photo_url
    async with UploadBatch(storage) as batch:
        if photo is not None:
            values = {**values, "photo_url": await batch.put(MANAGER_BUCKET, "managers", photo)}
        try:
            row = await client.update(StateManager, id, values)
        except ConflictException:
            raise _duplicate_state(values["state"]) from None
        await client.commit()

    if photo is not None:
        await remove_stored(storage, MANAGER_BUCKET, [old_photo])
    return row


async def delete_state_manager(client: DataClient, storage: ObjectStorage, id: str) -> None:
    manager = await _require(client, StateManager, id, "State manager")
    await client.delete(StateManager, id)
    await client.commit()
    await remove_stored(storage, MANAGER_BUCKET, [manager.photo_url])


# ==================== Videos ====================

def _video_id(url: str) -> str:
    video_id = extract_video_id(url)
    if not video_id:
        raise FormValidationException({"youtube_url": "Invalid YouTube URL"})
    return video_id


async def create_video(client: DataClient, data: VideoCreate) -> Video:
    video_id = _video_id(data.youtube_url)
    row = await client.insert(Video, {
        "title": data.title,
        "youtube_url": data.youtube_url,
        "video_id": video_id,
        "display_order": await next_display_order(client, Video),
    })
    await client.commit()
    return row


async def update_video(client: DataClient, id: str, values: dict) -> Video:
    if values.get("youtube_url"):
        values = {**values, "video_id": _video_id(values["youtube_url"])}
    return await update_fields(client, Video, id, values, "Video")
