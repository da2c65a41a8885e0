"""
Public content sections backed by the database.

Each section loads on its own. A failure is logged for operators and
turned into a notice on that section only; the rest of the page still
renders.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Awaitable, Callable, List, Optional

from loguru import logger

from suryaghar.content import DEFAULT_TESTIMONIALS, whatsapp_link
from suryaghar.core.backend import DataClient, decode_all
from suryaghar.core.exceptions import AppException
from suryaghar.models import (
    GalleryImage,
    GalleryImageResponse,
    LegalDocument,
    LegalDocumentResponse,
    StateManager,
    StateManagerResponse,
    Testimonial,
    TestimonialResponse,
    Video,
    VideoResponse,
)
from suryaghar.services.videos import embed_url, thumbnail_url


class SectionStatus(str, Enum):
    LOADED = "loaded"
    EMPTY = "empty"
    ERROR = "error"


@dataclass
class SectionPayload:
    name: str
    status: SectionStatus = SectionStatus.EMPTY
    items: List[Any] = field(default_factory=list)
    notice: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "status": self.status.value,
            "items": self.items,
            "notice": self.notice,
        }


Loader = Callable[[DataClient], Awaitable[List[dict]]]


async def load_section(
    name: str,
    loader: Loader,
    client: DataClient,
    *,
    label: Optional[str] = None,
    fallback: Optional[List[dict]] = None,
) -> SectionPayload:
    try:
        items = await loader(client)
    except AppException as e:
        logger.error(f"Error fetching {name}: {e.message}")
        return SectionPayload(name, SectionStatus.ERROR, [], f"Failed to load {label or name}")
    except Exception:
        logger.exception(f"Error fetching {name}")
        await client.rollback()
        return SectionPayload(name, SectionStatus.ERROR, [], f"Failed to load {label or name}")

    if not items and fallback:
        return SectionPayload(name, SectionStatus.LOADED, list(fallback))
    status = SectionStatus.LOADED if items else SectionStatus.EMPTY
    return SectionPayload(name, status, items)


# ==================== Loaders ====================

async def fetch_legal_documents(client: DataClient) -> List[dict]:
    rows = await client.select(LegalDocument, order_by=LegalDocument.uploaded_at.desc())
    return decode_all(LegalDocumentResponse, rows)


async def fetch_gallery(client: DataClient, category: Optional[str] = None) -> List[dict]:
    where = [GalleryImage.is_active == True]  # noqa: E712
    if category and category != "All":
        where.append(GalleryImage.category == category)
    rows = await client.select(GalleryImage, *where, order_by=GalleryImage.uploaded_at.desc())
    return decode_all(GalleryImageResponse, rows)


async def fetch_testimonials(client: DataClient) -> List[dict]:
    rows = await client.select(
        Testimonial,
        Testimonial.is_active == True,  # noqa: E712
        order_by=(Testimonial.display_order.asc(), Testimonial.created_at.desc()),
    )
    return decode_all(TestimonialResponse, rows)


async def fetch_state_managers(client: DataClient) -> List[dict]:
    rows = await client.select(
        StateManager,
        StateManager.is_active == True,  # noqa: E712
        order_by=StateManager.state.asc(),
    )
    items = decode_all(StateManagerResponse, rows)
    for item in items:
        item["whatsapp_link"] = whatsapp_link(item["mobile"])
    return items


async def fetch_videos(client: DataClient) -> List[dict]:
    rows = await client.select(Video, order_by=Video.display_order.asc())
    items = decode_all(VideoResponse, rows)
    for item in items:
        item["embed_url"] = embed_url(item["video_id"])
        item["thumbnail_url"] = thumbnail_url(item["video_id"])
    return items


async def load_home_sections(client: DataClient) -> dict:
    """Every DB-backed block of the home page, each loaded independently."""
    sections = [
        await load_section("legal_documents", fetch_legal_documents, client, label="legal documents"),
        await load_section("state_managers", fetch_state_managers, client, label="state managers"),
        await load_section("testimonials", fetch_testimonials, client, fallback=DEFAULT_TESTIMONIALS),
        await load_section("videos", fetch_videos, client),
        await load_section("gallery", fetch_gallery, client),
    ]
    return {s.name: s.to_dict() for s in sections}
