"""
Public site content API.
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query

from suryaghar import content
from suryaghar.api.deps import get_app_settings, get_client
from suryaghar.core.backend import DataClient
from suryaghar.core.config import Settings
from suryaghar.core.response import DictResponse, success_response
from suryaghar.models.constants import GalleryCategory, values
from suryaghar.services import sections

router = APIRouter()


@router.get("/shell", summary="Navigation, footer and contact button", response_model=DictResponse)
async def get_shell(settings: Settings = Depends(get_app_settings)):
    return success_response(data=content.shell(settings))


@router.get("/home", summary="Home page content", response_model=DictResponse)
async def get_home(
    client: DataClient = Depends(get_client),
    settings: Settings = Depends(get_app_settings),
):
    """
    Static blocks plus every database-backed section. A failing section
    reports ``status="error"`` with a notice; the others still load.
    """
    return success_response(data={
        **content.home_static(settings),
        "sections": await sections.load_home_sections(client),
    })


@router.get("/legal-documents", summary="Legal documents", response_model=DictResponse)
async def get_legal_documents(client: DataClient = Depends(get_client)):
    section = await sections.load_section(
        "legal_documents", sections.fetch_legal_documents, client, label="legal documents"
    )
    return success_response(data=section.to_dict())


@router.get("/state-managers", summary="Active state project managers", response_model=DictResponse)
async def get_state_managers(client: DataClient = Depends(get_client)):
    section = await sections.load_section(
        "state_managers", sections.fetch_state_managers, client, label="state managers"
    )
    return success_response(data=section.to_dict())


@router.get("/testimonials", summary="Active testimonials", response_model=DictResponse)
async def get_testimonials(client: DataClient = Depends(get_client)):
    section = await sections.load_section(
        "testimonials", sections.fetch_testimonials, client, fallback=content.DEFAULT_TESTIMONIALS
    )
    return success_response(data=section.to_dict())


@router.get("/videos", summary="Videos", response_model=DictResponse)
async def get_videos(client: DataClient = Depends(get_client)):
    section = await sections.load_section("videos", sections.fetch_videos, client)
    return success_response(data=section.to_dict())


@router.get("/gallery", summary="Gallery", response_model=DictResponse)
async def get_gallery(
    category: Optional[str] = Query(None, description="Projects / Team / Events / Certificates"),
    client: DataClient = Depends(get_client),
):
    async def loader(c: DataClient):
        return await sections.fetch_gallery(c, category)

    section = await sections.load_section("gallery", loader, client)
    data = section.to_dict()
    data["categories"] = ["All", *values(GalleryCategory)]
    return success_response(data=data)


@router.get("/countdown", summary="Application deadline countdown", response_model=DictResponse)
async def get_countdown():
    return success_response(data=content.Countdown().to_dict())
