"""
Independent loading of the public content sections
"""
import pytest

from suryaghar.core.backend import NullDataClient
from suryaghar.core.exceptions import MalformedDataException
from suryaghar.services.sections import SectionStatus, load_home_sections, load_section


async def broken_loader(client):
    raise MalformedDataException("Malformed StateManagerResponse data")


async def crashing_loader(client):
    raise RuntimeError("connection reset")


async def rows_loader(client):
    return [{"id": "1"}]


@pytest.mark.asyncio
async def test_failure_becomes_notice():
    section = await load_section("state_managers", broken_loader, NullDataClient(), label="state managers")
    assert section.status == SectionStatus.ERROR
    assert section.items == []
    assert section.notice == "Failed to load state managers"


@pytest.mark.asyncio
async def test_unexpected_failure_becomes_notice():
    section = await load_section("videos", crashing_loader, NullDataClient())
    assert section.to_dict() == {"name": "videos", "status": "error", "items": [], "notice": "Failed to load videos"}


@pytest.mark.asyncio
async def test_loaded_and_empty():
    loaded = await load_section("videos", rows_loader, NullDataClient())
    assert loaded.status == SectionStatus.LOADED

    async def empty(client):
        return []

    assert (await load_section("videos", empty, NullDataClient())).status == SectionStatus.EMPTY


@pytest.mark.asyncio
async def test_fallback_only_when_empty():
    fallback = [{"name": "default"}]
    loaded = await load_section("testimonials", rows_loader, NullDataClient(), fallback=fallback)
    assert loaded.items == [{"id": "1"}]

    async def empty(client):
        return []

    section = await load_section("testimonials", empty, NullDataClient(), fallback=fallback)
    assert section.items == fallback


@pytest.mark.asyncio
async def test_one_failing_section_does_not_block_others(monkeypatch):
    monkeypatch.setattr("suryaghar.services.sections.fetch_state_managers", broken_loader)
    sections = await load_home_sections(NullDataClient())
    assert sections["state_managers"]["status"] == "error"
    assert sections["testimonials"]["status"] == "loaded"
    assert sections["videos"]["status"] == "empty"
