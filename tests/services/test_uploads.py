"""
Attachment checks and compensating cleanup
"""
import re
from pathlib import Path

import pytest

from suryaghar.core.exceptions import BadRequestException, FormValidationException
from suryaghar.core.storage import LocalObjectStorage
from suryaghar.services.uploads import (
    MB,
    FilePayload,
    FileRule,
    UploadBatch,
    check_files,
    object_path,
    remove_stored,
)

PDF = FilePayload("cv.pdf", "application/pdf", b"%PDF-1.4")
JPEG = FilePayload("me.jpg", "image/jpeg", b"\xff\xd8\xff")


@pytest.fixture
def storage(tmp_path) -> LocalObjectStorage:
    return LocalObjectStorage(tmp_path, "http://test")


def stored(root: Path) -> list:
    return [p for p in root.rglob("*") if p.is_file()]


def test_object_path_format():
    path = object_path("resumes", "pdf")
    assert re.fullmatch(r"resumes/\d+-[0-9a-f]{8}\.pdf", path)
    assert object_path("resumes", "pdf") != path


def test_extension_from_name_or_type():
    assert PDF.extension == "pdf"
    assert FilePayload("photo", "image/png", b"x").extension == "png"


def test_check_files_messages():
    rules = {
        "resume": FileRule(max_bytes=MB, label="Resume"),
        "photo": FileRule(image_only=True, label="Photo"),
        "extra": FileRule(required=False, label="Extra"),
    }
    big = FilePayload("cv.pdf", "application/pdf", b"0" * (MB + 1))
    with pytest.raises(FormValidationException) as exc:
        check_files({"resume": big, "photo": PDF}, rules)
    assert exc.value.errors == {"resume": "Resume must be less than 1MB", "photo": "Photo must be an image"}


def test_check_files_keeps_text_errors():
    with pytest.raises(FormValidationException) as exc:
        check_files({"photo": JPEG}, {"photo": FileRule(image_only=True)}, {"mobile": "Invalid mobile number"})
    assert exc.value.errors == {"mobile": "Invalid mobile number"}


def test_check_files_extension_rule():
    rule = {"resume": FileRule(extensions=("pdf",), label="Resume")}
    check_files({"resume": PDF}, rule)
    with pytest.raises(FormValidationException) as exc:
        check_files({"resume": FilePayload("cv.docx", "application/msword", b"x")}, rule)
    assert exc.value.errors["resume"] == "Resume must be a PDF file"


@pytest.mark.asyncio
async def test_batch_keeps_files_on_success(storage, tmp_path):
    async with UploadBatch(storage) as batch:
        url = await batch.put("applicant-documents", "resumes", PDF)
    assert url.startswith("http://test/storage/applicant-documents/resumes/")
    assert len(stored(tmp_path)) == 1


@pytest.mark.asyncio
async def test_batch_removes_files_when_write_fails(storage, tmp_path):
    with pytest.raises(RuntimeError):
        async with UploadBatch(storage) as batch:
            await batch.put("applicant-documents", "resumes", PDF)
            await batch.put("applicant-documents", "photos", JPEG)
            raise RuntimeError("insert failed")
    assert stored(tmp_path) == []


@pytest.mark.asyncio
async def test_remove_stored_ignores_foreign_urls(storage, tmp_path):
    path = await storage.upload("gallery-images", "projects/a.jpg", b"x")
    await remove_stored(storage, "gallery-images", [
        "https://images.unsplash.com/photo.jpg",
        None,
        storage.public_url("gallery-images", path),
    ])
    assert stored(tmp_path) == []


@pytest.mark.asyncio
async def test_storage_rejects_escape_and_unknown_bucket(storage):
    with pytest.raises(BadRequestException):
        await storage.upload("gallery-images", "../../etc/passwd", b"x")
    with pytest.raises(BadRequestException):
        await storage.upload("secrets", "a.txt", b"x")
