"""
Upload-then-reference with compensating cleanup.

    async with UploadBatch(storage) as batch:
        resume_url = await batch.put("applicant-documents", "resumes", resume)
        ...
        await client.insert(Applicant, {...})
        await client.commit()

If anything inside the block raises, every object the batch stored is
removed again, so a failed record write leaves no orphaned file.
"""
import mimetypes
import secrets
import time
from dataclasses import dataclass, field
from pathlib import PurePath
from typing import Dict, List, Optional, Sequence

from fastapi import UploadFile
from loguru import logger
from werkzeug.utils import secure_filename

from suryaghar.core.exceptions import AppException, FormValidationException
from suryaghar.core.storage import ObjectStorage

MB = 1024 * 1024


@dataclass
class FileRule:
    """Constraints for one attachment field."""
    max_bytes: int = 5 * MB
    required: bool = True
    image_only: bool = False
    extensions: Sequence[str] = ()
    label: str = "File"


@dataclass
class FilePayload:
    filename: str
    content_type: str
    data: bytes

    @property
    def extension(self) -> str:
        suffix = PurePath(secure_filename(self.filename) or "").suffix.lower().lstrip(".")
        if suffix:
            return suffix
        guessed = mimetypes.guess_extension(self.content_type or "") or ".bin"
        return guessed.lstrip(".")


def object_path(category: str, extension: str) -> str:
    """``{category}/{timestamp}-{random}.{ext}``"""
    stamp = int(time.time() * 1000)
    suffix = secrets.token_hex(4)
    return f"{category}/{stamp}-{suffix}.{extension}"


def _check(name: str, payload: Optional[FilePayload], rule: FileRule) -> Optional[str]:
    if payload is None or not payload.data:
        return f"{rule.label} is required" if rule.required else None
    if len(payload.data) > rule.max_bytes:
        return f"{rule.label} must be less than {rule.max_bytes // MB}MB"
    if rule.image_only and not (payload.content_type or "").startswith("image/"):
        return f"{rule.label} must be an image"
    if rule.extensions and payload.extension not in rule.extensions:
        return f"{rule.label} must be a {'/'.join(e.upper() for e in rule.extensions)} file"
    return None


async def read_upload(upload: Optional[UploadFile]) -> Optional[FilePayload]:
    if upload is None or not upload.filename:
        return None
    data = await upload.read()
    return FilePayload(upload.filename, upload.content_type or "application/octet-stream", data)


def check_files(
    files: Dict[str, Optional[FilePayload]],
    rules: Dict[str, FileRule],
    errors: Optional[Dict[str, str]] = None,
) -> None:
    """Validate attachments; merges into ``errors`` from the text fields."""
    errors = dict(errors or {})
    for name, rule in rules.items():
        message = _check(name, files.get(name), rule)
        if message:
            errors.setdefault(name, message)
    if errors:
        raise FormValidationException(errors)


@dataclass
class UploadBatch:
    storage: ObjectStorage
    stored: List[tuple] = field(default_factory=list)

    async def put(self, bucket: str, category: str, payload: FilePayload) -> str:
        path = object_path(category, payload.extension)
        await self.storage.upload(bucket, path, payload.data, payload.content_type)
        self.stored.append((bucket, path))
        return self.storage.public_url(bucket, path)

    async def rollback(self) -> None:
        for bucket, path in reversed(self.stored):
            try:
                await self.storage.remove(bucket, [path])
            except (AppException, OSError) as e:
                logger.error(f"Cleanup of {bucket}/{path} failed: {e}")
        if self.stored:
            logger.warning(f"Removed {len(self.stored)} uploaded object(s) after a failed write")
        self.stored.clear()

    async def __aenter__(self) -> "UploadBatch":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> bool:
        if exc_type is not None:
            await self.rollback()
        return False


async def remove_stored(storage: ObjectStorage, bucket: str, urls: List[Optional[str]]) -> None:
    """Remove objects this store issued; foreign URLs are left alone."""
    paths = [p for p in (storage.path_from_url(bucket, u) for u in urls if u) if p]
    if not paths:
        return
    try:
        await storage.remove(bucket, paths)
    except OSError as e:
        logger.error(f"Could not remove {bucket} objects {paths}: {e}")
