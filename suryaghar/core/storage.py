"""
Object storage boundary.

Files live under ``{root}/{bucket}/{path}`` and are published through the
``/storage`` static mount, so the public URL of an object is
``{base_url}/storage/{bucket}/{path}``.
"""
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Iterable, Optional

from loguru import logger

from .exceptions import BackendNotConfiguredException, BadRequestException

BUCKETS = (
    "applicant-documents",
    "gallery-images",
    "legal-documents",
    "manager-photos",
)

STORAGE_MOUNT = "/storage"


class ObjectStorage(ABC):
    """Bucketed byte store that hands back publicly fetchable URLs."""

    @abstractmethod
    async def upload(
        self, bucket: str, path: str, data: bytes, content_type: Optional[str] = None
    ) -> str:
        """Store ``data`` and return its path inside the bucket."""

    @abstractmethod
    def public_url(self, bucket: str, path: str) -> str:
        ...

    @abstractmethod
    async def remove(self, bucket: str, paths: Iterable[str]) -> None:
        ...

    def path_from_url(self, bucket: str, url: str) -> Optional[str]:
        return None


class LocalObjectStorage(ObjectStorage):
    """Filesystem-backed storage."""

    def __init__(self, root: str | Path, base_url: str):
        self.root = Path(root)
        self.base_url = base_url.rstrip("/")
        self.root.mkdir(parents=True, exist_ok=True)

    def _resolve(self, bucket: str, path: str) -> Path:
        if bucket not in BUCKETS:
            raise BadRequestException(f"Unknown bucket: {bucket}")
        bucket_dir = (self.root / bucket).resolve()
        target = (bucket_dir / path).resolve()
        if bucket_dir not in target.parents:
            raise BadRequestException(f"Invalid object path: {path}")
        return target

    async def upload(
        self, bucket: str, path: str, data: bytes, content_type: Optional[str] = None
    ) -> str:
        target = self._resolve(bucket, path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(data)
        logger.debug(f"Stored object {bucket}/{path} ({len(data)} bytes, {content_type})")
        return path

    def public_url(self, bucket: str, path: str) -> str:
        return f"{self.base_url}{STORAGE_MOUNT}/{bucket}/{path}"

    async def remove(self, bucket: str, paths: Iterable[str]) -> None:
        for path in paths:
            target = self._resolve(bucket, path)
            if target.exists():
                target.unlink()
                logger.debug(f"Removed object {bucket}/{path}")

    def path_from_url(self, bucket: str, url: str) -> Optional[str]:
        """Inverse of ``public_url``; None for URLs this store did not issue."""
        prefix = self.public_url(bucket, "")
        if url and url.startswith(prefix):
            return url[len(prefix):]
        return None


class NullObjectStorage(ObjectStorage):
    """Stand-in used when no storage directory is configured."""

    async def upload(
        self, bucket: str, path: str, data: bytes, content_type: Optional[str] = None
    ) -> str:
        raise BackendNotConfiguredException("File storage is not configured")

    def public_url(self, bucket: str, path: str) -> str:
        raise BackendNotConfiguredException("File storage is not configured")

    async def remove(self, bucket: str, paths: Iterable[str]) -> None:
        raise BackendNotConfiguredException("File storage is not configured")
