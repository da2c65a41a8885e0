"""
Shared route dependencies.
"""
from typing import AsyncGenerator, Optional

from fastapi import Depends, Query, Request

from suryaghar.core.backend import Backend, DataClient
from suryaghar.core.config import Settings, get_settings
from suryaghar.core.exceptions import BadRequestException, UnauthorizedException
from suryaghar.core.session import SessionContext
from suryaghar.core.storage import ObjectStorage
from suryaghar.services.auth import Identity

AUTH_COOKIE = "auth_token"


def get_backend(request: Request) -> Backend:
    return request.app.state.backend


async def get_client(backend: Backend = Depends(get_backend)) -> AsyncGenerator[DataClient, None]:
    """
    One unit of work per request.

    Usage:
        @router.get("/items")
        async def get_items(client: DataClient = Depends(get_client)):
            ...
    """
    async with backend.client() as client:
        yield client


def get_storage(backend: Backend = Depends(get_backend)) -> ObjectStorage:
    return backend.storage


def get_app_settings(request: Request) -> Settings:
    return getattr(request.app.state, "settings", None) or get_settings()


def get_token(request: Request) -> Optional[str]:
    """Session token from the ``auth_token`` cookie or a Bearer header."""
    header = request.headers.get("Authorization", "")
    if header.lower().startswith("bearer "):
        return header[7:].strip() or None
    return request.cookies.get(AUTH_COOKIE)


async def get_session_context(
    request: Request,
    backend: Backend = Depends(get_backend),
) -> AsyncGenerator[SessionContext, None]:
    context = SessionContext(backend.auth)
    await context.start(get_token(request))
    try:
        yield context
    finally:
        context.close()


async def require_admin(context: SessionContext = Depends(get_session_context)) -> Identity:
    if not context.is_authenticated:
        raise UnauthorizedException("Please sign in to continue")
    return context.user


def require_confirmation(
    confirm: bool = Query(False, description="Must be true to delete"),
) -> None:
    if not confirm:
        raise BadRequestException("Deletion must be confirmed")


def form_values(**fields: Optional[str]) -> dict:
    """Multipart fields with blank inputs treated as missing."""
    return {k: v for k, v in fields.items() if v is not None and str(v).strip() != ""}
