"""
FastAPI application entry point

PM Surya Ghar recruitment site, job portal and admin back office.
"""
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, HTTPException
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.routing import APIRoute
from fastapi.staticfiles import StaticFiles
from loguru import logger
from sqlalchemy.ext.asyncio import AsyncEngine

from suryaghar.api import api_router
from suryaghar.api.pages import router as pages_router
from suryaghar.core.backend import create_backend
from suryaghar.core.config import Settings, get_settings
from suryaghar.core.exceptions import (
    AppException,
    app_exception_handler,
    general_exception_handler,
    http_exception_handler,
    validation_exception_handler,
)
from suryaghar.core.response import DictResponse, success_response
from suryaghar.core.storage import STORAGE_MOUNT, LocalObjectStorage


def custom_generate_unique_id(route: APIRoute) -> str:
    """Use the endpoint function name as the OpenAPI operationId."""
    return route.name


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.settings
    backend = app.state.backend
    logger.info(f"Starting {settings.app_name}")
    logger.info(f"Environment: {settings.app_env}")
    logger.info(f"Backend configured: {backend.configured}")

    await backend.init()

    yield

    await backend.close()
    logger.info("Application stopped")


def create_app(settings: Optional[Settings] = None, engine: Optional[AsyncEngine] = None) -> FastAPI:
    """
    Build the application.

    ``settings`` and ``engine`` are injectable so tests can run against an
    in-memory database and a temporary storage directory.
    """
    settings = settings or get_settings()
    backend = create_backend(settings, engine=engine)

    app = FastAPI(
        title=settings.app_name,
        description="PM Surya Ghar recruitment, job portal and admin API",
        version=settings.app_version,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        openapi_url="/openapi.json" if settings.debug else None,
        lifespan=lifespan,
        generate_unique_id_function=custom_generate_unique_id,
    )
    app.state.settings = settings
    app.state.backend = backend

    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    app.include_router(api_router, prefix=f"{settings.api_prefix}/v1")

    if isinstance(backend.storage, LocalObjectStorage):
        app.mount(STORAGE_MOUNT, StaticFiles(directory=backend.storage.root), name="storage")

    @app.get("/health", tags=["System"], response_model=DictResponse)
    async def health_check():
        return success_response(data={
            "status": "healthy",
            "backend_configured": backend.configured,
        })

    app.include_router(pages_router, tags=["Pages"])

    # CORS goes last so it runs first
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    _settings = get_settings()
    uvicorn.run(
        "suryaghar.main:app",
        host=_settings.host,
        port=_settings.port,
        reload=_settings.debug,
    )
