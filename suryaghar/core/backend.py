"""
Backend boundary.

Two implementations are selected once at startup:

- ``DatabaseBackend``: SQL store (SQLAlchemy async engine), local object
  storage and the database-backed auth provider.
- ``NullBackend``: inert stand-in used when ``DATABASE_URL`` or
  ``STORAGE_DIR`` is missing. Reads come back empty, every write and
  every sign-in fails with "not configured".

Request handlers only ever see a ``DataClient`` obtained from
``backend.client()``, which is one unit of work.
"""
from abc import ABC, abstractmethod
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, List, Optional, Sequence, Type, TypeVar

from loguru import logger
from pydantic import BaseModel, ValidationError
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlmodel import SQLModel

from suryaghar import models  # noqa: F401  registers tables
from suryaghar.crud import crud_for
from suryaghar.services.auth import AuthProvider, DatabaseAuthProvider, NullAuthProvider

from .config import Settings
from .exceptions import BackendNotConfiguredException, ConflictException, MalformedDataException
from .storage import LocalObjectStorage, NullObjectStorage, ObjectStorage

ModelType = TypeVar("ModelType", bound=SQLModel)
SchemaType = TypeVar("SchemaType", bound=BaseModel)


# ==================== Row decoding ====================

def decode(schema: Type[SchemaType], row: Any) -> SchemaType:
    """Validate one backend row against its response schema."""
    try:
        return schema.model_validate(row)
    except ValidationError as e:
        logger.error(f"Malformed {schema.__name__} row: {e}")
        raise MalformedDataException(f"Malformed {schema.__name__} data") from e


def decode_all(schema: Type[SchemaType], rows: Sequence[Any]) -> List[dict]:
    """Decode rows and dump them to JSON-ready dicts."""
    return [decode(schema, row).model_dump(mode="json") for row in rows]


# ==================== Data client ====================

class DataClient(ABC):
    """Table operations available to services."""

    @abstractmethod
    async def select(
        self,
        model: Type[ModelType],
        *where: Any,
        order_by: Any = None,
        limit: Optional[int] = None,
        skip: int = 0,
    ) -> List[ModelType]:
        ...

    @abstractmethod
    async def get(self, model: Type[ModelType], id: str) -> Optional[ModelType]:
        ...

    @abstractmethod
    async def count(self, model: Type[SQLModel], *where: Any) -> int:
        ...

    @abstractmethod
    async def insert(self, model: Type[ModelType], values: Dict[str, Any]) -> ModelType:
        ...

    @abstractmethod
    async def update(
        self, model: Type[ModelType], id: str, values: Dict[str, Any]
    ) -> Optional[ModelType]:
        """Update one row; None when the row does not exist."""

    @abstractmethod
    async def update_in(
        self, model: Type[SQLModel], ids: Sequence[str], values: Dict[str, Any]
    ) -> int:
        ...

    @abstractmethod
    async def delete(self, model: Type[SQLModel], id: str) -> bool:
        ...

    @abstractmethod
    async def delete_where(self, model: Type[SQLModel], *where: Any) -> int:
        ...

    async def swap(self, model: Type[SQLModel], id1: str, id2: str, field: str) -> bool:
        """
        Atomically exchange ``field`` between two rows.

        Clients without an atomic swap leave this unimplemented; callers
        then fall back to two plain updates.
        """
        raise NotImplementedError

    @abstractmethod
    async def commit(self) -> None:
        ...

    @abstractmethod
    async def rollback(self) -> None:
        ...


class SqlDataClient(DataClient):
    """DataClient over one ``AsyncSession``."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def select(self, model, *where, order_by=None, limit=None, skip=0):
        return await crud_for(model).get_multi(
            self.session, *where, order_by=order_by, limit=limit, skip=skip
        )

    async def get(self, model, id):
        return await crud_for(model).get(self.session, id)

    async def count(self, model, *where):
        return await crud_for(model).count(self.session, *where)

    async def insert(self, model, values):
        try:
            return await crud_for(model).create(self.session, obj_in=values)
        except IntegrityError as e:
            await self.session.rollback()
            raise ConflictException(f"{model.__tablename__}: record already exists") from e

    async def update(self, model, id, values):
        crud = crud_for(model)
        obj = await crud.get(self.session, id)
        if obj is None:
            return None
        try:
            return await crud.update(self.session, db_obj=obj, obj_in=values)
        except IntegrityError as e:
            await self.session.rollback()
            raise ConflictException(f"{model.__tablename__}: record already exists") from e

    async def update_in(self, model, ids, values):
        return await crud_for(model).update_in(self.session, ids=ids, values=values)

    async def delete(self, model, id):
        return await crud_for(model).delete(self.session, id=id)

    async def delete_where(self, model, *where):
        return await crud_for(model).delete_where(self.session, *where)

    async def swap(self, model, id1, id2, field):
        # both writes land in this session's transaction
        return await crud_for(model).swap(self.session, id1=id1, id2=id2, field=field)

    async def commit(self):
        await self.session.commit()

    async def rollback(self):
        await self.session.rollback()


class NullDataClient(DataClient):
    """Empty reads, refused writes."""

    async def select(self, model, *where, order_by=None, limit=None, skip=0):
        return []

    async def get(self, model, id):
        return None

    async def count(self, model, *where):
        return 0

    async def insert(self, model, values):
        raise BackendNotConfiguredException()

    async def update(self, model, id, values):
        raise BackendNotConfiguredException()

    async def update_in(self, model, ids, values):
        raise BackendNotConfiguredException()

    async def delete(self, model, id):
        raise BackendNotConfiguredException()

    async def delete_where(self, model, *where):
        raise BackendNotConfiguredException()

    async def swap(self, model, id1, id2, field):
        raise BackendNotConfiguredException()

    async def commit(self):
        return None

    async def rollback(self):
        return None


# ==================== Backends ====================

class Backend(ABC):
    configured: bool = False
    storage: ObjectStorage
    auth: AuthProvider

    async def init(self) -> None:
        return None

    async def close(self) -> None:
        return None

    @abstractmethod
    def client(self) -> "AsyncIterator[DataClient]":
        """Async context manager yielding one unit of work."""


class DatabaseBackend(Backend):
    configured = True

    def __init__(self, settings: Settings, engine: Optional[AsyncEngine] = None):
        self.engine = engine or create_async_engine(
            settings.database_url,
            echo=False,
            future=True,
        )
        self.session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )
        self.storage = LocalObjectStorage(settings.storage_dir, settings.public_base_url)
        self.auth = DatabaseAuthProvider(
            self.session_factory,
            session_ttl_hours=settings.session_ttl_hours,
            otp_ttl_minutes=settings.otp_ttl_minutes,
            otp_max_attempts=settings.otp_max_attempts,
            allowed_emails=settings.admin_allowed_emails,
        )

    async def init(self) -> None:
        """Create all tables."""
        async with self.engine.begin() as conn:
            await conn.run_sync(SQLModel.metadata.create_all)

    async def close(self) -> None:
        await self.engine.dispose()

    @asynccontextmanager
    async def client(self) -> AsyncIterator[DataClient]:
        async with self.session_factory() as session:
            try:
                yield SqlDataClient(session)
                await session.commit()
            except Exception:
                await session.rollback()
                raise


class NullBackend(Backend):
    configured = False

    def __init__(self):
        self.storage = NullObjectStorage()
        self.auth = NullAuthProvider()

    @asynccontextmanager
    async def client(self) -> AsyncIterator[DataClient]:
        yield NullDataClient()


def create_backend(settings: Settings, engine: Optional[AsyncEngine] = None) -> Backend:
    """Pick the backend implementation from configuration."""
    if settings.storage_dir and (engine is not None or settings.database_url):
        logger.info("Using database backend")
        return DatabaseBackend(settings, engine=engine)

    logger.warning("DATABASE_URL or STORAGE_DIR is not set; using the null backend")
    return NullBackend()
