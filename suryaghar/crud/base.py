"""
Generic CRUD over a SQLModel table.

Works directly on SQLModel objects; callers pass plain dicts for writes.
"""
from typing import Any, Dict, Generic, List, Optional, Sequence, Type, TypeVar

from sqlalchemy import delete as sa_delete
from sqlalchemy import func, inspect, select, update as sa_update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import SQLModel

from suryaghar.models.base import utcnow

ModelType = TypeVar("ModelType", bound=SQLModel)


def primary_key(model: Type[SQLModel]):
    return inspect(model).primary_key[0]


class CRUDBase(Generic[ModelType]):
    """CRUD operations for one table."""

    def __init__(self, model: Type[ModelType]):
        self.model = model
        self.pk = primary_key(model)

    async def get(self, db: AsyncSession, id: str) -> Optional[ModelType]:
        result = await db.execute(
            select(self.model).where(self.pk == id)
        )
        return result.scalar_one_or_none()

    async def get_multi(
        self,
        db: AsyncSession,
        *where: Any,
        skip: int = 0,
        limit: Optional[int] = None,
        order_by: Any = None
    ) -> List[ModelType]:
        """Filtered list; ``order_by`` may be one clause or a sequence."""
        query = select(self.model).where(*where)
        if order_by is not None:
            clauses = order_by if isinstance(order_by, (list, tuple)) else (order_by,)
            query = query.order_by(*clauses)
        if skip:
            query = query.offset(skip)
        if limit is not None:
            query = query.limit(limit)
        result = await db.execute(query)
        return list(result.scalars().all())

    async def count(self, db: AsyncSession, *where: Any) -> int:
        result = await db.execute(
            select(func.count()).select_from(self.model).where(*where)
        )
        return result.scalar() or 0

    async def create(self, db: AsyncSession, *, obj_in: Dict[str, Any]) -> ModelType:
        db_obj = self.model(**obj_in)
        db.add(db_obj)
        await db.flush()
        await db.refresh(db_obj)
        return db_obj

    async def update(
        self,
        db: AsyncSession,
        *,
        db_obj: ModelType,
        obj_in: Dict[str, Any]
    ) -> ModelType:
        """Apply ``obj_in`` to ``db_obj``; explicit ``None`` clears a field."""
        for field, value in obj_in.items():
            setattr(db_obj, field, value)
        if hasattr(db_obj, "updated_at") and "updated_at" not in obj_in:
            db_obj.updated_at = utcnow()

        await db.flush()
        await db.refresh(db_obj)
        return db_obj

    async def update_in(
        self,
        db: AsyncSession,
        *,
        ids: Sequence[str],
        values: Dict[str, Any]
    ) -> int:
        """Bulk update by id set; returns the number of rows touched."""
        if not ids:
            return 0
        if "updated_at" in self.model.model_fields and "updated_at" not in values:
            values = {**values, "updated_at": utcnow()}
        result = await db.execute(
            sa_update(self.model)
            .where(self.pk.in_(list(ids)))
            .values(**values)
            .execution_options(synchronize_session="fetch")
        )
        await db.flush()
        return result.rowcount or 0

    async def delete(self, db: AsyncSession, *, id: str) -> bool:
        obj = await self.get(db, id)
        if obj:
            await db.delete(obj)
            await db.flush()
            return True
        return False

    async def delete_where(self, db: AsyncSession, *where: Any) -> int:
        result = await db.execute(sa_delete(self.model).where(*where))
        await db.flush()
        return result.rowcount or 0

    async def swap(self, db: AsyncSession, *, id1: str, id2: str, field: str) -> bool:
        """Exchange ``field`` between two rows inside the current transaction."""
        first = await self.get(db, id1)
        second = await self.get(db, id2)
        if not first or not second:
            return False
        a, b = getattr(first, field), getattr(second, field)
        setattr(first, field, b)
        setattr(second, field, a)
        await db.flush()
        return True
