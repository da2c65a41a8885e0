"""
Manual ordering by ``display_order`` (testimonials, videos).
"""
from enum import Enum
from typing import Any, List, Sequence, Type

from loguru import logger
from sqlmodel import SQLModel

from suryaghar.core.backend import DataClient
from suryaghar.core.exceptions import BadRequestException, NotFoundException


class Direction(str, Enum):
    UP = "up"
    DOWN = "down"


async def next_display_order(client: DataClient, model: Type[SQLModel]) -> int:
    """max(display_order) + 1, or 0 for an empty table."""
    rows = await client.select(model, order_by=model.display_order.desc(), limit=1)
    return rows[0].display_order + 1 if rows else 0


async def ordered(client: DataClient, model: Type[SQLModel], *where: Any) -> List[SQLModel]:
    return await client.select(
        model, *where, order_by=(model.display_order.asc(), model.created_at.asc())
    )


async def _renumber(client: DataClient, model: Type[SQLModel], rows: Sequence[SQLModel]) -> None:
    # duplicates make a swap a no-op, so spread them out first
    for index, row in enumerate(rows):
        if row.display_order != index:
            await client.update(model, row.id, {"display_order": index})


async def swap_display_order(client: DataClient, model: Type[SQLModel], first, second) -> None:
    try:
        await client.swap(model, first.id, second.id, "display_order")
    except NotImplementedError:
        logger.warning(f"{model.__tablename__}: atomic swap unavailable, using two updates")
        a, b = first.display_order, second.display_order
        await client.update(model, first.id, {"display_order": b})
        await client.update(model, second.id, {"display_order": a})


async def move(client: DataClient, model: Type[SQLModel], id: str, direction: Direction) -> bool:
    """
    Swap a row with its neighbour. Returns False when already at the edge.
    """
    rows = await ordered(client, model)
    index = next((i for i, row in enumerate(rows) if row.id == id), None)
    if index is None:
        raise NotFoundException(f"Record not found: {id}")

    target = index - 1 if direction == Direction.UP else index + 1
    if target < 0 or target >= len(rows):
        return False

    if len({row.display_order for row in rows}) != len(rows):
        await _renumber(client, model, rows)
        rows = await ordered(client, model)

    await swap_display_order(client, model, rows[index], rows[target])
    await client.commit()
    return True


def parse_direction(value: str) -> Direction:
    try:
        return Direction(value)
    except ValueError:
        raise BadRequestException("Direction must be 'up' or 'down'") from None
