"""
CRUD layer
"""
from functools import lru_cache
from typing import Type

from sqlmodel import SQLModel

from .base import CRUDBase


@lru_cache(maxsize=None)
def crud_for(model: Type[SQLModel]) -> CRUDBase:
    """One shared CRUD instance per table model."""
    return CRUDBase(model)


__all__ = ["CRUDBase", "crud_for"]
