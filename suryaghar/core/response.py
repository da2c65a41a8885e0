"""
Response envelope.

Every JSON endpoint answers with the same shape:

    {
        "success": true,
        "code": 200,
        "message": "OK",
        "data": {...}
    }
"""
from typing import Any, Generic, Optional, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class ResponseModel(BaseModel, Generic[T]):
    """Uniform response model."""
    success: bool = True
    code: int = 200
    message: str = "OK"
    data: Optional[T] = None


def success_response(
    data: Any = None,
    message: str = "OK",
    code: int = 200
) -> dict:
    return {
        "success": True,
        "code": code,
        "message": message,
        "data": data
    }


def error_response(
    message: str = "Request failed",
    code: int = 400,
    data: Any = None
) -> dict:
    return {
        "success": False,
        "code": code,
        "message": message,
        "data": data
    }


class MessageResponse(ResponseModel[None]):
    """Envelope without payload."""


class DictResponse(ResponseModel[dict]):
    """Envelope around a free-form dict."""


class ListResponse(ResponseModel[list]):
    """Envelope around a plain list."""
