"""
Form validation helpers.

Whole-form validation on submit raises ``FormValidationException`` with a
``{field: message}`` map before anything is stored. Field-level
validation (the "on blur" check) validates a partial payload and reports
only the field that was asked about.
"""
from typing import Any, Dict, Mapping, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError

from suryaghar.core.exceptions import FormValidationException
from suryaghar.models import (
    ApplicantCreate,
    GalleryImageCreate,
    JobApplicationCreate,
    JobCreate,
    LoginRequest,
    RegisterRequest,
    StateManagerCreate,
    TestimonialCreate,
    VideoCreate,
)

SchemaType = TypeVar("SchemaType", bound=BaseModel)

FORMS: Dict[str, Type[BaseModel]] = {
    "application": ApplicantCreate,
    "job": JobCreate,
    "job-application": JobApplicationCreate,
    "login": LoginRequest,
    "register": RegisterRequest,
    "state-manager": StateManagerCreate,
    "testimonial": TestimonialCreate,
    "gallery": GalleryImageCreate,
    "video": VideoCreate,
}

REQUIRED_MESSAGE = "This field is required"


def _message(error: dict) -> str:
    if error["type"] == "missing":
        return REQUIRED_MESSAGE
    return error["msg"].removeprefix("Value error, ")


def error_map(exc: ValidationError) -> Dict[str, str]:
    """First message per field."""
    errors: Dict[str, str] = {}
    for error in exc.errors():
        field = ".".join(str(p) for p in error["loc"]) or "form"
        errors.setdefault(field, _message(error))
    return errors


def validate_form(schema: Type[SchemaType], data: Mapping[str, Any]) -> SchemaType:
    try:
        return schema.model_validate(dict(data))
    except ValidationError as e:
        raise FormValidationException(error_map(e)) from e


def validate_field(schema: Type[BaseModel], data: Mapping[str, Any], field: str) -> Optional[str]:
    """Message for ``field`` alone; None when it is valid."""
    try:
        schema.model_validate(dict(data))
    except ValidationError as e:
        return error_map(e).get(field)
    return None


def get_form(name: str) -> Optional[Type[BaseModel]]:
    return FORMS.get(name)
