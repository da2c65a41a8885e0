"""
Field-level form validation.
"""
from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Query
from pydantic import ValidationError

from suryaghar.core.exceptions import NotFoundException
from suryaghar.core.response import DictResponse, success_response
from suryaghar.services.validation import FORMS, error_map, get_form, validate_field

router = APIRouter()


@router.get("", summary="Known forms", response_model=DictResponse)
async def list_forms():
    return success_response(data={"forms": sorted(FORMS)})


@router.post("/{form}", summary="Validate a form or one field", response_model=DictResponse)
async def validate(
    form: str,
    payload: Dict[str, Any] = Body(...),
    field: Optional[str] = Query(None, description="Only report this field"),
):
    """
    With ``field`` set, only that field's message is returned (on-blur check).
    Without it, every failing field is returned. Nothing is stored either way.
    """
    schema = get_form(form)
    if schema is None:
        raise NotFoundException(f"Unknown form: {form}")

    if field:
        message = validate_field(schema, payload, field)
        return success_response(data={"field": field, "valid": message is None, "message": message})

    try:
        schema.model_validate(payload)
        errors: Dict[str, str] = {}
    except ValidationError as e:
        errors = error_map(e)
    return success_response(data={"valid": not errors, "errors": errors})
