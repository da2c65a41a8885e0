"""
Shared field rules
"""
import pytest
from pydantic import ValidationError

from suryaghar.core.exceptions import FormValidationException
from suryaghar.models import ApplicantCreate, JobCreate
from suryaghar.models.fields import is_valid_mobile
from suryaghar.services.validation import error_map, validate_field, validate_form


@pytest.mark.parametrize("mobile, valid", [
    ("9812345670", True),
    ("6000000000", True),
    ("5812345670", False),
    ("981234567", False),
    ("98123456701", False),
    ("98123abc70", False),
    ("", False),
])
def test_mobile_rule(mobile, valid):
    assert is_valid_mobile(mobile) is valid


def test_error_map_keeps_first_message_per_field():
    with pytest.raises(ValidationError) as exc:
        ApplicantCreate.model_validate({"full_name": "Al", "mobile": "1"})
    errors = error_map(exc.value)
    assert errors["full_name"] == "Name must be at least 3 characters"
    assert errors["mobile"] == "Invalid mobile number"
    assert errors["state"] == "This field is required"


def test_validate_form_raises_with_map():
    with pytest.raises(FormValidationException) as exc:
        validate_form(JobCreate, {"title": "x"})
    assert exc.value.code == 422
    assert exc.value.errors["mobile"] == "This field is required"


def test_validate_field_ignores_other_fields():
    assert validate_field(ApplicantCreate, {"email": "a@example.com"}, "email") is None
    assert validate_field(ApplicantCreate, {"email": "nope"}, "email") == "Invalid email address"


def test_job_optional_email_blank_becomes_none():
    data = {
        "title": "T", "category": "NGO Jobs", "job_type": "Volunteer", "location": "Kochi",
        "description": "D", "organization_name": "O", "contact_person": "C",
        "mobile": "9876543210", "whatsapp": "9876543210", "email": "   ",
    }
    assert JobCreate.model_validate(data).email is None
