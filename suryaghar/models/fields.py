"""
Reusable validated field types.

Every form shares these so a rule is written once; the messages are the
ones shown next to the offending input.
"""
import re
from typing import Annotated, Optional

from email_validator import EmailNotValidError, validate_email
from pydantic import AfterValidator, BeforeValidator

from .constants import (
    ApplicantStatus,
    GalleryCategory,
    JobApplicationStatus,
    JobCategory,
    JobStatus,
    JobType,
    LegalDocumentType,
    Position,
    State,
    values,
)

MOBILE_PATTERN = re.compile(r"^[6-9]\d{9}$")
LETTERS_AND_SPACES = re.compile(r"^[A-Za-z\s]+$")
OTP_PATTERN = re.compile(r"^\d{4}$")


def is_valid_mobile(value: str) -> bool:
    return bool(MOBILE_PATTERN.fullmatch(value or ""))


def _required(value: str) -> str:
    if not value:
        raise ValueError("This field is required")
    return value


def _mobile(value: str) -> str:
    if not is_valid_mobile(value):
        raise ValueError("Invalid mobile number")
    return value


def _email(value: str) -> str:
    try:
        info = validate_email(value, check_deliverability=False)
    except EmailNotValidError:
        raise ValueError("Invalid email address") from None
    return info.normalized


def _blank_to_none(value):
    if isinstance(value, str) and not value.strip():
        return None
    return value


def _min_length(n: int, message: str):
    def check(value: str) -> str:
        if len(value) < n:
            raise ValueError(message)
        return value
    return check


def _one_of(allowed: list[str], message: str):
    def check(value: str) -> str:
        if value not in allowed:
            raise ValueError(message)
        return value
    return check


def _non_negative(value: float) -> float:
    if value < 0:
        raise ValueError("Experience cannot be negative")
    return value


def _letters_and_spaces(value: str) -> str:
    _required(value)
    if not LETTERS_AND_SPACES.fullmatch(value):
        raise ValueError("Name should contain only letters and spaces")
    return value


def _otp(value: str) -> str:
    if not OTP_PATTERN.fullmatch(value):
        raise ValueError("Code must be 4 digits")
    return value


def _rating(value: int) -> int:
    if not 1 <= value <= 5:
        raise ValueError("Rating must be between 1 and 5")
    return value


RequiredStr = Annotated[str, AfterValidator(_required)]
MobileStr = Annotated[str, AfterValidator(_mobile)]
EmailStr = Annotated[str, AfterValidator(_email)]
OptionalEmailStr = Annotated[Optional[EmailStr], BeforeValidator(_blank_to_none)]
PersonName = Annotated[str, AfterValidator(_min_length(3, "Name must be at least 3 characters"))]
LettersName = Annotated[str, AfterValidator(_letters_and_spaces)]
Password = Annotated[str, AfterValidator(_min_length(6, "Password must be at least 6 characters"))]
Username = Annotated[str, AfterValidator(_min_length(3, "Username must be at least 3 characters"))]
OtpCode = Annotated[str, AfterValidator(_otp)]
Experience = Annotated[float, AfterValidator(_non_negative)]
Rating = Annotated[int, AfterValidator(_rating)]

StateName = Annotated[str, AfterValidator(_one_of(values(State), "Please select a state"))]
PositionName = Annotated[str, AfterValidator(_one_of(values(Position), "Please select a position"))]
ApplicantStatusName = Annotated[str, AfterValidator(_one_of(values(ApplicantStatus), "Invalid status"))]
LegalDocumentName = Annotated[
    str, AfterValidator(_one_of(values(LegalDocumentType), "Please select a document type"))
]
GalleryCategoryName = Annotated[
    str, AfterValidator(_one_of(values(GalleryCategory), "Please select a category"))
]
JobCategoryName = Annotated[str, AfterValidator(_one_of(values(JobCategory), "Please select a category"))]
JobTypeName = Annotated[str, AfterValidator(_one_of(values(JobType), "Please select a job type"))]
JobStatusName = Annotated[str, AfterValidator(_one_of(values(JobStatus), "Invalid status"))]
JobApplicationStatusName = Annotated[
    str, AfterValidator(_one_of(values(JobApplicationStatus), "Invalid status"))
]
