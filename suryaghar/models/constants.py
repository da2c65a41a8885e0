"""
Fixed enumerations shared by models, forms and filters.
"""
from enum import Enum


class State(str, Enum):
    RAJASTHAN = "Rajasthan"
    ANDHRA_PRADESH = "Andhra Pradesh"
    TELANGANA = "Telangana"
    KARNATAKA = "Karnataka"
    TAMIL_NADU = "Tamil Nadu"
    KERALA = "Kerala"


class Position(str, Enum):
    STATE_PROJECT_MANAGER = "State Project Manager"
    DISTRICT_PROJECT_MANAGER = "District Project Manager"
    PROJECT_FACILITATOR = "Project Facilitator"


class ApplicantStatus(str, Enum):
    PENDING = "Pending"
    APPROVED = "Approved"
    REJECTED = "Rejected"


class LegalDocumentType(str, Enum):
    ORGANIZATION_PAN = "Organization PAN"
    OWNER_PHOTO = "Owner Photo"
    DID = "DID"
    AGREEMENT = "Agreement"
    REG_12A = "12A"
    REG_80G = "80G"
    NGO_DARPAN = "NGO Darpan"
    NITI_AAYOG = "NITI Aayog"
    OWNER_PAN = "Owner PAN"
    CANCEL_CHEQUE = "Cancel Cheque"


class GalleryCategory(str, Enum):
    PROJECTS = "Projects"
    TEAM = "Team"
    EVENTS = "Events"
    CERTIFICATES = "Certificates"


class JobCategory(str, Enum):
    NGO = "NGO Jobs"
    PRIVATE = "Private Jobs"
    ARTIST = "Artist Jobs"
    WORK_FROM_HOME = "Work From Home"
    LOCAL = "Local Jobs"


class JobType(str, Enum):
    FULL_TIME = "Full Time"
    PART_TIME = "Part Time"
    VOLUNTEER = "Volunteer"
    CONTRACT = "Contract"


class JobStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    CLOSED = "closed"


class JobApplicationStatus(str, Enum):
    APPLIED = "applied"
    SHORTLISTED = "shortlisted"
    REJECTED = "rejected"
    ACCEPTED = "accepted"
    ON_HOLD = "on_hold"


class AuditAction(str, Enum):
    APPROVE_JOB = "APPROVE_JOB"
    REJECT_JOB = "REJECT_JOB"
    CLOSE_JOB = "CLOSE_JOB"
    FEATURE_JOB = "FEATURE_JOB"
    UNFEATURE_JOB = "UNFEATURE_JOB"
    DELETE_JOB = "DELETE_JOB"
    BULK_APPROVE_JOB = "BULK_APPROVE_JOB"
    BULK_REJECT_JOB = "BULK_REJECT_JOB"


# Sentinels used by the job portal filters
ALL_CATEGORIES = "All Jobs"
ALL_TYPES = "All"


def values(enum_cls) -> list[str]:
    return [member.value for member in enum_cls]
