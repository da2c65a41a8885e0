"""
CSV exports for the admin panels.
"""
import csv
import io
from datetime import datetime
from typing import Callable, Iterable, List, Sequence, Tuple

from suryaghar.models import Applicant, JobApplication

Column = Tuple[str, Callable[[object], object]]


def _date(value: datetime) -> str:
    return value.strftime("%d/%m/%Y") if value else ""


APPLICANT_COLUMNS: List[Column] = [
    ("Name", lambda a: a.full_name),
    ("Email", lambda a: a.email),
    ("Mobile", lambda a: a.mobile),
    ("State", lambda a: a.state),
    ("District", lambda a: a.district),
    ("Position", lambda a: a.position),
    ("Qualification", lambda a: a.qualification),
    ("Experience", lambda a: f"{a.experience:g} years"),
    ("Status", lambda a: a.status),
    ("Applied On", lambda a: _date(a.created_at)),
]

JOB_APPLICATION_COLUMNS: List[Column] = [
    ("Name", lambda a: a.full_name),
    ("Email", lambda a: a.email),
    ("Mobile", lambda a: a.mobile),
    ("WhatsApp", lambda a: a.whatsapp),
    ("City", lambda a: a.city),
    ("Status", lambda a: a.status),
    ("Rating", lambda a: a.rating or ""),
    ("Message", lambda a: a.message or ""),
    ("Resume", lambda a: a.resume_url or ""),
    ("Applied On", lambda a: _date(a.created_at)),
]


FORMULA_PREFIXES = ("=", "+", "-", "@", "\t", "\r")


def _cell(value: object) -> object:
    # spreadsheets evaluate text starting with these as a formula
    if isinstance(value, str) and value.startswith(FORMULA_PREFIXES):
        return "'" + value
    return value


def to_csv(rows: Iterable[object], columns: Sequence[Column]) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer)
    writer.writerow([header for header, _ in columns])
    for row in rows:
        writer.writerow([_cell(getter(row)) for _, getter in columns])
    return buffer.getvalue()


def applicants_csv(applicants: Iterable[Applicant]) -> str:
    return to_csv(applicants, APPLICANT_COLUMNS)


def job_applications_csv(applications: Iterable[JobApplication]) -> str:
    return to_csv(applications, JOB_APPLICATION_COLUMNS)


def export_filename(prefix: str) -> str:
    return f"{prefix}_{datetime.now().strftime('%Y-%m-%d')}.csv"
