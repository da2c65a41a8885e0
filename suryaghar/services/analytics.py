"""
Dashboard overview figures.
"""
from collections import Counter
from datetime import datetime
from typing import Iterable, List

from suryaghar.core.backend import DataClient
from suryaghar.models import Applicant, Job, JobApplication
from suryaghar.models.constants import ApplicantStatus, JobStatus

MONTHS_SHOWN = 6


def applicant_totals(applicants: Iterable[Applicant]) -> dict:
    statuses = Counter(a.status for a in applicants)
    return {
        "total": sum(statuses.values()),
        "pending": statuses.get(ApplicantStatus.PENDING.value, 0),
        "approved": statuses.get(ApplicantStatus.APPROVED.value, 0),
        "rejected": statuses.get(ApplicantStatus.REJECTED.value, 0),
    }


def distribution(values: Iterable[str]) -> List[dict]:
    """``[{"name", "value"}]`` in first-seen order, the shape charts take."""
    counts = Counter(values)
    return [{"name": name, "value": value} for name, value in counts.items()]


def monthly_trend(dates: Iterable[datetime], months: int = MONTHS_SHOWN) -> List[dict]:
    """Applications per calendar month, the last ``months`` months that have any."""
    counts = Counter((d.year, d.month) for d in dates)
    recent = sorted(counts)[-months:]
    return [
        {"month": datetime(year, month, 1).strftime("%b %Y"), "applications": counts[(year, month)]}
        for year, month in recent
    ]


async def applicant_overview(client: DataClient) -> dict:
    applicants = await client.select(Applicant, order_by=Applicant.created_at.asc())
    return {
        "stats": applicant_totals(applicants),
        "by_state": distribution(a.state for a in applicants),
        "by_position": distribution(a.position for a in applicants),
        "monthly": monthly_trend(a.created_at for a in applicants),
    }


async def job_stats(client: DataClient) -> dict:
    approved = await client.select(Job, Job.status == JobStatus.APPROVED.value)
    applications = await client.select(JobApplication)
    return {
        "total_jobs": await client.count(Job),
        "pending_jobs": await client.count(Job, Job.status == JobStatus.PENDING.value),
        "total_applications": len(applications),
        "jobs_by_category": dict(Counter(j.category for j in approved)),
        "applications_by_status": dict(Counter(a.status for a in applications)),
    }


async def dashboard_overview(client: DataClient) -> dict:
    return {
        **await applicant_overview(client),
        "jobs": await job_stats(client),
    }
