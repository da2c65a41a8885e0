"""
In-memory job search.

Approved jobs are fetched once (newest first, bounded), then keyword,
location, category and type filters, sorting and pagination all run on
the materialised list.
"""
import math
from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from typing import Generic, List, Sequence, TypeVar

from suryaghar.models import Job
from suryaghar.models.constants import ALL_CATEGORIES, ALL_TYPES, JobStatus

T = TypeVar("T")

PAGE_SIZE = 12


class SortOrder(str, Enum):
    RECENT = "recent"
    TITLE = "title"
    LOCATION = "location"


@dataclass(frozen=True)
class JobQuery:
    keyword: str = ""
    location: str = ""
    category: str = ALL_CATEGORIES
    job_type: str = ALL_TYPES
    sort: SortOrder = SortOrder.RECENT

    def normalized(self) -> "JobQuery":
        return replace(
            self,
            keyword=(self.keyword or "").strip(),
            location=(self.location or "").strip(),
            category=self.category or ALL_CATEGORIES,
            job_type=self.job_type or ALL_TYPES,
        )


def matches(job: Job, query: JobQuery) -> bool:
    keyword = query.keyword.lower()
    if keyword and not any(
        keyword in (text or "").lower()
        for text in (job.title, job.organization_name, job.description)
    ):
        return False
    if query.location and query.location.lower() not in (job.location or "").lower():
        return False
    if query.category != ALL_CATEGORIES and job.category != query.category:
        return False
    if query.job_type != ALL_TYPES and job.job_type != query.job_type:
        return False
    return True


def filter_jobs(jobs: Sequence[Job], query: JobQuery) -> List[Job]:
    query = query.normalized()
    return [job for job in jobs if matches(job, query)]


def sort_jobs(jobs: Sequence[Job], order: SortOrder) -> List[Job]:
    if order == SortOrder.TITLE:
        return sorted(jobs, key=lambda j: (j.title or "").lower())
    if order == SortOrder.LOCATION:
        return sorted(jobs, key=lambda j: (j.location or "").lower())
    return sorted(jobs, key=lambda j: j.created_at or datetime.min, reverse=True)


def search(jobs: Sequence[Job], query: JobQuery) -> List[Job]:
    return sort_jobs(filter_jobs(jobs, query), query.sort)


# ==================== Pagination ====================

@dataclass
class Page(Generic[T]):
    items: List[T]
    page: int
    page_size: int
    total: int

    @property
    def pages(self) -> int:
        return math.ceil(self.total / self.page_size) if self.total else 0

    @property
    def has_prev(self) -> bool:
        return self.page > 1

    @property
    def has_next(self) -> bool:
        return self.page < self.pages

    def meta(self) -> dict:
        return {
            "total": self.total,
            "page": self.page,
            "page_size": self.page_size,
            "pages": self.pages,
            "has_prev": self.has_prev,
            "has_next": self.has_next,
        }


def paginate(items: Sequence[T], page: int = 1, page_size: int = PAGE_SIZE) -> Page[T]:
    """Slice one page; out-of-range page numbers are clamped."""
    total = len(items)
    pages = math.ceil(total / page_size) if total else 0
    page = min(max(page, 1), max(pages, 1))
    start = (page - 1) * page_size
    return Page(list(items[start:start + page_size]), page, page_size, total)


@dataclass
class JobListing:
    """
    Listing state for one browsing session.

    Any change of the query resets the current page to 1; ``next_page`` and
    ``prev_page`` do nothing at the bounds.
    """
    jobs: List[Job]
    page_size: int = PAGE_SIZE
    query: JobQuery = field(default_factory=JobQuery)
    page: int = 1

    def __post_init__(self):
        self._results = search(self.jobs, self.query)

    @property
    def results(self) -> List[Job]:
        return self._results

    def set_query(self, query: JobQuery) -> None:
        query = query.normalized()
        if query != self.query:
            self.query = query
            self._results = search(self.jobs, query)
            self.page = 1

    def update(self, **changes) -> None:
        self.set_query(replace(self.query, **changes))

    def current(self) -> Page[Job]:
        return paginate(self._results, self.page, self.page_size)

    def next_page(self) -> None:
        if self.current().has_next:
            self.page += 1

    def prev_page(self) -> None:
        if self.current().has_prev:
            self.page -= 1

    def go_to(self, page: int) -> None:
        self.page = paginate(self._results, page, self.page_size).page


async def load_approved_jobs(client, limit: int) -> List[Job]:
    """Fetch the approved jobs once, newest first, bounded to ``limit``."""
    return await client.select(
        Job,
        Job.status == JobStatus.APPROVED.value,
        order_by=Job.created_at.desc(),
        limit=limit,
    )
