"""Turn (request status, listings) into a view model the UI can draw."""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from careerconnect.models import JobListing

SKELETON_COUNT = 3
MAX_CARD_SKILLS = 4
SUMMARY_LENGTH = 150


class RequestStatus(str, Enum):
    LOADING = "loading"
    DONE = "done"


class ViewKind(str, Enum):
    LOADING = "loading"
    EMPTY = "empty"
    POPULATED = "populated"


class SortOrder(str, Enum):
    RECEIVED = "Relevance"
    MOST_RECENT = "Most Recent"
    SALARY_HIGH_LOW = "Salary (High to Low)"
    SALARY_LOW_HIGH = "Salary (Low to High)"
    COMPANY_NAME = "Company Name"


@dataclass(frozen=True)
class JobCard:
    job_id: str
    title: str
    company: str
    location: str
    summary: str
    skills: tuple[str, ...]
    extra_skills: int
    salary: str
    posted: str
    job_type: str
    experience_level: str


@dataclass(frozen=True)
class ListingView:
    kind: ViewKind
    headline: str
    skeletons: int = 0
    cards: list[JobCard] = field(default_factory=list)
    empty_title: str = ""
    empty_hint: str = ""
    offer_clear_filters: bool = False


def format_relative_date(posted_at: datetime, now: datetime | None = None) -> str:
    now = now or datetime.now(timezone.utc)
    days = math.ceil(abs((now - posted_at).total_seconds()) / 86400)
    if days == 1:
        return "1 day ago"
    if days < 7:
        return f"{days} days ago"
    if days < 30:
        return f"{math.ceil(days / 7)} weeks ago"
    return f"{math.ceil(days / 30)} months ago"


def format_salary(salary_min: int | None, salary_max: int | None) -> str:
    """Salaries are stored in thousands."""
    if salary_min is not None and salary_max is not None:
        return f"${salary_min}k - ${salary_max}k"
    if salary_min is not None:
        return f"${salary_min}k+"
    if salary_max is not None:
        return f"Up to ${salary_max}k"
    return "Salary not disclosed"


def _salary_key(job: JobListing) -> int | None:
    if job.salary_max is not None:
        return job.salary_max
    return job.salary_min


def sort_listings(listings: list[JobListing], order: SortOrder) -> list[JobListing]:
    """Return listings in ``order``; undisclosed values always sort last."""
    if order is SortOrder.RECEIVED:
        return list(listings)
    if order is SortOrder.MOST_RECENT:
        return sorted(
            listings,
            key=lambda j: (j.posted_at is None, -(j.posted_at.timestamp() if j.posted_at else 0)),
        )
    if order is SortOrder.SALARY_HIGH_LOW:
        return sorted(listings, key=lambda j: (_salary_key(j) is None, -(_salary_key(j) or 0)))
    if order is SortOrder.SALARY_LOW_HIGH:
        return sorted(listings, key=lambda j: (_salary_key(j) is None, _salary_key(j) or 0))
    return sorted(listings, key=lambda j: j.company.name.casefold())


def summarize(text: str, limit: int = SUMMARY_LENGTH) -> str:
    """First ``limit`` characters, with an ellipsis when anything was cut."""
    text = text.strip()
    if len(text) <= limit:
        return text
    return text[:limit].rstrip() + "..."


def job_card(job: JobListing, now: datetime | None = None) -> JobCard:
    return JobCard(
        job_id=job.id,
        title=job.title,
        company=job.company.name,
        location=job.location,
        summary=summarize(job.description),
        skills=job.skills[:MAX_CARD_SKILLS],
        extra_skills=max(0, len(job.skills) - MAX_CARD_SKILLS),
        salary=format_salary(job.salary_min, job.salary_max),
        posted=format_relative_date(job.posted_at, now) if job.posted_at else "",
        job_type=job.job_type.value if job.job_type else "",
        experience_level=job.experience_level.value if job.experience_level else "",
    )


def render_listings(
    status: RequestStatus,
    listings: list[JobListing],
    order: SortOrder = SortOrder.RECEIVED,
    now: datetime | None = None,
) -> ListingView:
    if status is RequestStatus.LOADING:
        return ListingView(kind=ViewKind.LOADING, headline="Searching...", skeletons=SKELETON_COUNT)

    if not listings:
        return ListingView(
            kind=ViewKind.EMPTY,
            headline="0 Jobs Found",
            empty_title="No jobs found",
            empty_hint="Try adjusting your search criteria or filters",
            offer_clear_filters=True,
        )

    cards = [job_card(j, now) for j in sort_listings(listings, order)]
    return ListingView(kind=ViewKind.POPULATED, headline=f"{len(cards)} Jobs Found", cards=cards)
