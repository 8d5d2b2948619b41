"""Data models for listings, applications, profiles and sessions."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any


class ExperienceLevel(str, Enum):
    ENTRY = "Entry"
    MID = "Mid"
    SENIOR = "Senior"
    LEAD = "Lead"
    EXECUTIVE = "Executive"


class JobType(str, Enum):
    FULL_TIME = "Full-time"
    PART_TIME = "Part-time"
    CONTRACT = "Contract"
    REMOTE = "Remote"
    HYBRID = "Hybrid"


class ApplicationStatus(str, Enum):
    APPLIED = "applied"
    UNDER_REVIEW = "under review"
    SHORTLISTED = "shortlisted"
    REJECTED = "rejected"
    HIRED = "hired"

    @classmethod
    def parse(cls, value: Any) -> "ApplicationStatus | None":
        """Case-insensitive lookup; unknown values give None."""
        return _enum_or_none(cls, str(value or "").strip().lower())


CANDIDATE_ROLE = "candidate"
COMPANY_ROLE = "company"


def parse_timestamp(value: Any) -> datetime | None:
    """ISO-8601 string (``Z`` suffix allowed) or datetime → aware datetime."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        dt = value
    else:
        dt = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def _optional_int(value: Any) -> int | None:
    if value is None or value == "":
        return None
    return int(value)


def _enum_or_none(enum_cls: type[Enum], value: Any) -> Any:
    if not value:
        return None
    try:
        return enum_cls(value)
    except ValueError:
        return None


@dataclass(frozen=True)
class FilterState:
    keyword: str = ""
    location: str = ""
    skills: frozenset[str] = frozenset()
    experience_level: ExperienceLevel | None = None
    job_type: frozenset[JobType] = frozenset()
    salary_min: int | None = None
    salary_max: int | None = None


@dataclass(frozen=True)
class Company:
    name: str
    logo: str | None = None
    location: str | None = None
    size: str | None = None
    industry: str | None = None

    @classmethod
    def from_api(cls, data: Any) -> "Company":
        if isinstance(data, str):
            return cls(name=data)
        data = data or {}
        return cls(
            name=data.get("name", ""),
            logo=data.get("logo"),
            location=data.get("location"),
            size=data.get("size"),
            industry=data.get("industry"),
        )


@dataclass(frozen=True)
class JobListing:
    id: str
    title: str
    company: Company
    location: str = ""
    description: str = ""
    skills: tuple[str, ...] = ()
    salary_min: int | None = None
    salary_max: int | None = None
    posted_at: datetime | None = None
    job_type: JobType | None = None
    experience_level: ExperienceLevel | None = None
    benefits: tuple[str, ...] = ()
    application_deadline: datetime | None = None
    has_applied: bool = False

    @property
    def salary_disclosed(self) -> bool:
        return self.salary_min is not None or self.salary_max is not None

    @classmethod
    def from_api(cls, data: dict) -> "JobListing":
        return cls(
            id=str(data.get("_id") or data.get("id") or ""),
            title=data.get("title", ""),
            company=Company.from_api(data.get("company")),
            location=data.get("location", "") or "",
            description=data.get("description", "") or "",
            skills=tuple(data.get("skills") or ()),
            salary_min=_optional_int(data.get("salaryMin")),
            salary_max=_optional_int(data.get("salaryMax")),
            posted_at=parse_timestamp(data.get("createdAt") or data.get("postedDate")),
            job_type=_enum_or_none(JobType, data.get("type")),
            experience_level=_enum_or_none(ExperienceLevel, data.get("experienceLevel")),
            benefits=tuple(data.get("benefits") or ()),
            application_deadline=parse_timestamp(data.get("applicationDeadline")),
            has_applied=bool(data.get("hasApplied", False)),
        )


@dataclass(frozen=True)
class Application:
    id: str
    job: JobListing
    # None when the backend sends a status this client does not know.
    status: ApplicationStatus | None
    applied_at: datetime | None = None
    last_updated: datetime | None = None

    @classmethod
    def from_api(cls, data: dict) -> "Application":
        return cls(
            id=str(data.get("_id") or data.get("id") or ""),
            job=JobListing.from_api(data.get("job") or {}),
            status=ApplicationStatus.parse(data.get("status") or ApplicationStatus.APPLIED.value),
            applied_at=parse_timestamp(data.get("appliedDate") or data.get("appliedAt")),
            last_updated=parse_timestamp(data.get("lastUpdated")),
        )


@dataclass(frozen=True)
class Session:
    """The authenticated user, passed explicitly to flows that need it."""

    user_id: str
    name: str
    email: str
    role: str
    raw: dict = field(default_factory=dict, compare=False)

    @property
    def is_candidate(self) -> bool:
        return self.role == CANDIDATE_ROLE

    @classmethod
    def from_api(cls, data: dict) -> "Session":
        user = data.get("user", data)
        return cls(
            user_id=str(user.get("_id") or user.get("id") or ""),
            name=user.get("name", ""),
            email=user.get("email", ""),
            role=user.get("role", CANDIDATE_ROLE),
            raw=user,
        )


@dataclass
class Profile:
    name: str = ""
    email: str = ""
    location: str = ""
    phone: str = ""
    bio: str = ""
    skills: list[str] = field(default_factory=list)
    experience: list[dict] = field(default_factory=list)
    education: list[dict] = field(default_factory=list)
    resume: dict | None = None

    def to_api(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "email": self.email,
            "location": self.location,
            "phone": self.phone,
            "bio": self.bio,
            "skills": list(self.skills),
            "experience": list(self.experience),
            "education": list(self.education),
        }

    @classmethod
    def from_user(cls, user: dict) -> "Profile":
        return cls(
            name=user.get("name") or "",
            email=user.get("email") or "",
            location=user.get("location") or "",
            phone=user.get("phone") or "",
            bio=user.get("bio") or "",
            skills=list(dict.fromkeys(user.get("skills") or [])),
            experience=list(user.get("experience") or []),
            education=list(user.get("education") or []),
            resume=user.get("resume"),
        )
