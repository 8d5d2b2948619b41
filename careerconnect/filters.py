"""Search filter state and its translation into /jobs query parameters."""
from __future__ import annotations

from dataclasses import fields, replace
from typing import Any, Iterable

from careerconnect.log import get_logger
from careerconnect.models import ExperienceLevel, FilterState, JobType

log = get_logger(__name__)

POPULAR_SKILLS: list[str] = [
    "JavaScript", "React", "Node.js", "Python", "Java", "TypeScript",
    "AWS", "Docker", "MongoDB", "PostgreSQL", "Git", "Agile",
]

_FIELD_NAMES = frozenset(f.name for f in fields(FilterState))

# Free-text terms survive clear(); everything else is a facet.
_FACET_DEFAULTS: dict[str, Any] = {
    "skills": frozenset(),
    "job_type": frozenset(),
    "experience_level": None,
    "salary_min": None,
    "salary_max": None,
}

_WIRE_NAMES: dict[str, str] = {
    "keyword": "keyword",
    "location": "location",
    "skills": "skills",
    "job_type": "jobType",
    "experience_level": "experienceLevel",
    "salary_min": "salaryMin",
    "salary_max": "salaryMax",
}


def _normalise(name: str, value: Any) -> Any:
    if name == "skills":
        return frozenset(value or ())
    if name == "job_type":
        return frozenset(JobType(v) for v in value or ())
    if name == "experience_level":
        return ExperienceLevel(value) if value else None
    if name in ("salary_min", "salary_max"):
        if value is None or value == "":
            return None
        return int(value)
    return "" if value is None else str(value)


class FilterStore:
    """Holds the current FilterState and applies partial updates to it."""

    def __init__(self, initial: FilterState | None = None) -> None:
        self._state = initial or FilterState()

    @property
    def state(self) -> FilterState:
        return self._state

    def apply(self, **partial: Any) -> FilterState:
        """Shallow-merge ``partial`` over the current state."""
        unknown = set(partial) - _FIELD_NAMES
        if unknown:
            raise TypeError(f"Unknown filter keys: {', '.join(sorted(unknown))}")
        changes = {name: _normalise(name, value) for name, value in partial.items()}
        self._state = replace(self._state, **changes)
        log.debug("Filters updated: %s", sorted(changes))
        return self._state

    def clear(self) -> FilterState:
        """Reset every facet; keyword and location are kept verbatim."""
        self._state = replace(self._state, **_FACET_DEFAULTS)
        return self._state

    def toggle_skill(self, skill: str) -> FilterState:
        return self.apply(skills=toggle(self._state.skills, skill))

    def toggle_job_type(self, job_type: JobType | str) -> FilterState:
        return self.apply(job_type=toggle(self._state.job_type, JobType(job_type)))

    def active_count(self) -> int:
        return active_filter_count(self._state)


def toggle(values: Iterable[Any], item: Any) -> frozenset:
    """Symmetric difference with a single item."""
    return frozenset(values) ^ {item}


def active_filter_count(state: FilterState) -> int:
    count = 0
    for f in fields(state):
        value = getattr(state, f.name)
        if value is None or value == "" or value == frozenset():
            continue
        count += 1
    return count


def _wire_value(value: Any) -> str:
    if isinstance(value, (set, frozenset, list, tuple)):
        return ",".join(sorted(_wire_value(v) for v in value))
    if isinstance(value, (ExperienceLevel, JobType)):
        return value.value
    if isinstance(value, bool):
        raise TypeError("boolean filter values are not supported")
    return str(value)


def build_query_params(state: FilterState) -> dict[str, str]:
    """Flatten filter state into /jobs query parameters.

    Empty strings, empty sets and ``None`` are dropped so the backend reads
    "no constraint" for that facet. Numeric ``0`` is a real bound and kept.
    """
    params: dict[str, str] = {}
    for name, wire_name in _WIRE_NAMES.items():
        value = getattr(state, name)
        if value is None:
            continue
        text = _wire_value(value)
        if text == "":
            continue
        params[wire_name] = text
    return params
