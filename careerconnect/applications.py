"""Job detail / apply flow and the candidate's application board."""
from __future__ import annotations

from dataclasses import replace
from enum import Enum

from careerconnect.api import ApiClient
from careerconnect.config import Settings
from careerconnect.demo import demo_applications, demo_job
from careerconnect.errors import ApiError
from careerconnect.log import get_logger
from careerconnect.models import Application, ApplicationStatus, JobListing, Session

log = get_logger(__name__)

DEFAULT_COVER_LETTER = "Applied through CareerConnect platform"
ROLE_REJECTED_MESSAGE = "Only candidates can apply for jobs"
APPLY_FAILED_MESSAGE = "Failed to submit application. Please try again."


class DetailState(str, Enum):
    LOADING = "loading"
    FOUND = "found"
    NOT_FOUND = "not_found"


class ApplyState(str, Enum):
    NOT_APPLIED = "not_applied"
    APPLYING = "applying"
    APPLIED = "applied"


class ApplyOutcome(str, Enum):
    SUBMITTED = "submitted"
    ALREADY_APPLIED = "already_applied"
    LOGIN_REQUIRED = "login_required"
    ROLE_REJECTED = "role_rejected"
    IN_PROGRESS = "in_progress"
    FAILED = "failed"


class JobDetailFlow:
    """Fetch one listing and drive the candidate's application to it."""

    def __init__(self, client: ApiClient, job_id: str, settings: Settings) -> None:
        self.client = client
        self.job_id = job_id
        self.settings = settings
        self.state = DetailState.LOADING
        self.apply_state = ApplyState.NOT_APPLIED
        self.job: JobListing | None = None
        self.error: str | None = None

    def load(self) -> DetailState:
        try:
            self.job = JobListing.from_api(self.client.get_job(self.job_id))
        except ApiError as exc:
            if not exc.not_found and self.settings.use_demo_data:
                log.warning("Job %s fetch failed (%s); showing demo listing", self.job_id, exc)
                self.job = demo_job(self.job_id)
            else:
                log.warning("Job %s unavailable: %s", self.job_id, exc)
                self.error = None if exc.not_found else exc.message
                self.state = DetailState.NOT_FOUND
                return self.state

        self.state = DetailState.FOUND
        if self.job.has_applied:
            self.apply_state = ApplyState.APPLIED
        return self.state

    def apply(self, session: Session | None, cover_letter: str = DEFAULT_COVER_LETTER) -> ApplyOutcome:
        if self.state is not DetailState.FOUND:
            raise RuntimeError("cannot apply before the job is loaded")
        if self.apply_state is ApplyState.APPLIED:
            return ApplyOutcome.ALREADY_APPLIED
        if session is None:
            return ApplyOutcome.LOGIN_REQUIRED
        if not session.is_candidate:
            self.error = ROLE_REJECTED_MESSAGE
            return ApplyOutcome.ROLE_REJECTED
        if self.apply_state is ApplyState.APPLYING:
            return ApplyOutcome.IN_PROGRESS

        self.apply_state = ApplyState.APPLYING
        self.error = None
        try:
            self.client.apply_to_job(self.job_id, cover_letter)
        except ApiError as exc:
            log.error("Apply to %s failed: %s", self.job_id, exc)
            self.apply_state = ApplyState.NOT_APPLIED
            self.error = APPLY_FAILED_MESSAGE
            return ApplyOutcome.FAILED

        # Optimistic: the server owns later status changes, no re-fetch here.
        self.apply_state = ApplyState.APPLIED
        log.info("Applied to job %s as %s", self.job_id, session.email)
        return ApplyOutcome.SUBMITTED


STATUS_TABS: list[tuple[str, str]] = [
    ("all", "All Applications"),
    (ApplicationStatus.APPLIED.value, "Applied"),
    (ApplicationStatus.UNDER_REVIEW.value, "Under Review"),
    (ApplicationStatus.SHORTLISTED.value, "Shortlisted"),
    (ApplicationStatus.REJECTED.value, "Rejected"),
]

PROGRESS_STAGES: list[tuple[str, frozenset[ApplicationStatus]]] = [
    ("Under Review", frozenset({ApplicationStatus.UNDER_REVIEW, ApplicationStatus.SHORTLISTED,
                                ApplicationStatus.HIRED})),
    ("Shortlisted", frozenset({ApplicationStatus.SHORTLISTED, ApplicationStatus.HIRED})),
    ("Hired", frozenset({ApplicationStatus.HIRED})),
]


def progress(application: Application) -> list[tuple[str, bool]]:
    """Timeline stages and whether each has been reached."""
    return [(label, application.status in reached) for label, reached in PROGRESS_STAGES]


class ApplicationsBoard:
    def __init__(self, client: ApiClient, settings: Settings) -> None:
        self.client = client
        self.settings = settings
        self.applications: list[Application] = []
        self.error: ApiError | None = None
        self.demo = False

    def load(self) -> list[Application]:
        try:
            payload = self.client.get_my_applications()
        except ApiError as exc:
            self.error = exc
            if self.settings.use_demo_data:
                log.warning("Applications fetch failed (%s); showing demo data", exc)
                self.applications = demo_applications()
                self.demo = True
            else:
                log.error("Applications fetch failed: %s", exc)
                self.applications = []
            return self.applications

        items = payload if isinstance(payload, list) else (payload or {}).get("applications") or []
        self.applications = [Application.from_api(item) for item in items]
        self.error = None
        self.demo = False
        return self.applications

    def filter(self, status_key: str = "all") -> list[Application]:
        if status_key == "all":
            return list(self.applications)
        wanted = status_key.lower()
        return [a for a in self.applications if a.status is not None and a.status.value == wanted]

    def status_counts(self) -> dict[str, int]:
        return {key: len(self.filter(key)) for key, _ in STATUS_TABS}

    def update_status(self, application_id: str, status: ApplicationStatus | str) -> Application:
        """PATCH the status; the server's answer wins over the requested value."""
        status = ApplicationStatus(status)
        payload = self.client.update_application_status(application_id, status.value) or {}
        confirmed = ApplicationStatus.parse(payload.get("status") or status.value)
        if confirmed is None:
            log.warning("Unrecognised status %r for application %s", payload.get("status"), application_id)
        for i, app in enumerate(self.applications):
            if app.id == application_id:
                self.applications[i] = replace(app, status=confirmed)
                return self.applications[i]
        raise KeyError(application_id)
