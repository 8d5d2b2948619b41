"""Editable profile form state and the resume upload side-channel."""
from __future__ import annotations

import copy
from pathlib import PurePath
from typing import Any

from careerconnect.api import ApiClient
from careerconnect.config import MAX_RESUME_BYTES
from careerconnect.errors import ApiError, ProfileSaveError, ResumeValidationError, UploadInProgress
from careerconnect.log import get_logger
from careerconnect.models import Profile, Session

log = get_logger(__name__)

ALLOWED_RESUME_TYPES: dict[str, str] = {
    "application/pdf": ".pdf",
    "application/msword": ".doc",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document": ".docx",
}

_EDITABLE = frozenset({"name", "email", "location", "phone", "bio", "experience", "education"})


def validate_resume(filename: str, content_type: str, size: int, max_bytes: int = MAX_RESUME_BYTES) -> None:
    """Raise ResumeValidationError unless the file is a PDF/Word doc within the size limit."""
    if content_type not in ALLOWED_RESUME_TYPES:
        raise ResumeValidationError("Please upload a PDF or Word document")
    if size > max_bytes:
        raise ResumeValidationError(f"File size must be less than {max_bytes // (1024 * 1024)}MB")
    log.debug("Resume %s (%s, %d bytes) passed validation", PurePath(filename).name, content_type, size)


def merge_skills(current: list[str], incoming: list[str]) -> list[str]:
    """Order-preserving union; existing skills keep their position."""
    return list(dict.fromkeys([*current, *incoming]))


class ProfileEditor:
    def __init__(self, client: ApiClient, profile: Profile | None = None,
                 max_resume_bytes: int = MAX_RESUME_BYTES) -> None:
        self.client = client
        self.profile = profile or Profile()
        # Last state known to match the server.
        self.saved = copy.deepcopy(self.profile)
        self.max_resume_bytes = max_resume_bytes
        self.uploading = False

    @property
    def dirty(self) -> bool:
        return self.profile != self.saved

    @classmethod
    def from_session(cls, client: ApiClient, session: Session, **kwargs: Any) -> "ProfileEditor":
        return cls(client, Profile.from_user(session.raw or {"name": session.name, "email": session.email}),
                   **kwargs)

    def update(self, **fields: Any) -> Profile:
        unknown = set(fields) - _EDITABLE
        if unknown:
            raise TypeError(f"Not editable: {', '.join(sorted(unknown))}")
        for name, value in fields.items():
            setattr(self.profile, name, value)
        return self.profile

    def add_skill(self, skill: str) -> bool:
        skill = skill.strip()
        if not skill or skill in self.profile.skills:
            return False
        self.profile.skills.append(skill)
        return True

    def remove_skill(self, skill: str) -> None:
        self.profile.skills = [s for s in self.profile.skills if s != skill]

    def save(self) -> Profile:
        """PUT the profile. On failure the edits stay in place, still unsaved."""
        try:
            self.client.update_profile(self.profile.to_api())
        except ApiError as exc:
            log.error("Profile save failed: %s", exc)
            raise ProfileSaveError("Failed to update profile. Please try again.") from exc
        self.saved = copy.deepcopy(self.profile)
        log.info("Profile saved for %s", self.profile.email or "<no email>")
        return self.profile

    def upload_resume(self, filename: str, content: bytes, content_type: str) -> dict:
        """Validate locally, upload once, then merge the parsed skills.

        Returns the backend's response (``url``, ``parsedData``...).
        """
        validate_resume(filename, content_type, len(content), self.max_resume_bytes)
        if self.uploading:
            raise UploadInProgress("A resume upload is already in progress")

        self.uploading = True
        try:
            data = self.client.upload_resume(filename, content, content_type)
        finally:
            self.uploading = False

        parsed = (data or {}).get("parsedData") or {}
        if parsed.get("skills"):
            self.profile.skills = merge_skills(self.profile.skills, list(parsed["skills"]))
        self.profile.resume = data
        log.info("Uploaded resume %s; %d parsed skill(s)", filename, len(parsed.get("skills") or []))
        return data
