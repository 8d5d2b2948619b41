"""Exceptions raised by the CareerConnect client."""
from __future__ import annotations


class CareerConnectError(Exception):
    """Base class for all client errors."""


class ApiError(CareerConnectError):
    """The backend could not be reached or answered with an error status."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code

    @property
    def not_found(self) -> bool:
        return self.status_code == 404

    @property
    def retryable(self) -> bool:
        # Connection failures carry no status; 5xx may succeed next time.
        return self.status_code is None or self.status_code >= 500


class ResumeValidationError(CareerConnectError):
    """Resume rejected locally before any upload was attempted."""


class UploadInProgress(CareerConnectError):
    """A resume upload is already running for this profile."""


class ProfileSaveError(CareerConnectError):
    """Saving the profile failed; local edits are kept but still unsaved."""
