"""Thin REST client for the CareerConnect backend.

Pure request/response mapping: every method returns decoded JSON or raises
:class:`ApiError`. Session cookies live on the underlying
``requests.Session`` so credentials travel with every call.
"""
from __future__ import annotations

from typing import Any

import requests

from careerconnect.config import Settings
from careerconnect.errors import ApiError
from careerconnect.log import get_logger
from careerconnect.retry import retry

log = get_logger(__name__)


def _error_message(r: requests.Response) -> str:
    try:
        body = r.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return f"{r.request.method} {r.url} returned {r.status_code}"


class ApiClient:
    def __init__(self, settings: Settings, session: requests.Session | None = None) -> None:
        self.base_url = settings.api_url.rstrip("/")
        self.timeout = settings.timeout
        self.http = session or requests.Session()
        self.http.headers.setdefault("Accept", "application/json")

    def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        url = f"{self.base_url}{path}"
        kwargs.setdefault("timeout", self.timeout)
        try:
            r = self.http.request(method, url, **kwargs)
        except requests.RequestException as exc:
            log.warning("%s %s failed: %s", method, path, exc)
            raise ApiError(f"Could not reach the server: {exc}") from exc

        if not r.ok:
            message = _error_message(r)
            log.warning("%s %s → %d %s", method, path, r.status_code, message)
            raise ApiError(message, status_code=r.status_code)

        log.debug("%s %s → %d", method, path, r.status_code)
        if not r.content:
            return {}
        try:
            return r.json()
        except ValueError as exc:
            raise ApiError(f"Invalid JSON from {path}", status_code=r.status_code) from exc

    # ── Auth ─────────────────────────────────────────────────────────────

    def login(self, email: str, password: str) -> dict:
        return self._request("POST", "/auth/login", json={"email": email, "password": password})

    def register(self, user_data: dict) -> dict:
        return self._request("POST", "/auth/register", json=user_data)

    def logout(self) -> dict:
        return self._request("POST", "/auth/logout")

    @retry()
    def get_current_user(self) -> dict:
        return self._request("GET", "/auth/profile")

    # ── Jobs ─────────────────────────────────────────────────────────────

    @retry()
    def get_jobs(self, params: dict[str, str]) -> dict:
        return self._request("GET", "/jobs", params=params)

    @retry()
    def get_job(self, job_id: str) -> dict:
        return self._request("GET", f"/jobs/{job_id}")

    def apply_to_job(self, job_id: str, cover_letter: str) -> dict:
        return self._request("POST", f"/jobs/{job_id}/apply", json={"coverLetter": cover_letter})

    # ── Applications ─────────────────────────────────────────────────────

    @retry()
    def get_my_applications(self) -> Any:
        return self._request("GET", "/applications/my")

    def update_application_status(self, application_id: str, status: str) -> dict:
        return self._request("PATCH", f"/applications/{application_id}", json={"status": status})

    # ── Profile ──────────────────────────────────────────────────────────

    def update_profile(self, profile_data: dict) -> dict:
        return self._request("PUT", "/profile", json=profile_data)

    def upload_resume(self, filename: str, content: bytes, content_type: str) -> dict:
        files = {"resume": (filename, content, content_type)}
        return self._request("POST", "/profile/resume", files=files)
