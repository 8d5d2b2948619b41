"""Shared fixtures: a mocked API client and settings with demo data off."""
from datetime import datetime, timezone
from unittest.mock import MagicMock, patch

import pytest

from careerconnect.api import ApiClient
from careerconnect.config import Settings
from careerconnect.models import Session

NOW = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def settings():
    return Settings(api_url="http://api.test/api", timeout=1.0, use_demo_data=False)


@pytest.fixture
def demo_settings():
    return Settings(api_url="http://api.test/api", timeout=1.0, use_demo_data=True)


@pytest.fixture
def client():
    """ApiClient double; assert on its methods to observe network calls."""
    return MagicMock(spec=ApiClient)


@pytest.fixture
def candidate():
    return Session(
        user_id="u1",
        name="Ada Lovelace",
        email="ada@example.com",
        role="candidate",
        raw={"_id": "u1", "name": "Ada Lovelace", "email": "ada@example.com",
             "role": "candidate", "skills": ["Python", "SQL"]},
    )


@pytest.fixture
def company_user():
    return Session(user_id="c1", name="Acme HR", email="hr@acme.test", role="company")


@pytest.fixture(autouse=True)
def no_sleep():
    """Retry backoff must not slow the suite down."""
    with patch("careerconnect.retry.time.sleep") as mock_sleep:
        yield mock_sleep


def job_payload(job_id="1", **overrides):
    data = {
        "_id": job_id,
        "title": "Backend Engineer",
        "company": {"name": "StartupXYZ"},
        "location": "Remote",
        "description": "Build APIs.",
        "skills": ["Python", "AWS"],
        "type": "Full-time",
        "experienceLevel": "Mid",
        "salaryMin": 90,
        "salaryMax": 130,
        "createdAt": "2024-05-27T12:00:00Z",
    }
    data.update(overrides)
    return data


@pytest.fixture
def make_job():
    return job_payload


@pytest.fixture
def now():
    return NOW
