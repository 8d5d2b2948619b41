from datetime import datetime, timezone

from careerconnect.demo import demo_applications, demo_job, demo_jobs
from careerconnect.models import (
    Application,
    ApplicationStatus,
    ExperienceLevel,
    JobListing,
    JobType,
    Profile,
    parse_timestamp,
)


def test_job_listing_from_api(make_job):
    job = JobListing.from_api(make_job("5", company={"name": "Acme", "size": "10-50"}))

    assert job.id == "5"
    assert job.company.name == "Acme"
    assert job.company.size == "10-50"
    assert job.skills == ("Python", "AWS")
    assert job.job_type is JobType.FULL_TIME
    assert job.experience_level is ExperienceLevel.MID
    assert job.posted_at == datetime(2024, 5, 27, 12, 0, tzinfo=timezone.utc)
    assert job.salary_disclosed


def test_job_listing_tolerates_sparse_payload():
    job = JobListing.from_api({"id": 3, "title": "Intern", "company": "Solo Ltd", "type": "Gig"})

    assert job.id == "3"
    assert job.company.name == "Solo Ltd"
    assert job.job_type is None
    assert job.posted_at is None
    assert not job.salary_disclosed


def test_job_listing_reads_posted_date_alias(make_job):
    job = JobListing.from_api(make_job(createdAt=None, postedDate="2024-01-02T00:00:00+00:00"))
    assert job.posted_at == datetime(2024, 1, 2, tzinfo=timezone.utc)


def test_application_status_is_case_insensitive(make_job):
    app = Application.from_api({"_id": "1", "job": make_job(), "status": "Under Review"})
    assert app.status is ApplicationStatus.UNDER_REVIEW


def test_parse_timestamp_assumes_utc_for_naive_values():
    assert parse_timestamp("2024-03-01T08:00:00").tzinfo is timezone.utc
    assert parse_timestamp("") is None


def test_profile_from_user_deduplicates_skills():
    profile = Profile.from_user({"name": "Ada", "skills": ["Go", "Go", "SQL"], "phone": None})
    assert profile.skills == ["Go", "SQL"]
    assert profile.phone == ""
    assert "resume" not in profile.to_api()


def test_demo_dataset_is_well_formed():
    assert [j.id for j in demo_jobs()] == ["1", "2", "3"]
    assert demo_job("abc").id == "abc"
    assert {a.status for a in demo_applications()} == {
        ApplicationStatus.UNDER_REVIEW, ApplicationStatus.SHORTLISTED, ApplicationStatus.REJECTED,
    }


def test_unknown_application_status_parses_to_none(make_job):
    assert Application.from_api({"_id": "1", "job": make_job(), "status": "On Hold"}).status is None
    assert Application.from_api({"_id": "2", "job": make_job()}).status is ApplicationStatus.APPLIED
