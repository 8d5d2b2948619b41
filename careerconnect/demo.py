"""Placeholder listings shown only when ``use_demo_data`` is enabled.

Records are written in the backend's JSON shape and parsed with the same
``from_api`` constructors as live responses.
"""
from __future__ import annotations

from datetime import datetime, timedelta, timezone

from careerconnect.log import get_logger
from careerconnect.models import Application, JobListing

log = get_logger(__name__)


def _days_ago(now: datetime, days: int) -> str:
    return (now - timedelta(days=days)).isoformat()


def _now(now: datetime | None) -> datetime:
    return now or datetime.now(timezone.utc)


def demo_jobs(now: datetime | None = None) -> list[JobListing]:
    now = _now(now)
    log.info("Using demo job listings")
    records = [
        {
            "_id": "1",
            "title": "Senior Frontend Developer",
            "company": {"name": "TechCorp Inc."},
            "location": "San Francisco, CA",
            "description": "We are looking for a skilled Frontend Developer to join our team "
                           "and help build amazing user experiences.",
            "skills": ["React", "JavaScript", "TypeScript", "CSS", "HTML"],
            "type": "Full-time",
            "experienceLevel": "Senior",
            "salaryMin": 120,
            "salaryMax": 160,
            "createdAt": _days_ago(now, 2),
        },
        {
            "_id": "2",
            "title": "Backend Engineer",
            "company": {"name": "StartupXYZ"},
            "location": "Remote",
            "description": "Join our backend team to build scalable APIs and microservices "
                           "that power our platform.",
            "skills": ["Node.js", "Python", "AWS", "MongoDB", "Docker"],
            "type": "Full-time",
            "experienceLevel": "Mid",
            "salaryMin": 90,
            "salaryMax": 130,
            "createdAt": _days_ago(now, 5),
        },
        {
            "_id": "3",
            "title": "Full Stack Developer",
            "company": {"name": "Digital Agency"},
            "location": "New York, NY",
            "description": "Looking for a versatile developer who can work on both frontend "
                           "and backend technologies.",
            "skills": ["React", "Node.js", "PostgreSQL", "AWS", "Git"],
            "type": "Full-time",
            "experienceLevel": "Mid",
            "salaryMin": 100,
            "salaryMax": 140,
            "createdAt": _days_ago(now, 7),
        },
    ]
    return [JobListing.from_api(r) for r in records]


def demo_job(job_id: str, now: datetime | None = None) -> JobListing:
    now = _now(now)
    log.info("Using demo listing for job %s", job_id)
    return JobListing.from_api(
        {
            "_id": job_id,
            "title": "Senior Frontend Developer",
            "company": {
                "name": "TechCorp Inc.",
                "location": "San Francisco, CA",
                "size": "500-1000 employees",
                "industry": "Technology",
            },
            "location": "San Francisco, CA",
            "type": "Full-time",
            "experienceLevel": "Senior",
            "salaryMin": 120,
            "salaryMax": 160,
            "description": (
                "We are looking for a skilled Senior Frontend Developer to join our "
                "growing team.\n\n"
                "Key Responsibilities:\n"
                "• Develop responsive web applications using React and TypeScript\n"
                "• Collaborate with designers and backend developers\n"
                "• Mentor junior developers and contribute to technical decisions\n\n"
                "Requirements:\n"
                "• 5+ years of experience in frontend development\n"
                "• Strong proficiency in React, JavaScript, and TypeScript"
            ),
            "skills": ["React", "JavaScript", "TypeScript", "CSS", "HTML", "Redux", "Git"],
            "benefits": [
                "Competitive salary and equity package",
                "Health, dental, and vision insurance",
                "Flexible work arrangements",
                "Professional development budget",
            ],
            "postedDate": _days_ago(now, 3),
            "applicationDeadline": (now + timedelta(days=30)).isoformat(),
        }
    )


def demo_applications(now: datetime | None = None) -> list[Application]:
    now = _now(now)
    log.info("Using demo applications")
    records = [
        {
            "_id": "1",
            "job": {"_id": "1", "title": "Senior Frontend Developer",
                    "company": {"name": "TechCorp Inc."}, "location": "San Francisco, CA",
                    "salaryMin": 120, "salaryMax": 160},
            "status": "under review",
            "appliedDate": _days_ago(now, 5),
            "lastUpdated": _days_ago(now, 2),
        },
        {
            "_id": "2",
            "job": {"_id": "2", "title": "Backend Engineer",
                    "company": {"name": "StartupXYZ"}, "location": "Remote",
                    "salaryMin": 90, "salaryMax": 130},
            "status": "shortlisted",
            "appliedDate": _days_ago(now, 10),
            "lastUpdated": _days_ago(now, 1),
        },
        {
            "_id": "3",
            "job": {"_id": "3", "title": "Full Stack Developer",
                    "company": {"name": "Digital Agency"}, "location": "New York, NY",
                    "salaryMin": 100, "salaryMax": 140},
            "status": "rejected",
            "appliedDate": _days_ago(now, 15),
            "lastUpdated": _days_ago(now, 7),
        },
    ]
    return [Application.from_api(r) for r in records]
