"""Page-level tests for the Streamlit app, driven through AppTest."""
from pathlib import Path

import pytest
from streamlit.testing.v1 import AppTest

from careerconnect.models import JobType, Session

APP = Path(__file__).resolve().parent.parent / "app.py"
TIMEOUT = 30


def _prime(at, settings, client, session=None):
    at.session_state["_settings"] = settings
    at.session_state["_client"] = client
    at.session_state["session"] = session
    return at


@pytest.fixture
def jobs_page(settings, client):
    client.get_jobs.return_value = {"jobs": []}
    return _prime(AppTest.from_file(str(APP), default_timeout=TIMEOUT), settings, client).run()


def _filters(at):
    return at.session_state["search"].state


class TestJobsPage:
    def test_clear_all_resets_checked_job_types(self, jobs_page, client):
        jobs_page.checkbox(key="jt_REMOTE").check().run()
        assert _filters(jobs_page).job_type == frozenset({JobType.REMOTE})
        assert client.get_jobs.call_args.args[0]["jobType"] == "Remote"

        jobs_page.button(key="clear_sidebar").click().run()

        assert _filters(jobs_page).job_type == frozenset()
        assert not jobs_page.checkbox(key="jt_REMOTE").value
        assert "jobType" not in client.get_jobs.call_args.args[0]

    def test_clear_all_resets_level_and_salary(self, jobs_page):
        jobs_page.radio(key="f_level").set_value("Senior").run()
        jobs_page.number_input(key="f_salary_min").set_value(50).run()
        assert _filters(jobs_page).salary_min == 50

        jobs_page.button(key="clear_sidebar").click().run()

        state = _filters(jobs_page)
        assert state.experience_level is None
        assert state.salary_min is None
        assert jobs_page.radio(key="f_level").value == "Any"

    def test_submitted_location_survives_the_rerun(self, jobs_page, client):
        jobs_page.text_input(key="q_keyword").input("python")
        jobs_page.text_input(key="q_location").input("Berlin")
        next(b for b in jobs_page.button if b.label == "Search Jobs").click().run()

        assert _filters(jobs_page).location == "Berlin"
        assert client.get_jobs.call_args.args[0] == {"keyword": "python", "location": "Berlin"}
        assert jobs_page.text_input(key="f_location").value == "Berlin"

        jobs_page.run()
        assert _filters(jobs_page).location == "Berlin"
        assert client.get_jobs.call_args.args[0]["location"] == "Berlin"

    def test_sidebar_location_updates_the_search(self, jobs_page, client):
        jobs_page.text_input(key="f_location").input("Austin").run()

        assert _filters(jobs_page).location == "Austin"
        assert client.get_jobs.call_args.args[0]["location"] == "Austin"

    def test_backend_text_is_escaped_in_cards(self, settings, client, make_job):
        client.get_jobs.return_value = {"jobs": [make_job(title="<script>alert(1)</script>", skills=["<b>Go</b>"])]}
        at = _prime(AppTest.from_file(str(APP), default_timeout=TIMEOUT), settings, client).run()

        markup = " ".join(m.value for m in at.markdown)
        assert "&lt;script&gt;alert(1)&lt;/script&gt;" in markup
        assert "&lt;b&gt;Go&lt;/b&gt;" in markup
        assert "<script>" not in markup


def _profile_page():
    from app import page_profile

    page_profile()


class TestProfilePage:
    def _run(self, settings, client, user):
        session = Session.from_api(user)
        return _prime(AppTest.from_function(_profile_page, default_timeout=TIMEOUT), settings, client, session).run()

    def test_lists_experience_and_education(self, settings, client):
        at = self._run(settings, client, {
            "_id": "u1", "name": "Ada", "email": "ada@example.com", "role": "candidate",
            "experience": [{"title": "Data Engineer", "company": "Acme", "duration": "2019 - 2023"}],
            "education": [{"degree": "BSc Mathematics", "school": "UCL", "year": 2018}],
        })

        markup = [m.value for m in at.markdown]
        assert "**Data Engineer**" in markup
        assert "**BSc Mathematics**" in markup
        assert "2019 - 2023" in [c.value for c in at.caption]

    def test_empty_history_has_placeholders(self, settings, client):
        at = self._run(settings, client, {"_id": "u1", "name": "Ada", "email": "a@x.io", "role": "candidate"})

        captions = [c.value for c in at.caption]
        assert "No work experience added yet" in captions
        assert "No education information added yet" in captions
