"""Streamlit UI for the CareerConnect job board."""
from __future__ import annotations

import sys
from html import escape
from pathlib import Path

import streamlit as st

ROOT = Path(__file__).resolve().parent
sys.path.insert(0, str(ROOT))

from careerconnect.api import ApiClient
from careerconnect.applications import (
    STATUS_TABS,
    ApplicationsBoard,
    ApplyOutcome,
    ApplyState,
    DetailState,
    JobDetailFlow,
    progress,
)
from careerconnect.config import Settings, load_settings
from careerconnect.errors import ApiError, CareerConnectError
from careerconnect.filters import POPULAR_SKILLS
from careerconnect.log import configure_logging, get_logger
from careerconnect.models import ExperienceLevel, JobType, Session
from careerconnect.navigation import login, logout, nav_items, register, restore_session
from careerconnect.profile import ProfileEditor
from careerconnect.render import (
    JobCard,
    ListingView,
    RequestStatus,
    SortOrder,
    ViewKind,
    format_relative_date,
    format_salary,
    render_listings,
)
from careerconnect.search import SearchController

log = get_logger(__name__)

_CSS = """
<style>
.job-card {
    padding: 1rem 1.25rem;
    background: rgba(255,255,255,0.65);
    border: 1px solid rgba(74,144,217,0.25);
    border-radius: 12px;
    box-shadow: 0 4px 16px rgba(0,0,0,0.05);
    margin-bottom: 0.5rem;
}
.skeleton {
    height: 6.5rem; margin-bottom: 1rem; border-radius: 12px;
    background: linear-gradient(90deg, #eee 25%, #f5f5f5 50%, #eee 75%);
}
.skill-tag {
    display: inline-block; padding: 0.1rem 0.5rem; margin-right: 0.3rem;
    border-radius: 999px; background: #e3f2fd; color: #1565c0; font-size: 0.8rem;
}
</style>
"""

# ── Helpers ──────────────────────────────────────────────────────────────


def _settings() -> Settings:
    if "_settings" not in st.session_state:
        settings = load_settings()
        configure_logging(settings.log_level, settings.log_to_file)
        st.session_state["_settings"] = settings
    return st.session_state["_settings"]


def _client() -> ApiClient:
    # One client per browser session so its cookie jar holds the login.
    if "_client" not in st.session_state:
        st.session_state["_client"] = ApiClient(_settings())
    return st.session_state["_client"]


def _session() -> Session | None:
    if "session" not in st.session_state:
        try:
            st.session_state["session"] = restore_session(_client())
        except ApiError as exc:
            log.warning("Could not restore session: %s", exc)
            st.session_state["session"] = None
    return st.session_state["session"]


def _tags(skills: tuple[str, ...] | list[str]) -> str:
    return "".join(f'<span class="skill-tag">{escape(s)}</span>' for s in skills)


def _card_html(card: JobCard) -> str:
    """Backend text is escaped; only our own markup is trusted."""
    meta = " · ".join(p for p in (card.location, card.job_type, card.experience_level) if p)
    more = f" +{card.extra_skills} more" if card.extra_skills else ""
    return (
        f'<div class="job-card"><strong>{escape(card.title)}</strong> — {escape(card.company)}'
        f'<br><span style="color:#666">{escape(meta)}</span>'
        f'<p>{escape(card.summary)}</p>{_tags(card.skills)}{more}'
        f'<br><span style="color:#2e7d32">{escape(card.salary)}</span>'
        f'&nbsp;&nbsp;<span style="color:#999">{card.posted}</span></div>'
    )


def _open_job(job_id: str) -> None:
    st.session_state["job_id"] = job_id
    st.switch_page(PAGES["job"])


def _seed(key: str, value: object) -> None:
    # Widgets read their value from session state; the store only seeds it.
    if key not in st.session_state:
        st.session_state[key] = value


# ── Page: Jobs ───────────────────────────────────────────────────────────

_ANY_LEVEL = "Any"
# Facet widgets; dropped on clear so they re-seed from the cleared store.
_FACET_KEYS: tuple[str, ...] = (
    "f_level", "f_salary_min", "f_salary_max", *(f"jt_{t.name}" for t in JobType),
)


def _search_controller() -> SearchController:
    if "search" not in st.session_state:
        st.session_state["search"] = SearchController.from_url(_client(), _settings(), st.query_params)
    return st.session_state["search"]


def _clear_filters(ctrl: SearchController) -> None:
    ctrl.store.clear()
    for key in _FACET_KEYS:
        st.session_state.pop(key, None)


def _on_location(ctrl: SearchController) -> None:
    location = st.session_state["f_location"]
    ctrl.store.apply(location=location)
    st.session_state["q_location"] = location


def _on_level(ctrl: SearchController) -> None:
    level = st.session_state["f_level"]
    ctrl.store.apply(experience_level=None if level == _ANY_LEVEL else level)


def _on_job_type(ctrl: SearchController, job_type: JobType) -> None:
    selected = set(ctrl.state.job_type)
    if st.session_state[f"jt_{job_type.name}"]:
        selected.add(job_type)
    else:
        selected.discard(job_type)
    ctrl.store.apply(job_type=selected)


def _on_salary(ctrl: SearchController) -> None:
    ctrl.store.apply(salary_min=st.session_state["f_salary_min"], salary_max=st.session_state["f_salary_max"])


def _filter_sidebar(ctrl: SearchController) -> None:
    state = ctrl.state
    _seed("f_location", state.location)
    _seed("f_level", state.experience_level.value if state.experience_level else _ANY_LEVEL)
    _seed("f_salary_min", state.salary_min)
    _seed("f_salary_max", state.salary_max)
    for job_type in JobType:
        _seed(f"jt_{job_type.name}", job_type in state.job_type)

    with st.sidebar:
        c1, c2 = st.columns([2, 1])
        c1.subheader("Filters")
        c2.button("Clear All", key="clear_sidebar", on_click=_clear_filters, args=(ctrl,))

        st.text_input("Location", key="f_location", placeholder="Enter city or state",
                      on_change=_on_location, args=(ctrl,))

        st.radio("Experience Level", [_ANY_LEVEL] + [lvl.value for lvl in ExperienceLevel],
                 key="f_level", on_change=_on_level, args=(ctrl,))

        st.markdown("**Job Type**")
        for job_type in JobType:
            st.checkbox(job_type.value, key=f"jt_{job_type.name}", on_change=_on_job_type, args=(ctrl, job_type))

        st.markdown("**Salary Range (in thousands)**")
        s1, s2 = st.columns(2)
        s1.number_input("Min", min_value=0, step=10, value=None, key="f_salary_min",
                        on_change=_on_salary, args=(ctrl,))
        s2.number_input("Max", min_value=0, step=10, value=None, key="f_salary_max",
                        on_change=_on_salary, args=(ctrl,))

        st.markdown("**Skills**")
        cols = st.columns(3)
        for i, skill in enumerate(POPULAR_SKILLS):
            active = skill in ctrl.state.skills
            cols[i % 3].button(skill, key=f"skill_{skill}", type="primary" if active else "secondary",
                               on_click=ctrl.store.toggle_skill, args=(skill,))

        st.divider()
        st.caption(f"{ctrl.store.active_count()} filters active")


def _draw_listing_view(view: ListingView, ctrl: SearchController) -> None:
    st.subheader(view.headline)
    if view.kind is ViewKind.LOADING:
        for _ in range(view.skeletons):
            st.markdown('<div class="skeleton"></div>', unsafe_allow_html=True)
        return

    if view.kind is ViewKind.EMPTY:
        st.markdown(f"### {view.empty_title}")
        st.caption(view.empty_hint)
        if view.offer_clear_filters:
            st.button("Clear Filters", type="primary", key="clear_empty", on_click=_clear_filters, args=(ctrl,))
        return

    for card in view.cards:
        with st.container():
            st.markdown(_card_html(card), unsafe_allow_html=True)
            if st.button("View Details", key=f"view_{card.job_id}"):
                _open_job(card.job_id)


def page_jobs() -> None:
    ctrl = _search_controller()
    _seed("q_keyword", ctrl.state.keyword)
    _seed("q_location", ctrl.state.location)

    with st.form("search_form"):
        c1, c2, c3 = st.columns([3, 3, 1])
        keyword = c1.text_input("Keyword", key="q_keyword", placeholder="Job title, keywords, or company")
        location = c2.text_input("Location", key="q_location", placeholder="City, state, or remote")
        c3.write("")
        submitted = c3.form_submit_button("Search Jobs", type="primary", use_container_width=True)

    if submitted:
        with st.spinner("Searching…"):
            ctrl.submit(keyword, location, st.query_params)
        st.session_state["_searched_state"] = ctrl.state
        # The sidebar widget is drawn below; keep it on the submitted location.
        st.session_state["f_location"] = ctrl.state.location

    _filter_sidebar(ctrl)

    order = SortOrder(st.selectbox("Sort by", [o.value for o in SortOrder], key="sort_order"))

    slot = st.empty()
    if st.session_state.get("_searched_state") != ctrl.state:
        with slot.container():
            _draw_listing_view(render_listings(RequestStatus.LOADING, []), ctrl)
        ctrl.search()
        st.session_state["_searched_state"] = ctrl.state

    result = ctrl.result
    if result.demo:
        st.info("The job service is unreachable; showing demo listings.")
    elif not result.ok:
        st.error(f"Could not load jobs: {result.error}")
    with slot.container():
        _draw_listing_view(ctrl.view(order), ctrl)


# ── Page: Job details ────────────────────────────────────────────────────


def page_job() -> None:
    job_id = st.query_params.get("id") or st.session_state.get("job_id")
    if not job_id:
        st.warning("No job selected.")
        st.page_link(PAGES["jobs"], label="Back to Jobs")
        return

    flow: JobDetailFlow | None = st.session_state.get("detail")
    if flow is None or flow.job_id != job_id:
        flow = JobDetailFlow(_client(), job_id, _settings())
        with st.spinner("Loading job…"):
            flow.load()
        st.session_state["detail"] = flow

    if flow.state is DetailState.NOT_FOUND:
        st.header("Job not found")
        if flow.error:
            st.error(flow.error)
        st.page_link(PAGES["jobs"], label="Back to Jobs")
        return

    job = flow.job
    session = _session()
    st.header(job.title)
    st.markdown(f"**{job.company.name}** · {job.location}")
    meta = [p.value for p in (job.job_type, job.experience_level) if p]
    if meta:
        st.caption(" · ".join(meta))
    c1, c2 = st.columns(2)
    c1.metric("Salary", format_salary(job.salary_min, job.salary_max))
    if job.posted_at:
        c2.metric("Posted", format_relative_date(job.posted_at))

    if flow.apply_state is ApplyState.APPLIED:
        st.success("Applied")
    elif session is None or session.is_candidate:
        if st.button("Apply Now", type="primary", disabled=flow.apply_state is ApplyState.APPLYING):
            outcome = flow.apply(session)
            if outcome is ApplyOutcome.LOGIN_REQUIRED:
                st.switch_page(PAGES["login"])
            elif outcome is ApplyOutcome.SUBMITTED:
                st.success("Application submitted successfully!")
                st.rerun()
            elif flow.error:
                st.error(flow.error)

    st.subheader("Job Description")
    for paragraph in job.description.split("\n"):
        st.write(paragraph)

    if job.skills:
        st.subheader("Required Skills")
        st.markdown(_tags(job.skills), unsafe_allow_html=True)

    with st.sidebar:
        st.subheader(f"About {job.company.name}")
        for label, value in (("Industry", job.company.industry), ("Company size", job.company.size),
                             ("Headquarters", job.company.location)):
            if value:
                st.markdown(f"**{label}:** {value}")
        if job.benefits:
            st.subheader("Benefits")
            for benefit in job.benefits:
                st.markdown(f"- {benefit}")
        if job.application_deadline:
            st.subheader("Application Deadline")
            st.write(job.application_deadline.strftime("%A, %B %d, %Y"))


# ── Page: Applications ───────────────────────────────────────────────────


def page_applications() -> None:
    session = _session()
    if session is None or not session.is_candidate:
        st.warning("Only candidates can view applications.")
        return

    st.header("My Applications")
    board: ApplicationsBoard | None = st.session_state.get("applications_board")
    if board is None:
        board = ApplicationsBoard(_client(), _settings())
        with st.spinner("Loading applications…"):
            board.load()
        st.session_state["applications_board"] = board

    if board.demo:
        st.info("The application service is unreachable; showing demo data.")
    elif board.error:
        st.error(f"Could not load applications: {board.error}")

    counts = board.status_counts()
    tabs = st.tabs([f"{label} ({counts[key]})" for key, label in STATUS_TABS])
    for (key, _), tab in zip(STATUS_TABS, tabs):
        with tab:
            apps = board.filter(key)
            if not apps:
                st.write("No applications yet" if key == "all" else f"No {key} applications")
                continue
            for app in apps:
                with st.container(border=True):
                    st.markdown(f"**{app.job.title}** — {app.job.company.name}")
                    st.caption(f"{app.job.location} · {format_salary(app.job.salary_min, app.job.salary_max)}")
                    st.markdown(f"Status: `{app.status.value if app.status else 'unknown'}`")
                    if app.applied_at:
                        st.caption(f"Applied {app.applied_at.strftime('%b %d, %Y')}")
                    stages = progress(app)
                    cols = st.columns(len(stages))
                    for col, (label, reached) in zip(cols, stages):
                        col.markdown(f"{'🟢' if reached else '⚪'} {label}")
                    if st.button("View Job", key=f"app_{key}_{app.id}"):
                        _open_job(app.job.id)


# ── Page: Profile ────────────────────────────────────────────────────────

_RESUME_MIME: dict[str, str] = {
    "pdf": "application/pdf",
    "doc": "application/msword",
    "docx": "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
}


def page_profile() -> None:
    session = _session()
    if session is None or not session.is_candidate:
        st.warning("Only candidates have a profile here.")
        return

    editor: ProfileEditor | None = st.session_state.get("profile_editor")
    if editor is None:
        editor = ProfileEditor.from_session(_client(), session, max_resume_bytes=_settings().max_resume_bytes)
        st.session_state["profile_editor"] = editor
    profile = editor.profile

    st.header("My Profile")
    with st.form("profile_form"):
        c1, c2 = st.columns(2)
        name = c1.text_input("Full name", value=profile.name)
        email = c2.text_input("Email", value=profile.email)
        location = c1.text_input("Location", value=profile.location)
        phone = c2.text_input("Phone", value=profile.phone)
        bio = st.text_area("Bio", value=profile.bio)
        save = st.form_submit_button("Save Changes", type="primary", use_container_width=True)

    if save:
        editor.update(name=name, email=email, location=location, phone=phone, bio=bio)
        try:
            editor.save()
            st.success("Profile updated successfully!")
        except CareerConnectError as exc:
            st.error(str(exc))

    st.subheader("Skills")
    s1, s2 = st.columns([4, 1])
    new_skill = s1.text_input("Add a skill", key="new_skill", label_visibility="collapsed")
    if s2.button("Add") and editor.add_skill(new_skill):
        st.rerun()
    cols = st.columns(4)
    for i, skill in enumerate(profile.skills):
        if cols[i % 4].button(f"{skill} ✕", key=f"rm_{skill}"):
            editor.remove_skill(skill)
            st.rerun()

    st.subheader("Work Experience")
    if not profile.experience:
        st.caption("No work experience added yet")
    for exp in profile.experience:
        with st.container(border=True):
            st.markdown(f"**{exp.get('title', '')}**")
            st.write(exp.get("company", ""))
            if exp.get("duration"):
                st.caption(exp["duration"])
            if exp.get("description"):
                st.write(exp["description"])

    st.subheader("Education")
    if not profile.education:
        st.caption("No education information added yet")
    for edu in profile.education:
        with st.container(border=True):
            st.markdown(f"**{edu.get('degree', '')}**")
            st.write(edu.get("school", ""))
            if edu.get("year"):
                st.caption(str(edu["year"]))

    st.subheader("Resume")
    uploaded = st.file_uploader("Drop your resume here (PDF or Word, max 5MB)", type=list(_RESUME_MIME),
                                disabled=editor.uploading)
    if uploaded is not None and st.session_state.get("_uploaded_name") != uploaded.name:
        content_type = _RESUME_MIME.get(uploaded.name.rsplit(".", 1)[-1].lower(), uploaded.type)
        with st.spinner("Uploading and parsing resume…"):
            try:
                editor.upload_resume(uploaded.name, uploaded.getvalue(), content_type)
                st.session_state["_uploaded_name"] = uploaded.name
                st.success("Resume uploaded successfully!")
            except ApiError as exc:
                log.error("Resume upload failed: %s", exc)
                st.error("Upload failed. Please try again.")
            except CareerConnectError as exc:
                st.error(str(exc))

    resume = profile.resume or {}
    if resume.get("url"):
        st.markdown(f"[View Current Resume]({resume['url']})")
    parsed = resume.get("parsedData") or {}
    if parsed.get("skills"):
        st.markdown("**Parsed skills:** " + _tags(parsed["skills"][:6]), unsafe_allow_html=True)
    if parsed.get("experience"):
        st.markdown(f"**Experience:** {parsed['experience']} years")


# ── Page: Login / Register ───────────────────────────────────────────────


def page_login() -> None:
    st.header("Login")
    with st.form("login_form"):
        email = st.text_input("Email")
        password = st.text_input("Password", type="password")
        submit = st.form_submit_button("Login", type="primary", use_container_width=True)
    if submit:
        try:
            st.session_state["session"] = login(_client(), email, password)
        except ApiError as exc:
            st.error(exc.message)
            return
        st.switch_page(PAGES["jobs"])


def page_register() -> None:
    st.header("Create an account")
    with st.form("register_form"):
        name = st.text_input("Full name")
        email = st.text_input("Email")
        password = st.text_input("Password", type="password")
        role = st.radio("I am a", ["candidate", "company"], horizontal=True)
        submit = st.form_submit_button("Register", type="primary", use_container_width=True)
    if submit:
        try:
            st.session_state["session"] = register(_client(), name, email, password, role)
        except ApiError as exc:
            st.error(exc.message)
            return
        st.switch_page(PAGES["jobs"])


def page_logout() -> None:
    st.session_state["session"] = logout(_client())
    for key in ("profile_editor", "applications_board", "detail"):
        st.session_state.pop(key, None)
    st.switch_page(PAGES["jobs"])


# ── Navigation ───────────────────────────────────────────────────────────

_PAGE_FUNCS = {
    "jobs": (page_jobs, "Jobs", "🔎"),
    "job": (page_job, "Job Details", "📄"),
    "applications": (page_applications, "Applications", "📋"),
    "profile": (page_profile, "Profile", "👤"),
    "login": (page_login, "Login", "🔑"),
    "register": (page_register, "Register", "📝"),
    "logout": (page_logout, "Logout", "🚪"),
}

PAGES = {
    key: st.Page(fn, title=title, icon=icon, url_path=key, default=(key == "jobs"))
    for key, (fn, title, icon) in _PAGE_FUNCS.items()
}

if __name__ == "__main__":
    st.markdown(_CSS, unsafe_allow_html=True)
    menu = [PAGES[item.target] for item in nav_items(_session())]
    # Job details is reached from cards, but must be registered to be routable.
    nav = st.navigation(menu + [PAGES["job"]])
    nav.run()
