"""Session lifecycle and the role-dependent navigation menu."""
from __future__ import annotations

from dataclasses import dataclass

from careerconnect.api import ApiClient
from careerconnect.errors import ApiError
from careerconnect.log import get_logger
from careerconnect.models import CANDIDATE_ROLE, Session

log = get_logger(__name__)


@dataclass(frozen=True)
class NavItem:
    label: str
    target: str


_JOBS = NavItem("Jobs", "jobs")
_LOGOUT = NavItem("Logout", "logout")
_ROLE_ITEMS: dict[str, list[NavItem]] = {
    CANDIDATE_ROLE: [NavItem("Profile", "profile"), NavItem("Applications", "applications")],
}


def nav_items(session: Session | None) -> list[NavItem]:
    """Menu entries for the current visitor; company accounts only browse here."""
    if session is None:
        return [_JOBS, NavItem("Login", "login"), NavItem("Register", "register")]
    return [_JOBS, *_ROLE_ITEMS.get(session.role, []), _LOGOUT]


def login(client: ApiClient, email: str, password: str) -> Session:
    session = Session.from_api(client.login(email, password))
    log.info("Logged in as %s (%s)", session.email, session.role)
    return session


def register(client: ApiClient, name: str, email: str, password: str, role: str = CANDIDATE_ROLE) -> Session:
    data = client.register({"name": name, "email": email, "password": password, "role": role})
    session = Session.from_api(data)
    log.info("Registered %s (%s)", session.email, session.role)
    return session


def restore_session(client: ApiClient) -> Session | None:
    """Current user from the session cookie, or None when not logged in."""
    try:
        return Session.from_api(client.get_current_user())
    except ApiError as exc:
        if exc.status_code in (401, 403):
            return None
        raise


def logout(client: ApiClient) -> None:
    try:
        client.logout()
    except ApiError as exc:
        # The local session is dropped either way.
        log.warning("Logout request failed: %s", exc)
    return None
