import pytest

from careerconnect.errors import ApiError
from careerconnect.navigation import login, logout, nav_items, register, restore_session


def _labels(session):
    return [item.label for item in nav_items(session)]


def test_anonymous_menu():
    assert _labels(None) == ["Jobs", "Login", "Register"]


def test_candidate_menu(candidate):
    assert _labels(candidate) == ["Jobs", "Profile", "Applications", "Logout"]


def test_company_menu(company_user):
    assert _labels(company_user) == ["Jobs", "Logout"]


def test_login_returns_session(client):
    client.login.return_value = {"user": {"_id": "u9", "name": "Bo", "email": "bo@x.io", "role": "company"}}

    session = login(client, "bo@x.io", "pw")

    client.login.assert_called_once_with("bo@x.io", "pw")
    assert session.role == "company"
    assert not session.is_candidate


def test_register_defaults_to_candidate(client):
    client.register.return_value = {"_id": "u1", "name": "Ada", "email": "a@x.io", "role": "candidate"}

    session = register(client, "Ada", "a@x.io", "pw")

    assert client.register.call_args.args[0]["role"] == "candidate"
    assert session.is_candidate


def test_restore_session_when_logged_out(client):
    client.get_current_user.side_effect = ApiError("unauthorised", status_code=401)
    assert restore_session(client) is None


def test_restore_session_propagates_server_errors(client):
    client.get_current_user.side_effect = ApiError("down", status_code=500)
    with pytest.raises(ApiError):
        restore_session(client)


def test_logout_drops_session_even_if_request_fails(client):
    client.logout.side_effect = ApiError("down")
    assert logout(client) is None
    client.logout.assert_called_once()
