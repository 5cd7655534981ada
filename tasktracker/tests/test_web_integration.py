from __future__ import annotations

import re

import pytest
from flask.testing import FlaskClient

from tasktracker.app import create_app
from tasktracker.infrastructure.container import Container
from tasktracker.infrastructure.db import ENGINE, Base

pytestmark = pytest.mark.usefixtures("reset_database")

_TASK_ID = re.compile(r'data-task-id="(\d+)"')


def _stat(body: str, name: str) -> int:
    match = re.search(rf'data-stat="{name}">(\d+)<', body)
    assert match, name
    return int(match.group(1))


@pytest.fixture()
def client() -> FlaskClient:
    app = create_app(Container())
    app.config.update(TESTING=True)
    return app.test_client()


@pytest.fixture()
def other_client(client: FlaskClient) -> FlaskClient:
    return client.application.test_client()


def _register(client: FlaskClient, username: str, email: str, password: str):
    return client.post(
        "/register", data={"username": username, "email": email, "password": password}
    )


def _login(client: FlaskClient, email: str, password: str):
    return client.post("/login", data={"email": email, "password": password})


def _signed_in(client: FlaskClient, username: str, email: str, password: str = "pw1") -> None:
    assert _register(client, username, email, password).status_code == 302
    assert _login(client, email, password).status_code == 302


def test_full_task_lifecycle(client: FlaskClient) -> None:
    assert _register(client, "alice", "a@x.com", "pw1").status_code == 302
    login = _login(client, "a@x.com", "pw1")
    assert login.status_code == 302
    assert login.headers["Location"].endswith("/dashboard")

    created = client.post("/tasks", data={"title": "T1", "priority": "", "due_date": ""})
    assert created.status_code == 302

    body = client.get("/dashboard").get_data(as_text=True)
    [task_id] = _TASK_ID.findall(body)
    assert _stat(body, "pending") == 1

    updated = client.post(f"/tasks/{task_id}/status", data={"status": "completed"})
    assert updated.status_code == 302

    body = client.get("/dashboard").get_data(as_text=True)
    assert "alice" in body
    assert _stat(body, "total") == 1
    assert _stat(body, "completed") == 1
    assert _stat(body, "pending") == 0

    assert client.post(f"/tasks/{task_id}/delete").status_code == 302
    body = client.get("/dashboard").get_data(as_text=True)
    assert _TASK_ID.findall(body) == []
    assert _stat(body, "total") == 0


def test_blank_title_is_rejected(client: FlaskClient) -> None:
    _signed_in(client, "alice", "a@x.com")

    response = client.post("/tasks", data={"title": "   "})

    assert response.status_code == 422
    assert _stat(response.get_data(as_text=True), "total") == 0


def test_users_cannot_touch_each_others_tasks(
    client: FlaskClient, other_client: FlaskClient
) -> None:
    _signed_in(client, "alice", "a@x.com")
    client.post("/tasks", data={"title": "alice-only"})
    [task_id] = _TASK_ID.findall(client.get("/dashboard").get_data(as_text=True))

    _signed_in(other_client, "bob", "b@x.com")
    bob_view = other_client.get("/dashboard").get_data(as_text=True)
    assert "alice-only" not in bob_view

    status = other_client.post(f"/tasks/{task_id}/status", data={"status": "completed"})
    delete = other_client.post(f"/tasks/{task_id}/delete")
    missing = other_client.post("/tasks/99999/delete")
    for response in (status, delete, missing):
        assert response.status_code == 302
        assert response.headers["Location"].endswith("/dashboard")

    body = client.get("/dashboard").get_data(as_text=True)
    assert _TASK_ID.findall(body) == [task_id]
    assert _stat(body, "pending") == 1


def test_logout_invalidates_session(client: FlaskClient) -> None:
    _signed_in(client, "alice", "a@x.com")
    token = client.get_cookie("session_token").value

    logout = client.get("/logout")
    assert logout.status_code == 302

    client.set_cookie("session_token", token)
    response = client.get("/dashboard")
    assert response.status_code == 302
    assert response.headers["Location"].endswith("/login")


def test_dashboard_requires_login(client: FlaskClient) -> None:
    response = client.get("/dashboard")

    assert response.status_code == 302
    assert response.headers["Location"].endswith("/login")


def test_login_failures_look_the_same(client: FlaskClient) -> None:
    _register(client, "alice", "a@x.com", "pw1")

    wrong_password = _login(client, "a@x.com", "nope")
    unknown_email = _login(client, "ghost@x.com", "pw1")

    assert wrong_password.status_code == unknown_email.status_code == 401
    assert "Invalid credentials" in wrong_password.get_data(as_text=True)
    assert "Invalid credentials" in unknown_email.get_data(as_text=True)


def test_duplicate_registration_is_conflict(client: FlaskClient) -> None:
    _register(client, "alice", "a@x.com", "pw1")

    response = _register(client, "alice2", "a@x.com", "pw2")

    assert response.status_code == 409
    assert "Username or email already exists" in response.get_data(as_text=True)


def test_responses_carry_security_headers(client: FlaskClient) -> None:
    response = client.get("/login")

    assert response.status_code == 200
    assert response.headers["X-Frame-Options"] == "DENY"
    assert response.headers["X-Content-Type-Options"] == "nosniff"


def test_padded_title_is_measured_after_trimming(client: FlaskClient) -> None:
    _signed_in(client, "alice", "a@x.com")

    accepted = client.post("/tasks", data={"title": "x" * 199 + "   ", "description": "  d  "})
    too_long = client.post("/tasks", data={"title": "x" * 201})

    assert accepted.status_code == 302
    assert too_long.status_code == 422
    body = client.get("/dashboard").get_data(as_text=True)
    assert _stat(body, "total") == 1
    assert f"<h2>{'x' * 199}</h2>" in body


def _assert_storage_error_page(response) -> None:
    body = response.get_data(as_text=True)
    assert response.status_code == 503
    assert "temporarily unavailable" in body
    assert "no such table" not in body
    assert "OperationalError" not in body


def test_storage_outage_on_login_shows_generic_page(client: FlaskClient) -> None:
    Base.metadata.drop_all(bind=ENGINE)

    _assert_storage_error_page(_login(client, "a@x.com", "pw1"))


def test_storage_outage_on_dashboard_shows_generic_page(client: FlaskClient) -> None:
    _signed_in(client, "alice", "a@x.com")
    Base.metadata.drop_all(bind=ENGINE)

    _assert_storage_error_page(client.get("/dashboard"))
