"""
HTTP API end to end, on in-memory repositories.
"""
from __future__ import annotations

import logging

from fastapi.testclient import TestClient

from taskboard.api.app import create_app
from taskboard.main import create_context, create_inmemory_repositories

USERNAME = "user123"
PASSWORD = "ABc123456@"


def _client() -> TestClient:
    return TestClient(create_app(create_context(create_inmemory_repositories())))


def _register(client: TestClient, username: str = USERNAME, password: str = PASSWORD):
    return client.post("/api/register", json={"username": username, "password": password})


def test_register_sets_cookie_and_authorizes():
    client = _client()
    resp = _register(client)

    assert resp.status_code == 200
    assert resp.json() == {"error_code": "", "data": {"username": USERNAME}}
    assert "session" in resp.cookies
    assert "httponly" in resp.headers["set-cookie"].lower()

    resp = client.get("/api/user")
    assert resp.status_code == 200
    assert resp.json() == {"error_code": "", "data": {"username": USERNAME}}


def test_register_error_codes():
    client = _client()
    assert _register(client, "usr", PASSWORD).json() == {"error_code": "invalid_username", "data": None}
    assert _register(client, USERNAME, "weak").json() == {"error_code": "invalid_password", "data": None}
    _register(client)
    assert _register(client).json() == {"error_code": "user_already_exists", "data": None}


def test_login_error_codes_and_success():
    client = _client()
    _register(client)

    other = TestClient(client.app)
    resp = other.post("/api/login", json={"username": "nobody_here", "password": PASSWORD})
    assert resp.json() == {"error_code": "user_not_found", "data": None}
    assert "session" not in resp.cookies

    resp = other.post("/api/login", json={"username": USERNAME, "password": PASSWORD + "x"})
    assert resp.json() == {"error_code": "incorrect_password", "data": None}

    resp = other.post("/api/login", json={"username": USERNAME, "password": PASSWORD})
    assert resp.json() == {"error_code": "", "data": {"username": USERNAME}}
    assert other.get("/api/user").status_code == 200


def test_requests_without_valid_session_are_unauthorized():
    client = _client()
    assert client.get("/api/user").status_code == 401
    assert client.get("/api/tasks").status_code == 401

    client.cookies.set("session", "not-a-token")
    assert client.get("/api/user").status_code == 401

    client.cookies.set("session", "0" * 32)  # well formed, but unknown
    assert client.get("/api/tasks").status_code == 401


def test_task_lifecycle():
    client = _client()
    _register(client)

    board = client.get("/api/tasks").json()["data"]
    categories = board["ordered_categories"]
    assert [c["label"] for c in categories] == ["ToDo", "In progress", "Completed"]
    todo_id = categories[0]["category_id"]
    done_id = categories[2]["category_id"]

    resp = client.post("/api/tasks", json={"categoryId": todo_id, "label": "buy milk", "description": "2 liters"})
    created = resp.json()["data"]
    assert created["label"] == "buy milk"
    task_id = created["task_id"]

    board = client.get("/api/tasks").json()["data"]
    assert board["ordered_categories"][0]["ordered_tasks"] == [
        {"task_id": task_id, "label": "buy milk", "description": "2 liters"}
    ]

    resp = client.put(f"/api/tasks/{task_id}", json={"categoryId": done_id, "label": "buy milk", "description": "done"})
    assert resp.json() == {"error_code": "", "data": None}
    board = client.get("/api/tasks").json()["data"]
    assert board["ordered_categories"][0]["ordered_tasks"] == []
    assert board["ordered_categories"][2]["ordered_tasks"][0]["description"] == "done"

    assert client.delete(f"/api/tasks/{task_id}").json() == {"error_code": "", "data": None}
    assert client.delete(f"/api/tasks/{task_id}").json() == {"error_code": "task_not_found", "data": None}


def test_users_only_see_their_own_tasks():
    alice = _client()
    _register(alice, "alice_1")
    bob = TestClient(alice.app)
    _register(bob, "bob_123")

    todo_id = alice.get("/api/tasks").json()["data"]["ordered_categories"][0]["category_id"]
    task_id = alice.post("/api/tasks", json={"categoryId": todo_id, "label": "secret", "description": ""}).json()["data"]["task_id"]

    bob_board = bob.get("/api/tasks").json()["data"]
    assert all(c["ordered_tasks"] == [] for c in bob_board["ordered_categories"])
    assert bob.delete(f"/api/tasks/{task_id}").json()["error_code"] == "task_not_found"


def test_inconsistent_board_is_an_opaque_server_error():
    client = _client()
    _register(client)
    client.post("/api/tasks", json={"categoryId": "nope", "label": "orphan", "description": ""})

    resp = client.get("/api/tasks")
    assert resp.status_code == 500
    assert "nope" not in resp.text


def test_unexpected_error_is_answered_once_and_logged_once(monkeypatch, caplog):
    client = _client()
    _register(client)

    async def broken_board(user_id):
        raise RuntimeError("disk I/O error")

    monkeypatch.setattr(client.app.state.context.tasks, "get_board", broken_board)

    with caplog.at_level(logging.ERROR):
        resp = client.get("/api/tasks")

    assert resp.status_code == 500
    assert resp.json() == {"detail": "Internal Server Error"}
    assert "disk I/O error" not in resp.text
    errors = [r for r in caplog.records if r.levelno >= logging.ERROR]
    assert len(errors) == 1
