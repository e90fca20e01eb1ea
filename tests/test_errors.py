"""
Error handling tests.

Validation failures are rejected with a generic 400 before any handler
runs; store failures surface as 500 with the raw error message.
"""

import sqlite3

import pytest

from todo_api.app.services import todo_service


@pytest.mark.parametrize(
    "payload",
    [
        {},
        {"order": 1},
        {"title": 42},
        {"title": "x", "order": "soon"},
        {"title": "x", "completed": "maybe"},
        {"title": "x", "tags": "work"},
        {"title": "x", "tags": [1, 2]},
        {"title": "x", "priority": "high"},
        {"title": "x", "_id": "chosen"},
        {"title": ""},
        {"title": None},
        {"title": "x", "order": None},
        {"title": "x", "completed": None},
        {"title": "x", "completed": "yes"},
        {"title": "x", "completed": 1},
        {"title": "x", "tags": None},
        {"title": "x", "tags": [""]},
        {"title": "x", "url": None},
    ],
)
def test_create_rejects_bad_payload(client, payload):
    response = client.post("/todos", json=payload)

    assert response.status_code == 400
    body = response.json()
    assert body["statusCode"] == 400
    assert body["error"] == "Bad Request"
    assert body["message"]


def test_bad_payload_creates_nothing(client):
    client.post("/todos", json={"title": "x", "bogus": True})

    assert client.get("/todos").json() == []


def test_patch_rejects_unknown_field(client, make_todo):
    created = make_todo()

    response = client.patch(f"/todos/{created['_id']}", json={"colour": "red"})

    assert response.status_code == 400


def test_patch_rejects_wrong_type(client, make_todo):
    created = make_todo()

    response = client.patch(f"/todos/{created['_id']}", json={"order": "first"})

    assert response.status_code == 400


@pytest.mark.parametrize(
    "payload",
    [
        {"title": None},
        {"title": ""},
        {"order": None},
        {"completed": None},
        {"completed": "yes"},
        {"tags": None},
        {"tags": ["ok", ""]},
    ],
)
def test_patch_rejects_null_and_empty_values(client, make_todo, payload):
    created = make_todo("Keep me", order=4, completed=True, tags=["ok"])

    response = client.patch(f"/todos/{created['_id']}", json=payload)

    assert response.status_code == 400
    stored = client.get(f"/todos/{created['_id']}").json()
    assert stored["title"] == "Keep me"
    assert stored["order"] == 4
    assert stored["completed"] is True
    assert stored["tags"] == ["ok"]


@pytest.mark.parametrize("payload", [{}, {"tag": ""}, {"tag": 5}, {"tag": "x", "extra": 1}])
def test_add_tag_rejects_bad_payload(client, make_todo, payload):
    created = make_todo()

    response = client.post(f"/todos/{created['_id']}/tags", json=payload)

    assert response.status_code == 400


def test_empty_tag_filter_rejected(client):
    response = client.get("/todos", params={"tag": ""})

    assert response.status_code == 400


def test_store_failure_is_500_with_message(client, monkeypatch):
    def broken_find(*args, **kwargs):
        raise sqlite3.OperationalError("disk I/O error")

    monkeypatch.setattr(todo_service.todos, "find", broken_find)

    response = client.get("/todos")

    assert response.status_code == 500
    assert response.headers["content-type"].startswith("text/plain")
    assert response.text == "disk I/O error"
