"""
Test configuration.

Every test gets its own SQLite file so documents never leak between
tests, and a ``TestClient`` whose startup hook has initialised the
store.
"""

from typing import Iterator

import pytest
from fastapi.testclient import TestClient

from todo_api.app.core.config import reload_settings
from todo_api.app.core.db import init_db
from todo_api.app.main import create_app


@pytest.fixture
def database(tmp_path, monkeypatch) -> Iterator[str]:
    """Point the document store at a fresh temporary file."""
    db_file = str(tmp_path / "todos-test.db")
    monkeypatch.setenv("DATABASE_URL", db_file)
    monkeypatch.setenv("PUBLIC_URL", "")
    reload_settings()
    init_db()
    yield db_file
    monkeypatch.undo()
    reload_settings()


@pytest.fixture
def client(database) -> Iterator[TestClient]:
    with TestClient(create_app()) as test_client:
        yield test_client


@pytest.fixture
def make_todo(client):
    """Create a todo through the API and return the response body."""

    def _make(title: str = "Buy milk", **fields):
        response = client.post("/todos", json={"title": title, **fields})
        assert response.status_code == 201, response.text
        return response.json()

    return _make
