import logging
from datetime import datetime

import pytest
from fastapi.testclient import TestClient

from tasks_api.db import StoreError
from tasks_api.main import create_app
from tasks_api.settings import Settings

from .fakes import RecordingDatabase


class SchemaFailingDatabase(RecordingDatabase):
    """Fails only the schema statement, like a role without CREATE privilege."""

    async def fetch_all(self, query, params=()):
        self.calls.append((query, tuple(params)))
        if query.lstrip().startswith("CREATE TABLE"):
            raise StoreError("permission denied for schema public")
        return list(self.rows)


def test_startup_opens_pool_and_creates_schema_then_closes_on_shutdown():
    database = RecordingDatabase()
    app = create_app(Settings(), database=database)
    with TestClient(app) as client:
        assert database.opened
        assert "CREATE TABLE IF NOT EXISTS tasks" in database.calls[0][0]
        assert not database.closed
        assert client.get("/health").status_code == 200
        assert app.state.database is database
    assert database.closed


def test_handlers_use_the_application_pool():
    now = datetime(2025, 1, 25, 10, 15, 30)
    row = {"id": 1, "title": "Buy milk", "description": None, "completed": False, "created_at": now, "updated_at": now}
    database = RecordingDatabase(rows=[row])
    with TestClient(create_app(Settings(), database=database)) as client:
        res = client.get("/api/tasks/1")
    assert res.status_code == 200
    assert res.json()["title"] == "Buy milk"
    assert database.calls[-1] == ("SELECT * FROM tasks WHERE id = %s", (1,))


def test_store_errors_through_the_pool_become_500():
    database = RecordingDatabase()
    with TestClient(create_app(Settings(), database=database)) as client:
        database.error = StoreError("server closed the connection unexpectedly")
        res = client.get("/api/tasks")
        health = client.get("/health")
    assert res.status_code == 500
    assert res.json() == {"error": "Internal server error"}
    assert health.status_code == 200


def test_schema_failure_is_logged_and_service_still_starts(caplog):
    database = SchemaFailingDatabase()
    with caplog.at_level(logging.ERROR, logger="tasks_api.main"):
        with TestClient(create_app(Settings(schema_init_fatal=False), database=database)) as client:
            assert client.get("/health").status_code == 200
    assert "Database initialization error" in caplog.text
    assert database.closed


def test_schema_failure_can_be_made_fatal():
    database = SchemaFailingDatabase()
    app = create_app(Settings(schema_init_fatal=True), database=database)
    with pytest.raises(StoreError):
        with TestClient(app):
            pass
    assert database.closed
