"""Tests for the system routes and the database session dependency."""

import pytest
from fastapi.testclient import TestClient

from main import app
from realme.core.database import get_db
from realme.wellness.persistence import SqlKeyValueStore


@pytest.fixture
def client(session_factory):
    def _override_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = _override_db
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_get_db_yields_and_closes_a_session():
    gen = get_db()
    db = next(gen)
    assert db.is_active
    with pytest.raises(StopIteration):
        next(gen)


def test_health(client):
    resp = client.get("/system/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok", "database": "ok"}


def test_debug_records_hidden_by_default(client, monkeypatch):
    monkeypatch.setattr("realme.core.config.ENABLE_DEBUG_ROUTES", False)
    assert client.get("/system/debug/records").status_code == 404


def test_debug_records_lists_stored_keys(client, session_factory, monkeypatch):
    monkeypatch.setattr("realme.core.config.ENABLE_DEBUG_ROUTES", True)
    kv = SqlKeyValueStore(session_factory)
    kv.set("realme-interactions-b@example.com", "[]")
    kv.set("realme-achievements-a@example.com", "[1, 2]")

    resp = client.get("/system/debug/records")

    assert resp.status_code == 200
    body = resp.json()
    assert [r["key"] for r in body] == [
        "realme-achievements-a@example.com",
        "realme-interactions-b@example.com",
    ]
    assert body[0]["size"] == 6
