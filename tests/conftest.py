"""Shared fixtures for the lists API test suite."""

from datetime import datetime, timezone

import httpx
import pytest

from auth import security
from core.db import get_database


class FakeDatabase:
    """In-memory stand-in for core.db.Database, scoped to the lists table."""

    def __init__(self):
        self.rows: list[dict] = []
        self.next_id = 1
        self.calls: list[tuple] = []

    async def query_rows(self, sql, *args):
        self.calls.append(("query_rows", sql, args))
        rows = [r for r in self.rows if r["user_id"] == args[0]]
        if len(args) > 1:
            rows = [r for r in rows if r["list_id"] == args[1]]
        return [dict(r) for r in rows]

    async def insert_returning(self, table, row):
        self.calls.append(("insert_returning", table, dict(row)))
        now = datetime.now(timezone.utc)
        stored = {
            "list_id": self.next_id,
            "description": None,
            "created_on": now,
            "modified_on": now,
            **row,
        }
        self.next_id += 1
        self.rows.append(stored)
        return dict(stored)

    async def update_returning(self, table, conditions, patch):
        self.calls.append(("update_returning", table, dict(conditions), dict(patch)))
        for row in self.rows:
            if all(row.get(k) == v for k, v in conditions.items()):
                row.update(patch)
                return dict(row)
        return None

    async def delete_by_key(self, table, key):
        self.calls.append(("delete_by_key", table, dict(key)))
        before = len(self.rows)
        self.rows = [r for r in self.rows if not all(r.get(k) == v for k, v in key.items())]
        return before - len(self.rows)


@pytest.fixture(autouse=True)
def jwt_env(monkeypatch):
    monkeypatch.setenv("JWT_SECRET", "test-secret")
    monkeypatch.setenv("JWT_ALG", "HS256")
    monkeypatch.delenv("JWT_AUDIENCE", raising=False)
    monkeypatch.delenv("JWT_ISSUER", raising=False)


@pytest.fixture
def fake_db() -> FakeDatabase:
    return FakeDatabase()


@pytest.fixture
def auth_headers():
    """Factory fixture: bearer headers for a given user id."""
    def _headers(user_id: int = 7) -> dict:
        token = security.build_access_token(user_id=user_id)
        return {"Authorization": f"Bearer {token}"}

    return _headers


@pytest.fixture
async def app_client(fake_db):
    """httpx AsyncClient wired to the FastAPI app with the in-memory database."""
    from main import app

    app.dependency_overrides[get_database] = lambda: fake_db
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()
