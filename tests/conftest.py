# tests/conftest.py

from __future__ import annotations

from typing import Iterator

import pytest
from fastapi.testclient import TestClient

from fakes import FakeDatabase
from task_api.main import app
from task_api.repositories import get_database


@pytest.fixture()
def fake_db() -> FakeDatabase:
    return FakeDatabase()


@pytest.fixture()
def client(fake_db: FakeDatabase) -> Iterator[TestClient]:
    """
    TestClient whose requests use `fake_db` instead of the PostgreSQL pool.

    Server exceptions are rendered rather than re-raised so that the 500
    path behaves as it does in production.
    """
    app.dependency_overrides[get_database] = lambda: fake_db
    try:
        yield TestClient(app, raise_server_exceptions=False)
    finally:
        app.dependency_overrides.clear()
