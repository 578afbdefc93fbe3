"""Pytest fixtures backed by an in-memory SQLite database."""

from __future__ import annotations

import os
from typing import Any, Dict

import pytest

# Must be set before the package reads its settings.
os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("LOG_LEVEL", "WARNING")

from fastapi.testclient import TestClient  # noqa: E402

from party_planner.agents.state import SNAPSHOT_FIELDS  # noqa: E402
from party_planner.core.database import SessionLocal, engine  # noqa: E402
from party_planner.main import app  # noqa: E402
from party_planner.models.models import Base  # noqa: E402
from party_planner.services import chat_store  # noqa: E402


@pytest.fixture(autouse=True)
def _fresh_tables():
    """Every test starts from empty tables."""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def conversation(db):
    return chat_store.start_conversation(db, "user-123")


@pytest.fixture
def make_snapshot():
    """Factory for conversation snapshots used by the pure turn tests."""

    def _factory(**fields: Any) -> Dict[str, Any]:
        snapshot = {field: None for field in SNAPSHOT_FIELDS}
        snapshot.update(id=1, user_id="user-123", current_state="initial")
        snapshot.update(fields)
        return snapshot

    return _factory
