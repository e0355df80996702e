"""Shared fixtures for the registration API test suite."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, Optional

import pytest
from starlette.testclient import TestClient

from tobbedansen_api.app.core.config import settings
from tobbedansen_api.app.core.db import get_connection, init_db, to_db_timestamp
from tobbedansen_api.app.main import app


PAST = datetime(2000, 1, 1, tzinfo=timezone.utc)
FUTURE = datetime(2999, 1, 1, tzinfo=timezone.utc)


# ---------------------------------------------------------------------------
# Database
# ---------------------------------------------------------------------------

@pytest.fixture
def db(tmp_path, monkeypatch):
    """Point the application at a fresh, migrated SQLite file."""
    path = tmp_path / "tobbedansen.db"
    monkeypatch.setattr(settings, "database_url", str(path))
    monkeypatch.setattr(settings, "registration_open_when_unset", False)
    init_db()
    return path


def insert_event(event_id: str, year: int, registration_start_date: Optional[datetime]) -> None:
    conn = get_connection()
    try:
        conn.execute(
            "INSERT INTO events (id, year, registration_start_date) VALUES (?, ?, ?)",
            (event_id, year, to_db_timestamp(registration_start_date)),
        )
    finally:
        conn.close()


def insert_vessel_type(vessel_type_id: str, name: str) -> None:
    conn = get_connection()
    try:
        conn.execute(
            "INSERT INTO vessel_types (id, name) VALUES (?, ?)",
            (vessel_type_id, name),
        )
    finally:
        conn.close()


def count_rows(table: str) -> int:
    conn = get_connection()
    try:
        return conn.execute(f"SELECT COUNT(*) FROM {table}").fetchone()[0]
    finally:
        conn.close()


@pytest.fixture
def open_event(db) -> str:
    insert_event("evt-2024", 2024, PAST)
    return "evt-2024"


@pytest.fixture
def closed_event(db) -> str:
    insert_event("evt-2024", 2024, FUTURE)
    return "evt-2024"


@pytest.fixture
def vessel_type(db) -> str:
    insert_vessel_type("vt-1", "Kano")
    return "vt-1"


# ---------------------------------------------------------------------------
# Payloads
# ---------------------------------------------------------------------------

@pytest.fixture
def registration_payload() -> Dict[str, Any]:
    """The Jan Peeters / De Spetter registration."""
    return {
        "registrant": {
            "first_name": "Jan",
            "last_name": "Peeters",
            "email": "jan@example.com",
            "date_of_birth": "1990-01-01",
            "place_of_birth": "Gent",
        },
        "participants": [
            {"first_name": "Tom", "last_name": "Peeters", "date_of_birth": "2010-05-05"},
        ],
        "vessel": {"name": "De Spetter", "type": "Kano", "vessel_type_id": "vt-1"},
        "event": "evt-2024",
    }


# ---------------------------------------------------------------------------
# HTTP
# ---------------------------------------------------------------------------

@pytest.fixture
def client(db):
    with TestClient(app) as test_client:
        yield test_client
