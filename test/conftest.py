"""Shared pytest fixtures.

Every test runs against a fresh mongomock database and temporary upload,
temp and log folders; the DI container is rebuilt on top of them.
"""
from datetime import date, datetime, timedelta, timezone

import mongomock
import pytest
from fastapi.testclient import TestClient

from sitecms.core.config import reset_settings
from sitecms.di.container import DIContainer, set_container
from sitecms.infrastructure.db.mongo_connection import MongoClientManager

ADMIN_PASSWORD = "correct-horse"


# =============================================================================
# Environment
# =============================================================================


@pytest.fixture(autouse=True)
def environment(tmp_path, monkeypatch):
    """Point settings at temporary folders and a known admin password."""
    monkeypatch.setenv("PUBLIC_DIR", str(tmp_path / "public"))
    monkeypatch.setenv("TEMP_DIR", str(tmp_path / "temp"))
    monkeypatch.setenv("LOG_FOLDER", str(tmp_path / "logs"))
    monkeypatch.setenv("LOG_TO_FILE", "false")
    monkeypatch.setenv("ADMIN_PASSWORD", ADMIN_PASSWORD)
    monkeypatch.setenv("SESSION_SECRET", "test-session-secret")
    monkeypatch.setenv("TIMEZONE", "UTC")
    monkeypatch.setenv("REMINDER_CHECK_INTERVAL_SECONDS", "0")
    monkeypatch.setenv("API_BASE_URL", "")
    monkeypatch.delenv("SMTP_ENCRYPTION_KEY", raising=False)
    reset_settings()
    yield tmp_path
    reset_settings()


# =============================================================================
# Database and container
# =============================================================================


@pytest.fixture
def mongo_client():
    return MongoClientManager(client=mongomock.MongoClient(), database_name="sitecms_test")


@pytest.fixture
def container(mongo_client):
    di = DIContainer(mongo_client=mongo_client)
    set_container(di)
    yield di
    set_container(None)


# =============================================================================
# HTTP clients
# =============================================================================


@pytest.fixture
def client(container):
    """Anonymous test client."""
    from sitecms.main import create_application

    return TestClient(create_application())


@pytest.fixture
def admin_client(client):
    """Test client holding a valid admin session cookie."""
    response = client.post("/api/v1/auth/login", json={"password": ADMIN_PASSWORD})
    assert response.status_code == 200
    return client


# =============================================================================
# Dates
# =============================================================================


def next_weekday(weekday: int, start: date = None) -> date:
    """Next date strictly after ``start`` (default today) falling on ``weekday`` (Monday = 0)."""
    start = start or datetime.now(timezone.utc).date()
    days_ahead = (weekday - start.weekday()) % 7 or 7
    return start + timedelta(days=days_ahead)


@pytest.fixture
def next_monday() -> date:
    return next_weekday(0)
