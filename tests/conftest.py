"""
Pytest configuration and fixtures for testing.

This file provides reusable test fixtures for:
- In-memory database per test
- Upload storage rooted in a temporary directory
- FastAPI test client wired to both
"""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool

from app.core.database import Database
from app.core.storage import LocalStorage
from main import create_app


@pytest.fixture
def database():
    """
    Fresh in-memory SQLite database for each test.
    StaticPool keeps the single connection alive across sessions.
    """
    db = Database(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    db.create_tables()
    yield db
    db.close()


@pytest.fixture
def db_session(database):
    session = database.SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def storage(tmp_path):
    return LocalStorage(str(tmp_path / "uploads"))


@pytest.fixture
def client(database, storage):
    """
    FastAPI test client using the test database and storage.
    """
    app = create_app(database=database, storage=storage)

    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def sample_application_data():
    """Sample intake form fields for testing"""
    return {
        "role": "Backend Engineer",
        "location": "Hyderabad",
        "fullName": "John Carter",
        "email": "john.carter@example.com",
        "phone": "9876543210",
        "gender": "male",
        "fatherName": "Robert Carter",
        "fatherPhone": "9123456780",
        "employmentStatus": "fresher",
    }
