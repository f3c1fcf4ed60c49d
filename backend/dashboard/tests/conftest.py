"""
Pytest configuration and fixtures for backend testing.

Provides test fixtures for the database session, FastAPI test client,
admin and employee accounts with their authentication headers, and
sample request payloads.
"""
import os

# Settings are read at import time; pin them before the app is imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["TEST_DATABASE_URL"] = "sqlite://"
os.environ["ADMIN_EMAIL"] = "admin@example.com"
os.environ["ADMIN_PASSWORD"] = ""
os.environ["REPORT_TIMEZONE"] = "UTC"
os.environ.setdefault("SECRET_KEY", "test-secret-key")

import pytest
from typing import Dict, Generator
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from dashboard.api.main import app
from dashboard.database.connection import (
    get_db, create_test_tables, drop_test_tables, TestSessionLocal
)
from dashboard.database.models import User

from .test_base import DatabaseTestUtilities, TestDataFactory, auth_headers_for


@pytest.fixture(scope="function")
def db_session() -> Generator[Session, None, None]:
    """Create a database session on freshly created tables."""
    create_test_tables()
    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.close()
        drop_test_tables()


@pytest.fixture(scope="function")
def client(db_session: Session):
    """Create FastAPI test client with database dependency override."""
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def admin_user(db_session: Session) -> User:
    """The administrator account."""
    return DatabaseTestUtilities.create_test_user(
        db_session, name="Admin User", email="admin@example.com", password="admin_password123"
    )


@pytest.fixture
def employee_user(db_session: Session) -> User:
    """A regular employee account."""
    return DatabaseTestUtilities.create_test_user(
        db_session, name="Test Employee", email="employee@example.com", password="secure_password123"
    )


@pytest.fixture
def admin_headers(admin_user: User) -> Dict[str, str]:
    """Authentication headers for the administrator."""
    return auth_headers_for(admin_user)


@pytest.fixture
def employee_headers(employee_user: User) -> Dict[str, str]:
    """Authentication headers for the employee."""
    return auth_headers_for(employee_user)


@pytest.fixture
def sample_employee_data() -> Dict:
    """Sample employee creation payload."""
    return TestDataFactory.create_employee()


@pytest.fixture
def sample_client_data() -> Dict:
    """Sample client creation payload."""
    return TestDataFactory.create_client()
