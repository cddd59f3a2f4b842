"""
Pytest configuration and fixtures for testing.

This file provides reusable test fixtures for:
- Database setup/teardown
- FastAPI test client
- Seed companies and jobs
- Admin and regular user tokens
"""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.database import Base, get_db
from app.core.security import create_access_token
from app.crud import company as company_crud
from app.crud import job as job_crud
from app.models import Company, Job  # noqa: F401  registers tables
from app.schemas.company import CompanyCreateRequest
from app.schemas.job import JobCreateRequest
from main import app


# Use in-memory SQLite for testing (fast, isolated)
SQLALCHEMY_TEST_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@event.listens_for(engine, "connect")
def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    # SQLite ignores FOREIGN KEY / ON DELETE CASCADE unless asked
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


@pytest.fixture
def db_session():
    """
    Create a fresh database session for each test.
    Tables are dropped after the test completes.
    """
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db_session):
    """
    FastAPI test client with overridden database dependency.
    """
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
def seeded(db_session):
    """
    Companies c1..c3 with one job each:

    j1: 100000, equity 0      (c1)
    j2: 150000, equity 0.081  (c2)
    j3: 400000, equity 0.032  (c3)
    """
    for n in (1, 2, 3):
        company_crud.create(db_session, CompanyCreateRequest(
            handle=f"c{n}",
            name=f"C{n}",
            num_employees=n,
            description=f"Desc{n}",
            logo_url=f"http://c{n}.img",
        ))

    jobs = {}
    for title, salary, equity, handle in [
        ("j1", 100000, 0, "c1"),
        ("j2", 150000, 0.081, "c2"),
        ("j3", 400000, 0.032, "c3"),
    ]:
        job = job_crud.create(db_session, JobCreateRequest(
            title=title,
            salary=salary,
            equity=equity,
            company_handle=handle,
        ))
        jobs[title] = job

    return jobs


@pytest.fixture
def admin_headers():
    token = create_access_token({"sub": "admin", "is_admin": True})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def user_headers():
    token = create_access_token({"sub": "u1", "is_admin": False})
    return {"Authorization": f"Bearer {token}"}
