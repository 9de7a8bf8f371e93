import os
from dataclasses import dataclass
from datetime import datetime

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret-key")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import app.models  # noqa: F401
from app.core.rate_limiter import auth_rate_limiter
from app.database import Base, get_db
from app.dependencies import get_current_user
from app.main import app
from app.models.job import Job


@dataclass
class StubUser:
    id: str = "user-1"
    name: str = "Jordan"
    email: str = "user@example.com"
    last_name: str = "Lee"
    location: str = "Lisbon"
    password_hash: str = "hashed-password"


@pytest.fixture
def stub_user() -> StubUser:
    return StubUser()


@pytest.fixture(autouse=True)
def _reset_rate_limiter():
    auth_rate_limiter.reset()
    yield
    auth_rate_limiter.reset()


@pytest.fixture
def client(stub_user: StubUser):
    def _db_override():
        yield object()

    app.dependency_overrides[get_db] = _db_override
    app.dependency_overrides[get_current_user] = lambda: stub_user
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def db():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


@pytest.fixture
def db_client(db, stub_user: StubUser):
    """Client whose routes run against the in-memory SQLite session."""

    def _db_override():
        yield db

    app.dependency_overrides[get_db] = _db_override
    app.dependency_overrides[get_current_user] = lambda: stub_user
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def add_job(db):
    counter = {"n": 0}

    def _add(
        owner: str = "user-1",
        position: str = "Backend Engineer",
        *,
        company: str = "ACME",
        status: str = "pending",
        job_type: str = "full-time",
        created_at: datetime | None = None,
    ) -> Job:
        counter["n"] += 1
        job = Job(
            id=f"job-{counter['n']:03d}",
            created_by=owner,
            company=company,
            position=position,
            status=status,
            job_type=job_type,
            created_at=created_at or datetime(2024, 1, 1, 12, 0, 0),
        )
        db.add(job)
        db.commit()
        return job

    return _add
