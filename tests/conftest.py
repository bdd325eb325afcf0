"""
Test configuration and fixtures for the Events Registry API.
"""

import os
import time

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET"] = "test-secret-key"
os.environ["JWT_ALGORITHM"] = "HS256"

import pytest
from fastapi.testclient import TestClient
from jose import jwt
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from events_api.main import app
from events_api.api.dependencies import get_database_session
from events_api.core.resources import RESOURCES
from events_api.db.database import UnitOfWork
from events_api.models.entities import Base

TEST_JWT_SECRET = "test-secret-key"

# Test database URL
SQLALCHEMY_DATABASE_URL = "sqlite://"

# Create test engine
engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

# Create test session
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def override_get_db():
    """Override database dependency for testing."""
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


# Override the dependency
app.dependency_overrides[get_database_session] = override_get_db


@pytest.fixture
def database():
    """Create tables before a test and drop them afterwards."""
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(database):
    """Create test client."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def db_session(database):
    """Create a database session for testing."""
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def uow(db_session):
    """Unit of work bound to the test session."""
    return UnitOfWork(db_session)


@pytest.fixture
def resource_config():
    """Resource table entries keyed by URL segment."""
    return {resource.name: resource for resource in RESOURCES}


@pytest.fixture
def auth_token():
    """Signed bearer token accepted by protected routes."""
    payload = {"sub": "organizer-admin", "exp": int(time.time()) + 3600}
    return jwt.encode(payload, TEST_JWT_SECRET, algorithm="HS256")


@pytest.fixture
def auth_headers(auth_token):
    """Authorization header for protected routes."""
    return {"Authorization": f"Bearer {auth_token}"}


@pytest.fixture
def sample_venue_data():
    return {
        "name": "Convention Center",
        "address": "Rua das Flores, 100",
        "max_capacity": 500
    }


@pytest.fixture
def sample_organizer_data():
    return {
        "name": "Ana Souza",
        "contact": "(11)91234-5678"
    }


@pytest.fixture
def sample_participant_data():
    return {
        "name": "Carlos Lima",
        "email": "carlos@example.com",
        "national_id": "123.456.789-09"
    }


@pytest.fixture
def sample_sponsor_data():
    return {
        "name": "Acme",
        "contact": "(21)98765-4321"
    }


@pytest.fixture
def sample_event_data():
    return {
        "name": "Python Summit",
        "description": "A day of talks about Python",
        "date": "2026-12-31T18:00:00",
        "capacity": 100,
        "venue_id": 1,
        "organizer_id": 1
    }


@pytest.fixture
def sample_registration_data():
    return {
        "registration_date": "2026-11-01T10:00:00",
        "event_id": 1,
        "participant_id": 1
    }


@pytest.fixture
def resource_payloads(
    sample_event_data,
    sample_venue_data,
    sample_organizer_data,
    sample_participant_data,
    sample_sponsor_data,
    sample_registration_data
):
    """Valid create payload for every resource, keyed by URL segment."""
    return {
        "events": sample_event_data,
        "venues": sample_venue_data,
        "organizers": sample_organizer_data,
        "participants": sample_participant_data,
        "sponsors": sample_sponsor_data,
        "registrations": sample_registration_data,
    }
