"""
Test configuration and fixtures for the Events Manager.
"""

import os

# Set test environment variables before importing app
os.environ.pop("ZERO_TOKEN", None)
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["API_BASE_URL"] = "http://test/api"

from datetime import datetime, timedelta

import httpx
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.main import app
from app.api.dependencies import get_database_session
from app.client.api_client import EventsApiClient
from app.db.database import EventRepository
from app.models.event import Base

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


@pytest.fixture(autouse=True)
def tables():
    """Fresh tables for every test."""
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client():
    """Create test client."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def db_session():
    """Create a database session for testing."""
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def event_repo(db_session):
    return EventRepository(db_session)


@pytest.fixture
async def api_client():
    """EventsApiClient talking to the app in-process."""
    http = httpx.AsyncClient(transport=httpx.ASGITransport(app=app), base_url="http://test")
    events_client = EventsApiClient("http://test/api", client=http)
    yield events_client
    await events_client.close()


@pytest.fixture
def sample_event_data():
    """Sample create payload, as a client would send it."""
    start = datetime(2030, 5, 1, 18, 0, 0)
    return {
        "title": "Python Meetup",
        "description": "Monthly meetup for Python developers",
        "location": "Community Hall",
        "startDate": start.isoformat() + "Z",
        "endDate": (start + timedelta(hours=3)).isoformat() + "Z",
        "category": "Meetup",
        "maxAttendees": 120,
        "imageUrl": "https://example.com/meetup.png",
        "isActive": True,
    }


@pytest.fixture
def make_event(event_repo):
    """Insert an event straight through the repository."""
    def _make(**overrides):
        start = overrides.pop("start_date", datetime(2030, 5, 1, 18, 0, 0))
        data = {
            "title": "Stored Event",
            "description": "An event stored for testing",
            "location": "Main Hall",
            "start_date": start,
            "end_date": overrides.pop("end_date", start + timedelta(hours=2)),
            "category": "Conference",
            "max_attendees": 50,
            "image_url": None,
            "is_active": True,
        }
        data.update(overrides)
        return event_repo.create(data)
    return _make
