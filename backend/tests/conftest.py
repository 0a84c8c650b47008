"""
Pytest configuration and fixtures for the test suite.
"""
import os
import pytest
from datetime import datetime, timezone
from typing import Generator
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session

# Set test environment before importing app
os.environ["ENV"] = "development"
os.environ["JWT_SECRET_KEY"] = "test-secret-key-for-testing-purposes-only-32chars"
os.environ.setdefault("DATABASE_URL", "sqlite:///./test.db")

from huddle.main import app
from huddle.db.base import Base
from huddle.core.deps import get_db
from huddle.models.agenda_item import AgendaItem, AgendaStatus
from huddle.models.channel import Channel
from huddle.models.meeting import Meeting
from huddle.models.profile import Profile
from huddle.services.auth import create_access_token


# Same database as the app engine; token checks on streams open their own sessions
SQLALCHEMY_TEST_DATABASE_URL = os.environ["DATABASE_URL"]

engine = create_engine(
    SQLALCHEMY_TEST_DATABASE_URL,
    connect_args={"check_same_thread": False} if "sqlite" in SQLALCHEMY_TEST_DATABASE_URL else {},
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="function")
def db() -> Generator[Session, None, None]:
    """Create a fresh database for each test."""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db: Session) -> Generator[TestClient, None, None]:
    """Create a test client with database override."""

    def override_get_db_with_session():
        """Return the test database session."""
        yield db

    app.dependency_overrides[get_db] = override_get_db_with_session
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def test_user(db: Session) -> Profile:
    """Create a test profile."""
    user = Profile(display_name="Test User")
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture
def other_user(db: Session) -> Profile:
    """Create another test profile."""
    user = Profile(display_name="Other User")
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture
def auth_headers(test_user: Profile) -> dict:
    """Create authentication headers for test user."""
    token = create_access_token(
        data={"sub": str(test_user.id), "display_name": test_user.display_name}
    )
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def authenticated_client(client: TestClient, auth_headers: dict) -> TestClient:
    """Create an authenticated test client."""
    client.headers.update(auth_headers)
    return client


@pytest.fixture
def pending_item(db: Session, test_user: Profile) -> AgendaItem:
    """Create a pending agenda item."""
    item = AgendaItem(
        title="Q3 roadmap",
        description="Priorities for next quarter",
        status=AgendaStatus.PENDING,
        submitted_by=test_user.id,
    )
    db.add(item)
    db.commit()
    db.refresh(item)
    return item


@pytest.fixture
def second_pending_item(db: Session, other_user: Profile) -> AgendaItem:
    """Create another pending agenda item."""
    item = AgendaItem(
        title="Hiring plan",
        status=AgendaStatus.PENDING,
        submitted_by=other_user.id,
    )
    db.add(item)
    db.commit()
    db.refresh(item)
    return item


@pytest.fixture
def test_meeting(db: Session, test_user: Profile) -> Meeting:
    """Create a meeting with an empty agenda."""
    meeting = Meeting(
        title="Weekly Sync",
        date=datetime(2024, 1, 10, 9, 0, tzinfo=timezone.utc),
        created_by=test_user.id,
    )
    db.add(meeting)
    db.commit()
    db.refresh(meeting)
    return meeting


@pytest.fixture
def general_channel(db: Session) -> Channel:
    """Create the default chat channel."""
    channel = Channel(name="general", description="Team-wide chat")
    db.add(channel)
    db.commit()
    db.refresh(channel)
    return channel
